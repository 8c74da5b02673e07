"""
Wendet akzeptierte Issues auf ein Transkript an.

Eingabe ist das Original-Transkript und ein Issue-JSON ({"issues": [...]}, wie es
proofread_transcript.py schreibt). Welche Issues akzeptiert sind, wird über
--accept-all, --accept ID ... sowie die Filter --min-confidence und --severity
bestimmt. Die Korrektur wird immer aus den Originalzeilen neu berechnet.

Usage:
    python scripts/apply_accepted_fixes.py transcript.txt issues.json --accept-all --out corrected.txt
    python scripts/apply_accepted_fixes.py transcript.txt issues.json --accept "3:spelling:..." --markdown report.md
    python scripts/apply_accepted_fixes.py transcript.txt issues.json --accept-all --min-confidence 0.8 --severity blocking review
    python scripts/apply_accepted_fixes.py transcript.txt issues.json --accept "1:punctuation:..." --list --out corrected.txt
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from pydantic import ValidationError

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.models.pydantic import Issue, ProofreadResponse
from app.services.proofreading.acceptance import AcceptedSet, get_issue_id, sort_issues_for_display
from app.services.proofreading.export import export_to_markdown
from app.services.proofreading.fix_engine import apply_fixes_to_transcript, changed_line_numbers


def select_accepted_ids(
    issues: Sequence[Issue],
    accept_all: bool = False,
    accept_ids: Optional[Iterable[str]] = None,
    min_confidence: float = 0.0,
    severities: Optional[Iterable[str]] = None,
) -> frozenset[str]:
    """
    Baut die akzeptierte Menge.

    --accept-all nimmt alle Issues, sonst nur die explizit genannten IDs.
    min_confidence und severities filtern danach; unbekannte IDs werden ignoriert.
    """
    accepted = AcceptedSet()
    if accept_all:
        accepted.accept_all(issues)
    else:
        wanted = set(accept_ids or ())
        accepted.accept_all(i for i in issues if get_issue_id(i) in wanted)

    allowed_severities = set(severities) if severities else None
    for issue in issues:
        if issue.confidence < min_confidence:
            accepted.reject(issue)
        elif allowed_severities is not None and issue.severity not in allowed_severities:
            accepted.reject(issue)

    return accepted.snapshot()


def format_review_list(issues: Sequence[Issue], accepted_ids: Iterable[str]) -> List[str]:
    """Eine Zeile pro Issue, sortiert nach Zeile und Schweregrad; [x] = akzeptiert."""
    accepted = AcceptedSet(accepted_ids)
    return [
        f"[{'x' if accepted.is_accepted(issue) else ' '}] {get_issue_id(issue)} ({issue.severity}, {issue.confidence:.2f})"
        for issue in sort_issues_for_display(issues)
    ]


def load_issues(path: Path) -> List[Issue]:
    return ProofreadResponse.model_validate_json(path.read_text(encoding="utf-8")).issues


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Apply accepted proofreading fixes to a transcript")
    parser.add_argument("transcript", type=str, help="Path to the original transcript text file")
    parser.add_argument("issues", type=str, help="Path to the issue JSON export")

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--accept-all", action="store_true", help="Accept every issue")
    group.add_argument(
        "--accept",
        nargs="+",
        default=None,
        metavar="ID",
        help="Accept the issues with these ids (line:category:description)",
    )

    parser.add_argument(
        "--min-confidence",
        type=float,
        default=0.0,
        help="Drop accepted issues below this confidence (default: 0.0)",
    )
    parser.add_argument(
        "--severity",
        nargs="+",
        choices=["blocking", "review", "info"],
        default=None,
        help="Keep only accepted issues with these severities",
    )
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output path for the corrected transcript (default: print to stdout)",
    )
    parser.add_argument(
        "--markdown",
        type=str,
        default=None,
        help="Optional output path for a Markdown report with changes in bold",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print every issue with its acceptance state before applying",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    transcript_path = Path(args.transcript)
    issues_path = Path(args.issues)
    for path in (transcript_path, issues_path):
        if not path.exists():
            print(f"File not found: {path.absolute()}")
            return 1

    transcript = transcript_path.read_text(encoding="utf-8")
    try:
        issues = load_issues(issues_path)
    except ValidationError as e:
        print(f"Invalid issue file {issues_path}: {e.error_count()} validation error(s)")
        return 1

    accepted_ids = select_accepted_ids(
        issues,
        accept_all=args.accept_all,
        accept_ids=args.accept,
        min_confidence=args.min_confidence,
        severities=args.severity,
    )

    if args.list:
        for row in format_review_list(issues, accepted_ids):
            print(row)

    corrected = apply_fixes_to_transcript(transcript, issues, accepted_ids)
    changed = changed_line_numbers(transcript, corrected)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(corrected, encoding="utf-8")
        print(f"Accepted {len(accepted_ids)} issue(s), changed {len(changed)} line(s): {out_path}")
    else:
        print(corrected)

    if args.markdown:
        md_path = Path(args.markdown)
        md_path.parent.mkdir(parents=True, exist_ok=True)
        md_path.write_text(export_to_markdown(transcript, corrected, issues, accepted_ids), encoding="utf-8")
        print(f"Wrote Markdown report to {md_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

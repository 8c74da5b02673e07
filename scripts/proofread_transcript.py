"""
Proofreading-Durchlauf für eine Transkript-Datei.

Erkennt Issues über das LLM (oder offline über den FakeLLMClient) und schreibt
den JSON-Export, optional zusätzlich den CSV-Export. Das Transkript selbst wird
nicht verändert; Fixes werden separat mit apply_accepted_fixes.py angewendet.

Usage:
    python scripts/proofread_transcript.py transcript.txt --out issues.json --csv issues.csv
    python scripts/proofread_transcript.py transcript.txt --fake
"""

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.llm.fake_client import FakeLLMClient
from app.services.proofreading.errors import InputLimitError, ProofreadingError
from app.services.proofreading.export import export_to_csv, export_to_json
from app.services.proofreading_service import ProofreadingService, build_llm_client

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Detect proofreading issues in a line-based transcript")
    parser.add_argument("transcript", type=str, help="Path to the transcript text file")
    parser.add_argument(
        "--out",
        type=str,
        default="issues.json",
        help="Output path for the JSON issue export (default: issues.json)",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Optional output path for a CSV issue export",
    )
    parser.add_argument(
        "--fake",
        action="store_true",
        help="Use the offline FakeLLMClient instead of OpenAI",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    transcript_path = Path(args.transcript)
    if not transcript_path.exists():
        print(f"Transcript not found: {transcript_path.absolute()}")
        return 1

    transcript = transcript_path.read_text(encoding="utf-8")
    llm_client = FakeLLMClient() if args.fake else build_llm_client(settings)
    service = ProofreadingService(llm_client, settings)

    try:
        result = service.proofread(transcript)
    except InputLimitError as e:
        print(f"Input rejected: {e}")
        return 2
    except ProofreadingError as e:
        logger.error("Proofreading failed: %s", e)
        return 1

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(export_to_json(result.issues), encoding="utf-8")
    print(f"Wrote {len(result.issues)} issue(s) for {result.total_lines} line(s) to {out_path}")

    if args.csv:
        csv_path = Path(args.csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        csv_path.write_text(export_to_csv(result.issues), encoding="utf-8")
        print(f"Wrote CSV export to {csv_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

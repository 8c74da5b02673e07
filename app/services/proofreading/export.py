"""
Export von Issues (JSON, CSV) und des korrigierten Transkripts (Markdown).
"""

import csv
import io
import json
from typing import Collection, Dict, List, Sequence

from app.models.pydantic import Issue
from app.services.proofreading.acceptance import filter_accepted
from app.services.proofreading.fix_engine import group_issues_by_line
from app.services.proofreading.markup import mark_changes_in_bold
from app.services.proofreading.validation import split_lines

CSV_HEADERS = [
    "line_number",
    "category",
    "severity",
    "description",
    "suggested_fix",
    "confidence",
]

EXPORT_MEDIA_TYPES: Dict[str, str] = {
    "json": "application/json",
    "csv": "text/csv",
    "markdown": "text/markdown",
}


def export_to_json(issues: Sequence[Issue]) -> str:
    return json.dumps({"issues": [issue.model_dump() for issue in issues]}, indent=2, ensure_ascii=False)


def _format_confidence(value: float) -> str:
    # 1.0 -> "1", 0.95 -> "0.95"
    return format(value, "g")


def export_to_csv(issues: Sequence[Issue]) -> str:
    """
    CSV mit Header. Felder mit Komma, Anführungszeichen oder Zeilenumbruch werden
    in Anführungszeichen gesetzt, innere Anführungszeichen verdoppelt.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for issue in issues:
        writer.writerow(
            [
                issue.line_number,
                issue.category,
                issue.severity,
                issue.description,
                issue.suggested_fix,
                _format_confidence(issue.confidence),
            ]
        )
    return buffer.getvalue().rstrip("\n")


def export_to_markdown(
    original_transcript: str,
    corrected_transcript: str,
    issues: Sequence[Issue],
    accepted_ids: Collection[str],
) -> str:
    original_lines = split_lines(original_transcript)
    corrected_lines = split_lines(corrected_transcript)
    accepted = filter_accepted(issues, accepted_ids)
    issues_by_line = group_issues_by_line(accepted)

    lines: List[str] = [
        "# Corrected Transcript",
        "",
        "*This document shows the corrected transcript with changes marked in **bold**.*",
        "",
        f"**Total corrections applied:** {len(accepted)}",
        "",
        "---",
        "",
    ]

    for index, original_line in enumerate(original_lines):
        line_number = index + 1
        corrected_line = corrected_lines[index] if index < len(corrected_lines) else original_line
        line_issues = issues_by_line.get(line_number, [])

        if line_issues and original_line != corrected_line:
            lines.append(f"{line_number}. {mark_changes_in_bold(original_line, corrected_line, line_issues)}")
            lines.append("")
            lines.append("   *Corrections:*")
            for issue in line_issues:
                lines.append(f"   - {issue.category}: {issue.suggested_fix}")
            lines.append("")
        else:
            lines.append(f"{line_number}. {original_line}")
            lines.append("")

    return "\n".join(lines)

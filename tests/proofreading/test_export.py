"""
Tests für die Export-Formate (JSON, CSV, Markdown).
"""

import csv
import io
import json

from app.services.proofreading.acceptance import get_issue_id
from app.services.proofreading.export import (
    CSV_HEADERS,
    export_to_csv,
    export_to_json,
    export_to_markdown,
)
from app.services.proofreading.fix_engine import apply_fixes_to_transcript


def test_json_export_is_pretty_printed(issue_factory):
    issue = issue_factory()

    content = export_to_json([issue])

    assert json.loads(content) == {"issues": [issue.model_dump()]}
    assert "\n  " in content


def test_csv_export_quotes_special_fields(issue_factory):
    issue = issue_factory(description='He said "hi", then left', confidence=1.0)

    content = export_to_csv([issue])
    lines = content.split("\n")

    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == '1,punctuation,review,"He said ""hi"", then left",Add period at end.,1'


def test_csv_export_round_trips_through_reader(issue_factory):
    issue = issue_factory(description="Line with, comma\nand newline", confidence=0.75)

    rows = list(csv.reader(io.StringIO(export_to_csv([issue]))))

    assert rows[1][3] == "Line with, comma\nand newline"
    assert rows[1][5] == "0.75"


def test_csv_export_without_issues_has_only_header():
    assert export_to_csv([]) == ",".join(CSV_HEADERS)


def test_markdown_export(issue_factory):
    transcript = "smith went home\nno change here"
    cap = issue_factory(
        category="capitalization",
        description="'smith' should be 'Smith'",
        suggested_fix="Capitalize 'smith'.",
    )
    period = issue_factory(suggested_fix="Add period at end.")
    rejected = issue_factory(line_number=2, description="Not accepted")
    issues = [cap, period, rejected]
    accepted = {get_issue_id(cap), get_issue_id(period)}
    corrected = apply_fixes_to_transcript(transcript, issues, accepted)

    content = export_to_markdown(transcript, corrected, issues, accepted)

    assert content.startswith("# Corrected Transcript\n")
    assert "**Total corrections applied:** 2" in content
    assert "1. **Smith** went **home.**" in content
    assert "   *Corrections:*" in content
    assert "   - capitalization: Capitalize 'smith'." in content
    assert "   - punctuation: Add period at end." in content
    assert "2. no change here" in content
    assert "Not accepted" not in content

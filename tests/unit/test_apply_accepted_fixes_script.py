"""
Unit Tests für scripts/apply_accepted_fixes.py und scripts/proofread_transcript.py

Testet:
- Auswahl der akzeptierten IDs (alle, explizit, Filter)
- Ende-zu-Ende: Issue-Datei schreiben, Fixes anwenden, Markdown-Report
"""

import json

from app.services.proofreading.acceptance import get_issue_id
from app.services.proofreading.export import export_to_json
from scripts import apply_accepted_fixes, proofread_transcript
from scripts.apply_accepted_fixes import format_review_list, select_accepted_ids


class TestSelectAcceptedIds:
    def test_accept_all(self, issue_factory):
        issues = [issue_factory(description=d) for d in ("a", "b")]

        assert select_accepted_ids(issues, accept_all=True) == {get_issue_id(i) for i in issues}

    def test_explicit_ids_ignore_unknown(self, issue_factory):
        a = issue_factory(description="a")
        b = issue_factory(description="b")

        result = select_accepted_ids([a, b], accept_ids=[get_issue_id(b), "9:spelling:unknown"])

        assert result == {get_issue_id(b)}

    def test_min_confidence_filter(self, issue_factory):
        low = issue_factory(description="low", confidence=0.3)
        high = issue_factory(description="high", confidence=0.9)

        assert select_accepted_ids([low, high], accept_all=True, min_confidence=0.5) == {get_issue_id(high)}

    def test_severity_filter(self, issue_factory):
        info = issue_factory(description="info", severity="info")
        blocking = issue_factory(description="blocking", severity="blocking")

        result = select_accepted_ids([info, blocking], accept_all=True, severities=["blocking"])

        assert result == {get_issue_id(blocking)}


def test_review_list_sorted_with_acceptance_marks(issue_factory):
    late = issue_factory(line_number=3, description="late")
    info = issue_factory(line_number=1, description="info", severity="info")
    blocking = issue_factory(line_number=1, description="blocking", severity="blocking", confidence=0.75)

    rows = format_review_list([late, info, blocking], {get_issue_id(blocking)})

    assert rows == [
        "[x] 1:punctuation:blocking (blocking, 0.75)",
        "[ ] 1:punctuation:info (info, 0.90)",
        "[ ] 3:punctuation:late (review, 0.90)",
    ]


def test_apply_script_end_to_end(tmp_path, issue_factory):
    transcript = tmp_path / "transcript.txt"
    transcript.write_text("smith went home\nsecond line", encoding="utf-8")
    cap = issue_factory(
        category="capitalization",
        description="'smith' should be 'Smith'",
        suggested_fix="Capitalize 'smith'.",
    )
    period = issue_factory(severity="info", suggested_fix="Add period at end.")
    issues_path = tmp_path / "issues.json"
    issues_path.write_text(export_to_json([cap, period]), encoding="utf-8")
    out = tmp_path / "out" / "corrected.txt"
    report = tmp_path / "report.md"

    exit_code = apply_accepted_fixes.main(
        [
            str(transcript),
            str(issues_path),
            "--accept-all",
            "--severity",
            "review",
            "--out",
            str(out),
            "--markdown",
            str(report),
        ]
    )

    assert exit_code == 0
    assert out.read_text(encoding="utf-8") == "Smith went home\nsecond line"
    assert "**Total corrections applied:** 1" in report.read_text(encoding="utf-8")


def test_apply_script_missing_file(tmp_path):
    assert apply_accepted_fixes.main([str(tmp_path / "nope.txt"), str(tmp_path / "nope.json"), "--accept-all"]) == 1


def test_proofread_script_with_fake_client(tmp_path):
    transcript = tmp_path / "transcript.txt"
    transcript.write_text("smith went home", encoding="utf-8")
    out = tmp_path / "issues.json"
    csv_out = tmp_path / "issues.csv"

    exit_code = proofread_transcript.main([str(transcript), "--out", str(out), "--csv", str(csv_out), "--fake"])

    assert exit_code == 0
    assert len(json.loads(out.read_text(encoding="utf-8"))["issues"]) == 2
    assert csv_out.read_text(encoding="utf-8").startswith("line_number,category")


def test_apply_script_lists_issues(tmp_path, issue_factory, capsys):
    transcript = tmp_path / "transcript.txt"
    transcript.write_text("first line\nsecond line", encoding="utf-8")
    second = issue_factory(line_number=2, description="second")
    first = issue_factory(line_number=1, description="first")
    issues_path = tmp_path / "issues.json"
    issues_path.write_text(export_to_json([second, first]), encoding="utf-8")

    exit_code = apply_accepted_fixes.main(
        [
            str(transcript),
            str(issues_path),
            "--accept",
            get_issue_id(second),
            "--list",
            "--out",
            str(tmp_path / "corrected.txt"),
        ]
    )

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert lines[:2] == [
        "[ ] 1:punctuation:first (review, 0.90)",
        "[x] 2:punctuation:second (review, 0.90)",
    ]
    assert (tmp_path / "corrected.txt").read_text(encoding="utf-8") == "first line\nsecond line."

"""
Validierung und Normalisierung von Issue-Kandidaten.

- validate_input: Zulassungsgrenzen für Transkripte (API-Ebene)
- validate_line_numbers: Issues außerhalb [1, total_lines] verwerfen
- deduplicate_issues: erstes Vorkommen pro Identität behalten
- enforce_fix_constraints: suggested_fix auf einen Satz kürzen
"""

import re
from typing import Iterable, List

from app.models.pydantic import Issue
from app.services.proofreading.acceptance import get_issue_id
from app.services.proofreading.errors import InputLimitError

MAX_LINES = 1000
MAX_CHARS = 120000

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_TERMINAL_PUNCT_RE = re.compile(r"[.!?]$")


def split_lines(transcript: str) -> List[str]:
    """Zeilen ohne Trimmen auf Dokumentebene; leere Zeilen bleiben erhalten."""
    return transcript.split("\n")


def validate_input(
    text: str,
    max_lines: int = MAX_LINES,
    max_chars: int = MAX_CHARS,
) -> tuple[int, int]:
    """
    Prüft ein Transkript gegen die Größenlimits.

    Returns:
        (lines, chars) bei Erfolg

    Raises:
        InputLimitError: wenn Zeilen- oder Zeichenlimit überschritten ist
    """
    lines = len(split_lines(text))
    chars = len(text)

    if lines > max_lines:
        raise InputLimitError(
            f"Transcript exceeds maximum line limit of {max_lines}. Current: {lines} lines.",
            current_lines=lines,
            current_chars=chars,
            max_lines=max_lines,
            max_chars=max_chars,
        )

    if chars > max_chars:
        raise InputLimitError(
            f"Transcript exceeds maximum character limit of {max_chars}. Current: {chars} characters.",
            current_lines=lines,
            current_chars=chars,
            max_lines=max_lines,
            max_chars=max_chars,
        )

    return lines, chars


def validate_line_numbers(issues: Iterable[Issue], total_lines: int) -> List[Issue]:
    return [issue for issue in issues if 1 <= issue.line_number <= total_lines]


def deduplicate_issues(issues: Iterable[Issue]) -> List[Issue]:
    """Stabil: erstes Vorkommen jeder Identität gewinnt."""
    seen: set[str] = set()
    unique: List[Issue] = []

    for issue in issues:
        key = get_issue_id(issue)
        if key not in seen:
            seen.add(key)
            unique.append(issue)

    return unique


def enforce_fix_constraints(fix: str) -> str:
    """
    Kürzt eine Fix-Anweisung auf den ersten nicht-leeren Satz.

    "Add a comma. Also check spelling." -> "Add a comma."
    Ohne erkennbaren Satz wird der getrimmte Originaltext zurückgegeben.
    """
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(fix) if s.strip()]
    if sentences:
        first = sentences[0].strip()
        if not _TERMINAL_PUNCT_RE.search(first):
            first += "."
        return first
    return fix.strip()


def normalize_issues(issues: Iterable[Issue], total_lines: int) -> List[Issue]:
    """Filter -> Dedup -> Fix-Kürzung, in dieser Reihenfolge."""
    cleaned = validate_line_numbers(issues, total_lines)
    cleaned = deduplicate_issues(cleaned)
    return [
        issue.model_copy(update={"suggested_fix": enforce_fix_constraints(issue.suggested_fix)})
        for issue in cleaned
    ]

"""
Anwenden akzeptierter Fixes auf Zeilen und ganze Transkripte.

- apply_fix_to_line: ein Issue auf eine Zeile, Whitespace am Rand bleibt byte-identisch
- apply_fixes_to_line: mehrere Issues nacheinander (Fold), Ausgabe des einen ist Eingabe des nächsten
- apply_fixes_to_transcript: akzeptierte Issues nach Zeile gruppieren und anwenden

Korrekturen werden immer aus den Originalzeilen neu berechnet, nie aus einem
früheren Korrekturstand. Dadurch ist das Ergebnis idempotent.
"""

import logging
from functools import reduce
from typing import Callable, Collection, Dict, Iterable, List

from app.models.pydantic import Issue
from app.services.proofreading.acceptance import filter_accepted
from app.services.proofreading.fix_appliers import (
    MANUAL_ONLY_CATEGORIES,
    get_fix_applier,
    replace_word,
)
from app.services.proofreading.validation import split_lines
from app.services.proofreading.word_pairs import extract_word_pair

logger = logging.getLogger(__name__)

LineFixer = Callable[[str, Issue], str]


def split_edge_whitespace(line: str) -> tuple[str, str, str]:
    """Returns: (leading, body, trailing); für reine Whitespace-Zeilen ist body leer."""
    body = line.strip()
    if not body:
        return line, "", ""
    leading = line[: len(line) - len(line.lstrip())]
    trailing = line[len(line.rstrip()):]
    return leading, body, trailing


def apply_fix_to_line(line: str, issue: Issue) -> str:
    if issue.category in MANUAL_ONLY_CATEGORIES:
        return line

    leading, body, trailing = split_edge_whitespace(line)
    if not body:
        return line

    result = get_fix_applier(issue.category)(body, issue)

    # Letzter generischer Versuch, falls die Kategorie-Logik nichts geändert hat
    if result == body:
        pair = extract_word_pair(issue)
        if pair is not None:
            result = replace_word(body, pair.original, pair.corrected)

    if result == body:
        logger.debug(
            "Fix nicht anwendbar (line=%s, category=%s): %r",
            issue.line_number,
            issue.category,
            issue.suggested_fix,
        )

    return leading + result + trailing


def apply_fixes_to_line(line: str, issues: Iterable[Issue], apply_fix: LineFixer = apply_fix_to_line) -> str:
    return reduce(apply_fix, issues, line)


def group_issues_by_line(issues: Iterable[Issue]) -> Dict[int, List[Issue]]:
    """Stabil sortiert nach line_number; innerhalb einer Zeile bleibt die Eingabereihenfolge."""
    grouped: Dict[int, List[Issue]] = {}
    for issue in sorted(issues, key=lambda i: i.line_number):
        grouped.setdefault(issue.line_number, []).append(issue)
    return grouped


def apply_fixes_to_transcript(
    transcript: str,
    issues: Iterable[Issue],
    accepted_ids: Collection[str],
    apply_fix: LineFixer = apply_fix_to_line,
) -> str:
    if not accepted_ids:
        return transcript

    by_line = group_issues_by_line(filter_accepted(issues, accepted_ids))
    if not by_line:
        return transcript

    lines = split_lines(transcript)
    corrected = [
        apply_fixes_to_line(line, by_line.get(number, ()), apply_fix)
        for number, line in enumerate(lines, start=1)
    ]

    logger.info(
        "Applied %d accepted issue(s) to %d line(s)",
        sum(len(v) for k, v in by_line.items() if 1 <= k <= len(lines)),
        sum(1 for a, b in zip(lines, corrected) if a != b),
    )
    return "\n".join(corrected)


def changed_line_numbers(original: str, corrected: str) -> List[int]:
    return [
        number
        for number, (a, b) in enumerate(zip(split_lines(original), split_lines(corrected)), start=1)
        if a != b
    ]

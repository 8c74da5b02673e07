"""
Markiert geänderte Stellen einer korrigierten Zeile in **fett** (Markdown).

Reihenfolge:
1. Kapitalisierungs-Issue + gleiche Tokenanzahl -> jedes geänderte Token fett
2. Interpunktions-Issue -> angehängtes Suffix bzw. der abweichende Bereich fett
3. Sonst die ganze korrigierte Zeile fett (der Leser sieht immer, DASS sich etwas geändert hat)
"""

import re
from typing import Iterable, List, Optional

from app.models.pydantic import Issue

_WHITESPACE_SPLIT_RE = re.compile(r"(\s+)")


def bold(text: str) -> str:
    return f"**{text}**"


def _mark_changed_tokens(original: str, corrected: str) -> Optional[str]:
    orig_parts = _WHITESPACE_SPLIT_RE.split(original)
    corr_parts = _WHITESPACE_SPLIT_RE.split(corrected)
    if len(orig_parts) != len(corr_parts):
        return None

    marked: List[str] = []
    changed = False
    for orig_part, corr_part in zip(orig_parts, corr_parts):
        if not corr_part.strip() or orig_part == corr_part:
            marked.append(corr_part)
        else:
            marked.append(bold(corr_part))
            changed = True

    return "".join(marked) if changed else None


def find_changed_span(original: str, corrected: str) -> Optional[tuple[int, int]]:
    """
    Bereich [start, end) in corrected, der sich von original unterscheidet.

    start: erste Abweichung von vorn; end: erste Position danach, ab der die
    Resttexte wieder übereinstimmen. None, wenn corrected nichts Neues enthält.
    """
    start = 0
    limit = min(len(original), len(corrected))
    while start < limit and original[start] == corrected[start]:
        start += 1

    for end in range(start, len(corrected) + 1):
        tail = corrected[end:]
        orig_tail_start = len(original) - len(tail)
        if orig_tail_start >= start and original[orig_tail_start:] == tail:
            return (start, end) if end > start else None
    return None


def _mark_punctuation_change(original: str, corrected: str) -> Optional[str]:
    if len(corrected) > len(original) and corrected.lower().startswith(original.lower()):
        return corrected[: len(original)] + bold(corrected[len(original):])

    span = find_changed_span(original, corrected)
    if span is None:
        return None
    start, end = span
    return corrected[:start] + bold(corrected[start:end]) + corrected[end:]


def mark_changes_in_bold(original: str, corrected: str, issues: Iterable[Issue]) -> str:
    if original == corrected:
        return original

    orig_trimmed = original.strip()
    corr_trimmed = corrected.strip()
    categories = {issue.category for issue in issues}

    if "capitalization" in categories:
        marked = _mark_changed_tokens(orig_trimmed, corr_trimmed)
        if marked is not None:
            return marked

    if "punctuation" in categories:
        marked = _mark_punctuation_change(orig_trimmed, corr_trimmed)
        if marked is not None:
            return marked

    return bold(corr_trimmed)

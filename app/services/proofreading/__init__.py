"""
Proofreading-Modul für zeilenbasierte Transkripte.

Unterstützt:
- Issue-Erkennung per LLM mit strikter Schema-Validierung
- Normalisierung (Zeilenfilter, Deduplizierung, Ein-Satz-Fixes)
- Deterministisches Anwenden akzeptierter Fixes (Heuristik-Engine)
- Optional KI-gestütztes Anwenden mit Heuristik-Fallback
- Export (JSON, CSV, Markdown mit fett markierten Änderungen)
"""

from app.services.proofreading.acceptance import AcceptedSet, get_issue_id
from app.services.proofreading.fix_engine import (
    apply_fix_to_line,
    apply_fixes_to_line,
    apply_fixes_to_transcript,
)
from app.services.proofreading.word_pairs import extract_word_pair

__all__ = [
    "AcceptedSet",
    "apply_fix_to_line",
    "apply_fixes_to_line",
    "apply_fixes_to_transcript",
    "extract_word_pair",
    "get_issue_id",
]

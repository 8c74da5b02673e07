"""
KI-gestützter Pfad zum Anwenden akzeptierter Fixes.

Jede (Zeile, Issue)-Kombination wird einzeln an das LLM delegiert, strikt
nacheinander, damit spätere Fixes einer Zeile die Ausgabe der früheren sehen.
Jeder Fehler des LLM-Calls (inkl. leerer Antwort) fällt still auf die
deterministische Fix-Engine zurück; es wird nichts an den Aufrufer propagiert.
"""

import logging
from typing import Collection, Iterable

from app.llm.llm_client import LLMClient
from app.models.pydantic import Issue
from app.services.proofreading.fix_appliers import MANUAL_ONLY_CATEGORIES
from app.services.proofreading.fix_engine import (
    LineFixer,
    apply_fix_to_line,
    apply_fixes_to_transcript,
    split_edge_whitespace,
)
from app.services.proofreading.prompts import FIX_SYSTEM_PROMPT, build_fix_prompt

logger = logging.getLogger(__name__)


def clean_ai_line(raw: str, original: str = "") -> str:
    """
    Entfernt Whitespace und ein umschließendes Anführungszeichen-Paar, das Modelle gern mitliefern.

    Ist die Originalzeile selbst in dieses Zeichen eingeschlossen, bleibt das Paar stehen.
    """
    result = raw.strip()
    if len(result) >= 2 and result[0] == result[-1] and result[0] in ('"', "'"):
        quote = result[0]
        if not (len(original) >= 2 and original.startswith(quote) and original.endswith(quote)):
            result = result[1:-1].strip()
    # Mehrzeilige Antworten können keine einzelne Transkriptzeile sein
    if "\n" in result:
        return ""
    return result


class AIFixApplier:
    def __init__(
        self,
        llm_client: LLMClient,
        model: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 500,
        fallback: LineFixer = apply_fix_to_line,
    ):
        self.llm = llm_client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.fallback = fallback

    def apply_fix_to_line(self, line: str, issue: Issue) -> str:
        if issue.category in MANUAL_ONLY_CATEGORIES:
            return line

        leading, body, trailing = split_edge_whitespace(line)
        if not body:
            return line

        try:
            raw = self.llm.complete(
                build_fix_prompt(body, issue),
                system=FIX_SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            corrected = clean_ai_line(raw or "", body)
            if not corrected:
                raise ValueError("No corrected line returned from AI")
        except Exception:
            logger.warning(
                "AI fix failed (line=%s, category=%s), falling back to heuristic engine",
                issue.line_number,
                issue.category,
                exc_info=True,
            )
            return self.fallback(line, issue)

        return leading + corrected + trailing

    def apply_fixes_to_transcript(
        self,
        transcript: str,
        issues: Iterable[Issue],
        accepted_ids: Collection[str],
    ) -> str:
        return apply_fixes_to_transcript(
            transcript, issues, accepted_ids, apply_fix=self.apply_fix_to_line
        )

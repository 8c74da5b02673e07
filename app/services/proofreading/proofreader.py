"""
Issue-Erkennung über ein LLM (Upstream-Vertrag).

Request: Roh-Transkript. Response: {"issues": Issue[]} als Structured Output.
Die Antwort wird strikt gegen das pydantic-Schema validiert; jede Abweichung
ist fatal für den Durchlauf (ProofreadResponseError), es wird nichts repariert
und keine Teilliste zurückgegeben. Erst danach werden Zeilennummern gefiltert,
Duplikate entfernt und Fix-Texte auf einen Satz gekürzt.
"""

import logging
from typing import List

from pydantic import ValidationError

from app.llm.llm_client import LLMClient
from app.models.pydantic import Issue, ProofreadResponse, ProofreadResult
from app.services.proofreading.errors import ProofreadingError, ProofreadResponseError
from app.services.proofreading.prompts import (
    PROOFREAD_RESPONSE_FORMAT,
    PROOFREAD_SYSTEM_PROMPT,
    build_proofread_prompt,
)
from app.services.proofreading.validation import normalize_issues, split_lines

logger = logging.getLogger(__name__)


def parse_proofread_response(raw: str) -> ProofreadResponse:
    if not raw or not raw.strip():
        raise ProofreadResponseError("No content in LLM response")

    try:
        return ProofreadResponse.model_validate_json(raw)
    except ValidationError as e:
        details = [
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in e.errors()
        ]
        raise ProofreadResponseError(
            f"LLM response does not match the issue schema ({len(details)} error(s))",
            details=details,
        ) from e


class TranscriptProofreader:
    def __init__(
        self,
        llm_client: LLMClient,
        model: str | None = None,
        temperature: float = 0.3,
    ):
        self.llm = llm_client
        self.model = model
        self.temperature = temperature

    def detect_issues(self, transcript: str) -> List[Issue]:
        """Roh-Issues, schema-validiert, aber noch nicht normalisiert."""
        try:
            raw = self.llm.complete(
                build_proofread_prompt(transcript),
                system=PROOFREAD_SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
                response_format=PROOFREAD_RESPONSE_FORMAT,
            )
        except Exception as e:
            raise ProofreadingError(f"LLM API error: {e}") from e

        return parse_proofread_response(raw).issues

    def proofread(self, transcript: str) -> ProofreadResult:
        total_lines = len(split_lines(transcript))
        raw_issues = self.detect_issues(transcript)
        issues = normalize_issues(raw_issues, total_lines)

        logger.info(
            "Proofreading pass: %d raw issue(s), %d kept (%d lines)",
            len(raw_issues),
            len(issues),
            total_lines,
        )
        return ProofreadResult(issues=issues, total_lines=total_lines)

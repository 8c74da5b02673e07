import os
from typing import Collection, Sequence

from app.core.config import Settings, settings as default_settings
from app.llm.fake_client import FakeLLMClient
from app.llm.llm_client import LLMClient
from app.models.pydantic import ApplyFixesResponse, Issue, ProofreadResult
from app.services.proofreading.acceptance import filter_accepted
from app.services.proofreading.ai_fixer import AIFixApplier
from app.services.proofreading.export import (
    EXPORT_MEDIA_TYPES,
    export_to_csv,
    export_to_json,
    export_to_markdown,
)
from app.services.proofreading.fix_engine import (
    apply_fix_to_line,
    apply_fixes_to_transcript,
    changed_line_numbers,
)
from app.services.proofreading.proofreader import TranscriptProofreader
from app.services.proofreading.validation import validate_input


def is_test_mode() -> bool:
    # Wenn TEST_MODE=1 in der Umgebung gesetzt ist, werden keine echten LLM-Calls ausgeführt.
    return os.getenv("TEST_MODE") == "1"


def build_llm_client(config: Settings = default_settings) -> LLMClient:
    """Einmal beim Start erzeugen und an den Service durchreichen."""
    if is_test_mode():
        return FakeLLMClient()

    from app.llm.openai_client import OpenAIClient

    return OpenAIClient(model_name=config.proofread_model)


class ProofreadingService:
    def __init__(self, llm_client: LLMClient, config: Settings = default_settings) -> None:
        self.config = config
        self.proofreader = TranscriptProofreader(
            llm_client,
            model=config.proofread_model,
            temperature=config.proofread_temperature,
        )
        self.ai_fixer = AIFixApplier(
            llm_client,
            model=config.fix_model,
            temperature=config.fix_temperature,
            max_tokens=config.fix_max_tokens,
        )

    def proofread(self, transcript: str) -> ProofreadResult:
        # 1. Zulassungsgrenzen (wirft InputLimitError)
        validate_input(transcript, self.config.max_lines, self.config.max_chars)
        # 2. LLM-Issue-Erkennung + Normalisierung
        return self.proofreader.proofread(transcript)

    def _use_ai(self, use_ai: bool | None) -> bool:
        return self.config.use_ai_fixes if use_ai is None else use_ai

    def apply_fix(self, line_text: str, issue: Issue, use_ai: bool | None = None) -> str:
        if self._use_ai(use_ai):
            return self.ai_fixer.apply_fix_to_line(line_text, issue)
        return apply_fix_to_line(line_text, issue)

    def apply_fixes(
        self,
        transcript: str,
        issues: Sequence[Issue],
        accepted_ids: Collection[str],
        use_ai: bool | None = None,
    ) -> ApplyFixesResponse:
        accepted = frozenset(accepted_ids)
        if self._use_ai(use_ai):
            corrected = self.ai_fixer.apply_fixes_to_transcript(transcript, issues, accepted)
        else:
            corrected = apply_fixes_to_transcript(transcript, issues, accepted)

        return ApplyFixesResponse(
            corrected_transcript=corrected,
            changed_lines=changed_line_numbers(transcript, corrected),
            applied=len(filter_accepted(issues, accepted)),
        )

    def export(
        self,
        fmt: str,
        transcript: str,
        issues: Sequence[Issue],
        accepted_ids: Collection[str],
    ) -> tuple[str, str]:
        """
        Returns:
            (content, media_type)

        Raises:
            ValueError: bei unbekanntem Format
        """
        if fmt not in EXPORT_MEDIA_TYPES:
            available = ", ".join(EXPORT_MEDIA_TYPES)
            raise ValueError(f"Unknown export format: {fmt}. Available: {available}")

        if fmt == "json":
            content = export_to_json(issues)
        elif fmt == "csv":
            content = export_to_csv(issues)
        else:
            accepted = frozenset(accepted_ids)
            corrected = apply_fixes_to_transcript(transcript, issues, accepted)
            content = export_to_markdown(transcript, corrected, issues, accepted)

        return content, EXPORT_MEDIA_TYPES[fmt]

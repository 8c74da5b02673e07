import re
from typing import Any

from app.llm.llm_client import LLMClient

_LINE_TEXT_RE = re.compile(r'^Line text: "(.*)"$', re.MULTILINE)


class FakeLLMClient(LLMClient):
    """
    Deterministischer Offline-Client (TEST_MODE, Demos).

    - Structured-Output-Calls (response_format gesetzt) liefern eine feste Issue-Liste.
    - Alle anderen Calls gelten als Fix-Delegation und geben die Zeile unverändert zurück.
    """

    def complete(self, prompt: str, system: str | None = None, **kwargs: Any) -> str:
        if kwargs.get("response_format"):
            # Völlig deterministische Antwort mit zwei klaren Fehlern in Zeile 1.
            return """
            {
              "issues": [
                {
                  "line_number": 1,
                  "category": "capitalization",
                  "severity": "review",
                  "description": "'smith' should be 'Smith'",
                  "suggested_fix": "Capitalize 'smith'.",
                  "confidence": 0.9
                },
                {
                  "line_number": 1,
                  "category": "punctuation",
                  "severity": "info",
                  "description": "Missing period at end of sentence",
                  "suggested_fix": "Add period at end.",
                  "confidence": 0.8
                }
              ]
            }
            """

        match = _LINE_TEXT_RE.search(prompt)
        return match.group(1) if match else ""

"""
Fehlerklassen des Proofreading-Moduls.

Nur Fehler oberhalb der Fix-Engine werden als Exceptions modelliert:
- ProofreadResponseError: LLM-Antwort verletzt das Issue-Schema (fatal für den Durchlauf)
- InputLimitError: Transkript überschreitet die Zulassungsgrenzen

Nicht interpretierbare Fix-Anweisungen sind KEIN Fehler; die Zeile bleibt dann unverändert.
"""

from typing import List, Optional


class ProofreadingError(Exception):
    """Basisklasse für alle Proofreading-Fehler."""


class ProofreadResponseError(ProofreadingError):
    """Antwort des Issue-Erkennungs-LLMs ist kein gültiges ProofreadResponse-JSON."""

    user_message = "Invalid response format from AI service"

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.details = details or []


class InputLimitError(ProofreadingError):
    def __init__(
        self,
        message: str,
        *,
        current_lines: int,
        current_chars: int,
        max_lines: int,
        max_chars: int,
    ):
        super().__init__(message)
        self.current_lines = current_lines
        self.current_chars = current_chars
        self.max_lines = max_lines
        self.max_chars = max_chars

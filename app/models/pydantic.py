from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

IssueCategory = Literal[
    "punctuation",
    "capitalization",
    "spelling",
    "speaker_formatting",
]

Severity = Literal["blocking", "review", "info"]

# Nur für Anzeige/Sortierung, hat keinen Einfluss auf das Anwenden von Fixes.
SEVERITY_ORDER: Dict[str, int] = {"blocking": 0, "review": 1, "info": 2}


class Issue(BaseModel):
    """
    Ein erkanntes Problem in genau einer Transkriptzeile.

    Unveränderlich: Issues entstehen einmal pro Proofreading-Durchlauf.
    Die logische Identität ist (line_number, category, description),
    siehe app.services.proofreading.acceptance.get_issue_id.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    line_number: int = Field(gt=0, strict=True)  # 1-basiert
    category: IssueCategory
    severity: Severity
    description: str = Field(min_length=1)
    # Anweisung wie "Add period at end", kein umgeschriebener Satz
    suggested_fix: str = Field(min_length=1, max_length=200)
    confidence: float = Field(ge=0.0, le=1.0)


class ProofreadResponse(BaseModel):
    """
    Erwartete Antwort des Issue-Erkennungs-LLMs.
    Wird strikt validiert; Abweichungen sind ein fataler Fehler für den Durchlauf.
    """

    model_config = ConfigDict(extra="forbid")

    issues: List[Issue]


class ProofreadRequest(BaseModel):
    """
    Request-Body für den /proofread-Endpoint.
    """
    transcript: str


class ProofreadResult(BaseModel):
    """
    Response-Body für den /proofread-Endpoint: bereinigte Issues.
    """
    issues: List[Issue] = Field(default_factory=list)
    total_lines: int


class InputLimitErrorBody(BaseModel):
    error: str
    max_lines: int
    max_chars: int
    current_lines: Optional[int] = None
    current_chars: Optional[int] = None


class ApplyFixRequest(BaseModel):
    line_text: str  # darf leer sein
    issue: Issue
    use_ai: Optional[bool] = None


class ApplyFixResponse(BaseModel):
    corrected_line: str


class ApplyFixesRequest(BaseModel):
    """
    Request-Body für /apply-fixes.
    accepted_ids enthält Issue-IDs im Format "line_number:category:description".
    """
    transcript: str
    issues: List[Issue] = Field(default_factory=list)
    accepted_ids: List[str] = Field(default_factory=list)
    use_ai: Optional[bool] = None


class ApplyFixesResponse(BaseModel):
    corrected_transcript: str
    changed_lines: List[int] = Field(default_factory=list)
    applied: int = 0


class ExportRequest(BaseModel):
    transcript: str = ""
    issues: List[Issue] = Field(default_factory=list)
    accepted_ids: List[str] = Field(default_factory=list)

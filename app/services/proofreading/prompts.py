"""
Prompt-Templates für Issue-Erkennung und KI-gestütztes Anwenden einzelner Fixes.

Die Issue-Erkennung erzwingt Structured Output (JSON-Schema, strict).
"""

from typing import Any

from app.models.pydantic import Issue

CATEGORIES = ["punctuation", "capitalization", "spelling", "speaker_formatting"]
SEVERITIES = ["blocking", "review", "info"]

ISSUE_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "line_number": {
            "type": "integer",
            "description": "1-based line number where the issue occurs",
        },
        "category": {
            "type": "string",
            "enum": CATEGORIES,
            "description": "Category of the issue",
        },
        "severity": {
            "type": "string",
            "enum": SEVERITIES,
            "description": "Severity level of the issue",
        },
        "description": {
            "type": "string",
            "description": "Brief description of the issue",
        },
        "suggested_fix": {
            "type": "string",
            "description": "Minimal suggested fix (≤1 sentence, instructional only, not a rewrite)",
        },
        "confidence": {
            "type": "number",
            "minimum": 0,
            "maximum": 1,
            "description": "Confidence score from 0 to 1",
        },
    },
    "required": ["line_number", "category", "severity", "description", "suggested_fix", "confidence"],
    "additionalProperties": False,
}

RESPONSE_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "issues": {
            "type": "array",
            "items": ISSUE_JSON_SCHEMA,
            "description": "Array of detected issues",
        },
    },
    "required": ["issues"],
    "additionalProperties": False,
}

PROOFREAD_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "proofread_response",
        "strict": True,
        "schema": RESPONSE_JSON_SCHEMA,
    },
}

PROOFREAD_SYSTEM_PROMPT = """You are a transcript proofreading assistant. Your task is to detect and report issues in transcripts WITHOUT rewriting or modifying the original text.

CRITICAL RULES:
1. NEVER rewrite or paraphrase the transcript text
2. ONLY detect issues in: punctuation, capitalization, spelling, and speaker/turn formatting (Q/A labels)
3. Provide minimal suggested fixes (≤1 sentence, instructional only)
4. Return issues with accurate line numbers (1-based)
5. Suggested fixes must be minimal instructions, not rewrites

Focus on:
- Punctuation errors (missing periods, commas, quotation marks, etc.)
- Capitalization errors (proper nouns, sentence starts, etc.)
- Spelling errors (misspelled words)
- Speaker/turn formatting issues (inconsistent Q/A labels, speaker labels, etc.)

For each issue, provide:
- line_number: The line where the issue occurs (1-based)
- category: One of the four categories above
- severity: "blocking" (critical errors), "review" (should be reviewed), or "info" (minor suggestions)
- description: Brief description of the issue; quote affected words, e.g. 'smith' should be 'Smith'
- suggested_fix: Minimal instruction for fixing (e.g., "Add period at end" not "Change to: ...")
- confidence: Your confidence level (0-1)"""

FIX_SYSTEM_PROMPT = """You are a text correction assistant. Your task is to apply a specific fix to a line of text.

CRITICAL RULES:
1. Apply ONLY the specific fix requested - do not make any other changes
2. Preserve all original whitespace (leading and trailing spaces)
3. Do not rewrite or paraphrase the text
4. Only modify what is necessary to apply the fix
5. Return ONLY the corrected line text, nothing else

The fix should be applied exactly as specified in the issue description and suggested fix."""


def build_proofread_prompt(transcript: str) -> str:
    return f"""Please proofread the following transcript and identify any issues. Return only the issues found, with accurate line numbers.

Transcript:
{transcript}"""


def build_fix_prompt(line_text: str, issue: Issue) -> str:
    return f"""Please apply the following fix to this line of text.

Line text: "{line_text}"

Issue description: {issue.description}
Suggested fix: {issue.suggested_fix}
Category: {issue.category}

Return ONLY the corrected line text. Do not include any explanation or additional text."""

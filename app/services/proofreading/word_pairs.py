"""
Ableitung eines Wortpaars (original, korrigiert) aus dem Freitext eines Issues.

Die Muster werden als geordnete Liste unabhängiger Strategien probiert;
die erste Strategie, die ein sinnvolles Paar liefert, gewinnt (kein Backtracking):

1. "'X' should be [capitalized as] 'Y'" in der Beschreibung
2. dasselbe Muster im suggested_fix
3. "... 'X' to make it 'Y'" (Korrektur darf selbst einen Apostroph enthalten, z.B. today's)
4. Generischer Fallback über alle zitierten Tokens (erstes/letztes)
5. Nur Kapitalisierung: genau ein zitiertes, kleingeschriebenes Token -> Großschreibung

Ein Paar, das sich nur in der Groß-/Kleinschreibung unterscheidet, ist nur für
category == "capitalization" sinnvoll; sonst wird es verworfen.
"""

import re
from typing import Callable, List, NamedTuple, Optional, Sequence

from app.models.pydantic import Issue


class WordPair(NamedTuple):
    original: str
    corrected: str


class QuotedToken(NamedTuple):
    text: str
    start: int  # Position des öffnenden Anführungszeichens
    end: int  # Position nach dem schließenden Anführungszeichen


# Ein Anführungszeichen öffnet nur nach einem Nicht-Wortzeichen und schließt nur vor
# einem Nicht-Wortzeichen. Innere Apostrophe (today's, don't) beenden das Token daher nicht.
# Ein verdoppeltes Zeichen am Ende ('students'') gehört zum Token: students'
_QUOTED_RE = re.compile(r"(?<!\w)([\"'])(?!\s)(.+?)(?<!\s)\1(?!\w)(?!\1)")

_SHOULD_BE_GAP_RE = re.compile(r"^\s+should\s+be\s+(?:capitalized\s+as\s+)?$", re.IGNORECASE)
_MAKE_IT_RE = re.compile(r"\b(?:to\s+)?make\s+it\b", re.IGNORECASE)

_TYPOGRAPHIC_QUOTES = str.maketrans({"‘": "'", "’": "'", "“": '"', "”": '"'})


def normalize_quotes(text: str) -> str:
    return text.translate(_TYPOGRAPHIC_QUOTES)


def find_quoted_tokens(text: str) -> List[QuotedToken]:
    text = normalize_quotes(text)
    return [
        QuotedToken(m.group(2).strip(), m.start(), m.end())
        for m in _QUOTED_RE.finditer(text)
        if m.group(2).strip()
    ]


def _unique(tokens: Sequence[str]) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for token in tokens:
        if token not in seen:
            seen.add(token)
            result.append(token)
    return result


def is_meaningful_pair(pair: Optional[WordPair], category: str) -> bool:
    if pair is None or not pair.original or not pair.corrected:
        return False
    if pair.original == pair.corrected:
        return False
    if pair.original.lower() == pair.corrected.lower():
        return category == "capitalization"
    return True


# ---------- Strategien ---------- #

def _should_be_pair(text: str) -> Optional[WordPair]:
    tokens = find_quoted_tokens(text)
    normalized = normalize_quotes(text)
    for first, second in zip(tokens, tokens[1:]):
        if _SHOULD_BE_GAP_RE.match(normalized[first.end:second.start]):
            return WordPair(first.text, second.text)
    return None


def _should_be_in_description(issue: Issue) -> Optional[WordPair]:
    return _should_be_pair(issue.description)


def _should_be_in_fix(issue: Issue) -> Optional[WordPair]:
    return _should_be_pair(issue.suggested_fix)


def _make_it_pair(text: str) -> Optional[WordPair]:
    normalized = normalize_quotes(text)
    phrase = _MAKE_IT_RE.search(normalized)
    if not phrase:
        return None

    tokens = find_quoted_tokens(normalized)
    following = next((t for t in tokens if t.start >= phrase.end()), None)
    if following is None or normalized[phrase.end():following.start].strip():
        return None

    before = [t for t in tokens if t.end <= phrase.start()]
    if not before:
        return None
    # Nächstgelegenes Token vor der Phrase; liegt etwas dazwischen, ist es das letzte davor.
    return WordPair(before[-1].text, following.text)


def _make_it(issue: Issue) -> Optional[WordPair]:
    return _make_it_pair(issue.suggested_fix) or _make_it_pair(issue.description)


def _generic_quoted(issue: Issue) -> Optional[WordPair]:
    fix_tokens = _unique([t.text for t in find_quoted_tokens(issue.suggested_fix)])
    combined = _unique([t.text for t in find_quoted_tokens(issue.description)] + fix_tokens)

    if len({t.lower() for t in combined}) < 2:
        return None
    if len(fix_tokens) >= 2:
        return WordPair(fix_tokens[0], fix_tokens[-1])
    return WordPair(combined[0], combined[-1])


def _capitalize_single_token(issue: Issue) -> Optional[WordPair]:
    if issue.category != "capitalization":
        return None
    combined = _unique(
        [t.text for t in find_quoted_tokens(issue.description)]
        + [t.text for t in find_quoted_tokens(issue.suggested_fix)]
    )
    if len(combined) != 1:
        return None
    token = combined[0]
    if not token[0].islower():
        return None
    return WordPair(token, token[0].upper() + token[1:])


WordPairStrategy = Callable[[Issue], Optional[WordPair]]

WORD_PAIR_STRATEGIES: tuple[WordPairStrategy, ...] = (
    _should_be_in_description,
    _should_be_in_fix,
    _make_it,
    _generic_quoted,
    _capitalize_single_token,
)


def extract_word_pair(issue: Issue) -> Optional[WordPair]:
    for strategy in WORD_PAIR_STRATEGIES:
        pair = strategy(issue)
        if is_meaningful_pair(pair, issue.category):
            return pair
    return None

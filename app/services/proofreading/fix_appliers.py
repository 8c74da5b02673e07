"""
Kategorie-spezifische Strategien zum Anwenden einer Fix-Anweisung.

Alle Applier arbeiten auf dem getrimmten Zeileninhalt und geben den (ggf.
unveränderten) getrimmten Inhalt zurück. Whitespace am Zeilenrand wird eine
Ebene höher (fix_engine) wiederhergestellt.

Grundsatz: lieber nichts ändern als falsch raten. Kann eine Anweisung nicht
sicher interpretiert werden, bleibt der Text unverändert.
"""

import re
from typing import Callable, Dict, Optional

from app.models.pydantic import Issue
from app.services.proofreading.word_pairs import extract_word_pair, find_quoted_tokens

FixApplier = Callable[[str, Issue], str]

_TERMINAL_PUNCT_RE = re.compile(r"[.!?]$")
_COMMA_TARGET_RE = re.compile(r"\bbefore\s+[\"'‘“]?(\w+)", re.IGNORECASE)
_CONJUNCTION_RE = re.compile(r" (?:and|but|or|so) ", re.IGNORECASE)
_ALL_RE = re.compile(r"\ball\b")

# "recieve should be receive" (Beschreibung) bzw. "change recieve to receive" (Fix)
_SHOULD_BE_WORDS_RE = re.compile(
    r"\b(\w+)[\"']?\s+should\s+be\s+(?:spelled\s+|written\s+)?(?:as\s+)?[\"']?(\w+)",
    re.IGNORECASE,
)
_CHANGE_TO_WORDS_RE = re.compile(r"\bchange\s+[\"']?(\w+)[\"']?\s+to\s+[\"']?(\w+)", re.IGNORECASE)
# Platzhalter, die in "this word should be ..." kein Quellwort sind
_NON_SOURCE_WORDS = {"word", "it", "this", "that", "name", "term", "spelling", "there"}


def _transfer_first_letter_case(matched: str, replacement: str) -> str:
    if matched[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def replace_word(text: str, original: str, corrected: str, transfer_case: bool = True) -> str:
    """
    Ersetzt alle Vorkommen von original (case-insensitive, an Wortgrenzen) durch corrected.

    - Ohne Treffer an Wortgrenzen (z.B. "Dr.") wird ohne Anker erneut gesucht.
    - Nur die Groß-/Kleinschreibung des ersten Buchstabens wird übertragen
      (transfer_case=False: corrected wird exakt eingesetzt).
    - Ist corrected eine Verlängerung von original ("Dr" -> "Dr."), werden bereits
      korrigierte Stellen nicht ein zweites Mal verlängert.
    """
    if not original:
        return text

    escaped = re.escape(original)
    guard = ""
    if len(corrected) > len(original) and corrected.lower().startswith(original.lower()):
        guard = f"(?!{re.escape(corrected[len(original):])})"

    def _sub(match: re.Match) -> str:
        if not transfer_case:
            return corrected
        return _transfer_first_letter_case(match.group(0), corrected)

    bounded = re.compile(rf"\b{escaped}\b{guard}", re.IGNORECASE)
    if bounded.search(text):
        return bounded.sub(_sub, text)

    return re.sub(rf"{escaped}{guard}", _sub, text, flags=re.IGNORECASE)


def _replace_extracted_pair(text: str, issue: Issue) -> Optional[str]:
    pair = extract_word_pair(issue)
    if pair is None:
        return None
    return replace_word(text, pair.original, pair.corrected)


# ---------- Kapitalisierung ---------- #

def _lowercase_pair(issue: Issue) -> Optional[tuple[str, str]]:
    """Lowercase-Paar, z.B. 'The' should be 'the' -> ("The", "the")."""
    pair = extract_word_pair(issue)
    if pair is not None:
        if pair.corrected == pair.original.lower():
            return pair.original, pair.corrected
        return None

    quoted = {t.text for t in find_quoted_tokens(issue.description)}
    quoted |= {t.text for t in find_quoted_tokens(issue.suggested_fix)}
    if len(quoted) != 1:
        return None
    word = quoted.pop()
    if not word[:1].isupper():
        return None
    return word, word.lower()


def apply_capitalization_fix(text: str, issue: Issue) -> str:
    if "lowercase" in issue.suggested_fix.lower():
        pair = _lowercase_pair(issue)
        if pair is not None:
            return replace_word(text, *pair, transfer_case=False)
        if extract_word_pair(issue) is None and text[:1].isupper():
            return text[0].lower() + text[1:]
        return text

    replaced = _replace_extracted_pair(text, issue)
    if replaced is not None:
        return replaced

    if "capitalize" in issue.suggested_fix.lower() and text[:1].islower():
        return text[0].upper() + text[1:]

    return text


# ---------- Interpunktion ---------- #
# Jede Strategie liefert None, wenn ihre Schlüsselwörter nicht passen
# (bzw. sie mit der Anweisung nichts anfangen kann); dann ist die nächste dran.

def _punct_word_replacement(text: str, issue: Issue, fix: str) -> Optional[str]:
    raw_fix = issue.suggested_fix
    if not ("apostrophe" in fix or "'" in raw_fix or '"' in raw_fix or "make it" in fix):
        return None

    replaced = _replace_extracted_pair(text, issue)
    if replaced is not None and replaced != text:
        return replaced

    if "apostrophe" in fix:
        return _insert_possessive_apostrophe(text, issue)
    return None


def _insert_possessive_apostrophe(text: str, issue: Issue) -> Optional[str]:
    """
    "Add apostrophe to 'todays'" -> todays wird zu today's.

    Nennt die Anweisung selbst eine Zielform ("to make it ..." oder ein zweites
    zitiertes Token), wird nichts synthetisiert.
    """
    if "make it" in issue.suggested_fix.lower():
        return None
    quoted = find_quoted_tokens(issue.suggested_fix)
    if len(quoted) != 1:
        return None
    word = quoted[0].text
    if len(word) < 2 or not word.lower().endswith("s") or "'" in word:
        return None

    pattern = re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
    if not pattern.search(text):
        return None
    return pattern.sub(lambda m: m.group(0)[:-1] + "'" + m.group(0)[-1], text)


def _add_period(text: str, issue: Issue, fix: str) -> Optional[str]:
    if "add period" not in fix or "end" not in fix:
        return None
    if text and not _TERMINAL_PUNCT_RE.search(text):
        return text + "."
    return text


def _add_comma(text: str, issue: Issue, fix: str) -> Optional[str]:
    if "add comma" not in fix:
        return None

    target = _COMMA_TARGET_RE.search(issue.suggested_fix)
    if target:
        match = re.search(rf"\b{re.escape(target.group(1))}\b", text, re.IGNORECASE)
        if not match or match.start() == 0:
            return text
        prefix = text[: match.start()].rstrip()
        if prefix.endswith(","):
            return text
        return f"{prefix}, {text[match.start():]}"

    conjunction = _CONJUNCTION_RE.search(text)
    if not conjunction or text[: conjunction.start()].endswith(","):
        return text
    return text[: conjunction.start()] + "," + text[conjunction.start():]


def _add_question_mark(text: str, issue: Issue, fix: str) -> Optional[str]:
    if not any(k in fix for k in ("add question mark", "add ?", "add question")):
        return None
    if not text or text.endswith("?"):
        return text
    return re.sub(r"[.!]$", "", text) + "?"


def _remove_punctuation(text: str, issue: Issue, fix: str) -> Optional[str]:
    if "remove" not in fix:
        return None

    # Satzendezeichen der Anweisung selbst zählt nicht als erwähnter Punkt.
    body = fix.rstrip().rstrip(".!?")
    if "period" in body or "." in body:
        return text[:-1] if text.endswith(".") else text
    if "comma" in body or "," in body:
        if _ALL_RE.search(body):
            return text.replace(",", "")
        return text.replace(",", "", 1)
    return None


PUNCTUATION_STRATEGIES = (
    _punct_word_replacement,
    _add_period,
    _add_comma,
    _add_question_mark,
    _remove_punctuation,
)


def apply_punctuation_fix(text: str, issue: Issue) -> str:
    fix = issue.suggested_fix.lower()
    for strategy in PUNCTUATION_STRATEGIES:
        result = strategy(text, issue, fix)
        if result is not None:
            return result
    return text


# ---------- Rechtschreibung ---------- #

def _literal_spelling_pair(issue: Issue) -> Optional[tuple[str, str]]:
    for pattern, source in (
        (_SHOULD_BE_WORDS_RE, issue.description),
        (_CHANGE_TO_WORDS_RE, issue.suggested_fix),
        (_SHOULD_BE_WORDS_RE, issue.suggested_fix),
    ):
        match = pattern.search(source)
        if not match:
            continue
        original, corrected = match.group(1), match.group(2)
        if original.lower() in _NON_SOURCE_WORDS or original.lower() == corrected.lower():
            continue
        return original, corrected
    return None


def apply_spelling_fix(text: str, issue: Issue) -> str:
    replaced = _replace_extracted_pair(text, issue)
    if replaced is not None:
        return replaced

    pair = _literal_spelling_pair(issue)
    if pair:
        return replace_word(text, *pair)

    return text


# ---------- Sprecherformatierung & Fallback ---------- #

def apply_speaker_formatting_fix(text: str, issue: Issue) -> str:
    # Konsistente Sprecherlabels brauchen zeilenübergreifenden Kontext -> nie automatisch.
    return text


def apply_generic_fix(text: str, issue: Issue) -> str:
    replaced = _replace_extracted_pair(text, issue)
    return text if replaced is None else replaced


CATEGORY_APPLIERS: Dict[str, FixApplier] = {
    "capitalization": apply_capitalization_fix,
    "punctuation": apply_punctuation_fix,
    "spelling": apply_spelling_fix,
    "speaker_formatting": apply_speaker_formatting_fix,
}

# Kategorien, die nie mechanisch umgeschrieben werden (auch nicht per Fallback)
MANUAL_ONLY_CATEGORIES = frozenset({"speaker_formatting"})


def get_fix_applier(category: str) -> FixApplier:
    return CATEGORY_APPLIERS.get(category, apply_generic_fix)

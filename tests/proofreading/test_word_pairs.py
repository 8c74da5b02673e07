"""
Tests für die Wortpaar-Ableitung aus Issue-Freitext.

Die Strategien werden in fester Reihenfolge probiert, die erste mit einem
sinnvollen Paar gewinnt.
"""

from app.services.proofreading.word_pairs import (
    WordPair,
    extract_word_pair,
    find_quoted_tokens,
    is_meaningful_pair,
)


class TestFindQuotedTokens:
    def test_interior_apostrophe_does_not_end_token(self):
        tokens = find_quoted_tokens("""Use "don't" and 'today's' here""")
        assert [t.text for t in tokens] == ["don't", "today's"]

    def test_typographic_quotes_are_normalized(self):
        tokens = find_quoted_tokens("“teh” should be ‘the’")
        assert [t.text for t in tokens] == ["teh", "the"]

    def test_doubled_trailing_quote_belongs_to_token(self):
        tokens = find_quoted_tokens("Add apostrophe to 'students' to make it 'students''.")
        assert [t.text for t in tokens] == ["students", "students'"]

    def test_no_quotes(self):
        assert find_quoted_tokens("Rephrase for clarity") == []


class TestIsMeaningfulPair:
    def test_none_is_not_meaningful(self):
        assert not is_meaningful_pair(None, "spelling")

    def test_case_only_pair_only_for_capitalization(self):
        pair = WordPair("smith", "Smith")
        assert is_meaningful_pair(pair, "capitalization")
        assert not is_meaningful_pair(pair, "spelling")

    def test_identical_pair_rejected(self):
        assert not is_meaningful_pair(WordPair("the", "the"), "capitalization")


def test_should_be_in_description(issue_factory):
    issue = issue_factory(
        category="capitalization",
        description="'smith' should be 'Smith'",
        suggested_fix="Capitalize 'smith'.",
    )
    assert extract_word_pair(issue) == ("smith", "Smith")


def test_should_be_capitalized_as(issue_factory):
    issue = issue_factory(
        category="capitalization",
        description="'monday' should be capitalized as 'Monday'",
        suggested_fix="Capitalize the day.",
    )
    assert extract_word_pair(issue) == ("monday", "Monday")


def test_should_be_in_fix(issue_factory):
    issue = issue_factory(
        category="spelling",
        description="Misspelled word",
        suggested_fix="'recieve' should be 'receive'.",
    )
    assert extract_word_pair(issue) == ("recieve", "receive")


def test_make_it_with_apostrophe_in_correction(issue_factory):
    issue = issue_factory(
        description="Missing apostrophe in possessive",
        suggested_fix="Add an apostrophe to 'todays' to make it 'today's'.",
    )
    assert extract_word_pair(issue) == ("todays", "today's")


def test_change_to_with_mixed_quotes(issue_factory):
    issue = issue_factory(
        description="""Change 'todays' to "today's\"""",
        suggested_fix="Add apostrophe.",
    )
    assert extract_word_pair(issue) == ("todays", "today's")


def test_generic_prefers_fix_tokens(issue_factory):
    issue = issue_factory(
        category="spelling",
        description="The word 'teh' is misspelled",
        suggested_fix="Replace 'teh' with 'the'.",
    )
    assert extract_word_pair(issue) == ("teh", "the")


def test_capitalize_single_lowercase_token(issue_factory):
    issue = issue_factory(
        category="capitalization",
        description="Proper noun 'london' is not capitalized",
        suggested_fix="Capitalize it.",
    )
    assert extract_word_pair(issue) == ("london", "London")


def test_single_token_outside_capitalization_gives_none(issue_factory):
    issue = issue_factory(
        category="spelling",
        description="Proper noun 'london' is not capitalized",
        suggested_fix="Capitalize it.",
    )
    assert extract_word_pair(issue) is None


def test_case_only_pair_rejected_for_spelling(issue_factory):
    issue = issue_factory(
        category="spelling",
        description="'smith' should be 'Smith'",
        suggested_fix="Fix 'smith'.",
    )
    assert extract_word_pair(issue) is None


def test_no_quoted_tokens_gives_none(issue_factory):
    issue = issue_factory(description="Sentence is unclear", suggested_fix="Rephrase for clarity.")
    assert extract_word_pair(issue) is None


def test_generic_fallback_with_unrelated_quotes_is_approximate(issue_factory):
    """
    Bekannte Näherung: bei mehreren unabhängig zitierten Beispielen nimmt der
    generische Fallback erstes und letztes Token. Der Test dokumentiert nur,
    DASS ein Paar aus den zitierten Tokens gebildet wird, nicht dass es "richtig" ist.
    """
    issue = issue_factory(
        category="spelling",
        description="Terms like 'foo' and 'bar' are used inconsistently with 'baz'",
        suggested_fix="Use 'qux' consistently.",
    )

    pair = extract_word_pair(issue)

    assert pair is not None
    quoted = {"foo", "bar", "baz", "qux"}
    assert pair.original in quoted and pair.corrected in quoted
    assert pair.original.lower() != pair.corrected.lower()

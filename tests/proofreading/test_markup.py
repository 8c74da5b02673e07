"""
Tests für die Fett-Markierung geänderter Stellen.
"""

from app.services.proofreading.markup import find_changed_span, mark_changes_in_bold


def test_identical_lines_are_returned_unchanged(issue_factory):
    assert mark_changes_in_bold("same", "same", [issue_factory()]) == "same"


def test_capitalization_marks_changed_token(issue_factory):
    issue = issue_factory(category="capitalization", description="'smith' should be 'Smith'")

    result = mark_changes_in_bold("smith went home.", "Smith went home.", [issue])

    assert result == "**Smith** went home."


def test_capitalization_with_token_mismatch_falls_back_to_whole_line(issue_factory):
    issue = issue_factory(category="capitalization")

    assert mark_changes_in_bold("a b", "a b c", [issue]) == "**a b c**"


def test_punctuation_appended_suffix(issue_factory):
    assert mark_changes_in_bold("he said yes", "he said yes.", [issue_factory()]) == "he said yes**.**"


def test_punctuation_interior_span(issue_factory):
    result = mark_changes_in_bold("we went and they stayed", "we went, and they stayed", [issue_factory()])

    assert result == "we went**,** and they stayed"


def test_other_categories_bold_whole_line(issue_factory):
    issue = issue_factory(category="spelling", description="'teh' should be 'the'")

    assert mark_changes_in_bold("teh end", "the end", [issue]) == "**the end**"


def test_whole_line_bold_excludes_edge_whitespace(issue_factory):
    issue = issue_factory(category="spelling", description="'teh' should be 'the'")

    assert mark_changes_in_bold("  teh end", "  the end", [issue]) == "**the end**"


def test_pure_removal_bolds_whole_line(issue_factory):
    assert mark_changes_in_bold("That is all.", "That is all", [issue_factory()]) == "**That is all**"


class TestFindChangedSpan:
    def test_insertion(self):
        assert find_changed_span("we went and", "we went, and") == (7, 8)

    def test_replacement(self):
        assert find_changed_span("a cat sat", "a dog sat") == (2, 5)

    def test_deletion_has_no_span(self):
        assert find_changed_span("abc.", "abc") is None

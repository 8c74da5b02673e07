"""
Identität von Issues und die Menge der vom Reviewer akzeptierten Fixes.

Die Identität eines Issues ist ausschließlich (line_number, category, description).
Zwei Issues mit gleichem Tripel sind dasselbe Issue, auch wenn sich confidence,
severity oder suggested_fix unterscheiden. Deduplizierung und Akzeptanz nutzen
dieselbe ID.
"""

from typing import Collection, Iterable, Iterator, List

from app.models.pydantic import SEVERITY_ORDER, Issue


def get_issue_id(issue: Issue) -> str:
    return f"{issue.line_number}:{issue.category}:{issue.description}"


def filter_accepted(issues: Iterable[Issue], accepted_ids: Collection[str]) -> List[Issue]:
    return [issue for issue in issues if get_issue_id(issue) in accepted_ids]


def sort_issues_for_display(issues: Iterable[Issue]) -> List[Issue]:
    """Zeile aufsteigend, dann blocking > review > info. Nur für Anzeige."""
    return sorted(issues, key=lambda i: (i.line_number, SEVERITY_ORDER.get(i.severity, 99)))


class AcceptedSet:
    """
    View-State: vom Reviewer akzeptierte Issue-IDs.

    Die Fix-Engine liest nur Snapshots (frozenset) davon und verändert sie nie.
    """

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: set[str] = set(ids)

    def accept(self, issue: Issue) -> None:
        self._ids.add(get_issue_id(issue))

    def reject(self, issue: Issue) -> None:
        self._ids.discard(get_issue_id(issue))

    def accept_all(self, issues: Iterable[Issue]) -> None:
        for issue in issues:
            self.accept(issue)

    def clear(self) -> None:
        self._ids.clear()

    def is_accepted(self, issue: Issue) -> bool:
        return get_issue_id(issue) in self._ids

    def snapshot(self) -> frozenset[str]:
        return frozenset(self._ids)

    def __contains__(self, issue_id: object) -> bool:
        return issue_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

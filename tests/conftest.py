import os

import pytest

from app.models.pydantic import Issue

os.environ.setdefault("TEST_MODE", "1")


@pytest.fixture(autouse=True)
def _offline_llm(monkeypatch):
    # keine echten OpenAI-Calls in Tests
    monkeypatch.setenv("TEST_MODE", "1")


def make_issue(**overrides) -> Issue:
    data = {
        "line_number": 1,
        "category": "punctuation",
        "severity": "review",
        "description": "Missing period at end of sentence",
        "suggested_fix": "Add period at end.",
        "confidence": 0.9,
    }
    data.update(overrides)
    return Issue(**data)


@pytest.fixture
def issue_factory():
    return make_issue

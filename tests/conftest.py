"""
tests/conftest.py — Shared fixtures.

Rate limiting is disabled before the API module is imported so that test
volume never trips the per-client limits.
"""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from compass.questions import QuestionBank, clear_question_bank_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_question_bank(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from the bundled bank with an empty cache."""
    monkeypatch.delenv("QUESTION_BANK_PATH", raising=False)
    clear_question_bank_cache()
    yield
    clear_question_bank_cache()


@pytest.fixture
def small_bank() -> QuestionBank:
    """Four questions covering both axes, reverse scoring and categories."""
    return QuestionBank.from_records([
        {"axis": "economic", "weight": 1, "reverse": False, "category": "falgsc"},
        {"axis": "economic", "weight": 2, "reverse": True, "category": "crypto_anarchist"},
        {"axis": "social", "weight": 1, "reverse": False, "category": "alt_right"},
        {"axis": "social", "weight": 1, "reverse": True},
    ])


@pytest.fixture
def left_libertarian_bank() -> QuestionBank:
    """Agreement pushes both axes negative; two FALGSC-category questions."""
    return QuestionBank.from_records([
        {"axis": "economic", "reverse": True, "category": "falgsc"},
        {"axis": "economic", "reverse": True, "category": "falgsc"},
        {"axis": "social", "reverse": True},
    ])

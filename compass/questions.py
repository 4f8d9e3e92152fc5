"""
compass.questions — Question bank loading and validation.

The question bank is a static, read-only asset: an ordered JSON array of
question records. A question's position in the array is its index, and that
index is the key used in answer mappings.

Design contract:
    - load_question_bank() is the ONLY function that reads the asset.
    - Banks are cached per resolved path. Cached banks are never mutated.
    - Validation collects every bad entry into a single QuestionBankError.
    - No assumption about bank length beyond the indices callers use.

Asset shape (either form is accepted):
    [ {"text": ..., "axis": "economic", "weight": 1.5, "reverse": false,
       "category": "falgsc"}, ... ]
    {"version": "...", "questions": [ ... ]}

Older banks spell ``axis`` as ``dimension``; both are accepted.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Iterator, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from compass.constants import AXIS_ECONOMIC, AXIS_SOCIAL, DEFAULT_WEIGHT

logger = logging.getLogger("compass.questions")

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

BUNDLED_BANK_PATH: Path = Path(__file__).resolve().parent / "data" / "questions.json"


def _configured_path() -> Path:
    """QUESTION_BANK_PATH env var, else the bundled sample bank."""
    raw = os.getenv("QUESTION_BANK_PATH", "").strip()
    return Path(raw) if raw else BUNDLED_BANK_PATH


class QuestionBankError(ValueError):
    """Raised when the question bank asset is structurally invalid."""


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Question(BaseModel):
    """One Likert statement. Immutable once loaded."""

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    axis: Literal["economic", "social"] = Field(
        ...,
        validation_alias=AliasChoices("axis", "dimension"),
    )
    weight: float = Field(default=DEFAULT_WEIGHT, gt=0)
    reverse: bool = False
    category: Optional[str] = None
    text: str = ""
    context: Optional[str] = None

    @field_validator("axis", mode="before")
    @classmethod
    def _normalize_axis(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("weight", mode="before")
    @classmethod
    def _default_weight(cls, v: Any) -> Any:
        # A missing or zero weight means "unweighted" in the source bank.
        if v is None or v == 0:
            return DEFAULT_WEIGHT
        return v

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_economic(self) -> bool:
        return self.axis == AXIS_ECONOMIC

    @property
    def is_social(self) -> bool:
        return self.axis == AXIS_SOCIAL


class QuestionBank:
    """Ordered, read-only sequence of questions indexed 0..N-1."""

    __slots__ = ("_questions", "source")

    def __init__(self, questions: tuple[Question, ...] | list[Question], source: str = "<memory>") -> None:
        self._questions: tuple[Question, ...] = tuple(questions)
        self.source = source

    def get(self, index: int) -> Question | None:
        """Question at ``index``, or None when the index has no entry."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self._questions):
            return self._questions[index]
        return None

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __getitem__(self, index: int) -> Question:
        return self._questions[index]

    def __repr__(self) -> str:
        return f"QuestionBank(source={self.source!r}, questions={len(self._questions)})"

    @classmethod
    def from_records(cls, records: Any, source: str = "<memory>") -> QuestionBank:
        """Validate raw records into a bank.

        Raises QuestionBankError listing every invalid entry by index.
        """
        if isinstance(records, dict):
            records = records.get("questions")
        if not isinstance(records, list):
            raise QuestionBankError(
                f"Question bank {source}: expected a JSON array of questions "
                f"or an object with a 'questions' array."
            )

        questions: list[Question] = []
        errors: list[str] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                errors.append(f"question {index}: expected an object, got {type(record).__name__}")
                continue
            try:
                questions.append(Question.model_validate(record))
            except ValidationError as exc:
                for err in exc.errors():
                    loc = ".".join(str(p) for p in err.get("loc", []))
                    errors.append(f"question {index}: {loc}: {err.get('msg', 'invalid')}")

        if errors:
            raise QuestionBankError(
                f"Question bank {source} has {len(errors)} invalid entr"
                f"{'y' if len(errors) == 1 else 'ies'}: " + "; ".join(errors)
            )

        return cls(questions, source=source)


# ---------------------------------------------------------------------------
# Loading — cached per resolved path
# ---------------------------------------------------------------------------

_bank_cache: dict[Path, QuestionBank] = {}
_cache_lock = threading.Lock()


def load_question_bank(path: Path | str | None = None) -> QuestionBank:
    """Load (once) and return the question bank.

    Resolution order: explicit ``path``, QUESTION_BANK_PATH, bundled bank.

    Raises:
        FileNotFoundError: the asset does not exist.
        QuestionBankError: the asset is not valid JSON or has invalid entries.
    """
    resolved = Path(path).resolve() if path is not None else _configured_path().resolve()

    with _cache_lock:
        cached = _bank_cache.get(resolved)
    if cached is not None:
        return cached

    if not resolved.is_file():
        raise FileNotFoundError(f"Question bank not found: {resolved}")

    try:
        with open(resolved, encoding="utf-8") as fh:
            raw = json.load(fh)
    except json.JSONDecodeError as exc:
        raise QuestionBankError(f"Question bank {resolved} is not valid JSON: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        raise QuestionBankError(f"Question bank {resolved} is not valid UTF-8: {exc.reason}") from exc

    bank = QuestionBank.from_records(raw, source=str(resolved))

    with _cache_lock:
        _bank_cache[resolved] = bank

    logger.info(json.dumps({
        "event": "question_bank_loaded",
        "source": resolved.name,
        "questions": len(bank),
    }))
    return bank


def clear_question_bank_cache() -> int:
    """Drop all cached banks. Used in testing only. Returns slots cleared."""
    with _cache_lock:
        count = len(_bank_cache)
        _bank_cache.clear()
    return count

"""
Pydantic schemas for search requests.

Raw tool arguments are validated into a SearchRequest before any search
code runs: defaults are filled in, numeric options are clamped to their
allowed ranges and unknown fields are rejected.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_LIMIT, MAX_LIMIT = 1, 20
MIN_BUDGET, MAX_BUDGET = 200, 5000
MAX_CONTEXT_CHUNKS = 10


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class SearchRequest(BaseModel):
    """Input schema for the search tool."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    query: str = Field(
        ...,
        description="Search query",
    )
    limit: int = Field(
        default=5,
        description=f"Max results ({MIN_LIMIT}-{MAX_LIMIT})",
    )
    source: Optional[str] = Field(
        default=None,
        description="Index to search: a document name, PDF path or index.json path",
    )
    before: int = Field(
        default=1,
        description="Chunks of context before each match",
    )
    after: int = Field(
        default=2,
        description="Chunks of context after each match",
    )
    budget: int = Field(
        default=1200,
        description=f"Preview character cap ({MIN_BUDGET}-{MAX_BUDGET})",
    )
    phrase_boost: float = Field(
        default=2.0,
        alias="phraseBoost",
        description="Score added when the whole query appears verbatim",
    )
    phrase_only: bool = Field(
        default=False,
        alias="phraseOnly",
        description="Only return chunks containing the whole query verbatim",
    )

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        return value.strip()

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        return _clamp(value, MIN_LIMIT, MAX_LIMIT)

    @field_validator("budget")
    @classmethod
    def _clamp_budget(cls, value: int) -> int:
        return _clamp(value, MIN_BUDGET, MAX_BUDGET)

    @field_validator("before", "after")
    @classmethod
    def _clamp_context(cls, value: int) -> int:
        return _clamp(value, 0, MAX_CONTEXT_CHUNKS)

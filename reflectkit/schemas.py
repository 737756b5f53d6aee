"""
Result schemas for reflectkit operations.

All result models inherit from StrictModel (extra='forbid', strict=True, frozen=True).
"""

from __future__ import annotations

from typing import Literal

import pydantic

__all__ = [
    'StrictModel',
    'WriteOutcome',
    'WriteResult',
]


class StrictModel(pydantic.BaseModel):
    """Base model with strict validation settings."""

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type validation
        frozen=True,  # Immutable after creation
    )


type WriteOutcome = Literal[
    'written',  # value stored
    'unchanged',  # current value is the same object; no write performed
    'skipped',  # instance or field was None
    'failed',  # write rejected; prior value intact
]


class WriteResult(StrictModel):
    """Outcome of set_value.

    set_value never raises; a failed write is reported here (and logged)
    instead of propagating.
    """

    field: str | None
    outcome: WriteOutcome
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in ('written', 'unchanged')

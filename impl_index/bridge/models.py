"""Core data models — no internal dependencies, only Pydantic + stdlib."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Contribution (fragment → bridge)
# ---------------------------------------------------------------------------

# Group key (crate name) -> ordered description items (opaque HTML).
Contribution = dict[str, list[str]]

Collector = Callable[[Contribution], Any]


class DepositOutcome(str, Enum):
    DELIVERED = "delivered"
    BUFFERED = "buffered"
    REPLACED = "replaced"  # buffered, and an unclaimed contribution was dropped


# ---------------------------------------------------------------------------
# Fragment file
# ---------------------------------------------------------------------------

class Fragment(BaseModel):
    """One generated implementors fragment, parsed."""
    trait_path: str
    source: str
    contribution: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def item_count(self) -> int:
        return sum(len(items) for items in self.contribution.values())


# ---------------------------------------------------------------------------
# Viewer index
# ---------------------------------------------------------------------------

class IndexEntry(BaseModel):
    group: str
    html: str

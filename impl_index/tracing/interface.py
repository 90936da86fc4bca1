"""Page trace — what the bridge did on one page, event by event."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, Field

from impl_index.bridge.models import DepositOutcome


class PageEventType(str, Enum):
    DEPOSIT = "deposit"
    REGISTER = "register"


class PageEvent(BaseModel):
    page_id: str
    event: PageEventType
    ts: float = Field(default_factory=time.time)
    outcome: DepositOutcome | None = None  # deposit only
    groups: list[str] = Field(default_factory=list)  # deposit only
    picked_up_pending: bool | None = None  # register only


class PageSummary(BaseModel):
    """Roll-up of a page's trace.

    ``dropped`` counts contributions that were parked and then replaced
    before any collector picked them up.
    """
    page_id: str
    deposits: int = 0
    delivered: int = 0
    dropped: int = 0
    registered: bool = False


def summarize(page_id: str, events: list[PageEvent]) -> PageSummary:
    summary = PageSummary(page_id=page_id)
    for ev in events:
        if ev.event is PageEventType.REGISTER:
            summary.registered = True
            if ev.picked_up_pending:
                summary.delivered += 1
            continue
        summary.deposits += 1
        if ev.outcome is DepositOutcome.DELIVERED:
            summary.delivered += 1
        elif ev.outcome is DepositOutcome.REPLACED:
            summary.dropped += 1
    return summary


class TraceCollector(ABC):
    """Records deposits and collector registrations per page."""

    @abstractmethod
    async def record(self, event: PageEvent) -> None: ...

    @abstractmethod
    async def flush(self, page_id: str) -> None: ...

    @abstractmethod
    async def events(self, page_id: str) -> list[PageEvent]: ...

    async def record_deposit(
        self, page_id: str, outcome: DepositOutcome, groups: list[str]
    ) -> None:
        await self.record(PageEvent(
            page_id=page_id,
            event=PageEventType.DEPOSIT,
            outcome=outcome,
            groups=groups,
        ))

    async def record_register(self, page_id: str, picked_up_pending: bool) -> None:
        await self.record(PageEvent(
            page_id=page_id,
            event=PageEventType.REGISTER,
            picked_up_pending=picked_up_pending,
        ))

    async def summary(self, page_id: str) -> PageSummary:
        return summarize(page_id, await self.events(page_id))

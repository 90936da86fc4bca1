"""Page store — ABC + in-memory implementation.

A page is one load of a trait-documentation page: its own bridge, plus the
viewer's index once the viewer has started.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from impl_index.bridge.registry import RegistryBridge
from impl_index.viewer.index import ImplementorIndex


@dataclass
class Page:
    page_id: str
    bridge: RegistryBridge = field(default_factory=RegistryBridge)
    index: ImplementorIndex | None = None
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def start_viewer(self, current_crate: str | None = None) -> bool:
        """Create the index and register it; ``True`` if a pending contribution was picked up."""
        if self.index is not None:
            raise RuntimeError(f"viewer already started for page '{self.page_id}'")
        self.index = ImplementorIndex(current_crate=current_crate)
        return self.index.attach(self.bridge)


class PageStore(ABC):
    """Async page persistence interface."""

    @abstractmethod
    async def get(self, page_id: str) -> Page | None: ...

    @abstractmethod
    async def save(self, page: Page) -> None: ...

    @abstractmethod
    async def delete(self, page_id: str) -> None: ...

    async def get_or_create(self, page_id: str) -> Page:
        page = await self.get(page_id)
        if page is None:
            page = Page(page_id=page_id)
            await self.save(page)
        return page


class InMemoryPageStore(PageStore):
    """Dict-backed store — suitable for single-process dev/test."""

    def __init__(self) -> None:
        self._store: dict[str, Page] = {}

    async def get(self, page_id: str) -> Page | None:
        return self._store.get(page_id)

    async def save(self, page: Page) -> None:
        page.updated_at = time.time()
        self._store[page.page_id] = page

    async def delete(self, page_id: str) -> None:
        self._store.pop(page_id, None)

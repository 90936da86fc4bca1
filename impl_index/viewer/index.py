"""ImplementorIndex — the viewer's collector for one trait page."""

from __future__ import annotations

import logging

from impl_index.bridge.models import Contribution, IndexEntry
from impl_index.bridge.registry import RegistryBridge

logger = logging.getLogger(__name__)


class ImplementorIndex:
    """Appends every delivered item to the page's implementors list.

    Items from ``current_crate`` are skipped because the page already lists
    that crate's impls.  Nothing is deduplicated across contributions.
    """

    def __init__(self, current_crate: str | None = None) -> None:
        self.current_crate = current_crate
        self._entries: list[IndexEntry] = []
        self.contribution_count = 0

    def __call__(self, contribution: Contribution) -> None:
        self.contribution_count += 1
        added = 0
        for group, items in contribution.items():
            if group == self.current_crate:
                continue
            for html in items:
                self._entries.append(IndexEntry(group=group, html=html))
                added += 1
        logger.info(
            "Indexed contribution #%d: %d entries (skipped crate=%s)",
            self.contribution_count, added, self.current_crate,
        )

    @property
    def entries(self) -> list[IndexEntry]:
        return list(self._entries)

    def groups(self) -> dict[str, list[str]]:
        """Group -> items, in first-seen order."""
        out: dict[str, list[str]] = {}
        for entry in self._entries:
            out.setdefault(entry.group, []).append(entry.html)
        return out

    def attach(self, bridge: RegistryBridge) -> bool:
        """Register with *bridge*; ``True`` if a pending contribution was picked up."""
        return bridge.register_collector(self)

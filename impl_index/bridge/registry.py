"""Registry bridge — delivers fragment contributions to the viewer's collector.

Fragments and the viewer load in any order. A fragment that runs before the
viewer has registered its collector leaves its contribution in a one-slot
pending buffer; the viewer drains that slot when it registers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from impl_index.bridge.models import Collector, Contribution, DepositOutcome

logger = logging.getLogger(__name__)


@dataclass
class BridgeContext:
    """The two slots shared by every fragment and the viewer of one page.

    Created empty.  ``collector`` is set by the viewer, once in normal use.
    ``pending`` holds the last unclaimed contribution and is cleared when a
    collector picks it up.
    """

    collector: Collector | None = None
    pending: Contribution | None = None


class RegistryBridge:
    """Two states: collector absent (deposits buffer) and present (deposits deliver)."""

    def __init__(self, context: BridgeContext | None = None) -> None:
        self._ctx = context if context is not None else BridgeContext()

    @property
    def context(self) -> BridgeContext:
        return self._ctx

    @property
    def has_collector(self) -> bool:
        return callable(self._ctx.collector)

    @property
    def has_pending(self) -> bool:
        return self._ctx.pending is not None

    # -- fragment side ------------------------------------------------------

    def deposit(self, contribution: Contribution) -> DepositOutcome:
        """Hand one contribution to the collector, or park it until one registers.

        Never raises on its own account.  A non-callable collector slot is
        treated as absent.  Parking overwrites whatever was already parked.
        """
        collector = self._ctx.collector
        if callable(collector):
            collector(contribution)
            logger.info("Delivered contribution to collector")
            return DepositOutcome.DELIVERED

        replaced = self._ctx.pending is not None
        self._ctx.pending = contribution
        if replaced:
            logger.warning("Pending contribution replaced before a collector registered")
            return DepositOutcome.REPLACED
        logger.debug("No collector yet; contribution buffered")
        return DepositOutcome.BUFFERED

    # -- viewer side --------------------------------------------------------

    def register_collector(self, callback: Collector) -> bool:
        """Install *callback* and deliver any pending contribution to it.

        Returns ``True`` when a pending contribution was picked up.
        """
        if not callable(callback):
            raise TypeError(f"collector must be callable, got {type(callback).__name__}")
        if self._ctx.collector is not None:
            logger.warning("Collector replaced; previous collector will receive nothing more")

        self._ctx.collector = callback
        # Clear before calling so a re-entrant deposit cannot see it again.
        pending, self._ctx.pending = self._ctx.pending, None
        if pending is None:
            logger.info("Collector registered (nothing pending)")
            return False

        callback(pending)
        logger.info("Collector registered; delivered pending contribution")
        return True


# ---------------------------------------------------------------------------
# Process-wide default bridge
# ---------------------------------------------------------------------------

_default_bridge: RegistryBridge | None = None


def get_bridge() -> RegistryBridge:
    """Return the process-wide bridge, creating it empty on first use."""
    global _default_bridge
    if _default_bridge is None:
        _default_bridge = RegistryBridge()
    return _default_bridge


def reset_bridge() -> None:
    """Drop the process-wide bridge (new page load)."""
    global _default_bridge
    _default_bridge = None


def deposit(contribution: Contribution) -> DepositOutcome:
    return get_bridge().deposit(contribution)


def register_collector(callback: Collector) -> bool:
    return get_bridge().register_collector(callback)

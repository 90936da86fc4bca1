"""impl_index — order-independent delivery of trait-implementor fragments to a viewer.

Usage::

    from impl_index import RegistryBridge, ImplementorIndex

    bridge = RegistryBridge()
    bridge.deposit({"rand": ["impl Default for ReseedWithDefault"]})
    index = ImplementorIndex()
    index.attach(bridge)      # picks up the buffered contribution
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()  # reads .env into os.environ (no-op if file missing)

from impl_index.bridge.models import Contribution, DepositOutcome, Fragment, IndexEntry
from impl_index.bridge.registry import (
    BridgeContext,
    RegistryBridge,
    deposit,
    get_bridge,
    register_collector,
    reset_bridge,
)
from impl_index.fragments.codec import FragmentParseError, parse_fragment, render_fragment
from impl_index.fragments.loader import iter_fragments, load_fragment
from impl_index.viewer.index import ImplementorIndex
from impl_index.viewer.page import InMemoryPageStore

__all__ = [
    "BridgeContext",
    "Contribution",
    "DepositOutcome",
    "Fragment",
    "FragmentParseError",
    "ImplementorIndex",
    "InMemoryPageStore",
    "IndexEntry",
    "RegistryBridge",
    "Settings",
    "deposit",
    "get_bridge",
    "iter_fragments",
    "load_fragment",
    "load_settings",
    "parse_fragment",
    "register_collector",
    "render_fragment",
    "reset_bridge",
]


@dataclass
class Settings:
    fragment_root: str = "./implementors"
    current_crate: str | None = None
    trace_dir: str = "./traces"


def load_settings(
    *,
    fragment_root: str | None = None,
    current_crate: str | None = None,
    trace_dir: str | None = None,
) -> Settings:
    """Resolve settings from keyword overrides, then the environment.

    Environment variables (all optional):
      IMPL_INDEX_FRAGMENT_ROOT  — default ``./implementors``
      IMPL_INDEX_CURRENT_CRATE  — crate the viewer skips
      IMPL_INDEX_TRACE_DIR      — default ``./traces``
    """
    return Settings(
        fragment_root=fragment_root or os.environ.get("IMPL_INDEX_FRAGMENT_ROOT", "./implementors"),
        current_crate=current_crate or os.environ.get("IMPL_INDEX_CURRENT_CRATE") or None,
        trace_dir=trace_dir or os.environ.get("IMPL_INDEX_TRACE_DIR", "./traces"),
    )

from impl_index.bridge.models import (
    Collector,
    Contribution,
    DepositOutcome,
    Fragment,
    IndexEntry,
)
from impl_index.bridge.registry import (
    BridgeContext,
    RegistryBridge,
    deposit,
    get_bridge,
    register_collector,
    reset_bridge,
)

__all__ = [
    "BridgeContext",
    "Collector",
    "Contribution",
    "DepositOutcome",
    "Fragment",
    "IndexEntry",
    "RegistryBridge",
    "deposit",
    "get_bridge",
    "register_collector",
    "reset_bridge",
]

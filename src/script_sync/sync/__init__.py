from .manifest_gate import ManifestGate, GateDecision
from .sync_cycle import SyncCycle
from .watch_service import WatchController
from .utils import ForceFlag, format_push_summary

__all__ = [
    "ManifestGate",
    "GateDecision",
    "SyncCycle",
    "WatchController",
    "ForceFlag",
    "format_push_summary",
]

# MCP Hub Sync Module
# Core synchronization engine and components

from mcphub.sync.connect import ConnectResult, connect_targets
from mcphub.sync.engine import SyncEngine, SyncRun
from mcphub.sync.hub import InitResult, init_hub
from mcphub.sync.item import RegistryScan, ServerItem, scan_registry
from mcphub.sync.links import ROOT_LINK_NAME, LinkAction, LinkReconciler
from mcphub.sync.profiles import AttachedServer, Profile, ProfileStore
from mcphub.sync.report import SyncReport, SyncSummary, build_report, summarize, write_report
from mcphub.sync.results import ItemOutcome, ItemStatus, TargetSyncResult
from mcphub.sync.status import HubStatus, collect_status
from mcphub.sync.targets import DiscoveredTarget, Target, TargetDiscovery, TargetState, discover_targets

__all__ = [
    # Registry
    "ServerItem",
    "RegistryScan",
    "scan_registry",
    # Targets
    "Target",
    "TargetState",
    "DiscoveredTarget",
    "TargetDiscovery",
    "discover_targets",
    # Links
    "ROOT_LINK_NAME",
    "LinkAction",
    "LinkReconciler",
    # Profiles
    "Profile",
    "AttachedServer",
    "ProfileStore",
    # Results and reports
    "ItemStatus",
    "ItemOutcome",
    "TargetSyncResult",
    "SyncSummary",
    "SyncReport",
    "summarize",
    "build_report",
    "write_report",
    # Engine
    "SyncEngine",
    "SyncRun",
    # Connect, status, init
    "ConnectResult",
    "connect_targets",
    "HubStatus",
    "collect_status",
    "InitResult",
    "init_hub",
]

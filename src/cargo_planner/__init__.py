"""
cargo_planner: heuristic 3D load planning for a single container.

Typical use::

    from cargo_planner import CUSTOM_CONTAINER, DEMO_MANIFEST, optimize_load

    items = optimize_load(DEMO_MANIFEST, CUSTOM_CONTAINER)
"""

from cargo_planner.algorithms.multi_start import PackResult, auto_pack, pack
from cargo_planner.algorithms.staging import arrange_staging
from cargo_planner.config import PlannerConfig, SortStrategy, TrialSpec, load_config
from cargo_planner.core.models import (
    CUSTOM_CONTAINER,
    CargoItem,
    ContainerConfig,
    Dimensions,
    ManifestRow,
)
from cargo_planner.errors import CargoPlannerError, ConfigError, ManifestError
from cargo_planner.interactive.collision import check_collision, refresh_validity, snap_position
from cargo_planner.interactive.drag import resolve_drag
from cargo_planner.monitoring.metrics import LoadStatistics, compute_load_statistics
from cargo_planner.runner.manifest import (
    DEMO_MANIFEST,
    expand_rows_to_items,
    load_manifest_csv,
    optimize_load,
)

__version__ = "0.1.0"

__all__ = [
    "PackResult",
    "auto_pack",
    "pack",
    "arrange_staging",
    "PlannerConfig",
    "SortStrategy",
    "TrialSpec",
    "load_config",
    "CUSTOM_CONTAINER",
    "CargoItem",
    "ContainerConfig",
    "Dimensions",
    "ManifestRow",
    "CargoPlannerError",
    "ConfigError",
    "ManifestError",
    "check_collision",
    "refresh_validity",
    "snap_position",
    "resolve_drag",
    "LoadStatistics",
    "compute_load_statistics",
    "DEMO_MANIFEST",
    "expand_rows_to_items",
    "load_manifest_csv",
    "optimize_load",
]

"""Load statistics, overlap audit and export for planned loads.

Provides a dataclass summarising a load plan (utilisation, weight, centre
of gravity) and utilities for exporting it to JSON or a text summary.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from cargo_planner.core.geometry import contains
from cargo_planner.core.models import CargoItem, ContainerConfig
from cargo_planner.interactive.collision import COLLISION_EPSILON


def is_loaded(item: CargoItem, container: ContainerConfig) -> bool:
    """True if *item* is valid and lies entirely inside the container."""
    return item.valid and contains(container.box, item.box)


@dataclass
class LoadStatistics:
    """Summary of one load plan.

    Attributes:
        container_name: Name of the container the plan is for.
        utilization_pct: Loaded volume as a percentage of container volume.
        packed_volume: Loaded volume in cubic length units.
        volume_m3: Loaded volume in cubic metres (inputs in mm).
        total_weight: Loaded weight in kg.
        weight_capacity_pct: Loaded weight as a percentage of the rated
            payload; 0 when the container has no rating.
        loaded_count: Items inside the container.
        staged_count: Items outside it (staged or unplaced).
        center_of_gravity: Weight-weighted centre of the loaded items,
            rounded, measured from the container corner.
        computed_at: Timestamp of the computation.
    """

    container_name: str
    utilization_pct: float = 0.0
    packed_volume: float = 0.0
    volume_m3: float = 0.0
    total_weight: float = 0.0
    weight_capacity_pct: float = 0.0
    loaded_count: int = 0
    staged_count: int = 0
    center_of_gravity: tuple[int, int, int] = (0, 0, 0)
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def overweight(self) -> bool:
        return self.weight_capacity_pct > 100.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamp.

        Example:
            >>> stats = LoadStatistics("Custom", utilization_pct=50.0)
            >>> stats.to_dict()["utilization_pct"]
            50.0
        """
        d = asdict(self)
        d["center_of_gravity"] = list(self.center_of_gravity)
        d["computed_at"] = self.computed_at.isoformat()
        return d


def compute_load_statistics(items: Sequence[CargoItem], container: ContainerConfig) -> LoadStatistics:
    """Summarise the loaded part of *items*.

    Args:
        items: Every item of the plan, loaded or not.
        container: The container the plan is for.

    Returns:
        LoadStatistics for the items that are valid and inside the container.
    """
    loaded = [i for i in items if is_loaded(i, container)]
    stats = LoadStatistics(
        container_name=container.name,
        loaded_count=len(loaded),
        staged_count=len(items) - len(loaded),
    )
    if not loaded:
        return stats

    corners = np.array([i.position for i in loaded], dtype=np.float64)
    # (length, height, width) to line up with the (x, y, z) corner columns
    extents = np.array(
        [(i.dimensions.length, i.dimensions.height, i.dimensions.width) for i in loaded],
        dtype=np.float64,
    )
    weights = np.array([i.weight for i in loaded], dtype=np.float64)

    packed_volume = float(np.prod(extents, axis=1).sum())
    total_weight = float(weights.sum())

    stats.packed_volume = packed_volume
    stats.volume_m3 = packed_volume / 1e9
    stats.utilization_pct = 100.0 * packed_volume / container.volume if container.volume else 0.0
    stats.total_weight = total_weight
    if container.max_weight > 0:
        stats.weight_capacity_pct = 100.0 * total_weight / container.max_weight

    if total_weight > 0:
        centers = corners + extents / 2.0
        cog = (centers * weights[:, None]).sum(axis=0) / total_weight
        stats.center_of_gravity = (
            int(np.floor(cog[0] + 0.5)),
            int(np.floor(cog[1] + 0.5)),
            int(np.floor(cog[2] + 0.5)),
        )
    return stats


def find_overlapping_pairs(
    items: Sequence[CargoItem],
    epsilon: float = COLLISION_EPSILON,
) -> list[tuple[str, str]]:
    """Pairs of valid items whose boxes overlap by more than *epsilon*.

    An empty result means the plan satisfies the non-overlap invariant.
    """
    valid = [i for i in items if i.valid]
    if len(valid) < 2:
        return []

    lo = np.array([i.position for i in valid], dtype=np.float64)
    size = np.array(
        [(i.dimensions.length, i.dimensions.height, i.dimensions.width) for i in valid],
        dtype=np.float64,
    )
    hi = lo + size

    # overlap[a, b, axis]: a's interval cuts b's interval shrunk by epsilon
    overlap = (lo[:, None, :] < hi[None, :, :] - epsilon) & (hi[:, None, :] > lo[None, :, :] + epsilon)
    clash = overlap.all(axis=2)
    clash = clash & clash.T
    rows, cols = np.nonzero(np.triu(clash, k=1))
    return [(valid[a].id, valid[b].id) for a, b in zip(rows.tolist(), cols.tolist())]


def export_to_json(stats: LoadStatistics, output_path: Path | str,
                   items: Sequence[CargoItem] | None = None) -> None:
    """Export load statistics (and optionally every item) to a JSON file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {"statistics": stats.to_dict()}
    if items is not None:
        data["items"] = [i.to_dict() for i in items]

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def print_summary(stats: LoadStatistics) -> str:
    """Generate human-readable summary of load statistics.

    Example:
        >>> summary = print_summary(LoadStatistics("Custom", loaded_count=3))
        >>> "Loaded Items: 3" in summary
        True
    """
    cx, cy, cz = stats.center_of_gravity
    lines = [
        "=" * 60,
        f"Container: {stats.container_name}",
        "=" * 60,
        f"Loaded Items: {stats.loaded_count}",
        f"Staged Items: {stats.staged_count}",
        "",
        f"Volume Utilization: {stats.utilization_pct:.2f}% ({stats.volume_m3:.2f} m3)",
        f"Loaded Weight: {stats.total_weight:.2f} kg",
        f"Weight vs Capacity: {stats.weight_capacity_pct:.1f}%"
        + ("  (OVER CAPACITY)" if stats.overweight else ""),
        f"Center of Gravity (x, y, z): {cx}, {cy}, {cz} mm",
        "=" * 60,
    ]
    return "\n".join(lines)

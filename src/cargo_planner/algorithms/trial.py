"""
One greedy packing trial.

A trial orders the items with one sort strategy, then places them one by
one: each item goes to the best-scoring free space (see
:mod:`cargo_planner.algorithms.scorer`) and the free-space list is split
and pruned around it. Items that fit nowhere are flagged invalid and
parked at a sentinel position below the floor.

Each trial works on private copies of the items and its own
:class:`FreeSpaceManager`, so trials can run in any order or in parallel.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from cargo_planner.algorithms.free_space import FreeSpaceManager
from cargo_planner.algorithms.ordering import order_items
from cargo_planner.algorithms.scorer import find_best_placement
from cargo_planner.config import PackingConfig, TrialSpec
from cargo_planner.core.models import CargoItem, ContainerConfig

logger = logging.getLogger(__name__)


@dataclass
class TrialResult:
    """
    Outcome of one trial.

    Attributes:
        spec:          Strategy and seed that produced it.
        items:         Every input item in attempt order, placed or flagged.
        packed_volume: Total volume of placed items.
        packed_count:  Number of placed items.
        free_spaces:   Free spaces left when the trial finished.
    """
    spec: TrialSpec
    items: list[CargoItem] = field(default_factory=list)
    packed_volume: float = 0.0
    packed_count: int = 0
    free_spaces: int = 0

    @property
    def placed(self) -> list[CargoItem]:
        return [i for i in self.items if i.valid]

    @property
    def unplaced(self) -> list[CargoItem]:
        return [i for i in self.items if not i.valid]

    def utilization(self, container: ContainerConfig) -> float:
        """Packed volume as a fraction of the container volume."""
        if container.volume == 0:
            return 0.0
        return self.packed_volume / container.volume


def run_trial(
    items: Sequence[CargoItem],
    container: ContainerConfig,
    spec: TrialSpec,
    config: Optional[PackingConfig] = None,
) -> TrialResult:
    """
    Run one greedy pass over *items*.

    Args:
        items:     Items to pack; never modified.
        container: Load space.
        spec:      Sort strategy and seed.
        config:    Packing parameters.

    Returns:
        TrialResult holding new item objects with positions, footprints
        and validity set.
    """
    cfg = config or PackingConfig()
    ordered = order_items(items, spec.strategy, spec.seed, cfg)
    manager = FreeSpaceManager(container, cfg.min_space_dimension)
    result = TrialResult(spec=spec)

    for item in ordered:
        candidate = find_best_placement(item.dimensions, manager.spaces, cfg)

        if candidate is None:
            result.items.append(item.copy(position=cfg.unplaced_position, valid=False))
            continue

        space = candidate.space
        placed = item.copy(
            dimensions=candidate.dimensions,
            position=(space.x, space.y, space.z),
            valid=True,
        )
        result.items.append(placed)
        result.packed_volume += placed.volume
        result.packed_count += 1

        manager.place(candidate.placed_box)

    result.free_spaces = len(manager)
    logger.debug(
        "Trial %s: placed %d/%d, volume %.0f, %d free spaces left",
        spec.label, result.packed_count, len(ordered), result.packed_volume,
        result.free_spaces,
    )
    return result

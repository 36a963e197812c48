"""
Multi-start greedy packing.

A single greedy ordering easily paints itself into a corner: a long bar
placed early can block the slot a large block needed later. The
orchestrator therefore runs a fixed battery of trials, each with a
different ordering (three deterministic sorts plus volume sorts with
seeded perturbation), and keeps the trial that packed the most volume.

Selection is by strictly greater packed volume with ties going to the
earlier battery entry, so the winner is the same whether the trials run
sequentially or in a process pool.

Items the winning trial could not place are moved to the staging shelf,
so the result always has as many items as the input.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional

from cargo_planner.algorithms.staging import arrange_staging
from cargo_planner.algorithms.trial import TrialResult, run_trial
from cargo_planner.config import PackingConfig, PlannerConfig
from cargo_planner.core.models import CargoItem, ContainerConfig

logger = logging.getLogger(__name__)


@dataclass
class PackResult:
    """
    Full outcome of a multi-start run.

    Attributes:
        items:  Placed items of the winning trial followed by the staged
                leftovers; same length as the input.
        best:   The winning trial, or ``None`` for an empty battery.
        trials: Every trial in battery order.
    """
    items: list[CargoItem]
    best: Optional[TrialResult]
    trials: list[TrialResult]

    @property
    def staged_count(self) -> int:
        return len(self.best.unplaced) if self.best else 0


def run_battery(
    items: Sequence[CargoItem],
    container: ContainerConfig,
    config: Optional[PackingConfig] = None,
    max_workers: Optional[int] = None,
) -> list[TrialResult]:
    """
    Run every trial of the configured battery on independent copies of *items*.

    Args:
        items:       Items to pack (not modified).
        container:   Load space.
        config:      Packing parameters, including the battery itself.
        max_workers: Run trials in a process pool of this size when > 1.

    Returns:
        Trial results in battery order, regardless of completion order.
    """
    cfg = config or PackingConfig()
    battery = cfg.battery
    items = list(items)

    if not max_workers or max_workers <= 1 or len(battery) <= 1:
        return [run_trial(items, container, spec, cfg) for spec in battery]

    results: list[Optional[TrialResult]] = [None] * len(battery)
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(run_trial, items, container, spec, cfg): index
            for index, spec in enumerate(battery)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    return [r for r in results if r is not None]


def select_best_trial(results: Sequence[TrialResult]) -> Optional[TrialResult]:
    """Trial with the strictly greatest packed volume; the earliest wins ties."""
    best: Optional[TrialResult] = None
    for result in results:
        if best is None or result.packed_volume > best.packed_volume:
            best = result
    return best


def pack(
    items: Sequence[CargoItem],
    container: ContainerConfig,
    config: Optional[PlannerConfig] = None,
    max_workers: Optional[int] = None,
) -> PackResult:
    """Run the battery, pick the winner and stage what it could not place."""
    cfg = config or PlannerConfig()
    trials = run_battery(items, container, cfg.packing, max_workers)

    for trial in trials:
        logger.debug(
            "%-20s packed %d items, %.1f%% of container volume",
            trial.spec.label, trial.packed_count, 100.0 * trial.utilization(container),
        )

    best = select_best_trial(trials)
    if best is None:
        return PackResult(items=list(items), best=None, trials=trials)

    placed = best.placed
    staged = arrange_staging(best.unplaced, container, cfg.staging)
    logger.info(
        "Best trial %s: %d placed, %d staged, utilization %.1f%%",
        best.spec.label, len(placed), len(staged), 100.0 * best.utilization(container),
    )
    return PackResult(items=placed + staged, best=best, trials=trials)


def auto_pack(
    items: Sequence[CargoItem],
    container: ContainerConfig,
    config: Optional[PlannerConfig] = None,
    max_workers: Optional[int] = None,
) -> list[CargoItem]:
    """
    Plan the load for *items*.

    Returns:
        The winning trial's placed items followed by the unplaced ones laid
        out on the staging shelf; exactly ``len(items)`` entries.
    """
    return pack(items, container, config, max_workers).items

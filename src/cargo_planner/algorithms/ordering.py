"""Item orderings applied before a packing trial."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from functools import cmp_to_key
from typing import Optional

from cargo_planner.config import PackingConfig, SortStrategy
from cargo_planner.core.models import CargoItem

# Pairwise key difference: positive means b should come before a
PairScore = Callable[[CargoItem, CargoItem, int, PackingConfig], float]


def _volume_score(a: CargoItem, b: CargoItem, seed: int, cfg: PackingConfig) -> float:
    return b.volume - a.volume


def _footprint_score(a: CargoItem, b: CargoItem, seed: int, cfg: PackingConfig) -> float:
    area_a, area_b = a.dimensions.footprint, b.dimensions.footprint
    if area_a != area_b:
        return area_b - area_a
    return b.volume - a.volume


def _max_dim_score(a: CargoItem, b: CargoItem, seed: int, cfg: PackingConfig) -> float:
    max_a, max_b = a.dimensions.max_dim, b.dimensions.max_dim
    if max_a != max_b:
        return max_b - max_a
    return b.volume - a.volume


def perturbation(item_id: str, seed: int, amplitude: float = 0.2) -> float:
    """
    Reproducible noise factor for RANDOM_WEIGHTED.

    Depends only on the id's length and the seed, so ids of equal length
    receive identical noise.
    """
    return math.sin(len(item_id) + seed) * amplitude


def _random_weighted_score(a: CargoItem, b: CargoItem, seed: int, cfg: PackingConfig) -> float:
    noise_a = perturbation(a.id, seed, cfg.noise_amplitude)
    noise_b = perturbation(b.id, seed, cfg.noise_amplitude)
    return b.volume * (1 + noise_b) - a.volume * (1 + noise_a)


ORDERING_STRATEGIES: dict[SortStrategy, PairScore] = {
    SortStrategy.VOLUME: _volume_score,
    SortStrategy.FOOTPRINT: _footprint_score,
    SortStrategy.MAX_DIM: _max_dim_score,
    SortStrategy.RANDOM_WEIGHTED: _random_weighted_score,
}


def get_ordering_strategy(name: str | SortStrategy) -> SortStrategy:
    """
    Resolve a strategy by name.

    Raises:
        ValueError: If strategy name is not recognized
    """
    try:
        return SortStrategy(name)
    except ValueError:
        raise ValueError(
            f"Unknown ordering strategy: {name}. "
            f"Available: {[s.value for s in ORDERING_STRATEGIES]}"
        ) from None


def order_items(
    items: Sequence[CargoItem],
    strategy: str | SortStrategy,
    seed: int = 0,
    config: Optional[PackingConfig] = None,
) -> list[CargoItem]:
    """
    Return a new list of *items* in the order a trial should attempt them.

    Larger keys come first. When two items score within the tie threshold
    of each other the taller one comes first, keeping equal-height items
    together so they form even layers. The sort is stable.

    Args:
        items:    Items to order (not modified).
        strategy: Strategy or its name.
        seed:     Perturbation seed for RANDOM_WEIGHTED.
        config:   Tie threshold and noise amplitude.
    """
    cfg = config or PackingConfig()
    pair_score = ORDERING_STRATEGIES[get_ordering_strategy(strategy)]

    def compare(a: CargoItem, b: CargoItem) -> float:
        score = pair_score(a, b, seed, cfg)
        if abs(score) < cfg.tie_threshold:
            return b.dimensions.height - a.dimensions.height
        return score

    return sorted(items, key=cmp_to_key(compare))

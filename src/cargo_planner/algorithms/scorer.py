"""
Placement scoring: pick the free space and orientation for one item.

Scoring:
    score = y * 1_000_000 + z * 1_000 + x      (lower is better)

    Height dominates so low layers fill first, then depth into the
    container, then left-to-right position. The item always goes to the
    space's origin, so the score depends only on the space.

Orientations:
    Unrotated (item length along x, width along z) is tried before the
    footprint rotated 90° about the vertical axis. Square footprints are
    tried once. Height never rotates.

Ties:
    Only a strictly lower score replaces the incumbent, so the first
    feasible candidate in free-space order wins an exact tie, and the
    unrotated orientation wins over the rotated one in the same space.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from cargo_planner.config import PackingConfig
from cargo_planner.core.geometry import Box
from cargo_planner.core.models import Dimensions


@dataclass(frozen=True)
class PlacementCandidate:
    """
    Winning (space, orientation) pair for one item.

    Attributes:
        space_index: Index of the chosen space in the scanned list.
        space:       The chosen free space; the item goes to its origin.
        rotated:     True if the footprint is turned 90°.
        dimensions:  Item extents in the chosen orientation.
        score:       Heuristic score of the choice.
    """
    space_index: int
    space: Box
    rotated: bool
    dimensions: Dimensions
    score: float

    @property
    def placed_box(self) -> Box:
        """Region the item occupies once placed."""
        d = self.dimensions
        return Box(self.space.x, self.space.y, self.space.z, d.length, d.height, d.width)


def fits(dims: Dimensions, space: Box) -> bool:
    """True if *dims* (as oriented) fit inside *space*."""
    return dims.length <= space.l and dims.height <= space.h and dims.width <= space.w


def score_space(space: Box, weights: tuple[float, float, float] = (1_000_000.0, 1_000.0, 1.0)) -> float:
    wy, wz, wx = weights
    return space.y * wy + space.z * wz + space.x * wx


def find_best_placement(
    dims: Dimensions,
    spaces: Sequence[Box],
    config: Optional[PackingConfig] = None,
) -> Optional[PlacementCandidate]:
    """
    Find the lowest-scoring feasible (space, orientation) for an item.

    Args:
        dims:   Item extents in their current orientation.
        spaces: Free spaces, in the order ties should be resolved.
        config: Score weights; defaults to :class:`PackingConfig`.

    Returns:
        The winning candidate, or ``None`` when the item fits nowhere.
    """
    weights = (config or PackingConfig()).score_weights

    orientations = [(False, dims)]
    if dims.length != dims.width:
        orientations.append((True, dims.rotated()))

    best: Optional[PlacementCandidate] = None
    for index, space in enumerate(spaces):
        score = score_space(space, weights)
        if best is not None and score >= best.score:
            continue
        for rotated, oriented in orientations:
            if fits(oriented, space):
                best = PlacementCandidate(index, space, rotated, oriented, score)
                break
    return best

"""
Free-space management for one packing trial.

Algorithm overview:
    The unoccupied part of the container is approximated by a list of
    axis-aligned free spaces. A trial starts with one space spanning the
    whole container. When an item is placed, every space it intersects is
    replaced by the slices of that space lying beside the item:

        right   x beyond the item's far x face
        left    x before the item's near x face
        above   y over the item's top   (this is what enables stacking)
        front   z beyond the item's far z face
        behind  z before the item's near z face

    No slice is cut below the item: loading always grows upward from the
    floor, so the region under a freshly placed item is never free.

    The slices overlap one another, so the list is an approximate cover of
    the remaining volume rather than an exact partition. After every split
    the list is pruned: slivers thinner than a minimum dimension are
    dropped and so is every space enclosed by another one. The pruned list
    is sorted bottom-first (y, then z, then x), which is also the order the
    scorer walks it in.
"""

from __future__ import annotations

from collections.abc import Iterable

from cargo_planner.core.geometry import Box, contains, intersects
from cargo_planner.core.models import ContainerConfig

# Spaces thinner than this on any axis are not worth tracking
MIN_SPACE_DIMENSION: float = 50.0


def split_spaces(spaces: Iterable[Box], placed: Box) -> list[Box]:
    """
    Cut *placed* out of every space it intersects.

    Spaces not touched by *placed* are passed through unchanged; each
    intersected space yields up to five fragments, each emitted only when
    it has positive extent.
    """
    result: list[Box] = []
    for fs in spaces:
        if not intersects(fs, placed):
            result.append(fs)
            continue

        # Right of the item
        if placed.x_max < fs.x_max:
            start = max(fs.x, placed.x_max)
            result.append(Box(start, fs.y, fs.z, fs.x_max - start, fs.h, fs.w))
        # Left of the item
        if placed.x > fs.x:
            result.append(Box(fs.x, fs.y, fs.z, placed.x - fs.x, fs.h, fs.w))
        # Above the item
        if placed.y_max < fs.y_max:
            start = max(fs.y, placed.y_max)
            result.append(Box(fs.x, start, fs.z, fs.l, fs.y_max - start, fs.w))
        # In front of the item (towards increasing z)
        if placed.z_max < fs.z_max:
            start = max(fs.z, placed.z_max)
            result.append(Box(fs.x, fs.y, start, fs.l, fs.h, fs.z_max - start))
        # Behind the item
        if placed.z > fs.z:
            result.append(Box(fs.x, fs.y, fs.z, fs.l, fs.h, placed.z - fs.z))

    return result


def cleanup_spaces(
    spaces: Iterable[Box],
    min_dimension: float = MIN_SPACE_DIMENSION,
) -> list[Box]:
    """
    Drop slivers and redundant spaces; return the survivors bottom-first.

    A space survives when all three extents are at least *min_dimension*
    and no other survivor encloses it. Of two identical spaces only the
    first is kept. Quadratic in the number of spaces.
    """
    ordered = sorted(spaces, key=lambda s: (s.y, s.z, s.x))
    sized = [
        s for s in ordered
        if s.l >= min_dimension and s.h >= min_dimension and s.w >= min_dimension
    ]

    result: list[Box] = []
    for i, candidate in enumerate(sized):
        redundant = False
        for j, other in enumerate(sized):
            if i == j or not contains(other, candidate):
                continue
            # Mutual containment means duplicates; the earlier one stays
            if candidate == other and j > i:
                continue
            redundant = True
            break
        if not redundant:
            result.append(candidate)
    return result


class FreeSpaceManager:
    """
    Owns the free-space list of a single trial.

    Never share an instance between trials; build a new one per trial
    (or use :meth:`copy` for what-if exploration).

    Attributes:
        spaces:        Current free spaces, bottom-first.
        min_dimension: Sliver threshold used by :func:`cleanup_spaces`.
    """

    __slots__ = ("spaces", "min_dimension")

    def __init__(
        self,
        container: ContainerConfig,
        min_dimension: float = MIN_SPACE_DIMENSION,
    ) -> None:
        self.spaces: list[Box] = [container.box]
        self.min_dimension = min_dimension

    def place(self, placed: Box) -> None:
        """Remove *placed* from the free volume and prune the result."""
        self.spaces = cleanup_spaces(split_spaces(self.spaces, placed), self.min_dimension)

    def copy(self) -> "FreeSpaceManager":
        clone = FreeSpaceManager.__new__(FreeSpaceManager)
        clone.spaces = list(self.spaces)  # Box is frozen
        clone.min_dimension = self.min_dimension
        return clone

    @property
    def free_volume(self) -> float:
        """Sum of space volumes; overlapping spaces are counted more than once."""
        return sum(s.volume for s in self.spaces)

    def __len__(self) -> int:
        return len(self.spaces)

    def __repr__(self) -> str:
        return f"FreeSpaceManager(spaces={len(self.spaces)})"

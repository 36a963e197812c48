"""
Axis-aligned box primitives.

Axes follow the container frame: x runs along the container length,
y is vertical (height) and z runs along the width. A box is stored as its
minimum corner plus extents:

    x, y, z   minimum corner
    l, h, w   extents along x, y, z

All tests use half-open intervals, so boxes that merely share a face do
not intersect.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Box:
    """
    An axis-aligned box; used both for occupied regions and free spaces.

    Frozen so that a free-space list can be copied between trials without
    any risk of one trial editing another's regions.
    """
    x: float
    y: float
    z: float
    l: float  # noqa: E741
    h: float
    w: float

    @property
    def x_max(self) -> float:
        return self.x + self.l

    @property
    def y_max(self) -> float:
        return self.y + self.h

    @property
    def z_max(self) -> float:
        return self.z + self.w

    @property
    def volume(self) -> float:
        return self.l * self.h * self.w

    def __repr__(self) -> str:
        return (
            f"Box(origin=({self.x:.0f},{self.y:.0f},{self.z:.0f}), "
            f"size=({self.l:.0f},{self.h:.0f},{self.w:.0f}))"
        )


def intersects(a: Box, b: Box) -> bool:
    """True iff *a* and *b* overlap with positive volume (touching faces do not count)."""
    return (
        a.x < b.x_max and a.x_max > b.x
        and a.y < b.y_max and a.y_max > b.y
        and a.z < b.z_max and a.z_max > b.z
    )


def contains(outer: Box, inner: Box) -> bool:
    """True iff *outer* encloses *inner* on all six faces (inclusive bounds)."""
    return (
        outer.x <= inner.x
        and outer.y <= inner.y
        and outer.z <= inner.z
        and outer.x_max >= inner.x_max
        and outer.y_max >= inner.y_max
        and outer.z_max >= inner.z_max
    )


def overlaps_with_tolerance(a: Box, b: Box, epsilon: float) -> bool:
    """
    Overlap test with each face of *b* pulled inward by *epsilon*.

    Contact shallower than *epsilon* on any axis is not an overlap, which
    absorbs rounding noise from snapped or dragged positions.
    """
    return (
        a.x < b.x_max - epsilon and a.x_max > b.x + epsilon
        and a.y < b.y_max - epsilon and a.y_max > b.y + epsilon
        and a.z < b.z_max - epsilon and a.z_max > b.z + epsilon
    )

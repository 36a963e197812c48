"""Data models and geometric primitives shared by every planner layer."""

from .geometry import Box, contains, intersects, overlaps_with_tolerance
from .models import (
    CUSTOM_CONTAINER,
    CargoItem,
    ContainerConfig,
    Dimensions,
    ManifestRow,
    Position,
)
from .palette import DISTINCT_COLORS, string_color

__all__ = [
    "Box",
    "contains",
    "intersects",
    "overlaps_with_tolerance",
    "CUSTOM_CONTAINER",
    "CargoItem",
    "ContainerConfig",
    "Dimensions",
    "ManifestRow",
    "Position",
    "DISTINCT_COLORS",
    "string_color",
]

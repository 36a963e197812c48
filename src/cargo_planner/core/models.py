"""Core data models for container load planning."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cargo_planner.core.geometry import Box
from cargo_planner.core.palette import string_color
from cargo_planner.errors import ConfigError

Position = tuple[float, float, float]


@dataclass(frozen=True)
class Dimensions:
    """Extents of an item or container: length ↔ x, height ↔ y (vertical), width ↔ z."""

    length: float
    width: float
    height: float

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def footprint(self) -> float:
        """Floor area (length × width)."""
        return self.length * self.width

    @property
    def max_dim(self) -> float:
        return max(self.length, self.width, self.height)

    def rotated(self) -> "Dimensions":
        """Footprint turned 90° about the vertical axis; height never rotates."""
        return Dimensions(length=self.width, width=self.length, height=self.height)

    def to_dict(self) -> dict:
        return {"length": self.length, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, d: dict) -> "Dimensions":
        return cls(length=float(d["length"]), width=float(d["width"]), height=float(d["height"]))

    def __repr__(self) -> str:
        return f"Dimensions({self.length:g}×{self.width:g}×{self.height:g})"


@dataclass(frozen=True)
class ContainerConfig:
    """
    The load space.

    Attributes:
        name:       Display name.
        length:     Extent along x.
        width:      Extent along z.
        height:     Extent along y.
        max_weight: Rated payload; reported against, never enforced.
    """

    name: str
    length: float
    width: float
    height: float
    max_weight: float = 0.0

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(length=self.length, width=self.width, height=self.height)

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def box(self) -> Box:
        """The whole load space as a box anchored at the origin."""
        return Box(0.0, 0.0, 0.0, self.length, self.height, self.width)

    def to_dict(self) -> dict:
        return {"name": self.name, "length": self.length, "width": self.width,
                "height": self.height, "max_weight": self.max_weight}

    @classmethod
    def from_dict(cls, d: dict) -> "ContainerConfig":
        try:
            container = cls(
                name=str(d.get("name", "Custom")),
                length=float(d["length"]),
                width=float(d["width"]),
                height=float(d["height"]),
                max_weight=float(d.get("max_weight", 0.0)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid container definition {d!r}: {exc}") from exc

        dims = (container.length, container.width, container.height)
        if not all(math.isfinite(v) and v > 0 for v in dims):
            raise ConfigError(f"Container dimensions must be positive, got {dims}")
        if container.max_weight < 0:
            raise ConfigError("Container max_weight must be >= 0")
        return container


CUSTOM_CONTAINER = ContainerConfig(
    name="Custom (11500x1800x1800)",
    length=11500.0,
    width=1800.0,
    height=1800.0,
    max_weight=28000.0,
)


@dataclass
class CargoItem:
    """
    One physical piece of cargo.

    Mutable: packing, staging and manual moves update ``position``,
    ``dimensions`` (when the footprint is rotated) and ``valid``. Functions
    that lay out items work on copies (:meth:`copy`) so callers' lists are
    never edited behind their back.

    Attributes:
        id:             Stable unique id.
        drawing_no:     Main drawing number.
        dimensions:     Current footprint (possibly rotated).
        position:       Minimum corner (x, y, z) in container coordinates.
        sub_drawing_no: Sub drawing number; preferred identity when present.
        color:          Display colour; derived from the identity string when omitted.
        weight:         Weight in kg.
        selected:       Presentation-only selection flag.
        valid:          False while overlapping or after a failed placement.
    """

    id: str
    drawing_no: str
    dimensions: Dimensions
    position: Position = (0.0, 0.0, 0.0)
    sub_drawing_no: str = ""
    color: Optional[str] = None
    weight: float = 0.0
    selected: bool = False
    valid: bool = True

    def __post_init__(self) -> None:
        if self.color is None:
            self.color = string_color(self.identifier)

    @property
    def identifier(self) -> str:
        """Grouping identity: sub drawing number, else main drawing number."""
        if self.sub_drawing_no and self.sub_drawing_no.strip():
            return self.sub_drawing_no
        return self.drawing_no

    @property
    def volume(self) -> float:
        return self.dimensions.volume

    @property
    def box(self) -> Box:
        """Occupied region at the current position."""
        x, y, z = self.position
        d = self.dimensions
        return Box(x, y, z, d.length, d.height, d.width)

    def copy(self, **changes: Any) -> "CargoItem":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "drawing_no": self.drawing_no,
            "sub_drawing_no": self.sub_drawing_no,
            "dimensions": self.dimensions.to_dict(),
            "position": list(self.position),
            "color": self.color,
            "weight": self.weight,
            "selected": self.selected,
            "valid": self.valid,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "CargoItem":
        """Rebuild an item from :meth:`to_dict` output (e.g. an exported plan)."""
        x, y, z = (float(v) for v in d.get("position", (0.0, 0.0, 0.0)))
        return cls(
            id=str(d["id"]),
            drawing_no=str(d["drawing_no"]),
            dimensions=Dimensions.from_dict(d["dimensions"]),
            position=(x, y, z),
            sub_drawing_no=str(d.get("sub_drawing_no", "")),
            color=d.get("color"),
            weight=float(d.get("weight", 0.0)),
            selected=bool(d.get("selected", False)),
            valid=bool(d.get("valid", True)),
        )

    def __repr__(self) -> str:
        x, y, z = self.position
        flag = "" if self.valid else ", INVALID"
        return (
            f"CargoItem(id={self.id!r}, {self.identifier}, {self.dimensions!r}, "
            f"pos=({x:g},{y:g},{z:g}){flag})"
        )


class ManifestRow(BaseModel):
    """
    One validated manifest line: an item group to be expanded ``quantity`` times.

    Dimensions must be finite and strictly positive or the row is rejected.
    Quantity and weight are lenient: unparsable or out-of-range values fall
    back to 1 and 0 respectively.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    main_drawing_no: str
    sub_drawing_no: str = ""
    length: float = Field(gt=0, allow_inf_nan=False)
    width: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)
    quantity: int = 1
    weight: float = 0.0

    @field_validator("quantity", mode="before")
    @classmethod
    def _lenient_quantity(cls, value: Any) -> int:
        try:
            quantity = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 1
        return quantity if quantity >= 1 else 1

    @field_validator("weight", mode="before")
    @classmethod
    def _lenient_weight(cls, value: Any) -> float:
        try:
            weight = float(value)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(weight) or weight < 0:
            return 0.0
        return weight

    @property
    def identifier(self) -> str:
        if self.sub_drawing_no:
            return self.sub_drawing_no
        return self.main_drawing_no

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(length=self.length, width=self.width, height=self.height)

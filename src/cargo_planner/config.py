"""
Central configuration for the load planner.

All modules read their tunables from here so the packing core, the
staging arranger and the interactive path agree on thresholds.

Classes:
    SortStrategy      — item ordering applied before a packing trial
    TrialSpec         — one (strategy, seed) entry of the multi-start battery
    PackingConfig     — free-space pruning, scoring and battery parameters
    StagingConfig     — shelf layout outside the container
    InteractionConfig — snapping / collision parameters for manual moves
    PlannerConfig     — the three groups above, loadable from YAML
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from cargo_planner.errors import ConfigError

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Sort strategies & battery
# ─────────────────────────────────────────────────────────────────────────────

class SortStrategy(str, Enum):
    """Ordering applied to the item list before a greedy trial."""

    VOLUME = "VOLUME"
    FOOTPRINT = "FOOTPRINT"
    MAX_DIM = "MAX_DIM"
    RANDOM_WEIGHTED = "RANDOM_WEIGHTED"


@dataclass(frozen=True)
class TrialSpec:
    """
    One trial of the multi-start battery.

    Attributes:
        strategy: Sort strategy used to order the items.
        seed:     Perturbation seed (only RANDOM_WEIGHTED reads it).
    """
    strategy: SortStrategy
    seed: int = 0

    @property
    def label(self) -> str:
        if self.strategy is SortStrategy.RANDOM_WEIGHTED:
            return f"{self.strategy.value}[{self.seed}]"
        return self.strategy.value

    def to_dict(self) -> dict:
        return {"strategy": self.strategy.value, "seed": self.seed}

    @classmethod
    def from_dict(cls, d: dict) -> "TrialSpec":
        try:
            strategy = SortStrategy(d["strategy"])
        except (KeyError, ValueError) as exc:
            raise ConfigError(f"Invalid trial entry {d!r}: {exc}") from exc
        return cls(strategy=strategy, seed=int(d.get("seed", 0)))


DEFAULT_BATTERY: tuple[TrialSpec, ...] = (
    TrialSpec(SortStrategy.VOLUME),
    TrialSpec(SortStrategy.FOOTPRINT),
    TrialSpec(SortStrategy.MAX_DIM),
    TrialSpec(SortStrategy.RANDOM_WEIGHTED, seed=1),
    TrialSpec(SortStrategy.RANDOM_WEIGHTED, seed=42),
    TrialSpec(SortStrategy.RANDOM_WEIGHTED, seed=123),
    TrialSpec(SortStrategy.RANDOM_WEIGHTED, seed=999),
)


# ─────────────────────────────────────────────────────────────────────────────
# Parameter groups
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PackingConfig:
    """
    Parameters of the greedy packing core.

    Attributes:
        min_space_dimension: Free spaces thinner than this on any axis are
                             discarded after every placement.
        score_weights:       Multipliers of (y, z, x) in the placement score.
        tie_threshold:       Ordering scores closer than this fall back to
                             height-descending order.
        noise_amplitude:     Relative volume perturbation of RANDOM_WEIGHTED.
        unplaced_position:   Sentinel corner given to items that did not fit.
        battery:             Trials run by the multi-start orchestrator.
    """
    min_space_dimension: float = 50.0
    score_weights: tuple[float, float, float] = (1_000_000.0, 1_000.0, 1.0)
    tie_threshold: float = 0.1
    noise_amplitude: float = 0.2
    unplaced_position: tuple[float, float, float] = (0.0, -9999.0, 0.0)
    battery: tuple[TrialSpec, ...] = DEFAULT_BATTERY

    def to_dict(self) -> dict:
        return {
            "min_space_dimension": self.min_space_dimension,
            "score_weights": list(self.score_weights),
            "tie_threshold": self.tie_threshold,
            "noise_amplitude": self.noise_amplitude,
            "unplaced_position": list(self.unplaced_position),
            "battery": [t.to_dict() for t in self.battery],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PackingConfig":
        _reject_unknown(cls, d, "packing")
        kwargs: dict[str, Any] = dict(d)
        for name in ("min_space_dimension", "tie_threshold", "noise_amplitude"):
            if name in kwargs:
                kwargs[name] = float(kwargs[name])
        if "score_weights" in kwargs:
            kwargs["score_weights"] = _triple(kwargs["score_weights"], "score_weights")
        if "unplaced_position" in kwargs:
            kwargs["unplaced_position"] = _triple(kwargs["unplaced_position"], "unplaced_position")
        if "battery" in kwargs:
            battery = tuple(TrialSpec.from_dict(t) for t in kwargs["battery"])
            if not battery:
                raise ConfigError("packing.battery must contain at least one trial")
            kwargs["battery"] = battery
        cfg = cls(**kwargs)
        if cfg.min_space_dimension <= 0 or cfg.tie_threshold <= 0:
            raise ConfigError("packing.min_space_dimension and tie_threshold must be > 0")
        if cfg.noise_amplitude < 0:
            raise ConfigError("packing.noise_amplitude must be >= 0")
        if any(w <= 0 for w in cfg.score_weights):
            raise ConfigError("packing.score_weights must all be > 0")
        if cfg.unplaced_position[1] >= 0:
            raise ConfigError("packing.unplaced_position needs a negative height")
        return cfg


@dataclass(frozen=True)
class StagingConfig:
    """
    Shelf grid used for items outside the container.

    Attributes:
        spacing:         Gap between neighbouring staged items and rows.
        offset:          Distance of the first row beyond the container's
                         far z face.
        row_width_limit: Maximum x extent of a row before wrapping.
    """
    spacing: float = 100.0
    offset: float = 1500.0
    row_width_limit: float = 15000.0

    def to_dict(self) -> dict:
        return {"spacing": self.spacing, "offset": self.offset,
                "row_width_limit": self.row_width_limit}

    @classmethod
    def from_dict(cls, d: dict) -> "StagingConfig":
        _reject_unknown(cls, d, "staging")
        cfg = cls(**{k: float(v) for k, v in d.items()})
        if cfg.row_width_limit <= 0 or cfg.spacing < 0 or cfg.offset < 0:
            raise ConfigError("staging values must be non-negative (row_width_limit > 0)")
        return cfg


@dataclass(frozen=True)
class InteractionConfig:
    """
    Parameters of manual repositioning.

    Attributes:
        snap_threshold:    Magnetic snapping radius.
        collision_epsilon: Overlap tolerance; contact shallower than this
                           does not count as a collision.
        grid_step:         Raw drag coordinates are rounded to this step.
    """
    snap_threshold: float = 150.0
    collision_epsilon: float = 1.0
    grid_step: float = 5.0

    def to_dict(self) -> dict:
        return {"snap_threshold": self.snap_threshold,
                "collision_epsilon": self.collision_epsilon,
                "grid_step": self.grid_step}

    @classmethod
    def from_dict(cls, d: dict) -> "InteractionConfig":
        _reject_unknown(cls, d, "interaction")
        cfg = cls(**{k: float(v) for k, v in d.items()})
        if cfg.snap_threshold < 0 or cfg.collision_epsilon < 0 or cfg.grid_step <= 0:
            raise ConfigError("interaction values must be non-negative (grid_step > 0)")
        return cfg


# ─────────────────────────────────────────────────────────────────────────────
# Planner configuration
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlannerConfig:
    """All tuneable parameters of the planner, grouped by concern."""
    packing: PackingConfig = field(default_factory=PackingConfig)
    staging: StagingConfig = field(default_factory=StagingConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)

    def to_dict(self) -> dict:
        return {
            "packing": self.packing.to_dict(),
            "staging": self.staging.to_dict(),
            "interaction": self.interaction.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict | None) -> "PlannerConfig":
        d = d or {}
        _reject_unknown(cls, d, "planner")
        try:
            return cls(
                packing=PackingConfig.from_dict(d.get("packing") or {}),
                staging=StagingConfig.from_dict(d.get("staging") or {}),
                interaction=InteractionConfig.from_dict(d.get("interaction") or {}),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid planner configuration: {exc}") from exc


DEFAULT_CONFIG = PlannerConfig()


def load_config(path: Path | str) -> PlannerConfig:
    """
    Read a planner configuration from a YAML file.

    Missing sections and keys keep their defaults, e.g.::

        packing:
          min_space_dimension: 25
        staging:
          offset: 2000

    Raises:
        ConfigError: the file is unreadable, not a mapping, or has bad values.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    logger.debug("Loaded planner config from %s", path)
    return PlannerConfig.from_dict(data)


def _reject_unknown(cls: type, d: dict, section: str) -> None:
    if not isinstance(d, dict):
        raise ConfigError(f"Section '{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{section}': {sorted(unknown)}")


def _triple(value: Any, name: str) -> tuple[float, float, float]:
    try:
        a, b, c = (float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be three numbers, got {value!r}") from exc
    return (a, b, c)

"""
Manifest import: delimited rows in, independent cargo items out.

Expected columns (first line is a header and is skipped)::

    main_drawing_no, sub_drawing_no, length, width, height, quantity, weight

Lines with fewer than seven fields, or with dimensions that are missing,
non-numeric or not strictly positive, are dropped with a warning. An
unparsable quantity becomes 1 and an unparsable weight becomes 0.
"""

from __future__ import annotations

import csv
import logging
import secrets
import string
import time
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from cargo_planner.algorithms.multi_start import auto_pack
from cargo_planner.config import PlannerConfig
from cargo_planner.core.models import CargoItem, ContainerConfig, ManifestRow
from cargo_planner.core.palette import string_color
from cargo_planner.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_COLUMNS: tuple[str, ...] = (
    "main_drawing_no", "sub_drawing_no", "length", "width", "height", "quantity", "weight",
)

_ID_ALPHABET = string.ascii_lowercase + string.digits


# Demonstration load: a dense mixed manifest for the 11500×1800×1800 custom container
DEMO_MANIFEST: tuple[ManifestRow, ...] = (
    ManifestRow(main_drawing_no="7.997.70.552.0", sub_drawing_no="BASE-FRAME-01",
                length=10400, width=1000, height=560, quantity=1, weight=1255),
    ManifestRow(main_drawing_no="7.997.70.619.0", sub_drawing_no="SIDE-SUPPORT-A",
                length=8200, width=740, height=540, quantity=2, weight=946),
    ManifestRow(main_drawing_no="7.997.70.623.0", sub_drawing_no="DRIVE-UNIT-M",
                length=4300, width=510, height=510, quantity=2, weight=360),
    ManifestRow(main_drawing_no="7.997.70.780.0", sub_drawing_no="CTRL-BOX-77",
                length=1230, width=650, height=460, quantity=12, weight=134),
    ManifestRow(main_drawing_no="7.947.70.210.0", sub_drawing_no="PANEL-V28",
                length=1400, width=1100, height=220, quantity=45, weight=120),
    ManifestRow(main_drawing_no="7.980.70.038.0", sub_drawing_no="SMALL-KIT-S",
                length=400, width=210, height=220, quantity=180, weight=90),
    ManifestRow(main_drawing_no="7.000.50.717.0", sub_drawing_no="SPACER-P1",
                length=400, width=210, height=220, quantity=120, weight=90),
    ManifestRow(main_drawing_no="7.997.70.623.0", sub_drawing_no="BOLT-SET-X",
                length=150, width=150, height=100, quantity=300, weight=5),
)


def parse_manifest_rows(lines: Iterable[str], delimiter: str = ",") -> list[ManifestRow]:
    """
    Validate manifest text lines into rows.

    Args:
        lines:     Raw lines including the header line.
        delimiter: Field separator.

    Returns:
        Valid rows in input order; rejected lines are logged and skipped.
    """
    rows: list[ManifestRow] = []
    reader = csv.reader(lines, delimiter=delimiter)
    for line_no, fields in enumerate(reader, start=1):
        if line_no == 1:
            continue
        fields = [f.strip() for f in fields]
        if not any(fields):
            continue
        if len(fields) < len(MANIFEST_COLUMNS):
            logger.warning("Manifest line %d dropped: expected %d fields, got %d",
                           line_no, len(MANIFEST_COLUMNS), len(fields))
            continue
        try:
            rows.append(ManifestRow(**dict(zip(MANIFEST_COLUMNS, fields))))
        except ValidationError as exc:
            logger.warning("Manifest line %d dropped: %s", line_no,
                           "; ".join(e["msg"] for e in exc.errors()))
    return rows


def load_manifest_csv(path: Path | str, delimiter: str = ",") -> list[ManifestRow]:
    """
    Read and validate a manifest file.

    Raises:
        ManifestError: the file cannot be read.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            rows = parse_manifest_rows(f, delimiter)
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    logger.info("Loaded %d manifest rows from %s", len(rows), path)
    return rows


def new_item_id(row_index: int, unit_index: int) -> str:
    """``item-<row>-<unit>-<epoch ms>-<5 random chars>``."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(5))
    return f"item-{row_index}-{unit_index}-{millis}-{suffix}"


def expand_rows_to_items(rows: Sequence[ManifestRow]) -> list[CargoItem]:
    """
    Expand each row into ``quantity`` independent items.

    Every item gets a fresh id, the row's dimensions, weight and drawing
    numbers, a placeholder position at the origin, ``valid=True`` and a
    colour derived from the row's identity string.
    """
    items: list[CargoItem] = []
    for row_index, row in enumerate(rows):
        color = string_color(row.identifier)
        for unit_index in range(row.quantity):
            items.append(CargoItem(
                id=new_item_id(row_index, unit_index),
                drawing_no=row.main_drawing_no,
                sub_drawing_no=row.sub_drawing_no,
                dimensions=row.dimensions,
                position=(0.0, 0.0, 0.0),
                color=color,
                weight=row.weight,
            ))
    return items


def optimize_load(
    rows: Sequence[ManifestRow],
    container: ContainerConfig,
    config: Optional[PlannerConfig] = None,
    max_workers: Optional[int] = None,
) -> list[CargoItem]:
    """Expand *rows* and plan the load in one step."""
    return auto_pack(expand_rows_to_items(rows), container, config, max_workers)

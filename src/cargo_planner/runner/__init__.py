"""Manifest import and the command-line planner."""

from .manifest import (
    DEMO_MANIFEST,
    MANIFEST_COLUMNS,
    expand_rows_to_items,
    load_manifest_csv,
    optimize_load,
    parse_manifest_rows,
)

__all__ = [
    "DEMO_MANIFEST",
    "MANIFEST_COLUMNS",
    "expand_rows_to_items",
    "load_manifest_csv",
    "optimize_load",
    "parse_manifest_rows",
]

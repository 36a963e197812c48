"""
Command-line load planner.

Reads a manifest (or uses the built-in demonstration manifest), plans the
load into one container and prints the resulting load statistics.

Usage:
    cargo-plan
    cargo-plan manifest.csv --container 12000x2350x2390 --max-weight 26000
    cargo-plan manifest.csv --config planner.yaml --workers 4 --json out/plan.json -v
"""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Sequence
from typing import Optional

from cargo_planner.algorithms.multi_start import pack
from cargo_planner.config import PlannerConfig, load_config
from cargo_planner.core.models import CUSTOM_CONTAINER, ContainerConfig
from cargo_planner.errors import CargoPlannerError, ConfigError
from cargo_planner.logger import configure_logging
from cargo_planner.monitoring.metrics import (
    compute_load_statistics,
    export_to_json,
    find_overlapping_pairs,
    print_summary,
)
from cargo_planner.runner.manifest import DEMO_MANIFEST, expand_rows_to_items, load_manifest_csv

logger = logging.getLogger(__name__)


def parse_container(text: str, max_weight: float = 0.0) -> ContainerConfig:
    """
    Parse ``LxWxH`` (e.g. ``11500x1800x1800``) into a container.

    Raises:
        ConfigError: malformed text or non-positive dimensions.
    """
    parts = text.lower().replace("×", "x").split("x")
    if len(parts) != 3:
        raise ConfigError(f"Container must be given as LxWxH, got {text!r}")
    length, width, height = parts
    return ContainerConfig.from_dict({
        "name": f"Custom ({text})",
        "length": length,
        "width": width,
        "height": height,
        "max_weight": max_weight,
    })


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-plan",
        description="Plan how a list of rectangular items fits into one container",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cargo-plan
  cargo-plan manifest.csv --container 12000x2350x2390 --max-weight 26000
  cargo-plan manifest.csv --config planner.yaml --workers 4 --json out/plan.json -v
        """,
    )

    # Input
    parser.add_argument("manifest", nargs="?", default=None,
                        help="Manifest CSV (header line first); demo load if omitted")
    parser.add_argument("--delimiter", default=",",
                        help="Manifest field separator (default: ',')")
    parser.add_argument("--config", default=None,
                        help="Planner configuration YAML")

    # Container
    parser.add_argument("--container", default=None, metavar="LxWxH",
                        help="Container extents (default: 11500x1800x1800)")
    parser.add_argument("--max-weight", type=float, default=None,
                        help="Rated payload in kg, reported only")

    # Execution
    parser.add_argument("--workers", type=int, default=1,
                        help="Run battery trials in N processes (default: 1)")

    # Output
    parser.add_argument("--json", default=None, metavar="OUT",
                        help="Write statistics and item positions to this JSON file")
    parser.add_argument("--log-file", default=None,
                        help="Also log to this file (rotated daily)")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        # ── Config ───────────────────────────────────────────────────────
        config = load_config(args.config) if args.config else PlannerConfig()

        if args.container:
            container = parse_container(args.container, args.max_weight or 0.0)
        elif args.max_weight is not None:
            container = ContainerConfig.from_dict({**CUSTOM_CONTAINER.to_dict(),
                                                   "max_weight": args.max_weight})
        else:
            container = CUSTOM_CONTAINER

        # ── Manifest ─────────────────────────────────────────────────────
        if args.manifest:
            rows = load_manifest_csv(args.manifest, args.delimiter)
        else:
            logger.info("No manifest given, using the demonstration load")
            rows = list(DEMO_MANIFEST)
    except CargoPlannerError as exc:
        logger.error("%s", exc)
        return 1

    if not rows:
        logger.error("Manifest contains no usable rows")
        return 1

    items = expand_rows_to_items(rows)
    logger.info("Planning %d items from %d rows into %s", len(items), len(rows), container.name)

    # ── Run ──────────────────────────────────────────────────────────────
    start = time.perf_counter()
    result = pack(items, container, config, max_workers=args.workers)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.info("Planned in %.0f ms", elapsed_ms)

    if result.staged_count:
        logger.info("%d items did not fit and were staged", result.staged_count)

    overlaps = find_overlapping_pairs(result.items, config.interaction.collision_epsilon)
    if overlaps:
        logger.warning("%d overlapping item pairs in plan", len(overlaps))

    # ── Summary ──────────────────────────────────────────────────────────
    stats = compute_load_statistics(result.items, container)
    print(print_summary(stats))

    if args.json:
        export_to_json(stats, args.json, result.items)
        print(f"  Results saved: {args.json}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from .metrics import (
    LoadStatistics,
    compute_load_statistics,
    export_to_json,
    find_overlapping_pairs,
    is_loaded,
    print_summary,
)

__all__ = [
    "LoadStatistics",
    "compute_load_statistics",
    "export_to_json",
    "find_overlapping_pairs",
    "is_loaded",
    "print_summary",
]

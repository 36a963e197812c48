"""Packing core: free-space tracking, scoring, ordering, trials and the multi-start battery."""

from .free_space import FreeSpaceManager, cleanup_spaces, split_spaces
from .multi_start import PackResult, auto_pack, pack, run_battery, select_best_trial
from .ordering import ORDERING_STRATEGIES, get_ordering_strategy, order_items, perturbation
from .scorer import PlacementCandidate, find_best_placement
from .staging import arrange_staging
from .trial import TrialResult, run_trial

__all__ = [
    "FreeSpaceManager",
    "cleanup_spaces",
    "split_spaces",
    "PackResult",
    "auto_pack",
    "pack",
    "run_battery",
    "select_best_trial",
    "ORDERING_STRATEGIES",
    "get_ordering_strategy",
    "order_items",
    "perturbation",
    "PlacementCandidate",
    "find_best_placement",
    "arrange_staging",
    "TrialResult",
    "run_trial",
]

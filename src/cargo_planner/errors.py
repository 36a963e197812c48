"""
Error hierarchy for the load planner.

The packing core itself raises nothing for ordinary outcomes: an item that
cannot be placed is flagged invalid and staged, never reported as an error.
These exceptions belong to the boundaries (configuration files, manifests).
"""


class CargoPlannerError(Exception):
    """Base class for all planner errors."""


class ConfigError(CargoPlannerError):
    """Planner or container configuration is malformed."""


class ManifestError(CargoPlannerError):
    """A manifest file could not be read or produced no usable rows."""

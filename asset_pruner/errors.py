# asset_pruner/errors.py


class PruneError(Exception):
    """Base class for faults that stop a pruning run before or during execution."""


class ProfileError(PruneError):
    """Invalid, unknown or unreadable profile definition."""


class RootError(PruneError):
    """The project root is missing or cannot be read."""


class DiscoveryError(PruneError):
    """An existing directory could not be listed."""

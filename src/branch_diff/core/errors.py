"""Exceptions raised by Branch Diff."""


class BranchDiffError(Exception):
    """Base class for every Branch Diff failure."""


class AdapterError(BranchDiffError):
    """A git invocation failed or returned output we could not parse."""


class ConfigurationError(AdapterError):
    """No usable repository root is available."""

"""
Error taxonomy for panel preparation and split generation.
"""


class ConfigurationError(ValueError):
    """Raised when settings values are inconsistent or out of range."""


class SchemaError(ValueError):
    """Raised when raw rows lack required key fields or carry invalid keys."""


class EmptyWindowWarning(UserWarning):
    """Issued when a split's train or test window selects zero rows."""

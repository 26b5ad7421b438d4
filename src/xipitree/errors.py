"""Typed exceptions raised by the tree-creation pipeline."""


class XiPiTreeError(Exception):
    """Base exception for all pipeline errors."""


class ConfigurationError(XiPiTreeError, ValueError):
    """Raised when the run configuration cannot select a single process variant."""


class ConfigurationConflictError(ConfigurationError):
    """Raised when simulation variants for both charm-baryon species are enabled."""


class UnresolvedReferenceError(XiPiTreeError, LookupError):
    """Raised when a candidate references a record absent from its batch."""


class SchemaError(XiPiTreeError, ValueError):
    """Raised when a row does not match the declared columns of its table."""

"""Centralized failure types for OI-FITS structural checks.

Every check fails fast, loud, and once. All errors derive from
``OIFitsError`` so callers can handle structural problems uniformly, and each
subclass names the stage that rejected the input.
"""

from enum import Enum


class LinkPolicy(str, Enum):
    """What to do when an optional cross-reference cannot be resolved.

    ERROR: Raise ``CrossReferenceError``
    WARN (default): Log a warning and leave the link unset
    IGNORE: Leave the link unset silently
    """
    ERROR = "error"
    WARN = "warn"
    IGNORE = "ignore"


class OIFitsError(Exception):
    """Base class of all errors raised by ``oifits``."""
    pass


class SchemaError(OIFitsError, ValueError):
    """Raised when an extension definition cannot be registered or found.

    Covers malformed definition rows, unknown type letters, bad dimension
    tokens, bad extension names or revisions, and duplicate registration.
    The registry is never left with a partial schema.
    """
    pass


class ValidationError(OIFitsError, ValueError):
    """Raised when field values do not fit their extension schema.

    Attributes
    ----------
    missing : tuple of str
        Keys of the mandatory fields that were not supplied (empty when the
        failure is of another kind).
    """

    def __init__(self, message: str, missing=()):
        super().__init__(message)
        self.missing = tuple(missing)


class CrossReferenceError(OIFitsError, RuntimeError):
    """Raised when data-blocks cannot be attached or linked in a master.

    Duplicate names, a second OI_TARGET, re-attaching a block and unresolved
    mandatory links all end up here.
    """
    pass


class SelectionError(OIFitsError, LookupError):
    """Raised when a target or wavelength selection cannot be carried out."""
    pass

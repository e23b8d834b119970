"""Base enforcement utility.

The require() function is the single enforcement mechanism used by the
registry, the builder, the master and the selection engine.
"""

from oifits.contracts.failure import OIFitsError


def require(condition: bool, message: str, error: type = OIFitsError) -> None:
    """Enforce a structural invariant.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ``error`` is raised.

    message : str
        Error message explaining the violation.

    error : type, optional
        Exception class to raise, a subclass of ``OIFitsError``.

    Raises
    ------
    OIFitsError
        If condition is False.

    Examples
    --------
    >>> require(revision >= 1, f"invalid OI-FITS revision number: {revision}", SchemaError)
    >>> require(not db.is_attached, "data-block already attached", CrossReferenceError)
    """
    if not condition:
        raise error(message)

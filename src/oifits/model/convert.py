"""Export of OI-FITS data-blocks to xarray."""

import logging

import xarray as xr

from oifits.model.datablock import DataBlock, ExtensionKind

__all__ = ["to_xarray"]

logger = logging.getLogger(__name__)


def _dims(db: DataBlock, key: str, ndim: int) -> tuple:
    spec = db.schema.field(key)
    if db.kind == ExtensionKind.WAVELENGTH:
        names = ("channel", f"{key}_dim")
    elif spec.is_doubly_linked:
        names = ("row", "channel", "channel2")
    elif spec.is_wavelength_linked:
        names = ("row", "channel")
    else:
        names = ("row", f"{key}_dim")
    return names[:ndim]


def to_xarray(db: DataBlock) -> xr.Dataset:
    """Convert a data-block to an ``xarray.Dataset``.

    Keyword fields become attributes, together with ``extname`` and
    ``revision``. Column fields become data variables over the dimensions
    ``row``, ``channel`` and ``channel2`` (wavelength-linked axes) or
    ``<key>_dim`` (fixed multipliers); OI_WAVELENGTH rows are ``channel``.
    Arrays are wrapped, not copied.

    Parameters
    ----------
    db : DataBlock
        Block to convert.

    Returns
    -------
    xr.Dataset
        Dataset view of the block.
    """
    ds = xr.Dataset()
    ds.attrs["extname"] = db.extname
    ds.attrs["revision"] = db.revision
    for key, value in db.items():
        if db.schema.field(key).is_keyword:
            ds.attrs[key] = value
        else:
            ds[key] = xr.Variable(_dims(db, key, value.ndim), value)

    logger.debug("Converted %s to dataset with %d variable(s)", db.extname, len(ds.data_vars))
    return ds

"""Cloning and sub-selection of OI-FITS data.

All operations return new, unattached data-blocks (or a new, resolved
``OIMaster`` when given a master) and never modify their input. A selection
that keeps nothing of a block yields None for that block; at master level
such blocks are left out of the result.

Selection axes
--------------
Target selection slices column fields along axis 0 (rows). Wavelength
selection slices wavelength-linked fields along axis 1 (and axis 2 for
doubly-linked fields), except in OI_WAVELENGTH blocks whose rows are the
spectral channels and are sliced along axis 0.
"""

import logging
import numbers
from typing import Callable, Optional, Union

import numpy as np

from oifits.contracts import CrossReferenceError, SelectionError, ValidationError, require
from oifits.model.builder import build_datablock
from oifits.model.datablock import (
    MEASUREMENT_KINDS,
    DataBlock,
    ExtensionKind,
    OITarget,
    OIWavelength,
)
from oifits.model.master import OIMaster

__all__ = ["clone", "select_target", "select_wavelength", "effective_wavelengths"]

logger = logging.getLogger(__name__)


def clone(db: DataBlock, revision: Optional[int] = None) -> DataBlock:
    """Copy ``db`` into a new, unattached data-block.

    Only fields defined by the layout of ``revision`` (default: the revision
    of ``db``) are kept. Array values are shared with ``db``, not copied, so
    writing into an array of one block is visible in the other.

    Parameters
    ----------
    db : DataBlock
        Source data-block.
    revision : int, optional
        Revision of the copy. Fields of ``db`` unknown to that revision are
        dropped; mandatory fields it adds must already be present.

    Returns
    -------
    DataBlock
        New block of the same kind.
    """
    if revision is None:
        revision = db.revision
    schema = db.registry.lookup(db.extname, revision)
    require(
        schema is not None,
        f'unknown OI-FITS extension "{db.extname}" (revision {revision})',
        ValidationError,
    )
    values = {key: value for key, value in db.items() if key != "revn" and key in schema}
    dropped = [key for key in db.keys() if key != "revn" and key not in schema]
    if dropped:
        logger.debug("Clone of %s drops field(s) %s", db.extname, ", ".join(dropped))
    return build_datablock(db.extname, revision, values, registry=db.registry)


def _take_rows(db: DataBlock, rows: np.ndarray) -> DataBlock:
    """New block with the column fields of ``db`` restricted to ``rows``."""
    values = {}
    for key, value in db.items():
        if key == "revn":
            continue
        if db.schema.field(key).is_column:
            value = value[rows]
        values[key] = value
    return build_datablock(db.extname, db.revision, values, registry=db.registry)


def _select_master(master: OIMaster, select_block: Callable) -> OIMaster:
    result = OIMaster(config=master.config)
    for db in master:
        selected = select_block(db)
        if selected is not None:
            result.attach(selected)
    return result.resolve()


# ----------------------------------------------------------------------
# Target selection
# ----------------------------------------------------------------------

def _target_id_of(tgt: OITarget, name: str) -> Optional[int]:
    wanted = name.rstrip()
    for tid, tname in zip(tgt["target_id"], tgt["target"]):
        if str(tname).rstrip() == wanted:
            return int(tid)
    return None


def _resolve_target(tgt: Optional[OITarget], target) -> int:
    """Target identifier designated by ``target`` (identifier or name)."""
    if isinstance(target, str):
        require(
            tgt is not None,
            f'no OI_TARGET data-block to look up target "{target}"',
            SelectionError,
        )
        tid = _target_id_of(tgt, target)
        require(tid is not None, f'unknown target "{target}"', SelectionError)
        return tid
    if isinstance(target, bool) or not isinstance(target, numbers.Integral):
        raise TypeError(f"target must be an identifier or a name, got {target!r}")
    return int(target)


def _select_target_block(db: DataBlock, tid: int) -> Optional[DataBlock]:
    field = db.schema.field("target_id")
    if field is None or not field.is_column or "target_id" not in db:
        return clone(db)
    ids = db["target_id"]
    if ids.ndim > 1:
        ids = ids[:, 0]
    rows = np.flatnonzero(ids == tid)
    if rows.size == 0:
        return None
    if db.kind == ExtensionKind.TARGET:
        return _take_rows(db, rows[:1])
    if rows.size == ids.size:
        return clone(db)
    return _take_rows(db, rows)


def select_target(inp: Union[OIMaster, DataBlock], target: Union[int, str]):
    """Restrict data to a single target.

    Parameters
    ----------
    inp : OIMaster or DataBlock
        Data to select from.
    target : int or str
        Target identifier, or target name looked up in the OI_TARGET block
        (trailing blanks are insignificant).

    Returns
    -------
    OIMaster, DataBlock or None
        For a block: None if no row refers to the target, a clone if all rows
        do, else a block with the matching rows. Blocks without a TARGET_ID
        column are cloned. For a master: a new resolved master of the
        non-empty selected blocks.

    Raises
    ------
    SelectionError
        Unknown target name; or, for a master, a target identifier absent
        from its OI_TARGET block.
    """
    if isinstance(inp, OIMaster):
        tid = _resolve_target(inp.target, target)
        require(
            tid in inp.target_ids(),
            f"unknown target identifier {tid}",
            SelectionError,
        )
        logger.debug("Selecting target %d in %d data-block(s)", tid, len(inp))
        return _select_master(inp, lambda db: _select_target_block(db, tid))

    if not isinstance(inp, DataBlock):
        raise TypeError(f"expecting an OIMaster or a data-block, got {type(inp).__name__}")
    if isinstance(inp, OITarget):
        tgt = inp
    else:
        master = inp.master
        tgt = None if master is None else master.target
    return _select_target_block(inp, _resolve_target(tgt, target))


# ----------------------------------------------------------------------
# Wavelength selection
# ----------------------------------------------------------------------

def effective_wavelengths(db: DataBlock) -> np.ndarray:
    """Effective wavelengths (in meters) of the spectral channels of ``db``.

    Raises
    ------
    CrossReferenceError
        If ``db`` is neither an OI_WAVELENGTH block nor linked to one.
    """
    if isinstance(db, OIWavelength):
        return np.ravel(db["eff_wave"])
    instrument = db.instrument if db.kind in MEASUREMENT_KINDS else None
    require(
        instrument is not None,
        f"{db.extname} data-block is not linked to an OI_WAVELENGTH data-block",
        CrossReferenceError,
    )
    return np.ravel(instrument["eff_wave"])


def _check_selector(selector, wavemax) -> None:
    if callable(selector):
        require(wavemax is None, "cannot combine a predicate with a maximum wavelength",
                SelectionError)
    else:
        require(wavemax is not None, "expecting a predicate or a wavelength interval",
                SelectionError)


def _channel_indices(wave: np.ndarray, selector, wavemax) -> np.ndarray:
    if callable(selector):
        mask = np.fromiter((bool(selector(w)) for w in wave), dtype=bool, count=wave.size)
    else:
        wavemin, wavemax = float(selector), float(wavemax)
        mask = (wave >= wavemin) & (wave <= wavemax)
    return np.flatnonzero(mask)


def _select_wavelength_block(db: DataBlock, selector, wavemax) -> Optional[DataBlock]:
    if db.kind != ExtensionKind.WAVELENGTH and db.kind not in MEASUREMENT_KINDS:
        return clone(db)

    wave = effective_wavelengths(db)
    if db.kind != ExtensionKind.WAVELENGTH:
        require(
            db.nchannels == wave.size,
            f"{db.extname} data-block has {db.nchannels} spectral channel(s), "
            f"its instrument has {wave.size}",
            SelectionError,
        )

    channels = _channel_indices(wave, selector, wavemax)
    if channels.size == 0:
        return None
    if channels.size == wave.size:
        return clone(db)
    if db.kind == ExtensionKind.WAVELENGTH:
        return _take_rows(db, channels)

    values = {}
    for key, value in db.items():
        if key == "revn":
            continue
        field = db.schema.field(key)
        if field.is_column and field.is_wavelength_linked:
            value = np.take(value, channels, axis=1)
            if field.is_doubly_linked:
                value = np.take(value, channels, axis=2)
        values[key] = value
    return build_datablock(db.extname, db.revision, values, registry=db.registry)


def select_wavelength(inp: Union[OIMaster, DataBlock], selector, wavemax: Optional[float] = None):
    """Restrict data to some spectral channels.

    Parameters
    ----------
    inp : OIMaster or DataBlock
        Data to select from. Measurement blocks must be attached to a master
        so that their wavelengths are known.
    selector : callable or float
        Predicate called with each effective wavelength, or the lower bound
        of an inclusive interval whose upper bound is ``wavemax``.
    wavemax : float, optional
        Upper bound of the interval, in meters.

    Returns
    -------
    OIMaster, DataBlock or None
        For a block: None if no channel is selected, a clone if all are,
        else a block with the selected channels. Blocks other than
        OI_WAVELENGTH and measurements are cloned. For a master: a new
        resolved master of the non-empty selected blocks.

    Examples
    --------
    >>> sub = select_wavelength(master, 1.2e-6, 2.1e-6)
    >>> sub = select_wavelength(master, lambda w: w < 2.0e-6)
    """
    _check_selector(selector, wavemax)
    if isinstance(inp, OIMaster):
        inp.resolve()
        return _select_master(inp, lambda db: _select_wavelength_block(db, selector, wavemax))
    if not isinstance(inp, DataBlock):
        raise TypeError(f"expecting an OIMaster or a data-block, got {type(inp).__name__}")
    return _select_wavelength_block(inp, selector, wavemax)

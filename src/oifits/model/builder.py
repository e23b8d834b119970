"""Validating construction of OI-FITS data-blocks.

``build_datablock`` is the only way data-blocks come into existence. It checks
every supplied value against the registered layout of the extension and
either returns a complete block or raises ``ValidationError``; a partial
block is never produced.

Dimension convention
--------------------
For column fields the row axis is always axis 0. Wavelength-linked fields
(``W``) carry their channel axis at axis 1; doubly-linked fields (``W,W``)
at axes 1 and 2. A scalar given for a column field is a single row.
"""

import logging
import numbers
from collections.abc import Mapping
from typing import Optional

import numpy as np

from oifits.contracts import ValidationError, require
from oifits.model.datablock import DataBlock, ExtensionKind, block_class
from oifits.registry import DataType, FieldDefinition, SchemaRegistry, field_key, get_registry

__all__ = [
    "build_datablock",
    "new_target",
    "new_array",
    "new_wavelength",
    "new_vis",
    "new_vis2",
    "new_t3",
    "new_spectrum",
    "new_corr",
    "new_inspol",
]

logger = logging.getLogger(__name__)

# Canonical element type and accepted numpy dtype kinds per elementary type.
_ARRAY_TYPES = {
    DataType.LOGICAL: (np.bool_, "b"),
    DataType.INTEGER: (np.int64, "iu"),
    DataType.REAL: (np.float64, "iuf"),
    DataType.COMPLEX: (np.complex128, "iufc"),
}


def _type_from_tag(tag) -> Optional[DataType]:
    if isinstance(tag, DataType):
        return tag
    tag = str(tag).strip()
    if len(tag) == 1:
        return DataType.from_letter(tag)
    try:
        return DataType(tag.lower())
    except ValueError:
        return None


def _iter_values(values):
    """Yield (key, value, type tag) from a mapping, pairs or triples."""
    if values is None:
        return
    if isinstance(values, Mapping):
        for key, value in values.items():
            yield field_key(str(key)), value, None
        return
    for item in values:
        if not isinstance(item, (tuple, list)) or len(item) not in (2, 3):
            raise ValidationError(
                f"expecting (key, value) or (key, value, type) entries, got {item!r}"
            )
        tag = item[2] if len(item) == 3 else None
        yield field_key(str(item[0])), item[1], tag


def _coerce_scalar(value, dtype: DataType):
    """Canonical scalar of type ``dtype``, None if ``value`` does not fit."""
    if isinstance(value, np.generic):
        value = value.item()
    if dtype == DataType.LOGICAL:
        return value if isinstance(value, bool) else None
    if dtype == DataType.STRING:
        return value if isinstance(value, str) else None
    if isinstance(value, bool):
        return None
    if dtype == DataType.INTEGER:
        return int(value) if isinstance(value, numbers.Integral) else None
    if dtype == DataType.REAL:
        return float(value) if isinstance(value, numbers.Real) else None
    if dtype == DataType.COMPLEX:
        return complex(value) if isinstance(value, numbers.Complex) else None
    return None


def _coerce_array(value: np.ndarray, dtype: DataType) -> Optional[np.ndarray]:
    """Canonical array of type ``dtype``, None if ``value`` does not fit.

    Arrays already of the canonical dtype are returned as is, not copied.
    """
    kind = value.dtype.kind
    if dtype == DataType.STRING:
        if kind == "U":
            return value
        if value.size == 0 or (kind == "O" and all(isinstance(x, str) for x in value.flat)):
            return value.astype(str)
        return None
    target, kinds = _ARRAY_TYPES[dtype]
    if kind not in kinds and value.size > 0:
        return None
    return np.asarray(value, dtype=target)


def _expected(dtype: DataType) -> str:
    return {
        DataType.LOGICAL: "boolean",
        DataType.INTEGER: "integer",
        DataType.REAL: "floating-point",
        DataType.COMPLEX: "complex",
        DataType.STRING: "string",
    }[dtype]


def _check_value(extname: str, spec: FieldDefinition, value):
    """Type-check and coerce one field value; returns the stored value."""
    dtype = DataType(spec.dtype)
    if isinstance(value, (list, tuple)):
        try:
            value = np.asarray(value)
        except ValueError as exc:
            raise ValidationError(
                f"bad dimensions for `{spec.key}` field of OI-FITS extension {extname}"
            ) from exc
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value.item()

    if spec.is_keyword:
        require(
            not isinstance(value, np.ndarray),
            f"expecting a scalar value for `{spec.key}` field in OI-FITS extension {extname}",
            ValidationError,
        )
        coerced = _coerce_scalar(value, dtype)
    else:
        if not isinstance(value, np.ndarray):
            if _coerce_scalar(value, dtype) is None:
                coerced = None
            else:
                value = np.asarray([value])
                coerced = _coerce_array(value, dtype)
        else:
            coerced = _coerce_array(value, dtype)

    require(
        coerced is not None,
        f"expecting {_expected(dtype)} value for `{spec.key}` field of OI-FITS extension {extname}",
        ValidationError,
    )
    return coerced


def build_datablock(extname, revision: Optional[int] = None, values=None, *,
                    registry: Optional[SchemaRegistry] = None) -> DataBlock:
    """Build a validated data-block.

    Parameters
    ----------
    extname : str or ExtensionKind
        OI-FITS extension name, e.g. ``"OI_VIS2"``.
    revision : int, optional
        Revision of the extension layout. Latest registered when None.
    values : mapping or iterable, optional
        Field values as a mapping ``{key: value}`` or as ``(key, value)``
        pairs or ``(key, value, type)`` triples. Keys may be field keys
        (``"date_obs"``) or OI-FITS names (``"DATE-OBS"``).
    registry : SchemaRegistry, optional
        Layout registry; the process-wide one when None.

    Returns
    -------
    DataBlock
        Unattached block of the type matching ``extname``.

    Raises
    ------
    ValidationError
        Unknown extension or field, type mismatch, bad dimensions,
        inconsistent numbers of rows or channels, or missing mandatory
        fields (all of them listed in ``ValidationError.missing``).

    Examples
    --------
    >>> db = build_datablock("OI_WAVELENGTH", 2, {"insname": "SPEC",
    ...                      "eff_wave": [1.0e-6, 1.5e-6], "eff_band": [1e-7, 1e-7]})
    >>> db.nchannels
    2
    """
    if registry is None:
        registry = get_registry()
    extname = extname.value if isinstance(extname, ExtensionKind) else str(extname)
    cls = block_class(extname)

    if revision is None:
        revision = registry.latest_revision(extname)
        require(revision is not None, f'unknown OI-FITS extension "{extname}"', ValidationError)
    schema = registry.lookup(extname, revision)
    require(
        schema is not None,
        f'unknown OI-FITS extension "{extname}" (revision {revision})',
        ValidationError,
    )

    contents = {}
    rows = -1       # number of rows in the table
    channels = -1   # number of spectral channels
    for key, value, tag in _iter_values(values):
        spec = schema.field(key)
        require(spec is not None, f"OI-FITS extension {extname} has no field `{key}`", ValidationError)
        require(
            key not in contents,
            f"duplicate value for `{key}` field of OI-FITS extension {extname}",
            ValidationError,
        )
        if tag is not None:
            require(
                _type_from_tag(tag) == DataType(spec.dtype),
                f"type `{tag}` does not match `{key}` field of OI-FITS extension {extname}",
                ValidationError,
            )

        value = _check_value(extname, spec, value)

        if spec.is_column:
            dims = value.shape
            rank = len(dims)
            require(
                rank <= spec.max_rank,
                f"bad number of dimensions for `{key}` field of OI-FITS extension {extname}",
                ValidationError,
            )
            dim0 = dims[0]
            dim1 = dims[1] if rank >= 2 else 1
            dim2 = dims[2] if rank >= 3 else 1

            if rows == -1:
                rows = dim0
            else:
                require(
                    rows == dim0,
                    f"incompatible number of rows for `{key}` field of OI-FITS extension {extname}",
                    ValidationError,
                )

            if spec.is_wavelength_linked:
                require(
                    not spec.is_doubly_linked or dim1 == dim2,
                    f"bad dimensions for `{key}` field of OI-FITS extension {extname}",
                    ValidationError,
                )
                if channels == -1:
                    channels = dim1
                else:
                    require(
                        channels == dim1,
                        f"incompatible number of spectral channels for `{key}` field "
                        f"of OI-FITS extension {extname}",
                        ValidationError,
                    )
            elif spec.dtype != DataType.STRING:
                require(
                    dim1 == spec.multiplier,
                    f"bad dimensions for `{key}` field of OI-FITS extension {extname}",
                    ValidationError,
                )

        contents[key] = value

    if "revn" in schema:
        if "revn" in contents:
            require(
                contents["revn"] == revision,
                f"OI_REVN={contents['revn']} does not match revision {revision} "
                f"of OI-FITS extension {extname}",
                ValidationError,
            )
        else:
            contents["revn"] = revision

    # Check that all mandatory fields have been given.
    missing = [f.key for f in schema.mandatory if f.key not in contents]
    for key in missing:
        logger.warning("missing value for `%s` field of OI-FITS extension %s", key, extname)
    if missing:
        raise ValidationError(
            f"some mandatory fields are missing in OI-FITS extension {extname}: "
            + ", ".join(missing),
            missing=missing,
        )

    ordered = {f.key: contents[f.key] for f in schema.fields if f.key in contents}
    return cls(revision, ordered, schema, registry,
               nrows=max(rows, 0), nchannels=max(channels, 0))


def _constructor(extname: str):
    def new_block(master=None, *, revision=None, registry=None, **fields):
        db = build_datablock(extname, revision, fields, registry=registry)
        if master is not None:
            master.attach(db)
        return db

    new_block.__doc__ = (
        f"Build an {extname} data-block from keyword fields, attaching it to "
        f"``master`` when one is given."
    )
    return new_block


new_target = _constructor("OI_TARGET")
new_array = _constructor("OI_ARRAY")
new_wavelength = _constructor("OI_WAVELENGTH")
new_vis = _constructor("OI_VIS")
new_vis2 = _constructor("OI_VIS2")
new_t3 = _constructor("OI_T3")
new_spectrum = _constructor("OI_SPECTRUM")
new_corr = _constructor("OI_CORR")
new_inspol = _constructor("OI_INSPOL")

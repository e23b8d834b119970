"""Definitions of OI-FITS extension layouts.

An extension layout is written as a small textual table, one row per field::

    OI_REVN  I      revision number of the table definition
    INSNAME  A      name of detector for cross-reference
    -----------------------------------------------------
    EFF_WAVE E(1)   effective wavelength of channel [m]
    EFF_BAND E(1)   effective bandpass of channel [m]

Rows above the dash line are header keywords, rows below are table columns.
``FORMAT`` is a type letter, optionally prefixed by ``?`` for optional
fields. Column formats end with a parenthesized dimension: a positive
multiplier, ``W`` (one axis per spectral channel) or ``W,W`` (square
channel-by-channel). A trailing ``[units]`` is split off the description.

This module turns such tables into frozen pydantic models.
"""

import re
from enum import Enum
from typing import Literal, Optional

from pydantic import ConfigDict, Field, PrivateAttr, model_validator
from pydantic import ValidationError as PydanticValidationError

from oifits.contracts import SchemaError, require
from oifits.settings.base import OIBaseModel

__all__ = [
    "DataType",
    "FieldDefinition",
    "ExtensionSchema",
    "field_key",
    "parse_definition",
    "WAVELENGTH_LINKED",
    "DOUBLY_WAVELENGTH_LINKED",
]

# Multipliers encoding the wavelength-linked dimensions.
WAVELENGTH_LINKED = -1
DOUBLY_WAVELENGTH_LINKED = -2

_EXTNAME = re.compile(r"^OI_[A-Z0-9_]+$")
_FIELD_ROW = re.compile(r"^([^ ]+) +([^ ]+) +(.*)$")
_DIVIDER_ROW = re.compile(r"^-+$")
_UNITS = re.compile(r"^(.*[^ ]) +\[([^\]]+)\]$")


class DataType(str, Enum):
    """Elementary types stored in OI-FITS tables."""
    LOGICAL = "logical"
    INTEGER = "integer"
    REAL = "real"
    COMPLEX = "complex"
    STRING = "string"

    @classmethod
    def from_letter(cls, letter: str) -> Optional["DataType"]:
        """Map a FITS format letter to its type, None if unrecognized."""
        return _TYPE_LETTERS.get(letter.upper())


_TYPE_LETTERS = {
    "L": DataType.LOGICAL,
    "I": DataType.INTEGER,
    "J": DataType.INTEGER,
    "D": DataType.REAL,
    "E": DataType.REAL,
    "C": DataType.COMPLEX,
    "A": DataType.STRING,
}


def field_key(name: str) -> str:
    """Convert an OI-FITS keyword or column name into a field key.

    >>> field_key("DATE-OBS")
    'date_obs'
    >>> field_key("OI_REVN")
    'revn'
    """
    key = name.strip().lower()
    if key == "oi_revn":
        return "revn"
    return re.sub(r"[^a-z0-9_]", "_", key)


class _DefinitionModel(OIBaseModel):
    model_config = ConfigDict(
        extra='forbid',
        use_enum_values=False,
        frozen=True,
    )


class FieldDefinition(_DefinitionModel):
    """One keyword or column of an extension.

    ``multiplier`` is 1 for keywords. For columns it is the fixed length of
    the non-row axis (the maximum length for strings), ``-1`` for an axis
    with one entry per spectral channel, ``-2`` for a square
    channel-by-channel block.
    """
    name: str
    key: str
    role: Literal["keyword", "column"]
    optional: bool = False
    multiplier: int = 1
    dtype: DataType
    units: str = ""
    description: str = ""

    @model_validator(mode="after")
    def check_multiplier(self):
        if self.role == "keyword":
            if self.multiplier != 1:
                raise ValueError(f"keyword {self.name} must have multiplier 1")
        elif self.multiplier < 1 and self.multiplier not in (
                WAVELENGTH_LINKED, DOUBLY_WAVELENGTH_LINKED):
            raise ValueError(f"invalid multiplier {self.multiplier} for column {self.name}")
        return self

    @property
    def is_keyword(self) -> bool:
        return self.role == "keyword"

    @property
    def is_column(self) -> bool:
        return self.role == "column"

    @property
    def is_wavelength_linked(self) -> bool:
        return self.multiplier < 0

    @property
    def is_doubly_linked(self) -> bool:
        return self.multiplier == DOUBLY_WAVELENGTH_LINKED

    @property
    def max_rank(self) -> int:
        """Highest array rank accepted for a value of this field."""
        if self.is_keyword:
            return 0
        if self.dtype == DataType.STRING or self.multiplier == 1:
            return 1
        if self.multiplier == DOUBLY_WAVELENGTH_LINKED:
            return 3
        return 2


class ExtensionSchema(_DefinitionModel):
    """Ordered field layout of one revision of one OI-FITS extension."""
    extname: str
    revision: int = Field(ge=1)
    fields: tuple[FieldDefinition, ...] = ()

    _index: dict = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_layout(self):
        if _EXTNAME.match(self.extname) is None:
            raise ValueError(f'invalid OI-FITS extension name: "{self.extname}"')
        keys = [f.key for f in self.fields]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"duplicate field(s) {duplicates} in {self.extname}")
        return self

    def model_post_init(self, __context) -> None:
        self._index = {f.key: f for f in self.fields}

    def field(self, key: str) -> Optional[FieldDefinition]:
        """Definition of field ``key``, None if this revision lacks it."""
        return self._index.get(key)

    def keys(self) -> tuple[str, ...]:
        return tuple(f.key for f in self.fields)

    def __contains__(self, key) -> bool:
        return key in self._index

    @property
    def mandatory(self) -> tuple[FieldDefinition, ...]:
        return tuple(f for f in self.fields if not f.optional)

    @property
    def keywords(self) -> tuple[FieldDefinition, ...]:
        return tuple(f for f in self.fields if f.is_keyword)

    @property
    def columns(self) -> tuple[FieldDefinition, ...]:
        return tuple(f for f in self.fields if f.is_column)


def _bad_def(reason: str, extname: str, revision: int, linenum: int, row: str):
    raise SchemaError(
        f'{reason} in definition of OI-FITS extension {extname} '
        f'(revision {revision}, line {linenum}): "{row}"'
    )


def _parse_dimension(token: str) -> Optional[int]:
    token = token.upper()
    if token == "W":
        return WAVELENGTH_LINKED
    if token == "W,W":
        return DOUBLY_WAVELENGTH_LINKED
    if token.isdigit() and int(token) >= 1:
        return int(token)
    return None


def parse_definition(extname: str, revision: int, rows) -> ExtensionSchema:
    """Parse the definition table of one revision of an OI-FITS extension.

    Parameters
    ----------
    extname : str
        Extension name, an uppercase token starting with ``OI_``.
    revision : int
        Revision number (>= 1).
    rows : iterable of str
        Definition rows, keywords first, then a dash line, then columns.

    Returns
    -------
    ExtensionSchema
        Frozen layout with fields in definition order.

    Raises
    ------
    SchemaError
        On a malformed name, revision or row.
    """
    require(
        isinstance(extname, str) and _EXTNAME.match(extname) is not None,
        f'invalid OI-FITS extension name: "{extname}"',
        SchemaError,
    )
    require(
        isinstance(revision, int) and not isinstance(revision, bool) and revision >= 1,
        f"invalid OI-FITS revision number: {revision}",
        SchemaError,
    )

    fields = []
    seen = set()
    keyword = True
    for linenum, raw in enumerate(rows, start=1):
        row = str(raw).strip()
        m = _FIELD_ROW.match(row)
        if m is None:
            if _DIVIDER_ROW.match(row) is None:
                _bad_def("syntax error", extname, revision, linenum, row)
            keyword = False
            continue

        name = m.group(1).upper()
        fmt = m.group(2)
        descr = m.group(3)
        optional = fmt.startswith("?")
        i = 1 if optional else 0
        dtype = DataType.from_letter(fmt[i]) if len(fmt) > i else None
        if dtype is None:
            _bad_def("invalid type letter", extname, revision, linenum, row)

        if keyword:
            if len(fmt) != i + 1:
                _bad_def("invalid keyword format", extname, revision, linenum, row)
            multiplier = 1
        else:
            if not (len(fmt) > i + 3 and fmt[i + 1] == "(" and fmt.endswith(")")):
                _bad_def("missing column dimension(s)", extname, revision, linenum, row)
            multiplier = _parse_dimension(fmt[i + 2:-1])
            if multiplier is None:
                _bad_def("invalid multiplier", extname, revision, linenum, row)

        key = field_key(name)
        if key in seen:
            _bad_def("duplicate field", extname, revision, linenum, row)
        seen.add(key)

        units = ""
        mu = _UNITS.match(descr)
        if mu is not None:
            descr, units = mu.group(1), mu.group(2)

        fields.append(FieldDefinition(
            name=name,
            key=key,
            role="keyword" if keyword else "column",
            optional=optional,
            multiplier=multiplier,
            dtype=dtype,
            units=units,
            description=descr,
        ))

    try:
        return ExtensionSchema(extname=extname, revision=revision, fields=tuple(fields))
    except PydanticValidationError as exc:
        raise SchemaError(f"invalid definition of OI-FITS extension {extname}: {exc}") from exc

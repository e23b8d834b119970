"""OI-FITS data-block types.

A data-block is one validated instance of an extension table: its field
values keyed by field key, its revision, and (for blocks that refer to other
tables) links to the OI_ARRAY, OI_WAVELENGTH and OI_CORR blocks it names.

Field values are fixed when the builder creates the block; ``contents`` is a
read-only view. The only later mutations are the attachment flag and the
link slots, written by the ``OIMaster`` that owns the block.

Links are stored as normalized names and looked up in the owning master on
access. An attached block keeps its master alive, so its links stay valid
after every other reference to the master is dropped.
"""

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

import numpy as np

from oifits.contracts import ValidationError

if TYPE_CHECKING:
    from oifits.model.master import OIMaster
    from oifits.registry import ExtensionSchema, SchemaRegistry

__all__ = [
    "ExtensionKind",
    "DataBlock",
    "OITarget",
    "OIArray",
    "OIWavelength",
    "OICorrelation",
    "OIPolarization",
    "OIVis",
    "OIVis2",
    "OIT3",
    "OISpectrum",
    "MEASUREMENT_KINDS",
    "normalize_name",
    "block_class",
]


class ExtensionKind(str, Enum):
    """The nine OI-FITS extensions with a data-block type."""
    TARGET = "OI_TARGET"
    ARRAY = "OI_ARRAY"
    WAVELENGTH = "OI_WAVELENGTH"
    CORRELATION = "OI_CORR"
    POLARIZATION = "OI_INSPOL"
    VIS = "OI_VIS"
    VIS2 = "OI_VIS2"
    T3 = "OI_T3"
    SPECTRUM = "OI_SPECTRUM"


def normalize_name(name) -> str:
    """Normalize an ARRNAME, INSNAME or CORRNAME for matching.

    Letter case and leading/trailing spaces are insignificant; internal runs
    of spaces count as one.

    >>> normalize_name("  vlti  aux ")
    'VLTI AUX'
    """
    return " ".join(str(name).upper().split())


def _values_equal(a, b) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        a = np.asarray(a)
        b = np.asarray(b)
        if a.shape != b.shape:
            return False
        if a.dtype.kind in "fc" and b.dtype.kind in "fc":
            return bool(np.array_equal(a, b, equal_nan=True))
        return bool(np.array_equal(a, b))
    if isinstance(a, (float, complex)) and isinstance(b, (float, complex)):
        if np.isnan(a) and np.isnan(b):
            return True
    return a == b


class DataBlock:
    """Base class of all OI-FITS data-blocks.

    Instances are created by ``build_datablock`` only. Field values are read
    with ``db[key]`` (KeyError when absent) or ``db.get_field(key)``, which
    tolerates keys defined by another revision of the same extension.
    """

    kind: ExtensionKind

    def __init__(self, revision: int, contents: dict, schema: "ExtensionSchema",
                 registry: "SchemaRegistry", nrows: int = 0, nchannels: int = 0):
        self._revision = revision
        self._contents = MappingProxyType(dict(contents))
        self._schema = schema
        self._registry = registry
        self._nrows = nrows
        self._nchannels = nchannels
        self._attached = False
        self._master = None
        self._links = {}

    @property
    def extname(self) -> str:
        return self.kind.value

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def schema(self) -> "ExtensionSchema":
        return self._schema

    @property
    def registry(self) -> "SchemaRegistry":
        return self._registry

    @property
    def contents(self) -> MappingProxyType:
        return self._contents

    @property
    def nrows(self) -> int:
        """Number of table rows (0 for a block without column fields)."""
        return self._nrows

    @property
    def nchannels(self) -> int:
        """Number of spectral channels of the wavelength-linked fields."""
        return self._nchannels

    @property
    def is_attached(self) -> bool:
        return self._attached

    @property
    def master(self) -> Optional["OIMaster"]:
        """Owning master, None if unattached."""
        return self._master

    def __getitem__(self, key: str):
        return self._contents[key]

    def __contains__(self, key) -> bool:
        return key in self._contents

    def __iter__(self):
        return iter(self._contents)

    def __len__(self) -> int:
        return len(self._contents)

    def keys(self):
        return self._contents.keys()

    def items(self):
        return self._contents.items()

    def values(self):
        return self._contents.values()

    def get_field(self, key: str, default=None):
        """Value of field ``key``.

        Returns ``default`` when the field is absent but defined for this
        extension in some registered revision.

        Raises
        ------
        KeyError
            If no revision of this extension defines ``key``.
        """
        if key in self._contents:
            return self._contents[key]
        if key in self._registry.field_keys(self.extname):
            return default
        raise KeyError(f"OI-FITS extension {self.extname} has no field `{key}`")

    def equals(self, other) -> bool:
        """True if ``other`` has the same kind, revision and field values."""
        if type(other) is not type(self) or other.revision != self.revision:
            return False
        if set(other.keys()) != set(self.keys()):
            return False
        return all(_values_equal(value, other[key]) for key, value in self.items())

    def __repr__(self) -> str:
        return (f"<{type(self).__name__} revision={self._revision} rows={self._nrows} "
                f"channels={self.nchannels} attached={self._attached}>")


class _LinkedBlock(DataBlock):
    """Data-block naming an OI_ARRAY and possibly an OI_WAVELENGTH."""

    @property
    def array(self) -> Optional["OIArray"]:
        master = self.master
        return None if master is None else master.linked_array(self)

    @property
    def instrument(self) -> Optional["OIWavelength"]:
        master = self.master
        return None if master is None else master.linked_instrument(self)


class _MeasurementBlock(_LinkedBlock):
    """Data-block holding measurements that may name an OI_CORR."""

    @property
    def correlation(self) -> Optional["OICorrelation"]:
        master = self.master
        return None if master is None else master.linked_correlation(self)


class OITarget(DataBlock):
    kind = ExtensionKind.TARGET


class OIArray(DataBlock):
    kind = ExtensionKind.ARRAY


class OIWavelength(DataBlock):
    kind = ExtensionKind.WAVELENGTH

    @property
    def nchannels(self) -> int:
        # One row per spectral channel.
        return self._nrows


class OICorrelation(DataBlock):
    kind = ExtensionKind.CORRELATION


class OIPolarization(_LinkedBlock):
    kind = ExtensionKind.POLARIZATION


class OIVis(_MeasurementBlock):
    kind = ExtensionKind.VIS


class OIVis2(_MeasurementBlock):
    kind = ExtensionKind.VIS2


class OIT3(_MeasurementBlock):
    kind = ExtensionKind.T3


class OISpectrum(_MeasurementBlock):
    kind = ExtensionKind.SPECTRUM


_BLOCK_CLASSES = {
    cls.kind.value: cls
    for cls in (OITarget, OIArray, OIWavelength, OICorrelation, OIPolarization,
                OIVis, OIVis2, OIT3, OISpectrum)
}

MEASUREMENT_KINDS = frozenset({
    ExtensionKind.VIS, ExtensionKind.VIS2, ExtensionKind.T3, ExtensionKind.SPECTRUM,
})


def block_class(extname) -> type:
    """Data-block type of extension ``extname``."""
    name = extname.value if isinstance(extname, ExtensionKind) else str(extname)
    cls = _BLOCK_CLASSES.get(name)
    if cls is None:
        raise ValidationError(f'bad OI-FITS datablock name "{name}"')
    return cls

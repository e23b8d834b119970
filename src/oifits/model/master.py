"""Container of the data-blocks of one OI-FITS dataset.

``OIMaster`` owns the attached data-blocks in attachment order, at most one
OI_TARGET block, and name-indexed maps of the OI_ARRAY, OI_WAVELENGTH and
OI_CORR blocks. Names are matched after ``normalize_name``.

Cross-references are resolved lazily: every ``attach`` marks the master as
dirty and the next accessor needing links runs ``resolve`` first.
"""

import logging
import threading
from typing import TYPE_CHECKING, Optional

from oifits.contracts import CrossReferenceError, LinkPolicy, require
from oifits.model.datablock import (
    DataBlock,
    ExtensionKind,
    OIArray,
    OICorrelation,
    OITarget,
    OIWavelength,
    normalize_name,
)

if TYPE_CHECKING:
    from oifits.settings import InternalConfig

__all__ = ["OIMaster", "new_master"]

logger = logging.getLogger(__name__)

# Makes the attached check-and-set atomic across masters.
_ATTACH_LOCK = threading.Lock()

# Field holding the cross-reference name of each named extension.
_NAME_FIELDS = {
    ExtensionKind.ARRAY: "arrname",
    ExtensionKind.WAVELENGTH: "insname",
    ExtensionKind.CORRELATION: "corrname",
}


class OIMaster:
    """All data-blocks of one OI-FITS dataset and their cross-references.

    **Invariants:**

    - A data-block is attached to at most one master, once.
    - At most one OI_TARGET block.
    - ARRNAME, INSNAME and CORRNAME are unique (after normalization) among
      the attached OI_ARRAY, OI_WAVELENGTH and OI_CORR blocks.
    - After ``resolve``, every block naming an instrument is linked to the
      OI_WAVELENGTH block of that name; array and correlation links are set
      when the named block exists.

    **Thread Safety:**

    Not thread-safe; serialize ``attach``/``resolve`` externally. Only the
    attached check-and-set of a block is atomic.

    Parameters
    ----------
    config : InternalConfig, optional
        Runtime configuration; ``resolution.missing_array`` and
        ``resolution.missing_correlation`` select what happens when an
        optional link cannot be resolved (default: log a warning).

    Examples
    --------
    >>> master = OIMaster()
    >>> master.attach(target)
    >>> master.attach(wavelength)
    >>> master.attach(vis2)
    >>> master.instrument_names()
    ['SPEC']
    """

    def __init__(self, config: Optional["InternalConfig"] = None):
        self.config = config
        self._all: list[DataBlock] = []
        self._target: Optional[OITarget] = None
        self._arrays: dict[str, OIArray] = {}
        self._instruments: dict[str, OIWavelength] = {}
        self._correlations: dict[str, OICorrelation] = {}
        self._dirty = False

        if config is None:
            self._array_policy = LinkPolicy.WARN
            self._correlation_policy = LinkPolicy.WARN
        else:
            self._array_policy = LinkPolicy(config.resolution.missing_array)
            self._correlation_policy = LinkPolicy(config.resolution.missing_correlation)

    def _named(self, kind: ExtensionKind) -> dict:
        if kind == ExtensionKind.ARRAY:
            return self._arrays
        if kind == ExtensionKind.WAVELENGTH:
            return self._instruments
        return self._correlations

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------

    def attach(self, db: DataBlock) -> DataBlock:
        """Attach data-block ``db`` to this master.

        Either every structure (block list, name maps, flags) is updated or
        nothing is.

        Raises
        ------
        CrossReferenceError
            If ``db`` is already attached, is a second OI_TARGET, or its name
            is already used by a block of the same kind.
        """
        if not isinstance(db, DataBlock):
            raise TypeError(f"expecting an OI-FITS data-block, got {type(db).__name__}")

        with _ATTACH_LOCK:
            require(not db.is_attached, "data-block already attached", CrossReferenceError)

            name = None
            kind = db.kind
            if kind == ExtensionKind.TARGET:
                require(
                    self._target is None,
                    "only one OI_TARGET data-block can be attached",
                    CrossReferenceError,
                )
            elif kind in _NAME_FIELDS:
                field = _NAME_FIELDS[kind]
                require(
                    field in db,
                    f"{db.extname} data-block has no {field.upper()}",
                    CrossReferenceError,
                )
                name = normalize_name(db[field])
                require(
                    name not in self._named(kind),
                    f'master already has an {db.extname} data-block with {field.upper()}="{name}"',
                    CrossReferenceError,
                )

            if kind == ExtensionKind.TARGET:
                self._target = db
            elif name is not None:
                self._named(kind)[name] = db
            self._all.append(db)
            self._dirty = True
            db._attached = True
            db._master = self

        logger.debug("Attached %s revision %d (%d rows)", db.extname, db.revision, db.nrows)
        return db

    def attach_all(self, blocks) -> "OIMaster":
        for db in blocks:
            self.attach(db)
        return self

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _missing_link(self, policy: LinkPolicy, message: str) -> None:
        if policy == LinkPolicy.ERROR:
            raise CrossReferenceError(message)
        if policy == LinkPolicy.WARN:
            logger.warning(message)

    def resolve(self) -> "OIMaster":
        """Resolve the links of all attached blocks if anything changed.

        Links are computed for all blocks first and stored only when no
        fatal error occurred.

        Raises
        ------
        CrossReferenceError
            If there is no OI_TARGET block, or a block names an instrument
            without a matching OI_WAVELENGTH block.
        """
        if not self._dirty:
            return self

        require(
            self._target is not None,
            "missing mandatory OI_TARGET data-block",
            CrossReferenceError,
        )

        resolved = []
        for db in self._all:
            links = {}
            kind = db.kind
            if "insname" in db and kind not in (ExtensionKind.WAVELENGTH,
                                                ExtensionKind.POLARIZATION):
                insname = normalize_name(db["insname"])
                require(
                    insname in self._instruments,
                    f'OI_WAVELENGTH data-block with INSNAME="{insname}" not found in master',
                    CrossReferenceError,
                )
                links["instrument"] = insname
            if "arrname" in db and kind != ExtensionKind.ARRAY:
                arrname = normalize_name(db["arrname"])
                if arrname in self._arrays:
                    links["array"] = arrname
                else:
                    self._missing_link(
                        self._array_policy,
                        f'OI_ARRAY data-block with ARRNAME="{arrname}" not found in master',
                    )
            if "corrname" in db and kind != ExtensionKind.CORRELATION:
                corrname = normalize_name(db["corrname"])
                if corrname in self._correlations:
                    links["correlation"] = corrname
                else:
                    self._missing_link(
                        self._correlation_policy,
                        f'OI_CORR data-block with CORRNAME="{corrname}" not found in master',
                    )
            resolved.append((db, links))

        for db, links in resolved:
            db._links = links
        self._dirty = False
        logger.debug("Resolved links of %d data-block(s)", len(self._all))
        return self

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def target(self) -> Optional[OITarget]:
        """The OI_TARGET data-block."""
        return self.resolve()._target

    def get_array(self, arrname: str) -> Optional[OIArray]:
        return self.resolve()._arrays.get(normalize_name(arrname))

    def get_instrument(self, insname: str) -> Optional[OIWavelength]:
        return self.resolve()._instruments.get(normalize_name(insname))

    def get_correlation(self, corrname: str) -> Optional[OICorrelation]:
        return self.resolve()._correlations.get(normalize_name(corrname))

    def array_names(self) -> list[str]:
        return list(self.resolve()._arrays)

    def instrument_names(self) -> list[str]:
        return list(self.resolve()._instruments)

    def correlation_names(self) -> list[str]:
        return list(self.resolve()._correlations)

    def target_names(self) -> list[str]:
        """Names in the TARGET column of the OI_TARGET block."""
        tgt = self.target
        if tgt is None or "target" not in tgt:
            return []
        return [str(name) for name in tgt["target"]]

    def target_ids(self) -> list[int]:
        tgt = self.target
        if tgt is None or "target_id" not in tgt:
            return []
        return [int(i) for i in tgt["target_id"]]

    def _linked(self, db: DataBlock, slot: str, table: dict):
        if db.master is not self:
            return None
        self.resolve()
        name = db._links.get(slot)
        return None if name is None else table.get(name)

    def linked_array(self, db: DataBlock) -> Optional[OIArray]:
        """OI_ARRAY block named by attached block ``db``."""
        return self._linked(db, "array", self._arrays)

    def linked_instrument(self, db: DataBlock) -> Optional[OIWavelength]:
        """OI_WAVELENGTH block named by attached block ``db``."""
        return self._linked(db, "instrument", self._instruments)

    def linked_correlation(self, db: DataBlock) -> Optional[OICorrelation]:
        """OI_CORR block named by attached block ``db``."""
        return self._linked(db, "correlation", self._correlations)

    def select(self, *extnames) -> list[DataBlock]:
        """Attached blocks of the given extensions, in attachment order."""
        wanted = {e.value if isinstance(e, ExtensionKind) else str(e) for e in extnames}
        return [db for db in self._all if db.extname in wanted]

    def equals(self, other) -> bool:
        """True if ``other`` holds equal blocks in the same order."""
        if not isinstance(other, OIMaster) or len(other) != len(self):
            return False
        return all(a.equals(b) for a, b in zip(self._all, other))

    def __iter__(self):
        return iter(self._all)

    def __len__(self) -> int:
        return len(self._all)

    def __getitem__(self, index: int) -> DataBlock:
        return self._all[index]

    def __repr__(self) -> str:
        return f"<OIMaster {len(self._all)} data-block(s)>"


def new_master(*blocks, config: Optional["InternalConfig"] = None) -> OIMaster:
    """Attach ``blocks`` (or a single list of blocks) to a new, resolved master."""
    if len(blocks) == 1 and isinstance(blocks[0], (list, tuple)):
        blocks = tuple(blocks[0])
    master = OIMaster(config=config)
    master.attach_all(blocks)
    return master.resolve()

"""Registry of OI-FITS extension layouts keyed by (extension name, revision).

The process-wide registry returned by ``get_registry()`` is populated once
with the built-in OI-FITS formats and then frozen. Tests and tools that need
their own layouts construct a fresh ``SchemaRegistry`` instead.
"""

import logging
import threading
from typing import TYPE_CHECKING, Optional

from oifits.contracts import SchemaError, require
from oifits.registry.definitions import ExtensionSchema, parse_definition

if TYPE_CHECKING:
    from oifits.settings import InternalConfig

__all__ = ["SchemaRegistry", "get_registry", "create_registry"]

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Stores extension layouts for every (extension name, revision) pair.

    **Lifecycle:**

    Layouts are registered during initialization, after which the registry
    may be frozen. A frozen registry rejects further registration, so
    concurrent readers never observe a registry being mutated.

    **Thread Safety:**

    Registration is serialized by an internal lock; the duplicate check and
    the insertion happen under the same lock.

    **Typical Usage:**

        registry = SchemaRegistry()
        registry.register("OI_WAVELENGTH", 1, [
            "INSNAME  A     name of detector",
            "-------------------------------",
            "EFF_WAVE E(W)  effective wavelength [m]",
        ])
        schema = registry.get("OI_WAVELENGTH", 1)
    """

    def __init__(self):
        self._schemas: dict[tuple[str, int], ExtensionSchema] = {}
        self._fields: dict[str, frozenset] = {}
        self._lock = threading.Lock()
        self._frozen = False

    def register(self, extname: str, revision: int, rows) -> ExtensionSchema:
        """Parse and insert revision ``revision`` of extension ``extname``.

        Raises
        ------
        SchemaError
            If the definition is malformed, already registered, or the
            registry is frozen. Nothing is inserted in that case.
        """
        schema = parse_definition(extname, revision, list(rows))
        fmtkey = (schema.extname, schema.revision)
        with self._lock:
            require(
                not self._frozen,
                f"cannot register {extname} revision {revision}: registry is frozen",
                SchemaError,
            )
            require(
                fmtkey not in self._schemas,
                f"revision {revision} of OI-FITS extension {extname} already defined",
                SchemaError,
            )
            self._schemas[fmtkey] = schema
            self._fields[extname] = self._fields.get(extname, frozenset()) | set(schema.keys())
        logger.debug("Registered %s revision %d (%d fields)",
                     extname, revision, len(schema.fields))
        return schema

    def lookup(self, extname: str, revision: int, default=None) -> Optional[ExtensionSchema]:
        """Layout of ``extname`` at ``revision``, ``default`` if unknown."""
        return self._schemas.get((extname, revision), default)

    def get(self, extname: str, revision: int) -> ExtensionSchema:
        """Layout of ``extname`` at ``revision``; raises SchemaError if unknown."""
        schema = self.lookup(extname, revision)
        require(
            schema is not None,
            f'unknown OI-FITS extension "{extname}" (revision {revision})',
            SchemaError,
        )
        return schema

    def field_keys(self, extname: str) -> frozenset:
        """All field keys declared for ``extname`` in any registered revision."""
        return self._fields.get(extname, frozenset())

    def revisions(self, extname: str) -> list[int]:
        return sorted(rev for (name, rev) in self._schemas if name == extname)

    def latest_revision(self, extname: str) -> Optional[int]:
        revisions = self.revisions(extname)
        return revisions[-1] if revisions else None

    def extnames(self) -> list[str]:
        return sorted({name for (name, _) in self._schemas})

    def freeze(self) -> None:
        """Reject any further registration."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, fmtkey) -> bool:
        return fmtkey in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self):
        return iter(sorted(self._schemas.values(), key=lambda s: (s.extname, s.revision)))


_DEFAULT_REGISTRY: Optional[SchemaRegistry] = None
_DEFAULT_LOCK = threading.Lock()


def create_registry(config: Optional["InternalConfig"] = None) -> SchemaRegistry:
    """Build a fresh registry according to the registry configuration.

    Parameters
    ----------
    config : InternalConfig, optional
        Resolved configuration; defaults apply when None (built-in formats
        installed, registry frozen).
    """
    from oifits.registry.formats import install_formats

    builtin_formats = True if config is None else config.registry.builtin_formats
    freeze = True if config is None else config.registry.freeze

    registry = SchemaRegistry()
    if builtin_formats:
        install_formats(registry)
    if freeze:
        registry.freeze()
    logger.debug("Registry created: %d layouts, frozen=%s", len(registry), registry.frozen)
    return registry


def get_registry() -> SchemaRegistry:
    """Process-wide registry of the built-in OI-FITS formats (populated once)."""
    global _DEFAULT_REGISTRY
    with _DEFAULT_LOCK:
        if _DEFAULT_REGISTRY is None:
            _DEFAULT_REGISTRY = create_registry()
    return _DEFAULT_REGISTRY

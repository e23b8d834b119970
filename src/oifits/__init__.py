"""`oifits` - In-memory data model of OI-FITS optical interferometry data.

Subpackages:
- registry: Extension layouts and their registry
- model: Data-blocks, builder, master container, selection
- settings: Runtime configuration
- contracts: Errors and enforcement helper
"""

from oifits.contracts import (
    CrossReferenceError,
    LinkPolicy,
    OIFitsError,
    SchemaError,
    SelectionError,
    ValidationError,
)
from oifits.registry import SchemaRegistry, create_registry, get_registry
from oifits.model import (
    DataBlock,
    ExtensionKind,
    OIMaster,
    build_datablock,
    clone,
    new_array,
    new_corr,
    new_inspol,
    new_master,
    new_spectrum,
    new_t3,
    new_target,
    new_vis,
    new_vis2,
    new_wavelength,
    select_target,
    select_wavelength,
    to_xarray,
)
from oifits.settings import init_config

__version__ = "0.1.0"

__all__ = [
    "CrossReferenceError",
    "LinkPolicy",
    "OIFitsError",
    "SchemaError",
    "SelectionError",
    "ValidationError",
    "SchemaRegistry",
    "create_registry",
    "get_registry",
    "DataBlock",
    "ExtensionKind",
    "OIMaster",
    "build_datablock",
    "clone",
    "new_array",
    "new_corr",
    "new_inspol",
    "new_master",
    "new_spectrum",
    "new_t3",
    "new_target",
    "new_vis",
    "new_vis2",
    "new_wavelength",
    "select_target",
    "select_wavelength",
    "to_xarray",
    "init_config",
]

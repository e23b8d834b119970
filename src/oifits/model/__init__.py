"""OI-FITS data model.

- datablock: Data-block types
- builder: Validating construction of data-blocks
- master: Container of data-blocks and cross-reference resolution
- select: Cloning, target and wavelength selection
- convert: Export to xarray
"""

from oifits.model.datablock import (
    MEASUREMENT_KINDS,
    DataBlock,
    ExtensionKind,
    OIArray,
    OICorrelation,
    OIPolarization,
    OIT3,
    OITarget,
    OIVis,
    OIVis2,
    OIWavelength,
    OISpectrum,
    block_class,
    normalize_name,
)
from oifits.model.builder import (
    build_datablock,
    new_array,
    new_corr,
    new_inspol,
    new_spectrum,
    new_t3,
    new_target,
    new_vis,
    new_vis2,
    new_wavelength,
)
from oifits.model.master import OIMaster, new_master
from oifits.model.select import clone, effective_wavelengths, select_target, select_wavelength
from oifits.model.convert import to_xarray

__all__ = [
    "MEASUREMENT_KINDS",
    "DataBlock",
    "ExtensionKind",
    "OIArray",
    "OICorrelation",
    "OIPolarization",
    "OIT3",
    "OITarget",
    "OIVis",
    "OIVis2",
    "OIWavelength",
    "OISpectrum",
    "block_class",
    "normalize_name",
    "build_datablock",
    "new_array",
    "new_corr",
    "new_inspol",
    "new_spectrum",
    "new_t3",
    "new_target",
    "new_vis",
    "new_vis2",
    "new_wavelength",
    "OIMaster",
    "new_master",
    "clone",
    "effective_wavelengths",
    "select_target",
    "select_wavelength",
    "to_xarray",
]

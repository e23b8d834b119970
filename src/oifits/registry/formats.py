"""Built-in OI-FITS extension layouts.

Revision 1 follows the original OI-FITS standard (Pauls et al. 2005),
revision 2 the OI-FITS 2 standard (Duvert et al. 2017). OI_SPECTRUM, OI_CORR
and OI_INSPOL only exist in revision 1 of their own tables.
"""

from oifits.registry.registry import SchemaRegistry

__all__ = ["BUILTIN_FORMATS", "install_formats"]

_DIVIDER = "-" * 72

_TARGET_1 = [
    "OI_REVN    I        revision number of the table definition",
    _DIVIDER,
    "TARGET_ID  I(1)     index number",
    "TARGET     A(16)    target name",
    "RAEP0      D(1)     RA at mean equinox [deg]",
    "DECEP0     D(1)     DEC at mean equinox [deg]",
    "EQUINOX    E(1)     equinox [yr]",
    "RA_ERR     D(1)     error in RA at mean equinox [deg]",
    "DEC_ERR    D(1)     error in DEC at mean equinox [deg]",
    "SYSVEL     D(1)     systemic radial velocity [m/s]",
    "VELTYP     A(8)     reference for radial velocity",
    "VELDEF     A(8)     definition of radial velocity",
    "PMRA       D(1)     proper motion in RA [deg/yr]",
    "PMDEC      D(1)     proper motion in DEC [deg/yr]",
    "PMRA_ERR   D(1)     error of proper motion in RA [deg/yr]",
    "PMDEC_ERR  D(1)     error of proper motion in DEC [deg/yr]",
    "PARALLAX   E(1)     parallax [deg]",
    "PARA_ERR   E(1)     error in parallax [deg]",
    "SPECTYP    A(16)    spectral type",
]

_TARGET_2 = _TARGET_1 + [
    "CATEGORY   ?A(3)    CALibrator or SCIence target",
]

_ARRAY_1 = [
    "OI_REVN    I        revision number of the table definition",
    "ARRNAME    A        array name for cross-reference",
    "FRAME      A        coordinate frame",
    "ARRAYX     D        array center X-coordinate [m]",
    "ARRAYY     D        array center Y-coordinate [m]",
    "ARRAYZ     D        array center Z-coordinate [m]",
    _DIVIDER,
    "TEL_NAME   A(16)    telescope name",
    "STA_NAME   A(16)    station name",
    "STA_INDEX  I(1)     station index",
    "DIAMETER   E(1)     element diameter [m]",
    "STAXYZ     D(3)     station coordinates relative to array center [m]",
]

_ARRAY_2 = _ARRAY_1 + [
    "FOV        D(1)     photometric field of view [arcsec]",
    "FOVTYPE    A(6)     model for FOV: FWHM or RADIUS",
]

_WAVELENGTH_1 = [
    "OI_REVN    I        revision number of the table definition",
    "INSNAME    A        name of detector for cross-reference",
    _DIVIDER,
    "EFF_WAVE   E(1)     effective wavelength of channel [m]",
    "EFF_BAND   E(1)     effective bandpass of channel [m]",
]

_WAVELENGTH_2 = list(_WAVELENGTH_1)

_VIS_1 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "ARRNAME    ?A       name of corresponding array",
    "INSNAME    A        name of corresponding detector",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "TIME       D(1)     UTC time of observation [s]",
    "MJD        D(1)     modified Julian day [day]",
    "INT_TIME   D(1)     integration time [s]",
    "VISAMP     D(W)     visibility amplitude",
    "VISAMPERR  D(W)     error in visibility amplitude",
    "VISPHI     D(W)     visibility phase [deg]",
    "VISPHIERR  D(W)     error in visibility phase [deg]",
    "UCOORD     D(1)     U coordinate of the data [m]",
    "VCOORD     D(1)     V coordinate of the data [m]",
    "STA_INDEX  I(2)     station numbers contributing to the data",
    "FLAG       L(W)     flag",
]

_VIS_2 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "ARRNAME    A        name of corresponding array",
    "INSNAME    A        name of corresponding detector",
    "CORRNAME   ?A       name of corresponding correlation table",
    "AMPTYP     ?A       absolute, differential or correlated flux",
    "PHITYP     ?A       absolute or differential",
    "AMPORDER   ?I       polynomial fit order for differential amplitudes",
    "PHIORDER   ?I       polynomial fit order for differential phases",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "TIME       D(1)     UTC time of observation [s]",
    "MJD        D(1)     modified Julian day [day]",
    "INT_TIME   D(1)     integration time [s]",
    "VISAMP     D(W)     visibility amplitude",
    "VISAMPERR  D(W)     error in visibility amplitude",
    "CORRINDX_VISAMP ?J(1) index into correlation matrix for 1st VISAMP element",
    "VISPHI     D(W)     visibility phase [deg]",
    "VISPHIERR  D(W)     error in visibility phase [deg]",
    "CORRINDX_VISPHI ?J(1) index into correlation matrix for 1st VISPHI element",
    "VISREFMAP  ?L(W,W)  map of spectral channels used as phase reference",
    "RVIS       ?D(W)    real part of complex coherent flux",
    "RVISERR    ?D(W)    error on RVIS",
    "CORRINDX_RVIS ?J(1) index into correlation matrix for 1st RVIS element",
    "IVIS       ?D(W)    imaginary part of complex coherent flux",
    "IVISERR    ?D(W)    error on IVIS",
    "CORRINDX_IVIS ?J(1) index into correlation matrix for 1st IVIS element",
    "UCOORD     D(1)     U coordinate of the data [m]",
    "VCOORD     D(1)     V coordinate of the data [m]",
    "STA_INDEX  I(2)     station numbers contributing to the data",
    "FLAG       L(W)     flag",
]

_VIS2_1 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "ARRNAME    ?A       name of corresponding array",
    "INSNAME    A        name of corresponding detector",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "TIME       D(1)     UTC time of observation [s]",
    "MJD        D(1)     modified Julian day [day]",
    "INT_TIME   D(1)     integration time [s]",
    "VIS2DATA   D(W)     squared visibility",
    "VIS2ERR    D(W)     error in squared visibility",
    "UCOORD     D(1)     U coordinate of the data [m]",
    "VCOORD     D(1)     V coordinate of the data [m]",
    "STA_INDEX  I(2)     station numbers contributing to the data",
    "FLAG       L(W)     flag",
]

_VIS2_2 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "ARRNAME    A        name of corresponding array",
    "INSNAME    A        name of corresponding detector",
    "CORRNAME   ?A       name of corresponding correlation table",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "TIME       D(1)     UTC time of observation [s]",
    "MJD        D(1)     modified Julian day [day]",
    "INT_TIME   D(1)     integration time [s]",
    "VIS2DATA   D(W)     squared visibility",
    "VIS2ERR    D(W)     error in squared visibility",
    "CORRINDX_VIS2DATA ?J(1) index into correlation matrix for 1st VIS2DATA element",
    "UCOORD     D(1)     U coordinate of the data [m]",
    "VCOORD     D(1)     V coordinate of the data [m]",
    "STA_INDEX  I(2)     station numbers contributing to the data",
    "FLAG       L(W)     flag",
]

_T3_1 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "ARRNAME    ?A       name of corresponding array",
    "INSNAME    A        name of corresponding detector",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "TIME       D(1)     UTC time of observation [s]",
    "MJD        D(1)     modified Julian day [day]",
    "INT_TIME   D(1)     integration time [s]",
    "T3AMP      D(W)     triple product amplitude",
    "T3AMPERR   D(W)     error in triple product amplitude",
    "T3PHI      D(W)     triple product phase [deg]",
    "T3PHIERR   D(W)     error in triple product phase [deg]",
    "U1COORD    D(1)     U coordinate of baseline AB of the triangle [m]",
    "V1COORD    D(1)     V coordinate of baseline AB of the triangle [m]",
    "U2COORD    D(1)     U coordinate of baseline BC of the triangle [m]",
    "V2COORD    D(1)     V coordinate of baseline BC of the triangle [m]",
    "STA_INDEX  I(3)     station numbers contributing to the data",
    "FLAG       L(W)     flag",
]

_T3_2 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "ARRNAME    A        name of corresponding array",
    "INSNAME    A        name of corresponding detector",
    "CORRNAME   ?A       name of corresponding correlation table",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "TIME       D(1)     UTC time of observation [s]",
    "MJD        D(1)     modified Julian day [day]",
    "INT_TIME   D(1)     integration time [s]",
    "T3AMP      D(W)     triple product amplitude",
    "T3AMPERR   D(W)     error in triple product amplitude",
    "CORRINDX_T3AMP ?J(1) index into correlation matrix for 1st T3AMP element",
    "T3PHI      D(W)     triple product phase [deg]",
    "T3PHIERR   D(W)     error in triple product phase [deg]",
    "CORRINDX_T3PHI ?J(1) index into correlation matrix for 1st T3PHI element",
    "U1COORD    D(1)     U coordinate of baseline AB of the triangle [m]",
    "V1COORD    D(1)     V coordinate of baseline AB of the triangle [m]",
    "U2COORD    D(1)     U coordinate of baseline BC of the triangle [m]",
    "V2COORD    D(1)     V coordinate of baseline BC of the triangle [m]",
    "STA_INDEX  I(3)     station numbers contributing to the data",
    "FLAG       L(W)     flag",
]

_SPECTRUM_1 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "INSNAME    A        name of corresponding detector",
    "ARRNAME    ?A       name of corresponding array",
    "CORRNAME   ?A       name of corresponding correlation table",
    "FOV        D        area on sky over which flux is integrated [arcsec]",
    "FOVTYPE    A        model for FOV: FWHM or RADIUS",
    "CALSTAT    A        calibration status: C or U",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "MJD        D(1)     modified Julian day [day]",
    "INT_TIME   D(1)     integration time [s]",
    "FLUXDATA   D(W)     flux",
    "FLUXERR    D(W)     flux error",
    "CORRINDX_FLUXDATA ?J(1) index into correlation matrix for 1st FLUXDATA element",
    "STA_INDEX  ?I(1)    station number contributing to the data",
    "FLAG       ?L(W)    flag",
]

_CORR_1 = [
    "OI_REVN    I        revision number of the table definition",
    "CORRNAME   A        name of correlation data set",
    "NDATA      J        number of correlated data",
    _DIVIDER,
    "IINDX      J(1)     first index of correlation matrix element",
    "JINDX      J(1)     second index of correlation matrix element",
    "CORR       D(1)     matrix element",
]

_INSPOL_1 = [
    "OI_REVN    I        revision number of the table definition",
    "DATE-OBS   A        UTC start date of observations",
    "NPOL       J        number of polarization types in this table",
    "ARRNAME    A        identifies corresponding OI_ARRAY",
    "ORIENT     A        orientation of the Jones matrix: NORTH or LABORATORY",
    "MODEL      A        describe the way the Jones matrix is estimated",
    _DIVIDER,
    "TARGET_ID  I(1)     target number as index into OI_TARGET table",
    "INSNAME    A(70)    INSNAME of this polarization",
    "MJD_OBS    D(1)     modified Julian day, start of time lapse [day]",
    "MJD_END    D(1)     modified Julian day, end of time lapse [day]",
    "JXX        C(W)     complex Jones matrix component along X axis",
    "JYY        C(W)     complex Jones matrix component along Y axis",
    "JXY        C(W)     complex Jones matrix component between X and Y axis",
    "JYX        C(W)     complex Jones matrix component between Y and X axis",
    "STA_INDEX  I(1)     station number for the above matrices",
]

BUILTIN_FORMATS = (
    ("OI_TARGET", 1, _TARGET_1),
    ("OI_TARGET", 2, _TARGET_2),
    ("OI_ARRAY", 1, _ARRAY_1),
    ("OI_ARRAY", 2, _ARRAY_2),
    ("OI_WAVELENGTH", 1, _WAVELENGTH_1),
    ("OI_WAVELENGTH", 2, _WAVELENGTH_2),
    ("OI_VIS", 1, _VIS_1),
    ("OI_VIS", 2, _VIS_2),
    ("OI_VIS2", 1, _VIS2_1),
    ("OI_VIS2", 2, _VIS2_2),
    ("OI_T3", 1, _T3_1),
    ("OI_T3", 2, _T3_2),
    ("OI_SPECTRUM", 1, _SPECTRUM_1),
    ("OI_CORR", 1, _CORR_1),
    ("OI_INSPOL", 1, _INSPOL_1),
)


def install_formats(registry: SchemaRegistry) -> SchemaRegistry:
    """Register every built-in layout into ``registry``."""
    for extname, revision, rows in BUILTIN_FORMATS:
        registry.register(extname, revision, rows)
    return registry

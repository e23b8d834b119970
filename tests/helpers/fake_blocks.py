"""Field values of small but complete OI-FITS data-blocks.

Every function returns a dict accepted by ``build_datablock`` for the
built-in formats (revision 2 unless noted).
"""

import numpy as np


def target_values(ids=(10, 20), names=("Star1", "Star2")):
    n = len(ids)
    zeros = np.zeros(n)
    return {
        "target_id": np.asarray(ids),
        "target": np.asarray(names),
        "raep0": np.linspace(10.0, 20.0, n),
        "decep0": np.linspace(-30.0, -20.0, n),
        "equinox": np.full(n, 2000.0),
        "ra_err": zeros,
        "dec_err": zeros,
        "sysvel": zeros,
        "veltyp": np.asarray(["LSR"] * n),
        "veldef": np.asarray(["OPTICAL"] * n),
        "pmra": zeros,
        "pmdec": zeros,
        "pmra_err": zeros,
        "pmdec_err": zeros,
        "parallax": zeros,
        "para_err": zeros,
        "spectyp": np.asarray(["UNKNOWN"] * n),
    }


def array_values(arrname="VLTI", nstations=3, arrayx=1942014.1):
    return {
        "arrname": arrname,
        "frame": "GEOCENTRIC",
        "arrayx": arrayx,
        "arrayy": -5455311.0,
        "arrayz": -2654530.3,
        "tel_name": np.asarray([f"UT{i + 1}" for i in range(nstations)]),
        "sta_name": np.asarray([f"U{i + 1}" for i in range(nstations)]),
        "sta_index": np.arange(1, nstations + 1),
        "diameter": np.full(nstations, 8.2),
        "staxyz": np.zeros((nstations, 3)),
        "fov": np.full(nstations, 1.0),
        "fovtype": np.asarray(["FWHM"] * nstations),
    }


def wavelength_values(insname="SPEC", eff_wave=(1.0e-6, 1.5e-6, 2.0e-6)):
    eff_wave = np.asarray(eff_wave, dtype=float)
    return {
        "insname": insname,
        "eff_wave": eff_wave,
        "eff_band": np.full(eff_wave.size, 1.0e-7),
    }


def vis2_values(target_ids=(10, 10, 20), nchannels=3, insname="SPEC", arrname="VLTI"):
    nrows = len(target_ids)
    data = np.arange(nrows * nchannels, dtype=float).reshape(nrows, nchannels)
    return {
        "date_obs": "2024-03-01",
        "arrname": arrname,
        "insname": insname,
        "target_id": np.asarray(target_ids),
        "time": np.zeros(nrows),
        "mjd": np.full(nrows, 60370.0),
        "int_time": np.ones(nrows),
        "vis2data": data,
        "vis2err": data / 10.0,
        "ucoord": np.linspace(10.0, 30.0, nrows),
        "vcoord": np.linspace(-5.0, 5.0, nrows),
        "sta_index": np.tile([1, 2], (nrows, 1)),
        "flag": np.zeros((nrows, nchannels), dtype=bool),
    }


def vis_values(target_ids=(10, 20), nchannels=3, insname="SPEC", arrname="VLTI"):
    nrows = len(target_ids)
    amp = np.ones((nrows, nchannels))
    return {
        "date_obs": "2024-03-01",
        "arrname": arrname,
        "insname": insname,
        "target_id": np.asarray(target_ids),
        "time": np.zeros(nrows),
        "mjd": np.full(nrows, 60370.0),
        "int_time": np.ones(nrows),
        "visamp": amp,
        "visamperr": amp / 10.0,
        "visphi": np.zeros((nrows, nchannels)),
        "visphierr": np.ones((nrows, nchannels)),
        "ucoord": np.zeros(nrows),
        "vcoord": np.zeros(nrows),
        "sta_index": np.tile([1, 2], (nrows, 1)),
        "flag": np.zeros((nrows, nchannels), dtype=bool),
    }


def t3_values(target_ids=(20,), nchannels=3, insname="SPEC", arrname="VLTI"):
    nrows = len(target_ids)
    return {
        "date_obs": "2024-03-01",
        "arrname": arrname,
        "insname": insname,
        "target_id": np.asarray(target_ids),
        "time": np.zeros(nrows),
        "mjd": np.full(nrows, 60370.0),
        "int_time": np.ones(nrows),
        "t3amp": np.ones((nrows, nchannels)),
        "t3amperr": np.full((nrows, nchannels), 0.1),
        "t3phi": np.zeros((nrows, nchannels)),
        "t3phierr": np.ones((nrows, nchannels)),
        "u1coord": np.zeros(nrows),
        "v1coord": np.zeros(nrows),
        "u2coord": np.zeros(nrows),
        "v2coord": np.zeros(nrows),
        "sta_index": np.tile([1, 2, 3], (nrows, 1)),
        "flag": np.zeros((nrows, nchannels), dtype=bool),
    }


def spectrum_values(target_ids=(10, 20), nchannels=3, insname="SPEC"):
    nrows = len(target_ids)
    flux = np.full((nrows, nchannels), 2.5)
    return {
        "date_obs": "2024-03-01",
        "insname": insname,
        "fov": 0.5,
        "fovtype": "FWHM",
        "calstat": "C",
        "target_id": np.asarray(target_ids),
        "mjd": np.full(nrows, 60370.0),
        "int_time": np.ones(nrows),
        "fluxdata": flux,
        "fluxerr": flux / 10.0,
    }


def corr_values(corrname="CORR", ndata=4):
    iindx = np.asarray([1, 1, 2])
    return {
        "corrname": corrname,
        "ndata": ndata,
        "iindx": iindx,
        "jindx": iindx + 1,
        "corr": np.asarray([0.1, 0.2, 0.3]),
    }


def inspol_values(target_ids=(10,), nchannels=3, arrname="VLTI"):
    nrows = len(target_ids)
    identity = np.ones((nrows, nchannels), dtype=complex)
    cross = np.zeros((nrows, nchannels), dtype=complex)
    return {
        "date_obs": "2024-03-01",
        "npol": 1,
        "arrname": arrname,
        "orient": "NORTH",
        "model": "CONSTANT",
        "target_id": np.asarray(target_ids),
        "insname": np.asarray(["SPEC"] * nrows),
        "mjd_obs": np.full(nrows, 60370.0),
        "mjd_end": np.full(nrows, 60370.5),
        "jxx": identity,
        "jyy": identity,
        "jxy": cross,
        "jyx": cross,
        "sta_index": np.arange(1, nrows + 1),
    }

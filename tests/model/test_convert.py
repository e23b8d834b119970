"""Tests for to_xarray conversion."""

import numpy as np
import pytest
import xarray as xr

pytestmark = pytest.mark.unit

from oifits.model import to_xarray

from tests.helpers.fake_blocks import array_values, vis_values


class TestToXarray:

    def test_measurement_block(self, sample_master):
        vis2 = sample_master.select("OI_VIS2")[0]
        ds = to_xarray(vis2)

        assert isinstance(ds, xr.Dataset)
        assert ds.attrs["extname"] == "OI_VIS2"
        assert ds.attrs["revision"] == 2
        assert ds.attrs["insname"] == "SPEC"
        assert ds["vis2data"].dims == ("row", "channel")
        assert ds["mjd"].dims == ("row",)
        assert ds["sta_index"].dims == ("row", "sta_index_dim")
        assert ds.sizes["row"] == 3
        assert ds.sizes["channel"] == 3
        assert "insname" not in ds.data_vars

    def test_wavelength_rows_are_channels(self, sample_master):
        ds = to_xarray(sample_master.get_instrument("SPEC"))
        assert ds["eff_wave"].dims == ("channel",)
        np.testing.assert_allclose(ds["eff_wave"].values, [1.0e-6, 1.5e-6, 2.0e-6])

    def test_doubly_linked(self, make_block):
        values = vis_values()
        values["visrefmap"] = np.zeros((2, 3, 3), dtype=bool)
        ds = to_xarray(make_block("OI_VIS", values))
        assert ds["visrefmap"].dims == ("row", "channel", "channel2")

    def test_arrays_not_copied(self, make_block):
        db = make_block("OI_ARRAY", array_values())
        ds = to_xarray(db)
        assert np.shares_memory(ds["staxyz"].values, db["staxyz"])

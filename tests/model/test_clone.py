"""Tests for clone() and the storage it shares with its source."""

import logging
import math

import numpy as np
import pytest

pytestmark = pytest.mark.unit

from oifits.contracts import ValidationError
from oifits.model import OIMaster, OIVis2, clone

from tests.helpers.fake_blocks import (
    array_values,
    target_values,
    vis2_values,
    wavelength_values,
)


class TestClone:

    def test_clone_is_unattached_copy(self, sample_master):
        vis2 = sample_master.select("OI_VIS2")[0]
        copy = clone(vis2)

        assert isinstance(copy, OIVis2)
        assert copy is not vis2
        assert copy.revision == vis2.revision
        assert copy.equals(vis2)
        assert not copy.is_attached
        assert copy.master is None
        assert copy.registry is vis2.registry

    def test_clone_attaches_to_fresh_master(self, sample_master):
        master = OIMaster()
        for db in sample_master:
            master.attach(clone(db))
        master.resolve()

        assert master.equals(sample_master)
        assert master.select("OI_VIS2")[0].instrument is master.get_instrument("SPEC")

    def test_arrays_are_shared(self, make_block):
        source = make_block("OI_WAVELENGTH", wavelength_values())
        copy = clone(source)

        assert copy["eff_wave"] is source["eff_wave"]
        assert np.shares_memory(copy["eff_band"], source["eff_band"])

        # Writing into a shared array is visible through both blocks
        source["eff_band"][0] = 5.0e-8
        assert copy["eff_band"][0] == 5.0e-8
        assert copy.equals(source)

    def test_nan_keyword_compares_equal(self, make_block):
        db = make_block("OI_ARRAY", array_values(arrayx=math.nan))
        assert db.equals(clone(db))
        assert not db.equals(make_block("OI_ARRAY", array_values()))

    def test_revision_keyword_restamped(self, make_block):
        copy = clone(make_block("OI_VIS2", vis2_values()))
        assert copy["revn"] == 2


class TestCloneRevision:

    def test_downgrade_drops_unknown_fields(self, make_block, caplog):
        source = make_block("OI_VIS2", dict(vis2_values(), corrname="C1"), revision=2)

        with caplog.at_level(logging.DEBUG, logger="oifits"):
            copy = clone(source, revision=1)

        assert copy.revision == 1
        assert copy["revn"] == 1
        assert "corrname" not in copy
        assert copy.get_field("corrname") is None
        assert "corrname" in caplog.text
        np.testing.assert_array_equal(copy["vis2data"], source["vis2data"])

    def test_upgrade_needs_new_mandatory_fields(self, make_block):
        values = vis2_values()
        del values["arrname"]
        source = make_block("OI_VIS2", values, revision=1)

        with pytest.raises(ValidationError, match="arrname") as info:
            clone(source, revision=2)
        assert info.value.missing == ("arrname",)

    def test_upgrade_target(self, make_block):
        source = make_block("OI_TARGET", target_values(), revision=1)
        copy = clone(source, revision=2)
        assert copy.revision == 2
        assert copy.get_field("category") is None

    def test_unknown_revision(self, make_block):
        with pytest.raises(ValidationError, match="revision 9"):
            clone(make_block("OI_VIS2", vis2_values()), revision=9)


class TestGetField:

    def test_field_of_another_revision(self, make_block):
        db = make_block("OI_TARGET", target_values(), revision=1)
        assert db.get_field("category", "SCI") == "SCI"

    def test_field_of_no_revision(self, make_block):
        db = make_block("OI_TARGET", target_values())
        with pytest.raises(KeyError):
            db.get_field("visamp")

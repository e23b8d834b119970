"""Tests for select_target on data-blocks and masters."""

import numpy as np
import pytest

pytestmark = pytest.mark.unit

from oifits.contracts import SelectionError
from oifits.model import OIMaster, select_target

from tests.helpers.fake_blocks import (
    array_values,
    t3_values,
    target_values,
    vis2_values,
    wavelength_values,
)


@pytest.fixture
def rich_master(make_block):
    """Master with two measurement kinds observing targets 10, 20 and 30."""
    master = OIMaster()
    master.attach(make_block("OI_TARGET", target_values(
        ids=(10, 20, 30), names=("Star1", "Star2", "Star3  "))))
    master.attach(make_block("OI_ARRAY", array_values()))
    master.attach(make_block("OI_WAVELENGTH", wavelength_values()))
    master.attach(make_block("OI_VIS2", vis2_values(target_ids=(10, 20, 10, 30, 20))))
    master.attach(make_block("OI_T3", t3_values(target_ids=(20, 20))))
    return master.resolve()


class TestSelectTargetMaster:

    def test_select_by_id(self, sample_master):
        result = select_target(sample_master, 10)

        assert isinstance(result, OIMaster)
        assert result is not sample_master
        vis2 = result.select("OI_VIS2")[0]
        assert vis2.nrows == 2
        assert list(vis2["target_id"]) == [10, 10]
        assert vis2.nchannels == 3
        assert vis2.instrument is result.get_instrument("SPEC")

    def test_select_by_name(self, sample_master):
        result = select_target(sample_master, "Star2")

        vis2 = result.select("OI_VIS2")[0]
        assert vis2.nrows == 1
        assert list(vis2["target_id"]) == [20]
        np.testing.assert_array_equal(
            vis2["vis2data"], sample_master.select("OI_VIS2")[0]["vis2data"][2:])

    def test_target_block_reduced_to_selected_row(self, sample_master):
        tgt = select_target(sample_master, "Star2").target
        assert tgt.nrows == 1
        assert list(tgt["target"]) == ["Star2"]
        assert list(tgt["target_id"]) == [20]

    def test_trailing_blanks_in_names_ignored(self, rich_master):
        result = select_target(rich_master, "Star3")
        assert result.target_ids() == [30]

    def test_every_row_matches(self, rich_master):
        for tid in rich_master.target_ids():
            result = select_target(rich_master, tid)
            for db in result.select("OI_VIS2", "OI_T3"):
                assert np.all(db["target_id"] == tid)

    def test_blocks_without_rows_dropped(self, rich_master):
        result = select_target(rich_master, 10)
        assert result.select("OI_T3") == []
        assert len(result.select("OI_VIS2")) == 1
        assert len(result) == 4

    def test_rows_recovered_over_all_targets(self, rich_master):
        for extname in ("OI_VIS2", "OI_T3"):
            total = sum(
                db.nrows
                for tid in rich_master.target_ids()
                for db in select_target(rich_master, tid).select(extname)
            )
            assert total == rich_master.select(extname)[0].nrows

    def test_input_untouched(self, rich_master):
        before = [db.nrows for db in rich_master]
        select_target(rich_master, 20)
        assert [db.nrows for db in rich_master] == before
        assert all(db.master is rich_master for db in rich_master)

    def test_unknown_name(self, sample_master):
        with pytest.raises(SelectionError, match='unknown target "Nobody"'):
            select_target(sample_master, "Nobody")

    def test_unknown_id(self, sample_master):
        with pytest.raises(SelectionError, match="unknown target identifier 99"):
            select_target(sample_master, 99)

    def test_bad_target_type(self, sample_master):
        with pytest.raises(TypeError):
            select_target(sample_master, 1.5)


class TestSelectTargetBlock:

    def test_no_matching_rows(self, sample_master):
        vis2 = sample_master.select("OI_VIS2")[0]
        assert select_target(vis2, 30) is None

    def test_all_rows_match_gives_clone(self, rich_master):
        t3 = rich_master.select("OI_T3")[0]
        result = select_target(t3, 20)
        assert result is not t3
        assert not result.is_attached
        assert result.equals(t3)
        assert result["t3amp"] is t3["t3amp"]

    def test_block_without_target_column_cloned(self, sample_master):
        wave = sample_master.get_instrument("SPEC")
        result = select_target(wave, 10)
        assert result.equals(wave)
        assert not result.is_attached

    def test_unknown_id_on_target_block(self, sample_master):
        assert select_target(sample_master.target, 99) is None

    def test_name_needs_target_table(self, make_block):
        vis2 = make_block("OI_VIS2", vis2_values())
        with pytest.raises(SelectionError, match="no OI_TARGET"):
            select_target(vis2, "Star1")

    def test_name_resolved_through_owner(self, sample_master):
        vis2 = sample_master.select("OI_VIS2")[0]
        assert select_target(vis2, "Star1").nrows == 2

    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            select_target([1, 2], 1)

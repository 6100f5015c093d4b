"""Tests for the top-level convergent package."""

import logging

import pytest

import convergent


class TestPublicApi:
    """Tests for re-exports."""

    def test_exports_crdts(self):
        assert convergent.GrowOnlyCounter is convergent.crdt.GrowOnlyCounter
        assert convergent.GrowOnlySet is convergent.crdt.GrowOnlySet
        assert convergent.LWWElementSet is convergent.crdt.LWWElementSet
        assert convergent.Bias is convergent.crdt.Bias

    def test_all_names_resolve(self):
        for name in convergent.__all__:
            assert hasattr(convergent, name), name

    def test_documented_examples(self):
        counter = convergent.GrowOnlyCounter.create([1, 2, 3])
        counter.merge(convergent.GrowOnlyCounter.create([3, 2, 1]))
        assert counter.slots == (3, 2, 3)
        assert counter.value == 8

        assert convergent.GrowOnlySet.create([1, 2]).compare(convergent.GrowOnlySet.create([1, 2, 3]))

        lww = convergent.LWWElementSet.create({"a": 1}, {"a": 1}, convergent.Bias.REMOVAL_WINS)
        assert not lww.lookup("a")


class TestMergeLogging:
    """Tests that merges are visible at DEBUG once logging is enabled."""

    def test_merge_logs_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="convergent"):
            convergent.GrowOnlyCounter.create([1]).merge(convergent.GrowOnlyCounter.create([2]))
        assert any("Merged counter" in r.getMessage() for r in caplog.records)

    def test_bias_mismatch_is_logged(self, caplog):
        a = convergent.LWWElementSet(convergent.Bias.ADD_WINS)
        b = convergent.LWWElementSet(convergent.Bias.REMOVAL_WINS)
        with caplog.at_level(logging.DEBUG, logger="convergent"):
            a.merge(b)
        assert any("keeping add-wins" in r.getMessage() for r in caplog.records)

    def test_failed_merge_is_not_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="convergent"):
            with pytest.raises(convergent.InvalidArgumentError):
                convergent.GrowOnlySet().merge(None)
        assert not caplog.records

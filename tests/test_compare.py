"""
Dual-read result comparison tests.
"""

import logging
import random
from datetime import datetime

import pytest

from aspect_store.core.compare import (
    REASON_DIFFERENT_ELEMENTS, REASON_DIFFERENT_SIZES, REASON_LIST_RESULT, REASON_ONE_NULL,
    compare_list_results, compare_lists, compare_results
)
from aspect_store.core.paging import build_list_result
from aspect_store.core.schema import LATEST_VERSION, AspectKey, ListResult, MetadataAspect


def aspect(urn, name, metadata='{"value":"x"}'):
    return MetadataAspect(
        key=AspectKey(urn, name, LATEST_VERSION),
        metadata=metadata,
        created_on=datetime(2024, 1, 31, 12, 0),
        created_by="urn:li:corpuser:tester",
    )


@pytest.fixture
def warnings_log(caplog):
    caplog.set_level(logging.WARNING, logger="aspect_store")
    return caplog


class TestCompareLists:
    """Test plain list comparison."""

    def test_both_none_equal(self, warnings_log):
        assert compare_lists(None, None, "test_method")
        assert warnings_log.records == []

    def test_old_none(self, warnings_log):
        assert not compare_lists(None, ["x"], "test_method")
        assert REASON_ONE_NULL in warnings_log.text

    def test_new_none(self, warnings_log):
        assert not compare_lists(["x"], None, "test_method")
        assert REASON_ONE_NULL in warnings_log.text

    def test_different_sizes(self, warnings_log):
        assert not compare_lists(["a", "b"], ["a"], "test_method")
        assert REASON_DIFFERENT_SIZES in warnings_log.text

    def test_different_elements(self, warnings_log):
        assert not compare_lists(["a", "b"], ["a", "c"], "test_method")
        assert REASON_DIFFERENT_ELEMENTS in warnings_log.text

    def test_empty_lists_equal(self):
        assert compare_lists([], [], "test_method")

    def test_order_ignored(self, warnings_log):
        old = [aspect("u1", name) for name in "ABCDEFG"]
        new = list(old)
        random.Random(7).shuffle(new)
        assert compare_lists(old, new, "test_method")
        assert warnings_log.records == []

    def test_metadata_aspects_compared_by_value(self):
        assert compare_lists([aspect("u1", "A")], [aspect("u1", "A")], "test_method")
        assert not compare_lists([aspect("u1", "A")], [aspect("u1", "A", '{"value":"y"}')], "test_method")

    def test_duplicates_can_mask_difference(self):
        # Containment is one-directional, so this is not a multiset comparison
        assert compare_lists(["a", "b"], ["a", "a"], "test_method")

    def test_log_names_method_and_both_values(self, warnings_log):
        compare_lists(["old-value"], ["new-value"], "get_latest_aspect")
        record = warnings_log.records[-1]
        message = record.getMessage()
        assert record.levelno == logging.WARNING
        assert "The results of get_latest_aspect" in message
        assert "Old schema results: ['old-value']" in message
        assert "New schema results: ['new-value']" in message
        assert message.index("get_latest_aspect") < message.index(REASON_DIFFERENT_ELEMENTS)


class TestCompareListResults:
    """Test paged result comparison."""

    def test_identical_pages_equal(self, warnings_log):
        old = build_list_result(["u1", "u2"], 5, 0, 2)
        new = build_list_result(["u1", "u2"], 5, 0, 2)
        assert compare_list_results(old, new, "list_urns")
        assert warnings_log.records == []

    def test_both_none_equal(self):
        assert compare_list_results(None, None, "list_urns")

    def test_one_none(self, warnings_log):
        assert not compare_list_results(build_list_result([], 0, 0, 10), None, "list_urns")
        assert REASON_ONE_NULL in warnings_log.text

    def test_next_start_differs(self, warnings_log):
        old = ListResult(values=["u1"], metadata=None, next_start=1, has_next=True,
                         total_count=2, total_page_count=2, page_size=1)
        new = ListResult(values=["u1"], metadata=None, next_start=5, has_next=True,
                         total_count=2, total_page_count=2, page_size=1)
        assert not compare_list_results(old, new, "list_urns")
        assert REASON_LIST_RESULT in warnings_log.text

    def test_value_order_matters(self):
        old = build_list_result(["u1", "u2"], 2, 0, 10)
        new = build_list_result(["u2", "u1"], 2, 0, 10)
        assert not compare_list_results(old, new, "list_urns")


class TestCompareResults:
    """Test dispatch by argument type."""

    def test_lists_use_set_comparison(self):
        assert compare_results(["a", "b"], ["b", "a"], "test_method")

    def test_list_results_use_structural_equality(self):
        old = build_list_result(["a", "b"], 2, 0, 10)
        new = build_list_result(["b", "a"], 2, 0, 10)
        assert not compare_results(old, new, "test_method")

    def test_list_result_against_none(self, warnings_log):
        assert not compare_results(build_list_result([], 0, 0, 10), None, "test_method")
        assert REASON_ONE_NULL in warnings_log.text

    def test_never_raises_on_unhashable_elements(self):
        assert compare_results([{"a": 1}], [{"a": 1}], "test_method")
        assert not compare_results([{"a": 1}], [{"a": 2}], "test_method")

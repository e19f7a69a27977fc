"""
Tests for filter modes and FilterSelector.
"""

import itertools

import pytest

from tally.core.exceptions import InvalidFilterError
from tally.core.filters import FilterSelector, apply_filter, normalize_filter
from tally.core.models import Task


MIXED = [
    Task(1, "A", False),
    Task(2, "B", True),
    Task(3, "C", False),
    Task(4, "D", True),
]


def test_all_returns_everything_in_order():
    assert apply_filter("all", MIXED) == MIXED


def test_all_returns_new_list():
    result = apply_filter("all", MIXED)
    assert result is not MIXED


def test_pending_keeps_incomplete_in_order():
    assert [t.id for t in apply_filter("pending", MIXED)] == [1, 3]


def test_completed_keeps_completed_in_order():
    assert [t.id for t in apply_filter("completed", MIXED)] == [2, 4]


def test_empty_collection():
    for mode in ("all", "pending", "completed"):
        assert apply_filter(mode, []) == []


def test_pending_and_completed_partition_every_collection():
    """For all small collections, pending + completed covers C exactly once."""
    for flags in itertools.product([False, True], repeat=4):
        tasks = [Task(i, f"T{i}", done) for i, done in enumerate(flags)]
        pending = apply_filter("pending", tasks)
        completed = apply_filter("completed", tasks)

        assert {t.id for t in pending} | {t.id for t in completed} == {t.id for t in tasks}
        assert not ({t.id for t in pending} & {t.id for t in completed})


@pytest.mark.parametrize("mode", ["done", "", "everything", None])
def test_invalid_mode_raises(mode):
    with pytest.raises(InvalidFilterError):
        apply_filter(mode, MIXED)


def test_normalize_is_case_insensitive():
    assert normalize_filter("  Pending ") == "pending"


def test_selector_defaults_to_all():
    selector = FilterSelector()
    assert selector.mode == "all"
    assert selector.apply(MIXED) == MIXED


def test_selector_set_filter():
    selector = FilterSelector()

    assert selector.set_filter("COMPLETED") == "completed"
    assert [t.id for t in selector.apply(MIXED)] == [2, 4]


def test_selector_invalid_mode_keeps_previous():
    selector = FilterSelector("pending")

    with pytest.raises(InvalidFilterError) as exc_info:
        selector.set_filter("archived")

    assert "archived" in str(exc_info.value)
    assert selector.mode == "pending"

"""Tests for the selection cursor."""

from datetime import datetime, timezone

import pytest

from ticklist.core.filters import TaskFilter, visible
from ticklist.core.selection import Selection, task_id_at, view_index_of
from ticklist.core.tasks import TaskStore


@pytest.fixture
def view():
    now = datetime(2025, 1, 15, tzinfo=timezone.utc)
    store = TaskStore()
    for name in ("a", "b", "c", "d"):
        store.add(name, None, now)
    store.complete(2, now)
    return visible(store, TaskFilter.PENDING, now)


class TestSelection:
    def test_sync_empty_is_none(self):
        sel = Selection(index=3)
        sel.sync(0)
        assert sel.index is None

    def test_sync_selects_first(self):
        sel = Selection()
        sel.sync(5)
        assert sel.index == 0

    def test_sync_clamps(self):
        sel = Selection(index=7)
        sel.sync(3)
        assert sel.index == 2

    def test_move_does_not_wrap(self):
        sel = Selection(index=0)
        sel.move(-1, 3)
        assert sel.index == 0
        sel.move(5, 3)
        assert sel.index == 2

    def test_top_and_bottom(self):
        sel = Selection(index=1)
        sel.to_bottom(4)
        assert sel.index == 3
        sel.to_top(4)
        assert sel.index == 0

    def test_top_on_empty_view_keeps_none(self):
        sel = Selection()
        sel.to_top(0)
        assert sel.index is None

    def test_after_delete_middle(self):
        sel = Selection(index=1)
        sel.after_delete(1, 2)
        assert sel.index == 1

    def test_after_delete_last(self):
        sel = Selection(index=2)
        sel.after_delete(2, 2)
        assert sel.index == 1

    def test_after_delete_only(self):
        sel = Selection(index=0)
        sel.after_delete(0, 0)
        assert sel.index is None

    def test_follow_visible_task(self, view):
        sel = Selection(index=0)
        sel.follow(view, 4)
        assert sel.index == 2

    def test_follow_hidden_task_clamps(self, view):
        sel = Selection(index=5)
        sel.follow(view, 2)
        assert sel.index == 2


class TestIdTranslation:
    def test_task_id_at_uses_view_positions(self, view):
        # Task 2 is completed and hidden, so position 1 is task 3
        assert task_id_at(view, 1) == 3

    def test_task_id_at_out_of_range(self, view):
        assert task_id_at(view, 3) is None
        assert task_id_at(view, None) is None

    def test_view_index_of(self, view):
        assert view_index_of(view, 4) == 2
        assert view_index_of(view, 2) is None
        assert view_index_of(view, None) is None

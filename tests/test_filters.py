"""Tests for task filters."""

from datetime import datetime, timedelta, timezone

import pytest

from ticklist.core.dates import parse_due_date
from ticklist.core.filters import FILTER_NAMES, TaskFilter, matches, visible
from ticklist.core.tasks import TaskStore


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(now):
    s = TaskStore()
    s.add("No priority", None, now)  # 1
    s.add("Low", 1, now)  # 2
    s.add("Medium", 3, now)  # 3
    s.add("High", 5, now)  # 4
    s.add("Late", 2, now)  # 5
    s.add("Soon", None, now)  # 6
    s.find(5).set_due_date(now - timedelta(days=2))
    s.find(6).set_due_date(now + timedelta(hours=3))
    s.complete(2, now)
    return s


def descriptions(view):
    return [task.description for _, task in view]


class TestTaskFilter:
    def test_cycle_order(self):
        assert TaskFilter.ALL.next() == TaskFilter.PENDING
        assert TaskFilter.HAS_DUE_DATE.next() == TaskFilter.ALL

    def test_cycle_visits_every_filter(self):
        seen = []
        current = TaskFilter.ALL
        for _ in TaskFilter:
            seen.append(current)
            current = current.next()
        assert seen == list(TaskFilter)
        assert current == TaskFilter.ALL

    def test_labels(self):
        assert TaskFilter.ALL.label == "All Tasks"
        assert TaskFilter.HIGH_PRIORITY.label == "High Priority (4-5)"

    def test_cli_names_cover_every_filter(self):
        assert set(FILTER_NAMES.values()) == set(TaskFilter)


class TestVisible:
    def test_all_preserves_order(self, store, now):
        assert descriptions(visible(store, TaskFilter.ALL, now)) == [
            "No priority",
            "Low",
            "Medium",
            "High",
            "Late",
            "Soon",
        ]

    def test_returns_store_indexes(self, store, now):
        view = visible(store, TaskFilter.HIGH_PRIORITY, now)
        assert view == [(3, store.find(4))]

    def test_pending_and_completed_partition(self, store, now):
        pending = {t.id for _, t in visible(store, TaskFilter.PENDING, now)}
        completed = {t.id for _, t in visible(store, TaskFilter.COMPLETED, now)}
        assert pending.isdisjoint(completed)
        assert pending | completed == {t.id for t in store}

    def test_priority_bands(self, store, now):
        assert descriptions(visible(store, TaskFilter.MEDIUM_PRIORITY, now)) == ["Medium", "Late"]
        assert descriptions(visible(store, TaskFilter.LOW_PRIORITY, now)) == ["Low"]
        assert descriptions(visible(store, TaskFilter.NO_PRIORITY, now)) == ["No priority", "Soon"]

    def test_overdue(self, store, now):
        assert descriptions(visible(store, TaskFilter.OVERDUE, now)) == ["Late"]

    def test_due_soon_respects_window(self, store, now):
        assert descriptions(visible(store, TaskFilter.DUE_SOON, now)) == ["Soon"]
        assert visible(store, TaskFilter.DUE_SOON, now, timedelta(hours=1)) == []

    def test_has_due_date(self, store, now):
        assert descriptions(visible(store, TaskFilter.HAS_DUE_DATE, now)) == ["Late", "Soon"]

    def test_due_today_is_not_overdue(self, now):
        s = TaskStore()
        task_id = s.add("Pay rent", None, now)
        s.find(task_id).set_due_date(parse_due_date("today", now))

        assert descriptions(visible(s, TaskFilter.DUE_TODAY, now)) == ["Pay rent"]
        assert visible(s, TaskFilter.OVERDUE, now) == []

    def test_completed_task_never_due_today(self, now):
        s = TaskStore()
        task_id = s.add("Pay rent", None, now)
        s.find(task_id).set_due_date(parse_due_date("today", now))
        s.complete(task_id, now)
        assert not matches(s.find(task_id), TaskFilter.DUE_TODAY, now)

    def test_example_scenario(self, now):
        s = TaskStore()
        a = s.add("A", None, now)
        s.add("B", 2, now)
        s.complete(a, now)

        assert descriptions(visible(s, TaskFilter.PENDING, now)) == ["B"]
        assert descriptions(visible(s, TaskFilter.COMPLETED, now)) == ["A"]

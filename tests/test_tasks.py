"""Tests for core task logic."""

from datetime import datetime, timedelta, timezone

import pytest

from ticklist.core.tasks import (
    Task,
    TaskStore,
    ValidationError,
    parse_priority_suffix,
    validate_priority,
)


# Fixtures
@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(now):
    s = TaskStore()
    s.add("Write report", 4, now)
    s.add("Buy milk", None, now)
    s.add("Call plumber", 1, now)
    return s


class TestTask:
    def test_complete_sets_timestamp(self, now):
        task = Task(id=1, description="A", created_at=now)
        task.complete(now)
        assert task.completed is True
        assert task.completed_at == now

    def test_uncomplete_clears_timestamp(self, now):
        task = Task(id=1, description="A", created_at=now)
        task.complete(now)
        task.uncomplete()
        assert task.completed is False
        assert task.completed_at is None

    def test_set_description_rejects_blank(self):
        task = Task(id=1, description="Old text")
        with pytest.raises(ValidationError):
            task.set_description("   ")
        assert task.description == "Old text"

    def test_empty_details_clear(self):
        task = Task(id=1, description="A", details="notes")
        task.set_details("  ")
        assert task.details is None

    def test_set_priority_out_of_range(self):
        task = Task(id=1, description="A")
        with pytest.raises(ValidationError):
            task.set_priority(6)
        assert task.priority is None


class TestDueDates:
    def test_overdue(self, now):
        task = Task(id=1, description="A", due_date=now - timedelta(hours=1))
        assert task.is_overdue(now)

    def test_completed_is_never_overdue(self, now):
        task = Task(id=1, description="A", due_date=now - timedelta(days=3))
        task.complete(now)
        assert not task.is_overdue(now)
        assert not task.is_due_soon(now)

    def test_due_soon_window(self, now):
        task = Task(id=1, description="A", due_date=now + timedelta(hours=2))
        assert task.is_due_soon(now)
        assert not task.is_due_soon(now, timedelta(hours=1))

    def test_due_exactly_now_is_soon_not_overdue(self, now):
        task = Task(id=1, description="A", due_date=now)
        assert not task.is_overdue(now)
        assert task.is_due_soon(now)

    def test_overdue_is_not_soon(self, now):
        task = Task(id=1, description="A", due_date=now - timedelta(minutes=1))
        assert not task.is_due_soon(now)

    def test_format_due_date_labels(self, now):
        assert Task(id=1, description="A", due_date=now).format_due_date(now) == "Today"
        assert Task(id=1, description="A", due_date=now + timedelta(days=1)).format_due_date(now) == "Tomorrow"
        assert Task(id=1, description="A").format_due_date(now) is None

    def test_format_due_date_other_day(self, now):
        due = now + timedelta(days=10)
        label = Task(id=1, description="A", due_date=due).format_due_date(now)
        assert label == due.astimezone().strftime("%b %d")


class TestTaskStore:
    def test_ids_increase(self, store):
        assert [t.id for t in store] == [1, 2, 3]
        assert store.next_id == 4

    def test_ids_never_reused_after_delete(self, store, now):
        assert store.remove(3)
        new_id = store.add("Another", None, now)
        assert new_id == 4
        assert store.find(3) is None

    def test_add_rejects_empty(self, now):
        s = TaskStore()
        with pytest.raises(ValidationError):
            s.add("", None, now)
        assert len(s) == 0
        assert s.next_id == 1

    def test_add_rejects_bad_priority(self, now):
        s = TaskStore()
        with pytest.raises(ValidationError):
            s.add("A", 9, now)
        assert s.next_id == 1

    def test_remove_missing(self, store):
        assert store.remove(42) is False
        assert len(store) == 3

    def test_toggle(self, store, now):
        assert store.toggle(1, now) is True
        assert store.find(1).completed_at == now
        assert store.toggle(1, now) is False
        assert store.find(1).completed_at is None
        assert store.toggle(99, now) is None

    def test_retain_pending_keeps_order_and_ids(self, store, now):
        store.complete(1, now)
        store.complete(3, now)
        removed = store.retain_pending()
        assert removed == 2
        assert [(t.id, t.description) for t in store] == [(2, "Buy milk")]
        assert store.next_id == 4

    def test_counts(self, store, now):
        store.complete(2, now)
        assert store.counts() == (3, 1, 2)

    def test_merge_renumbers(self, store, now):
        other = TaskStore()
        other.add("Imported one", None, now)
        other.add("Imported two", 2, now)
        added = store.merge(other)
        assert added == 2
        assert [t.id for t in store] == [1, 2, 3, 4, 5]
        assert store.find(5).description == "Imported two"
        assert store.next_id == 6


class TestPrioritySuffix:
    def test_parses_trailing_priority(self):
        assert parse_priority_suffix("Buy milk:4") == ("Buy milk", 4)

    def test_without_suffix(self):
        assert parse_priority_suffix("Buy milk") == ("Buy milk", None)

    def test_out_of_range_is_kept_in_text(self):
        assert parse_priority_suffix("Meeting at 10:30") == ("Meeting at 10:30", None)
        assert parse_priority_suffix("Thing:9") == ("Thing:9", None)

    def test_suffix_alone_is_description(self):
        assert parse_priority_suffix(":3") == (":3", None)

    def test_whitespace_around_suffix(self):
        assert parse_priority_suffix("  Call mom : 2 ") == ("Call mom", 2)

    def test_spaced_colon(self):
        assert parse_priority_suffix("x : 3") == ("x", 3)

    @pytest.mark.parametrize("text", [":0", ":4", "Thing:0", "Thing:9", "Thing:6"])
    def test_out_of_range_or_bare_stays_text(self, text):
        assert parse_priority_suffix(text) == (text, None)

    def test_colon_inside_description(self):
        assert parse_priority_suffix("10:30 standup") == ("10:30 standup", None)

    @pytest.mark.parametrize("text", ["Square it:\u00b2", "Arabic:\u0663", "Wide:\uff13"])
    def test_non_ascii_digits_are_not_priorities(self, text):
        assert parse_priority_suffix(text) == (text, None)


class TestValidatePriority:
    @pytest.mark.parametrize("value", [1, 3, 5, None])
    def test_valid(self, value):
        assert validate_priority(value) == value

    @pytest.mark.parametrize("value", [0, 6, -1, True, "3", 2.5])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_priority(value)

"""Unit tests for the in-memory entity store."""

import pytest

from taskflow.db.memory import Collection, EntityStore
from taskflow.models import Task, User


def _task(title: str, project_id=None, assignee_id=None) -> Task:
    return Task(title=title, created_by="u1", project_id=project_id, assignee_id=assignee_id)


class TestCollection:
    """Tests for Collection."""

    @pytest.fixture
    def tasks(self) -> Collection:
        return Collection("tasks", indexes=("project_id", "assignee_id"))

    def test_add_and_get(self, tasks: Collection) -> None:
        """Test a stored record can be read back by id."""
        task = tasks.add(_task("one"))

        assert tasks.get(task.id) is task
        assert task.id in tasks
        assert len(tasks) == 1

    def test_get_missing_returns_none(self, tasks: Collection) -> None:
        """Test absence is signalled with None, not an exception."""
        assert tasks.get("nope") is None

    def test_add_duplicate_id_raises(self, tasks: Collection) -> None:
        """Test the same id cannot be inserted twice."""
        task = tasks.add(_task("one"))

        with pytest.raises(KeyError):
            tasks.add(task)

    def test_find_by_indexed_field(self, tasks: Collection) -> None:
        """Test indexed lookups return matches in insertion order."""
        first = tasks.add(_task("a", project_id="p1"))
        tasks.add(_task("b", project_id="p2"))
        third = tasks.add(_task("c", project_id="p1"))

        assert tasks.find_by("project_id", "p1") == [first, third]
        assert tasks.first_by("project_id", "p1") is first
        assert tasks.find_by("project_id", "missing") == []

    def test_find_by_unindexed_field_scans(self, tasks: Collection) -> None:
        """Test lookups on other fields fall back to a scan."""
        task = tasks.add(_task("needle"))
        tasks.add(_task("hay"))

        assert tasks.find_by("title", "needle") == [task]

    def test_replace_moves_index_entry(self, tasks: Collection) -> None:
        """Test replacing a record updates its index buckets."""
        import dataclasses

        task = tasks.add(_task("a", project_id="p1"))
        tasks.replace(dataclasses.replace(task, project_id="p2"))

        assert tasks.find_by("project_id", "p1") == []
        assert [t.id for t in tasks.find_by("project_id", "p2")] == [task.id]

    def test_replace_keeps_insertion_order_in_bucket(self, tasks: Collection) -> None:
        """Test an updated record keeps its place for indexed and scanned lookups."""
        import dataclasses

        first = tasks.add(_task("a", project_id="p1"))
        second = tasks.add(_task("b", project_id="p1"))
        tasks.replace(dataclasses.replace(first, title="a2"))

        indexed = [t.id for t in tasks.find_by("project_id", "p1")]
        scanned = [t.id for t in tasks.filter(lambda t: t.project_id == "p1")]
        assert indexed == scanned == [first.id, second.id]
        assert tasks.first_by("project_id", "p1").title == "a2"

    def test_replace_into_bucket_with_later_records(self, tasks: Collection) -> None:
        """Test a record moved between buckets lands at its insertion position."""
        import dataclasses

        first = tasks.add(_task("a", project_id="p2"))
        second = tasks.add(_task("b", project_id="p1"))
        tasks.replace(dataclasses.replace(first, project_id="p1"))

        indexed = [t.id for t in tasks.find_by("project_id", "p1")]
        scanned = [t.id for t in tasks.filter(lambda t: t.project_id == "p1")]
        assert indexed == scanned == [first.id, second.id]
        assert tasks.find_by("project_id", "p2") == []

    def test_replace_unknown_raises(self, tasks: Collection) -> None:
        """Test replace refuses records that were never added."""
        with pytest.raises(KeyError):
            tasks.replace(_task("ghost"))

    def test_remove(self, tasks: Collection) -> None:
        """Test remove reports whether a record existed."""
        task = tasks.add(_task("a", assignee_id="u2"))

        assert tasks.remove(task.id) is True
        assert tasks.remove(task.id) is False
        assert tasks.get(task.id) is None
        assert tasks.find_by("assignee_id", "u2") == []

    def test_filter(self, tasks: Collection) -> None:
        """Test predicate filtering."""
        tasks.add(_task("keep"))
        tasks.add(_task("drop"))

        assert [t.title for t in tasks.filter(lambda t: t.title == "keep")] == ["keep"]

    def test_iteration_is_a_snapshot(self, tasks: Collection) -> None:
        """Test removing during iteration does not break the loop."""
        for title in ("a", "b", "c"):
            tasks.add(_task(title))

        for task in tasks:
            tasks.remove(task.id)

        assert len(tasks) == 0


class TestEntityStore:
    """Tests for EntityStore."""

    def test_create_builds_empty_collections(self) -> None:
        """Test a new store is empty."""
        store = EntityStore.create()

        assert set(store.stats()) == {
            "users", "projects", "tasks", "time_entries", "comments",
            "activity_logs", "user_settings", "project_members",
        }
        assert all(count == 0 for count in store.stats().values())

    def test_stores_are_isolated(self) -> None:
        """Test two stores share no rows."""
        one = EntityStore.create()
        two = EntityStore.create()
        one.users.add(User(
            username="x", email="x@taskflow.com", password="h",
            first_name="X", last_name="Y",
        ))

        assert len(one.users) == 1
        assert len(two.users) == 0

    def test_generated_ids_are_unique(self) -> None:
        """Test every created record gets a fresh id."""
        store = EntityStore.create()
        ids = {store.tasks.add(_task(str(i))).id for i in range(200)}

        assert len(ids) == 200

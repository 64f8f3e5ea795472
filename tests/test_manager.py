"""Tests for the TodoManager store."""

import copy
from unittest.mock import patch

import pytest

from todo_spaces.exceptions import (
    DirectoryCreateFailed,
    IndexOutOfRange,
    PersistFailed,
    SpaceNotFound,
)
from todo_spaces.manager import TodoManager
from todo_spaces.space import DEFAULT_SPACE, TodoSpace
from todo_spaces.todo import Priority, StatusFilter, TodoItem


@pytest.fixture
def manager(todo_path):
    """Manager on a fresh file with two spaces."""
    todo_path.parent.mkdir(parents=True)
    todo_path.write_text(
        "- [ ] a {LOW}\n- [x] b {MEDIUM}\n- [ ] c {HIGH}\n\n[[Work]]\n- [x] d {URGENT}\n\n",
        encoding="utf-8",
    )
    return TodoManager(todo_path)


class TestInitialize:
    """Tests for loading or creating the todo file."""

    def test_creates_directory_and_file(self, todo_path):
        manager = TodoManager(todo_path)

        assert todo_path.parent.is_dir()
        assert todo_path.read_text(encoding="utf-8") == "\n"
        assert manager.spaces == [TodoSpace(name=DEFAULT_SPACE)]
        assert manager.file_path == todo_path

    def test_loads_existing_file(self, manager):
        assert [s.name for s in manager.spaces] == [DEFAULT_SPACE, "Work"]
        assert len(manager.spaces[0].todos) == 3

    def test_reloading_empty_store(self, todo_path):
        TodoManager(todo_path)
        manager = TodoManager(todo_path)

        assert manager.spaces == [TodoSpace(name=DEFAULT_SPACE)]

    def test_unreadable_file_is_replaced(self, todo_path):
        todo_path.parent.mkdir(parents=True)
        todo_path.write_bytes(b"\xff\xfe\x00garbage")

        manager = TodoManager(todo_path)

        assert manager.spaces == [TodoSpace(name=DEFAULT_SPACE)]
        assert todo_path.read_text(encoding="utf-8") == "\n"

    def test_directory_create_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(DirectoryCreateFailed) as excinfo:
            TodoManager(blocker / "sub" / "todos.md")

        assert excinfo.value.path == blocker / "sub"

    def test_fallback_persist_failure(self, todo_path):
        with patch("todo_spaces.manager.save_spaces", side_effect=PersistFailed(todo_path)):
            with pytest.raises(PersistFailed):
                TodoManager(todo_path)


class TestAdd:
    """Tests for adding todos."""

    def test_add_to_default(self, todo_path):
        manager = TodoManager(todo_path)

        todo = manager.add_todo("buy milk")

        assert todo == TodoItem(item="buy milk", status=False, priority=Priority.MEDIUM)
        assert todo_path.read_text(encoding="utf-8") == "- [ ] buy milk {MEDIUM}\n\n"

    def test_add_creates_space_at_end(self, manager):
        manager.add_todo("plan trip", "Home", Priority.LOW)

        assert [s.name for s in manager.spaces] == [DEFAULT_SPACE, "Work", "Home"]
        assert manager.spaces[-1].todos == [TodoItem(item="plan trip", priority=Priority.LOW)]

    def test_add_reuses_existing_space(self, manager):
        manager.add_todo("e", "Work")

        assert [s.name for s in manager.spaces] == [DEFAULT_SPACE, "Work"]
        assert [t.item for t in manager.spaces[1].todos] == ["d", "e"]

    def test_add_persists(self, manager, todo_path):
        manager.add_todo("e", "Work", Priority.HIGH)

        reloaded = TodoManager(todo_path)
        assert reloaded.spaces == manager.spaces

    def test_add_trims_description(self, manager, todo_path):
        todo = manager.add_todo("  e  ", "Work")

        assert todo.item == "e"
        assert TodoManager(todo_path).spaces == manager.spaces

    def test_add_persist_failure_keeps_memory_change(self, manager):
        with patch("todo_spaces.manager.save_spaces", side_effect=PersistFailed(manager.file_path)):
            with pytest.raises(PersistFailed):
                manager.add_todo("e")

        assert manager.spaces[0].todos[-1].item == "e"


class TestToggle:
    """Tests for toggling todos."""

    def test_toggle_default(self, manager, todo_path):
        todo = manager.toggle_todo(0)

        assert todo.status is True
        assert todo_path.read_text(encoding="utf-8").startswith("- [x] a {LOW}\n")

    def test_toggle_twice(self, manager):
        manager.toggle_todo(1)
        manager.toggle_todo(1)

        assert manager.spaces[0].todos[1].status is True

    def test_toggle_named_space(self, manager):
        manager.toggle_todo(0, "Work")

        assert manager.spaces[1].todos[0].status is False

    def test_unknown_space(self, manager):
        with pytest.raises(SpaceNotFound) as excinfo:
            manager.toggle_todo(0, "Nope")

        assert excinfo.value.space_name == "Nope"

    def test_index_out_of_range(self, manager):
        with pytest.raises(IndexOutOfRange) as excinfo:
            manager.toggle_todo(3)

        assert excinfo.value.index == 3
        assert excinfo.value.space_name == DEFAULT_SPACE
        assert excinfo.value.size == 3

    def test_negative_index(self, manager):
        with pytest.raises(IndexOutOfRange):
            manager.toggle_todo(-1)


class TestDelete:
    """Tests for deleting todos."""

    def test_delete_shifts_indices(self, manager):
        removed = manager.delete_todo(1)

        assert removed.item == "b"
        assert [t.item for t in manager.spaces[0].todos] == ["a", "c"]
        assert manager.toggle_todo(1).item == "c"

    def test_delete_persists(self, manager, todo_path):
        manager.delete_todo(0, "Work")

        assert todo_path.read_text(encoding="utf-8").endswith("[[Work]]\n\n")
        assert TodoManager(todo_path).spaces[1].todos == []

    def test_deleting_last_todo_keeps_space(self, manager):
        manager.delete_todo(0, "Work")

        assert [s.name for s in manager.spaces] == [DEFAULT_SPACE, "Work"]

    def test_unknown_space(self, manager):
        with pytest.raises(SpaceNotFound):
            manager.delete_todo(0, "Nope")

    def test_index_out_of_range(self, manager):
        with pytest.raises(IndexOutOfRange):
            manager.delete_todo(1, "Work")


class TestFailuresDoNotMutate:
    """Invalid toggle/delete calls leave memory and disk alone."""

    @pytest.mark.parametrize("operation,args", [
        ("toggle_todo", (5, None)),
        ("toggle_todo", (0, "Nope")),
        ("delete_todo", (5, None)),
        ("delete_todo", (0, "Nope")),
    ])
    def test_no_mutation_and_no_write(self, manager, todo_path, operation, args):
        before = copy.deepcopy(manager.spaces)
        content = todo_path.read_text(encoding="utf-8")

        with patch("todo_spaces.manager.save_spaces") as save:
            with pytest.raises((SpaceNotFound, IndexOutOfRange)):
                getattr(manager, operation)(*args)

        save.assert_not_called()
        assert manager.spaces == before
        assert todo_path.read_text(encoding="utf-8") == content


class TestListing:
    """Tests for read-only listings."""

    def test_list_all(self, manager):
        listing = manager.list_todos()

        assert [space.name for space, _ in listing] == [DEFAULT_SPACE, "Work"]
        assert [i for i, _ in listing[0][1]] == [0, 1, 2]

    def test_list_pending_keeps_original_indices(self, manager):
        listing = manager.list_todos(StatusFilter.PENDING)

        assert [(i, t.item) for i, t in listing[0][1]] == [(0, "a"), (2, "c")]
        assert listing[1][1] == []

    def test_list_completed(self, manager):
        listing = manager.list_todos(StatusFilter.COMPLETED)

        assert [(i, t.item) for i, t in listing[0][1]] == [(1, "b")]
        assert [(i, t.item) for i, t in listing[1][1]] == [(0, "d")]

    def test_list_is_read_only(self, manager, todo_path):
        before = copy.deepcopy(manager.spaces)

        with patch("todo_spaces.manager.save_spaces") as save:
            first = manager.list_todos(StatusFilter.PENDING)
            second = manager.list_todos(StatusFilter.PENDING)
            manager.list_spaces()

        save.assert_not_called()
        assert first == second
        assert manager.spaces == before

    def test_list_spaces(self, manager):
        summaries = manager.list_spaces()

        assert [tuple(s) for s in summaries] == [(DEFAULT_SPACE, 1, 3), ("Work", 1, 1)]


class TestEndToEnd:
    """The file contents after a typical sequence of invocations."""

    def test_scenario(self, todo_path):
        TodoManager(todo_path)
        assert todo_path.read_text(encoding="utf-8") == "\n"

        TodoManager(todo_path).add_todo("buy milk")
        assert todo_path.read_text(encoding="utf-8") == "- [ ] buy milk {MEDIUM}\n\n"

        TodoManager(todo_path).toggle_todo(0)
        assert todo_path.read_text(encoding="utf-8") == "- [x] buy milk {MEDIUM}\n\n"

        TodoManager(todo_path).add_todo("ship release", "Work", Priority.URGENT)
        assert todo_path.read_text(encoding="utf-8") == (
            "- [x] buy milk {MEDIUM}\n\n[[Work]]\n- [ ] ship release {URGENT}\n\n"
        )

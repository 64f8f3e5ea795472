"""Todo store: the in-memory spaces kept in sync with the todo file."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .exceptions import (
    DirectoryCreateFailed,
    IndexOutOfRange,
    LoadFailed,
    PathLike,
    SpaceNotFound,
)
from .space import DEFAULT_SPACE, SpaceSummary, TodoSpace
from .storage import load_spaces, save_spaces
from .todo import Priority, StatusFilter, TodoItem

logger = logging.getLogger(__name__)

IndexedTodo = Tuple[int, TodoItem]


class TodoManager:
    """Owns the spaces of one todo file for the length of one invocation.

    Every mutating operation writes the whole file back before returning.
    Validation failures (unknown space, bad index) leave memory and disk
    untouched. A PersistFailed raised after a mutation means the change is
    applied in memory but may not be on disk.

    Attributes:
        spaces: The spaces in file order
    """

    def __init__(self, file_path: PathLike):
        """Load the todo file, creating it if needed.

        Args:
            file_path: Path of the todo file. Its parent directory is
                created when missing.

        Raises:
            DirectoryCreateFailed: the parent directory could not be created
            PersistFailed: a fresh file could not be written
        """
        self._file_path = Path(file_path)
        self.spaces: List[TodoSpace] = []
        self._initialize()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def _initialize(self) -> None:
        parent = self._file_path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateFailed(parent) from e

        try:
            self.spaces = load_spaces(self._file_path)
        except LoadFailed as e:
            logger.info(f"{e}; starting a new todo file")
            self.spaces = [TodoSpace(name=DEFAULT_SPACE)]
            self.persist()

    def persist(self) -> None:
        """Write every space to the todo file.

        Raises:
            PersistFailed: the file could not be written
        """
        save_spaces(self._file_path, self.spaces)

    def find_space(self, space_name: Optional[str] = None) -> Optional[TodoSpace]:
        """Return the first space with this name (Default when None)."""
        name = space_name if space_name is not None else DEFAULT_SPACE
        for space in self.spaces:
            if space.name == name:
                return space
        return None

    def _require_todo(self, index: int, space_name: Optional[str]) -> Tuple[TodoSpace, TodoItem]:
        name = space_name if space_name is not None else DEFAULT_SPACE
        space = self.find_space(name)
        if space is None:
            raise SpaceNotFound(name)
        if index < 0 or index >= len(space.todos):
            raise IndexOutOfRange(index, name, len(space.todos))
        return space, space.todos[index]

    def add_todo(
        self,
        text: str,
        space_name: Optional[str] = None,
        priority: Optional[Priority] = None,
    ) -> TodoItem:
        """Append a pending task, creating the space if it does not exist.

        Args:
            text: Task description
            space_name: Target space (default: Default)
            priority: Task priority (default: MEDIUM)

        Returns:
            The new TodoItem
        """
        name = space_name if space_name is not None else DEFAULT_SPACE
        space = self.find_space(name)
        if space is None:
            space = TodoSpace(name=name)
            self.spaces.append(space)
            logger.debug(f"Created space '{name}'")

        todo = TodoItem(
            item=text.strip(),
            status=False,
            priority=priority if priority is not None else Priority.MEDIUM,
        )
        space.todos.append(todo)
        logger.debug(f"Added task {len(space.todos) - 1} to '{name}'")
        self.persist()
        return todo

    def toggle_todo(self, index: int, space_name: Optional[str] = None) -> TodoItem:
        """Flip the completion status of the task at index.

        Raises:
            SpaceNotFound: no space with that name
            IndexOutOfRange: index is not a task position in the space
        """
        space, todo = self._require_todo(index, space_name)
        todo.toggle()
        logger.debug(f"Toggled task {index} in '{space.name}' to {todo.checkbox}")
        self.persist()
        return todo

    def delete_todo(self, index: int, space_name: Optional[str] = None) -> TodoItem:
        """Remove the task at index; later tasks move up by one position.

        Raises:
            SpaceNotFound: no space with that name
            IndexOutOfRange: index is not a task position in the space
        """
        space, _ = self._require_todo(index, space_name)
        todo = space.todos.pop(index)
        logger.debug(f"Deleted task {index} from '{space.name}'")
        self.persist()
        return todo

    def list_todos(
        self, status_filter: StatusFilter = StatusFilter.ALL
    ) -> List[Tuple[TodoSpace, List[IndexedTodo]]]:
        """Select tasks per space, keeping each task's position in its space.

        The returned indices are the ones toggle_todo and delete_todo accept.
        """
        return [
            (
                space,
                [(i, todo) for i, todo in enumerate(space.todos) if status_filter.matches(todo)],
            )
            for space in self.spaces
        ]

    def list_spaces(self) -> List[SpaceSummary]:
        """Name and completed/total counts for every space."""
        return [space.summary() for space in self.spaces]

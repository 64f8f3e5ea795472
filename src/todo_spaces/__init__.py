"""Todo Spaces - a command-line todo manager with named spaces."""

__version__ = "0.1.0"

from .todo import Priority, StatusFilter, TodoItem
from .space import DEFAULT_SPACE, SpaceSummary, TodoSpace
from .manager import TodoManager
from .exceptions import (
    TodoSpacesError,
    DirectoryCreateFailed,
    LoadFailed,
    PersistFailed,
    SpaceNotFound,
    IndexOutOfRange,
)

__all__ = [
    "Priority",
    "StatusFilter",
    "TodoItem",
    "DEFAULT_SPACE",
    "SpaceSummary",
    "TodoSpace",
    "TodoManager",
    "TodoSpacesError",
    "DirectoryCreateFailed",
    "LoadFailed",
    "PersistFailed",
    "SpaceNotFound",
    "IndexOutOfRange",
    "__version__",
]

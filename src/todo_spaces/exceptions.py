"""Exceptions raised by the todo store."""

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class TodoSpacesError(Exception):
    """Base exception for todo store operations."""
    pass


class DirectoryCreateFailed(TodoSpacesError):
    """The directory holding the todo file could not be created."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(f"Could not create directory {self.path}")


class LoadFailed(TodoSpacesError):
    """The todo file is missing, unreadable, or not valid text."""

    def __init__(self, path: PathLike, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Could not load todos from {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PersistFailed(TodoSpacesError):
    """Writing the todo file failed; the last change may be lost."""

    def __init__(self, path: PathLike, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Could not save todos to {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SpaceNotFound(TodoSpacesError):
    """No space with the requested name exists."""

    def __init__(self, space_name: str):
        self.space_name = space_name
        super().__init__(f"Space not found: {space_name}")


class IndexOutOfRange(TodoSpacesError):
    """The task index is past the end of the space."""

    def __init__(self, index: int, space_name: str, size: int):
        self.index = index
        self.space_name = space_name
        self.size = size
        super().__init__(
            f"Index {index} out of range for space '{space_name}' "
            f"({size} task{'s' if size != 1 else ''})"
        )

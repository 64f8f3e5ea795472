"""Todo space model for the Todo Spaces application."""

from dataclasses import dataclass, field
from typing import List, NamedTuple

from .todo import TodoItem

DEFAULT_SPACE = "Default"


class SpaceSummary(NamedTuple):
    """Completion counts for one space."""
    name: str
    completed: int
    total: int


@dataclass
class TodoSpace:
    """A named, ordered group of tasks."""

    name: str
    todos: List[TodoItem] = field(default_factory=list)

    @property
    def is_default(self) -> bool:
        return self.name == DEFAULT_SPACE

    def is_vacuous_default(self) -> bool:
        """True for an empty Default space, which stands for "no spaces yet"."""
        return self.is_default and not self.todos

    def completed_count(self) -> int:
        return sum(1 for todo in self.todos if todo.status)

    def summary(self) -> SpaceSummary:
        return SpaceSummary(self.name, self.completed_count(), len(self.todos))

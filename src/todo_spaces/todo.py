"""Todo data model for the Todo Spaces application."""

from dataclasses import dataclass
from enum import Enum


class Priority(Enum):
    """Task priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def from_markdown(cls, line: str) -> "Priority":
        """Find the priority tag anywhere in a task line.

        Tags are checked from most to least urgent, so a line carrying more
        than one tag resolves to the most urgent of them. A line without a
        recognised tag is MEDIUM.
        """
        for priority in _TAG_PRECEDENCE:
            if priority.to_markdown() in line:
                return priority
        return cls.MEDIUM

    @classmethod
    def from_name(cls, name: str) -> "Priority":
        """Look up a priority by name, ignoring case ("urgent", "High")."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown priority: {name!r}") from None

    def to_markdown(self) -> str:
        """Return the inline tag for this priority, e.g. ``{HIGH}``."""
        return "{" + self.name + "}"


_TAG_PRECEDENCE = (Priority.URGENT, Priority.HIGH, Priority.MEDIUM, Priority.LOW)

PRIORITY_TAGS = tuple(p.to_markdown() for p in _TAG_PRECEDENCE)


class StatusFilter(Enum):
    """Which tasks a listing includes."""
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    def matches(self, todo: "TodoItem") -> bool:
        if self is StatusFilter.COMPLETED:
            return todo.status
        if self is StatusFilter.PENDING:
            return not todo.status
        return True


@dataclass
class TodoItem:
    """A single task.

    A task has no identifier of its own; it is addressed by its position in
    the owning space.
    """

    item: str
    status: bool = False
    priority: Priority = Priority.MEDIUM

    def toggle(self) -> None:
        """Flip between pending and completed."""
        self.status = not self.status

    @property
    def checkbox(self) -> str:
        return "[x]" if self.status else "[ ]"

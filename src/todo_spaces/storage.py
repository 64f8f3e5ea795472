"""Markdown storage format for Todo Spaces.

A todo file is plain UTF-8 text::

    - [ ] task in the default space {MEDIUM}

    [[Work]]
    - [x] ship release {URGENT}

Space headers are ``[[name]]``; the ``Default`` space never gets a header,
so tasks before the first header belong to it. Each space's block ends with
one blank line.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .exceptions import LoadFailed, PathLike, PersistFailed
from .space import DEFAULT_SPACE, TodoSpace
from .todo import PRIORITY_TAGS, Priority, TodoItem

logger = logging.getLogger(__name__)

PENDING_PREFIX = "- [ ]"
COMPLETED_PREFIX = "- [x]"
HEADER_OPEN = "[["
HEADER_CLOSE = "]]"


def strip_priority_tags(text: str) -> str:
    """Remove every known priority tag from text and trim it."""
    for tag in PRIORITY_TAGS:
        text = text.replace(tag, "")
    return text.strip()


class TodoMarkdownFormat:
    """Handles conversion between TodoItem objects and task lines."""

    @staticmethod
    def to_markdown(todo: TodoItem) -> str:
        """Convert a TodoItem to a task line."""
        return f"- {todo.checkbox} {todo.item} {todo.priority.to_markdown()}"

    @staticmethod
    def from_markdown(line: str) -> Optional[TodoItem]:
        """Parse a task line, or return None if the line is not a task."""
        line = line.strip()

        if line.startswith(COMPLETED_PREFIX):
            status = True
        elif line.startswith(PENDING_PREFIX):
            status = False
        else:
            return None

        # Both prefixes have the same length
        remainder = line[len(PENDING_PREFIX):]
        priority = Priority.from_markdown(remainder)

        # Empty descriptions are kept so malformed lines are not silently lost
        return TodoItem(item=strip_priority_tags(remainder), status=status, priority=priority)


class SpaceMarkdownFormat:
    """Handles conversion between space headers and TodoSpace objects."""

    @staticmethod
    def header(space: TodoSpace) -> Optional[str]:
        """Header line for a space; the Default space has none."""
        if space.is_default:
            return None
        return f"{HEADER_OPEN}{space.name}{HEADER_CLOSE}"

    @staticmethod
    def parse_header(line: str) -> Optional[str]:
        """Return the space name if the line is a header, else None."""
        line = line.strip()
        if (
            len(line) >= len(HEADER_OPEN) + len(HEADER_CLOSE)
            and line.startswith(HEADER_OPEN)
            and line.endswith(HEADER_CLOSE)
        ):
            return line[len(HEADER_OPEN):-len(HEADER_CLOSE)]
        return None

    @staticmethod
    def to_markdown(space: TodoSpace) -> str:
        """Render one space block, including its trailing blank line."""
        lines = []
        header = SpaceMarkdownFormat.header(space)
        if header is not None:
            lines.append(header)
        for todo in space.todos:
            lines.append(TodoMarkdownFormat.to_markdown(todo))
        lines.append("")
        return "\n".join(lines) + "\n"


def parse_markdown_todos(content: str) -> List[TodoSpace]:
    """Parse a todo file into its spaces, in file order.

    Tasks before the first header go to an implicit Default space, which is
    dropped when it ends up empty. A file with no spaces at all yields a
    single empty Default space.
    """
    spaces: List[TodoSpace] = []
    current = TodoSpace(name=DEFAULT_SPACE)

    for line in content.split("\n"):
        name = SpaceMarkdownFormat.parse_header(line)
        if name is not None:
            if not current.is_vacuous_default():
                spaces.append(current)
            current = TodoSpace(name=name)
            continue

        todo = TodoMarkdownFormat.from_markdown(line)
        if todo is not None:
            current.todos.append(todo)

    if not current.is_vacuous_default():
        spaces.append(current)

    if not spaces:
        spaces.append(TodoSpace(name=DEFAULT_SPACE))
    return spaces


def format_todos_as_markdown(spaces: Sequence[TodoSpace]) -> str:
    """Render spaces back into the text parsed by parse_markdown_todos."""
    return "".join(SpaceMarkdownFormat.to_markdown(space) for space in spaces)


def load_spaces(file_path: PathLike) -> List[TodoSpace]:
    """Read and parse a todo file.

    Raises:
        LoadFailed: the file is missing, unreadable, or not valid UTF-8
    """
    path = Path(file_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadFailed(path, str(e)) from e

    spaces = parse_markdown_todos(content)
    logger.debug(f"Loaded {len(spaces)} space(s) from {path}")
    return spaces


def save_spaces(file_path: PathLike, spaces: Sequence[TodoSpace]) -> None:
    """Write spaces to a todo file, replacing it atomically.

    The content goes to a sibling ``.tmp`` file first and is then renamed
    over the target, so an interrupted write leaves the old file intact.

    Raises:
        PersistFailed: the file could not be written
    """
    path = Path(file_path)
    tmp = path.with_name(path.name + ".tmp")
    content = format_todos_as_markdown(spaces)

    try:
        with open(tmp, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        tmp.replace(path)
    except OSError as e:
        try:
            tmp.unlink()
        except OSError:
            pass
        raise PersistFailed(path, str(e)) from e

    logger.debug(f"Saved {len(spaces)} space(s) to {path}")

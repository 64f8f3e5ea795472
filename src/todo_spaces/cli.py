"""Command-line interface for Todo Spaces."""

import logging
import sys
from pathlib import Path
import click
from rich.console import Console
from rich.text import Text

from .config import ConfigModel, get_config, load_config, resolve_todo_path
from .exceptions import TodoSpacesError
from .manager import TodoManager
from .space import TodoSpace
from .todo import PRIORITY_TAGS, Priority, StatusFilter, TodoItem

logger = logging.getLogger(__name__)

PRIORITY_CHOICES = [p.value for p in Priority]

priority_styles = {
    Priority.URGENT: "bold red",
    Priority.HIGH: "yellow",
    Priority.MEDIUM: "white",
    Priority.LOW: "dim",
}


def get_console(stderr: bool = False) -> Console:
    """Console honouring the no_color setting."""
    config = get_config()
    return Console(stderr=stderr, no_color=config.no_color, highlight=False, soft_wrap=True)


def fail(error: Exception) -> None:
    """Report an error on stderr and exit with status 1."""
    get_console(stderr=True).print(Text(f"Error: {error}", style="red"))
    sys.exit(1)


def get_manager(ctx: click.Context) -> TodoManager:
    """Open the todo file chosen for this invocation."""
    return TodoManager(ctx.obj["todo_path"])


def format_todo_for_display(index: int, todo: TodoItem) -> Text:
    """Format a task as ``- 3: [x] text {TAG}``."""
    text = Text(f"- {index}: ")
    text.append(todo.checkbox, style="green" if todo.status else "cyan")
    text.append(" ")
    text.append(todo.item, style="strike dim" if todo.status else priority_styles[todo.priority])
    text.append(" ")
    text.append(todo.priority.to_markdown(), style=priority_styles[todo.priority])
    return text


def print_space(console: Console, space: TodoSpace, todos) -> None:
    console.print(Text(f"=== {space.name} ===", style="bold"))
    for index, todo in todos:
        console.print(format_todo_for_display(index, todo))
    console.print()


def has_line_break(value: str) -> bool:
    """True if value would not stay on one line of the todo file."""
    return value.splitlines() != [value]


def validate_description(ctx, param, value: str) -> str:
    """Reject empty descriptions and ones carrying a line break or priority tag."""
    value = value.strip()
    if not value:
        raise click.BadParameter("description must not be empty")
    if has_line_break(value):
        raise click.BadParameter("description must be a single line")
    for tag in PRIORITY_TAGS:
        if tag in value:
            raise click.BadParameter(f"description must not contain {tag}; use --priority")
    return value


def validate_space_name(ctx, param, value):
    """Reject space names that would break across lines."""
    if value and has_line_break(value):
        raise click.BadParameter("space name must be a single line")
    return value


@click.group()
@click.option("--file", "-f", "todo_file", type=click.Path(dir_okay=False),
              help="Todo file (default: $TODO_FILE or $XDG_CONFIG_HOME/todo/todos.md)")
@click.option("--config", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, todo_file, config, verbose):
    """Todo Spaces - a small todo manager with named spaces."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    # Load configuration
    if config:
        settings: ConfigModel = load_config(Path(config))
    else:
        settings = get_config()
    ctx.obj["config"] = settings
    ctx.obj["todo_path"] = resolve_todo_path(todo_file, settings)
    logger.debug(f"Using todo file {ctx.obj['todo_path']}")


@main.command()
@click.pass_context
def new(ctx):
    """Create the todo file if it does not exist yet."""
    try:
        manager = get_manager(ctx)
    except TodoSpacesError as e:
        fail(e)
    get_console().print(f"Todo manager initialized at: {manager.file_path}", markup=False)


@main.command()
@click.argument("text", callback=validate_description)
@click.option("--space", "-s", "space_name", callback=validate_space_name, help="Space name")
@click.option("--priority", "-p", type=click.Choice(PRIORITY_CHOICES, case_sensitive=False),
              help="Task priority (default from config, normally medium)")
@click.pass_context
def add(ctx, text, space_name, priority):
    """Add a new todo item."""
    config = ctx.obj["config"]
    space_name = space_name or config.default_space
    chosen = Priority.from_name(priority) if priority else config.default_priority

    try:
        manager = get_manager(ctx)
        manager.add_todo(text, space_name, chosen)
    except TodoSpacesError as e:
        fail(e)

    space = manager.find_space(space_name)
    get_console().print(
        f"Added to {space_name} at index {len(space.todos) - 1}: {text} {chosen.to_markdown()}",
        markup=False,
    )


@main.command()
@click.argument("index", type=click.IntRange(min=0), default=0)
@click.option("--space", "-s", "space_name", callback=validate_space_name, help="Space name")
@click.pass_context
def toggle(ctx, index, space_name):
    """Mark a todo done, or pending again."""
    space_name = space_name or ctx.obj["config"].default_space
    try:
        manager = get_manager(ctx)
        todo = manager.toggle_todo(index, space_name)
    except TodoSpacesError as e:
        fail(e)

    get_console().print(format_todo_for_display(index, todo))


@main.command()
@click.argument("index", type=click.IntRange(min=0), default=0)
@click.option("--space", "-s", "space_name", callback=validate_space_name, help="Space name")
@click.pass_context
def delete(ctx, index, space_name):
    """Delete a todo. Later todos in the space move up by one."""
    space_name = space_name or ctx.obj["config"].default_space
    try:
        manager = get_manager(ctx)
        todo = manager.delete_todo(index, space_name)
    except TodoSpacesError as e:
        fail(e)

    get_console().print(f"Deleted from {space_name}: {todo.item}", markup=False)


def show_todos(ctx: click.Context, status_filter: StatusFilter) -> None:
    try:
        manager = get_manager(ctx)
    except TodoSpacesError as e:
        fail(e)

    console = get_console()
    for space, todos in manager.list_todos(status_filter):
        print_space(console, space, todos)


@main.command(name="list")
@click.option("--completed", "status_filter", flag_value=StatusFilter.COMPLETED.value,
              help="Only completed todos")
@click.option("--pending", "status_filter", flag_value=StatusFilter.PENDING.value,
              help="Only pending todos")
@click.pass_context
def list_command(ctx, status_filter):
    """List todos in every space."""
    show_todos(ctx, StatusFilter(status_filter) if status_filter else StatusFilter.ALL)


@main.command(name="list-completed")
@click.pass_context
def list_completed(ctx):
    """List completed todos."""
    show_todos(ctx, StatusFilter.COMPLETED)


@main.command(name="list-pending")
@click.pass_context
def list_pending(ctx):
    """List pending todos."""
    show_todos(ctx, StatusFilter.PENDING)


@main.command(name="list-spaces")
@click.pass_context
def list_spaces(ctx):
    """List spaces with their completion counts."""
    try:
        manager = get_manager(ctx)
    except TodoSpacesError as e:
        fail(e)

    console = get_console()
    for summary in manager.list_spaces():
        console.print(
            f"{summary.name} ({summary.completed}/{summary.total} completed)",
            markup=False,
        )


@main.command()
@click.pass_context
def edit(ctx):
    """Open the todo file in $VISUAL or $EDITOR."""
    try:
        manager = get_manager(ctx)
    except TodoSpacesError as e:
        fail(e)

    click.edit(filename=str(manager.file_path), editor=ctx.obj["config"].editor)


if __name__ == "__main__":
    main()

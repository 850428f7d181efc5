"""Ticklist CLI - terminal to-do list."""

import json
import logging
import sys
from pathlib import Path

import click

from .adapters.json_store import StorageError, task_to_dict
from .config import load_config
from .core.filters import FILTER_NAMES
from .core.report import compute_stats, format_priority, format_stats
from .core.tasks import ValidationError
from .workflows import (
    EXPORT_FORMATS,
    TaskNotFoundError,
    add_task,
    clear_completed,
    delete_task,
    export_tasks,
    get_repository,
    import_tasks,
    list_tasks,
    set_completed,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _fail(message) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _repository(ctx: click.Context):
    return get_repository(ctx.obj["config"], ctx.obj["data_file"])


@click.group()
@click.version_option(package_name="ticklist")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Todo file to use instead of the configured one",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, data_file: Path | None):
    """Ticklist - keyboard-driven to-do list."""
    if verbose:
        logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config()
    ctx.obj["data_file"] = data_file


@main.command()
@click.argument("description")
@click.option("--priority", "-p", type=click.IntRange(1, 5), default=None, help="Priority 1 (low) to 5 (critical)")
@click.pass_context
def add(ctx: click.Context, description: str, priority: int | None):
    """Add a new todo."""
    try:
        task = add_task(_repository(ctx), description, priority)
    except (ValidationError, StorageError) as e:
        _fail(e)

    suffix = f" with {format_priority(task.priority)} priority" if task.priority else ""
    click.echo(f'Added todo #{task.id}: "{task.description}"{suffix}')


@main.command("list")
@click.option(
    "--filter",
    "filter_name",
    type=click.Choice(list(FILTER_NAMES)),
    default="all",
    help="Only show matching todos",
)
@click.option("--detailed", "-d", is_flag=True, help="Show timestamps and priority")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_cmd(ctx: click.Context, filter_name: str, detailed: bool, as_json: bool):
    """List todos."""
    config = ctx.obj["config"]
    try:
        store, view = list_tasks(_repository(ctx), filter_name, soon_hours=config.due_soon_hours)
    except StorageError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([task_to_dict(task) for _, task in view], indent=2, ensure_ascii=False))
        return

    if not view:
        click.echo("No todos found.")
        return

    click.echo("Todo List")
    click.echo("─" * 50)
    for _, task in view:
        status = "[x]" if task.completed else "[ ]"
        priority = f" {format_priority(task.priority)}" if detailed and task.priority else ""
        line = f"{status} [#{task.id}] {task.description}{priority}"
        if detailed:
            click.echo(f"\n{line}")
            click.echo(f"   Created: {task.created_at.astimezone():%Y-%m-%d %H:%M}")
            if task.completed_at:
                click.echo(f"   Completed: {task.completed_at.astimezone():%Y-%m-%d %H:%M}")
            if task.due_date:
                click.echo(f"   Due: {task.due_date.astimezone():%Y-%m-%d}")
            if task.details:
                click.echo(f"   Details: {task.details}")
        else:
            click.echo(line)

    total, completed, pending = store.counts()
    click.echo("─" * 50)
    click.echo(f"Total: {total} | Completed: {completed} | Pending: {pending}")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def complete(ctx: click.Context, task_id: int):
    """Mark a todo as completed."""
    try:
        task, changed = set_completed(_repository(ctx), task_id, True)
    except (TaskNotFoundError, StorageError) as e:
        _fail(e)

    if changed:
        click.echo(f'Completed todo #{task.id}: "{task.description}"')
    else:
        click.echo(f"Todo #{task.id} is already completed")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def uncomplete(ctx: click.Context, task_id: int):
    """Mark a todo as pending again."""
    try:
        task, changed = set_completed(_repository(ctx), task_id, False)
    except (TaskNotFoundError, StorageError) as e:
        _fail(e)

    if changed:
        click.echo(f'Marked todo #{task.id} as pending: "{task.description}"')
    else:
        click.echo(f"Todo #{task.id} is already pending")


@main.command()
@click.argument("task_id", type=int)
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete(ctx: click.Context, task_id: int, force: bool):
    """Delete a todo."""
    repository = _repository(ctx)
    try:
        task = repository.load().find(task_id)
    except StorageError as e:
        _fail(e)
    if task is None:
        _fail(TaskNotFoundError(task_id))

    if not force and not click.confirm(f'Delete todo #{task_id}: "{task.description}"?'):
        click.echo("Deletion cancelled.")
        return

    try:
        delete_task(repository, task_id)
    except (TaskNotFoundError, StorageError) as e:
        _fail(e)
    click.echo(f'Deleted todo #{task_id}: "{task.description}"')


@main.command()
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
def clear(ctx: click.Context, force: bool):
    """Remove all completed todos."""
    repository = _repository(ctx)
    try:
        _, completed, _ = repository.load().counts()
    except StorageError as e:
        _fail(e)

    if not completed:
        click.echo("No completed todos to clear.")
        return
    if not force and not click.confirm(f"Clear {completed} completed todo(s)?"):
        click.echo("Clear operation cancelled.")
        return

    try:
        removed = clear_completed(repository)
    except StorageError as e:
        _fail(e)
    click.echo(f"Cleared {removed} completed todo(s)")


@main.command()
@click.pass_context
def stats(ctx: click.Context):
    """Show todo statistics."""
    try:
        store = _repository(ctx).load()
    except StorageError as e:
        _fail(e)

    if not len(store):
        click.echo("No todos to analyze.")
        return
    click.echo(format_stats(compute_stats(store)))


@main.command()
@click.option("--format", "fmt", type=click.Choice(EXPORT_FORMATS), default="json", help="Output format")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write to file")
@click.pass_context
def export(ctx: click.Context, fmt: str, output: Path | None):
    """Export todos."""
    try:
        content = export_tasks(_repository(ctx), fmt)
    except StorageError as e:
        _fail(e)

    if output is None:
        click.echo(content, nl=False)
        return
    try:
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        _fail(f"Failed to write {output}: {e}")
    click.echo(f"Exported todos to {output}")


@main.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--merge", is_flag=True, help="Append to existing todos instead of replacing them")
@click.pass_context
def import_cmd(ctx: click.Context, source: Path, merge: bool):
    """Import todos from a JSON export."""
    if not merge:
        logger.warning("Replacing existing todos with imported data")
    try:
        count = import_tasks(_repository(ctx), source, merge)
    except StorageError as e:
        _fail(e)

    if merge:
        click.echo(f"Imported and merged {count} todo(s)")
    else:
        click.echo(f"Imported {count} todo(s) (replaced existing)")


@main.command()
@click.pass_context
def tui(ctx: click.Context):
    """Open the full-screen interactive list."""
    from .tui import run

    config = ctx.obj["config"]
    # Log records would corrupt the curses screen, so send them to a file
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=config.log_file,
        format=LOG_FORMAT,
        level=logging.DEBUG if logging.getLogger().isEnabledFor(logging.DEBUG) else logging.INFO,
        force=True,
    )

    try:
        run(_repository(ctx), config)
    except StorageError as e:
        _fail(e)


main.add_command(tui, name="interactive")

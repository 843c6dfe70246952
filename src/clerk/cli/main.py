# src/clerk/cli/main.py

"""
CLI entrypoint.

Every command loads the task file, applies one change and saves it back.
Errors from the core surface here as `Error: <message>` with exit status 1.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ..config import ENV_VARS
from ..core.report import render_tasks
from ..core.timer import run_timer
from ..errors import ClerkError
from ..tasks.task_api import add_task, delete_task, edit_task, get_task, stop_task
from .bootstrap import AppContext, create_app_context

logger = logging.getLogger(__name__)

_EPILOG = "\b\nEnvironment:\n" + "\n".join(f"  {k}  {v}" for k, v in ENV_VARS.items())


class ClerkGroup(click.Group):
    """Turns core failures into a clean fatal exit instead of a traceback."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except (ClerkError, ValueError) as exc:
            logger.debug("Command failed.", exc_info=True)
            raise click.ClickException(str(exc)) from exc


def _split_edited(text: str) -> tuple[str, str]:
    """First line is the title, the rest (minus leading blank lines) the description."""
    title, _, rest = text.partition("\n")
    return title.strip(), rest.lstrip("\n").rstrip()


task_id_option = click.option(
    "-i", "--id", "task_id", type=int, required=True, help="Id of the task."
)


@click.group(
    cls=ClerkGroup,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_EPILOG,
)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Task file to use instead of the configured one.",
)
@click.pass_context
def cli(ctx: click.Context, db_path: Path | None) -> None:
    """Track time spent on tasks."""
    ctx.obj = create_app_context(db_path=db_path)


@cli.command()
@click.option("-t", "--title", required=True, help="Title of the task.")
@click.option("-d", "--description", default="", help="Description of the task.")
@click.pass_obj
def add(app: AppContext, title: str, description: str) -> None:
    """Add a task."""
    task_id = add_task(app.store, title=title, description=description)
    click.echo(task_id)


@cli.command()
@task_id_option
@click.option("-t", "--title", default=None, help="New title.")
@click.option("-d", "--description", default=None, help="New description.")
@click.pass_obj
def edit(app: AppContext, task_id: int, title: str | None, description: str | None) -> None:
    """Edit an existing task.

    Without --title/--description the task is opened in $EDITOR.
    """
    if title is None and description is None:
        task = get_task(app.store, task_id)
        edited = click.edit(f"{task.title}\n\n{task.description}")
        if edited is None:
            click.echo("No changes.")
            return
        title, description = _split_edited(edited)

    edit_task(app.store, task_id, title=title, description=description)


@cli.command()
@task_id_option
@click.pass_obj
def delete(app: AppContext, task_id: int) -> None:
    """Delete a task."""
    delete_task(app.store, task_id)


cli.add_command(delete, name="remove")


@cli.command()
@task_id_option
@click.pass_obj
def start(app: AppContext, task_id: int) -> None:
    """Start a task and show a timer until interrupted."""
    run_timer(app.store, task_id, tick=app.settings.tick_seconds)


@cli.command()
@task_id_option
@click.pass_obj
def stop(app: AppContext, task_id: int) -> None:
    """Stop a running task."""
    stop_task(app.store, task_id)


@cli.command("list")
@click.option("-v", "--verbose", is_flag=True, help="Show descriptions and every event.")
@click.pass_obj
def list_(app: AppContext, verbose: bool) -> None:
    """List tasks and the time spent on them."""
    click.echo(render_tasks(app.store.load(), verbose=verbose), nl=False)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

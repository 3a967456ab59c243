"""CLI entrypoint."""

import logging
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from relist import __version__
from relist.errors import RelistError
from relist.models.plan import DeleteOp, DeletionMarker, Plan, PlanOptions
from relist.processors.executor import PlanExecutor
from relist.processors.planner import RenamePlanner
from relist.processors.validator import validate_inputs
from relist.services import ClickEditor


console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, markup=False)],
        force=True,
    )


def _parse_marker(ctx: click.Context, param: click.Parameter, value: str | None) -> DeletionMarker:
    if value is None:
        return DeletionMarker.empty_line()
    if len(value) != 1 or value.isspace():
        raise click.BadParameter("must be a single non-whitespace character")
    return DeletionMarker.prefix(value)


def _fail(error: RelistError) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", soft_wrap=True)
    raise SystemExit(1) from error


def _print_plan(plan: Plan) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Operation")
    table.add_column("Source", style="cyan")
    table.add_column("Destination", style="green")

    for ix, op in enumerate(plan.operations(), start=1):
        if isinstance(op, DeleteOp):
            table.add_row(str(ix), "[red]delete[/red]", escape(str(op.path)), "")
        else:
            table.add_row(str(ix), "rename", escape(str(op.source)), escape(str(op.destination)))

    console.print(table)


@click.command(context_settings=dict(show_default=True))
@click.argument("files", nargs=-1)
@click.option(
    "-f",
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite existing files. Directories are never overwritten.",
)
@click.option(
    "-d",
    "--delete",
    is_flag=True,
    default=False,
    help="Allow deleting files (moved to the trash) by blanking their line.",
)
@click.option("-g", "--git", is_flag=True, default=False, help="Use 'git mv' and 'git rm' for files tracked by git.")
@click.option(
    "-e",
    "--editor",
    type=str,
    default=None,
    help="Editor command. Defaults to $VISUAL, then $EDITOR.",
)
@click.option(
    "-m",
    "--marker",
    type=str,
    default=None,
    callback=_parse_marker,
    help="Mark deletions by prefixing a line with this character instead of blanking it.",
)
@click.option("-n", "--dry-run", is_flag=True, default=False, help="Show the planned operations without applying them.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log each filesystem operation.")
@click.version_option(version=__version__, prog_name="relist")
def cli(
    files: tuple[str, ...],
    force: bool,
    delete: bool,
    git: bool,
    editor: str | None,
    marker: DeletionMarker,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Batch rename files by editing their names in a text editor.

    The FILES are opened in your editor, one name per line. Edit the names,
    save, and exit: each file is renamed to the name on its line. Directories
    along the new paths are created as needed. Do not add or remove lines.

    Examples:

        relist *.mp3

        relist --delete --git src/*.py
    """
    _configure_logging(verbose)

    if not files:
        return

    inputs = [name.strip() for name in files]
    options = PlanOptions(force=force, delete=delete, git=git, marker=marker)

    try:
        validate_inputs(inputs, options.marker)
        edited = ClickEditor(editor=editor).edit("\n".join(inputs) + "\n")
        plan = RenamePlanner(options).build_plan(inputs, edited)
    except RelistError as e:
        _fail(e)

    if plan.is_empty:
        console.print("[yellow]Nothing to do.[/yellow]")
        return

    if dry_run:
        console.print("[bold]Planned operations:[/bold]")
        _print_plan(plan)
        console.print("[yellow]Dry run. No files were changed.[/yellow]")
        return

    try:
        applied = PlanExecutor.from_options(options).execute(plan)
    except RelistError as e:
        _fail(e)

    console.print(f"[bold green]Done.[/bold green] Applied {applied} operation(s).")

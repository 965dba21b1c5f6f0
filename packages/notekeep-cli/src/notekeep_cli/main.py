from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import TYPE_CHECKING

import typer
from notekeep_core import (
    CapacityExceededError,
    ConfigError,
    Note,
    NotekeepConfig,
    __version__,
    setup_logging,
)
from notekeep_store import NoteServiceBuilder
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from notekeep_store import NoteService

console = Console()

app = typer.Typer(
    name="notekeep",
    help="Notekeep: persistent notes for agents",
    no_args_is_help=True,
)


@app.callback()
def _main(
    ctx: typer.Context,
    path: str | None = typer.Option(
        None, "--path", "-p", help="Notes file (overrides configuration)"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (overrides configuration)"
    ),
) -> None:
    """Load configuration shared by all commands."""
    config = NotekeepConfig.load()
    if path is not None:
        config = replace(
            config, store=replace(config.store, backend="file", path=path)
        )
    try:
        setup_logging(config.logging, level=log_level)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(1) from exc
    ctx.obj = config


def _service(ctx: typer.Context) -> NoteService:
    try:
        return NoteServiceBuilder(ctx.obj).build()
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(1) from exc


def _notes_table(title: str, notes: list[Note], scored: bool = False) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    if scored:
        table.add_column("Score", justify="right")
    table.add_column("Tags")
    table.add_column("Content")

    for note in notes:
        row = [note.id, note.title]
        if scored:
            row.append(f"{note.relevance_score or 0.0:.2f}")
        row.append(", ".join(note.tags) or "-")
        row.append("\n".join(note.content))
        table.add_row(*row)
    return table


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """Show every stored note."""
    collection = asyncio.run(_service(ctx).list_notes())
    if not collection.notes:
        console.print("[yellow]No notes stored.[/yellow]")
        raise typer.Exit(0)
    console.print(_notes_table("Notes", list(collection.notes)))
    console.print(f"\n[dim]{len(collection.notes)} note(s).[/dim]")


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Terms that must all appear"),
) -> None:
    """Find notes containing every query term."""
    results = asyncio.run(_service(ctx).search(query))
    if not results:
        console.print(f"[yellow]No notes matched query:[/yellow] '{query}'")
        raise typer.Exit(0)
    console.print(_notes_table(f"Notes matching: '{query}'", results))
    console.print(f"\n[dim]{len(results)} result(s).[/dim]")


@app.command()
def relevant(
    ctx: typer.Context,
    context: str = typer.Argument(..., help="Free-form task context"),
) -> None:
    """Rank notes by vocabulary shared with a task context."""
    results = asyncio.run(_service(ctx).relevant_notes(context))
    if not results:
        console.print("[yellow]No relevant notes.[/yellow]")
        raise typer.Exit(0)
    console.print(_notes_table("Relevant notes", results, scored=True))


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Note title"),
    lines: list[str] = typer.Option(
        [], "--line", "-l", help="Content line (repeatable)"
    ),
    tags: list[str] = typer.Option(
        [], "--tag", "-t", help="Tag (repeatable)"
    ),
    task_ids: list[str] = typer.Option(
        [], "--task", help="Associated task id (repeatable)"
    ),
    note_id: str = typer.Option(
        "", "--id", help="Replace the note with this id"
    ),
) -> None:
    """Save a note, replacing any existing note with the same id."""
    note = Note(
        id=note_id,
        title=title,
        content=tuple(lines),
        tags=tuple(tags),
        task_ids=tuple(task_ids),
    )
    try:
        stored = asyncio.run(_service(ctx).save(note))
    except CapacityExceededError as exc:
        console.print(f"[red]Note not saved:[/red] {exc}")
        raise typer.Exit(1) from exc

    # The service hands back the input note itself when it could not store it
    if stored is note:
        console.print("[red]Note could not be saved.[/red] See log for details.")
        raise typer.Exit(1)
    console.print(f"[green]Saved[/green] {stored.id}")


@app.command()
def version() -> None:
    """Show the notekeep version."""
    console.print(f"notekeep {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

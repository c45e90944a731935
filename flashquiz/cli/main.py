"""
CLI entry point for flashquiz.
"""

# Standard library imports
import logging
from pathlib import Path
from typing import Optional

# Third-party imports
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

# Local application imports
from flashquiz.config import Settings, get_settings
from flashquiz.exceptions import CardFileError, CardFileNotFoundError
from flashquiz.persistence import CardFileFormat, import_cards
from flashquiz.session import create_session
from flashquiz.stats import StatsReporter, describe_hardest
from flashquiz.store import CardStore


console = Console()

app = typer.Typer(
    name="flashquiz",
    help="Flashquiz: terminal flashcard trainer.",
    add_completion=False,
    rich_markup_mode="markdown",
)


def _configure_logging(level: Optional[str]) -> None:
    """
    Send flashquiz diagnostics to stderr at `level`, or silence them when no level is set.
    """
    if level is None:
        return
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise typer.BadParameter(
            f"Unknown log level '{level}'.", param_hint="'--log-level'"
        )
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        console.print(
            f"[bold red]Invalid configuration: {escape(str(e))}[/bold red]"
        )
        raise typer.Exit(code=1) from e


_basic_option = typer.Option(  # noqa: B008
    None,
    "--basic/--extended",
    help="Basic sessions use two-field card files and omit the "
    "log, hardest card and reset stats actions.",
)

_log_level_option = typer.Option(  # noqa: B008
    None,
    "--log-level",
    help="Diagnostic log level (DEBUG, INFO, WARNING, ERROR). "
    "Falls back to FLASHQUIZ_LOG_LEVEL.",
)


# ---------------------------------------------------------------------------
# Start
# ---------------------------------------------------------------------------


@app.command()
def start(
    import_from: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--import-from",
        help="Card file to load before the first prompt.",
    ),
    export_to: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--export-to",
        help="Card file to write when the session ends.",
    ),
    basic: Optional[bool] = _basic_option,
    color: Optional[bool] = typer.Option(  # noqa: B008
        None,
        "--color/--no-color",
        help="Color session messages.",
    ),
    seed: Optional[int] = typer.Option(  # noqa: B008
        None,
        "--seed",
        help="Seed for repeatable question order.",
    ),
    log_level: Optional[str] = _log_level_option,
):
    """
    Start an interactive flashcard session.

    Command-line options override the matching FLASHQUIZ_* settings.

    Parameters:
        import_from: Optional card file imported before the first action prompt.
        export_to: Optional card file the cards are exported to after `exit`.
        basic: Run a basic session instead of an extended one.
        color: Color output; defaults to the FLASHQUIZ_COLOR setting.
        seed: Fixed seed for the quiz's random draws.
        log_level: Diagnostic log level.
    """
    settings = _load_settings()
    _configure_logging(log_level or settings.log_level)

    session = create_session(
        extended=settings.extended if basic is None else not basic,
        color=settings.color if color is None else color,
        seed=settings.seed if seed is None else seed,
        console=console,
    )
    session.run(
        import_from=import_from or settings.import_from,
        export_to=export_to or settings.export_to,
    )


# ---------------------------------------------------------------------------
# Inspect
# ---------------------------------------------------------------------------


def _display_cards(cons: Console, store: CardStore) -> None:
    """
    Print a table of every card with its mistake count, in file order.
    """
    table = Table(title="Cards")
    table.add_column("Term", style="cyan")
    table.add_column("Definition", style="green")
    table.add_column("Mistakes", style="magenta", justify="right")
    for card in store:
        table.add_row(
            Text(card.term), Text(card.definition), str(card.mistakes)
        )
    cons.print(table)


@app.command()
def inspect(
    card_file: Path = typer.Argument(  # noqa: B008
        ..., help="Card file to read."
    ),
    basic: Optional[bool] = _basic_option,
    log_level: Optional[str] = _log_level_option,
):
    """Show the cards of a card file and its hardest card."""
    settings = _load_settings()
    _configure_logging(log_level or settings.log_level)
    extended = settings.extended if basic is None else not basic
    fmt = CardFileFormat.WITH_MISTAKES if extended else CardFileFormat.BASIC

    store = CardStore()
    try:
        summary = import_cards(store, card_file, fmt)
    except CardFileNotFoundError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e
    except CardFileError as e:
        console.print(
            f"[bold red]Error reading {escape(str(card_file))}: "
            f"{escape(str(e))}[/bold red]"
        )
        raise typer.Exit(code=1) from e

    if store.is_empty():
        console.print("[yellow]No cards found in the file.[/yellow]")
    else:
        _display_cards(console, store)
        console.print(
            describe_hardest(StatsReporter(store).hardest()), markup=False
        )

    if summary.skipped:
        lines = ", ".join(str(n) for n in summary.skipped)
        console.print(
            f"[yellow]Skipped {summary.skipped_count} malformed "
            f"line(s): {lines}[/yellow]"
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application.

    If an unexpected exception occurs, print a bold red error message to the console and exit the process with status code 1.
    """
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]UNEXPECTED ERROR: {escape(str(e))}[/bold red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()

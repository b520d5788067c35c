"""CLI bootstrap for fahrtkasse."""

import enum
import logging
from collections.abc import Callable
from pathlib import Path

import typer

from fahrtkasse.application.payment_store import PaymentStore
from fahrtkasse.bootstrap import build_store
from fahrtkasse.core.settings import get_settings
from fahrtkasse.domain.errors import DomainError
from fahrtkasse.domain.money import format_money

app = typer.Typer(help="CLI for tracking shared trip payments.")
INPUT_FILE_ARGUMENT = typer.Argument(..., exists=True, dir_okay=False)
OUTPUT_FILE_OPTION = typer.Option(None, "--output", "-o", dir_okay=False)


class ExportFormat(enum.StrEnum):
    """Supported export formats."""

    JSON = "json"
    CSV = "csv"


@app.callback()
def configure() -> None:
    """Configure logging from LOG_LEVEL before running a command."""
    logging.basicConfig(level=get_settings().log_level.upper())


def _open_store() -> PaymentStore:
    try:
        return build_store()
    except DomainError as error:
        typer.echo(f"Fehler: {error.message}", err=True)
        raise typer.Exit(code=1) from error


def _run(action: str, operation: Callable[[], object]) -> None:
    try:
        operation()
    except DomainError as error:
        typer.echo(f"{action} fehlgeschlagen: {error.message}", err=True)
        raise typer.Exit(code=1) from error


def _print_state(store: PaymentStore) -> None:
    totals = store.totals
    typer.echo(f"Betrag pro Teilnehmer: {format_money(store.shared_amount)}")
    for view in store.participant_views():
        typer.echo(
            f"[{view.id}] {view.name or '-'}: "
            f"gezahlt {format_money(view.paid_amount)} | "
            f"offen {format_money(view.remaining_amount)} | "
            f"{view.status.value}"
        )
    typer.echo(
        "Teilnehmer: "
        f"{totals.active_count} | "
        f"Gezahlt: {format_money(totals.total_paid)} | "
        f"Erwartet: {format_money(totals.expected_total)} | "
        f"Ausstehend: {format_money(totals.pending_amount)}"
    )
    last_saved = store.last_saved.isoformat() if store.last_saved else "-"
    typer.echo(f"Zuletzt gespeichert: {last_saved}")


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("fahrtkasse is ready")


@app.command("show")
def show() -> None:
    """Print the roster with derived statuses and totals."""
    _print_state(_open_store())


@app.command("set-amount")
def set_amount(amount: str) -> None:
    """Set the amount every participant has to pay."""
    store = _open_store()
    _run("Speichern", lambda: store.set_shared_amount(amount))
    _print_state(store)


@app.command("add")
def add(name: str = "", paid: str = "0") -> None:
    """Add a participant, optionally with an amount already paid."""
    store = _open_store()
    _run("Speichern", lambda: store.add_participant(name, paid))
    _print_state(store)


@app.command("update")
def update(
    participant_id: int,
    name: str | None = None,
    paid: str | None = None,
) -> None:
    """Change the name and/or paid amount of one participant."""
    store = _open_store()
    _run(
        "Speichern",
        lambda: store.update_participant(participant_id, name=name, paid_amount=paid),
    )
    _print_state(store)


@app.command("remove")
def remove(participant_id: int) -> None:
    """Remove a participant from the roster."""
    store = _open_store()
    _run("Speichern", lambda: store.remove_participant(participant_id))
    _print_state(store)


@app.command("export")
def export(
    format: ExportFormat = ExportFormat.JSON,
    output: Path | None = OUTPUT_FILE_OPTION,
) -> None:
    """Export the state as JSON or CSV without changing it."""
    store = _open_store()
    content = store.export_csv() if format is ExportFormat.CSV else store.export_json()
    if output is None:
        typer.echo(content, nl=False)
        return
    output.write_text(content, encoding="utf-8")
    typer.echo(f"Exportiert nach {output}")


@app.command("import")
def import_(input: Path = INPUT_FILE_ARGUMENT) -> None:
    """Replace the whole roster from a JSON export."""
    store = _open_store()
    if not store.import_json(input.read_text(encoding="utf-8")):
        typer.echo(
            store.error
            or "Fehler beim Importieren: bitte eine gueltige JSON-Datei verwenden.",
            err=True,
        )
        raise typer.Exit(code=1)
    typer.echo("Daten erfolgreich importiert")
    _print_state(store)


def main() -> None:
    """Run the fahrtkasse CLI application."""
    app()


if __name__ == "__main__":
    main()

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fahrtkasse.cli import app
from fahrtkasse.core.settings import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def local_storage(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    storage_dir = tmp_path / "storage"
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("LOCAL_STORAGE_DIR", str(storage_dir))
    monkeypatch.setenv("EXPORT_LOCALE", "de")
    get_settings.cache_clear()
    yield storage_dir
    get_settings.cache_clear()


def test_healthcheck_command() -> None:
    result = runner.invoke(app, ["healthcheck"])

    assert result.exit_code == 0
    assert "fahrtkasse is ready" in result.output


def test_mutations_are_persisted_between_invocations(local_storage: Path) -> None:
    assert runner.invoke(app, ["set-amount", "100"]).exit_code == 0
    assert runner.invoke(app, ["add", "--name", "Anna", "--paid", "50"]).exit_code == 0
    assert runner.invoke(app, ["add", "--name", "Bo"]).exit_code == 0
    assert runner.invoke(app, ["update", "1", "--paid", "100"]).exit_code == 0

    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0
    assert "Betrag pro Teilnehmer: 100.00" in result.output
    assert "[0] Anna: gezahlt 50.00 | offen 50.00 | partial" in result.output
    assert "[1] Bo: gezahlt 100.00 | offen 0.00 | paid" in result.output
    assert "Ausstehend: 50.00" in result.output
    assert (local_storage / "payment-state.json").exists()


def test_remove_command_drops_participant() -> None:
    runner.invoke(app, ["add", "--name", "Anna"])
    runner.invoke(app, ["add", "--name", "Bo"])

    result = runner.invoke(app, ["remove", "0"])

    assert result.exit_code == 0
    assert "Anna" not in result.output
    assert "[1] Bo" in result.output


def test_invalid_amount_exits_with_error() -> None:
    result = runner.invoke(app, ["set-amount", "abc"])

    assert result.exit_code == 1
    assert "Speichern fehlgeschlagen" in result.output


def test_export_and_import_round_trip(tmp_path: Path) -> None:
    runner.invoke(app, ["set-amount", "30"])
    runner.invoke(app, ["add", "--name", "Anna", "--paid", "10"])
    export_file = tmp_path / "backup.json"

    exported = runner.invoke(app, ["export", "--output", str(export_file)])
    runner.invoke(app, ["remove", "0"])
    imported = runner.invoke(app, ["import", str(export_file)])

    assert exported.exit_code == 0
    assert json.loads(export_file.read_text(encoding="utf-8"))["version"] == "2.0"
    assert imported.exit_code == 0
    assert "Daten erfolgreich importiert" in imported.output
    assert "[0] Anna: gezahlt 10.00 | offen 20.00 | partial" in imported.output


def test_export_csv_to_stdout() -> None:
    runner.invoke(app, ["add", "--name", "Anna"])

    result = runner.invoke(app, ["export", "--format", "csv"])

    assert result.exit_code == 0
    assert result.output.splitlines()[0].startswith('"Name","Gezahlter Betrag')


def test_import_of_malformed_file_fails(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("[1, 2, 3]", encoding="utf-8")

    result = runner.invoke(app, ["import", str(broken)])

    assert result.exit_code == 1
    assert "Fehler beim Importieren" in result.output

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from app.schemas import SyncReport, SyncState
from cli.app import app
from exceptions import FetchError


class StubService:
    def __init__(self, report: SyncReport | None = None, error: Exception | None = None) -> None:
        self.report = report
        self.error = error
        self.closed = False

    def run(self) -> SyncReport:
        if self.error is not None:
            raise self.error
        assert self.report is not None
        return self.report

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubService) -> None:
    def factory() -> StubService:
        return stub

    factory.cache_clear = lambda: None  # type: ignore[attr-defined]
    monkeypatch.setattr("cli.app.build_default_sync_service", factory)


def test_run_prints_report(monkeypatch, runner: CliRunner) -> None:
    stub = StubService(
        report=SyncReport(
            status=SyncState.success,
            record_count=3,
            collection_path="artifacts/beehive-dashboard/public_data/beehive_data",
            message="Sync successful, committed 3 items.",
        )
    )
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 0
    assert "Sync Result" in result.stdout
    assert "record_count: 3" in result.stdout
    assert stub.closed is True


def test_run_failure_exits_non_zero(monkeypatch, runner: CliRunner) -> None:
    stub = StubService(error=FetchError("Failed to fetch data: 503 Service Unavailable"))
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1
    assert "Failed to fetch data" in result.output
    assert stub.closed is True


def test_parse_lists_records_and_skipped_rows(runner: CliRunner, tmp_path, page_builder) -> None:
    page = tmp_path / "page.html"
    page.write_text(
        page_builder(
            [
                ("2024.03.15. 08:30:00", "45,20", "4,05", "12,5"),
                ("not a date", "45,10", "4,06", "11,0"),
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["parse", str(page)])

    assert result.exit_code == 0
    assert "2024.03.15. 08:30:00" in result.stdout
    assert "weight=45.2" in result.stdout
    assert "invalid date" in result.stdout


def test_parse_can_hide_skipped_rows(runner: CliRunner, tmp_path, page_builder) -> None:
    page = tmp_path / "page.html"
    page.write_text(page_builder([]), encoding="utf-8")

    result = runner.invoke(app, ["parse", str(page), "--hide-skipped"])

    assert result.exit_code == 0
    assert "No records found." in result.stdout
    assert "Skipped rows" not in result.stdout

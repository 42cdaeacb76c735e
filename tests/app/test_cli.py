from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from vendorrecon.app import InventoryImportResult
from vendorrecon.domain.model import ReviewEntry, ReviewReason
from vendorrecon.domain.reconciliation import BatchReport
from vendorrecon.ui import cli
from tests.helpers.records import make_vendor_record


@pytest.fixture
def feed_file(tmp_path: Path) -> Path:
    path = tmp_path / "vendor.csv"
    path.write_text("sku,upc,weight,cost,retail\n", encoding="utf-8")
    return path


def test_reconcile_defaults(monkeypatch: pytest.MonkeyPatch, feed_file: Path) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(feed: Path, **kwargs: object) -> BatchReport:
        captured["feed"] = feed
        captured.update(kwargs)
        return BatchReport()

    monkeypatch.setattr(cli, "reconcile_vendor_feed", fake_reconcile)

    cli.main(["reconcile", str(feed_file)])

    assert captured["feed"] == feed_file
    assert captured["use_gateway"] is False
    assert captured["dry_run"] is False
    assert captured["database_uri"] is None


def test_reconcile_with_flags(monkeypatch: pytest.MonkeyPatch, feed_file: Path) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(feed: Path, **kwargs: object) -> BatchReport:
        captured.update(kwargs)
        return BatchReport()

    monkeypatch.setattr(cli, "reconcile_vendor_feed", fake_reconcile)

    cli.main(["-v", "reconcile", str(feed_file), "--gateway", "--dry-run", "--workers", "2"])

    assert captured["use_gateway"] is True
    assert captured["dry_run"] is True
    assert captured["config"].max_workers == 2  # type: ignore[attr-defined]


def test_database_and_gateway_are_exclusive(feed_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", str(feed_file), "--gateway", "--database", "sqlite://"])

    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    "argv",
    [
        ["reconcile", "does-not-exist.csv"],
        ["review", "--limit", "0"],
        ["import-inventory", "missing.csv"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)

    assert excinfo.value.code == 2


def test_invalid_worker_count(feed_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", str(feed_file), "--workers", "0"])

    assert excinfo.value.code == 2


def test_review_passes_reason_and_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_list(**kwargs: object) -> list[ReviewEntry]:
        captured.update(kwargs)
        return [ReviewEntry(record=make_vendor_record(), reason=ReviewReason.NEW)]

    monkeypatch.setattr(cli, "list_review_entries", fake_list)

    cli.main(["review", "--reason", "new", "--limit", "5"])

    assert captured["reason"] is ReviewReason.NEW
    assert captured["limit"] == 5


def test_import_inventory(monkeypatch: pytest.MonkeyPatch, feed_file: Path) -> None:
    captured: dict[str, object] = {}

    def fake_import(path: Path, **kwargs: object) -> InventoryImportResult:
        captured["path"] = path
        captured.update(kwargs)
        return InventoryImportResult(imported=1, skipped=0, rejected=0)

    monkeypatch.setattr(cli, "import_inventory_snapshot", fake_import)

    cli.main(["import-inventory", str(feed_file), "--database", "sqlite://"])

    assert captured == {"path": feed_file, "database_uri": "sqlite://"}


def test_runtime_failure_exits_with_error(
    monkeypatch: pytest.MonkeyPatch, feed_file: Path
) -> None:
    def failing_reconcile(*_: object, **__: object) -> BatchReport:
        raise RuntimeError("inventory exploded")

    monkeypatch.setattr(cli, "reconcile_vendor_feed", failing_reconcile)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", str(feed_file)])

    assert excinfo.value.code == 1

import logging
import os
from datetime import datetime, timedelta

import pytest

from erp_site.logging import configure_logging, purge_old_logs


def _age(path, days):
    stamp = (datetime.now() - timedelta(days=days)).timestamp()
    os.utime(path, (stamp, stamp))


@pytest.fixture
def root_handlers():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in before:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)


def test_purge_keeps_recent_and_active_files(tmp_path):
    log_file = tmp_path / "erp.log"
    log_file.write_text("active")
    stale = tmp_path / "erp.log.1"
    recent = tmp_path / "erp.log.2"
    unrelated = tmp_path / "other.log.1"
    for path in (stale, recent, unrelated):
        path.write_text("x")
    _age(log_file, 40)
    _age(stale, 8)
    _age(recent, 1)
    _age(unrelated, 40)

    removed = purge_old_logs(log_file, 7)

    assert removed == [stale.resolve()]
    assert log_file.exists()
    assert recent.exists()
    assert unrelated.exists()


def test_zero_retention_keeps_everything(tmp_path):
    rotated = tmp_path / "erp.log.1"
    rotated.write_text("x")
    _age(rotated, 365)

    assert purge_old_logs(tmp_path / "erp.log", 0) == []
    assert rotated.exists()


def test_configure_reads_environment_at_call_time(tmp_path, monkeypatch, root_handlers):
    log_file = tmp_path / "site.log"
    stale = tmp_path / "site.log.1"
    stale.write_text("old")
    _age(stale, 8)
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.setenv("LOG_RETENTION_DAYS", "7")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    handler = configure_logging()

    assert handler in root_handlers.handlers
    assert handler.baseFilename == str(log_file.resolve())
    assert root_handlers.level == logging.WARNING
    assert not stale.exists()


def test_configure_is_idempotent_per_file(tmp_path, root_handlers):
    log_file = tmp_path / "site.log"

    first = configure_logging(log_file, level="INFO", retention_days=0)
    second = configure_logging(log_file, level="INFO", retention_days=0)

    assert first is second
    assert root_handlers.handlers.count(first) == 1

    logging.getLogger("erp.services.stock_service").info("ledger entry posted")
    first.flush()
    assert "ledger entry posted" in log_file.read_text()


def test_empty_log_file_disables_file_logging(monkeypatch, root_handlers):
    monkeypatch.setenv("LOG_FILE", "")
    before = list(root_handlers.handlers)

    assert configure_logging() is None
    assert root_handlers.handlers == before

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from config import config
from services.account_service import AccountService
from tests.helpers.transactions import write_transactions_csv


@pytest.fixture(scope="function")
def account_service() -> AccountService:
    return AccountService()


@pytest.fixture(scope="function")
def transactions_csv(tmp_path: Path) -> Callable[[list[str]], Path]:
    def _write(lines: list[str]) -> Path:
        return write_transactions_csv(tmp_path / "transactions.csv", lines)

    return _write


@pytest.fixture(scope="function")
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    # Keep a developer's .env and LEDGER_* variables out of the settings.
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LEDGER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LEDGER_LOG_ERRORS", raising=False)
    config.cache_clear()
    yield
    config.cache_clear()


@pytest.fixture(scope="function")
def bare_root_logger() -> Generator[logging.Logger, None, None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    root.handlers = []
    yield root
    root.handlers = handlers
    root.setLevel(level)

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Sequence

from pydantic import ValidationError

from config import config
from domain.account import Account
from importers.transactions_importer import TransactionsFileError, TransactionsImporter
from services.account_service import AccountService
from utils.account_summary import render_account_summary

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger(__name__)


def run(csv_path: Path) -> list[Account]:
    if not csv_path.exists():
        raise TransactionsFileError(f"transaction file '{csv_path}' doesn't exist")
    if not csv_path.is_file():
        raise TransactionsFileError(f"'{csv_path}' is not a file")

    account_service = AccountService()
    importer = TransactionsImporter(csv_path)

    logger.info("Applying transactions from %s", csv_path)
    started = perf_counter()
    applied = 0
    for transaction in importer.load_transactions():
        if account_service.record_transaction(transaction):
            applied += 1
    accounts = account_service.summary()
    logger.info(
        "Read %d rows (%d skipped), applied %d transactions to %d accounts in %.2fs",
        importer.rows_read,
        importer.rows_skipped,
        applied,
        len(accounts),
        perf_counter() - started,
    )
    return accounts


def configure_logging(*, log_errors: bool) -> None:
    settings = config()
    level = logging.INFO if log_errors or settings.log_errors else settings.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Apply a CSV file of transactions and print the account balances.")
    parser.add_argument("transactions_file", type=Path, help="Path to the transactions .csv file")
    parser.add_argument(
        "-e",
        "--log-errors",
        action="store_true",
        help="Log skipped rows and ignored transactions to stderr",
    )
    args = parser.parse_args(argv)
    try:
        configure_logging(log_errors=args.log_errors)
    except ValidationError as exc:
        print(f"error: invalid settings: {exc}", file=sys.stderr)
        return 1

    try:
        accounts = run(args.transactions_file)
    except (OSError, UnicodeDecodeError, TransactionsFileError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    render_account_summary(accounts)
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from domain.transaction import Transaction

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx", "amount")


class TransactionsFileError(ValueError):
    pass


def _describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'row'}: {error['msg']}" for error in exc.errors()
    )


class TransactionsImporter:
    """Streams transaction records from a CSV file.

    Rows that fail validation are logged and skipped. Only a missing or
    malformed header aborts the import.
    """

    def __init__(self, source_path: str | Path) -> None:
        self._source_path = Path(source_path)
        self.rows_read = 0
        self.rows_skipped = 0

    def load_transactions(self) -> Iterator[Transaction]:
        with self._source_path.open(encoding="utf-8-sig", newline="") as handle:
            reader = csv.reader(handle)
            try:
                header = next(reader, None)
            except csv.Error as exc:
                raise TransactionsFileError(
                    f"Transactions file {self._source_path} has a malformed header: {exc}"
                ) from exc
            columns = self._column_indexes(header)

            row_number = 0
            while True:
                row_number += 1
                try:
                    row = next(reader)
                except StopIteration:
                    break
                except csv.Error as exc:
                    # The reader drops the offending line and resumes on the next one.
                    self.rows_read += 1
                    self.rows_skipped += 1
                    logger.info("Skipping row %d: %s", row_number, exc)
                    continue

                if not any(cell.strip() for cell in row):
                    continue
                self.rows_read += 1
                record = {name: row[index].strip() if index < len(row) else "" for name, index in columns.items()}
                try:
                    transaction = Transaction.model_validate(record)
                except ValidationError as exc:
                    self.rows_skipped += 1
                    logger.info("Skipping row %d %s: %s", row_number, row, _describe_validation_error(exc))
                    continue
                yield transaction

    def _column_indexes(self, header: list[str] | None) -> dict[str, int]:
        if header is None:
            raise TransactionsFileError(f"Transactions file {self._source_path} is empty or missing headers")

        normalized = [name.strip().lower() for name in header]
        missing = [name for name in REQUIRED_COLUMNS if name not in normalized]
        if missing:
            raise TransactionsFileError(
                f"Transactions file {self._source_path} missing required columns: {', '.join(missing)}"
            )
        return {name: normalized.index(name) for name in REQUIRED_COLUMNS}

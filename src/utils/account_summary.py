from __future__ import annotations

import sys
from csv import DictWriter
from typing import Iterable, TextIO

from domain.account import Account

from .formatting import format_decimal

SUMMARY_FIELDNAMES = ["client", "available", "held", "total", "locked"]


def account_row(account: Account) -> dict[str, str]:
    return {
        "client": str(account.client),
        "available": format_decimal(account.available),
        "held": format_decimal(account.held),
        "total": format_decimal(account.total),
        "locked": "true" if account.locked else "false",
    }


def render_account_summary(accounts: Iterable[Account], stream: TextIO | None = None) -> None:
    writer = DictWriter(stream or sys.stdout, fieldnames=SUMMARY_FIELDNAMES, lineterminator="\n")
    writer.writeheader()
    for account in accounts:
        writer.writerow(account_row(account))

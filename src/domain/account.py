from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from domain.base_types import ClientId

# Significant digits for balance arithmetic. A sum of 28-digit amounts
# outgrows the default decimal context.
BALANCE_PRECISION = 64


class Account(BaseModel):
    """Balances of a single client.

    ``total`` is always ``available + held``. A locked account no longer
    accepts transactions.
    """

    client: ClientId
    available: Decimal = Decimal(0)
    held: Decimal = Decimal(0)
    total: Decimal = Decimal(0)
    locked: bool = False

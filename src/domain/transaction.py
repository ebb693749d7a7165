from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from domain.base_types import MAX_CLIENT_ID, MAX_TRANSACTION_ID, ClientId, TransactionId

AMOUNT_PRECISION = Decimal("0.0001")


class TransactionType(StrEnum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"
    UNKNOWN = "unknown"


class Transaction(BaseModel):
    """A single row of the transactions file.

    Deposits and withdrawals carry an amount. Disputes, resolves and
    chargebacks reference an earlier transaction through ``tx`` and
    usually leave the amount empty.
    """

    type: TransactionType
    client: ClientId = Field(ge=0, le=MAX_CLIENT_ID)
    tx: TransactionId = Field(ge=0, le=MAX_TRANSACTION_ID)
    amount: Decimal | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: str | TransactionType) -> TransactionType:
        if isinstance(value, TransactionType):
            return value
        normalized = str(value).strip().lower()
        try:
            return TransactionType(normalized)
        except ValueError:
            return TransactionType.UNKNOWN

    @field_validator("amount", mode="before")
    @classmethod
    def _empty_amount(cls, value: str | Decimal | None) -> str | Decimal | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("amount")
    @classmethod
    def _round_amount(cls, value: Decimal | None) -> Decimal | None:
        if value is None:
            return None
        try:
            return value.quantize(AMOUNT_PRECISION, rounding=ROUND_HALF_EVEN)
        except InvalidOperation as exc:
            raise ValueError(f"amount {value} is out of range") from exc

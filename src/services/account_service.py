from __future__ import annotations

import logging
from decimal import Decimal, localcontext

from domain.account import BALANCE_PRECISION, Account
from domain.base_types import ClientId, TransactionId
from domain.transaction import Transaction, TransactionType

logger = logging.getLogger(__name__)


class TransactionRejected(Exception):
    def __init__(self, transaction: Transaction, reason: str) -> None:
        self.transaction = transaction
        self.reason = reason
        message = (
            f"Ignoring {transaction.type} client={transaction.client} tx={transaction.tx} "
            f"amount={transaction.amount}: {reason}"
        )
        super().__init__(message)


class AccountService:
    """Applies transactions to client accounts.

    This operates on good-will: an invalid transaction is not reported to the
    caller. It is logged and leaves every account untouched. All checks run
    before the first balance is modified, so no rollback is ever needed.
    """

    def __init__(self) -> None:
        self._accounts: dict[ClientId, Account] = {}
        # Deposits and withdrawals keyed by transaction id.
        self._disputable: dict[TransactionId, Transaction] = {}
        self._disputed: set[TransactionId] = set()
        self._resolved: set[TransactionId] = set()

    def record_transaction(self, transaction: Transaction) -> bool:
        """Apply ``transaction`` and report whether it changed any state."""
        account = self._get_or_create_account(transaction.client)
        try:
            with localcontext(prec=BALANCE_PRECISION):
                self._apply(account, transaction)
        except TransactionRejected as exc:
            logger.info("%s", exc)
            return False
        return True

    def get_account(self, client: ClientId) -> Account | None:
        return self._accounts.get(client)

    def summary(self) -> list[Account]:
        return [self._accounts[client] for client in sorted(self._accounts)]

    def _get_or_create_account(self, client: ClientId) -> Account:
        account = self._accounts.get(client)
        if account is None:
            account = Account(client=client)
            self._accounts[client] = account
        return account

    def _apply(self, account: Account, transaction: Transaction) -> None:
        if account.locked:
            raise TransactionRejected(transaction, "account is locked")

        match transaction.type:
            case TransactionType.DEPOSIT:
                self._deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                self._withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                self._dispute(account, transaction)
            case TransactionType.RESOLVE:
                self._resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                self._chargeback(account, transaction)
            case _:
                raise TransactionRejected(transaction, "unknown transaction type")

    def _deposit(self, account: Account, transaction: Transaction) -> None:
        amount = self._movement_amount(transaction)

        account.available += amount
        account.total += amount
        self._disputable[transaction.tx] = transaction

    def _withdrawal(self, account: Account, transaction: Transaction) -> None:
        amount = self._movement_amount(transaction)
        if amount > account.available:
            raise TransactionRejected(transaction, f"insufficient funds (available={account.available})")

        account.available -= amount
        account.total -= amount
        self._disputable[transaction.tx] = transaction

    def _dispute(self, account: Account, transaction: Transaction) -> None:
        if transaction.tx in self._disputed:
            raise TransactionRejected(transaction, "transaction was already disputed")
        amount = self._referenced_amount(transaction)

        account.available -= amount
        account.held += amount
        self._disputed.add(transaction.tx)

    def _resolve(self, account: Account, transaction: Transaction) -> None:
        if transaction.tx not in self._disputed:
            raise TransactionRejected(transaction, "transaction is not under dispute")
        if transaction.tx in self._resolved:
            raise TransactionRejected(transaction, "dispute is already resolved")
        amount = self._referenced_amount(transaction)

        account.held -= amount
        account.available += amount
        self._resolved.add(transaction.tx)

    def _chargeback(self, account: Account, transaction: Transaction) -> None:
        if transaction.tx not in self._disputed:
            raise TransactionRejected(transaction, "transaction is not under dispute")
        amount = self._referenced_amount(transaction)

        # A resolved dispute is reopened before the funds are charged back.
        if transaction.tx in self._resolved:
            account.available -= amount
            account.held += amount
            self._resolved.discard(transaction.tx)

        account.held -= amount
        account.total -= amount
        account.locked = True

    def _movement_amount(self, transaction: Transaction) -> Decimal:
        if transaction.amount is None:
            raise TransactionRejected(transaction, "amount is missing")
        if transaction.amount <= 0:
            raise TransactionRejected(transaction, "amount must be positive")
        if transaction.tx in self._disputable:
            raise TransactionRejected(transaction, "duplicate transaction id")
        return transaction.amount

    def _referenced_amount(self, transaction: Transaction) -> Decimal:
        referenced = self._disputable.get(transaction.tx)
        if referenced is None:
            raise TransactionRejected(transaction, "referenced transaction not found")
        if referenced.client != transaction.client:
            raise TransactionRejected(transaction, f"referenced transaction belongs to client {referenced.client}")
        if referenced.amount is None:
            raise TransactionRejected(transaction, "referenced transaction has no amount")
        return referenced.amount

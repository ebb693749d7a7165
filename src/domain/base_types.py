from __future__ import annotations

from typing import NewType

ClientId = NewType("ClientId", int)
TransactionId = NewType("TransactionId", int)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

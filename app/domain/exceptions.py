"""
Domain Exceptions
Failures of the investment transaction and record decoding
"""

from decimal import Decimal
from enum import Enum


class TransactionErrorCode(str, Enum):
    """Failure kinds of an investment transaction"""
    ACCOUNT_NOT_FOUND = "AccountNotFound"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    TRANSACTION_CONFLICT = "TransactionConflict"


class RecordDecodeError(ValueError):
    """A stored record is missing a required field"""

    def __init__(self, entity: str, field: str):
        self.entity = entity
        self.field = field
        super().__init__(f"{entity} record is missing required field '{field}'")


class TransactionError(Exception):
    """Base class for investment transaction failures"""

    code: TransactionErrorCode
    retryable = False


class AccountNotFoundError(TransactionError):
    code = TransactionErrorCode.ACCOUNT_NOT_FOUND

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__("Account not found")


class InsufficientBalanceError(TransactionError):
    code = TransactionErrorCode.INSUFFICIENT_BALANCE

    def __init__(self, balance: Decimal, requested: Decimal):
        self.balance = balance
        self.requested = requested
        super().__init__("Insufficient balance")


class TransactionConflictError(TransactionError):
    """
    The store could not commit the unit; the caller may retry from scratch

    The message is shown to users. Driver and SQL details are logged by the
    store and never carried here.
    """

    code = TransactionErrorCode.TRANSACTION_CONFLICT
    retryable = True

    def __init__(self):
        super().__init__("Concurrent update on account")

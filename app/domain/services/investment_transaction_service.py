"""
INVESTMENT TRANSACTION SERVICE

Places an investment as one atomic unit against the store:
read balance, reject overdraft, debit the account, record the
investment and its ledger entry. All of it commits or none of it does.

RULES:
- No partial writes
- No internal retry (TransactionConflict is returned to the caller)
- No amount bound re-check; the amount validation rule gates input
"""

import asyncio
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import AsyncContextManager, Callable, Optional, Protocol, Union

from app.domain.exceptions import (
    AccountNotFoundError,
    InsufficientBalanceError,
    TransactionError,
)
from app.domain.models import (
    Account,
    Investment,
    InvestmentCategory,
    InvestmentReceipt,
    LedgerTransaction,
    NewInvestment,
    NewLedgerTransaction,
)
from app.domain.services.amount_validation import CENT
from app.domain.services.return_rate_policy import expected_return, rate_for

logger = logging.getLogger(__name__)


class InvestmentStoreTransaction(Protocol):
    """Handle for reads and writes inside one atomic unit - ASYNC"""

    async def read_account(self, account_id: str) -> Optional[Account]:
        """Read the account, locking it for this unit where supported"""
        ...

    async def update_account(
        self,
        account: Account,
        balance: Decimal,
        total_invested: Decimal,
    ) -> None:
        """Write new totals; must fail if the account changed since it was read"""
        ...

    async def create_investment(self, investment: NewInvestment) -> Investment:
        """Insert an investment with server-assigned timestamps"""
        ...

    async def create_ledger_transaction(self, entry: NewLedgerTransaction) -> LedgerTransaction:
        """Insert a ledger entry with a server-assigned timestamp"""
        ...


class InvestmentStore(Protocol):
    """Store capable of atomic multi-record units"""

    def transaction(self) -> AsyncContextManager[InvestmentStoreTransaction]:
        """
        Open an atomic unit

        Commits when the block exits cleanly, aborts when it raises.
        Lock and serialization failures surface as TransactionConflictError.
        """
        ...


@dataclass(frozen=True)
class InvestmentResult:
    """Outcome of invest(): a receipt on success, an error otherwise"""
    receipt: Optional[InvestmentReceipt] = None
    error: Optional[TransactionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def retryable(self) -> bool:
        return self.error is not None and self.error.retryable


class InvestmentTransactionService:
    """
    Atomic investment placement

    Usage::

        service = InvestmentTransactionService(store)
        result = await service.invest(account_id, "Bonds", Decimal("200000"))
    """

    def __init__(
        self,
        store: InvestmentStore,
        rate_policy: Callable[[InvestmentCategory], Decimal] = rate_for,
    ):
        self.store = store
        self.rate_policy = rate_policy

    async def invest(
        self,
        account_id: str,
        category: Union[InvestmentCategory, str],
        amount: Decimal,
    ) -> InvestmentResult:
        """
        Debit the account and record the investment atomically

        Args:
            account_id: Opaque identity of the authenticated user
            category: Investment category or its display label
            amount: Positive amount that already passed amount validation,
                rounded half up to cents before use

        Returns:
            InvestmentResult carrying a receipt or a TransactionError
        """
        category = InvestmentCategory.from_label(category)
        # Stored amounts and balances are in cents
        amount = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
        rate = self.rate_policy(category)

        logger.info(
            "Investment requested | account=%s | category=%s | amount=%s",
            account_id,
            category.value,
            amount,
        )

        try:
            receipt = await self._run_unit(account_id, category, amount, rate)
        except TransactionError as exc:
            logger.warning(
                "Investment rejected | account=%s | category=%s | amount=%s | code=%s | reason=%s",
                account_id,
                category.value,
                amount,
                exc.code.value,
                exc,
            )
            return InvestmentResult(error=exc)
        except asyncio.CancelledError:
            logger.warning(
                "Investment cancelled before completion | account=%s | amount=%s",
                account_id,
                amount,
            )
            raise

        logger.info(
            "Investment committed | account=%s | investment_id=%s | balance_after=%s",
            account_id,
            receipt.investment_id,
            receipt.balance_after,
        )
        return InvestmentResult(receipt=receipt)

    async def _run_unit(
        self,
        account_id: str,
        category: InvestmentCategory,
        amount: Decimal,
        rate: Decimal,
    ) -> InvestmentReceipt:
        async with self.store.transaction() as txn:
            account = await txn.read_account(account_id)
            if account is None:
                raise AccountNotFoundError(account_id)

            if account.balance < amount:
                raise InsufficientBalanceError(account.balance, amount)

            balance_after = account.balance - amount

            await txn.update_account(
                account,
                balance=balance_after,
                total_invested=account.total_invested + amount,
            )

            investment = await txn.create_investment(
                NewInvestment(
                    owner_id=account_id,
                    category=category,
                    amount=amount,
                    return_rate=rate,
                    expected_return=expected_return(amount, rate),
                )
            )

            ledger_entry = await txn.create_ledger_transaction(
                NewLedgerTransaction(
                    account_id=account_id,
                    subkind=category.value,
                    amount=-amount,
                    balance_after=balance_after,
                    description=f"Investment in {category.value}",
                )
            )

        return InvestmentReceipt(
            investment_id=investment.id,
            ledger_transaction_id=ledger_entry.id,
            account_id=account_id,
            category=category,
            amount=amount,
            return_rate=rate,
            expected_return=investment.expected_return,
            balance_after=balance_after,
            created_at=investment.created_at,
        )

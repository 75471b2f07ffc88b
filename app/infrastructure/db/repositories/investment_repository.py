"""
Investment Repository
Atomic investment store and read access to investments and ledger entries
"""

import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import DBAPIError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.exceptions import TransactionConflictError
from app.domain.models import (
    Account,
    Investment,
    LedgerTransaction,
    NewInvestment,
    NewLedgerTransaction,
)
from app.infrastructure.db.models import (
    AccountModel,
    InvestmentModel,
    LedgerTransactionModel,
)

logger = logging.getLogger(__name__)


def _as_record(model: Any) -> Dict[str, Any]:
    """Column values of an ORM instance keyed by column name"""
    return {column.key: getattr(model, column.key) for column in model.__table__.columns}


# Serialization failure, deadlock, lock not available
_CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "55P03"})


def _is_lock_conflict(exc: DBAPIError) -> bool:
    """True if the database aborted the unit over a lock or a concurrent writer"""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _CONFLICT_SQLSTATES:
        return True

    if isinstance(exc, OperationalError):
        errorname = getattr(orig, "sqlite_errorname", None)
        if errorname:
            return errorname.startswith(("SQLITE_BUSY", "SQLITE_LOCKED"))
        text = str(orig)
        return "database is locked" in text or "database table is locked" in text

    return False


class SqlAlchemyInvestmentTransaction:
    """Reads and writes of one atomic unit, bound to a session inside BEGIN"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def read_account(self, account_id: str) -> Optional[Account]:
        """
        Read account totals, locking the row on backends with FOR UPDATE

        Args:
            account_id: Account identity

        Returns:
            Account or None
        """
        result = await self.session.execute(
            select(
                AccountModel.id,
                AccountModel.balance,
                AccountModel.total_invested,
                AccountModel.investment_returns,
                AccountModel.version,
            )
            .where(AccountModel.id == account_id)
            .with_for_update()
        )
        row = result.mappings().one_or_none()

        return Account.from_record(row) if row else None

    async def update_account(
        self,
        account: Account,
        balance: Decimal,
        total_invested: Decimal,
    ) -> None:
        """
        Write new totals if the account still has the version that was read

        Raises:
            TransactionConflictError: If another unit updated the account first
        """
        result = await self.session.execute(
            update(AccountModel)
            .where(
                AccountModel.id == account.id,
                AccountModel.version == account.version,
            )
            .values(
                balance=balance,
                total_invested=total_invested,
                version=AccountModel.version + 1,
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount != 1:
            logger.info(
                "Stale account write | account=%s | read_version=%s",
                account.id,
                account.version,
            )
            raise TransactionConflictError()

    async def create_investment(self, investment: NewInvestment) -> Investment:
        """
        Insert investment record

        Returns:
            Stored Investment with id and server timestamps
        """
        model = InvestmentModel(
            owner_id=investment.owner_id,
            category=investment.category.value,
            amount=investment.amount,
            status=investment.status.value,
            return_rate=investment.return_rate,
            expected_return=investment.expected_return,
        )

        self.session.add(model)
        await self.session.flush()

        return Investment.from_record(_as_record(model))

    async def create_ledger_transaction(self, entry: NewLedgerTransaction) -> LedgerTransaction:
        """
        Insert ledger record

        Returns:
            Stored LedgerTransaction with id and server timestamp
        """
        model = LedgerTransactionModel(
            account_id=entry.account_id,
            kind=entry.kind,
            subkind=entry.subkind,
            amount=entry.amount,
            status=entry.status.value,
            description=entry.description,
            balance_after=entry.balance_after,
            category=entry.category,
        )

        self.session.add(model)
        await self.session.flush()

        return LedgerTransaction.from_record(_as_record(model))


class SqlAlchemyInvestmentStore:
    """Investment store backed by database transactions"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize with a session factory; each unit gets its own session"""
        self.session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SqlAlchemyInvestmentTransaction]:
        """
        Open an atomic unit

        Commits on clean exit, rolls back on any exception.
        Lock, deadlock, serialization and pool timeout failures become
        TransactionConflictError. Other database errors propagate.
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield SqlAlchemyInvestmentTransaction(session)
        except PoolTimeoutError as exc:
            logger.warning("Investment unit could not get a connection: %s", exc)
            raise TransactionConflictError() from exc
        except DBAPIError as exc:
            if not _is_lock_conflict(exc):
                raise
            logger.warning("Investment unit aborted by the database: %s", exc.orig)
            raise TransactionConflictError() from exc


class InvestmentRepository:
    """Read access to investments"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get_by_id(self, investment_id: int) -> Optional[Investment]:
        """
        Get one investment

        Args:
            investment_id: Investment ID

        Returns:
            Investment or None
        """
        result = await self.session.execute(
            select(InvestmentModel.__table__).where(InvestmentModel.id == investment_id)
        )
        row = result.mappings().one_or_none()

        return Investment.from_record(row) if row else None

    async def get_recent_for_owner(self, owner_id: str, limit: int = 5) -> List[Investment]:
        """
        Most recent investments of one owner, newest first

        Args:
            owner_id: Account identity
            limit: Maximum number of investments

        Returns:
            List of Investments
        """
        result = await self.session.execute(
            select(InvestmentModel.__table__)
            .where(InvestmentModel.owner_id == owner_id)
            .order_by(InvestmentModel.created_at.desc(), InvestmentModel.id.desc())
            .limit(limit)
        )

        return [Investment.from_record(row) for row in result.mappings().all()]

    async def count_for_owner(self, owner_id: str) -> int:
        """Number of investments of one owner"""
        result = await self.session.execute(
            select(func.count(InvestmentModel.id)).where(InvestmentModel.owner_id == owner_id)
        )
        return int(result.scalar() or 0)


class LedgerTransactionRepository:
    """Read access to ledger entries"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get_for_account(self, account_id: str) -> List[LedgerTransaction]:
        """
        Ledger entries of one account, oldest first

        Args:
            account_id: Account identity

        Returns:
            List of LedgerTransactions
        """
        result = await self.session.execute(
            select(LedgerTransactionModel.__table__)
            .where(LedgerTransactionModel.account_id == account_id)
            .order_by(LedgerTransactionModel.timestamp, LedgerTransactionModel.id)
        )

        return [LedgerTransaction.from_record(row) for row in result.mappings().all()]

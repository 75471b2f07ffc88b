"""
Account Repository
CRUD operations for user cash accounts
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Account, PortfolioStats
from app.infrastructure.db.models import AccountModel


class AccountRepository:
    """Repository for Account data access"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def create(
        self,
        account_id: str,
        balance: Decimal,
        investment_returns: Decimal = Decimal("0"),
    ) -> Account:
        """
        Create new account

        Args:
            account_id: Identity issued by the authentication provider
            balance: Opening cash balance
            investment_returns: Returns already credited

        Returns:
            Created Account
        """
        if balance < 0:
            raise ValueError("Opening balance cannot be negative")

        model = AccountModel(
            id=account_id,
            balance=balance,
            total_invested=Decimal("0"),
            investment_returns=investment_returns,
            version=0,
        )

        self.session.add(model)
        await self.session.flush()

        return Account(
            id=model.id,
            balance=balance,
            total_invested=Decimal("0"),
            investment_returns=investment_returns,
            version=0,
        )

    async def get(self, account_id: str) -> Optional[Account]:
        """
        Get account by id

        Args:
            account_id: Account identity

        Returns:
            Account or None
        """
        result = await self.session.execute(
            select(AccountModel.__table__).where(AccountModel.id == account_id)
        )
        row = result.mappings().one_or_none()

        return Account.from_record(row) if row else None

    async def get_portfolio_stats(self, account_id: str) -> Optional[PortfolioStats]:
        """
        Totals for the portfolio header

        Args:
            account_id: Account identity

        Returns:
            PortfolioStats or None if the account does not exist
        """
        account = await self.get(account_id)
        if account is None:
            return None

        return PortfolioStats(
            account_id=account.id,
            total_invested=account.total_invested,
            total_returns=account.investment_returns,
            balance=account.balance,
        )

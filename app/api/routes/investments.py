"""
Investment API Routes
Place investments, view recent history and portfolio totals
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
import logging

from app.config import settings
from app.domain.exceptions import TransactionErrorCode
from app.domain.models import InvestmentCategory
from app.domain.schemas.investment import (
    InvestRequestSchema,
    InvestResponseSchema,
    InvestmentHistoryItemSchema,
    InvestmentHistorySchema,
    InvestmentOptionSchema,
    InvestmentOptionsSchema,
    PortfolioStatsSchema,
)
from app.domain.services.amount_validation import validate_amount
from app.domain.services.investment_transaction_service import InvestmentTransactionService
from app.domain.services.return_rate_policy import rate_for
from app.infrastructure.db.database import get_db, get_session_factory
from app.infrastructure.db.repositories.account_repository import AccountRepository
from app.infrastructure.db.repositories.investment_repository import (
    InvestmentRepository,
    SqlAlchemyInvestmentStore,
)

logger = logging.getLogger(__name__)
router = APIRouter()


_ERROR_STATUS = {
    TransactionErrorCode.ACCOUNT_NOT_FOUND: 404,
    TransactionErrorCode.INSUFFICIENT_BALANCE: 400,
    TransactionErrorCode.TRANSACTION_CONFLICT: 409,
}


# ------------------------------------------------------------------
# Dependencies
# ------------------------------------------------------------------

async def get_account_id(x_account_id: str = Header(..., alias="X-Account-Id")) -> str:
    """Identity forwarded by the upstream authentication layer"""
    account_id = x_account_id.strip()
    if not account_id:
        raise HTTPException(status_code=401, detail="User not authenticated")
    return account_id


def get_investment_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> InvestmentTransactionService:
    return InvestmentTransactionService(SqlAlchemyInvestmentStore(session_factory))


# ------------------------------------------------------------------
# Invest
# ------------------------------------------------------------------

@router.post("", response_model=InvestResponseSchema, status_code=201)
async def place_investment(
    request: InvestRequestSchema,
    account_id: str = Depends(get_account_id),
    service: InvestmentTransactionService = Depends(get_investment_service),
):
    """
    Place an investment

    Rules:
    - Amount must pass validation (min/max, positive, numeric)
    - Balance must cover the amount
    - Balance debit, investment and ledger entry commit together
    """
    validation = validate_amount(
        request.amount,
        minimum=settings.MIN_INVESTMENT_AMOUNT,
        maximum=settings.MAX_INVESTMENT_AMOUNT,
        currency=settings.CURRENCY_PREFIX,
    )
    if not validation.ok:
        logger.info(
            "Investment input rejected | account=%s | code=%s",
            account_id,
            validation.error.value,
        )
        raise HTTPException(
            status_code=422,
            detail={"code": validation.error.value, "message": validation.message},
        )

    result = await service.invest(account_id, request.category, validation.amount)

    if not result.ok:
        raise HTTPException(
            status_code=_ERROR_STATUS[result.error.code],
            detail={
                "code": result.error.code.value,
                "message": f"Investment failed: {result.error}",
                "retryable": result.retryable,
            },
        )

    receipt = result.receipt
    return InvestResponseSchema(
        investment_id=receipt.investment_id,
        ledger_transaction_id=receipt.ledger_transaction_id,
        category=receipt.category.value,
        amount=float(receipt.amount),
        return_rate=float(receipt.return_rate),
        expected_return=float(receipt.expected_return),
        balance_after=float(receipt.balance_after),
        created_at=receipt.created_at.isoformat(),
        message=(
            f"Successfully invested {settings.CURRENCY_PREFIX}{receipt.amount:.0f} "
            f"in {receipt.category.value}"
        ),
    )


# ------------------------------------------------------------------
# Read side
# ------------------------------------------------------------------

@router.get("/history", response_model=InvestmentHistorySchema)
async def get_investment_history(
    limit: int = Query(settings.HISTORY_LIMIT, ge=1, le=50),
    account_id: str = Depends(get_account_id),
    db: AsyncSession = Depends(get_db),
):
    """Most recent investments, newest first"""
    investments = await InvestmentRepository(db).get_recent_for_owner(account_id, limit=limit)

    return InvestmentHistorySchema(
        items=[
            InvestmentHistoryItemSchema(
                id=inv.id,
                category=inv.category.value,
                amount=float(inv.amount),
                status=inv.status.value,
                return_rate=float(inv.return_rate),
                expected_return=float(inv.expected_return),
                created_at=inv.created_at.isoformat(),
            )
            for inv in investments
        ]
    )


@router.get("/stats", response_model=PortfolioStatsSchema)
async def get_portfolio_stats(
    account_id: str = Depends(get_account_id),
    db: AsyncSession = Depends(get_db),
):
    """Total invested and total returns"""
    stats = await AccountRepository(db).get_portfolio_stats(account_id)
    if stats is None:
        raise HTTPException(status_code=404, detail="Account not found")

    return PortfolioStatsSchema(
        total_invested=float(stats.total_invested),
        total_returns=float(stats.total_returns),
        balance=float(stats.balance),
    )


@router.get("/options", response_model=InvestmentOptionsSchema)
async def get_investment_options():
    """Investable categories with their annual return rate"""
    return InvestmentOptionsSchema(
        options=[
            InvestmentOptionSchema(
                category=category.value,
                return_rate=float(rate_for(category)),
                min_amount=float(settings.MIN_INVESTMENT_AMOUNT),
                max_amount=float(settings.MAX_INVESTMENT_AMOUNT),
            )
            for category in InvestmentCategory
            if category is not InvestmentCategory.OTHER
        ]
    )

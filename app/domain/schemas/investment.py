from pydantic import BaseModel, Field
from typing import List


class InvestRequestSchema(BaseModel):
    category: str = Field(..., description="Stocks, Mutual Funds or Bonds")
    amount: str = Field(..., description="Amount as entered, e.g. '150,000'")


class InvestResponseSchema(BaseModel):
    investment_id: int
    ledger_transaction_id: int
    category: str
    amount: float
    return_rate: float
    expected_return: float
    balance_after: float
    created_at: str
    message: str


class InvestmentHistoryItemSchema(BaseModel):
    id: int
    category: str
    amount: float
    status: str
    return_rate: float
    expected_return: float
    created_at: str


class InvestmentHistorySchema(BaseModel):
    items: List[InvestmentHistoryItemSchema]


class PortfolioStatsSchema(BaseModel):
    total_invested: float
    total_returns: float
    balance: float


class InvestmentOptionSchema(BaseModel):
    category: str
    return_rate: float
    min_amount: float
    max_amount: float


class InvestmentOptionsSchema(BaseModel):
    options: List[InvestmentOptionSchema]

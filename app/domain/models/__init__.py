"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    InvestmentCategory,
    InvestmentStatus,
    LedgerStatus,

    # Constants
    LEDGER_CATEGORY_INVESTMENT,
    LEDGER_KIND_INVESTMENT,

    # Entities
    Account,
    Investment,
    InvestmentReceipt,
    LedgerTransaction,
    NewInvestment,
    NewLedgerTransaction,
    PortfolioStats,
)

__all__ = [
    # Enums
    "InvestmentCategory",
    "InvestmentStatus",
    "LedgerStatus",

    # Constants
    "LEDGER_CATEGORY_INVESTMENT",
    "LEDGER_KIND_INVESTMENT",

    # Entities
    "Account",
    "Investment",
    "InvestmentReceipt",
    "LedgerTransaction",
    "NewInvestment",
    "NewLedgerTransaction",
    "PortfolioStats",
]

"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from app.domain.exceptions import RecordDecodeError


class InvestmentCategory(str, Enum):
    """Investment product category"""
    STOCKS = "Stocks"
    MUTUAL_FUNDS = "Mutual Funds"
    BONDS = "Bonds"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: "str | InvestmentCategory") -> "InvestmentCategory":
        """Map a display label to a category; unknown labels become OTHER"""
        if isinstance(label, cls):
            return label
        try:
            return cls(str(label).strip())
        except ValueError:
            return cls.OTHER


class InvestmentStatus(str, Enum):
    """Investment lifecycle status"""
    ACTIVE = "active"


class LedgerStatus(str, Enum):
    """Ledger transaction status"""
    COMPLETED = "completed"


LEDGER_KIND_INVESTMENT = "Investment"
LEDGER_CATEGORY_INVESTMENT = "investment"


def _require(record: Mapping[str, Any], field: str, entity: str) -> Any:
    value = record.get(field)
    if value is None:
        raise RecordDecodeError(entity, field)
    return value


def _decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass(frozen=True)
class Account:
    """User cash account and aggregate investment totals"""
    id: str
    balance: Decimal
    total_invested: Decimal = Decimal("0")
    investment_returns: Decimal = Decimal("0")
    version: int = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Account":
        """
        Decode a stored account row

        Raises:
            RecordDecodeError: If id or balance is missing
        """
        return cls(
            id=str(_require(record, "id", "Account")),
            balance=_decimal(_require(record, "balance", "Account")),
            total_invested=_decimal(record.get("total_invested") or 0),
            investment_returns=_decimal(record.get("investment_returns") or 0),
            version=int(record.get("version") or 0),
        )


@dataclass(frozen=True)
class NewInvestment:
    """Investment fields supplied by the caller; the store assigns id and timestamps"""
    owner_id: str
    category: InvestmentCategory
    amount: Decimal
    return_rate: Decimal
    expected_return: Decimal
    status: InvestmentStatus = InvestmentStatus.ACTIVE


@dataclass(frozen=True)
class Investment:
    """A placed investment"""
    id: int
    owner_id: str
    category: InvestmentCategory
    amount: Decimal
    return_rate: Decimal
    expected_return: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None
    status: InvestmentStatus = InvestmentStatus.ACTIVE

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Investment":
        """
        Decode a stored investment row

        Raises:
            RecordDecodeError: If a required field is missing
        """
        return cls(
            id=int(_require(record, "id", "Investment")),
            owner_id=str(_require(record, "owner_id", "Investment")),
            category=InvestmentCategory.from_label(_require(record, "category", "Investment")),
            amount=_decimal(_require(record, "amount", "Investment")),
            return_rate=_decimal(_require(record, "return_rate", "Investment")),
            expected_return=_decimal(_require(record, "expected_return", "Investment")),
            created_at=_require(record, "created_at", "Investment"),
            updated_at=record.get("updated_at"),
            status=InvestmentStatus(record.get("status") or InvestmentStatus.ACTIVE.value),
        )


@dataclass(frozen=True)
class NewLedgerTransaction:
    """Ledger entry fields supplied by the caller"""
    account_id: str
    subkind: str
    amount: Decimal
    balance_after: Decimal
    description: str
    kind: str = LEDGER_KIND_INVESTMENT
    status: LedgerStatus = LedgerStatus.COMPLETED
    category: str = LEDGER_CATEGORY_INVESTMENT


@dataclass(frozen=True)
class LedgerTransaction:
    """Append-only record of a balance-affecting event"""
    id: int
    account_id: str
    kind: str
    subkind: str
    amount: Decimal
    balance_after: Decimal
    timestamp: datetime
    description: str = ""
    status: LedgerStatus = LedgerStatus.COMPLETED
    category: str = LEDGER_CATEGORY_INVESTMENT

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LedgerTransaction":
        """
        Decode a stored ledger row

        Raises:
            RecordDecodeError: If a required field is missing
        """
        return cls(
            id=int(_require(record, "id", "LedgerTransaction")),
            account_id=str(_require(record, "account_id", "LedgerTransaction")),
            kind=str(_require(record, "kind", "LedgerTransaction")),
            subkind=str(_require(record, "subkind", "LedgerTransaction")),
            amount=_decimal(_require(record, "amount", "LedgerTransaction")),
            balance_after=_decimal(_require(record, "balance_after", "LedgerTransaction")),
            timestamp=_require(record, "timestamp", "LedgerTransaction"),
            description=record.get("description") or "",
            status=LedgerStatus(record.get("status") or LedgerStatus.COMPLETED.value),
            category=record.get("category") or LEDGER_CATEGORY_INVESTMENT,
        )


@dataclass(frozen=True)
class InvestmentReceipt:
    """Summary of a committed investment transaction"""
    investment_id: int
    ledger_transaction_id: int
    account_id: str
    category: InvestmentCategory
    amount: Decimal
    return_rate: Decimal
    expected_return: Decimal
    balance_after: Decimal
    created_at: datetime


@dataclass(frozen=True)
class PortfolioStats:
    """Portfolio totals shown alongside the investment options"""
    account_id: str
    total_invested: Decimal
    total_returns: Decimal
    balance: Decimal

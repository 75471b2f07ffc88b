from datetime import datetime
from decimal import Decimal

import pytest

from app.domain.exceptions import RecordDecodeError
from app.domain.models import (
    Account,
    Investment,
    InvestmentCategory,
    InvestmentStatus,
    LedgerStatus,
    LedgerTransaction,
)


def test_account_decode_applies_explicit_defaults():
    account = Account.from_record({"id": "user-1", "balance": 1500})

    assert account.balance == Decimal("1500")
    assert account.total_invested == Decimal("0")
    assert account.investment_returns == Decimal("0")
    assert account.version == 0


@pytest.mark.parametrize("missing", ["id", "balance"])
def test_account_decode_requires_fields(missing):
    record = {"id": "user-1", "balance": Decimal("10")}
    del record[missing]

    with pytest.raises(RecordDecodeError) as excinfo:
        Account.from_record(record)

    assert excinfo.value.entity == "Account"
    assert excinfo.value.field == missing


def test_account_decode_rejects_null_balance():
    with pytest.raises(RecordDecodeError):
        Account.from_record({"id": "user-1", "balance": None})


def test_investment_decode():
    created = datetime(2026, 10, 19, 9, 30)
    investment = Investment.from_record({
        "id": 7,
        "owner_id": "user-1",
        "category": "Mutual Funds",
        "amount": Decimal("250000.00"),
        "return_rate": Decimal("0.1200"),
        "expected_return": Decimal("30000.00"),
        "created_at": created,
        "status": "active",
    })

    assert investment.category == InvestmentCategory.MUTUAL_FUNDS
    assert investment.status == InvestmentStatus.ACTIVE
    assert investment.created_at == created
    assert investment.updated_at is None


def test_investment_decode_requires_timestamp():
    with pytest.raises(RecordDecodeError, match="created_at"):
        Investment.from_record({
            "id": 7,
            "owner_id": "user-1",
            "category": "Bonds",
            "amount": 100000,
            "return_rate": "0.07",
            "expected_return": 7000,
        })


def test_ledger_decode_defaults():
    entry = LedgerTransaction.from_record({
        "id": 3,
        "account_id": "user-1",
        "kind": "Investment",
        "subkind": "Bonds",
        "amount": Decimal("-100000"),
        "balance_after": Decimal("400000"),
        "timestamp": datetime(2026, 10, 19),
    })

    assert entry.status == LedgerStatus.COMPLETED
    assert entry.category == "investment"
    assert entry.description == ""


def test_category_from_label():
    assert InvestmentCategory.from_label("Stocks") is InvestmentCategory.STOCKS
    assert InvestmentCategory.from_label(" Bonds ") is InvestmentCategory.BONDS
    assert InvestmentCategory.from_label(InvestmentCategory.OTHER) is InvestmentCategory.OTHER
    assert InvestmentCategory.from_label("Real Estate") is InvestmentCategory.OTHER

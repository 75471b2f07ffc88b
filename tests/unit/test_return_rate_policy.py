from decimal import Decimal

import pytest

from app.domain.models import InvestmentCategory
from app.domain.services.return_rate_policy import (
    DEFAULT_RETURN_RATE,
    expected_return,
    rate_for,
)


@pytest.mark.parametrize(
    "category, rate",
    [
        (InvestmentCategory.STOCKS, Decimal("0.15")),
        (InvestmentCategory.MUTUAL_FUNDS, Decimal("0.12")),
        (InvestmentCategory.BONDS, Decimal("0.07")),
        (InvestmentCategory.OTHER, Decimal("0.10")),
    ],
)
def test_rate_for_category(category, rate):
    assert rate_for(category) == rate


def test_rate_for_accepts_display_labels():
    assert rate_for("Stocks") == Decimal("0.15")
    assert rate_for("Mutual Funds") == Decimal("0.12")
    assert rate_for("Bonds") == Decimal("0.07")


@pytest.mark.parametrize("label", ["Gold", "", "stocks", "Crypto"])
def test_unrecognized_label_falls_back_to_default(label):
    assert rate_for(label) == DEFAULT_RETURN_RATE == Decimal("0.10")


def test_expected_return_rounds_to_cents():
    assert expected_return(Decimal("200000"), Decimal("0.07")) == Decimal("14000.00")
    assert expected_return(Decimal("123456.78"), Decimal("0.15")) == Decimal("18518.52")


def test_expected_return_uses_bankers_rounding():
    # 100000.05 * 0.07 = 7000.0035
    assert expected_return(Decimal("100000.05"), Decimal("0.07")) == Decimal("7000.00")
    assert expected_return(Decimal("0.50"), Decimal("0.01")) == Decimal("0.00")
    assert expected_return(Decimal("1.50"), Decimal("0.01")) == Decimal("0.02")

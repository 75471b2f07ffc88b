"""
RETURN-RATE POLICY

Annualized return rate per investment category.
Pure lookup, no I/O, never fails.
"""

from decimal import Decimal
from typing import Dict, Union

from app.domain.models import InvestmentCategory


DEFAULT_RETURN_RATE = Decimal("0.10")

RETURN_RATES: Dict[InvestmentCategory, Decimal] = {
    InvestmentCategory.STOCKS: Decimal("0.15"),
    InvestmentCategory.MUTUAL_FUNDS: Decimal("0.12"),
    InvestmentCategory.BONDS: Decimal("0.07"),
}


def rate_for(category: Union[InvestmentCategory, str]) -> Decimal:
    """
    Annual return rate for a category

    Unrecognized labels and OTHER fall back to DEFAULT_RETURN_RATE.
    """
    return RETURN_RATES.get(InvestmentCategory.from_label(category), DEFAULT_RETURN_RATE)


def expected_return(amount: Decimal, rate: Decimal) -> Decimal:
    """
    Expected annual return of an amount: amount * rate

    The product is quantized to cents (banker's rounding) so it fits the
    stored Numeric(18, 2) column exactly. For a cent amount and a
    two-digit rate such as 0.07 this drops at most half a cent.
    """
    return (amount * rate).quantize(Decimal("0.01"))

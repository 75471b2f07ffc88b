"""
AMOUNT VALIDATION RULE

Gates raw user input before an investment is attempted.
Pure function, no I/O.

Rules are checked in order; the first failure wins:
1. Empty, not a finite number, or finer than cents
   (after removing ',' separators)
2. Not positive
3. Below the minimum investment
4. Above the maximum investment
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union


MIN_INVESTMENT_AMOUNT = Decimal("100000")
MAX_INVESTMENT_AMOUNT = Decimal("1000000000")
CENT = Decimal("0.01")


class AmountValidationError(str, Enum):
    EMPTY_OR_NOT_A_NUMBER = "EmptyOrNotANumber"
    NOT_POSITIVE = "NotPositive"
    BELOW_MINIMUM = "BelowMinimum"
    ABOVE_MAXIMUM = "AboveMaximum"


@dataclass(frozen=True)
class AmountValidationResult:
    """Outcome of validating one raw amount"""
    amount: Optional[Decimal] = None
    error: Optional[AmountValidationError] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failure(error: AmountValidationError, message: str) -> AmountValidationResult:
    return AmountValidationResult(error=error, message=message)


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a user-entered amount, or None if it is not a finite number of cents"""
    if raw is None:
        return None
    text = raw.replace(",", "").strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    # "1.50" and "1.500" are both cents; "1.505" is not
    if value.normalize().as_tuple().exponent < CENT.as_tuple().exponent:
        return None
    return value


def validate_amount(
    raw: Optional[str],
    minimum: Union[Decimal, int] = MIN_INVESTMENT_AMOUNT,
    maximum: Union[Decimal, int] = MAX_INVESTMENT_AMOUNT,
    currency: str = "Rp",
) -> AmountValidationResult:
    """
    Validate a raw amount string

    Args:
        raw: Text as entered by the user, grouping commas allowed
        minimum: Smallest accepted amount
        maximum: Largest accepted amount
        currency: Prefix used in user messages

    Returns:
        AmountValidationResult with the parsed amount when ok
    """
    if raw is None or not raw.strip():
        return _failure(AmountValidationError.EMPTY_OR_NOT_A_NUMBER, "Please enter an amount")

    amount = parse_amount(raw)
    if amount is None:
        return _failure(AmountValidationError.EMPTY_OR_NOT_A_NUMBER, "Please enter a valid amount")

    if amount <= 0:
        return _failure(AmountValidationError.NOT_POSITIVE, "Please enter a valid amount")

    if amount < Decimal(minimum):
        return _failure(
            AmountValidationError.BELOW_MINIMUM,
            f"Minimum investment is {currency}{Decimal(minimum):,.0f}",
        )

    if amount > Decimal(maximum):
        return _failure(
            AmountValidationError.ABOVE_MAXIMUM,
            f"Maximum investment is {currency}{Decimal(maximum):,.0f}",
        )

    return AmountValidationResult(amount=amount)

"""
Common Value Objects

Value objects used across the marketplace domains:
- Money: Monetary amount with currency, convertible to gateway minor units
- DateRange: A stay from start_date to end_date, both days inclusive for overlap
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidInput

SUPPORTED_CURRENCIES = ('INR', 'USD', 'EUR')

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a non-negative monetary amount with currency.
    """
    amount: Decimal
    currency: str = 'INR'

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        if self.amount < 0:
            raise InvalidInput("Amount cannot be negative")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise InvalidInput(f"Unsupported currency: {self.currency}")

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor) -> 'Money':
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by an integer or Decimal")
        return Money(self.amount * factor, self.currency)

    def to_minor_units(self) -> int:
        """Amount in the smallest currency unit (paise, cents), as gateways expect."""
        return int((self.amount * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


def normalize_date(value) -> date:
    """
    Reduce user input to a calendar date.

    Accepts ``date``, ``datetime`` (its calendar date in its own offset) or an
    ISO 8601 string. Anything else is rejected with InvalidInput so malformed
    dates never reach the availability check.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise InvalidInput(f"Invalid date: {value!r}")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    A stay from start_date to end_date. end_date must be strictly after
    start_date. For overlap purposes both ends are inclusive, so two ranges
    sharing a single boundary day compete for the same listing.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.end_date <= self.start_date:
            raise InvalidInput("End date must be after start date.")

    @classmethod
    def from_values(cls, start, end) -> 'DateRange':
        """Build a range from raw input, normalizing both ends first."""
        return cls(normalize_date(start), normalize_date(end))

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Closed-interval overlap test

        Examples:
            - DateRange(10, 12) overlaps with DateRange(11, 13) -> True
            - DateRange(10, 12) overlaps with DateRange(12, 14) -> True (shared day)
            - DateRange(10, 12) overlaps with DateRange(13, 15) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")
        return self.start_date <= other.end_date and self.end_date >= other.start_date

    def contains(self, check_date: date) -> bool:
        return self.start_date <= check_date <= self.end_date

    @property
    def nights(self) -> int:
        """Whole nights in the stay, rounding any partial day up."""
        delta = self.end_date - self.start_date
        return math.ceil(abs(delta.total_seconds()) / ONE_DAY.total_seconds())

    def __len__(self) -> int:
        return self.nights

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"

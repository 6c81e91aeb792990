"""
Reservation Calendar

The consistency boundary that prevents double bookings. Every booking
creation goes through it while the listing row is locked, so the check
and the insert happen as one step per listing.

Overlap is closed-interval: a stay ending on the 12th and another starting
on the 12th compete for the same day.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from shared.domain.base import Aggregate
from shared.domain.exceptions import Conflict
from shared.domain.value_objects import DateRange, Money


@dataclass(frozen=True)
class Reservation:
    """Dates held by one live booking."""
    booking_id: int | None
    dates: DateRange


def find_conflicts(reservations: Iterable[Reservation], dates: DateRange) -> List[Reservation]:
    """Reservations whose dates overlap ``dates``."""
    return [r for r in reservations if r.dates.overlaps_with(dates)]


@dataclass(eq=False, kw_only=True)
class ReservationCalendar(Aggregate):
    """
    Live reservations of one listing plus its nightly price.

    Usage:
        calendar = calendar_repo.get_for_listing(listing_id, currency, lock=True)
        calendar.ensure_can_reserve(dates)
        total = calendar.quote(dates)
    """

    listing_id: int
    nightly_price: Money
    reservations: List[Reservation] = field(default_factory=list)

    def can_reserve(self, dates: DateRange) -> bool:
        return not find_conflicts(self.reservations, dates)

    def ensure_can_reserve(self, dates: DateRange):
        conflicts = find_conflicts(self.reservations, dates)
        if conflicts:
            raise Conflict(
                f"Listing {self.listing_id} is already booked for some of {dates} "
                f"({len(conflicts)} overlapping booking(s))."
            )

    def quote(self, dates: DateRange) -> Money:
        """Total price of a stay: nights x nightly price."""
        return self.nightly_price * dates.nights

    def __str__(self):
        return f"ReservationCalendar(listing={self.listing_id}, reservations={len(self.reservations)})"

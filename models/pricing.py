"""Occupancy-based dynamic pricing."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.flight import Flight

DEFAULT_SURCHARGE = 0.5


def occupancy_fraction(flight: 'Flight') -> float:
    """Fraction of the flight's seats held by active bookings."""
    return 1.0 - flight.seats_available / flight.seats_total


def dynamic_price(flight: 'Flight', surcharge: float = DEFAULT_SURCHARGE) -> float:
    """
    Current fare for a flight.

    Scales linearly from ``base_price`` when empty up to
    ``base_price * (1 + surcharge)`` when full. Always computed from live
    seat state, never cached.
    """
    return flight.base_price * (1 + occupancy_fraction(flight) * surcharge)

"""Flight data model."""

from dataclasses import InitVar, dataclass, field
from typing import Deque, List

from models.pricing import occupancy_fraction
from models.seating import Booking, SeatMap


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as HH:MM."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass
class Flight:
    """
    Represents a single same-day flight.

    Attributes:
        id: Ledger-assigned flight identifier
        origin: Departure airport code
        destination: Arrival airport code
        departure: Departure time in minutes since midnight
        arrival: Arrival time in minutes since midnight
        seats: Number of seats on the aircraft. Held by the seat map and
            read back through ``seats_total``; change it with
            ``FlightLedger.update`` so bookings are re-seated.
        base_price: Fare at zero occupancy
        crew_assigned: Crew IDs assigned to this flight, in commit order
    """
    id: int
    origin: str
    destination: str
    departure: int
    arrival: int
    seats: InitVar[int]
    base_price: float
    crew_assigned: List[int] = field(default_factory=list)
    seating: SeatMap = field(init=False, repr=False)

    def __post_init__(self, seats: int):
        self.seating = SeatMap(seats)

    @property
    def duration(self) -> int:
        """Flight duration in minutes."""
        return self.arrival - self.departure

    @property
    def seats_total(self) -> int:
        return self.seating.seats_total

    @property
    def seats_available(self) -> int:
        return self.seating.seats_available

    @property
    def bookings(self) -> List[Booking]:
        """Full booking history, cancelled bookings included."""
        return self.seating.bookings

    @property
    def waitlist(self) -> Deque[str]:
        return self.seating.waitlist

    @property
    def occupancy_fraction(self) -> float:
        """Fraction of seats held by active bookings."""
        return occupancy_fraction(self)

    def overlaps(self, start: int, end: int, turnaround: int = 0) -> bool:
        """
        Check if this flight's window overlaps [start, end].

        Touching endpoints do not overlap, so back-to-back flights are legal
        when ``turnaround`` is zero.
        """
        return not (end + turnaround <= self.departure or start >= self.arrival + turnaround)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "origin": self.origin,
            "destination": self.destination,
            "departure": format_minutes(self.departure),
            "arrival": format_minutes(self.arrival),
            "seats_available": self.seats_available,
            "seats_total": self.seats_total,
            "base_price": self.base_price,
            "crew_assigned": list(self.crew_assigned),
        }

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Flight):
            return self.id == other.id
        return False

    def __repr__(self) -> str:
        return (
            f"Flight({self.id}: {self.origin}→{self.destination} "
            f"{format_minutes(self.departure)}-{format_minutes(self.arrival)} "
            f"{self.seats_available}/{self.seats_total})"
        )

"""Flight ledger: the source of truth for flights, seats and bookings."""

from bisect import bisect_left
from typing import Callable, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING
import logging

from models.exceptions import (
    FlightNotFound,
    InvalidDepartureTime,
    InvalidFlightSchedule,
    InvalidTimeWindow,
)
from models.flight import Flight, format_minutes
from models.network import RouteGraph
from models.rules import OperatingRules
from models.seating import Booking, BookingResult, CancellationResult

if TYPE_CHECKING:
    from optimization.routing.base import RouteResult

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("origin", "destination", "departure", "arrival", "seats_total", "base_price")


class FlightLedger:
    """
    Canonical list of flights, kept sorted by identifier.

    The ledger owns the flight-id counter and keeps the route graph in step
    with every add, remove and update.
    Callbacks registered with ``on_retime`` are told whenever a flight's
    departure or arrival changes, so crew rostered on it can be released.
    """

    def __init__(
        self,
        rules: Optional[OperatingRules] = None,
        route_graph: Optional[RouteGraph] = None
    ):
        self.rules = rules or OperatingRules()
        self.route_graph = route_graph or RouteGraph(self.rules)
        self._flights: List[Flight] = []
        # Parallel sorted id list for bisect lookup
        self._ids: List[int] = []
        self._next_id = self.rules.first_flight_id
        self._retime_listeners: List[Callable[[int], None]] = []

    def on_retime(self, callback: Callable[[int], None]) -> None:
        """Call ``callback(flight_id)`` after a flight is retimed."""
        self._retime_listeners.append(callback)

    # --- Validation ---

    def validate_departure(self, flight_id: Optional[int], departure: int) -> None:
        """Raise InvalidDepartureTime unless departure lies within the day."""
        if not 0 <= departure <= self.rules.minutes_per_day:
            raise InvalidDepartureTime(
                f"Invalid departure time {departure} for flight {flight_id}",
                error_code="INVALID_DEPARTURE",
                context={"flight_id": flight_id, "departure": departure}
            )

    def _validate(
        self,
        flight_id: Optional[int],
        origin: str,
        destination: str,
        departure: int,
        arrival: int,
        seats: int,
        base_price: float
    ) -> None:
        if not origin or not destination:
            raise ValueError("Origin and destination cannot be empty")
        self.validate_departure(flight_id, departure)
        if arrival <= departure or arrival > self.rules.minutes_per_day:
            raise InvalidFlightSchedule(
                f"Arrival {arrival} must be after departure {departure} "
                f"and within the same day",
                error_code="INVALID_SCHEDULE",
                context={"flight_id": flight_id, "departure": departure, "arrival": arrival}
            )
        if seats <= 0:
            raise ValueError(f"Seat count must be positive, got {seats}")
        if base_price < 0:
            raise ValueError(f"Base price cannot be negative, got {base_price}")

    # --- Lookup ---

    def _index(self, flight_id: int) -> int:
        idx = bisect_left(self._ids, flight_id)
        if idx < len(self._ids) and self._ids[idx] == flight_id:
            return idx
        return -1

    def find(self, flight_id: int) -> Optional[Flight]:
        """Binary search by identifier; None if absent."""
        idx = self._index(flight_id)
        return self._flights[idx] if idx != -1 else None

    def get(self, flight_id: int) -> Flight:
        flight = self.find(flight_id)
        if flight is None:
            raise FlightNotFound(flight_id)
        return flight

    # --- Flight lifecycle ---

    def add(
        self,
        origin: str,
        destination: str,
        departure: int,
        arrival: int,
        seats: int,
        base_price: float
    ) -> Flight:
        """Create a flight with a fresh identifier and add its route edge."""
        self._validate(None, origin, destination, departure, arrival, seats, base_price)

        flight = Flight(
            id=self._next_id,
            origin=origin,
            destination=destination,
            departure=departure,
            arrival=arrival,
            seats=seats,
            base_price=base_price
        )
        self._next_id += 1
        # Identifiers only grow, so appending keeps the list sorted
        self._flights.append(flight)
        self._ids.append(flight.id)
        self.route_graph.add_flight(flight)
        logger.info(f"Flight added: ID {flight.id} {origin}->{destination}")
        return flight

    def remove(self, flight_id: int) -> Flight:
        """Remove a flight and retract exactly its route edge."""
        idx = self._index(flight_id)
        if idx == -1:
            raise FlightNotFound(flight_id)
        flight = self._flights.pop(idx)
        del self._ids[idx]
        self.route_graph.remove_flight(flight_id)
        logger.info(f"Flight removed: ID {flight_id}")
        return flight

    def update(self, flight_id: int, **fields) -> Flight:
        """
        Change a flight's route, times, seat count or base price.

        Active bookings survive a seat-count change; the route edge is
        re-inserted so its duration and fare snapshot are current. A change
        of departure or arrival notifies the ``on_retime`` callbacks.

        Raises:
            FlightNotFound: if the flight does not exist
            ValueError: for unknown fields or an invalid seat count
        """
        flight = self.get(flight_id)

        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        values = {name: fields.get(name, getattr(flight, name)) for name in UPDATABLE_FIELDS}
        self._validate(
            flight_id,
            values["origin"],
            values["destination"],
            values["departure"],
            values["arrival"],
            values["seats_total"],
            values["base_price"]
        )

        seats_total = values.pop("seats_total")
        if seats_total != flight.seats_total:
            promoted = flight.seating.resize(seats_total)
            for booking in promoted:
                logger.info(
                    f"Waitlisted passenger {booking.passenger_id} booked on flight "
                    f"{flight_id}, seat #{booking.seat_no}"
                )

        old_window = (flight.departure, flight.arrival)
        for name, value in values.items():
            setattr(flight, name, value)

        self.route_graph.add_flight(flight)
        logger.info(f"Flight updated: ID {flight_id}")

        if (flight.departure, flight.arrival) != old_window:
            for callback in self._retime_listeners:
                callback(flight_id)
        return flight

    # --- Booking ---

    def book(self, passenger_id: str, flight_id: int) -> BookingResult:
        """Book a seat, or waitlist the passenger if the flight is full."""
        flight = self.get(flight_id)
        result = flight.seating.book(passenger_id)
        result.flight_id = flight_id
        if result.waitlisted:
            logger.warning(
                f"No seats available on flight {flight_id}; {passenger_id} "
                f"added to waitlist at position {result.waitlist_position}"
            )
        else:
            logger.info(f"Seat booked: flight {flight_id}, seat #{result.seat_no} for {passenger_id}")
        return result

    def cancel(self, passenger_id: str, flight_id: int) -> CancellationResult:
        """Cancel a booking and promote the head of the waitlist, if any."""
        flight = self.get(flight_id)
        result = flight.seating.cancel(passenger_id)
        result.flight_id = flight_id
        logger.info(f"Booking cancelled: flight {flight_id}, seat #{result.seat_no}")
        if result.promoted:
            logger.info(
                f"Waitlisted passenger {result.promoted_passenger} booked on flight "
                f"{flight_id}, seat #{result.promoted.seat_no}"
            )
        return result

    def bookings_for(self, passenger_id: str) -> List[Tuple[Flight, Booking]]:
        """Active bookings of one passenger across all flights."""
        return [
            (flight, booking)
            for flight in self._flights
            for booking in flight.seating.bookings_for(passenger_id)
        ]

    # --- Queries ---

    def search_route(self, origin: str, destination: str) -> List[Flight]:
        """Direct flights between two airports."""
        if not origin or not destination:
            raise ValueError("Origin and destination cannot be empty")
        return [
            f for f in self._flights
            if f.origin == origin and f.destination == destination
        ]

    def search_by_departure(self, earliest: int, latest: int) -> List[Flight]:
        """
        Flights departing within [earliest, latest], inclusive.

        A flight with a departure outside the day is skipped and the
        search carries on with the rest.

        Raises:
            InvalidTimeWindow: if earliest is later than latest
        """
        if earliest > latest:
            raise InvalidTimeWindow(
                f"Earliest departure {format_minutes(earliest)} cannot be later "
                f"than latest departure {format_minutes(latest)}",
                error_code="INVALID_WINDOW",
                context={"earliest": earliest, "latest": latest}
            )

        matches = []
        for flight in self._flights:
            try:
                self.validate_departure(flight.id, flight.departure)
            except InvalidDepartureTime as e:
                logger.warning(f"{e.message}. Skipping this flight.")
                continue
            if earliest <= flight.departure <= latest:
                matches.append(flight)
        return matches

    def shortest_by_time(self, source: str, destination: str) -> 'RouteResult':
        return self.route_graph.shortest_by_time(source, destination)

    def shortest_by_price(self, source: str, destination: str) -> 'RouteResult':
        return self.route_graph.shortest_by_price(source, destination)

    # --- Reports ---

    def occupancy_report(self) -> Dict[int, float]:
        """Percentage of seats taken, per flight."""
        return {f.id: 100.0 * f.occupancy_fraction for f in self._flights}

    def waitlist_report(self) -> Dict[int, int]:
        """Number of waitlisted passengers, per flight."""
        return {f.id: len(f.waitlist) for f in self._flights}

    @property
    def flights(self) -> List[Flight]:
        """Snapshot of all flights in identifier order."""
        return list(self._flights)

    def __iter__(self) -> Iterator[Flight]:
        return iter(list(self._flights))

    def __len__(self) -> int:
        return len(self._flights)

    def __contains__(self, flight_id: object) -> bool:
        return isinstance(flight_id, int) and self._index(flight_id) != -1

    def __repr__(self) -> str:
        return f"FlightLedger(flights={len(self)}, next_id={self._next_id})"

"""Service facade over the ledger, crew registry and schedulers."""

from typing import Dict, List, Optional, Tuple, Union
import logging

from models import (
    AssignmentReport,
    Booking,
    BookingResult,
    CancellationResult,
    CrewMember,
    CrewRegistry,
    CrewRole,
    DutyEntry,
    Flight,
    FlightLedger,
    OperatingRules,
    VacancyReport,
    dynamic_price,
)
from optimization import (
    CrewScheduler,
    ExactCrewAssignment,
    RouteResult,
    check_crew_vacancy,
)

logger = logging.getLogger(__name__)

SOLVERS = ("greedy", "exact")


class AirlineService:
    """
    Entry point for front ends.

    Owns one ledger, one crew registry and the scheduler over them, all
    built from the same rules, so independent instances never share state.
    """

    def __init__(self, rules: Optional[OperatingRules] = None):
        self.rules = rules or OperatingRules()
        self.ledger = FlightLedger(self.rules)
        self.registry = CrewRegistry(self.rules)
        self.scheduler = CrewScheduler(self.ledger, self.registry, self.rules)

    # --- Flight lifecycle ---

    def add_flight(
        self,
        origin: str,
        destination: str,
        departure: int,
        arrival: int,
        seats: int,
        base_price: float
    ) -> int:
        """Add a flight and return its new identifier."""
        return self.ledger.add(origin, destination, departure, arrival, seats, base_price).id

    def remove_flight(self, flight_id: int) -> Flight:
        """Remove a flight and take it off every crew member's duties."""
        self.scheduler.release_flight(flight_id)
        return self.ledger.remove(flight_id)

    def update_flight(self, flight_id: int, **fields) -> Flight:
        """
        Update a flight. A retimed flight loses its crew (the scheduler
        listens for retimes), who must be re-assigned explicitly.
        """
        return self.ledger.update(flight_id, **fields)

    # --- Booking ---

    def book(self, passenger_id: str, flight_id: int) -> BookingResult:
        return self.ledger.book(passenger_id, flight_id)

    def cancel(self, passenger_id: str, flight_id: int) -> CancellationResult:
        return self.ledger.cancel(passenger_id, flight_id)

    # --- Queries ---

    def list_flights(self) -> List[Flight]:
        return self.ledger.flights

    def price_of(self, flight_id: int) -> float:
        """Current dynamic fare of a flight."""
        return dynamic_price(self.ledger.get(flight_id), self.rules.occupancy_surcharge)

    def search_flights(self, origin: str, destination: str) -> List[Flight]:
        return self.ledger.search_route(origin, destination)

    def search_by_departure(self, earliest: int, latest: int) -> List[Flight]:
        return self.ledger.search_by_departure(earliest, latest)

    def passenger_bookings(self, passenger_id: str) -> List[Tuple[Flight, Booking]]:
        return self.ledger.bookings_for(passenger_id)

    def occupancy_report(self) -> Dict[int, float]:
        return self.ledger.occupancy_report()

    def waitlist_report(self) -> Dict[int, int]:
        return self.ledger.waitlist_report()

    # --- Routing ---

    def shortest_by_time(self, source: str, destination: str) -> RouteResult:
        return self.ledger.shortest_by_time(source, destination)

    def shortest_by_price(self, source: str, destination: str) -> RouteResult:
        return self.ledger.shortest_by_price(source, destination)

    # --- Crew ---

    def add_crew(self, name: str, role: Union[CrewRole, str]) -> int:
        """Register a crew member and return their identifier."""
        return self.registry.add(name, role).id

    def list_crew(self) -> List[CrewMember]:
        return self.registry.members

    def assign_crew(self, solver: str = "greedy") -> AssignmentReport:
        """
        Staff every flight that still needs crew.

        Args:
            solver: "greedy" for the left-to-right pass, "exact" for the
                binary program

        Raises:
            ValueError: for an unknown solver name
        """
        if solver == "greedy":
            return self.scheduler.assign_crew_to_all_flights()
        if solver == "exact":
            return ExactCrewAssignment(self.scheduler).run()
        raise ValueError(f"Unknown solver {solver!r}; expected one of {SOLVERS}")

    def duties(self, crew_id: int) -> List[DutyEntry]:
        return self.scheduler.duties(crew_id)

    def duty_roster(self) -> Dict[int, List[DutyEntry]]:
        return self.scheduler.duty_roster()

    def crew_vacancy(self) -> VacancyReport:
        return check_crew_vacancy(self.registry, self.ledger.flights, self.rules)

    def __repr__(self) -> str:
        return f"AirlineService({self.ledger!r}, {self.registry!r})"

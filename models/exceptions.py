"""Exceptions raised by the flight inventory and crew scheduling core."""

from typing import Optional


class FlightEaseError(Exception):
    """Base exception for the FlightEase core."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[dict] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "GENERIC_ERROR"
        self.context = context or {}


class FlightNotFound(FlightEaseError):
    """No flight with the requested identifier exists in the ledger."""

    def __init__(self, flight_id: int):
        super().__init__(
            f"Flight {flight_id} not found",
            error_code="FLIGHT_NOT_FOUND",
            context={"flight_id": flight_id}
        )
        self.flight_id = flight_id


class CrewNotFound(FlightEaseError):
    """No crew member with the requested identifier exists."""

    def __init__(self, crew_id: int):
        super().__init__(
            f"Crew member {crew_id} not found",
            error_code="CREW_NOT_FOUND",
            context={"crew_id": crew_id}
        )
        self.crew_id = crew_id


class NoSeatAvailable(FlightEaseError):
    """Every seat on the flight is held by an active booking."""


class NoActiveBooking(FlightEaseError):
    """The passenger holds no active booking on the flight."""


class NoRouteFound(FlightEaseError):
    """The destination airport is unreachable from the source."""

    def __init__(self, source: str, destination: str):
        super().__init__(
            f"No route found from {source} to {destination}",
            error_code="NO_ROUTE",
            context={"source": source, "destination": destination}
        )
        self.source = source
        self.destination = destination


class InvalidTimeWindow(FlightEaseError):
    """Earliest bound of a departure window is later than the latest."""


class InvalidDepartureTime(FlightEaseError):
    """Departure time lies outside the day."""


class InvalidFlightSchedule(FlightEaseError):
    """Arrival is not after departure or falls past the end of the day."""


class CrewAssignmentIncomplete(FlightEaseError):
    """
    Not enough available crew to fully staff a flight.

    Nothing is committed for the flight when this is raised.
    """

    def __init__(self, flight_id: int, pilots_needed: int, attendants_needed: int):
        super().__init__(
            f"Could not assign required crew to flight {flight_id}: "
            f"needed {pilots_needed} more pilot(s) and "
            f"{attendants_needed} more attendant(s)",
            error_code="CREW_INCOMPLETE",
            context={
                "flight_id": flight_id,
                "pilots_needed": pilots_needed,
                "attendants_needed": attendants_needed,
            }
        )
        self.flight_id = flight_id
        self.pilots_needed = pilots_needed
        self.attendants_needed = attendants_needed

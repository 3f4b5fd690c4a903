"""Greedy per-flight crew assignment."""

from typing import Dict, List, Optional, Tuple
import logging
import time

from models import (
    AssignmentOutcome,
    AssignmentReport,
    AssignmentStatus,
    CrewRegistry,
    CrewRole,
    DutyEntry,
    Flight,
    FlightLedger,
    OperatingRules,
)
from models.exceptions import CrewAssignmentIncomplete, CrewNotFound

logger = logging.getLogger(__name__)


class CrewScheduler:
    """
    Assigns crew to flights with a single left-to-right greedy pass.

    Each flight needs ``pilots_per_flight`` pilots and
    ``attendants_per_flight`` attendants. A flight is either fully staffed
    or left untouched; partial proposals are never committed.

    The pass is a heuristic: an early flight can take a candidate who would
    have fitted a later flight better, leaving that later flight
    understaffed. ``ExactCrewAssignment`` solves the same problem optimally.
    """

    def __init__(
        self,
        ledger: FlightLedger,
        registry: CrewRegistry,
        rules: Optional[OperatingRules] = None
    ):
        self.ledger = ledger
        self.registry = registry
        self.rules = rules or ledger.rules
        # Retimed flights lose their crew
        ledger.on_retime(self.release_flight)

    def is_available(self, crew_id: int, start: int, end: int) -> bool:
        """
        Check if a crew member is free during [start, end].

        Touching endpoints do not conflict. Flights that have since left
        the ledger are ignored; an unknown crew member is never available.
        """
        try:
            member = self.registry.get(crew_id)
        except CrewNotFound:
            return False

        turnaround = self.rules.min_turnaround_minutes
        for flight_id in member.assigned_flights:
            flight = self.ledger.find(flight_id)
            if flight is None:
                continue
            if flight.overlaps(start, end, turnaround):
                return False
        return True

    def role_counts(self, flight: Flight) -> Tuple[int, int]:
        """Pilots and attendants already on a flight."""
        pilots = attendants = 0
        for crew_id in flight.crew_assigned:
            if crew_id not in self.registry:
                continue
            if self.registry.get(crew_id).role is CrewRole.PILOT:
                pilots += 1
            else:
                attendants += 1
        return pilots, attendants

    def staffing_gap(self, flight: Flight) -> Tuple[int, int]:
        """Pilots and attendants still missing from a flight."""
        pilots, attendants = self.role_counts(flight)
        return (
            max(0, self.rules.pilots_per_flight - pilots),
            max(0, self.rules.attendants_per_flight - attendants)
        )

    def _select(
        self,
        candidates: List[int],
        needed: int,
        flight: Flight,
        role: CrewRole
    ) -> List[int]:
        chosen: List[int] = []
        for crew_id in candidates:
            if len(chosen) >= needed:
                break
            if crew_id in chosen or crew_id not in self.registry:
                continue
            # Candidates listed under the wrong role never fill a slot
            if self.registry.get(crew_id).role is not role:
                logger.debug(f"Crew {crew_id} is not a {role.value}, skipping")
                continue
            if self.is_available(crew_id, flight.departure, flight.arrival):
                chosen.append(crew_id)
        return chosen

    def commit(self, flight: Flight, pilots: List[int], attendants: List[int]) -> None:
        """Record the selected crew on the flight and on each member."""
        for crew_id in pilots + attendants:
            flight.crew_assigned.append(crew_id)
            self.registry.get(crew_id).assigned_flights.add(flight.id)
        logger.info(
            f"Crew assigned to flight {flight.id}: "
            f"pilots {pilots}, attendants {attendants}"
        )

    def assign_crew_to_flight(
        self,
        flight_id: int,
        pilot_ids: List[int],
        attendant_ids: List[int]
    ) -> AssignmentOutcome:
        """
        Staff one flight from ordered candidate lists.

        Candidates are scanned in order and taken while available, up to
        the number still missing for their role; a candidate whose role does
        not match the list is passed over. Selections are committed only if
        both roles reach their quota.

        Returns:
            ASSIGNED outcome, or SKIPPED if the flight was already staffed

        Raises:
            FlightNotFound: if the flight does not exist
            CrewAssignmentIncomplete: if either role cannot be filled.
                Nothing is committed.
        """
        flight = self.ledger.get(flight_id)

        pilots_missing, attendants_missing = self.staffing_gap(flight)
        if pilots_missing == 0 and attendants_missing == 0:
            logger.info(f"Flight {flight_id}: already fully staffed, skipping assignment")
            return AssignmentOutcome(flight_id=flight_id, status=AssignmentStatus.SKIPPED)

        pilots = self._select(pilot_ids, pilots_missing, flight, CrewRole.PILOT)
        attendants = self._select(attendant_ids, attendants_missing, flight, CrewRole.ATTENDANT)

        pilots_needed = pilots_missing - len(pilots)
        attendants_needed = attendants_missing - len(attendants)
        if pilots_needed or attendants_needed:
            raise CrewAssignmentIncomplete(flight_id, pilots_needed, attendants_needed)

        self.commit(flight, pilots, attendants)
        return AssignmentOutcome(
            flight_id=flight_id,
            status=AssignmentStatus.ASSIGNED,
            pilots=pilots,
            attendants=attendants
        )

    def assign_crew_to_all_flights(self) -> AssignmentReport:
        """
        Run per-flight assignment over every flight in ledger order.

        Flights are visited by ascending identifier, not departure time.
        A flight that cannot be staffed is reported and the run continues.
        """
        start_time = time.time()
        pilot_ids = self.registry.ids_by_role(CrewRole.PILOT)
        attendant_ids = self.registry.ids_by_role(CrewRole.ATTENDANT)

        outcomes: List[AssignmentOutcome] = []
        for flight in self.ledger:
            try:
                outcome = self.assign_crew_to_flight(flight.id, pilot_ids, attendant_ids)
            except CrewAssignmentIncomplete as e:
                logger.warning(e.message)
                outcome = AssignmentOutcome(
                    flight_id=flight.id,
                    status=AssignmentStatus.INCOMPLETE,
                    pilots_needed=e.pilots_needed,
                    attendants_needed=e.attendants_needed
                )
            outcomes.append(outcome)

        return AssignmentReport(
            outcomes=outcomes,
            solver="greedy",
            solve_time_seconds=time.time() - start_time
        )

    def release_flight(self, flight_id: int) -> List[int]:
        """
        Take a flight off every crew member's duties.

        Returns:
            IDs of the crew members released
        """
        released = []
        for member in self.registry:
            if flight_id in member.assigned_flights:
                member.assigned_flights.discard(flight_id)
                released.append(member.id)

        flight = self.ledger.find(flight_id)
        if flight is not None:
            flight.crew_assigned.clear()

        if released:
            logger.info(f"Crew {released} released from flight {flight_id}")
        return released

    def duties(self, crew_id: int) -> List[DutyEntry]:
        """Assigned flights of one crew member, by departure time."""
        member = self.registry.get(crew_id)
        entries = []
        for flight_id in member.assigned_flights:
            flight = self.ledger.find(flight_id)
            if flight is None:
                logger.debug(f"Flight {flight_id} on crew {crew_id} duties no longer exists")
                continue
            entries.append(DutyEntry(flight.id, flight.departure, flight.arrival))
        entries.sort(key=lambda d: (d.departure, d.flight_id))
        return entries

    def duty_roster(self) -> Dict[int, List[DutyEntry]]:
        """Duty list for every crew member, keyed by crew id."""
        return {member.id: self.duties(member.id) for member in self.registry}

    def __repr__(self) -> str:
        return f"CrewScheduler(flights={len(self.ledger)}, crew={len(self.registry)})"

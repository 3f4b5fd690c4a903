"""Crew assignment outcomes and staffing reports."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from models.flight import format_minutes


class AssignmentStatus(Enum):
    """Result of trying to staff one flight."""
    ASSIGNED = "assigned"
    SKIPPED = "skipped"        # already fully staffed
    INCOMPLETE = "incomplete"  # nothing committed


@dataclass
class AssignmentOutcome:
    """Outcome of a crew assignment attempt for one flight."""
    flight_id: int
    status: AssignmentStatus
    pilots: List[int] = field(default_factory=list)
    attendants: List[int] = field(default_factory=list)
    pilots_needed: int = 0
    attendants_needed: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status is AssignmentStatus.ASSIGNED

    @property
    def crew_ids(self) -> List[int]:
        """Crew committed by this attempt."""
        return self.pilots + self.attendants

    def to_dict(self) -> dict:
        return {
            "flight_id": self.flight_id,
            "status": self.status.value,
            "pilots": list(self.pilots),
            "attendants": list(self.attendants),
            "pilots_needed": self.pilots_needed,
            "attendants_needed": self.attendants_needed,
        }


@dataclass
class AssignmentReport:
    """
    Outcomes of a bulk assignment run, one per flight in ledger order.
    """
    outcomes: List[AssignmentOutcome]
    solver: str = "greedy"
    solve_time_seconds: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    def _with_status(self, status: AssignmentStatus) -> List[int]:
        return [o.flight_id for o in self.outcomes if o.status is status]

    @property
    def assigned(self) -> List[int]:
        return self._with_status(AssignmentStatus.ASSIGNED)

    @property
    def skipped(self) -> List[int]:
        return self._with_status(AssignmentStatus.SKIPPED)

    @property
    def incomplete(self) -> List[int]:
        return self._with_status(AssignmentStatus.INCOMPLETE)

    @property
    def all_staffed(self) -> bool:
        """True when no flight was left understaffed."""
        return not self.incomplete

    def get_outcome(self, flight_id: int) -> Optional[AssignmentOutcome]:
        for outcome in self.outcomes:
            if outcome.flight_id == flight_id:
                return outcome
        return None

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "solver": self.solver,
            "solve_time_seconds": self.solve_time_seconds,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "statistics": {
                "assigned": len(self.assigned),
                "skipped": len(self.skipped),
                "incomplete": len(self.incomplete),
            }
        }

    def print_summary(self) -> None:
        """Print a formatted summary of the run."""
        print("\n" + "=" * 60)
        print(f"              CREW ASSIGNMENT ({self.solver.upper()})")
        print("=" * 60)
        for outcome in self.outcomes:
            if outcome.status is AssignmentStatus.ASSIGNED:
                print(
                    f"Crew assigned to flight {outcome.flight_id}: "
                    f"pilots {outcome.pilots}, attendants {outcome.attendants}"
                )
            elif outcome.status is AssignmentStatus.SKIPPED:
                print(f"Flight {outcome.flight_id}: already fully staffed, skipped")
            else:
                print(
                    f"Could not assign crew to flight {outcome.flight_id} "
                    f"(needed {outcome.pilots_needed} pilot(s), "
                    f"{outcome.attendants_needed} attendant(s))"
                )
        print("=" * 60)

    def __repr__(self) -> str:
        return (
            f"AssignmentReport(solver={self.solver}, assigned={len(self.assigned)}, "
            f"skipped={len(self.skipped)}, incomplete={len(self.incomplete)})"
        )


@dataclass
class DutyEntry:
    """One flight on a crew member's duty list."""
    flight_id: int
    departure: int
    arrival: int

    def to_dict(self) -> dict:
        return {
            "flight_id": self.flight_id,
            "departure": format_minutes(self.departure),
            "arrival": format_minutes(self.arrival),
        }


@dataclass
class CrewRequirement:
    """Minimum distinct pilots and attendants needed to staff a schedule."""
    pilots: int
    attendants: int

    @property
    def total(self) -> int:
        return self.pilots + self.attendants


@dataclass
class VacancyReport:
    """Shortfall between the crew on hand and the estimated requirement."""
    required: CrewRequirement
    current_pilots: int
    current_attendants: int

    @property
    def extra_pilots(self) -> int:
        return max(0, self.required.pilots - self.current_pilots)

    @property
    def extra_attendants(self) -> int:
        return max(0, self.required.attendants - self.current_attendants)

    @property
    def fully_staffed(self) -> bool:
        return self.extra_pilots == 0 and self.extra_attendants == 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "required_pilots": self.required.pilots,
            "required_attendants": self.required.attendants,
            "current_pilots": self.current_pilots,
            "current_attendants": self.current_attendants,
            "extra_pilots": self.extra_pilots,
            "extra_attendants": self.extra_attendants,
        }

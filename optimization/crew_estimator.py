"""Network-wide minimum crew estimate and vacancy check."""

from heapq import heappush, heappop
from typing import Iterable, List, Optional
import logging

from models import (
    CrewRegistry,
    CrewRequirement,
    CrewRole,
    Flight,
    OperatingRules,
    VacancyReport,
)

logger = logging.getLogger(__name__)


def _staff_flight(free_at: List[int], flight: Flight, quota: int, turnaround: int) -> int:
    """
    Reuse crew who are free by departure, then commit ``quota`` crew
    until the flight lands.

    Returns:
        Number of new crew the flight needs
    """
    reused = 0
    while free_at and free_at[0] <= flight.departure and reused < quota:
        heappop(free_at)
        reused += 1

    for _ in range(quota):
        heappush(free_at, flight.arrival + turnaround)

    return quota - reused


def min_crew_required(
    flights: Iterable[Flight],
    rules: Optional[OperatingRules] = None
) -> CrewRequirement:
    """
    Estimate the fewest pilots and attendants that can staff a schedule.

    Greedy interval partitioning: flights are taken in departure order and
    each one reuses crew whose last flight has landed. It ignores crew
    base location and duty-time limits.
    """
    rules = rules or OperatingRules()
    turnaround = rules.min_turnaround_minutes

    pilots_free: List[int] = []
    attendants_free: List[int] = []
    total_pilots = 0
    total_attendants = 0

    for flight in sorted(flights, key=lambda f: f.departure):
        total_pilots += _staff_flight(pilots_free, flight, rules.pilots_per_flight, turnaround)
        total_attendants += _staff_flight(
            attendants_free, flight, rules.attendants_per_flight, turnaround
        )

    logger.debug(f"Minimum crew required: {total_pilots} pilots, {total_attendants} attendants")
    return CrewRequirement(pilots=total_pilots, attendants=total_attendants)


def check_crew_vacancy(
    registry: CrewRegistry,
    flights: Iterable[Flight],
    rules: Optional[OperatingRules] = None
) -> VacancyReport:
    """Compare the registry's headcount per role against the estimate."""
    counts = registry.count_by_role()
    report = VacancyReport(
        required=min_crew_required(flights, rules),
        current_pilots=counts[CrewRole.PILOT],
        current_attendants=counts[CrewRole.ATTENDANT]
    )
    logger.info(
        f"Add {report.extra_pilots} more pilots, "
        f"{report.extra_attendants} more attendants"
    )
    return report

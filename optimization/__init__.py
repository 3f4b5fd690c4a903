"""Routing and crew scheduling algorithms."""

from optimization.routing import CheapestRoute, FastestRoute, RouteQuery, RouteResult
from optimization.crew_assignment import CrewScheduler
from optimization.crew_estimator import check_crew_vacancy, min_crew_required
from optimization.exact_assignment import ExactCrewAssignment

__all__ = [
    "RouteQuery",
    "RouteResult",
    "FastestRoute",
    "CheapestRoute",
    "CrewScheduler",
    "ExactCrewAssignment",
    "min_crew_required",
    "check_crew_vacancy",
]

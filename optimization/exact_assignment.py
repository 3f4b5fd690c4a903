"""Exact crew assignment as a binary program."""

from typing import Dict, List, Optional, Tuple
import logging
import time

import pulp

from models import (
    AssignmentOutcome,
    AssignmentReport,
    AssignmentStatus,
    CrewRole,
    Flight,
)
from optimization.crew_assignment import CrewScheduler

logger = logging.getLogger(__name__)


class ExactCrewAssignment:
    """
    Staff the largest possible number of flights.

    Same data and commit rules as the greedy pass, solved as a binary
    program instead of flight by flight:

        max   sum_f y_f
        s.t.  sum_{c in role} x_cf = missing_role(f) * y_f   for each f, role
              x_cf + x_cg <= 1       for each c and overlapping f, g
              x, y binary

    Crew whose existing duties conflict with a flight get no variable for
    it. Each flight is still committed all-or-nothing.
    """

    def __init__(self, scheduler: CrewScheduler, solver: str = "CBC"):
        self.scheduler = scheduler
        self.ledger = scheduler.ledger
        self.registry = scheduler.registry
        self.rules = scheduler.rules
        self.solver = solver

        # Model objects (rebuilt on each build_model)
        self.model: Optional[pulp.LpProblem] = None
        self.x: Dict[Tuple[int, int], pulp.LpVariable] = {}
        self.y: Dict[int, pulp.LpVariable] = {}

        # Flight id -> (pilots missing, attendants missing)
        self.gaps: Dict[int, Tuple[int, int]] = {}

    def _open_flights(self) -> List[Flight]:
        open_flights = []
        self.gaps = {}
        for flight in self.ledger:
            gap = self.scheduler.staffing_gap(flight)
            if gap != (0, 0):
                self.gaps[flight.id] = gap
                open_flights.append(flight)
        return open_flights

    def build_model(self) -> pulp.LpProblem:
        """Build the binary program over flights that still need crew."""
        flights = self._open_flights()
        self.model = pulp.LpProblem("CrewAssignment", pulp.LpMaximize)
        self.x = {}
        self.y = {}

        for flight in flights:
            self.y[flight.id] = pulp.LpVariable(f"y_{flight.id}", cat=pulp.LpBinary)
            pilots_missing, attendants_missing = self.gaps[flight.id]
            for member in self.registry:
                missing = pilots_missing if member.role is CrewRole.PILOT else attendants_missing
                if missing == 0:
                    continue
                if not self.scheduler.is_available(member.id, flight.departure, flight.arrival):
                    continue
                self.x[(member.id, flight.id)] = pulp.LpVariable(
                    f"x_{member.id}_{flight.id}", cat=pulp.LpBinary
                )

        # Objective: maximise fully staffed flights
        self.model += pulp.lpSum(self.y.values()), "StaffedFlights"

        # Constraint 1: each role filled exactly, or not at all
        for flight in flights:
            for role, missing in zip((CrewRole.PILOT, CrewRole.ATTENDANT), self.gaps[flight.id]):
                if missing == 0:
                    continue
                role_vars = [
                    var for (crew_id, flight_id), var in self.x.items()
                    if flight_id == flight.id and self.registry.get(crew_id).role is role
                ]
                self.model += (
                    pulp.lpSum(role_vars) == missing * self.y[flight.id],
                    f"Staffing_{flight.id}_{role.name}"
                )

        # Constraint 2: no crew member on two overlapping flights
        turnaround = self.rules.min_turnaround_minutes
        flight_by_id = {f.id: f for f in flights}
        for member in self.registry:
            candidate = sorted(
                (flight_by_id[fid] for (cid, fid) in self.x if cid == member.id),
                key=lambda f: f.departure
            )
            for i, first in enumerate(candidate):
                for second in candidate[i + 1:]:
                    if first.overlaps(second.departure, second.arrival, turnaround):
                        self.model += (
                            self.x[(member.id, first.id)] + self.x[(member.id, second.id)] <= 1,
                            f"Conflict_{member.id}_{first.id}_{second.id}"
                        )

        return self.model

    def solve(self) -> Dict[int, bool]:
        """
        Solve the current model.

        Returns:
            Flight id -> whether the solution staffs it
        """
        if self.model is None:
            raise ValueError("Model not built. Call build_model() first.")

        if self.solver.upper() == "GUROBI":
            slv = pulp.GUROBI_CMD(msg=0)
        elif self.solver.upper() == "CPLEX":
            slv = pulp.CPLEX_CMD(msg=0)
        else:
            slv = pulp.PULP_CBC_CMD(msg=0)

        self.model.solve(slv)

        if self.model.status != pulp.LpStatusOptimal:
            status_name = pulp.LpStatus[self.model.status]
            raise RuntimeError(
                f"Solver did not find optimal solution. Status: {status_name}"
            )

        return {
            flight_id: (pulp.value(var) or 0.0) > 0.5
            for flight_id, var in self.y.items()
        }

    def _selected(self, flight_id: int, role: CrewRole) -> List[int]:
        return sorted(
            crew_id for (crew_id, fid), var in self.x.items()
            if fid == flight_id
            and self.registry.get(crew_id).role is role
            and (pulp.value(var) or 0.0) > 0.5
        )

    def run(self) -> AssignmentReport:
        """Build, solve and commit; one outcome per flight in ledger order."""
        start_time = time.time()
        self.build_model()

        staffed: Dict[int, bool] = {}
        if self.y:
            staffed = self.solve()

        outcomes: List[AssignmentOutcome] = []
        for flight in self.ledger:
            if flight.id not in self.gaps:
                outcomes.append(
                    AssignmentOutcome(flight_id=flight.id, status=AssignmentStatus.SKIPPED)
                )
                continue

            if staffed.get(flight.id):
                pilots = self._selected(flight.id, CrewRole.PILOT)
                attendants = self._selected(flight.id, CrewRole.ATTENDANT)
                self.scheduler.commit(flight, pilots, attendants)
                outcomes.append(AssignmentOutcome(
                    flight_id=flight.id,
                    status=AssignmentStatus.ASSIGNED,
                    pilots=pilots,
                    attendants=attendants
                ))
            else:
                pilots_missing, attendants_missing = self.gaps[flight.id]
                logger.warning(f"Could not assign required crew to flight {flight.id}")
                outcomes.append(AssignmentOutcome(
                    flight_id=flight.id,
                    status=AssignmentStatus.INCOMPLETE,
                    pilots_needed=pilots_missing,
                    attendants_needed=attendants_missing
                ))

        return AssignmentReport(
            outcomes=outcomes,
            solver="exact",
            solve_time_seconds=time.time() - start_time
        )

    @property
    def num_variables(self) -> int:
        return len(self.x) + len(self.y)

    def __repr__(self) -> str:
        return (
            f"ExactCrewAssignment(flights={len(self.ledger)}, "
            f"crew={len(self.registry)}, variables={self.num_variables})"
        )

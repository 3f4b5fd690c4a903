"""Operating rules and tunable constants."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class OperatingRules:
    """
    Operational rules shared by the ledger, pricing, routing and crew scheduling.

    The defaults reproduce the behaviour of the booking desk: two pilots and
    two attendants per flight, a 50% surcharge at full occupancy and no
    turnaround buffer between back-to-back flights.
    """
    # Staffing rules
    pilots_per_flight: int = 2
    attendants_per_flight: int = 2

    # Crew may fly back-to-back when this is zero
    min_turnaround: timedelta = timedelta(0)

    # Pricing
    occupancy_surcharge: float = 0.5
    live_route_pricing: bool = False

    # Identifier bases
    first_flight_id: int = 1000
    first_crew_id: int = 1

    # Schedule horizon (same-day flights only)
    minutes_per_day: int = 24 * 60

    @property
    def min_turnaround_minutes(self) -> int:
        """Minimum turnaround in whole minutes."""
        return int(self.min_turnaround.total_seconds() // 60)

    @property
    def max_price_multiplier(self) -> float:
        """Price multiplier applied to a completely full flight."""
        return 1.0 + self.occupancy_surcharge

    @property
    def crew_per_flight(self) -> int:
        """Total crew needed to fully staff one flight."""
        return self.pilots_per_flight + self.attendants_per_flight

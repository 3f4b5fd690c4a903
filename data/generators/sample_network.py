"""Sample network preloaded by the booking desk.

Three flights between Delhi, Mumbai and Bengaluru plus a roster of four
pilots and five attendants.
"""

from typing import Optional

from api.service import AirlineService
from models import CrewRole, OperatingRules, format_minutes


def generate_sample_network(rules: Optional[OperatingRules] = None) -> AirlineService:
    """
    Generate the sample network.

    Returns:
        AirlineService holding the flights and crew

    Dataset Details:
        - 1000 DEL->MUM 08:00-11:00, 3 seats, base 5000
        - 1001 MUM->BLR 11:40-15:00, 2 seats, base 4000
        - 1002 DEL->BLR 08:20-15:00, 1 seat, base 7000
        - The connection via MUM (380 min) beats the direct flight (400 min)
          on time; the direct flight is cheaper (7000 < 9000)
    """
    service = AirlineService(rules)

    service.add_flight("DEL", "MUM", 480, 660, 3, 5000)
    service.add_flight("MUM", "BLR", 700, 900, 2, 4000)
    service.add_flight("DEL", "BLR", 500, 900, 1, 7000)

    crew = [
        ("John Pilot", CrewRole.PILOT),
        ("Jane CoPilot", CrewRole.PILOT),
        ("Alice Attendant", CrewRole.ATTENDANT),
        ("Bob Attendant", CrewRole.ATTENDANT),
        ("Divyansh", CrewRole.PILOT),
        ("Somu", CrewRole.PILOT),
        ("Aditya", CrewRole.ATTENDANT),
        ("Arman", CrewRole.ATTENDANT),
        ("Tanya", CrewRole.ATTENDANT),
    ]
    for name, role in crew:
        service.add_crew(name, role)

    return service


def print_instance_summary(service: AirlineService, title: str = "SAMPLE NETWORK") -> None:
    """Print a summary of the instance."""
    print("\n" + "=" * 60)
    print(f"{title:^60}")
    print("=" * 60)

    print("\nFLIGHTS:")
    print("-" * 60)
    print(f"{'ID':<6} {'From':<5} {'To':<5} {'Dep':<6} {'Arr':<6} {'Seats':>7} {'Price':>10}")
    print("-" * 60)
    for f in service.list_flights():
        print(
            f"{f.id:<6} {f.origin:<5} {f.destination:<5} "
            f"{format_minutes(f.departure):<6} {format_minutes(f.arrival):<6} "
            f"{f.seats_available:>3}/{f.seats_total:<3} "
            f"{service.price_of(f.id):>10.2f}"
        )

    print("\nCREW:")
    print("-" * 60)
    print(f"{'ID':<4} {'Name':<18} {'Role':<10}")
    print("-" * 60)
    for c in service.list_crew():
        print(f"{c.id:<4} {c.name:<18} {c.role.value:<10}")

    rules = service.rules
    print("\nRULES:")
    print("-" * 60)
    print(f"  Crew per Flight:     {rules.pilots_per_flight} pilots, {rules.attendants_per_flight} attendants")
    print(f"  Min Turnaround:      {rules.min_turnaround_minutes} minutes")
    print(f"  Max Price Multiple:  {rules.max_price_multiplier:.2f}x")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    # Generate and print the instance
    print_instance_summary(generate_sample_network())

"""Domestic-network dataset generator.

Creates a larger instance with 12 flights across five airports and a
crew roster that is deliberately short of attendants.

DESIGN PRINCIPLE: the morning bank overlaps heavily (four flights in the
air at 08:00), so the vacancy check reports a shortfall and the greedy
assignment leaves some flights understaffed.
"""

from typing import Optional

from api.service import AirlineService
from models import CrewRole, OperatingRules


def generate_domestic_network(rules: Optional[OperatingRules] = None) -> AirlineService:
    """
    Generate the domestic-network instance.

    Returns:
        AirlineService holding the flights and crew

    Dataset Details:
        - 12 flights over one day between DEL, MUM, BLR, HYD and CCU
        - 8 pilots and 6 attendants
        - Minimum requirement is 8 of each role, so 2 attendants short
    """
    service = AirlineService(rules)

    def add_flight(origin, dest, dep_hour, dep_min, duration_min, seats, price):
        departure = dep_hour * 60 + dep_min
        service.add_flight(origin, dest, departure, departure + duration_min, seats, price)

    # === Morning bank: four departures overlapping at 08:00 ===
    add_flight("DEL", "MUM", 7, 0, 130, 180, 5200)   # arr 09:10
    add_flight("DEL", "BLR", 7, 30, 165, 180, 6100)  # arr 10:15
    add_flight("MUM", "HYD", 7, 45, 85, 150, 3400)   # arr 09:10
    add_flight("CCU", "DEL", 8, 0, 140, 150, 5600)   # arr 10:20

    # === Midday connections ===
    add_flight("MUM", "BLR", 10, 0, 100, 180, 3900)  # arr 11:40
    add_flight("HYD", "BLR", 10, 30, 70, 120, 2700)  # arr 11:40
    add_flight("DEL", "CCU", 11, 0, 135, 150, 5400)  # arr 13:15
    add_flight("BLR", "HYD", 12, 0, 75, 120, 2600)   # arr 13:15

    # === Evening returns ===
    add_flight("BLR", "DEL", 14, 0, 170, 180, 6300)  # arr 16:50
    add_flight("HYD", "MUM", 15, 0, 85, 150, 3300)   # arr 16:25
    add_flight("BLR", "MUM", 16, 0, 100, 180, 4000)  # arr 17:40
    add_flight("MUM", "DEL", 18, 0, 135, 180, 5300)  # arr 20:15

    for i in range(1, 9):
        service.add_crew(f"Pilot {i}", CrewRole.PILOT)
    for i in range(1, 7):
        service.add_crew(f"Attendant {i}", CrewRole.ATTENDANT)

    return service


if __name__ == "__main__":
    from data.generators.sample_network import print_instance_summary

    print_instance_summary(generate_domestic_network(), title="DOMESTIC NETWORK")

"""Core data models for the FlightEase inventory and crew scheduling system."""

from models.rules import OperatingRules
from models.seating import Booking, BookingResult, CancellationResult, SeatMap
from models.flight import Flight, format_minutes
from models.pricing import dynamic_price, occupancy_fraction
from models.crew import CrewMember, CrewRole
from models.network import RouteArc, RouteGraph
from models.ledger import FlightLedger
from models.registry import CrewRegistry
from models.assignment import (
    AssignmentOutcome,
    AssignmentReport,
    AssignmentStatus,
    CrewRequirement,
    DutyEntry,
    VacancyReport,
)

__all__ = [
    "OperatingRules",
    "Booking",
    "BookingResult",
    "CancellationResult",
    "SeatMap",
    "Flight",
    "format_minutes",
    "dynamic_price",
    "occupancy_fraction",
    "CrewMember",
    "CrewRole",
    "RouteArc",
    "RouteGraph",
    "FlightLedger",
    "CrewRegistry",
    "AssignmentOutcome",
    "AssignmentReport",
    "AssignmentStatus",
    "CrewRequirement",
    "DutyEntry",
    "VacancyReport",
]

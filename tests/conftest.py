"""Pytest fixtures for flight inventory and crew scheduling tests."""

import pytest
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import CrewRegistry, CrewRole, FlightLedger, OperatingRules
from optimization import CrewScheduler
from data.generators.sample_network import generate_sample_network
from data.generators.domestic_network import generate_domestic_network


@pytest.fixture
def default_rules():
    """Standard operating rules."""
    return OperatingRules()


@pytest.fixture
def ledger(default_rules):
    """Empty flight ledger."""
    return FlightLedger(default_rules)


@pytest.fixture
def network_ledger(ledger):
    """DEL/MUM/BLR triangle: connection via MUM is faster, direct is cheaper."""
    ledger.add("DEL", "MUM", 480, 660, 3, 5000)
    ledger.add("MUM", "BLR", 700, 900, 2, 4000)
    ledger.add("DEL", "BLR", 500, 900, 1, 7000)
    return ledger


@pytest.fixture
def small_flight(ledger):
    """Single DEL->MUM flight with three seats."""
    return ledger.add("DEL", "MUM", 480, 660, 3, 5000)


@pytest.fixture
def registry(default_rules):
    """Two pilots and two attendants."""
    registry = CrewRegistry(default_rules)
    registry.add("John Pilot", CrewRole.PILOT)
    registry.add("Jane CoPilot", CrewRole.PILOT)
    registry.add("Alice Attendant", CrewRole.ATTENDANT)
    registry.add("Bob Attendant", CrewRole.ATTENDANT)
    return registry


@pytest.fixture
def scheduler(ledger, registry, default_rules):
    """Crew scheduler over the empty ledger and four-person registry."""
    return CrewScheduler(ledger, registry, default_rules)


@pytest.fixture
def sample_network():
    """Preloaded sample network service."""
    return generate_sample_network()


@pytest.fixture
def domestic_network():
    """Twelve-flight domestic network service."""
    return generate_domestic_network()

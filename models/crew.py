"""Crew data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Set, Union


class CrewRole(Enum):
    """Crew member roles."""
    PILOT = "Pilot"
    ATTENDANT = "Attendant"

    @classmethod
    def parse(cls, value: Union['CrewRole', str]) -> 'CrewRole':
        """Accept a role or its name/value, case-insensitively."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown crew role: {value!r}")
        for role in cls:
            if value.strip().lower() in (role.value.lower(), role.name.lower()):
                return role
        raise ValueError(f"Unknown crew role: {value!r}")


@dataclass
class CrewMember:
    """
    Represents a crew member.

    Attributes:
        id: Registry-assigned crew identifier
        name: Crew member name
        role: Pilot or Attendant
        assigned_flights: IDs of flights this member is rostered on
    """
    id: int
    name: str
    role: CrewRole
    assigned_flights: Set[int] = field(default_factory=set)

    @property
    def is_pilot(self) -> bool:
        return self.role is CrewRole.PILOT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "assigned_flights": sorted(self.assigned_flights),
        }

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CrewMember):
            return self.id == other.id
        return False

    def __repr__(self) -> str:
        return f"CrewMember({self.id}: {self.name}, {self.role.value})"

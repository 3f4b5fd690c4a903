"""Crew registry."""

from typing import Dict, Iterator, List, Optional, Union
import logging

from models.crew import CrewMember, CrewRole
from models.exceptions import CrewNotFound
from models.rules import OperatingRules

logger = logging.getLogger(__name__)


class CrewRegistry:
    """
    Owns crew members and hands out their sequential identifiers.

    Crew members are never removed; iteration is in ascending id order.
    """

    def __init__(self, rules: Optional[OperatingRules] = None):
        self.rules = rules or OperatingRules()
        self._members: Dict[int, CrewMember] = {}
        self._next_id = self.rules.first_crew_id

    def add(self, name: str, role: Union[CrewRole, str]) -> CrewMember:
        """
        Register a new crew member.

        Raises:
            ValueError: if the role is neither Pilot nor Attendant.
        """
        member = CrewMember(id=self._next_id, name=name, role=CrewRole.parse(role))
        self._members[member.id] = member
        self._next_id += 1
        logger.info(f"Crew added: ID {member.id}, {member.name}, {member.role.value}")
        return member

    def get(self, crew_id: int) -> CrewMember:
        try:
            return self._members[crew_id]
        except KeyError:
            raise CrewNotFound(crew_id) from None

    def ids_by_role(self, role: CrewRole) -> List[int]:
        """IDs of all members with the given role, ascending."""
        return [m.id for m in self if m.role is role]

    def count_by_role(self) -> Dict[CrewRole, int]:
        counts = {role: 0 for role in CrewRole}
        for member in self:
            counts[member.role] += 1
        return counts

    @property
    def members(self) -> List[CrewMember]:
        return list(self)

    def __iter__(self) -> Iterator[CrewMember]:
        for crew_id in sorted(self._members):
            yield self._members[crew_id]

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, crew_id: object) -> bool:
        return crew_id in self._members

    def __repr__(self) -> str:
        counts = self.count_by_role()
        return (
            f"CrewRegistry(pilots={counts[CrewRole.PILOT]}, "
            f"attendants={counts[CrewRole.ATTENDANT]})"
        )

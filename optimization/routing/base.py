"""Base class for route queries over the airport network."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from models.network import RouteArc, RouteGraph


@dataclass
class RouteResult:
    """Result of a shortest-route query."""
    total_weight: float
    path: List[str]
    metric: str
    flight_ids: List[int] = field(default_factory=list)
    solve_time_ms: float = 0.0
    nodes_explored: int = 0

    @property
    def num_legs(self) -> int:
        return len(self.flight_ids)

    def to_dict(self) -> dict:
        return {
            "metric": self.metric,
            "total_weight": self.total_weight,
            "path": list(self.path),
            "flight_ids": list(self.flight_ids),
        }

    def __str__(self) -> str:
        return " -> ".join(self.path)


class RouteQuery(ABC):
    """
    Abstract base class for shortest-route queries.

    Subclasses pick the edge weight; the graph is read as it stands for
    the duration of one ``solve`` call.
    """

    metric: str = ""

    def __init__(self, graph: RouteGraph):
        self.graph = graph

    @abstractmethod
    def edge_weight(self, arc: RouteArc) -> float:
        """Non-negative weight of one edge."""
        pass

    @abstractmethod
    def solve(self, source: str, destination: str) -> RouteResult:
        """
        Find the minimum-weight route.

        Args:
            source: Origin airport code
            destination: Destination airport code

        Returns:
            RouteResult with the path from source to destination inclusive

        Raises:
            NoRouteFound: if the destination is unreachable
        """
        pass

    @staticmethod
    def build_path(
        predecessors: Dict[str, Tuple[str, int]],
        source: str,
        destination: str
    ) -> Tuple[List[str], List[int]]:
        """Walk predecessor links back from the destination."""
        path = [destination]
        flight_ids = []
        current = destination
        while current != source:
            current, flight_id = predecessors[current]
            path.append(current)
            flight_ids.append(flight_id)
        path.reverse()
        flight_ids.reverse()
        return path, flight_ids

"""Airport route network for fastest / cheapest route queries."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING
import logging

import networkx as nx

from models.flight import Flight
from models.pricing import dynamic_price
from models.rules import OperatingRules

if TYPE_CHECKING:
    from optimization.routing.base import RouteResult

logger = logging.getLogger(__name__)


@dataclass
class RouteArc:
    """
    Directed edge origin -> destination contributed by one flight.

    ``price`` is the fare captured when the flight entered the network.
    """
    flight_id: int
    origin: str
    destination: str
    duration: int
    price: float
    flight: Flight = field(repr=False, compare=False)


class RouteGraph:
    """
    Airport graph derived from the flight ledger.

    Nodes are airport codes; every flight contributes exactly one edge,
    keyed by its flight id, so parallel flights between the same airports
    stay separate edges and removing a flight retracts only its own edge.
    Each edge carries both weights used by the route queries: the duration
    in minutes and the fare snapshot taken at insertion.
    """

    def __init__(self, rules: Optional[OperatingRules] = None):
        self.rules = rules or OperatingRules()
        self.graph = nx.MultiDiGraph()
        # Edge handles: flight_id -> (origin, destination)
        self._edges: Dict[int, Tuple[str, str]] = {}

    @classmethod
    def from_flights(
        cls,
        flights: Iterable[Flight],
        rules: Optional[OperatingRules] = None
    ) -> 'RouteGraph':
        """Build a fresh graph (consistent snapshot) from a set of flights."""
        route_graph = cls(rules)
        for flight in flights:
            route_graph.add_flight(flight)
        return route_graph

    def add_flight(self, flight: Flight) -> RouteArc:
        """Add the flight's edge, replacing any edge it already had."""
        if flight.id in self._edges:
            self.remove_flight(flight.id)

        arc = RouteArc(
            flight_id=flight.id,
            origin=flight.origin,
            destination=flight.destination,
            duration=flight.duration,
            price=dynamic_price(flight, self.rules.occupancy_surcharge),
            flight=flight
        )
        self.graph.add_edge(
            flight.origin,
            flight.destination,
            key=flight.id,
            **self._arc_features(arc)
        )
        self._edges[flight.id] = (flight.origin, flight.destination)
        logger.debug(f"Route edge added: {arc}")
        return arc

    def remove_flight(self, flight_id: int) -> bool:
        """
        Remove the edge contributed by one flight.

        Airports left without any edge are dropped from the graph.

        Returns:
            True if the flight had an edge
        """
        handle = self._edges.pop(flight_id, None)
        if handle is None:
            return False

        origin, destination = handle
        self.graph.remove_edge(origin, destination, key=flight_id)
        for airport in {origin, destination}:
            if self.graph.degree(airport) == 0:
                self.graph.remove_node(airport)
        logger.debug(f"Route edge removed: flight {flight_id} {origin}->{destination}")
        return True

    def _arc_features(self, arc: RouteArc) -> dict:
        return {
            "arc": arc,
            "duration": arc.duration,
            "price": arc.price,
        }

    def get_arcs(self, airport: str) -> List[RouteArc]:
        """Outgoing edges of an airport, in insertion order."""
        if airport not in self.graph:
            return []
        return [
            data["arc"]
            for _, _, data in self.graph.out_edges(airport, data=True)
        ]

    def get_arc(self, flight_id: int) -> Optional[RouteArc]:
        handle = self._edges.get(flight_id)
        if handle is None:
            return None
        origin, destination = handle
        return self.graph.edges[origin, destination, flight_id]["arc"]

    def shortest_by_time(self, source: str, destination: str) -> 'RouteResult':
        """Fastest route in total flight minutes."""
        from optimization.routing.dijkstra import FastestRoute
        return FastestRoute(self).solve(source, destination)

    def shortest_by_price(self, source: str, destination: str) -> 'RouteResult':
        """Cheapest route in total fare."""
        from optimization.routing.dijkstra import CheapestRoute
        return CheapestRoute(self).solve(source, destination)

    @property
    def airports(self) -> List[str]:
        return sorted(self.graph.nodes)

    @property
    def num_airports(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def num_edges(self) -> int:
        return self.graph.number_of_edges()

    def __contains__(self, flight_id: object) -> bool:
        return flight_id in self._edges

    def __repr__(self) -> str:
        return f"RouteGraph(airports={self.num_airports}, edges={self.num_edges})"

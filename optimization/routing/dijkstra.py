"""Dijkstra shortest-route queries (fastest and cheapest)."""

from dataclasses import dataclass, field
from heapq import heappush, heappop
from itertools import count
from typing import Dict, List, Tuple
import logging
import time

from models.exceptions import NoRouteFound
from models.network import RouteArc
from models.pricing import dynamic_price
from optimization.routing.base import RouteQuery, RouteResult

logger = logging.getLogger(__name__)


@dataclass(order=True)
class Label:
    """
    Tentative distance to an airport.

    ``order`` breaks cost ties by insertion, so the first-discovered
    predecessor wins among equal-cost routes.
    """
    cost: float
    order: int
    node: str = field(compare=False)


class DijkstraRoute(RouteQuery):
    """
    Label-setting shortest path with a binary heap.

    Edge weights are non-negative, so the search stops as soon as the
    destination is settled.
    """

    def solve(self, source: str, destination: str) -> RouteResult:
        start_time = time.time()

        if source == destination:
            return RouteResult(total_weight=0, path=[source], metric=self.metric)

        dist: Dict[str, float] = {source: 0}
        predecessors: Dict[str, Tuple[str, int]] = {}
        sequence = count()
        heap: List[Label] = [Label(cost=0, order=next(sequence), node=source)]
        nodes_explored = 0

        while heap:
            current = heappop(heap)

            # Stale entry superseded by a cheaper label
            if current.cost > dist[current.node]:
                continue

            nodes_explored += 1
            if current.node == destination:
                break

            for arc in self.graph.get_arcs(current.node):
                new_cost = current.cost + self.edge_weight(arc)
                if new_cost < dist.get(arc.destination, float('inf')):
                    dist[arc.destination] = new_cost
                    predecessors[arc.destination] = (current.node, arc.flight_id)
                    heappush(heap, Label(cost=new_cost, order=next(sequence), node=arc.destination))

        if destination not in dist:
            logger.debug(f"No {self.metric} route {source}->{destination}")
            raise NoRouteFound(source, destination)

        path, flight_ids = self.build_path(predecessors, source, destination)
        return RouteResult(
            total_weight=dist[destination],
            path=path,
            metric=self.metric,
            flight_ids=flight_ids,
            solve_time_ms=(time.time() - start_time) * 1000,
            nodes_explored=nodes_explored
        )


class FastestRoute(DijkstraRoute):
    """Minimise total flight minutes."""

    metric = "time"

    def edge_weight(self, arc: RouteArc) -> float:
        return arc.duration


class CheapestRoute(DijkstraRoute):
    """
    Minimise total fare.

    Fares are the snapshot taken when each flight entered the network,
    unless the rules ask for live pricing.
    """

    metric = "price"

    def edge_weight(self, arc: RouteArc) -> float:
        if self.graph.rules.live_route_pricing:
            return dynamic_price(arc.flight, self.graph.rules.occupancy_surcharge)
        return arc.price

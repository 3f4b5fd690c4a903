"""Shortest-route queries over the airport network."""

from optimization.routing.base import RouteQuery, RouteResult
from optimization.routing.dijkstra import CheapestRoute, DijkstraRoute, FastestRoute

__all__ = [
    "RouteQuery",
    "RouteResult",
    "DijkstraRoute",
    "FastestRoute",
    "CheapestRoute",
]

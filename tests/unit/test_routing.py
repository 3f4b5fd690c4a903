"""Unit tests for the route graph and shortest-route queries."""

import pytest
from itertools import permutations
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import networkx as nx

from models import FlightLedger, OperatingRules, RouteGraph
from models.exceptions import NoRouteFound
from optimization import CheapestRoute, FastestRoute


class TestRouteGraph:
    """Tests for route graph maintenance."""

    def test_one_edge_per_flight(self, network_ledger):
        """Test every flight contributes exactly one edge."""
        graph = network_ledger.route_graph
        assert graph.num_edges == 3
        assert graph.airports == ["BLR", "DEL", "MUM"]

    def test_parallel_flights_kept(self, ledger):
        """Test two flights on the same city pair give two edges."""
        ledger.add("DEL", "MUM", 480, 660, 3, 5000)
        ledger.add("DEL", "MUM", 900, 1050, 3, 4500)
        assert ledger.route_graph.num_edges == 2
        assert len(ledger.route_graph.get_arcs("DEL")) == 2

    def test_remove_retracts_only_that_flight(self, ledger):
        """Test removing one of two parallel flights keeps the other edge."""
        first = ledger.add("DEL", "MUM", 480, 660, 3, 5000)
        second = ledger.add("DEL", "MUM", 900, 1020, 3, 4500)

        ledger.remove(first.id)

        arcs = ledger.route_graph.get_arcs("DEL")
        assert [a.flight_id for a in arcs] == [second.id]
        assert ledger.shortest_by_time("DEL", "MUM").total_weight == 120

    def test_remove_drops_isolated_airports(self, ledger):
        """Test airports without edges leave the graph."""
        flight = ledger.add("DEL", "MUM", 480, 660, 3, 5000)
        ledger.remove(flight.id)
        assert ledger.route_graph.num_airports == 0

    def test_price_snapshot_at_insertion(self, small_flight, ledger):
        """Test edge prices do not follow later bookings."""
        ledger.book("p1", small_flight.id)
        arc = ledger.route_graph.get_arc(small_flight.id)
        assert arc.price == 5000

    def test_from_flights_matches_ledger(self, network_ledger):
        """Test a rebuilt snapshot has the same edges as the live graph."""
        snapshot = RouteGraph.from_flights(network_ledger.flights, network_ledger.rules)
        live = network_ledger.route_graph
        assert set(snapshot.graph.edges(keys=True)) == set(live.graph.edges(keys=True))


class TestShortestRoutes:
    """Tests for the Dijkstra fastest and cheapest queries."""

    def test_fastest_via_connection(self, network_ledger):
        """Test 180 + 200 via MUM beats the 400-minute direct flight."""
        result = network_ledger.shortest_by_time("DEL", "BLR")
        assert result.total_weight == 380
        assert result.path == ["DEL", "MUM", "BLR"]
        assert result.flight_ids == [1000, 1001]

    def test_cheapest_direct(self, network_ledger):
        """Test the 7000 direct fare beats 5000 + 4000 via MUM."""
        result = network_ledger.shortest_by_price("DEL", "BLR")
        assert result.total_weight == 7000
        assert result.path == ["DEL", "BLR"]
        assert result.flight_ids == [1002]

    def test_fastest_direct_when_shorter(self, ledger):
        """Test the direct flight wins when the connection is slower."""
        ledger.add("DEL", "MUM", 480, 700, 3, 5000)
        ledger.add("MUM", "BLR", 700, 900, 2, 4000)
        ledger.add("DEL", "BLR", 500, 900, 1, 7000)
        result = ledger.shortest_by_time("DEL", "BLR")
        assert result.total_weight == 400
        assert result.path == ["DEL", "BLR"]

    def test_unreachable_raises(self, network_ledger):
        """Test a destination with no incoming path fails."""
        with pytest.raises(NoRouteFound):
            network_ledger.shortest_by_time("BLR", "DEL")
        with pytest.raises(NoRouteFound):
            network_ledger.shortest_by_price("MUM", "DEL")

    def test_unknown_airport_raises(self, network_ledger):
        """Test unknown airport codes have no route."""
        with pytest.raises(NoRouteFound):
            network_ledger.shortest_by_time("XYZ", "BLR")

    def test_removing_all_source_flights(self, network_ledger):
        """Test both queries fail once every flight out of the source is gone."""
        network_ledger.remove(1000)
        network_ledger.remove(1002)
        with pytest.raises(NoRouteFound):
            network_ledger.shortest_by_time("DEL", "BLR")
        with pytest.raises(NoRouteFound):
            network_ledger.shortest_by_price("DEL", "BLR")

    def test_same_source_and_destination(self, network_ledger):
        """Test a trivial route has zero weight."""
        result = network_ledger.shortest_by_time("DEL", "DEL")
        assert result.total_weight == 0
        assert result.path == ["DEL"]
        assert result.flight_ids == []

    def test_parallel_edges_pick_lightest(self, ledger):
        """Test the cheaper of two parallel flights is used."""
        ledger.add("DEL", "MUM", 480, 660, 3, 5000)
        cheap = ledger.add("DEL", "MUM", 900, 1100, 3, 3000)
        result = ledger.shortest_by_price("DEL", "MUM")
        assert result.flight_ids == [cheap.id]
        assert result.total_weight == 3000

    def test_tie_keeps_first_discovered(self, ledger):
        """Test equal-cost routes keep the first-discovered predecessor."""
        first = ledger.add("DEL", "MUM", 480, 600, 3, 1000)
        ledger.add("DEL", "MUM", 700, 820, 3, 1000)
        result = ledger.shortest_by_time("DEL", "MUM")
        assert result.flight_ids == [first.id]

    def test_live_pricing_follows_occupancy(self):
        """Test live pricing re-prices edges at query time."""
        ledger = FlightLedger(OperatingRules(live_route_pricing=True))
        direct = ledger.add("DEL", "BLR", 500, 900, 1, 6000)
        ledger.add("DEL", "MUM", 480, 660, 3, 3500)
        ledger.add("MUM", "BLR", 700, 900, 2, 2800)

        assert ledger.shortest_by_price("DEL", "BLR").total_weight == 6000

        ledger.book("p1", direct.id)
        result = ledger.shortest_by_price("DEL", "BLR")
        assert result.path == ["DEL", "MUM", "BLR"]
        assert result.total_weight == pytest.approx(6300)

    def test_matches_networkx_reference(self):
        """Test weights never beat the true minimum over the edge set."""
        ledger = FlightLedger()
        legs = [
            ("DEL", "MUM", 420, 550, 5200), ("DEL", "BLR", 450, 615, 6100),
            ("MUM", "HYD", 465, 550, 3400), ("CCU", "DEL", 480, 620, 5600),
            ("MUM", "BLR", 600, 700, 3900), ("HYD", "BLR", 630, 700, 2700),
            ("DEL", "CCU", 660, 795, 5400), ("BLR", "HYD", 720, 795, 2600),
            ("BLR", "DEL", 840, 1010, 6300), ("HYD", "MUM", 900, 985, 3300),
        ]
        for origin, destination, dep, arr, price in legs:
            ledger.add(origin, destination, dep, arr, 10, price)

        reference = nx.DiGraph()
        for flight in ledger:
            for attr, weight in (("duration", flight.duration), ("price", flight.base_price)):
                current = reference.get_edge_data(flight.origin, flight.destination, {}).get(attr)
                if current is None or weight < current:
                    reference.add_edge(flight.origin, flight.destination, **{attr: weight})

        graph = ledger.route_graph
        for source, destination in permutations(graph.airports, 2):
            for query, attr in ((FastestRoute(graph), "duration"), (CheapestRoute(graph), "price")):
                try:
                    expected = nx.dijkstra_path_length(reference, source, destination, weight=attr)
                except nx.NetworkXNoPath:
                    with pytest.raises(NoRouteFound):
                        query.solve(source, destination)
                    continue
                assert query.solve(source, destination).total_weight == pytest.approx(expected)

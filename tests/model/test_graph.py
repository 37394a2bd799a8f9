import math
import random

import networkx as nx
import pytest

from transitgraph.config import GraphConfig
from transitgraph.model.edge import Edge, EdgeList
from transitgraph.model.graph import TransitGraph
from transitgraph.model.stop import Stop
from transitgraph.types.base import EdgeType
from tests.algorithms.sample_graphs import make_stops


class TestConstruction:
    def test_default_stops(self):
        graph = TransitGraph([], 3)
        assert [stop.name for stop in graph.stops] == ["0", "1", "2"]
        assert graph.length() == 3
        assert len(graph) == 3

    def test_empty_graph(self):
        graph = TransitGraph()
        assert graph.length() == 0
        assert graph.get_edges().length() == 0

    def test_stop_count_mismatch(self):
        with pytest.raises(ValueError, match="Expected 3 stops, got 2"):
            TransitGraph([], 3, make_stops("A", "B"))

    def test_edge_out_of_range(self):
        with pytest.raises(ValueError, match="outside a graph of 2 nodes"):
            TransitGraph([Edge(EdgeType.ROUTE, 0, 2, 1)], 2)

    def test_negative_node_count(self):
        with pytest.raises(ValueError):
            TransitGraph([], -1)

    def test_self_loop_skipped(self):
        graph = TransitGraph([Edge(EdgeType.THEORETICAL, 1, 1, 1)], 2)
        assert graph.get_edges().length() == 0

    def test_duplicate_cell_keeps_lighter_edge(self):
        graph = TransitGraph(
            [Edge(EdgeType.ROUTE, 0, 1, 5), Edge(EdgeType.THEORETICAL, 1, 0, 2)], 2
        )
        assert graph.create_edge(0, 1) == Edge(EdgeType.THEORETICAL, 0, 1, 2)

        graph = TransitGraph(
            [Edge(EdgeType.ROUTE, 0, 1, 2), Edge(EdgeType.THEORETICAL, 1, 0, 5)], 2
        )
        assert graph.create_edge(0, 1).type == EdgeType.ROUTE

    def test_lower_triangular_layout(self, line3):
        assert [len(row) for row in line3.G] == [0, 1, 2]
        assert line3.G[1][0] == Edge(EdgeType.ROUTE, 1, 0, 1)
        assert line3.G[2][0] is None


class TestAccessors:
    def test_edge_exists_is_symmetric(self, line3):
        assert line3.edge_exists(0, 1)
        assert line3.edge_exists(1, 0)
        assert not line3.edge_exists(0, 2)
        assert not line3.edge_exists(1, 1)

    def test_get_weight(self, abcd):
        assert abcd.get_weight(1, 2) == 5
        assert abcd.get_weight(2, 1) == 5
        assert abcd.get_weight(0, 3) == 0

    def test_create_edge_uses_requested_orientation(self, abcd):
        assert abcd.create_edge(2, 1) == Edge(EdgeType.ROUTE, 2, 1, 5)
        assert abcd.create_edge(1, 2) == Edge(EdgeType.ROUTE, 1, 2, 5)
        assert abcd.create_edge(0, 3) is None

    def test_incoming_nodes(self, star4):
        assert star4.incoming_nodes[0] == {1, 2, 3}
        assert star4.incoming_nodes[2] == {0}
        assert star4.out_degree(0) == 3

    def test_get_edges_row_order(self, abcd):
        edges = abcd.get_edges()
        assert [(e.origin, e.destination) for e in edges] == [(1, 0), (2, 1), (3, 2)]


class TestTransferViews:
    def test_get_transfer_edges(self, transfer_chain):
        transfers = transfer_chain.get_transfer_edges()
        assert transfers.length() == 2
        assert all(e.type == EdgeType.TRANSFER for e in transfers)

    def test_get_transfer_graph(self, transfer_chain):
        transfer_graph = transfer_chain.get_transfer_graph()
        assert transfer_graph.length() == transfer_chain.length()
        assert transfer_graph.stops == transfer_chain.stops
        assert transfer_graph.edge_exists(0, 1)
        assert transfer_graph.edge_exists(1, 2)
        assert not transfer_graph.edge_exists(2, 3)
        assert not transfer_graph.edge_exists(0, 3)


class TestDerivedGraphs:
    def test_make_copy_is_independent(self, line3):
        matrix = line3.make_copy()
        matrix[1][0] = None
        assert line3.edge_exists(0, 1)

    def test_from_matrix(self, line3):
        rebuilt = TransitGraph.from_matrix(line3.make_copy(), line3.stops)
        assert rebuilt.get_edges() == line3.get_edges()
        assert rebuilt is not line3

    def test_create_new_graph_with_edges(self, line3):
        extra = EdgeList([Edge(EdgeType.THEORETICAL, 0, 2, 1)])
        extended = line3.create_new_graph_with_edges(extra)

        assert extended.edge_exists(0, 2)
        assert extended.create_edge(0, 2).type == EdgeType.THEORETICAL
        assert extended.edge_exists(0, 1)
        assert not line3.edge_exists(0, 2)
        assert extended.stops == line3.stops

    def test_candidate_does_not_replace_existing_transfer(self):
        graph = TransitGraph(
            [Edge(EdgeType.TRANSFER, 0, 1, 2), Edge(EdgeType.ROUTE, 1, 2, 5)], 3
        )
        extended = graph.create_new_graph_with_edges(
            [Edge(EdgeType.THEORETICAL, 1, 0, 1.0), Edge(EdgeType.THEORETICAL, 0, 2, 1.0)]
        )

        assert extended.get_edge(1, 0) == Edge(EdgeType.TRANSFER, 1, 0, 2)
        assert extended.get_transfer_edges().length() == 1
        assert extended.create_edge(0, 2).type == EdgeType.THEORETICAL
        assert extended.get_edges().length() == 3

    def test_lighter_candidate_wins_only_among_candidates(self, line3):
        extended = line3.create_new_graph_with_edges(
            [Edge(EdgeType.THEORETICAL, 0, 2, 4), Edge(EdgeType.THEORETICAL, 2, 0, 3)]
        )
        assert extended.get_weight(0, 2) == 3
        assert extended.get_weight(0, 1) == 1

    def test_candidate_out_of_range(self, line3):
        with pytest.raises(ValueError, match="outside a graph of 3 nodes"):
            line3.create_new_graph_with_edges([Edge(EdgeType.THEORETICAL, 0, 5, 1)])

    def test_create_random_edge(self, two_components):
        rng = random.Random(3)
        for _ in range(50):
            edge = two_components.create_random_edge(rng)
            assert edge.type == EdgeType.THEORETICAL
            assert edge.origin != edge.destination
            assert 0 <= edge.origin < 5
            assert 0 <= edge.destination < 5

    def test_create_random_edge_weight_from_config(self):
        graph = TransitGraph([], 2, config=GraphConfig(theoretical_edge_weight=4.0))
        assert graph.create_random_edge().weight == 4.0

    def test_create_random_edge_needs_two_nodes(self):
        with pytest.raises(ValueError, match="at least two nodes"):
            TransitGraph([], 1).create_random_edge()


class TestShortestPaths:
    def test_path_lengths(self, abcd):
        assert abcd.get_shortest_path(0, 3) == 10
        assert abcd.get_shortest_path(3, 0) == 10
        assert abcd.get_shortest_path(2, 2) == 0

    def test_calculate_path_lengths_returns_matrix(self, line3):
        lengths = line3.calculate_path_lengths()
        assert lengths.shape == (3, 3)
        assert lengths[0][2] == 2

    def test_shorter_detour_wins(self):
        graph = TransitGraph(
            [
                Edge(EdgeType.ROUTE, 0, 1, 10),
                Edge(EdgeType.ROUTE, 0, 2, 1),
                Edge(EdgeType.ROUTE, 2, 1, 1),
            ],
            3,
        )
        assert graph.get_shortest_path(0, 1) == 2
        assert graph.get_path(0, 1).nodes == [0, 2, 1]

    def test_unreachable(self, two_components):
        assert math.isinf(two_components.get_shortest_path(0, 4))
        assert two_components.get_path(0, 4).length() == 0

    def test_to_networkx(self, abcd):
        nx_graph = abcd.to_networkx()
        assert isinstance(nx_graph, nx.Graph)
        assert nx_graph.number_of_nodes() == 4
        assert nx_graph[0][1]["type"] == EdgeType.TRANSFER
        assert nx_graph[2][1]["weight"] == 5


class TestAccessibility:
    def test_isolated_node(self):
        graph = TransitGraph([], 2)
        assert graph.get_node_accessibilities(0) == [1.0, 1.0, 1.0]

    def test_star_center_and_leaf(self, star4):
        center = star4.get_node_accessibilities(0)
        leaf = star4.get_node_accessibilities(1)
        assert center == pytest.approx([3.0, 1.0, 3.0])
        assert leaf == pytest.approx([1.0, 3.0, 1.0])

    def test_walk_length_override(self, star4):
        assert len(star4.get_node_accessibilities(0, max_walk_length=5)) == 5

    def test_default_walk_length_from_graph_config(self):
        graph = TransitGraph(
            [Edge(EdgeType.ROUTE, 0, 1, 1)],
            2,
            config=GraphConfig(accessibility_walk_length=4),
        )
        assert graph.get_node_accessibilities(0) == [1.0] * 4

    def test_config_survives_derived_graphs(self, line3):
        config = GraphConfig(accessibility_walk_length=2)
        graph = TransitGraph(line3.get_edges(), 3, line3.stops, config)
        extended = graph.create_new_graph_with_edges([])
        assert extended.config is config
        assert len(extended.get_node_accessibilities(0)) == 2


def test_repr(line3):
    assert repr(line3) == "TransitGraph(num_nodes=3, num_edges=2)"


def test_stops_are_index_aligned(abcd):
    assert [stop.name for stop in abcd.stops] == ["A", "B", "C", "D"]
    assert isinstance(abcd.stops[0], Stop)

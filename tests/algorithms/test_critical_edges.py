import math
import random

import pytest

from transitgraph.algorithms.critical_edges import (
    calculate_fitness_using_closeness,
    calculate_fitness_using_page_rank,
    create_solution,
    find_critical_edges,
    mutate_solution,
)
from transitgraph.config import SearchConfig
from transitgraph.model.edge import Edge, EdgeList
from transitgraph.model.graph import TransitGraph
from transitgraph.types.base import EdgeType


@pytest.fixture
def line5():
    return TransitGraph(
        [Edge(EdgeType.ROUTE, i, i + 1, 1) for i in range(4)],
        5,
    )


@pytest.fixture
def small_search():
    return SearchConfig(generations=3, population_size=4)


class TestSolutionFunctions:
    def test_create_solution(self, line5):
        solution = create_solution(line5, 3, random.Random(0))
        assert isinstance(solution, EdgeList)
        assert solution.length() == 3
        assert all(e.type == EdgeType.THEORETICAL for e in solution)

    def test_closeness_fitness(self, line3):
        # Closing the triangle leaves every node a distance sum of 2.
        solution = EdgeList([Edge(EdgeType.THEORETICAL, 0, 2, 1)])
        assert calculate_fitness_using_closeness(line3, solution) == pytest.approx(1.5)

    def test_closeness_fitness_improves_with_shortcut(self, line5):
        baseline = calculate_fitness_using_closeness(line5, EdgeList())
        shortcut = EdgeList([Edge(EdgeType.THEORETICAL, 0, 4, 1)])
        assert calculate_fitness_using_closeness(line5, shortcut) > baseline

    def test_page_rank_fitness_uniform_is_infinite(self, square4):
        assert math.isinf(calculate_fitness_using_page_rank(square4, EdgeList()))

    def test_page_rank_fitness_finite(self, abcd):
        value = calculate_fitness_using_page_rank(abcd, EdgeList())
        assert 0 < value < math.inf

    def test_fitness_leaves_graph_untouched(self, line3):
        calculate_fitness_using_closeness(
            line3, EdgeList([Edge(EdgeType.THEORETICAL, 0, 2, 1)])
        )
        assert not line3.edge_exists(0, 2)


class TestMutateSolution:
    def test_moves_one_endpoint(self, line5):
        rng = random.Random(4)
        solution = create_solution(line5, 4, rng)
        for _ in range(20):
            mutated = mutate_solution(line5, solution, rng)
            changed = [
                (old, new) for old, new in zip(solution, mutated) if old != new
            ]
            assert len(changed) <= 1
            for old, new in changed:
                assert old.origin == new.origin or old.destination == new.destination
                assert new.type == old.type
                assert new.weight == old.weight

    def test_never_creates_self_loops(self):
        graph = TransitGraph([], 2)
        rng = random.Random(9)
        solution = EdgeList([Edge(EdgeType.THEORETICAL, 0, 1, 1)])
        for _ in range(50):
            solution = mutate_solution(graph, solution, rng)
            edge = solution.get(0)
            assert edge.origin != edge.destination
            assert {edge.origin, edge.destination} == {0, 1}

    def test_does_not_modify_input(self, line5):
        rng = random.Random(0)
        solution = create_solution(line5, 2, rng)
        snapshot = list(solution)
        mutate_solution(line5, solution, rng)
        assert list(solution) == snapshot

    def test_rejects_non_edge_list(self, line5):
        with pytest.raises(TypeError, match="Expected EdgeList"):
            mutate_solution(line5, [Edge(EdgeType.THEORETICAL, 0, 1, 1)], random.Random(0))

    def test_rejects_non_edge_member(self, line5):
        with pytest.raises(TypeError, match="Expected Edge"):
            mutate_solution(line5, EdgeList([(0, 1)]), random.Random(0))


class TestFindCriticalEdges:
    def test_adds_theoretical_edges(self, line5, small_search):
        result = find_critical_edges(line5, 2, config=small_search, seed=11)

        assert result.length() == line5.length()
        assert result is not line5
        for edge in line5.get_edges():
            assert result.edge_exists(edge.origin, edge.destination)
        added = result.get_edges().of_type(EdgeType.THEORETICAL)
        assert added.length() <= 2
        assert line5.get_edges().of_type(EdgeType.THEORETICAL).length() == 0

    def test_result_not_worse_than_original(self, line5, small_search):
        result = find_critical_edges(line5, 2, config=small_search, seed=3)
        baseline = calculate_fitness_using_closeness(line5, EdgeList())
        assert calculate_fitness_using_closeness(result, EdgeList()) >= baseline

    def test_seeded_search_is_reproducible(self, line5, small_search):
        first = find_critical_edges(line5, 2, config=small_search, seed=42)
        second = find_critical_edges(line5, 2, config=small_search, seed=42)
        assert first.get_edges() == second.get_edges()

    def test_page_rank_fitness(self, star4):
        config = SearchConfig(generations=2, population_size=3, fitness="page_rank")
        result = find_critical_edges(star4, 1, config=config, seed=1)
        assert result.length() == 4

    def test_default_hyperparameters(self, line3):
        result = find_critical_edges(line3, 1, seed=0)
        assert result.length() == 3

    def test_keeps_existing_edges_on_complete_graph(self):
        edges = [
            Edge(EdgeType.TRANSFER, 0, 1, 2),
            Edge(EdgeType.ROUTE, 1, 2, 5),
            Edge(EdgeType.ROUTE, 0, 2, 4),
        ]
        graph = TransitGraph(edges, 3)
        config = SearchConfig(generations=2, population_size=3)
        result = find_critical_edges(graph, 2, config=config, seed=5)

        assert result.get_edges() == graph.get_edges()
        assert result.get_transfer_edges().length() == 1

    def test_requires_positive_route_count(self, line5):
        with pytest.raises(ValueError, match="num_routes must be positive"):
            find_critical_edges(line5, 0)

    def test_requires_two_nodes(self):
        with pytest.raises(ValueError, match="at least two nodes"):
            find_critical_edges(TransitGraph([], 1), 1)

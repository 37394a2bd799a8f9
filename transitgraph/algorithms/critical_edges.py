"""Critical-edge discovery by evolutionary search.

A solution is an `EdgeList` of hypothetical THEORETICAL edges. Its fitness is
a centrality statistic of the graph obtained by adding those edges to the
original one. The best solution after a fixed number of generations is
materialized as a new graph.
"""

from __future__ import annotations

import math
import random
from functools import partial
from typing import Callable, Dict, Optional

from transitgraph.algorithms.centrality import closeness_centrality, page_rank
from transitgraph.algorithms.evolution import Population, PopulationConfig
from transitgraph.config import SEARCH_CONFIG, SearchConfig
from transitgraph.logging import get_logger
from transitgraph.model.edge import Edge, EdgeList
from transitgraph.model.graph import TransitGraph
from transitgraph.seed_manager import SeedManager
from transitgraph.utils.stats import check_type, mean, stdev

logger = get_logger(__name__)


def create_solution(graph: TransitGraph, length: int, rng: random.Random) -> EdgeList:
    """Return `length` random candidate edges over the graph's nodes."""
    return EdgeList(graph.create_random_edge(rng) for _ in range(length))


def calculate_fitness_using_closeness(graph: TransitGraph, solution: EdgeList) -> float:
    """Mean closeness centrality of the graph extended with `solution`."""
    theoretical_graph = graph.create_new_graph_with_edges(solution)
    theoretical_graph.calculate_path_lengths()
    return mean(closeness_centrality(theoretical_graph))


def calculate_fitness_using_page_rank(graph: TransitGraph, solution: EdgeList) -> float:
    """Inverse spread of PageRank over the graph extended with `solution`.

    Rewards edge sets that even out importance across stops. A perfectly
    uniform distribution scores ``inf``.
    """
    theoretical_graph = graph.create_new_graph_with_edges(solution)
    spread = stdev(page_rank(theoretical_graph))
    return 1 / spread if spread > 0 else math.inf


FITNESS_FUNCTIONS: Dict[str, Callable[[TransitGraph, EdgeList], float]] = {
    "closeness": calculate_fitness_using_closeness,
    "page_rank": calculate_fitness_using_page_rank,
}


def mutate_solution(graph: TransitGraph, solution: EdgeList, rng: random.Random) -> EdgeList:
    """Move one endpoint of one random edge to a random node.

    A coin flip picks whether the origin or the destination moves. The new
    endpoint is drawn from every node except the endpoint that stays, so a
    mutation never produces a self-loop.

    Returns:
        A new edge list; `solution` is not modified.

    Raises:
        TypeError: If `solution` is not an `EdgeList` of `Edge` records.
    """
    check_type(solution, EdgeList)
    index_to_mutate = rng.randrange(solution.length())
    edge_to_mutate = solution.get(index_to_mutate)
    check_type(edge_to_mutate, Edge)

    move_origin = rng.random() < 0.5
    fixed = edge_to_mutate.destination if move_origin else edge_to_mutate.origin
    new_node_index = rng.randrange(graph.length() - 1)
    if new_node_index >= fixed:
        new_node_index += 1

    if move_origin:
        mutated = edge_to_mutate.with_origin(new_node_index)
    else:
        mutated = edge_to_mutate.with_destination(new_node_index)
    return solution.replace(index_to_mutate, mutated)


def find_critical_edges(
    graph: TransitGraph,
    num_routes: int,
    config: Optional[SearchConfig] = None,
    seed: Optional[int] = None,
) -> TransitGraph:
    """Search for `num_routes` new edges that maximize the configured fitness.

    Every edge of `graph` is kept. A candidate that coincides with an existing
    edge or with another candidate adds nothing, so the result can hold fewer
    than `num_routes` THEORETICAL edges.

    Args:
        graph: Graph to extend; it is not modified.
        num_routes: Number of edges per candidate solution.
        config: Search hyperparameters; defaults to `SEARCH_CONFIG`.
        seed: Master seed for reproducible runs.

    Returns:
        A new graph with the best candidate edges added.

    Raises:
        ValueError: If `num_routes` is not positive or the graph has fewer
            than two nodes.
    """
    config = config or SEARCH_CONFIG
    if num_routes < 1:
        raise ValueError(f"num_routes must be positive, got {num_routes}")
    if graph.length() < 2:
        raise ValueError("Critical-edge search needs at least two nodes")

    seeds = SeedManager(seed)
    fitness = FITNESS_FUNCTIONS[config.fitness]

    population = Population(
        PopulationConfig(
            mutation_rate=config.mutation_rate,
            population_size=config.population_size,
            solution_type=EdgeList,
            create_solution=partial(
                create_solution,
                graph,
                num_routes,
                seeds.create_random_state("critical_edges", "create"),
            ),
            calculate_fitness=partial(fitness, graph),
            mutate_solution=partial(
                mutate_solution,
                graph,
                rng=seeds.create_random_state("critical_edges", "mutate"),
            ),
            rng=seeds.create_random_state("critical_edges", "population"),
        )
    )
    population.run_generations(config.generations)

    best_solution = population.get_best_solution()
    logger.info(
        f"Critical-edge search: {config.generations} generations, "
        f"best {config.fitness} fitness {population.best_fitness:.6g}"
    )
    return graph.create_new_graph_with_edges(best_solution)

"""Configuration classes for transitgraph components."""

from dataclasses import dataclass

FITNESS_FUNCTIONS = ("closeness", "page_rank")


@dataclass
class CentralityConfig:
    """Fixed parameters of the rank-computation algorithms."""

    # PageRank: no teleportation term with damping 1
    page_rank_damping: float = 1.0
    page_rank_iterations: int = 10
    page_rank_initial_rank: float = 1.0

    # Katz
    katz_alpha: float = 0.5
    katz_beta: float = 1.0
    katz_iterations: int = 30
    katz_initial_rank: float = 0.0

    def __post_init__(self) -> None:
        if self.page_rank_iterations < 0 or self.katz_iterations < 0:
            raise ValueError("Iteration counts must be non-negative")


@dataclass
class GraphConfig:
    """Defaults of the graph model: synthetic edges and random walks."""

    theoretical_edge_weight: float = 1.0

    # Walk lengths 1..N scored by outward accessibility
    accessibility_walk_length: int = 3

    def __post_init__(self) -> None:
        if self.theoretical_edge_weight < 0:
            raise ValueError("theoretical_edge_weight must be non-negative")
        if self.accessibility_walk_length < 1:
            raise ValueError("accessibility_walk_length must be at least 1")


@dataclass
class SearchConfig:
    """Hyperparameters for the critical-edge evolutionary search."""

    generations: int = 20
    population_size: int = 10

    # Percent chance (0-100) that an offspring is mutated
    mutation_rate: float = 40

    # Name of the fitness function: "closeness" or "page_rank"
    fitness: str = "closeness"

    def __post_init__(self) -> None:
        if self.population_size < 2:
            raise ValueError("population_size must be at least 2")
        if not 0 <= self.mutation_rate <= 100:
            raise ValueError("mutation_rate must be within [0, 100]")
        if self.fitness not in FITNESS_FUNCTIONS:
            valid = ", ".join(FITNESS_FUNCTIONS)
            raise ValueError(
                f"Invalid fitness '{self.fitness}'. Valid values are: {valid}"
            )


# Global configuration instances
CENTRALITY_CONFIG = CentralityConfig()
GRAPH_CONFIG = GraphConfig()
SEARCH_CONFIG = SearchConfig()

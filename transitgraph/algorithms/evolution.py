"""Generic evolutionary search over caller-defined solutions.

`Population` keeps a fixed-size set of candidate solutions and improves it
generation by generation on top of a DEAP toolbox. The caller supplies how to
create, score, and mutate a solution through `PopulationConfig`; the engine
owns selection, crossover, elitism, and bookkeeping. Fitness is maximized.

Every random decision is drawn from ``PopulationConfig.rng`` so a seeded run
is reproducible without touching the global `random` state.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable, List, Sequence

from deap import base, creator, tools

from transitgraph.logging import get_logger
from transitgraph.model.edge import EdgeList
from transitgraph.utils.stats import check_type, mean

logger = get_logger(__name__)

FITNESS_CLASS = "FitnessMax"


def edge_list_crossover(
    parent_a: EdgeList, parent_b: EdgeList, rng: random.Random
) -> EdgeList:
    """Single-point crossover of two equal-length edge lists."""
    length = min(parent_a.length(), parent_b.length())
    if length < 2:
        return parent_a.copy()
    point = rng.randrange(1, length)
    return EdgeList(parent_a.edges[:point] + parent_b.edges[point:])


def select_tournament(
    individuals: Sequence[Any], k: int, tournsize: int, rng: random.Random
) -> List[Any]:
    """Pick `k` winners of `tournsize`-way tournaments drawn with replacement.

    Same contract as `deap.tools.selTournament`, with an explicit random source.
    """
    chosen = []
    for _ in range(k):
        aspirants = [rng.choice(individuals) for _ in range(tournsize)]
        chosen.append(max(aspirants, key=attrgetter("fitness")))
    return chosen


def _individual_class(solution_type: type) -> type:
    """Return the DEAP individual class wrapping `solution_type`."""
    if FITNESS_CLASS not in creator.__dict__:
        creator.create(FITNESS_CLASS, base.Fitness, weights=(1.0,))
    name = f"{solution_type.__name__}Individual"
    if name not in creator.__dict__:
        creator.create(name, solution_type, fitness=getattr(creator, FITNESS_CLASS))
    return getattr(creator, name)


@dataclass
class PopulationConfig:
    """Callbacks and knobs for a `Population`.

    Attributes:
        mutation_rate: Percent chance (0-100) that an offspring is mutated.
        population_size: Number of solutions kept per generation.
        solution_type: Required type of every solution. Its constructor must
            accept an existing solution and copy it.
        create_solution: Returns a new random solution.
        calculate_fitness: Scores a solution; higher is better.
        mutate_solution: Returns a mutated copy of a solution.
        crossover: Combines two parents into a child.
        elite_size: Number of best solutions copied unchanged into the next
            generation.
        tournament_size: Number of contestants per selection tournament.
        rng: Random source for selection, crossover, and mutation decisions.
    """

    mutation_rate: float
    population_size: int
    solution_type: type
    create_solution: Callable[[], Any]
    calculate_fitness: Callable[[Any], float]
    mutate_solution: Callable[[Any], Any]
    crossover: Callable[[Any, Any, random.Random], Any] = edge_list_crossover
    elite_size: int = 1
    tournament_size: int = 2
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        if self.population_size < 2:
            raise ValueError("population_size must be at least 2")
        if not 0 <= self.mutation_rate <= 100:
            raise ValueError("mutation_rate must be within [0, 100]")
        if not 0 <= self.elite_size < self.population_size:
            raise ValueError("elite_size must be within [0, population_size)")
        if self.tournament_size < 1:
            raise ValueError("tournament_size must be at least 1")


class Population:
    """A generation of scored solutions.

    Attributes:
        config: Engine configuration.
        toolbox: DEAP toolbox with the registered operators.
        members: Current individuals, best first. Each carries a DEAP
            ``fitness`` attribute.
        generation: Number of generations run so far.
        hall_of_fame: Best individual seen so far.
        logbook: Per-generation fitness statistics.
    """

    def __init__(self, config: PopulationConfig) -> None:
        self.config = config
        self.generation = 0
        self._individual = _individual_class(config.solution_type)

        self.toolbox = base.Toolbox()
        self.toolbox.register("evaluate", config.calculate_fitness)
        self.toolbox.register("mate", config.crossover, rng=config.rng)
        self.toolbox.register("mutate", config.mutate_solution)
        self.toolbox.register(
            "select",
            select_tournament,
            tournsize=config.tournament_size,
            rng=config.rng,
        )

        self.hall_of_fame = tools.HallOfFame(1)
        self.stats = tools.Statistics(lambda ind: ind.fitness.values[0])
        self.stats.register("avg", mean)
        self.stats.register("max", max)
        self.logbook = tools.Logbook()
        self.logbook.header = ["gen", "nevals", "avg", "max"]

        members = [self._adopt(config.create_solution()) for _ in range(config.population_size)]
        self._evaluate(members)
        self.members = tools.selBest(members, len(members))
        self._record(len(members))

    def _adopt(self, solution: Any) -> Any:
        check_type(solution, self.config.solution_type)
        return self._individual(solution)

    def _evaluate(self, individuals: List[Any]) -> None:
        for individual in individuals:
            individual.fitness.values = (self.toolbox.evaluate(individual),)

    def _record(self, nevals: int) -> None:
        self.hall_of_fame.update(self.members)
        self.logbook.record(gen=self.generation, nevals=nevals, **self.stats.compile(self.members))

    def _offspring(self) -> Any:
        parent_a, parent_b = self.toolbox.select(self.members, 2)
        child = self.toolbox.mate(parent_a, parent_b)
        if self.config.rng.uniform(0, 100) < self.config.mutation_rate:
            child = self.toolbox.mutate(child)
        return self._adopt(child)

    def run_generation(self) -> None:
        """Replace the population with elites plus scored offspring."""
        config = self.config
        elite = tools.selBest(self.members, config.elite_size)
        offspring = [
            self._offspring() for _ in range(config.population_size - config.elite_size)
        ]
        self._evaluate(offspring)

        self.members = tools.selBest(elite + offspring, config.population_size)
        self.generation += 1
        self._record(len(offspring))
        logger.debug(
            f"generation {self.generation}: best fitness {self.best_fitness:.6g}"
        )

    def run_generations(self, count: int) -> None:
        """Run `count` generations."""
        for _ in range(count):
            self.run_generation()

    @property
    def history(self) -> List[float]:
        """Best fitness after initialization and after each generation."""
        return self.logbook.select("max")

    @property
    def best_fitness(self) -> float:
        """Fitness of the best solution found so far."""
        return self.hall_of_fame[0].fitness.values[0]

    def get_best_solution(self) -> Any:
        """Return the best solution found so far."""
        return self.hall_of_fame[0]

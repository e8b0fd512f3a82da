import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .genetics import (
    Chromosome,
    CrossoverType,
    Location,
    validate_locations,
    validate_permutation,
)
from .rng import RandomSource


@dataclass
class EvolutionConfig:
    population_size: int = 100
    elitism: int = 2
    mutation_rate: float = 0.01
    elite_mutation_rate: float = 0.005
    mutate_elites: bool = False
    crossover_type: CrossoverType = CrossoverType.ERX
    max_mutation_retries: int = 10
    random_seed: int = 123

    def __post_init__(self):
        self.crossover_type = CrossoverType.parse(self.crossover_type)
        if self.population_size < 1:
            raise ValueError("population_size must be at least 1.")
        if not 0 <= self.elitism <= self.population_size:
            raise ValueError("elitism must be between 0 and population_size.")
        for name in ("mutation_rate", "elite_mutation_rate"):
            rate = getattr(self, name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {rate}.")
        if self.max_mutation_retries < 0:
            raise ValueError("max_mutation_retries must be non-negative.")


def roulette_select(
    population: Sequence[Chromosome], fitness_sum: float, rng: RandomSource
) -> Chromosome:
    """Pick a chromosome with probability proportional to its fitness."""
    if fitness_sum <= 0 or not math.isfinite(fitness_sum):
        # Degenerate wheel; every slot is equally likely.
        return population[rng.randrange(len(population))]
    num = rng.uniform(0.0, fitness_sum)
    total = 0.0
    for chromosome in population:
        total += chromosome.fitness
        if total > num:
            return chromosome
    # Float round-off can leave the running sum just under num.
    return population[-1]


class Evolver:
    """
    Owns the population and advances it one generation per ``step()``.

    The driver reads ``current_best``, ``all_time_best`` and ``generation``
    after each step; nothing here depends on how they are displayed.
    """

    def __init__(
        self,
        locations: Sequence[Location],
        config: EvolutionConfig = None,
        rng: RandomSource = None,
    ):
        validate_locations(locations)
        self.cfg = config or EvolutionConfig()
        self.locations: List[Location] = sorted(locations, key=lambda loc: loc.id)
        self.rng = rng or RandomSource(self.cfg.random_seed)
        self.population: List[Chromosome] = [
            Chromosome.random(self.locations, self.rng) for _ in range(self.cfg.population_size)
        ]
        self.generation = 1
        self.fitness_sum = 0.0
        self.best: Optional[Chromosome] = None
        self.all_time_best: Optional[Chromosome] = None
        self.start_distance: Optional[float] = None

    @property
    def current_best(self) -> Optional[Chromosome]:
        return self.best

    def evaluate(self) -> None:
        self.fitness_sum = 0.0
        for chromosome in self.population:
            self.fitness_sum += chromosome.calculate_fitness()
        self.population.sort(key=lambda c: c.fitness, reverse=True)
        self.best = self.population[0]

    def mating_pool(self) -> List[Chromosome]:
        return [
            roulette_select(self.population, self.fitness_sum, self.rng)
            for _ in range(len(self.population))
        ]

    def reproduce(self, pool: Sequence[Chromosome]) -> List[Chromosome]:
        cfg = self.cfg
        target = cfg.population_size - cfg.elitism
        children: List[Chromosome] = []
        while len(children) < target:
            parent_a = pool[self.rng.randrange(len(pool))]
            parent_b = pool[self.rng.randrange(len(pool))]
            # Two children per pair; a single one when only one slot is left.
            brood = 1 if target - len(children) == 1 else 2
            for _ in range(brood):
                child = parent_a.crossover(parent_b, self.rng, cfg.crossover_type, self.locations)
                child.mutate(cfg.mutation_rate, self.rng, cfg.max_mutation_retries)
                children.append(child)
        return children

    def elites(self) -> List[Chromosome]:
        by_id = {loc.id: loc for loc in self.locations}
        elites: List[Chromosome] = []
        for source in self.population[: self.cfg.elitism]:
            genes = [by_id[loc.id] for loc in source.genes]
            validate_permutation(genes, self.locations)
            elite = Chromosome(genes=genes)
            if self.cfg.mutate_elites:
                elite.mutate(self.cfg.elite_mutation_rate, self.rng, self.cfg.max_mutation_retries)
            elites.append(elite)
        return elites

    def step(self) -> None:
        self.evaluate()
        if self.start_distance is None:
            self.start_distance = self.best.distance()
        pool = self.mating_pool()
        new_pop = self.reproduce(pool)
        new_pop.extend(self.elites())
        self.population = new_pop
        self.generation += 1
        if self.all_time_best is None or self.best.fitness > self.all_time_best.fitness:
            record = self.best.clone()
            record.fitness = self.best.fitness
            record.generation = self.generation
            self.all_time_best = record

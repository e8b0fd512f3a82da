import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .base import Location, route_distance, validate_permutation
from .operators import edge_recombination, ordered_crossover, swap_mutation
from ..rng import RandomSource


DEFAULT_MAX_RETRIES = 10


class CrossoverType(str, Enum):
    ERX = "erx"
    OX = "ox"

    @classmethod
    def parse(cls, value) -> "CrossoverType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown crossover type: {value!r}") from None


@dataclass
class Chromosome:
    """A full route: every location exactly once, in visiting order."""

    genes: List[Location]
    fitness: Optional[float] = None
    generation: Optional[int] = None

    def __post_init__(self):
        # Own the sequence; never share storage with the caller.
        self.genes = list(self.genes)

    @staticmethod
    def random(locations: Sequence[Location], rng: RandomSource) -> "Chromosome":
        genes = list(locations)
        rng.shuffle(genes)
        return Chromosome(genes=genes)

    def clone(self) -> "Chromosome":
        return Chromosome(genes=self.genes)

    def distance(self) -> float:
        return route_distance(self.genes)

    def calculate_fitness(self) -> float:
        dist = self.distance()
        # Zero-length tour (all locations coincide); no finite inverse.
        self.fitness = math.inf if dist == 0 else 1 / dist
        return self.fitness

    def crossover(
        self,
        partner: "Chromosome",
        rng: RandomSource,
        kind: CrossoverType = CrossoverType.ERX,
        reference: Optional[Sequence[Location]] = None,
    ) -> "Chromosome":
        """
        Breed one child with ``partner``. Both parents and the child are
        checked against ``reference`` (the full location set, defaulting to
        this chromosome's genes).
        """
        kind = CrossoverType.parse(kind)
        if reference is None:
            reference = self.genes
        for parent in (self, partner):
            validate_permutation(parent.genes, reference)
        if kind is CrossoverType.ERX:
            genes = edge_recombination(self.genes, partner.genes)
        else:
            n = len(self.genes)
            start = rng.randrange(0, n)
            end = rng.randrange(start + 1, n + 1)
            genes = ordered_crossover(self.genes, partner.genes, start, end)
        validate_permutation(genes, reference)
        return Chromosome(genes=genes)

    def mutate(self, rate: float, rng: RandomSource, max_retries: int = DEFAULT_MAX_RETRIES) -> None:
        swap_mutation(self.genes, rate, rng, max_retries)
        self.fitness = None


from .base import (
    InvalidPermutationError,
    Location,
    Tour,
    route_distance,
    validate_locations,
    validate_permutation,
)
from .chromosome import DEFAULT_MAX_RETRIES, Chromosome, CrossoverType
from .operators import build_edge_table, edge_recombination, ordered_crossover, swap_mutation

__all__ = [
    "InvalidPermutationError",
    "Location",
    "Tour",
    "route_distance",
    "validate_locations",
    "validate_permutation",
    "DEFAULT_MAX_RETRIES",
    "Chromosome",
    "CrossoverType",
    "build_edge_table",
    "edge_recombination",
    "ordered_crossover",
    "swap_mutation",
]

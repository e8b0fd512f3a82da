import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple


class InvalidPermutationError(ValueError):
    """Gene sequence is not a permutation of the full location set."""


@dataclass(frozen=True)
class Location:
    id: int
    x: float
    y: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance(self, other: "Location") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


Tour = List[Location]


def route_distance(genes: Sequence[Location]) -> float:
    dist = 0.0
    n = len(genes)
    for i in range(n):
        dist += genes[i].distance(genes[(i + 1) % n])
    return dist


def validate_locations(locations: Sequence[Location]) -> None:
    if not locations:
        raise ValueError("At least one location is required.")
    ids = sorted(loc.id for loc in locations)
    if ids != list(range(len(locations))):
        raise ValueError("Location ids must be unique and cover 0..N-1.")


def validate_permutation(genes: Sequence[Location], reference: Iterable[Location]) -> None:
    expected = sorted(loc.id for loc in reference)
    got = sorted(loc.id for loc in genes)
    if got != expected:
        missing = set(expected) - set(got)
        dupes = len(got) - len(set(got))
        raise InvalidPermutationError(
            f"expected {len(expected)} genes, got {len(got)} "
            f"(missing={sorted(missing)}, duplicates={dupes})"
        )

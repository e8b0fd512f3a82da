from typing import Dict, List, Sequence

from .base import Location, Tour
from ..rng import RandomSource


def build_edge_table(parents: Sequence[Sequence[Location]]) -> Dict[int, List[Location]]:
    # Neighbours (with wraparound) of every location across all parents,
    # deduplicated and kept in the order their positions are scanned.
    table: Dict[int, List[Location]] = {loc.id: [] for loc in parents[0]}
    for genes in parents:
        n = len(genes)
        for j in range(n):
            loc = genes[j]
            for city in (genes[j - 1], genes[(j + 1) % n]):
                edges = table[city.id]
                if loc.id != city.id and all(e.id != loc.id for e in edges):
                    edges.append(loc)
    return table


def edge_recombination(genes: Sequence[Location], partner: Sequence[Location]) -> Tour:
    """
    Edge Recombination Crossover.

    Walks the union of both parents' adjacency lists, always moving to the
    neighbour with the fewest unused neighbours left. When the current
    location runs out of neighbours the walk jumps to the first unused
    location in ``genes`` order.
    """
    n = len(genes)
    table = build_edge_table([genes, partner])
    child: Tour = []
    used = set()
    current = genes[0]
    while len(child) < n:
        child.append(current)
        used.add(current.id)
        for edges in table.values():
            for k, e in enumerate(edges):
                if e.id == current.id:
                    del edges[k]
                    break
        if len(child) == n:
            break
        candidates = table[current.id]
        if not candidates:
            current = next(loc for loc in genes if loc.id not in used)
            continue
        shortest = candidates[0]
        for cand in candidates[1:]:
            if len(table[cand.id]) < len(table[shortest.id]):
                shortest = cand
        current = shortest
    return child


def ordered_crossover(
    genes: Sequence[Location], partner: Sequence[Location], start: int, end: int
) -> Tour:
    """
    Ordered Crossover, simplified: keep ``genes[start:end]`` at the front of
    the child and append the partner's remaining locations in partner order.
    Filler is not wrapped back around the cut positions.
    """
    child = list(genes[start:end])
    kept = {loc.id for loc in child}
    for loc in partner:
        if loc.id not in kept:
            child.append(loc)
            kept.add(loc.id)
    return child


def swap_mutation(genes: List[Location], rate: float, rng: RandomSource, max_retries: int) -> None:
    n = len(genes)
    for i in range(n):
        if rng.random() < rate:
            j = rng.randrange(n)
            tries = max_retries
            # Same index drawn; give up after max_retries and keep the no-op.
            while j == i and tries > 0:
                j = rng.randrange(n)
                tries -= 1
            genes[i], genes[j] = genes[j], genes[i]

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import networkx as nx
import numpy as np

from .data import Instance
from .evolutionary import Evolver


@dataclass
class RouteReport:
    generation: int
    current_distance: float
    best_distance: float
    best_generation: int
    change_pct: float
    mean_distance: float
    gap: float

    def summary(self) -> str:
        return (
            f"gen {self.generation}: distance={truncate(self.current_distance)} "
            f"best={truncate(self.best_distance)} (gen {self.best_generation}, "
            f"{truncate(self.change_pct, 2)}%) mean={self.mean_distance:.3f}"
            + ("" if math.isinf(self.gap) else f" gap={self.gap:.2%}")
        )


def truncate(value: float, digits: int = 3) -> float:
    scale = 10 ** digits
    return math.trunc(value * scale) / scale


def tour_length(graph: nx.Graph, tour: Sequence[int]) -> float:
    dist = 0.0
    n = len(tour)
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += graph[a][b]["weight"]
    return float(dist)


def optimum_gap(instance: Instance, evolver: Evolver) -> float:
    """Relative gap of the all-time best to the instance's known optimum."""
    best = evolver.all_time_best
    if best is None or instance.optimum is None or math.isclose(instance.optimum, 0.0):
        return float("inf")
    if instance.graph is not None:
        # Measure with the instance's own metric, which may round distances.
        length = tour_length(instance.graph, instance.to_nodes(best.genes))
    else:
        length = best.distance()
    return (length - instance.optimum) / instance.optimum


def report(evolver: Evolver, instance: Optional[Instance] = None) -> RouteReport:
    if evolver.current_best is None:
        raise RuntimeError("No generation has been evaluated yet; call step() first.")
    current = evolver.current_best.distance()
    best = evolver.all_time_best
    best_distance = best.distance()
    start = evolver.start_distance
    change = 0.0 if not start else (best_distance - start) / start * 100.0
    distances = np.array([c.distance() for c in evolver.population])
    return RouteReport(
        generation=evolver.generation,
        current_distance=current,
        best_distance=best_distance,
        best_generation=best.generation,
        change_pct=change,
        mean_distance=float(distances.mean()),
        gap=optimum_gap(instance, evolver) if instance is not None else float("inf"),
    )

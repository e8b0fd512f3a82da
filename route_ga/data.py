from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import networkx as nx
import numpy as np
import tsplib95

from .genetics import Location


@dataclass
class Instance:
    name: str
    path: Optional[Path]
    locations: List[Location]
    graph: Optional[nx.Graph] = None
    node_ids: Optional[List[int]] = None
    optimum: Optional[float] = None

    @property
    def dimension(self) -> int:
        return len(self.locations)

    def to_nodes(self, tour: Iterable[Location]) -> List[int]:
        """Map a tour of locations back onto the instance's own node labels."""
        if self.node_ids is None:
            return [loc.id for loc in tour]
        return [self.node_ids[loc.id] for loc in tour]


def random_locations(count: int, seed: Optional[int] = None, low: float = 0.0, high: float = 10.0) -> List[Location]:
    if count < 1:
        raise ValueError("count must be at least 1.")
    coords = np.random.default_rng(seed).uniform(low, high, size=(count, 2))
    return [Location(id=i, x=float(x), y=float(y)) for i, (x, y) in enumerate(coords)]


def random_instance(count: int, seed: Optional[int] = None) -> Instance:
    return Instance(name=f"random{count}", path=None, locations=random_locations(count, seed))


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
        return None
    except OSError:
        return None


def _load_optimum(problem, path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.parse(candidate.read_text())
            nodes = list(tour_file.tours[0])
        except Exception:
            continue
        dist = 0.0
        for i in range(len(nodes)):
            a = nodes[i]
            b = nodes[(i + 1) % len(nodes)]
            dist += problem.get_weight(a, b)
        return float(dist)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    problem = tsplib95.load(path)
    if not problem.node_coords:
        raise ValueError(f"{path} has no NODE_COORD_SECTION; only coordinate instances are supported.")
    node_ids = sorted(problem.node_coords)
    locations = []
    for idx, node in enumerate(node_ids):
        x, y = problem.node_coords[node][:2]
        locations.append(Location(id=idx, x=float(x), y=float(y)))
    return Instance(
        name=problem.name or path.stem,
        path=path,
        locations=locations,
        graph=problem.get_graph(),
        node_ids=node_ids,
        optimum=_load_optimum(problem, path),
    )


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    tsp_files = sorted(Path(root).glob("*.tsp"))
    instances: List[Instance] = []
    for p in tsp_files:
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        instances.append(load_instance(p))
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances

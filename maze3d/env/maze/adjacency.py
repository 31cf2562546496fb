import os
import random
from typing import Dict, Iterator, List, Optional, Tuple

from maze3d.env.maze.errors import ContractViolation

MIN_WEIGHT = 1
MAX_WEIGHT = 20
# an edge is stored under its smaller endpoint, so a vertex only ever points
# east, south or down
MAX_EDGES = 3


class AdjacencyEntry:
    """Outgoing edges of one vertex, at most one per positive direction."""

    __slots__ = ("vertex", "targets", "weights", "num_edges")

    def __init__(self, vertex: int):
        self.vertex = vertex
        self.targets = [0] * MAX_EDGES
        self.weights = [0] * MAX_EDGES
        self.num_edges = 0

    def add_edge(self, target: int, weight: int) -> None:
        if self.num_edges == MAX_EDGES:
            raise ContractViolation(f"vertex {self.vertex} already has {MAX_EDGES} edges")
        if target in self.targets[:self.num_edges]:
            raise ContractViolation(f"edge {self.vertex} -> {target} added twice")
        self.targets[self.num_edges] = target
        self.weights[self.num_edges] = weight
        self.num_edges += 1

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        for k in range(self.num_edges):
            yield self.vertex, self.targets[k], self.weights[k]

    def __len__(self):
        return self.num_edges

    def __str__(self):
        if self.num_edges == 0:
            return "\r"
        fields = [self.vertex]
        fields.extend(self.targets[:self.num_edges])
        fields.extend(self.weights[:self.num_edges])
        return " ".join(str(f) for f in fields) + os.linesep


class AdjacencyList:
    """
    Weighted edges of a maze on a width x depth x height grid, each edge kept
    once under its smaller endpoint.
    """

    def __init__(self, width: int, depth: int, height: int, rng: Optional[random.Random] = None):
        self.width = width
        self.depth = depth
        self.height = height
        self.size = width * depth * height
        self.rng = rng if rng is not None else random.Random()
        self.entries: List[Optional[AdjacencyEntry]] = [None] * self.size
        self.num_edges = 0

    def add_edge(self, u: int, v: int) -> int:
        '''
        records the edge u -> v with a fresh random weight and returns the weight
        '''
        if not 0 <= u < v < self.size:
            raise ContractViolation(f"edge ({u}, {v}) must satisfy 0 <= u < v < {self.size}")
        if v - u not in (1, self.width, self.width * self.depth):
            raise ContractViolation(f"{u} and {v} are not grid neighbours")

        if self.entries[u] is None:
            self.entries[u] = AdjacencyEntry(u)
        weight = self.rng.randint(MIN_WEIGHT, MAX_WEIGHT)
        self.entries[u].add_edge(v, weight)
        self.num_edges += 1
        return weight

    def format_line(self, u: int) -> str:
        if not 0 <= u < self.size:
            raise ContractViolation(f"vertex {u} out of range for {self.size} cells")
        entry = self.entries[u]
        if entry is None:
            return "\r"
        return str(entry)

    def __iter__(self) -> Iterator[AdjacencyEntry]:
        for entry in self.entries:
            if entry is not None:
                yield entry

    def __len__(self):
        return self.num_edges

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        for entry in self:
            yield from entry.edges()

    def to_text(self) -> str:
        return "".join(str(entry) for entry in self if len(entry))


def parse_adjacency(text: str) -> Dict[Tuple[int, int], int]:
    '''
    reads the text produced by AdjacencyList.to_text back into
    a dict of (u, v) -> weight
    '''
    edges = {}
    for line in text.splitlines():
        fields = line.split()
        if not fields:
            continue
        if len(fields) not in (3, 5, 7):
            raise ValueError(f"malformed adjacency line: {line!r}")
        values = [int(f) for f in fields]
        k = (len(values) - 1) // 2
        u = values[0]
        for target, weight in zip(values[1:1 + k], values[1 + k:]):
            edges[(u, target)] = weight
    return edges

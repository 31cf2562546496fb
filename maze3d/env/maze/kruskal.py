import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from maze3d.env.maze.adjacency import AdjacencyList
from maze3d.env.maze.errors import InvalidDimensions, InvariantViolation
from maze3d.env.maze.union_find import UnionFind
from maze3d.registration import register

'''
Generates a random 3D maze of the given width, depth and height using a
randomized Kruskal's algorithm: random edges of the grid graph are joined
with a union find until every cell belongs to one spanning tree.

Cells are numbered left to right, back to front, top to bottom, so cell i sits at
    x = i % width, y = (i // width) % depth, z = i // (width * depth)

Output:
    adjacency - the edges of the spanning tree with random weights
    diagnostics - counters collected while building
'''

logger = logging.getLogger(__name__)

MAX_VERTICES = 2 ** 31 - 1

UP, NORTH, EAST, SOUTH, WEST, DOWN = range(6)
DIRECTIONS = ("up", "north", "east", "south", "west", "down")

BUILDING = "building"
DONE = "done"


@dataclass(frozen=True)
class MazeDiagnostics:
    vertices: int
    edges: int
    proposals: int
    direction_draws: int
    rejected: int
    set_count: int
    find_calls: int
    path_steps: int
    mean_path_length: Optional[float]


def check_dimensions(width, depth, height) -> None:
    for name, value in (("width", width), ("depth", depth), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise InvalidDimensions(f"{name} must be at least 1, got {value}")
    if depth == 1 and height > 1:
        # up and down are then the same offset as north and south, which the
        # layer wrap check in valid_edge rejects
        raise InvalidDimensions("a maze with more than one layer needs a depth of at least 2")
    if width == 1 and depth * height > 1:
        # north and south are then the same offset as east and west, which the
        # column checks in valid_edge reject
        raise InvalidDimensions("a maze with more than one cell needs a width of at least 2")
    if width * depth * height > MAX_VERTICES:
        raise InvalidDimensions(f"a {width}x{depth}x{height} maze has more than {MAX_VERTICES} cells")


class KruskalMaze3D:
    def __init__(self, width: int, depth: int, height: int = 1, rng: Optional[random.Random] = None):
        check_dimensions(width, depth, height)
        self.width = width
        self.depth = depth
        self.height = height
        self.size = width * depth * height
        self.rng = rng if rng is not None else random.Random()

        self.state = BUILDING
        self.proposals = 0
        self.direction_draws = 0
        self.rejected = 0
        self.accepted = 0

        self.adjacency = AdjacencyList(width, depth, height, self.rng)
        self.diagnostics = self.generate_maze()

    def neighbor(self, i: int, direction: int) -> int:
        layer = self.width * self.depth
        if direction == UP:
            return i - layer
        if direction == NORTH:
            return i - self.width
        if direction == EAST:
            return i + 1
        if direction == SOUTH:
            return i + self.width
        if direction == WEST:
            return i - 1
        if direction == DOWN:
            return i + layer
        return i

    def valid_edge(self, i: int, j: int) -> bool:
        '''
        checks that j is inside the maze and a face neighbour of i
        '''
        width, layer = self.width, self.width * self.depth
        if j == i:
            return False
        # too far up or down
        if j < 0 or j >= self.size:
            return False
        # too far north or south, wrapped into the next layer
        if i % width == j % width and i // layer != j // layer and (j == i + width or j == i - width):
            return False
        # too far east
        if i % width == width - 1 and j == i + 1:
            return False
        # too far west
        if i % width == 0 and j == i - 1:
            return False
        return True

    def propose_edge(self) -> Tuple[int, int]:
        '''
        picks a random cell, then random directions from it until one stays in the maze
        '''
        i = self.rng.randrange(self.size)
        self.proposals += 1
        while True:
            j = self.neighbor(i, self.rng.randrange(len(DIRECTIONS)))
            self.direction_draws += 1
            if self.valid_edge(i, j):
                return i, j

    def add_edge(self, sets: UnionFind) -> Tuple[int, int]:
        i, j = self.propose_edge()
        while not sets.union(i, j):
            self.rejected += 1
            i, j = self.propose_edge()
        self.adjacency.add_edge(min(i, j), max(i, j))
        self.accepted += 1
        return i, j

    def generate_maze(self) -> MazeDiagnostics:
        sets = UnionFind(self.size)
        for _ in range(self.size - 1):
            self.add_edge(sets)
        self.state = DONE

        set_count = sets.set_count()
        if set_count != 1 or self.accepted != self.size - 1:
            raise InvariantViolation(
                f"{self.accepted} edges accepted for {self.size} cells but {set_count} sets remain")

        diagnostics = MazeDiagnostics(
            vertices=self.size,
            edges=self.accepted,
            proposals=self.proposals,
            direction_draws=self.direction_draws,
            rejected=self.rejected,
            set_count=set_count,
            find_calls=sets.find_calls,
            path_steps=sets.path_steps,
            mean_path_length=sets.mean_path_length(),
        )
        logger.debug("built %dx%dx%d maze: %s", self.width, self.depth, self.height, diagnostics)
        self.stats = sets.format_stats()
        return diagnostics


register("maze.kruskal3d", KruskalMaze3D)


def generate(width: int, depth: int, height: int = 1, rng: Optional[random.Random] = None):
    maze = KruskalMaze3D(width, depth, height, rng)
    return maze.adjacency, maze.diagnostics

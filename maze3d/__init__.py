from maze3d.registration import make, register
from maze3d.env.maze.kruskal import KruskalMaze3D, generate
from maze3d.env.maze.adjacency import AdjacencyList, parse_adjacency
from maze3d.env.renderer import render_char_grid

__all__ = [
    "make",
    "register",
    "KruskalMaze3D",
    "generate",
    "AdjacencyList",
    "parse_adjacency",
    "render_char_grid",
]

import logging
from typing import Mapping, Optional

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from maze3d.env.constants import BLOCK, DEFAULT_COLORS, PATH
from maze3d.env.env_state import EnvState
from maze3d.env.maze.adjacency import AdjacencyList

logger = logging.getLogger(__name__)


def render_char_grid(adjacency: AdjacencyList) -> Optional[np.ndarray]:
    '''
    Renders a 2D maze as a (2 * depth - 1) x (2 * width - 1) character grid.
    Cells at even rows and even columns are maze cells, everything else is a
    wall unless the spanning tree has the edge crossing it.

    Returns None for mazes with more than one layer.
    '''
    if adjacency.height != 1:
        logger.info("character rendering is not applicable to a maze with %d layers", adjacency.height)
        return None

    width, depth = adjacency.width, adjacency.depth
    grid = np.full((2 * depth - 1, 2 * width - 1), BLOCK, dtype="<U1")
    grid[::2, ::2] = PATH

    for u, t, _ in adjacency.edges():
        diff = t - u
        if diff == 1:
            grid[u // width * 2, u % width * 2 + 1] = PATH
        elif diff == width:
            grid[u // width * 2 + 1, u % width * 2] = PATH
        else:
            logger.warning("broken input: edge %d -> %d (difference %d)", u, t, diff)
    return grid


START_POSITION = (0, 0)


def goal_position(grid: np.ndarray):
    return grid.shape[0] - 1, grid.shape[1] - 1


def is_walkable(grid: np.ndarray, row: int, col: int) -> bool:
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols and grid[row, col] == PATH


def grid_to_text(grid: np.ndarray) -> str:
    return "\n".join("".join(row) for row in grid)


def render_maze(state: EnvState, colors: Optional[Mapping[str, str]] = None, pix_size: int = 7) -> Image.Image:
    '''
    draws the maze with a one cell border, the goal in the bottom right and
    the cursor at the agent position
    '''
    palette = dict(DEFAULT_COLORS)
    if colors is not None:
        palette.update(colors)
    palette = {key: ImageColor.getrgb(value) for key, value in palette.items()}

    grid = state.grid
    rows, cols = grid.shape
    img = Image.new("RGB", ((cols + 2) * pix_size, (rows + 2) * pix_size), palette["border"])
    draw = ImageDraw.Draw(img)

    def fill(row, col, color):
        x, y = (col + 1) * pix_size, (row + 1) * pix_size
        draw.rectangle([x, y, x + pix_size - 1, y + pix_size - 1], fill=color)

    for i in range(rows):
        for j in range(cols):
            fill(i, j, palette["wall"] if grid[i, j] == BLOCK else palette["path"])
    fill(*state.goal_position, palette["goal"])
    fill(*state.agent_position, palette["cursor"])
    return img

from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from maze3d.env.constants import DEFAULT_COLORS


@dataclass
class EnvState:
    grid: np.ndarray  # character grid, see maze3d.env.renderer
    agent_position: tuple[int, int]
    goal_position: tuple[int, int]


@dataclass
class EnvParams:
    maze_size: tuple[int, int]  # width, height in maze cells
    generator: str = "maze.kruskal3d"
    colors: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    pix_size: int = 7
    seed: Optional[int] = None

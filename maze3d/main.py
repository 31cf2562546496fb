import argparse
import logging
import random
import sys
from pathlib import Path

from hydra import compose, initialize_config_dir
from omegaconf import DictConfig, OmegaConf

from maze3d.env.env_state import EnvParams
from maze3d.env.maze.errors import InvalidDimensions
from maze3d.env.maze.kruskal import check_dimensions
from maze3d.env.maze_env import MazeGameEnv, play
from maze3d.env.renderer import grid_to_text, render_char_grid
from maze3d.registration import make

logger = logging.getLogger(__name__)

conf_dir = Path(__file__).parent / "config"


def load_config(overrides=()) -> DictConfig:
    with initialize_config_dir(version_base=None, config_dir=str(conf_dir.resolve())):
        return compose(config_name="game", overrides=list(overrides))


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog="maze3d",
        description="Generate a random maze. Move with hjkl or the arrow keys, "
                    "press enter on the goal for a new maze, quit with q.",
    )
    ap.add_argument("width", help="maze width in cells")
    ap.add_argument("height", help="maze height (rows) in cells")
    ap.add_argument("--layers", type=int, default=None, help="number of layers, 1 for a 2D maze")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--print-adjacency", action="store_true", help="print the weighted adjacency list")
    ap.add_argument("--print-grid", action="store_true", help="print the 2D maze as text")
    ap.add_argument("--stats", action="store_true", help="print union find statistics")
    ap.add_argument("--headless", action="store_true", help="do not open the game window")
    ap.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
                    help="config override, e.g. --set render.pix_size=10")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        width, height = int(args.width), int(args.height)
    except ValueError:
        print("Arguments need to be 2 integers", file=sys.stderr)
        return 1

    overrides = list(args.overrides) + [f"maze.width={width}", f"maze.height={height}"]
    if args.layers is not None:
        overrides.append(f"maze.layers={args.layers}")
    if args.seed is not None:
        overrides.append(f"maze.seed={args.seed}")
    cfg = load_config(overrides)
    logging.basicConfig(level=cfg.logging.level)

    layers = cfg.maze.layers
    try:
        check_dimensions(width, height, layers)
    except InvalidDimensions as e:
        print(e, file=sys.stderr)
        return 1

    headless = args.headless or layers != 1
    if layers != 1 and not args.headless:
        logger.info("the game only supports 2D mazes, printing the maze instead")

    maze = None
    if headless or args.print_adjacency or args.print_grid or args.stats:
        maze = make(cfg.maze.generator, width, height, layers, rng=random.Random(cfg.maze.seed))

        show_adjacency = args.print_adjacency or not (args.print_grid or args.stats)
        if show_adjacency:
            print(maze.adjacency.to_text(), end="")
        if args.print_grid:
            grid = render_char_grid(maze.adjacency)
            if grid is not None:
                print(grid_to_text(grid))
        if args.stats:
            print(maze.stats)

    if not headless:
        env_params = EnvParams(
            maze_size=(width, height),
            generator=cfg.maze.generator,
            colors=OmegaConf.to_container(cfg.render.colors),
            pix_size=cfg.render.pix_size,
            seed=cfg.maze.seed,
        )
        env = MazeGameEnv(env_params)
        # the game starts on the maze printed above, if any
        play(env, fps=cfg.play.fps, options={"maze": maze} if maze is not None else None)
    return 0


if __name__ == "__main__":
    sys.exit(main())

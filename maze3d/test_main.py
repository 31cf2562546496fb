import pytest

from maze3d.env.constants import BLOCK
from maze3d.env.maze.adjacency import parse_adjacency
from maze3d.env.renderer import grid_to_text
from maze3d.main import load_config, main


def test_load_config_defaults_and_overrides():
    cfg = load_config()
    assert cfg.maze.generator == "maze.kruskal3d"
    assert cfg.maze.layers == 1
    assert cfg.maze.seed is None
    assert cfg.render.colors.wall == "darkgrey"

    cfg = load_config(["render.pix_size=10", "maze.seed=3"])
    assert cfg.render.pix_size == 10
    assert cfg.maze.seed == 3


def test_wrong_argument_count_exits_with_2():
    with pytest.raises(SystemExit) as excinfo:
        main(["3"])
    assert excinfo.value.code == 2


def test_non_integer_arguments_exit_with_1(capsys):
    assert main(["three", "3", "--headless"]) == 1
    assert "2 integers" in capsys.readouterr().err


def test_invalid_dimensions_exit_with_1(capsys):
    assert main(["0", "3", "--headless"]) == 1
    assert "width" in capsys.readouterr().err


def test_headless_prints_adjacency_list(capsys):
    assert main(["4", "3", "--headless", "--seed", "5"]) == 0
    edges = parse_adjacency(capsys.readouterr().out)
    assert len(edges) == 11
    assert all(v - u in (1, 4) for u, v in edges)


def test_seed_makes_output_reproducible(capsys):
    main(["5", "5", "--headless", "--seed", "9"])
    first = capsys.readouterr().out
    main(["5", "5", "--headless", "--set", "maze.seed=9"])
    assert capsys.readouterr().out == first


def test_layers_print_three_dimensional_maze(capsys):
    assert main(["3", "3", "--layers", "2", "--seed", "1"]) == 0
    edges = parse_adjacency(capsys.readouterr().out)
    assert len(edges) == 17


def test_print_grid_and_stats(capsys):
    assert main(["3", "2", "--headless", "--print-grid", "--stats", "--seed", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    grid, stats = lines[:3], lines[3:]
    assert all(len(row) == 5 for row in grid)
    assert grid[1][1] == BLOCK
    assert stats[0] == "Number of disjoint sets remaining =    1"


def test_printed_grid_is_the_first_game_maze(monkeypatch, capsys):
    played = {}

    def fake_play(env, fps=30, options=None):
        env.reset(options=options)
        played["env"] = env

    monkeypatch.setattr("maze3d.main.play", fake_play)
    assert main(["6", "4", "--print-grid"]) == 0
    out = capsys.readouterr().out
    assert out == grid_to_text(played["env"].state.grid) + "\n"


def test_width_one_maze_is_rejected(capsys):
    assert main(["1", "5", "--headless"]) == 1
    assert "width" in capsys.readouterr().err

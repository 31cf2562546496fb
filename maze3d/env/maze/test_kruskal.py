import random
from collections import Counter, deque

import pytest

from maze3d import make
from maze3d.env.maze.errors import InvalidDimensions, InvariantViolation
from maze3d.env.maze.kruskal import DONE, KruskalMaze3D, generate
from maze3d.env.maze.union_find import UnionFind


def _is_spanning_tree(n, edges):
    neighbors = {v: [] for v in range(n)}
    for u, v in edges:
        neighbors[u].append(v)
        neighbors[v].append(u)
    seen = {0}
    queue = deque([0])
    while queue:
        for nxt in neighbors[queue.popleft()]:
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return len(edges) == n - 1 and len(seen) == n


def _edges(adjacency):
    return [(u, v) for u, v, _ in adjacency.edges()]


def test_single_cell():
    adjacency, diagnostics = generate(1, 1, 1, random.Random(0))
    assert list(adjacency) == []
    assert adjacency.to_text() == ""
    assert diagnostics.edges == 0
    assert diagnostics.set_count == 1
    assert diagnostics.mean_path_length is None


def test_two_cells():
    adjacency, _ = generate(2, 1, 1, random.Random(0))
    assert _edges(adjacency) == [(0, 1)]


def test_three_by_three():
    maze = KruskalMaze3D(3, 3, 1, random.Random(1))
    assert maze.state == DONE
    assert maze.diagnostics.edges == 8
    assert maze.diagnostics.set_count == 1
    assert _is_spanning_tree(9, _edges(maze.adjacency))


def test_ten_by_ten():
    adjacency, diagnostics = generate(10, 10, 1, random.Random(2))
    edges = list(adjacency.edges())
    assert len(edges) == diagnostics.edges == 99
    for u, v, w in edges:
        assert 1 <= w <= 20
        assert v - u in (1, 10)
        if v - u == 1:
            assert u // 10 == v // 10
    assert _is_spanning_tree(100, [(u, v) for u, v, _ in edges])


def test_four_cubed():
    adjacency, _ = generate(4, 4, 4, random.Random(3))
    edges = _edges(adjacency)
    assert len(edges) == 63
    assert _is_spanning_tree(64, edges)
    for u, v in edges:
        assert v - u in (1, 4, 16)
        if v - u == 1:
            assert u % 4 != 3
        if v - u == 4:
            # north/south moves stay inside one layer
            assert u // 16 == v // 16


@pytest.mark.parametrize("dims", [(5, 1, 1), (2, 2, 5), (2, 3, 4), (7, 2, 3)])
def test_spanning_tree_on_thin_grids(dims):
    width, depth, height = dims
    n = width * depth * height
    adjacency, diagnostics = generate(width, depth, height, random.Random(sum(dims)))
    assert diagnostics.edges == n - 1
    assert _is_spanning_tree(n, _edges(adjacency))


def test_valid_edge_boundaries():
    maze = KruskalMaze3D(3, 2, 2, random.Random(0))
    # east off the right column, west off the left column
    assert not maze.valid_edge(2, 3)
    assert not maze.valid_edge(3, 2)
    # south off the last row wraps into the next layer
    assert not maze.valid_edge(3, 6)
    assert not maze.valid_edge(6, 3)
    assert not maze.valid_edge(0, -3)
    assert not maze.valid_edge(11, 12)
    assert not maze.valid_edge(4, 4)
    assert maze.valid_edge(0, 1)
    assert maze.valid_edge(0, 3)
    assert maze.valid_edge(0, 6)
    assert maze.valid_edge(10, 4)


def test_diagnostics_are_consistent():
    _, diagnostics = generate(6, 5, 2, random.Random(4))
    assert diagnostics.vertices == 60
    assert diagnostics.proposals == diagnostics.edges + diagnostics.rejected
    assert diagnostics.direction_draws >= diagnostics.proposals
    assert diagnostics.find_calls == 2 * diagnostics.proposals
    assert diagnostics.mean_path_length == pytest.approx(diagnostics.path_steps / diagnostics.find_calls)


def test_seeded_generation_is_reproducible():
    first, _ = generate(8, 8, 2, random.Random(42))
    second, _ = generate(8, 8, 2, random.Random(42))
    assert first.to_text() == second.to_text()


def test_proposals_are_uniform():
    maze = KruskalMaze3D(3, 3, 1, random.Random(5))
    sources = Counter()
    from_corner = Counter()
    from_edge = Counter()
    for _ in range(18000):
        i, j = maze.propose_edge()
        sources[i] += 1
        if i == 0:
            from_corner[j] += 1
        elif i == 1:
            from_edge[j] += 1

    assert set(sources) == set(range(9))
    for count in sources.values():
        assert 1700 < count < 2300
    assert set(from_corner) == {1, 3}
    assert abs(from_corner[1] - from_corner[3]) < 0.2 * sum(from_corner.values())
    assert set(from_edge) == {0, 2, 4}
    for count in from_edge.values():
        assert abs(count - sum(from_edge.values()) / 3) < 0.15 * sum(from_edge.values())


@pytest.mark.parametrize("dims", [(0, 1, 1), (1, -2, 1), (1, 1, 0), (2.5, 1, 1), (3, 1, 2), (1, 5, 1), (1, 2, 6), (65536, 65536, 1)])
def test_invalid_dimensions(dims):
    with pytest.raises(InvalidDimensions):
        KruskalMaze3D(*dims)
    with pytest.raises(ValueError):
        generate(*dims)


def test_registered_generator():
    maze = make("maze.kruskal3d", 4, 3, 1, rng=random.Random(6))
    assert isinstance(maze, KruskalMaze3D)
    assert maze.diagnostics.edges == 11
    with pytest.raises(KeyError):
        make("maze.unknown", 4, 3, 1)


def test_disconnected_result_aborts(monkeypatch):
    monkeypatch.setattr(UnionFind, "set_count", lambda self: 2)
    with pytest.raises(InvariantViolation, match="8 edges accepted for 9 cells but 2 sets remain"):
        KruskalMaze3D(3, 3, 1, random.Random(7))

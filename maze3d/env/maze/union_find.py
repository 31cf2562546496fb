from typing import List, Optional

from maze3d.env.maze.errors import ContractViolation

'''
Array backed disjoint sets with path compression and union by size.

Each entry holds the index of its parent, or, for a root, a negative number
whose magnitude is the size of the set.
'''


class UnionFind:
    def __init__(self, n: int):
        self.arr = [-1] * n
        self.find_calls = 0
        self.path_steps = 0

    def __len__(self):
        return len(self.arr)

    def _check(self, y):
        if not 0 <= y < len(self.arr):
            raise ContractViolation(f"index {y} out of range for {len(self.arr)} elements")

    def find(self, y: int) -> int:
        '''
        returns the root of the set containing y and points every element on
        the way directly at that root
        '''
        self._check(y)
        self.find_calls += 1

        root = y
        while self.arr[root] >= 0:
            root = self.arr[root]
            self.path_steps += 1

        while self.arr[y] >= 0 and self.arr[y] != root:
            self.arr[y], y = root, self.arr[y]
        return root

    def union(self, i: int, j: int) -> bool:
        '''
        merges the sets containing i and j. the strictly larger set absorbs the
        smaller one, on a tie the set of j goes under the set of i.
        returns False (and changes nothing) when they are already joined
        '''
        iset = self.find(i)
        jset = self.find(j)
        if iset == jset:
            return False
        # sizes are stored negated, so the larger set has the smaller value
        if self.arr[iset] > self.arr[jset]:
            self.arr[jset] += self.arr[iset]
            self.arr[iset] = jset
        else:
            self.arr[iset] += self.arr[jset]
            self.arr[jset] = iset
        return True

    def set_count(self) -> int:
        return sum(1 for n in self.arr if n < 0)

    def reset(self) -> None:
        for i in range(len(self.arr)):
            self.arr[i] = -1

    def mean_path_length(self) -> Optional[float]:
        if self.find_calls == 0:
            return None
        return self.path_steps / self.find_calls

    def connections(self) -> List[List[int]]:
        '''
        gets every set as a sorted list of its members, ordered by smallest member
        '''
        sets = {}
        for i in range(len(self.arr)):
            sets.setdefault(self.find(i), []).append(i)
        return sorted(sets.values())

    def format_array(self, per_row: int = 20) -> str:
        rows = []
        for start in range(0, len(self.arr), per_row):
            rows.append(" ".join(str(n) for n in self.arr[start:start + per_row]))
        return "\n".join(rows)

    def format_stats(self) -> str:
        mean = self.mean_path_length()
        lines = ["Number of disjoint sets remaining = {:4d}".format(self.set_count())]
        if mean is None:
            lines.append("Mean path length of all find operations = n/a")
        else:
            lines.append("Mean path length of all find operations = {:2.2f}".format(mean))
        return "\n".join(lines)

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx
import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator


def iter_digraph(count: int, nmax: int, seed: int = 0) -> Iterator[nx.DiGraph[int]]:
    """Iterate over random directed graphs with integer capacities.

    Nodes are `0, ..., n - 1` with `2 <= n <= nmax`, and no self-loops are generated.
    """
    assert count > 0
    assert nmax >= 2
    rng = np.random.default_rng(seed)
    for _ in range(count):
        n = int(rng.integers(2, nmax + 1))
        g: nx.DiGraph[int] = nx.DiGraph()
        g.add_nodes_from(range(n))
        mask = rng.random((n, n)) < 0.4
        caps = rng.integers(0, 10, size=(n, n))
        for u, v in zip(*np.nonzero(mask)):
            if u != v:
                g.add_edge(int(u), int(v), capacity=int(caps[u, v]))
        yield g

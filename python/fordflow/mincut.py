"""Minimum cut.

This module extracts the minimum cut from a saturated flow network.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from fordflow import maxflow
from fordflow.common import CutResult, V

if TYPE_CHECKING:
    from fordflow.graph import Graph


def reachable(g: Graph[V], source: V, *, tol: float = 0.0) -> set[V]:
    """Collect vertices reachable from `source` over edges with positive residual capacity."""
    visited = {source}
    stack = [source]
    while stack:
        u = stack.pop()
        for e in g.edges_from(u):
            if e.v not in visited and g.residual(e) > tol:
                visited.add(e.v)
                stack.append(e.v)
    return visited


def find(g: Graph[V], source: V, sink: V, *, tol: float = 0.0) -> CutResult[V]:
    """Compute minimum cut separating `source` from `sink`.

    Maximum flow is computed first if `g` is not saturated yet.

    Parameters
    ----------
    g : `Graph`
        Flow network, updated in place.
    source : `V`
        Source vertex.
    sink : `V`
        Sink vertex.
    tol : `float`
        Edges with residual capacity not exceeding `tol` are treated as saturated.

    Returns
    -------
    `CutResult`
        Partition of the vertices and the forward edges crossing it.

    Raises
    ------
    ValueError
        If `source == sink` or the parameters are invalid.
    """
    maxflow._find(g, source, sink, tol=tol, max_rounds=None, stacklevel=3)
    sside = reachable(g, source, tol=tol) if source in g else set()
    tside = set(g.vertices) - sside
    edges = tuple(e for e in g.edges() if e.u in sside and e.v in tside)
    value = math.fsum(e.capacity for e in edges)
    return CutResult(frozenset(sside), frozenset(tside), edges, value)

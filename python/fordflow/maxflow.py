"""Ford-Fulkerson maximum flow algorithm.

This module provides functions to compute and verify maximum flow on :py:class:`fordflow.graph.Graph`.
Augmenting paths are found by depth-first search over edges with positive residual capacity.
"""

from __future__ import annotations

import math
import warnings
from typing import TYPE_CHECKING

from fordflow import _common
from fordflow.common import Augmentation, Edge, IterationLimitError, MaxFlowResult, UnknownVertexWarning, V

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from fordflow.graph import Graph

Path = list[tuple[Edge[V], float]]  #: Edges on an augmenting path paired with their residual capacity.


def find_path(g: Graph[V], source: V, sink: V, *, tol: float = 0.0) -> Path[V] | None:
    """Find an augmenting path.

    Outgoing edges are tried in insertion order and the first path found wins.
    Each edge is used at most once per search, while vertices may be revisited through different edges.

    Parameters
    ----------
    g : `Graph`
        Flow network.
    source : `V`
        Start vertex.
    sink : `V`
        End vertex.
    tol : `float`
        Edges with residual capacity not exceeding `tol` are treated as saturated.

    Returns
    -------
    `list` or `None`
        Pairs of edge and its residual capacity from `source` to `sink`, or `None` if no path exists.
    """
    used: set[int] = set()
    path: Path[V] = []
    stack: list[Iterator[Edge[V]]] = [iter(g.edges_from(source))]
    while stack:
        for e in stack[-1]:
            if e.index in used:
                continue
            res = g.residual(e)
            if res <= tol:
                continue
            used.add(e.index)
            path.append((e, res))
            if e.v == sink:
                return path
            stack.append(iter(g.edges_from(e.v)))
            break
        else:
            # Dead end: backtrack to the previous vertex
            stack.pop()
            if path:
                path.pop()
    return None


def bottleneck(path: Sequence[tuple[Edge[V], float]]) -> float:
    """Compute the minimum residual capacity along `path`.

    Raises
    ------
    ValueError
        If `path` is empty.
    """
    if not path:
        msg = "Path is empty."
        raise ValueError(msg)
    return min(res for _, res in path)


def augment(g: Graph[V], path: Sequence[tuple[Edge[V], float]], amount: float) -> None:
    """Push `amount` along every edge on `path`.

    Raises
    ------
    InconsistencyError
        If an edge on `path` is not properly paired with its reverse edge.
    """
    for e, _ in path:
        g.push(e, amount)


def outflow(g: Graph[V], v: V) -> float:
    """Compute the net flow leaving `v`."""
    return math.fsum(g.flow(e) for e in g.edges_from(v))


def find(
    g: Graph[V],
    source: V,
    sink: V,
    *,
    tol: float = 0.0,
    max_rounds: int | None = None,
) -> MaxFlowResult[V]:
    """Compute maximum flow from `source` to `sink`.

    Flow is accumulated on top of the current flow table of `g`, which is updated in place.
    Running again on the same graph finds no augmenting path and reports the same value.

    Parameters
    ----------
    g : `Graph`
        Flow network.
    source : `V`
        Source vertex.
    sink : `V`
        Sink vertex.
    tol : `float`
        Edges with residual capacity not exceeding `tol` are treated as saturated.
    max_rounds : `int` or `None`
        Maximum number of augmentations.
        Defaults to unlimited.

    Returns
    -------
    `MaxFlowResult`
        Total flow leaving `source` and the augmentations applied by this call.

    Raises
    ------
    ValueError
        If `source == sink` or the parameters are invalid.
    IterationLimitError
        If augmenting paths remain after `max_rounds` augmentations.
    InconsistencyError
        If the graph is broken.

    Notes
    -----
    Unknown `source` or `sink` results in zero flow with :py:class:`UnknownVertexWarning`.
    """
    return _find(g, source, sink, tol=tol, max_rounds=max_rounds, stacklevel=3)


def _find(
    g: Graph[V],
    source: V,
    sink: V,
    *,
    tol: float,
    max_rounds: int | None,
    stacklevel: int,
) -> MaxFlowResult[V]:
    # stacklevel counts from this frame
    _common.check_vertex(source)
    _common.check_vertex(sink)
    if source == sink:
        msg = "source and sink must be different."
        raise ValueError(msg)
    _common.check_tol(tol)
    if max_rounds is not None and max_rounds < 0:
        msg = "max_rounds must be non-negative."
        raise ValueError(msg)
    for v in (source, sink):
        if v not in g:
            msg = f"{v} not found in the graph."
            warnings.warn(msg, UnknownVertexWarning, stacklevel=stacklevel)
            return MaxFlowResult(0.0)
    paths: list[Augmentation[V]] = []
    while (path := find_path(g, source, sink, tol=tol)) is not None:
        if max_rounds is not None and len(paths) >= max_rounds:
            msg = f"Augmenting path still exists after {max_rounds} rounds."
            raise IterationLimitError(msg)
        amount = bottleneck(path)
        augment(g, path, amount)
        vertices = (source, *(e.v for e, _ in path))
        paths.append(Augmentation(vertices, amount))
    return MaxFlowResult(outflow(g, source), tuple(paths))


def verify(
    result: MaxFlowResult[V],
    g: Graph[V],
    source: V,
    sink: V,
    *,
    tol: float = 0.0,
    atol: float = 1e-9,
) -> None:
    """Verify maximum flow.

    Parameters
    ----------
    result : `MaxFlowResult`
        Result to verify.
    g : `Graph`
        Flow network after computation.
    source : `V`
        Source vertex.
    sink : `V`
        Sink vertex.
    tol : `float`
        Residual threshold used to search for a remaining augmenting path.
    atol : `float`
        Absolute tolerance for floating-point comparisons.

    Raises
    ------
    ValueError
        If the flow table is invalid, not maximum, or inconsistent with `result`.
    """
    for e in g.edges():
        f = g.flow(e)
        if not math.isclose(f, -g.flow(g.reverse(e)), abs_tol=atol):
            msg = f"Skew symmetry broken on edge {e.index} ({e.u} -> {e.v})."
            raise ValueError(msg)
        if not (-atol <= f <= e.capacity + atol):
            msg = f"Capacity violated on edge {e.index} ({e.u} -> {e.v})."
            raise ValueError(msg)
    for v in g.vertices:
        if v in {source, sink}:
            continue
        if not math.isclose(outflow(g, v), 0.0, abs_tol=atol):
            msg = f"Flow not conserved on vertex {v}."
            raise ValueError(msg)
    if find_path(g, source, sink, tol=tol) is not None:
        msg = "Augmenting path still exists."
        raise ValueError(msg)
    if not math.isclose(result.value, outflow(g, source), abs_tol=atol):
        msg = "Flow value does not match the flow table."
        raise ValueError(msg)

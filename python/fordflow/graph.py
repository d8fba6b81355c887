"""Flow network.

This module provides the directed, capacitated graph consumed by :py:mod:`fordflow.maxflow`.
Edges live in an arena and are identified by their index, and every edge added by the user is paired with a
zero-capacity reverse edge that allows flow cancellation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic

import numpy as np
import numpy.typing as npt

from fordflow import _common
from fordflow._common import IndexMap
from fordflow.common import Edge, InconsistencyError, InvalidEdgeError, V

if TYPE_CHECKING:
    from collections.abc import Sequence

    import networkx as nx


class Graph(Generic[V]):
    """Directed graph with edge capacities and a flow table.

    Structure is append-only: vertices and edges are never removed, and only the flow table changes after construction.
    """

    __edges: list[Edge[V]]
    __flow: list[float]
    __adj: dict[V, list[int]]

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self.__edges = []
        self.__flow = []
        self.__adj = {}

    def __len__(self) -> int:
        return len(self.__adj)

    def __contains__(self, v: object) -> bool:
        return v in self.__adj

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self.__adj)}, edges={len(self.__edges) // 2})"

    @property
    def vertices(self) -> list[V]:
        """Vertices in registration order."""
        return list(self.__adj)

    def edges(self, *, reverse: bool = False) -> list[Edge[V]]:
        """List edges in insertion order.

        Parameters
        ----------
        reverse : `bool`
            Include the automatically created reverse edges.

        Returns
        -------
        `list`
            Edges added by :py:meth:`add_edge` (and their reverse edges if `reverse` is set).
        """
        if reverse:
            return list(self.__edges)
        # Forward and reverse edges are allocated in pairs
        return self.__edges[::2]

    def edge(self, index: int) -> Edge[V]:
        """Look up the edge by its arena index.

        Raises
        ------
        ValueError
            If `index` is out of range.
        """
        if not (0 <= index < len(self.__edges)):
            msg = f"Edge {index} not found."
            raise ValueError(msg)
        return self.__edges[index]

    def add_vertex(self, v: V) -> None:
        """Register `v` with no edges.

        Does nothing if `v` is already registered.

        Raises
        ------
        TypeError
            If `v` is not hashable.
        """
        _common.check_vertex(v)
        self.__adj.setdefault(v, [])

    def add_edge(self, u: V, v: V, capacity: float) -> Edge[V]:
        """Add a directed edge together with its reverse edge.

        Parameters
        ----------
        u : `V`
            Tail vertex, registered if unknown.
        v : `V`
            Head vertex, registered if unknown.
        capacity : `float`
            Non-negative finite capacity.

        Returns
        -------
        `Edge`
            Newly created forward edge.

        Raises
        ------
        InvalidEdgeError
            If `u == v`.
        TypeError
            If `u` or `v` is not hashable, or `capacity` is not a real number.
        ValueError
            If `capacity` is negative or not finite.

        Notes
        -----
        The graph is left unchanged if any exception is raised.
        """
        _common.check_vertex(u)
        _common.check_vertex(v)
        if u == v:
            msg = f"Self-loop on {u} is not allowed."
            raise InvalidEdgeError(msg)
        cap = _common.check_capacity(capacity)
        i = len(self.__edges)
        fwd = Edge(i, u, v, cap, i + 1)
        rev = Edge(i + 1, v, u, 0.0, i)
        self.__edges.extend((fwd, rev))
        self.__flow.extend((0.0, 0.0))
        self.__adj.setdefault(u, []).append(fwd.index)
        self.__adj.setdefault(v, []).append(rev.index)
        return fwd

    def edges_from(self, v: V) -> list[Edge[V]]:
        """List edges leaving `v` in insertion order.

        Returns
        -------
        `list`
            Outgoing edges, including reverse edges.
            Empty if `v` is unknown.
        """
        return [self.__edges[i] for i in self.__adj.get(v, ())]

    def is_reverse(self, e: Edge[V]) -> bool:
        """Check if `e` was created automatically as a reverse edge."""
        return self.__lookup(e) % 2 == 1

    def reverse(self, e: Edge[V]) -> Edge[V]:
        """Get the edge paired with `e`."""
        i = self.__lookup(e)
        return self.__edges[self.__lookup(self.__edges[i].reverse)]

    def flow(self, e: Edge[V]) -> float:
        """Get the current flow on `e`."""
        return self.__flow[self.__lookup(e)]

    def residual(self, e: Edge[V]) -> float:
        """Get the residual capacity of `e`, i.e., capacity minus flow."""
        return e.capacity - self.__flow[self.__lookup(e)]

    def push(self, e: Edge[V], amount: float) -> None:
        """Push `amount` along `e`, cancelling the same amount on its reverse edge.

        Raises
        ------
        InconsistencyError
            If `e` is not properly paired with its reverse edge.
        ValueError
            If `e` does not belong to this graph.
        """
        i = self.__lookup(e)
        if e.reverse == i:
            msg = f"Edge {i} ({e.u} -> {e.v}) is its own reverse."
            raise InconsistencyError(msg)
        if not (0 <= e.reverse < len(self.__edges)) or self.__edges[e.reverse].reverse != i:
            msg = f"Edge {i} ({e.u} -> {e.v}) has a broken reverse edge."
            raise InconsistencyError(msg)
        self.__flow[i] += amount
        self.__flow[e.reverse] -= amount

    def reset(self) -> None:
        """Zero out the flow on every edge."""
        self.__flow = [0.0] * len(self.__edges)

    def copy(self) -> Graph[V]:
        """Copy the graph including the current flow.

        Edges are immutable and shared with the copy.
        """
        ret: Graph[V] = Graph()
        ret.__edges = list(self.__edges)
        ret.__flow = list(self.__flow)
        ret.__adj = {v: list(es) for v, es in self.__adj.items()}
        return ret

    def __lookup(self, e: Edge[V] | int) -> int:
        i = e if isinstance(e, int) else e.index
        if not (0 <= i < len(self.__edges)) or (isinstance(e, Edge) and self.__edges[i] is not e):
            msg = f"Edge {e} not found."
            raise ValueError(msg)
        return i


def from_networkx(g: nx.DiGraph[V], capacity: str = "capacity") -> Graph[V]:
    """Build a flow network from a directed graph.

    Parameters
    ----------
    g : `networkx.DiGraph`
        Directed graph without self-loops.
        Isolated nodes are kept.
    capacity : `str`
        Edge attribute holding the capacity.

    Returns
    -------
    `Graph`
        Nodes and edges of `g` in its iteration order, with zero flow.

    Raises
    ------
    TypeError
        If `g` is not a directed graph.
    ValueError
        If `g` is a multigraph, has self-loops, or any edge lacks `capacity`.
    """
    _common.check_digraph(g)
    ret: Graph[V] = Graph()
    for v in g.nodes:
        ret.add_vertex(v)
    for u, v, data in g.edges(data=True):
        cap = data.get(capacity)
        if cap is None:
            msg = f"Edge ({u}, {v}) has no {capacity!r} attribute."
            raise ValueError(msg)
        ret.add_edge(u, v, cap)
    return ret


def _dense(g: Graph[V], values: Sequence[float]) -> npt.NDArray[np.float64]:
    codec = IndexMap(g.vertices)
    n = len(codec)
    ret = np.zeros((n, n), dtype=np.float64)
    for e, x in zip(g.edges(), values):
        ret[codec.encode(e.u), codec.encode(e.v)] += x
    return ret


def capacity_matrix(g: Graph[V]) -> npt.NDArray[np.float64]:
    """Compute the dense capacity matrix.

    Returns
    -------
    `numpy.ndarray`
        Matrix of shape :code:`(n, n)` indexed in the order of :py:attr:`Graph.vertices`.
        Parallel edges are summed up and reverse edges are excluded.
    """
    return _dense(g, [e.capacity for e in g.edges()])


def flow_matrix(g: Graph[V]) -> npt.NDArray[np.float64]:
    """Compute the dense flow matrix.

    Returns
    -------
    `numpy.ndarray`
        Matrix of shape :code:`(n, n)` indexed in the order of :py:attr:`Graph.vertices`.
        Flows on parallel edges are summed up and reverse edges are excluded.
    """
    return _dense(g, [g.flow(e) for e in g.edges()])

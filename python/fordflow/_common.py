"""Private common functionalities."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable
from numbers import Real
from typing import Generic

import networkx as nx

from fordflow.common import V


def check_vertex(v: object) -> None:
    """Check if `v` can be used as a vertex name.

    Raises
    ------
    TypeError
        If `v` is not hashable.
    """
    if not isinstance(v, Hashable):
        msg = "Vertex must be hashable."
        raise TypeError(msg)


def check_capacity(capacity: object) -> float:
    """Check if `capacity` is a valid edge capacity.

    Returns
    -------
    `float`
        `capacity` casted to `float`.

    Raises
    ------
    TypeError
        If `capacity` is not a real number.
    ValueError
        If `capacity` is negative or not finite.
    """
    # bool is a subclass of int
    if isinstance(capacity, bool) or not isinstance(capacity, Real):
        msg = "Capacity must be a real number."
        raise TypeError(msg)
    cap = float(capacity)
    if not math.isfinite(cap):
        msg = "Capacity must be finite."
        raise ValueError(msg)
    if cap < 0:
        msg = "Capacity must be non-negative."
        raise ValueError(msg)
    return cap


def check_tol(tol: float) -> None:
    """Check if `tol` is a valid residual threshold.

    Raises
    ------
    ValueError
        If `tol` is negative or not finite.
    """
    if not (math.isfinite(tol) and tol >= 0):
        msg = "tol must be a non-negative finite number."
        raise ValueError(msg)


def check_digraph(g: nx.DiGraph[V]) -> None:
    """Check if `g` can be converted to a flow network.

    Raises
    ------
    TypeError
        If `g` is not a directed graph.
    ValueError
        If `g` is a multigraph or has self-loops.
    """
    if not isinstance(g, nx.DiGraph):
        msg = "g must be a networkx.DiGraph."
        raise TypeError(msg)
    if g.is_multigraph():
        msg = "Multigraph not supported."
        raise ValueError(msg)
    if any(True for _ in nx.selfloop_edges(g)):
        msg = "Self-loop detected."
        raise ValueError(msg)


class IndexMap(Generic[V]):
    """Map between `V` and 0-based indices."""

    __v2i: dict[V, int]
    __i2v: list[V]

    def __init__(self, vset: Iterable[V]) -> None:
        """Initialize the map from `vset`.

        Parameters
        ----------
        vset : `collections.abc.Iterable`
            Vertices.
            Can be any hashable type.
            Order of the first occurrence is preserved.
        """
        self.__i2v = list(dict.fromkeys(vset))
        self.__v2i = {v: i for i, v in enumerate(self.__i2v)}

    def __len__(self) -> int:
        return len(self.__i2v)

    def encode(self, v: V) -> int:
        """Encode `v` to the index.

        Returns
        -------
        `int`
            Index of `v`.

        Raises
        ------
        ValueError
            If `v` is not initially registered.
        """
        ind = self.__v2i.get(v)
        if ind is None:
            msg = f"{v} not found."
            raise ValueError(msg)
        return ind

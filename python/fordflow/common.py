"""Common functionalities."""

from __future__ import annotations

import dataclasses
from collections.abc import Hashable
from typing import Generic, TypeVar

V = TypeVar("V", bound=Hashable)  #: Vertex type.


class InvalidEdgeError(ValueError):
    """Edge cannot be added to the graph, e.g., a self-loop."""


class InconsistencyError(RuntimeError):
    """Internal state of the graph is broken and computation cannot proceed."""


class IterationLimitError(RuntimeError):
    """Augmentation did not converge within the given number of rounds."""


class UnknownVertexWarning(UserWarning):
    """Source or sink is not registered in the graph."""


@dataclasses.dataclass(frozen=True)
class Edge(Generic[V]):
    """Directed edge stored in the edge arena of a graph."""

    index: int
    """Position in the arena, unique within the owning graph."""
    u: V
    """Tail vertex."""
    v: V
    """Head vertex."""
    capacity: float
    """Capacity, zero for reverse edges."""
    reverse: int
    """Arena index of the paired reverse edge."""


@dataclasses.dataclass(frozen=True)
class Augmentation(Generic[V]):
    """Single augmentation round."""

    vertices: tuple[V, ...]
    """Vertices along the augmenting path, from source to sink."""
    amount: float
    """Bottleneck pushed along the path."""


@dataclasses.dataclass(frozen=True)
class MaxFlowResult(Generic[V]):
    r"""Maximum flow between two vertices."""

    value: float
    """Total flow leaving the source."""
    paths: tuple[Augmentation[V], ...] = ()
    """Augmentations applied by the run producing this result, in order."""


@dataclasses.dataclass(frozen=True)
class CutResult(Generic[V]):
    r"""Minimum cut separating source and sink."""

    source_side: frozenset[V]
    """Vertices reachable from the source in the residual graph."""
    sink_side: frozenset[V]
    """Remaining vertices of the graph.

    An unknown sink is not included, so the partition may not contain the sink.
    """
    edges: tuple[Edge[V], ...]
    """Forward edges crossing from `source_side` to `sink_side`."""
    value: float
    """Sum of capacities of `edges`."""

from __future__ import annotations

import math

import networkx as nx
import numpy as np
import pytest
from fordflow import graph
from fordflow.common import Edge, InconsistencyError, InvalidEdgeError
from fordflow.graph import Graph


@pytest.fixture
def fx_graph() -> Graph[str]:
    g: Graph[str] = Graph()
    g.add_edge("a", "b", 3)
    g.add_edge("b", "c", 2)
    g.add_edge("a", "c", 1)
    return g


class TestGraph:
    def test_empty(self) -> None:
        g: Graph[str] = Graph()
        assert len(g) == 0
        assert g.vertices == []
        assert g.edges() == []
        assert g.edges_from("a") == []

    def test_add_edge(self) -> None:
        g: Graph[str] = Graph()
        e = g.add_edge("a", "b", 3)
        assert (e.u, e.v, e.capacity) == ("a", "b", 3.0)
        r = g.reverse(e)
        assert (r.u, r.v, r.capacity) == ("b", "a", 0.0)
        assert g.reverse(r) is e
        assert r != e
        assert not g.is_reverse(e)
        assert g.is_reverse(r)
        assert g.flow(e) == 0
        assert g.flow(r) == 0
        assert g.edges_from("a") == [e]
        assert g.edges_from("b") == [r]
        assert g.vertices == ["a", "b"]

    def test_add_edge_distinct(self) -> None:
        g: Graph[str] = Graph()
        e0 = g.add_edge("a", "b", 3)
        e1 = g.add_edge("a", "b", 3)
        assert e0 != e1
        assert e0.reverse != e1.reverse
        assert g.edges_from("a") == [e0, e1]
        assert g.edges() == [e0, e1]
        assert len(g.edges(reverse=True)) == 4

    def test_add_edge_selfloop(self, fx_graph: Graph[str]) -> None:
        fx_graph.push(fx_graph.edges()[0], 1)
        before = fx_graph.edges(reverse=True)
        flows = [fx_graph.flow(e) for e in before]
        with pytest.raises(InvalidEdgeError, match=r"Self-loop on a is not allowed\."):
            fx_graph.add_edge("a", "a", 1)
        assert fx_graph.edges(reverse=True) == before
        assert [fx_graph.flow(e) for e in fx_graph.edges(reverse=True)] == flows
        assert fx_graph.vertices == ["a", "b", "c"]

    def test_add_edge_selfloop_new_vertex(self) -> None:
        g: Graph[str] = Graph()
        with pytest.raises(InvalidEdgeError):
            g.add_edge("x", "x", 1)
        assert "x" not in g

    @pytest.mark.parametrize("cap", [-1, -0.5, math.inf, math.nan])
    def test_add_edge_badcap(self, fx_graph: Graph[str], cap: float) -> None:
        with pytest.raises(ValueError, match=r"Capacity must be .*\."):
            fx_graph.add_edge("a", "x", cap)
        assert "x" not in fx_graph
        assert len(fx_graph.edges()) == 3

    def test_add_edge_badtype(self, fx_graph: Graph[str]) -> None:
        with pytest.raises(TypeError, match=r"Capacity must be a real number\."):
            fx_graph.add_edge("a", "x", "1")  # type: ignore[arg-type]

        with pytest.raises(TypeError, match=r"Capacity must be a real number\."):
            fx_graph.add_edge("a", "x", True)  # noqa: FBT003

        with pytest.raises(TypeError, match=r"Vertex must be hashable\."):
            fx_graph.add_edge("a", ["x"], 1)  # type: ignore[arg-type]

    def test_add_vertex_keeps_edges(self, fx_graph: Graph[str]) -> None:
        before = fx_graph.edges_from("a")
        fx_graph.add_vertex("a")
        assert fx_graph.edges_from("a") == before
        fx_graph.add_vertex("z")
        assert fx_graph.vertices == ["a", "b", "c", "z"]
        assert fx_graph.edges_from("z") == []
        assert "z" in fx_graph
        assert len(fx_graph) == 4

    def test_edges_from_order(self, fx_graph: Graph[str]) -> None:
        # Insertion order, reverse edges included
        assert [(e.u, e.v) for e in fx_graph.edges_from("a")] == [("a", "b"), ("a", "c")]
        assert [(e.u, e.v) for e in fx_graph.edges_from("c")] == [("c", "b"), ("c", "a")]

    def test_edge(self, fx_graph: Graph[str]) -> None:
        e = fx_graph.edge(2)
        assert (e.u, e.v) == ("b", "c")
        with pytest.raises(ValueError, match=r"Edge 6 not found\."):
            fx_graph.edge(6)

    def test_push(self, fx_graph: Graph[str]) -> None:
        e = fx_graph.edges_from("a")[0]
        r = fx_graph.reverse(e)
        fx_graph.push(e, 2)
        assert fx_graph.flow(e) == 2
        assert fx_graph.flow(r) == -2
        assert fx_graph.residual(e) == 1
        assert fx_graph.residual(r) == 2
        fx_graph.push(r, 1.5)
        assert fx_graph.flow(e) == 0.5
        assert fx_graph.flow(r) == -0.5

    def test_push_selfreverse(self) -> None:
        g: Graph[str] = Graph()
        g.add_edge("a", "b", 1)
        # Break the arena on purpose
        g._Graph__edges[0] = Edge(0, "a", "b", 1.0, 0)  # type: ignore[attr-defined]
        with pytest.raises(InconsistencyError, match=r"Edge 0 \(a -> b\) is its own reverse\."):
            g.push(g.edge(0), 1)
        assert g.flow(g.edge(0)) == 0
        assert g.flow(g.edge(1)) == 0

    def test_push_brokenpair(self) -> None:
        g: Graph[str] = Graph()
        g.add_edge("a", "b", 1)
        g.add_edge("b", "c", 1)
        g._Graph__edges[0] = Edge(0, "a", "b", 1.0, 3)  # type: ignore[attr-defined]
        with pytest.raises(InconsistencyError, match=r"has a broken reverse edge\."):
            g.push(g.edge(0), 1)

    def test_foreign_edge(self, fx_graph: Graph[str]) -> None:
        other: Graph[str] = Graph()
        e = other.add_edge("a", "b", 3)
        with pytest.raises(ValueError, match=r"not found\."):
            fx_graph.flow(e)
        with pytest.raises(ValueError, match=r"not found\."):
            fx_graph.push(e, 1)
        with pytest.raises(ValueError, match=r"not found\."):
            fx_graph.reverse(e)

    def test_reset(self, fx_graph: Graph[str]) -> None:
        e = fx_graph.edges()[0]
        fx_graph.push(e, 1)
        fx_graph.reset()
        assert all(fx_graph.flow(e) == 0 for e in fx_graph.edges(reverse=True))

    def test_copy(self, fx_graph: Graph[str]) -> None:
        e = fx_graph.edges()[0]
        fx_graph.push(e, 1)
        g = fx_graph.copy()
        assert g.flow(e) == 1
        g.push(e, 1)
        g.add_edge("c", "d", 1)
        assert fx_graph.flow(e) == 1
        assert "d" not in fx_graph
        assert g.flow(e) == 2


class TestNetworkx:
    def test_from_networkx(self) -> None:
        nxg: nx.DiGraph[str] = nx.DiGraph()
        nxg.add_node("z")
        nxg.add_edge("a", "b", capacity=2)
        nxg.add_edge("b", "a", capacity=1)
        g = graph.from_networkx(nxg)
        assert set(g.vertices) == {"a", "b", "z"}
        assert sorted((e.u, e.v, e.capacity) for e in g.edges()) == [("a", "b", 2.0), ("b", "a", 1.0)]

    def test_from_networkx_attr(self) -> None:
        nxg: nx.DiGraph[str] = nx.DiGraph()
        nxg.add_edge("a", "b", cap=2)
        g = graph.from_networkx(nxg, capacity="cap")
        assert [e.capacity for e in g.edges()] == [2.0]

        with pytest.raises(ValueError, match=r"Edge \(a, b\) has no 'capacity' attribute\."):
            graph.from_networkx(nxg)

    def test_from_networkx_ng(self) -> None:
        with pytest.raises(TypeError, match=r"g must be a networkx\.DiGraph\."):
            graph.from_networkx(nx.Graph([("a", "b")]))  # type: ignore[arg-type]

        with pytest.raises(ValueError, match=r"Multigraph not supported\."):
            graph.from_networkx(nx.MultiDiGraph([("a", "b")]))

        with pytest.raises(ValueError, match=r"Self-loop detected\."):
            graph.from_networkx(nx.DiGraph([("a", "a")]))


class TestMatrix:
    def test_capacity_matrix(self, fx_graph: Graph[str]) -> None:
        fx_graph.add_edge("a", "b", 1)
        m = graph.capacity_matrix(fx_graph)
        np.testing.assert_array_equal(m, [[0, 4, 1], [0, 0, 2], [0, 0, 0]])

    def test_flow_matrix(self, fx_graph: Graph[str]) -> None:
        e0, e1, _ = fx_graph.edges()
        fx_graph.push(e0, 2)
        fx_graph.push(e1, 2)
        m = graph.flow_matrix(fx_graph)
        np.testing.assert_array_equal(m, [[0, 2, 0], [0, 0, 2], [0, 0, 0]])

    def test_empty(self) -> None:
        g: Graph[str] = Graph()
        assert graph.capacity_matrix(g).shape == (0, 0)

"""Example code for computing maximum flow."""

# %%

from __future__ import annotations

from fordflow import maxflow
from fordflow.graph import Graph

g: Graph[str]

# %%

#     o --3--> q
#    ^|        |\
#   3 2        4 2
#  /  v        v  v
# s -3-> p -2-> r -3-> t
g = Graph()
for v in ["s", "o", "p", "q", "r", "t"]:
    g.add_vertex(v)

g.add_edge("s", "o", 3)
g.add_edge("s", "p", 3)
g.add_edge("o", "p", 2)
g.add_edge("o", "q", 3)
g.add_edge("p", "r", 2)
g.add_edge("r", "t", 3)
g.add_edge("q", "r", 4)
g.add_edge("q", "t", 2)

result = maxflow.find(g, "s", "t")

assert result.value == 5

# Flow table is updated in place
for e in g.edges():
    print(f"{e.u} -> {e.v}: {g.flow(e)} / {e.capacity}")

# %%

# Saturated graph has no augmenting path
again = maxflow.find(g, "s", "t")

assert again.value == 5
assert again.paths == ()

# %%

# Isolated sink
g = Graph()
g.add_edge("s", "a", 1)
g.add_vertex("z")

result = maxflow.find(g, "s", "z")

assert result.value == 0

"""Example code for computing minimum cut."""

# %%

from __future__ import annotations

import networkx as nx
from fordflow import mincut
from fordflow.graph import from_networkx

# %%

# a --4--> b --1--> d
#  \       |        ^
#   2      3        5
#    \     v        |
#     +--> c -------+
nxg: nx.DiGraph[str] = nx.DiGraph()
nxg.add_edge("a", "b", capacity=4)
nxg.add_edge("a", "c", capacity=2)
nxg.add_edge("b", "c", capacity=3)
nxg.add_edge("b", "d", capacity=1)
nxg.add_edge("c", "d", capacity=5)

g = from_networkx(nxg)
cut = mincut.find(g, "a", "d")

# Same as the maximum flow
assert cut.value == 6
# Both edges leaving the source are saturated
assert cut.source_side == {"a"}
print([(e.u, e.v) for e in cut.edges])

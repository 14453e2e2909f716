from __future__ import annotations

from typing import Any, Hashable, Iterable, List, Sequence, Tuple, TypeVar

import networkx as nx

N = TypeVar('N', bound=Hashable)


def enum_value(value: Any) -> str:
    """Return the plain string of an enum-like value.
    Accepts enum members (with .value) or plain strings.
    """
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def build_graph(nodes: Iterable[N], pairs: Iterable[Tuple[N, N]]) -> nx.Graph:
    """由节点与边构建无向图，端点不在节点集合中的边被忽略"""
    graph = nx.Graph()
    graph.add_nodes_from(nodes)
    graph.add_edges_from((a, b) for a, b in pairs if a in graph and b in graph)
    return graph


def ordered_components(graph: nx.Graph, order: Sequence[N]) -> List[List[N]]:
    """连通分量，分量及其内部节点按 order 中的首次出现顺序排列"""
    rank = {node: i for i, node in enumerate(order)}
    components = [sorted(c, key=rank.__getitem__) for c in nx.connected_components(graph)]
    return sorted(components, key=lambda c: rank[c[0]])

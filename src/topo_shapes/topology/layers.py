"""
全互联规则实现
相邻层（或指定的两个分组）之间每对节点都相连
"""

from __future__ import annotations

from collections import Counter
from itertools import pairwise
from typing import List, Tuple

from ..core.errors import InsufficientNodesError
from ..core.models import FullMeshRule, TopologyDescription
from ..core.types import Edge, GroupName, RuleKind
from .base import RuleStrategy, StrategyFactory, bipartite_degrees, complete_bipartite
from .registry import NodeRegistry


class FullMeshStrategy(RuleStrategy):
    """全互联规则"""

    def group_pairs(
        self, rule: FullMeshRule, registry: NodeRegistry, description: TopologyDescription
    ) -> List[Tuple[GroupName, GroupName]]:
        """规则涉及的分组对

        未指定 between 时按声明顺序取相邻层
        """
        if rule.between:
            a, b = rule.between
            registry.nodes(a)
            registry.nodes(b)
            return [(a, b)]

        layers = description.layer_names
        if len(layers) < 2:
            raise InsufficientNodesError(
                description.name, required=2, available=len(layers),
                reason=f"相邻层全互联至少需要 2 个层，实际 {len(layers)} 个",
            )
        return list(pairwise(layers))

    def expand(
        self, rule: FullMeshRule, registry: NodeRegistry, description: TopologyDescription
    ) -> List[Edge]:
        edges: List[Edge] = []
        for a, b in self.group_pairs(rule, registry, description):
            edges.extend(complete_bipartite(registry.nodes(a), registry.nodes(b)))
        return edges

    def expected_degrees(
        self, rule: FullMeshRule, registry: NodeRegistry, description: TopologyDescription
    ) -> Counter:
        degrees: Counter = Counter()
        for a, b in self.group_pairs(rule, registry, description):
            degrees.update(bipartite_degrees(registry.nodes(a), registry.nodes(b)))
        return degrees


# 注册全互联规则
StrategyFactory.register(RuleKind.FULL_MESH, FullMeshStrategy)


def count_full_mesh_edges(counts: List[int]) -> int:
    """相邻层全互联的边数: sum(n_i * n_{i+1})"""
    return sum(a * b for a, b in pairwise(counts))

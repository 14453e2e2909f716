"""显式链路规则：导入的邻接配置中逐条列出的节点对"""

from __future__ import annotations

from collections import Counter
from typing import List, Tuple

from ..core.errors import DescriptionError
from ..core.models import LinksRule, TopologyDescription
from ..core.types import Edge, NodeId, RuleKind
from .base import RuleStrategy, StrategyFactory, pair_degrees
from .registry import NodeRegistry


class LinksStrategy(RuleStrategy):
    """显式链路规则"""

    def resolve_pairs(self, rule: LinksRule, registry: NodeRegistry) -> List[Tuple[NodeId, NodeId]]:
        pairs = []
        for a, b in rule.links:
            if a == b:
                raise DescriptionError(f"链路的两端是同一个节点: {a}")
            pairs.append((registry.resolve(a), registry.resolve(b)))
        return pairs

    def expand(
        self, rule: LinksRule, registry: NodeRegistry, description: TopologyDescription
    ) -> List[Edge]:
        return [Edge.between(a, b) for a, b in self.resolve_pairs(rule, registry)]

    def expected_degrees(
        self, rule: LinksRule, registry: NodeRegistry, description: TopologyDescription
    ) -> Counter:
        return pair_degrees(self.resolve_pairs(rule, registry))


# 注册显式链路规则
StrategyFactory.register(RuleKind.LINKS, LinksStrategy)

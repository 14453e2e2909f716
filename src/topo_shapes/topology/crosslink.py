"""
跨子网连接实现
从两个子网的边界节点中各选 count 个，按模式互联
"""

from __future__ import annotations

from collections import Counter
from typing import List, Tuple

from ..core.errors import InsufficientNodesError
from ..core.models import CrossLinkRule, TopologyDescription
from ..core.types import CrossLinkPattern, Edge, GroupName, NodeId, RuleKind
from .base import RuleStrategy, StrategyFactory, bipartite_degrees, complete_bipartite, pair_degrees
from .registry import NodeRegistry


def boundary_positions(description: TopologyDescription, group: GroupName, size: int) -> List[int]:
    """分组的边界位置；未声明边界时所有节点都是边界节点"""
    spec = description.group(group)
    if spec is not None and spec.boundary:
        return list(spec.boundary)
    return list(range(size))


def select_boundary(
    registry: NodeRegistry,
    description: TopologyDescription,
    group: GroupName,
    count: int,
    offset: int = 0,
) -> List[NodeId]:
    """从边界列表的 offset 处开始选取 count 个边界节点"""
    nodes = registry.nodes(group)
    positions = boundary_positions(description, group, len(nodes))
    selected = positions[offset:offset + count]
    if len(selected) < count:
        raise InsufficientNodesError(
            group, required=offset + count, available=len(positions),
            reason=(
                f"跨子网连接需要从偏移 {offset} 起 {count} 个边界节点，"
                f"但只有 {len(positions)} 个边界节点"
            ),
        )
    return [registry.node(group, p) for p in selected]


class CrossLinkStrategy(RuleStrategy):
    """跨子网规则"""

    def select(
        self, rule: CrossLinkRule, registry: NodeRegistry, description: TopologyDescription
    ) -> Tuple[List[NodeId], List[NodeId]]:
        (a, b), (off_a, off_b) = rule.between, rule.offsets
        return (
            select_boundary(registry, description, a, rule.count, off_a),
            select_boundary(registry, description, b, rule.count, off_b),
        )

    def expand(
        self, rule: CrossLinkRule, registry: NodeRegistry, description: TopologyDescription
    ) -> List[Edge]:
        left, right = self.select(rule, registry, description)
        if rule.pattern == CrossLinkPattern.PAIRWISE:
            return [Edge.between(x, y) for x, y in zip(left, right)]
        return complete_bipartite(left, right)

    def expected_degrees(
        self, rule: CrossLinkRule, registry: NodeRegistry, description: TopologyDescription
    ) -> Counter:
        left, right = self.select(rule, registry, description)
        if rule.pattern == CrossLinkPattern.PAIRWISE:
            return pair_degrees(zip(left, right))
        return bipartite_degrees(left, right)


# 注册跨子网规则
StrategyFactory.register(RuleKind.CROSS_LINK, CrossLinkStrategy)


def calculate_cross_link_edges(count: int, pattern: str = CrossLinkPattern.COMPLETE) -> int:
    return count if pattern == CrossLinkPattern.PAIRWISE else count * count

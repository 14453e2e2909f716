"""
子网内部形状实现
triangle / star / square / line / ring / complete
"""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import Dict, List, Sequence

from ..core.errors import DescriptionError, InsufficientNodesError, UnknownShapeError
from ..core.models import ShapeRule, TopologyDescription
from ..core.types import Edge, GroupName, NodeId, RuleKind, ShapeType
from .base import RuleStrategy, StrategyFactory
from .registry import NodeRegistry


def resolve_shape(name: str, group: GroupName = None) -> ShapeType:
    """形状名称 -> ShapeType，未知形状抛出 UnknownShapeError"""
    try:
        return ShapeType(name.strip().lower())
    except ValueError:
        raise UnknownShapeError(name, group) from None


def check_shape_size(shape: ShapeType, group: GroupName, count: int, step: int = 1) -> None:
    """检查分组能否容纳该形状"""
    if shape.exact_nodes is not None and count != shape.exact_nodes:
        raise InsufficientNodesError(
            group, required=shape.exact_nodes, available=count,
            reason=f"{shape.value} 需要恰好 {shape.exact_nodes} 个节点，实际 {count} 个",
        )
    if count < shape.min_nodes:
        raise InsufficientNodesError(
            group, required=shape.min_nodes, available=count,
            reason=f"{shape.value} 至少需要 {shape.min_nodes} 个节点，实际 {count} 个",
        )
    if step != 1 and shape != ShapeType.RING:
        raise DescriptionError(f"只有 ring 形状支持 step 参数 (分组 {group!r}, 形状 {shape.value})")
    if shape == ShapeType.RING and not 2 * step < count:
        # step >= n/2 时 i -> i+step 会产生重复边
        raise InsufficientNodesError(
            group, required=2 * step + 1, available=count,
            reason=f"ring 步长 {step} 需要至少 {2 * step + 1} 个节点，实际 {count} 个",
        )


def shape_pairs(shape: ShapeType, nodes: Sequence[NodeId], step: int = 1) -> List[tuple[NodeId, NodeId]]:
    """按形状生成组内节点对，调用前需通过 check_shape_size"""
    n = len(nodes)
    if shape in (ShapeType.TRIANGLE, ShapeType.COMPLETE):
        return list(combinations(nodes, 2))
    if shape == ShapeType.STAR:
        hub = nodes[0]
        return [(hub, spoke) for spoke in nodes[1:]]
    if shape == ShapeType.LINE:
        return [(nodes[i], nodes[i + 1]) for i in range(n - 1)]
    if shape == ShapeType.SQUARE:
        return [(nodes[i], nodes[(i + 1) % n]) for i in range(n)]
    if shape == ShapeType.RING:
        return [(nodes[i], nodes[(i + step) % n]) for i in range(n)]
    raise UnknownShapeError(str(shape))


def shape_degrees(shape: ShapeType, nodes: Sequence[NodeId]) -> Dict[NodeId, int]:
    """形状隐含的组内度数"""
    n = len(nodes)
    if shape in (ShapeType.TRIANGLE, ShapeType.COMPLETE):
        return {node: n - 1 for node in nodes}
    if shape == ShapeType.STAR:
        return {node: (n - 1 if i == 0 else 1) for i, node in enumerate(nodes)}
    if shape == ShapeType.LINE:
        return {node: (1 if i in (0, n - 1) else 2) for i, node in enumerate(nodes)}
    # square / ring 中每个节点恰好 2 条边
    return {node: 2 for node in nodes}


class ShapeStrategy(RuleStrategy):
    """形状规则"""

    def _prepare(self, rule: ShapeRule, registry: NodeRegistry):
        nodes = registry.nodes(rule.group)
        shape = resolve_shape(rule.shape, rule.group)
        check_shape_size(shape, rule.group, len(nodes), rule.step)
        return shape, nodes

    def expand(
        self, rule: ShapeRule, registry: NodeRegistry, description: TopologyDescription
    ) -> List[Edge]:
        shape, nodes = self._prepare(rule, registry)
        return [Edge.between(a, b) for a, b in shape_pairs(shape, nodes, rule.step)]

    def expected_degrees(
        self, rule: ShapeRule, registry: NodeRegistry, description: TopologyDescription
    ) -> Counter:
        shape, nodes = self._prepare(rule, registry)
        return Counter(shape_degrees(shape, nodes))


# 注册形状规则
StrategyFactory.register(RuleKind.SHAPE, ShapeStrategy)


def calculate_shape_edges(shape: str, count: int, step: int = 1) -> int:
    """形状的边数"""
    resolved = resolve_shape(shape)
    check_shape_size(resolved, "-", count, step)
    if resolved in (ShapeType.TRIANGLE, ShapeType.COMPLETE):
        return count * (count - 1) // 2
    if resolved in (ShapeType.STAR, ShapeType.LINE):
        return count - 1
    return count


def list_shapes() -> Dict[str, str]:
    return {shape.value: shape.description for shape in ShapeType}

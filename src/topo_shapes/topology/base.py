"""
规则策略基础接口和抽象类
定义规则展开与期望度数计算的统一接口
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, Iterable, List, Sequence

from ..core.models import Rule, TopologyDescription
from ..core.types import Edge, NodeId
from ..utils.graph import enum_value
from .registry import NodeRegistry


class RuleStrategy(ABC):
    """规则策略基类"""

    def __init__(self, rule_kind: str):
        self.rule_kind = rule_kind

    @abstractmethod
    def expand(
        self, rule: Rule, registry: NodeRegistry, description: TopologyDescription
    ) -> List[Edge]:
        """把规则展开为边 - 子类必须实现"""
        pass

    @abstractmethod
    def expected_degrees(
        self, rule: Rule, registry: NodeRegistry, description: TopologyDescription
    ) -> Counter:
        """规则对每个节点贡献的度数 - 子类必须实现

        按规则语义直接计算，不依赖 expand 的结果
        """
        pass


# 边生成工具
def complete_bipartite(left: Sequence[NodeId], right: Sequence[NodeId]) -> List[Edge]:
    """左右两侧节点两两相连"""
    return [Edge.between(a, b) for a in left for b in right]


def bipartite_degrees(left: Sequence[NodeId], right: Sequence[NodeId]) -> Counter:
    degrees: Counter = Counter()
    for node in left:
        degrees[node] += len(right)
    for node in right:
        degrees[node] += len(left)
    return degrees


def pair_degrees(pairs: Iterable[tuple[NodeId, NodeId]]) -> Counter:
    degrees: Counter = Counter()
    for a, b in pairs:
        degrees[a] += 1
        degrees[b] += 1
    return degrees


# 策略工厂
class StrategyFactory:
    """规则策略工厂"""

    _registry: Dict[str, type] = {}

    @classmethod
    def register(cls, rule_kind: str, strategy_class: type):
        """注册规则策略"""
        cls._registry[enum_value(rule_kind)] = strategy_class

    @classmethod
    def create(cls, rule_kind: str) -> RuleStrategy:
        """创建规则策略实例"""
        key = enum_value(rule_kind)
        if key not in cls._registry:
            raise ValueError(f"未注册的规则类型: {key}（已注册: {', '.join(cls.registered())}）")
        return cls._registry[key](key)

    @classmethod
    def registered(cls) -> List[str]:
        return sorted(cls._registry)

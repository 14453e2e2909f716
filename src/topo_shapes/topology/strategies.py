"""统一的规则策略访问接口"""
from __future__ import annotations

from collections import Counter
from typing import List

from ..core.models import Rule, TopologyDescription
from ..core.types import Edge
from .base import StrategyFactory
from .registry import NodeRegistry

# 导入各规则模块以完成注册
from . import layers, shapes, crosslink, explicit  # noqa: F401


class RuleStrategies:
    """规则策略统一接口 - 按 rule.kind 分派到已注册的策略"""

    @staticmethod
    def expand(rule: Rule, registry: NodeRegistry, description: TopologyDescription) -> List[Edge]:
        """把一条规则展开为边

        Args:
            rule: 连接规则
            registry: 节点注册表
            description: 源描述（提供边界节点、层顺序等信息）

        Returns:
            规则产生的边（可能与其他规则重复）
        """
        return StrategyFactory.create(rule.kind).expand(rule, registry, description)

    @staticmethod
    def expected_degrees(
        rule: Rule, registry: NodeRegistry, description: TopologyDescription
    ) -> Counter:
        """规则对每个节点贡献的期望度数"""
        return StrategyFactory.create(rule.kind).expected_degrees(rule, registry, description)

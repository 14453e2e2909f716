"""
Models 包 - 拓扑描述与结果数据模型

此包包含所有描述、拓扑和构建结果模型类。
"""

# 基础
from .base import BaseConfig

# 分组与规则
from .groups import GroupSpec
from .rules import FullMeshRule, ShapeRule, CrossLinkRule, LinksRule, Rule

# 描述与拓扑
from .description import TopologyDescription
from .topology import Link, Topology

# 构建结果
from .generation import BuildResult

__all__ = [
    "BaseConfig",
    "GroupSpec",
    "FullMeshRule",
    "ShapeRule",
    "CrossLinkRule",
    "LinksRule",
    "Rule",
    "TopologyDescription",
    "Link",
    "Topology",
    "BuildResult",
]

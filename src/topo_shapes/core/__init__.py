"""
核心模块初始化
导出主要的类型、错误和模型
"""

from .types import (
    NodeId, Edge, GroupName, GroupKind, ShapeType, RuleKind, CrossLinkPattern,
    InvariantKind, OutputFormat, Violation, ValidationReport, Success, Failure, Result
)

from .errors import (
    TopologyError, DescriptionError, DuplicateGroupError, UnknownShapeError,
    InsufficientNodesError, UnknownGroupError, ValidationFailure
)

from .models import (
    GroupSpec, FullMeshRule, ShapeRule, CrossLinkRule, LinksRule, Rule,
    TopologyDescription, Link, Topology, BuildResult
)

__all__ = [
    # 类型
    'NodeId', 'Edge', 'GroupName', 'GroupKind', 'ShapeType', 'RuleKind', 'CrossLinkPattern',
    'InvariantKind', 'OutputFormat', 'Violation', 'ValidationReport', 'Success', 'Failure', 'Result',

    # 错误
    'TopologyError', 'DescriptionError', 'DuplicateGroupError', 'UnknownShapeError',
    'InsufficientNodesError', 'UnknownGroupError', 'ValidationFailure',

    # 模型
    'GroupSpec', 'FullMeshRule', 'ShapeRule', 'CrossLinkRule', 'LinksRule', 'Rule',
    'TopologyDescription', 'Link', 'Topology', 'BuildResult'
]

"""
工具模块初始化
导出集合操作与图遍历工具
"""

from .functional import groupby, unique, duplicates
from .graph import enum_value, build_graph, ordered_components

__all__ = [
    'groupby', 'unique', 'duplicates',
    'enum_value', 'build_graph', 'ordered_components',
]

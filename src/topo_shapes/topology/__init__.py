"""
拓扑模块初始化
导出节点注册表、规则策略、构建器、验证器和示例目录
"""

from .registry import NodeRegistry

from .base import (
    RuleStrategy, StrategyFactory, complete_bipartite, bipartite_degrees, pair_degrees
)

from .layers import FullMeshStrategy, count_full_mesh_edges

from .shapes import (
    ShapeStrategy, resolve_shape, check_shape_size, shape_pairs, shape_degrees,
    calculate_shape_edges, list_shapes
)

from .crosslink import (
    CrossLinkStrategy, boundary_positions, select_boundary, calculate_cross_link_edges
)

from .explicit import LinksStrategy

from .strategies import RuleStrategies

from .builder import TopologyBuilder, build_topology

from .validator import TopologyValidator, validate_topology

from .catalog import (
    ExampleName, EXAMPLES, get_example, list_examples,
    create_tree_sample, create_butterfly_sample, create_subnet_stars_sample,
    create_subnet_triangles_sample, create_double_chain_sample, create_star_decagram_sample
)

__all__ = [
    # 注册表
    'NodeRegistry',

    # 规则策略
    'RuleStrategy', 'StrategyFactory', 'complete_bipartite', 'bipartite_degrees', 'pair_degrees',
    'FullMeshStrategy', 'count_full_mesh_edges',
    'ShapeStrategy', 'resolve_shape', 'check_shape_size', 'shape_pairs', 'shape_degrees',
    'calculate_shape_edges', 'list_shapes',
    'CrossLinkStrategy', 'boundary_positions', 'select_boundary', 'calculate_cross_link_edges',
    'LinksStrategy', 'RuleStrategies',

    # 构建与验证
    'TopologyBuilder', 'build_topology',
    'TopologyValidator', 'validate_topology',

    # 示例
    'ExampleName', 'EXAMPLES', 'get_example', 'list_examples',
    'create_tree_sample', 'create_butterfly_sample', 'create_subnet_stars_sample',
    'create_subnet_triangles_sample', 'create_double_chain_sample', 'create_star_decagram_sample',
]

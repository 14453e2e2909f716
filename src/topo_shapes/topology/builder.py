"""
拓扑构建器
把描述中的每条规则展开为带来源标签的链路
"""

from __future__ import annotations

from typing import List

from ..core.models import Link, Topology, TopologyDescription
from ..utils.logging import get_logger
from .registry import NodeRegistry
from .strategies import RuleStrategies

logger = get_logger(__name__)


class TopologyBuilder:
    """拓扑构建器

    构建要么完整成功，要么抛出错误，不会返回部分拓扑
    """

    def __init__(self, description: TopologyDescription):
        self.description = description

    def build(self) -> Topology:
        registry = NodeRegistry.from_description(self.description)

        links: List[Link] = []
        for label, rule in self.description.labelled_rules():
            edges = RuleStrategies.expand(rule, registry, self.description)
            logger.debug("rule_expanded", topology=self.description.name, rule=label, edges=len(edges))
            links.extend(Link(edge=edge, rule=label) for edge in edges)

        topology = Topology(
            description=self.description,
            nodes=registry.all_nodes,
            links=tuple(links),
        )
        logger.info(
            "topology_built",
            topology=topology.name,
            nodes=topology.node_count,
            edges=topology.edge_count,
        )
        return topology


def build_topology(description: TopologyDescription) -> Topology:
    """从描述构建拓扑"""
    return TopologyBuilder(description).build()

"""构建完成的拓扑模型"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple
from pydantic import Field, computed_field

from .base import BaseConfig
from .description import TopologyDescription
from ..types import Edge, GroupName, NodeId
from ...utils.functional import groupby, unique


class Link(BaseConfig):
    """一条边及产生它的规则"""
    edge: Edge = Field(description="无向边")
    rule: str = Field(description="规则标签")


class Topology(BaseConfig):
    """不可变拓扑：节点 + 带来源的边"""
    description: TopologyDescription = Field(description="源描述")
    nodes: Tuple[NodeId, ...] = Field(description="所有节点（注册顺序）")
    links: Tuple[Link, ...] = Field(default=(), description="所有链路（规则展开顺序）")

    @property
    def name(self) -> str:
        return self.description.name

    @property
    def edges(self) -> List[Edge]:
        """去重后的边（保持首次出现顺序）"""
        return unique(link.edge for link in self.links)

    @computed_field
    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @computed_field
    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def degrees(self) -> Dict[NodeId, int]:
        """每个节点的度（基于去重后的边，孤立节点为 0）"""
        result = {node: 0 for node in self.nodes}
        for edge in self.edges:
            for end in (edge.a, edge.b):
                result[end] = result.get(end, 0) + 1
        return result

    def degree(self, node: NodeId) -> int:
        return self.degrees().get(node, 0)

    def neighbors(self, node: NodeId) -> List[NodeId]:
        return sorted(edge.other(node) for edge in self.edges if edge.touches(node))

    def adjacency(self) -> Dict[NodeId, List[NodeId]]:
        """邻接表，键按注册顺序"""
        result: Dict[NodeId, List[NodeId]] = {node: [] for node in self.nodes}
        for edge in self.edges:
            result.setdefault(edge.a, []).append(edge.b)
            result.setdefault(edge.b, []).append(edge.a)
        return {node: sorted(peers) for node, peers in result.items()}

    def group_nodes(self, group: GroupName) -> List[NodeId]:
        return [n for n in self.nodes if n.group == group and type(n.group) is type(group)]

    def rules_for(self, edge: Edge) -> List[str]:
        """产生某条边的全部规则标签"""
        return [link.rule for link in self.links if link.edge == edge]

    def links_by_rule(self) -> Dict[str, List[Edge]]:
        grouped = groupby(lambda link: link.rule, self.links)
        return {rule: [link.edge for link in links] for rule, links in grouped.items()}

    def without_node(self, node: NodeId) -> Topology:
        """返回移除一个节点及其链路后的新拓扑（原拓扑不变）"""
        if node not in self.nodes:
            raise ValueError(f"节点 {node} 不在拓扑中")
        return Topology(
            description=self.description,
            nodes=tuple(n for n in self.nodes if n != node),
            links=tuple(link for link in self.links if not link.edge.touches(node)),
        )

    def to_summary(self) -> Dict[str, Any]:
        """可序列化的精简表示：节点标签 + 边 + 规则来源"""
        return {
            "name": self.name,
            "summary": self.description.summary,
            "groups": [
                {"name": g.name, "kind": g.kind, "count": g.count, "shape": g.shape, "boundary": list(g.boundary)}
                for g in self.description.groups
            ],
            "nodes": [node.label for node in self.nodes],
            "edges": [
                {"a": link.edge.endpoints[0].label, "b": link.edge.endpoints[1].label, "rule": link.rule}
                for link in self.links
            ],
            "stats": {"nodes": self.node_count, "edges": self.edge_count},
        }

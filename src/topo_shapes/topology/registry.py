"""
节点注册表
为每个分组分配稳定的节点标识，保持输入顺序
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from ..core.errors import DuplicateGroupError, InsufficientNodesError, UnknownGroupError
from ..core.models import TopologyDescription
from ..core.types import GroupName, NodeId


def _group_key(group: GroupName) -> Tuple[type, GroupName]:
    # 层 1 与子网 "1" 是不同的分组
    return (type(group), group)


class NodeRegistry:
    """按分组划分的节点标识注册表"""

    def __init__(self, groups: Iterable[Tuple[GroupName, int]]):
        self._groups: Dict[Tuple[type, GroupName], Tuple[NodeId, ...]] = {}
        self._order: List[GroupName] = []
        self._index: Dict[NodeId, int] = {}

        for group, count in groups:
            key = _group_key(group)
            if key in self._groups:
                raise DuplicateGroupError(group)
            if count < 0:
                raise ValueError(f"分组 {group!r} 的节点数不能为负数: {count}")
            nodes = tuple(NodeId(group=group, position=p) for p in range(count))
            self._groups[key] = nodes
            self._order.append(group)
            for node in nodes:
                self._index[node] = len(self._index)

    @classmethod
    def from_description(cls, description: TopologyDescription) -> NodeRegistry:
        return cls((spec.name, spec.count) for spec in description.groups)

    @property
    def group_names(self) -> List[GroupName]:
        return list(self._order)

    @property
    def groups(self) -> Dict[GroupName, Tuple[NodeId, ...]]:
        """分组到节点的映射（保持输入顺序）"""
        return {group: self._groups[_group_key(group)] for group in self._order}

    @property
    def all_nodes(self) -> Tuple[NodeId, ...]:
        return tuple(self._index)

    def has_group(self, group: GroupName) -> bool:
        return _group_key(group) in self._groups

    def nodes(self, group: GroupName) -> Tuple[NodeId, ...]:
        """获取分组的所有节点"""
        try:
            return self._groups[_group_key(group)]
        except KeyError:
            raise UnknownGroupError(group) from None

    def node(self, group: GroupName, position: int) -> NodeId:
        """获取分组中指定位置的节点"""
        nodes = self.nodes(group)
        if not 0 <= position < len(nodes):
            raise InsufficientNodesError(
                group, required=position + 1, available=len(nodes),
                reason=f"位置 {position} 超出范围 (共 {len(nodes)} 个节点)",
            )
        return nodes[position]

    def resolve(self, node: NodeId) -> NodeId:
        """确认节点已注册"""
        return self.node(node.group, node.position)

    def index_of(self, node: NodeId) -> int:
        """节点的稳定整数编号（输入顺序）"""
        try:
            return self._index[node]
        except KeyError:
            raise KeyError(f"未注册的节点: {node}") from None

    def size(self, group: GroupName) -> int:
        return len(self.nodes(group))

    def __contains__(self, node: object) -> bool:
        return node in self._index

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{g!r}:{len(self._groups[_group_key(g)])}" for g in self._order)
        return f"NodeRegistry({sizes})"

"""拓扑描述模型"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
from pydantic import Field, computed_field

from .base import BaseConfig
from .groups import GroupSpec
from .rules import FullMeshRule, Rule, ShapeRule
from ..types import GroupKind, GroupName


class TopologyDescription(BaseConfig):
    """声明式拓扑描述：分组 + 连接规则"""
    name: str = Field(min_length=1, max_length=64, pattern=r'^[a-zA-Z0-9_.-]+$', description="拓扑名称")
    summary: str = Field(default="", description="简要说明")
    groups: List[GroupSpec] = Field(min_length=1, description="分组列表（保持声明顺序）")
    rules: List[Rule] = Field(default_factory=list, description="连接规则")
    allow_partition: bool = Field(default=False, description="是否允许图不连通")

    def group(self, name: GroupName) -> Optional[GroupSpec]:
        """按名称查找分组（重复分组由注册表报告）"""
        for spec in self.groups:
            if spec.name == name and type(spec.name) is type(name):
                return spec
        return None

    @property
    def layer_names(self) -> List[GroupName]:
        """按声明顺序排列的层"""
        return [g.name for g in self.groups if g.kind == GroupKind.LAYER]

    def labelled_rules(self) -> List[Tuple[str, Rule]]:
        """展开后的规则列表：分组自带的形状规则在前，显式规则在后"""
        labelled: List[Tuple[str, Rule]] = []
        for spec in self.groups:
            if spec.shape:
                labelled.append((f"shape:{spec.name}", ShapeRule(group=spec.name, shape=spec.shape)))
        for index, rule in enumerate(self.rules):
            labelled.append((f"{index}:{rule.kind}", rule))
        return labelled

    @computed_field
    @property
    def total_nodes(self) -> int:
        return sum(g.count for g in self.groups)

    @classmethod
    def layered(
        cls,
        name: str,
        counts: Sequence[int],
        summary: str = "",
        extra_rules: Sequence[Rule] = (),
    ) -> TopologyDescription:
        """创建分层拓扑：层序号 0..n-1，相邻层全互联"""
        return cls(
            name=name,
            summary=summary,
            groups=[GroupSpec(name=i, count=c, kind=GroupKind.LAYER) for i, c in enumerate(counts)],
            rules=[FullMeshRule(), *extra_rules],
        )

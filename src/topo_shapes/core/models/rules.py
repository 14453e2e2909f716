"""连接规则模型"""
from __future__ import annotations

from typing import List, Literal, Optional, Tuple, Union, Annotated
from pydantic import Field, field_validator

from .base import BaseConfig
from ..types import CrossLinkPattern, GroupName, NodeId


def _validate_distinct_pair(pair: Optional[Tuple[GroupName, GroupName]]):
    if pair is not None and pair[0] == pair[1]:
        raise ValueError(f"规则的两个分组不能相同: {pair[0]!r}")
    return pair


class FullMeshRule(BaseConfig):
    """全互联规则：between 为空时连接所有相邻层"""
    kind: Literal["full_mesh"] = "full_mesh"
    between: Optional[Tuple[GroupName, GroupName]] = Field(default=None, description="指定的两个分组")

    @field_validator('between')
    @classmethod
    def validate_between(cls, v):
        return _validate_distinct_pair(v)

    @property
    def groups(self) -> List[GroupName]:
        return list(self.between) if self.between else []


class ShapeRule(BaseConfig):
    """形状规则：按形状连接分组内部节点"""
    kind: Literal["shape"] = "shape"
    group: GroupName = Field(description="目标分组")
    shape: str = Field(min_length=1, description="形状名称，构建时解析")
    step: int = Field(default=1, ge=1, description="环形步长")

    @field_validator('shape')
    @classmethod
    def normalize_shape(cls, v: str) -> str:
        return v.lower()

    @property
    def groups(self) -> List[GroupName]:
        return [self.group]


class CrossLinkRule(BaseConfig):
    """跨子网规则：用两侧的边界节点互联"""
    kind: Literal["cross_link"] = "cross_link"
    between: Tuple[GroupName, GroupName] = Field(description="两个子网")
    count: int = Field(ge=1, description="每侧选取的边界节点数")
    pattern: CrossLinkPattern = Field(default=CrossLinkPattern.COMPLETE, description="连接模式")
    offsets: Tuple[Annotated[int, Field(ge=0)], Annotated[int, Field(ge=0)]] = Field(
        default=(0, 0), description="两侧边界列表中的起始偏移"
    )

    @field_validator('between')
    @classmethod
    def validate_between(cls, v):
        return _validate_distinct_pair(v)

    @property
    def groups(self) -> List[GroupName]:
        return list(self.between)


class LinksRule(BaseConfig):
    """显式链路规则（用于导入的邻接配置）"""
    kind: Literal["links"] = "links"
    links: List[Tuple[NodeId, NodeId]] = Field(min_length=1, description="节点对")

    @property
    def groups(self) -> List[GroupName]:
        seen: List[GroupName] = []
        for pair in self.links:
            for node in pair:
                if node.group not in seen:
                    seen.append(node.group)
        return seen


Rule = Annotated[
    Union[FullMeshRule, ShapeRule, CrossLinkRule, LinksRule],
    Field(discriminator="kind"),
]

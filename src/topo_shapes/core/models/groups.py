"""节点分组配置（层 / 子网）"""
from __future__ import annotations

from typing import Any, List, Optional
from pydantic import Field, field_validator, model_validator

from .base import BaseConfig
from ..types import LAYER_LABEL, GroupKind, GroupName, Position


class GroupSpec(BaseConfig):
    """一个层或子网的声明"""
    name: GroupName = Field(description="层序号或子网名称")
    count: int = Field(ge=1, le=1000, description="节点数")
    kind: GroupKind = Field(description="分组类型")
    shape: Optional[str] = Field(default=None, description="子网内部形状（隐式形状规则）")
    boundary: List[Position] = Field(default_factory=list, description="边界节点位置")

    @model_validator(mode='before')
    @classmethod
    def infer_kind(cls, data: Any) -> Any:
        """未指定 kind 时：整数名为层，字符串名为子网"""
        if isinstance(data, dict) and data.get('kind') is None:
            data = dict(data)
            data['kind'] = GroupKind.LAYER if isinstance(data.get('name'), int) else GroupKind.SUBNET
        return data

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: GroupName) -> GroupName:
        if isinstance(v, bool):
            raise ValueError("分组名不能是布尔值")
        if isinstance(v, int) and v < 0:
            raise ValueError(f"层序号不能为负数: {v}")
        if isinstance(v, str) and ('.' in v or not v or v.isdigit()):
            raise ValueError(f"无效的子网名称: {v!r}")
        if isinstance(v, str) and LAYER_LABEL.match(v):
            raise ValueError(f"子网名称 {v!r} 与层标签冲突，层请直接使用整数序号")
        return v

    @field_validator('shape')
    @classmethod
    def normalize_shape(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else None

    @model_validator(mode='after')
    def validate_boundary(self) -> GroupSpec:
        """边界节点必须在组内且不重复"""
        outside = [p for p in self.boundary if p >= self.count]
        if outside:
            raise ValueError(f"分组 {self.name!r} 的边界位置超出范围: {outside} (节点数 {self.count})")
        if len(set(self.boundary)) != len(self.boundary):
            raise ValueError(f"分组 {self.name!r} 的边界位置重复: {self.boundary}")
        return self

    @property
    def is_layer(self) -> bool:
        return self.kind == GroupKind.LAYER

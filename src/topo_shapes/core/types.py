"""
核心类型定义模块
使用 Pydantic v2 提供类型安全、验证和序列化功能
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple, Union, Annotated
from enum import Enum
from pydantic import (
    BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
)

# 基础 Pydantic 配置
class BaseTypeModel(BaseModel):
    """基础类型模型配置"""
    model_config = ConfigDict(
        frozen=True,  # 不可变
        extra='forbid',  # 禁止额外字段
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )

# 分组名：层序号（int）或子网名称（str）
GroupName = Union[int, str]
# 层在标签中写作 L<序号>
LAYER_LABEL = re.compile(r'^L(\d+)$')
SubnetName = Annotated[str, Field(min_length=1, max_length=64, pattern=r'^[a-zA-Z0-9_-]+$')]
Position = Annotated[int, Field(ge=0, le=9999, description="组内位置")]


# 分组类型
class GroupKind(str, Enum):
    """节点分组类型"""
    LAYER = "layer"
    SUBNET = "subnet"


# 子网内部形状
class ShapeType(str, Enum):
    """子网内部形状枚举"""
    TRIANGLE = "triangle"
    STAR = "star"
    SQUARE = "square"
    LINE = "line"
    RING = "ring"
    COMPLETE = "complete"

    @property
    def exact_nodes(self) -> Optional[int]:
        """固定节点数的形状返回其节点数，否则返回 None"""
        exact = {
            ShapeType.TRIANGLE: 3,
            ShapeType.SQUARE: 4,
        }
        return exact.get(self)

    @property
    def min_nodes(self) -> int:
        """形状所需的最少节点数"""
        minimum = {
            ShapeType.TRIANGLE: 3,
            ShapeType.STAR: 2,
            ShapeType.SQUARE: 4,
            ShapeType.LINE: 2,
            ShapeType.RING: 3,
            ShapeType.COMPLETE: 2,
        }
        return minimum[self]

    @property
    def description(self) -> str:
        descriptions = {
            ShapeType.TRIANGLE: "三角形 - 3个节点两两相连",
            ShapeType.STAR: "星形 - 中心节点连接所有辐条",
            ShapeType.SQUARE: "方形 - 4节点环",
            ShapeType.LINE: "链形 - 首尾不相连的路径",
            ShapeType.RING: "环形 - 可指定步长的循环连接",
            ShapeType.COMPLETE: "全连接 - 任意两节点相连",
        }
        return descriptions[self]


# 规则类型
class RuleKind(str, Enum):
    """连接规则类型"""
    FULL_MESH = "full_mesh"
    SHAPE = "shape"
    CROSS_LINK = "cross_link"
    LINKS = "links"


class CrossLinkPattern(str, Enum):
    """跨子网连接模式"""
    COMPLETE = "complete"  # 选中的边界节点两两互联
    PAIRWISE = "pairwise"  # 第 i 个对第 i 个


class InvariantKind(str, Enum):
    """验证不变量类型"""
    DUPLICATE_EDGE = "duplicate_edge"
    SELF_LOOP = "self_loop"
    UNKNOWN_NODE = "unknown_node"
    DEGREE_MISMATCH = "degree_mismatch"
    DISCONNECTED = "disconnected"


class OutputFormat(str, Enum):
    """输出文件格式"""
    YAML = "yaml"
    JSON = "json"

    @property
    def suffix(self) -> str:
        return ".yaml" if self is OutputFormat.YAML else ".json"


# 节点标识 - 使用 Pydantic 模型，支持位置参数
class NodeId(BaseTypeModel):
    """不可变节点标识：分组 + 组内位置"""
    group: GroupName = Field(description="所属层序号或子网名称")
    position: Position

    def __init__(self, *args, **kwargs):
        """支持位置参数和关键字参数的构造函数

        支持的调用方式：
        - NodeId("alpha", 0)
        - NodeId(group="alpha", position=0)
        """
        if len(args) == 2 and not kwargs:
            super().__init__(group=args[0], position=args[1])
        elif len(args) == 0:
            super().__init__(**kwargs)
        else:
            raise TypeError(f"NodeId() takes 0 or 2 positional arguments but {len(args)} were given")

    @model_validator(mode='before')
    @classmethod
    def parse_compact_forms(cls, data: Any) -> Any:
        """接受 "alpha.0" / "L1.0" 字符串和 [group, position] 列表"""
        if isinstance(data, str):
            group, sep, position = data.rpartition('.')
            if not sep or not position.isdigit():
                raise ValueError(f"无效的节点标识: {data!r}，应为 <group>.<position>")
            return {'group': int(group) if group.isdigit() else group, 'position': int(position)}
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"节点标识需要2个元素: {data!r}")
            return {'group': data[0], 'position': data[1]}
        return data

    @field_validator('group')
    @classmethod
    def validate_group(cls, v: GroupName) -> GroupName:
        if isinstance(v, bool):
            raise ValueError("分组名不能是布尔值")
        if isinstance(v, str):
            layer = LAYER_LABEL.match(v)
            if layer:
                v = int(layer.group(1))
        if isinstance(v, int) and v < 0:
            raise ValueError(f"层序号不能为负数: {v}")
        if isinstance(v, str) and not v:
            raise ValueError("子网名称不能为空")
        return v

    @property
    def sort_key(self) -> Tuple[int, Any, int]:
        """排序键：层在前（按序号），子网在后（按名称）"""
        if isinstance(self.group, int):
            return (0, self.group, self.position)
        return (1, self.group, self.position)

    @property
    def label(self) -> str:
        if isinstance(self.group, int):
            return f"L{self.group}.{self.position}"
        return f"{self.group}.{self.position}"

    def __str__(self) -> str:
        return self.label

    def __hash__(self) -> int:
        return hash((self.group, self.position))

    def __lt__(self, other: 'NodeId') -> bool:
        return self.sort_key < other.sort_key


# 边 - 无向，不允许自环
class Edge(BaseTypeModel):
    """无向边：两个不同节点组成的无序对"""
    a: NodeId = Field(description="端点A")
    b: NodeId = Field(description="端点B")

    def __init__(self, *args, **kwargs):
        if len(args) == 2 and not kwargs:
            super().__init__(a=args[0], b=args[1])
        elif len(args) == 0:
            super().__init__(**kwargs)
        else:
            raise TypeError(f"Edge() takes 0 or 2 positional arguments but {len(args)} were given")

    @model_validator(mode='before')
    @classmethod
    def parse_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)) and len(data) == 2:
            return {'a': data[0], 'b': data[1]}
        return data

    @field_validator('b')
    @classmethod
    def validate_not_self_loop(cls, v: NodeId, info) -> NodeId:
        """验证两个端点不同"""
        if 'a' in info.data and info.data['a'] == v:
            raise ValueError(f"边的两个端点不能相同: {v}")
        return v

    @classmethod
    def between(cls, x: NodeId, y: NodeId) -> 'Edge':
        """按规范顺序创建边"""
        if y < x:
            x, y = y, x
        return cls(a=x, b=y)

    @property
    def key(self) -> Tuple[Tuple[int, Any, int], Tuple[int, Any, int]]:
        """与端点顺序无关的键"""
        return tuple(sorted((self.a.sort_key, self.b.sort_key)))  # type: ignore[return-value]

    @property
    def endpoints(self) -> Tuple[NodeId, NodeId]:
        return (self.a, self.b) if self.a.sort_key <= self.b.sort_key else (self.b, self.a)

    @property
    def is_self_loop(self) -> bool:
        return self.a == self.b

    def other(self, node: NodeId) -> NodeId:
        """获取边另一端的节点"""
        if node == self.a:
            return self.b
        elif node == self.b:
            return self.a
        raise ValueError(f"节点 {node} 不在此边上")

    def touches(self, node: NodeId) -> bool:
        return node == self.a or node == self.b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        first, second = self.endpoints
        return f"{first}--{second}"


# 结果类型 - 使用 Pydantic 模型，支持位置参数
class Success(BaseTypeModel):
    """成功结果"""
    value: Any = Field(description="成功返回的值")
    message: Optional[str] = Field(default=None, description="成功消息")

    def __init__(self, *args, **kwargs):
        if len(args) == 1 and not kwargs:
            super().__init__(value=args[0])
        elif len(args) == 2 and not kwargs:
            super().__init__(value=args[0], message=args[1])
        elif len(args) == 0:
            super().__init__(**kwargs)
        else:
            raise TypeError(f"Invalid arguments for Success: args={args}, kwargs={kwargs}")

    @computed_field
    @property
    def is_success(self) -> bool:
        return True


class Failure(BaseTypeModel):
    """失败结果"""
    error: str = Field(description="错误信息")
    error_code: Optional[str] = Field(default=None, description="错误代码")
    details: Optional[Dict[str, Any]] = Field(default=None, description="错误详情")

    def __init__(self, *args, **kwargs):
        if len(args) == 1 and not kwargs:
            super().__init__(error=args[0])
        elif len(args) == 2 and not kwargs:
            super().__init__(error=args[0], error_code=args[1])
        elif len(args) == 0:
            super().__init__(**kwargs)
        else:
            raise TypeError(f"Invalid arguments for Failure: args={args}, kwargs={kwargs}")

    @computed_field
    @property
    def is_success(self) -> bool:
        return False


Result = Union[Success, Failure]


# 违反的不变量
class Violation(BaseTypeModel):
    """单条验证违规"""
    invariant: InvariantKind = Field(description="违反的不变量")
    message: str = Field(description="说明")
    nodes: Tuple[NodeId, ...] = Field(default=(), description="相关节点")

    def __str__(self) -> str:
        return f"[{self.invariant}] {self.message}"


# 验证报告
class ValidationReport(BaseTypeModel):
    """验证报告：通过/失败 + 违规列表"""
    valid: bool = Field(description="是否验证通过")
    violations: List[Violation] = Field(default_factory=list, description="违规列表")
    warnings: List[str] = Field(default_factory=list, description="警告列表")

    @computed_field
    @property
    def violation_count(self) -> int:
        return len(self.violations)

    @computed_field
    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def errors(self) -> List[str]:
        """违规的文字描述"""
        return [str(v) for v in self.violations]

    def invariants(self) -> set[str]:
        """所有被违反的不变量名称"""
        return {str(v.invariant) for v in self.violations}

    @classmethod
    def create_valid(cls, warnings: Optional[List[str]] = None) -> 'ValidationReport':
        return cls(valid=True, warnings=warnings or [])

    @classmethod
    def create_invalid(
        cls, violations: List[Violation], warnings: Optional[List[str]] = None
    ) -> 'ValidationReport':
        return cls(valid=False, violations=violations, warnings=warnings or [])

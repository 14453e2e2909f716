"""拓扑构建与验证的错误类型"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .types import ValidationReport


class TopologyError(Exception):
    """所有拓扑错误的基类"""


class DescriptionError(TopologyError, ValueError):
    """描述文件或描述模型格式错误"""


class DuplicateGroupError(TopologyError):
    """同一分组名/层序号出现了两次"""

    def __init__(self, group: Any):
        self.group = group
        super().__init__(f"重复的分组: {group!r}")


class UnknownShapeError(TopologyError):
    """规则引用了未知的形状"""

    def __init__(self, shape: str, group: Any = None):
        self.shape = shape
        self.group = group
        where = f" (分组 {group!r})" if group is not None else ""
        super().__init__(f"未知的形状: {shape!r}{where}")


class InsufficientNodesError(TopologyError):
    """分组无法支持规则所需的节点数"""

    def __init__(
        self,
        group: Any,
        required: Optional[int] = None,
        available: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.group = group
        self.required = required
        self.available = available
        if reason is None:
            reason = f"需要 {required} 个节点，实际 {available} 个"
        super().__init__(f"分组 {group!r} 节点不足: {reason}")


class UnknownGroupError(InsufficientNodesError):
    """规则引用了不存在的分组（视为 0 个节点）"""

    def __init__(self, group: Any):
        super().__init__(group, available=0, reason="分组不存在")


class ValidationFailure(TopologyError):
    """拓扑未通过验证，携带具体违反的不变量"""

    def __init__(self, report: ValidationReport):
        self.report = report
        self.violations = list(report.violations)
        summary = "; ".join(str(v) for v in self.violations) or "未知原因"
        super().__init__(f"拓扑验证失败: {summary}")

    @property
    def invariants(self) -> set[str]:
        return self.report.invariants()

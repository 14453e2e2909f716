"""构建结果模块"""
from __future__ import annotations

from typing import Optional, Dict, Any, List
from pathlib import Path
from pydantic import Field

from .base import BaseConfig


class BuildResult(BaseConfig):
    """构建结果，支持位置参数和关键字参数"""
    name: str = Field(default="", description="拓扑名称")
    success: bool = Field(description="是否成功")
    message: str = Field(description="结果消息")
    output_dir: Optional[Path] = Field(default=None, description="输出目录")
    error_details: Optional[str] = Field(default=None, description="错误详情")
    stats: Optional[Dict[str, Any]] = Field(default=None, description="统计信息")
    errors: Optional[List[str]] = Field(default=None, description="错误列表")

    def __init__(self, *args, **kwargs):
        """支持的调用方式：

        - BuildResult(success, message)
        - BuildResult(success, message, output_dir)
        - BuildResult(success=success, message=message)
        """
        if len(args) == 2 and not kwargs:
            super().__init__(success=args[0], message=args[1])
        elif len(args) == 3 and not kwargs:
            super().__init__(success=args[0], message=args[1], output_dir=args[2])
        elif len(args) == 0:
            super().__init__(**kwargs)
        else:
            raise TypeError(f"Invalid arguments for BuildResult: args={args}, kwargs={kwargs}")

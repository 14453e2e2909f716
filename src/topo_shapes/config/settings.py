from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import (
    MAX_WORKERS_DEFAULT,
    MAX_WORKERS_LIMIT,
    OUTPUT_DEFAULT_DIR,
    OUTPUT_DEFAULT_FORMAT,
    WRITE_ADJACENCY_DEFAULT,
    WRITE_REPORT_DEFAULT,
)
from ..core.types import OutputFormat


class AppSettings(BaseSettings):
    """全局应用设置（可由环境变量/配置文件覆盖）"""

    model_config = SettingsConfigDict(
        env_prefix="TOPO_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # 全局
    verbose: bool = Field(default=False, description="详细日志输出")
    log_json: bool = Field(default=False, description="以 JSON 行输出日志")
    dry_run: bool = Field(default=False, description="仅构建验证，不写文件")
    output_dir: Path = Field(default=OUTPUT_DEFAULT_DIR, description="输出目录")

    # 输出
    output_format: OutputFormat = Field(default=OUTPUT_DEFAULT_FORMAT, description="拓扑文件格式")
    write_report: bool = Field(default=WRITE_REPORT_DEFAULT, description="写出 Markdown 验证报告")
    write_adjacency: bool = Field(default=WRITE_ADJACENCY_DEFAULT, description="写出邻接表网络配置")

    # 并行构建
    max_workers: int = Field(default=MAX_WORKERS_DEFAULT, ge=1, le=MAX_WORKERS_LIMIT, description="并行构建线程数")

    # 输入（from-config 使用，二选一）
    description_file: Optional[Path] = Field(default=None, description="拓扑描述文件")
    example: Optional[str] = Field(default=None, description="内置示例名称")

    # 配置文件（若 CLI 未提供，可通过环境变量指向）
    config_file: Optional[Path] = Field(default=None, description="配置文件路径，可选")

    @classmethod
    def from_file(cls, path: Path) -> AppSettings:
        """从 YAML/JSON 配置文件加载（JSON 是 YAML 的子集）"""
        try:
            data: Dict[str, Any] = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"配置文件解析失败: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"配置文件顶层必须是映射: {path}")
        data.setdefault("config_file", Path(path))
        return cls(**data)


__all__ = ["AppSettings"]

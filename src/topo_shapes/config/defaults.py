"""全局默认值"""

from __future__ import annotations

from pathlib import Path

from ..core.types import OutputFormat

# 输出
OUTPUT_DEFAULT_DIR = Path("topologies")
OUTPUT_DEFAULT_FORMAT = OutputFormat.YAML
WRITE_REPORT_DEFAULT = True
WRITE_ADJACENCY_DEFAULT = True

# 并行构建
MAX_WORKERS_DEFAULT = 4
MAX_WORKERS_LIMIT = 64

# 示例
EXAMPLE_DEFAULT = "tree"

"""
结构化日志
控制台默认彩色输出，批量构建时可切换为 JSON 行，便于按拓扑名称过滤
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List

import structlog


def _processors(json_logs: bool) -> List[Any]:
    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """初始化结构化日志（verbose 时输出构建细节事件）"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")

    structlog.configure(
        processors=_processors(json_logs),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def topology_context(name: str, **extra: Any) -> Iterator[None]:
    """在当前上下文中为所有日志事件附加拓扑名称

    并行构建时每个任务拥有独立的上下文，互不覆盖
    """
    with structlog.contextvars.bound_contextvars(topology=name, **extra):
        yield


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name) if name else structlog.get_logger()

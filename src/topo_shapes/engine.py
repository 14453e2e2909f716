"""
拓扑构建引擎
使用 anyio 在工作线程中构建拓扑，异步写出结果文件
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import anyio

from .config.settings import AppSettings
from .core.errors import TopologyError
from .core.models import BuildResult, Topology, TopologyDescription
from .core.types import Failure, ValidationReport
from .filesystem import FileSystemManager
from .generators.renderer import render_report
from .topology.builder import TopologyBuilder
from .topology.validator import TopologyValidator
from .utils.logging import get_logger, topology_context

logger = get_logger(__name__)


class TopologyEngine:
    """拓扑构建引擎"""

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or AppSettings()
        self.validator = TopologyValidator()

    def build(self, description: TopologyDescription) -> Tuple[Topology, ValidationReport]:
        """同步构建并验证"""
        topology = TopologyBuilder(description).build()
        report = self.validator.validate(topology)
        return topology, report

    async def run(
        self,
        description: TopologyDescription,
        output_dir: Optional[Path] = None,
        limiter: Optional[anyio.CapacityLimiter] = None,
    ) -> BuildResult:
        """构建、验证并写出结果文件

        描述错误转换为失败的 BuildResult，不向外抛出
        """
        with topology_context(description.name):
            return await self._run(description, output_dir, limiter)

    async def _run(
        self,
        description: TopologyDescription,
        output_dir: Optional[Path],
        limiter: Optional[anyio.CapacityLimiter],
    ) -> BuildResult:
        try:
            topology, report = await anyio.to_thread.run_sync(
                self.build, description, limiter=limiter
            )
        except TopologyError as e:
            logger.error("build_failed", error=str(e))
            return BuildResult(
                name=description.name,
                success=False,
                message=f"构建失败: {e}",
                error_details=f"{type(e).__name__}: {e}",
            )

        stats = {
            "nodes": topology.node_count,
            "edges": topology.edge_count,
            "groups": len(description.groups),
            "violations": report.violation_count,
            "warnings": report.warning_count,
        }

        base_dir: Optional[Path] = None
        if not self.settings.dry_run:
            base_dir = Path(output_dir or self.settings.output_dir)
            write_failure = await self._write_outputs(topology, report, base_dir)
            if write_failure is not None:
                return BuildResult(
                    name=topology.name,
                    success=False,
                    message=f"文件写入失败: {write_failure.error}",
                    output_dir=base_dir,
                    error_details=write_failure.error,
                    stats=stats,
                )

        if not report.valid:
            return BuildResult(
                name=topology.name,
                success=False,
                message=f"拓扑验证失败: {report.violation_count} 项违规",
                output_dir=base_dir,
                stats=stats,
                errors=report.errors,
            )

        return BuildResult(
            name=topology.name,
            success=True,
            message="拓扑构建成功",
            output_dir=base_dir,
            stats=stats,
        )

    async def run_many(
        self,
        descriptions: Sequence[TopologyDescription],
        output_dir: Optional[Path] = None,
    ) -> List[BuildResult]:
        """并行构建多个互不相关的拓扑，结果保持输入顺序"""
        results: List[Optional[BuildResult]] = [None] * len(descriptions)
        limiter = anyio.CapacityLimiter(self.settings.max_workers)

        async def _run_one(index: int, description: TopologyDescription):
            results[index] = await self.run(description, output_dir, limiter=limiter)

        async with anyio.create_task_group() as tg:
            for index, description in enumerate(descriptions):
                tg.start_soon(_run_one, index, description)

        logger.info(
            "batch_finished",
            total=len(descriptions),
            succeeded=sum(1 for r in results if r and r.success),
        )
        return results

    async def _write_outputs(
        self, topology: Topology, report: ValidationReport, base_dir: Path
    ) -> Optional[Failure]:
        fs_manager = FileSystemManager(base_dir)
        output_format = self.settings.output_format

        results = [await fs_manager.create_directory()]
        if isinstance(results[-1], Failure):
            return results[-1]

        results.append(await fs_manager.write_topology(topology, output_format))
        if self.settings.write_adjacency:
            results.append(await fs_manager.write_adjacency(topology, output_format))
        if self.settings.write_report:
            results.append(await fs_manager.write_report(topology.name, render_report(topology, report)))

        for result in results:
            if isinstance(result, Failure):
                logger.error("write_failed", error=result.error)
                return result
        logger.info("outputs_written", output_dir=str(base_dir))
        return None


async def generate_topology(
    description: TopologyDescription,
    settings: Optional[AppSettings] = None,
    output_dir: Optional[Path] = None,
) -> BuildResult:
    """构建拓扑的便利函数"""
    engine = TopologyEngine(settings)
    return await engine.run(description, output_dir)

"""
命令行入口
使用 typer 和 rich 提供拓扑构建、验证与示例浏览
"""

from __future__ import annotations

from typing import List, Optional
from pathlib import Path

import anyio
import typer
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.panel import Panel
from rich.prompt import Confirm

from . import __version__
from .config.defaults import EXAMPLE_DEFAULT
from .config.settings import AppSettings
from .core.errors import TopologyError
from .core.models import BuildResult, Topology, TopologyDescription
from .core.types import OutputFormat, ValidationReport
from .engine import TopologyEngine
from .filesystem import load_description
from .topology.builder import TopologyBuilder
from .topology.catalog import EXAMPLES, ExampleName, get_example
from .topology.validator import TopologyValidator
from .utils.logging import configure_logging, get_logger

# 创建应用和控制台
app = typer.Typer(
    name="topo-shapes",
    help="分层/子网拓扑构建与验证工具",
    add_completion=False,
    rich_markup_mode="rich"
)
console = Console()

logger = get_logger(__name__)

# 全局设置（由回调初始化）
app_settings = AppSettings()


# 回调函数
def version_callback(value: bool):
    """版本回调"""
    if value:
        console.print(f"topo-shapes v{__version__}")
        raise typer.Exit()


# 全局选项
@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="显示版本信息"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="详细输出"),
    dry_run: bool = typer.Option(False, "--dry-run", help="仅构建并验证，不写文件"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="输出目录"),
    config_file: Optional[Path] = typer.Option(
        None, "--config-file", "-c", help="从配置文件加载设置 (YAML/JSON)"
    ),
):
    """分层/子网拓扑构建与验证工具"""
    global app_settings

    # 读取配置文件（若提供），命令行选项优先
    if config_file is not None:
        if not config_file.exists():
            console.print(f"[red]配置文件不存在: {config_file}[/red]")
            raise typer.Exit(1)
        try:
            settings = AppSettings.from_file(config_file)
        except (OSError, ValueError) as e:
            console.print(f"[red]读取配置文件失败: {e}[/red]")
            raise typer.Exit(1)
    else:
        settings = AppSettings()

    overrides = {}
    if verbose:
        overrides["verbose"] = True
    if dry_run:
        overrides["dry_run"] = True
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    app_settings = settings.model_copy(update=overrides)

    # 初始化日志
    configure_logging(app_settings.verbose, app_settings.log_json)
    logger.info("cli_started", verbose=app_settings.verbose, dry_run=app_settings.dry_run)


# 输入解析
def resolve_description(file: Optional[Path], example: Optional[str]) -> TopologyDescription:
    """从文件或内置示例获取描述，二者只能选一"""
    if file is not None and example is not None:
        console.print("[red]--file 与 --example 只能指定一个[/red]")
        raise typer.Exit(1)
    if file is None and example is None:
        console.print("[red]请通过 --file 或 --example 指定拓扑[/red]")
        raise typer.Exit(1)
    try:
        if file is not None:
            return load_description(file)
        return get_example(example)
    except TopologyError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _example_value(example: Optional[ExampleName]) -> Optional[str]:
    return example.value if example is not None else None


# 显示函数
def display_description_info(description: TopologyDescription):
    """显示拓扑描述信息"""
    table = Table(title=f"拓扑描述: {description.name}")
    table.add_column("分组", style="cyan")
    table.add_column("类型", style="magenta")
    table.add_column("节点数", style="green", justify="right")
    table.add_column("形状")
    table.add_column("边界节点")

    for spec in description.groups:
        table.add_row(
            str(spec.name),
            str(spec.kind),
            str(spec.count),
            spec.shape or "-",
            ", ".join(map(str, spec.boundary)) or "-",
        )

    console.print(table)
    logger.info(
        "description_info",
        topology=description.name,
        groups=len(description.groups),
        rules=len(description.rules),
        total_nodes=description.total_nodes,
    )


def display_validation_report(topology: Topology, report: ValidationReport):
    """显示验证报告"""
    status = "[green]通过 ✓[/green]" if report.valid else "[red]失败 ✗[/red]"
    console.print(Panel(
        f"节点数: {topology.node_count}\n边数: {topology.edge_count}\n验证: {status}",
        title=topology.name,
        border_style="green" if report.valid else "red",
    ))

    if report.violations:
        table = Table(title="违规")
        table.add_column("不变量", style="red", no_wrap=True)
        table.add_column("说明")
        for violation in report.violations:
            table.add_row(str(violation.invariant), violation.message)
        console.print(table)

    for warning in report.warnings:
        console.print(f"[yellow]警告: {warning}[/yellow]")


def display_build_result(result: BuildResult):
    if result.success:
        console.print(f"[green]{result.name}: 构建成功 ✓[/green]")
        if result.output_dir:
            console.print(f"输出目录: {result.output_dir}")
        logger.info("build_succeeded", topology=result.name, output_dir=str(result.output_dir))
    else:
        console.print(f"[red]{result.name}: {result.message}[/red]")
        for error in result.errors or []:
            console.print(f"  [red]• {error}[/red]")
        logger.error("build_result_failed", topology=result.name, message=result.message)


def confirm_build(description: TopologyDescription, settings: AppSettings) -> bool:
    """确认构建"""
    if settings.dry_run:
        console.print("[yellow]干运行模式 - 仅构建和验证[/yellow]")
        return True
    return Confirm.ask(
        f"确认构建 {description.total_nodes} 个节点的拓扑 {description.name} 并写入 {settings.output_dir}？"
    )


def _run_with_progress(task_desc: str, description: TopologyDescription, settings: AppSettings):
    engine = TopologyEngine(settings)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        _ = progress.add_task(task_desc, total=None)
        logger.info("build_started", task=task_desc)
        result = anyio.run(engine.run, description)

    display_build_result(result)
    if not result.success:
        raise typer.Exit(1)


def _settings_for_build(
    output_format: Optional[OutputFormat], no_report: bool, no_adjacency: bool
) -> AppSettings:
    overrides = {}
    if output_format is not None:
        overrides["output_format"] = output_format
    if no_report:
        overrides["write_report"] = False
    if no_adjacency:
        overrides["write_adjacency"] = False
    return app_settings.model_copy(update=overrides)


@app.command("build")
def build_command(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="拓扑描述文件 (YAML/JSON/TOML)"),
    example: Optional[ExampleName] = typer.Option(None, "--example", "-e", help="内置示例名称"),
    output_format: Optional[OutputFormat] = typer.Option(None, "--format", help="拓扑文件格式 (yaml/json)"),
    no_report: bool = typer.Option(False, "--no-report", help="不写出验证报告"),
    no_adjacency: bool = typer.Option(False, "--no-adjacency", help="不写出邻接表配置"),
    yes: bool = typer.Option(False, "--yes", "-y", help="跳过确认"),
):
    """构建拓扑并写出结果文件"""
    description = resolve_description(file, _example_value(example))
    settings = _settings_for_build(output_format, no_report, no_adjacency)

    display_description_info(description)
    if not yes and not confirm_build(description, settings):
        console.print("[yellow]已取消[/yellow]")
        raise typer.Exit()

    _run_with_progress(f"构建 {description.name}...", description, settings)


@app.command("validate")
def validate_command(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="拓扑描述文件 (YAML/JSON/TOML)"),
    example: Optional[ExampleName] = typer.Option(None, "--example", "-e", help="内置示例名称"),
):
    """在内存中构建并验证拓扑，不写文件"""
    description = resolve_description(file, _example_value(example))
    try:
        topology = TopologyBuilder(description).build()
    except TopologyError as e:
        console.print(f"[red]构建失败: {e}[/red]")
        raise typer.Exit(1)

    report = TopologyValidator().validate(topology)
    display_validation_report(topology, report)
    if not report.valid:
        raise typer.Exit(1)


@app.command("examples")
def examples_command(
    build: bool = typer.Option(False, "--build", help="并行构建所有示例并写出结果"),
):
    """列出内置示例拓扑"""
    table = Table(title="内置示例")
    table.add_column("名称", style="cyan")
    table.add_column("节点数", style="green", justify="right")
    table.add_column("边数", style="green", justify="right")
    table.add_column("说明")

    descriptions: List[TopologyDescription] = []
    for name in EXAMPLES:
        description = get_example(name)
        topology = TopologyBuilder(description).build()
        descriptions.append(description)
        table.add_row(name, str(topology.node_count), str(topology.edge_count), description.summary)
    console.print(table)

    if not build:
        return

    engine = TopologyEngine(app_settings)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        _ = progress.add_task(f"构建 {len(descriptions)} 个示例...", total=None)
        results = anyio.run(engine.run_many, descriptions)

    for result in results:
        display_build_result(result)
    if not all(result.success for result in results):
        raise typer.Exit(1)


@app.command("from-config")
def build_from_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="跳过确认")
):
    """基于配置文件/环境变量构建拓扑。

    优先级：全局命令行选项 > 配置文件内容 > 环境变量 > 默认值。
    使用 --config-file 指定文件（支持 YAML/JSON），通过 description_file 或 example 指定拓扑。
    """
    example = app_settings.example
    if app_settings.description_file is None and example is None:
        example = EXAMPLE_DEFAULT

    description = resolve_description(app_settings.description_file, example)

    display_description_info(description)
    if not yes and not confirm_build(description, app_settings):
        console.print("[yellow]已取消[/yellow]")
        raise typer.Exit()

    _run_with_progress(f"构建 {description.name}...", description, app_settings)


if __name__ == "__main__":
    app()

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..core.models import Topology
from ..core.types import ValidationReport


def get_templates_dir() -> Path:
    return Path(__file__).parent / "templates"


def create_jinja_env() -> Environment:
    templates_dir = get_templates_dir()
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return env


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    env = create_jinja_env()
    template = env.get_template(template_name)
    return template.render(**context)


def build_report_context(topology: Topology, report: ValidationReport) -> Dict[str, Any]:
    """报告模板上下文"""
    degrees = topology.degrees()
    return {
        "name": topology.name,
        "summary": topology.description.summary,
        "groups": [
            {
                "name": spec.name,
                "kind": spec.kind,
                "count": spec.count,
                "shape": spec.shape or "-",
                "boundary": ", ".join(map(str, spec.boundary)) or "-",
            }
            for spec in topology.description.groups
        ],
        "rules": [
            {"label": rule, "edges": len(edges)}
            for rule, edges in topology.links_by_rule().items()
        ],
        "node_count": topology.node_count,
        "edge_count": topology.edge_count,
        "degrees": [{"node": node.label, "degree": degrees[node]} for node in topology.nodes],
        "report": report,
    }


def render_report(topology: Topology, report: ValidationReport) -> str:
    """渲染 Markdown 验证报告"""
    return render_template("report.md.j2", build_report_context(topology, report))

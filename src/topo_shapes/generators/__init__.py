"""
生成器模块初始化
导出报告渲染函数
"""

from .renderer import (
    get_templates_dir, create_jinja_env, render_template,
    build_report_context, render_report
)

__all__ = [
    'get_templates_dir', 'create_jinja_env', 'render_template',
    'build_report_context', 'render_report'
]

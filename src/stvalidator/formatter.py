from pathlib import Path
from typing import Optional

import yaml
from jinja2 import Environment

from .models import ValidationReport

DEFAULT_TEMPLATES = Path(__file__).resolve().parent / "templates" / "report_templates.yaml"

SAFETY_LABELS = (
    ("emergency_stop", "Emergency stop"),
    ("safety_interlocks", "Safety interlocks"),
    ("fail_safe_mechanisms", "Fail-safe mechanisms"),
    ("watchdog_timer", "Watchdog timer"),
    ("input_validation", "Input validation"),
)

COMPLIANCE_LABELS = (
    ("variable_declaration_present", "Variable declaration"),
    ("standard_data_type_used", "Standard data types"),
    ("block_structure_compliant", "Block structure"),
    ("naming_convention_followed", "Naming convention"),
)


def st_safe(text: str) -> str:
    """写进 (* ... *) 注释块的文本不能提前闭合注释"""
    return str(text).replace("*)", "* )").replace("(*", "( *")


class ReportFormatter:
    """把 ValidationReport 渲染成控制台文本 / 导出用的 ST 注释头"""

    def __init__(self, templates_path: Optional[str] = None):
        self.templates_path = Path(templates_path) if templates_path else DEFAULT_TEMPLATES
        self.env = Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
        self.env.filters["st_safe"] = st_safe
        self.load_templates()

    def load_templates(self):
        """加载或重载模板文件"""
        with open(self.templates_path, 'r', encoding='utf-8') as f:
            self.data = yaml.safe_load(f)

    def render(self, key: str, **kwargs) -> str:
        template_str = self.data.get(key, "")
        if not template_str:
            raise KeyError(f"Template '{key}' not found in {self.templates_path}")
        return self.env.from_string(template_str).render(**kwargs)

    def render_summary(self, report: ValidationReport) -> str:
        return self.render("summary_template", report=report)

    def render_text(self, report: ValidationReport, source: Optional[str] = None,
                    title: str = "ST Code Validation Report") -> str:
        return self.render(
            "text_template",
            report=report,
            source=source,
            title=title,
            summary=self.render_summary(report),
            groups=[("Errors", report.errors), ("Warnings", report.warnings), ("Suggestions", report.suggestions)],
            safety=[(label, getattr(report.safety, name)) for name, label in SAFETY_LABELS],
            compliance=[(label, getattr(report.compliance, name)) for name, label in COMPLIANCE_LABELS],
        )

    def render_st_header(self, report: ValidationReport, code: Optional[str] = None) -> str:
        """导出代码时放在文件头部的校验状态注释"""
        stats = None
        if code is not None:
            stats = {"lines": len(code.split('\n')), "characters": len(code)}
        return self.render("st_header_template", report=report, stats=stats)

"""
规则引擎：声明式的规则表。

增删一个安全关键字族或文档级建议只需要改下面的表，不需要动控制流。
"""
import re
from dataclasses import dataclass, replace
from typing import Callable, List, Tuple

from .constants import BLOCK_COMMENT_OPEN, LINE_COMMENT
from .models import Category, Diagnostic, SafetyAudit, Severity
from .scanner import ScanState, SourceLine, StepResult


@dataclass(frozen=True)
class SafetyRule:
    flag: str
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


@dataclass(frozen=True)
class DocumentFacts:
    """文档级规则需要的事实，扫描结束后一次性计算"""
    code: str
    total_lines: int
    safety: SafetyAudit
    long_program_lines: int


@dataclass(frozen=True)
class DocumentRule:
    category: Category
    severity: Severity
    predicate: Callable[[DocumentFacts], bool]
    message: str


SAFETY_RULES: Tuple[SafetyRule, ...] = (
    SafetyRule("emergency_stop", re.compile(r"(emergency|e_stop|estop|safety)", re.I)),
    SafetyRule("safety_interlocks", re.compile(r"(interlock|safety_gate|light_curtain|safety_door)", re.I)),
    SafetyRule("fail_safe_mechanisms", re.compile(r"(fail_safe|watchdog|timeout|safety_time)", re.I)),
    SafetyRule("watchdog_timer", re.compile(r"(watchdog|wdt|timer.*reset)", re.I)),
    SafetyRule("input_validation", re.compile(r"(input.*valid|range.*check|limit.*check)", re.I)),
)


DOCUMENT_RULES: Tuple[DocumentRule, ...] = (
    DocumentRule(
        Category.STYLE, Severity.LOW,
        lambda facts: BLOCK_COMMENT_OPEN not in facts.code and LINE_COMMENT not in facts.code,
        "Add comments using (* *) or // for better code documentation",
    ),
    DocumentRule(
        Category.SAFETY, Severity.MEDIUM,
        lambda facts: not facts.safety.emergency_stop,
        "Consider implementing emergency stop logic for safety compliance",
    ),
    DocumentRule(
        Category.STYLE, Severity.LOW,
        lambda facts: facts.total_lines > facts.long_program_lines,
        "Consider breaking large programs into smaller function blocks",
    ),
)


def apply_safety_rules(state: ScanState, line: SourceLine, rules: Tuple[SafetyRule, ...] = SAFETY_RULES) -> StepResult:
    """逐行匹配安全特征；标志一旦置位不会复位"""
    safety = state.safety
    for rule in rules:
        if not getattr(safety, rule.flag) and rule.matches(line.trimmed):
            safety = safety.mark(rule.flag)
    if safety is state.safety:
        return state, []
    return replace(state, safety=safety), []


def apply_document_rules(facts: DocumentFacts, rules: Tuple[DocumentRule, ...] = DOCUMENT_RULES) -> List[Diagnostic]:
    return [
        Diagnostic.suggestion(rule.message, category=rule.category, severity=rule.severity)
        for rule in rules
        if rule.predicate(facts)
    ]

import logging
from typing import Callable, List, Optional, Tuple

from .config_manager import ValidatorConfig
from .constants import LANGUAGE_TAGS
from .declarations import check_declaration, finalize_declarations, record_usage
from .errors import UnsupportedLanguageError
from .models import Category, Diagnostic, DiagnosticKind, ValidationReport
from .rules import DocumentFacts, apply_document_rules, apply_safety_rules
from .scanner import ScanState, SourceLine, StepResult, iter_source_lines, preprocess, track_section
from .scoring import compute_scores
from .structure import check_structure, finalize_structure

logger = logging.getLogger(__name__)

Step = Callable[[ScanState, SourceLine], StepResult]

# 每行依次经过的检查步骤，顺序决定诊断的追加顺序
SCAN_STEPS: Tuple[Step, ...] = (
    track_section,
    check_declaration,
    check_structure,
    record_usage,
    apply_safety_rules,
)


class STValidator:
    """
    基于规则的 Structured Text 静态校验器。
    输入通常是大模型生成的代码，任何畸形输入都只会变成诊断，不会抛异常。
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or ValidatorConfig()

    def scan(self, lines: List[str]) -> Tuple[ScanState, List[Diagnostic]]:
        """逐行 fold，返回最终状态和按出现顺序排列的诊断"""
        state = ScanState()
        diagnostics: List[Diagnostic] = []
        for line in iter_source_lines(lines):
            for step in SCAN_STEPS:
                state, found = step(state, line)
                diagnostics.extend(found)
        return state, diagnostics

    def validate(self, code: str) -> ValidationReport:
        if not isinstance(code, str):
            raise TypeError(f"ST source must be a str, got {type(code).__name__}")

        code = preprocess(code)
        lines = code.split('\n')

        truncated = len(lines) > self.config.max_lines
        if truncated:
            logger.warning(f"⚠️ Input has {len(lines)} lines, only the first {self.config.max_lines} are validated")
            lines = lines[:self.config.max_lines]

        state, diagnostics = self.scan(lines)

        diagnostics.extend(finalize_structure(state))
        diagnostics.extend(finalize_declarations(state))
        if truncated:
            diagnostics.append(Diagnostic.warning(
                f"Input truncated after {self.config.max_lines} lines; remaining lines were not validated",
                category=Category.STYLE,
                line=self.config.max_lines + 1,
            ))

        facts = DocumentFacts(
            code=code,
            total_lines=len(code.split('\n')),
            safety=state.safety,
            long_program_lines=self.config.long_program_lines,
        )
        diagnostics.extend(apply_document_rules(facts))

        errors = tuple(d for d in diagnostics if d.kind == DiagnosticKind.ERROR)
        warnings = tuple(d for d in diagnostics if d.kind == DiagnosticKind.WARNING)
        suggestions = tuple(d for d in diagnostics if d.kind == DiagnosticKind.SUGGESTION)
        syntax, logic, safety = compute_scores(errors, warnings, state.safety)

        logger.debug(
            f"Validated {len(lines)} lines: {len(errors)} errors, {len(warnings)} warnings, "
            f"{len(suggestions)} suggestions"
        )
        return ValidationReport(
            errors=errors,
            warnings=warnings,
            suggestions=suggestions,
            safety=state.safety,
            compliance=state.compliance,
            syntax_score=syntax,
            logic_score=logic,
            safety_score=safety,
        )


def check_language(language: Optional[str]) -> str:
    """只接受 Structured Text 的语言标签"""
    tag = (language or "structured_text").strip().lower()
    if tag not in LANGUAGE_TAGS:
        raise UnsupportedLanguageError(language)
    return tag


def validate_code(code: str, language: str = "structured_text",
                  config: Optional[ValidatorConfig] = None) -> ValidationReport:
    check_language(language)
    return STValidator(config).validate(code)

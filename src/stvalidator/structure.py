from dataclasses import replace
from typing import List

from .constants import (
    BLOCK_END_KEYWORDS,
    COMPARISON_OPERATORS,
    EXIT_RE,
    IF_LINE_RE,
    KEYWORD_PAIRS,
    RETURN_RE,
    STATEMENT_TERMINATOR,
)
from .models import Category, Diagnostic
from .scanner import ScanState, SourceLine, StepResult


def _check_keyword_pairs(line: SourceLine) -> List[Diagnostic]:
    """
    行内关键字配对：IF/THEN, FOR/TO, WHILE/DO, CASE/OF。
    只看当前行，不维护嵌套栈。
    """
    found = []
    for opener, partner, message in KEYWORD_PAIRS:
        match = opener.search(line.code_upper)
        if not match or partner.search(line.code_upper):
            continue
        # 含 := 的行按赋值语句处理，不要求 THEN
        if opener is IF_LINE_RE and ":=" in line.code:
            continue
        found.append(Diagnostic.error(message, line=line.number, column=line.column(match.start())))
    return found


def _check_assignment_operator(line: SourceLine) -> List[Diagnostic]:
    """ST 赋值必须用 :=，单独的 = 只用于比较"""
    code = line.code
    if "=" not in code or any(op in code for op in COMPARISON_OPERATORS):
        return []
    if IF_LINE_RE.search(line.code_upper):
        return []
    return [Diagnostic.warning(
        "Use := for assignment, = is for comparison",
        category=Category.SYNTAX,
        line=line.number,
        column=line.column(code.index("=")),
    )]


def _check_terminator(state: ScanState, line: SourceLine) -> List[Diagnostic]:
    if state.in_declaration_section:
        return []
    is_statement = (
        ":=" in line.code
        or RETURN_RE.match(line.code_upper)
        or EXIT_RE.search(line.code_upper)
    )
    if not is_statement or line.code.endswith(STATEMENT_TERMINATOR):
        return []
    return [Diagnostic.warning(
        "Statement should end with semicolon",
        category=Category.STYLE,
        line=line.number,
        column=line.column(len(line.code)),
    )]


def check_structure(state: ScanState, line: SourceLine) -> StepResult:
    """括号计数、控制结构关键字、赋值符号与分号检查"""
    balance = state.parenthesis_balance + line.code.count("(") - line.code.count(")")
    compliance = state.compliance
    if not compliance.block_structure_compliant and any(k in line.code_upper for k in BLOCK_END_KEYWORDS):
        compliance = replace(compliance, block_structure_compliant=True)

    diagnostics: List[Diagnostic] = []
    if not state.in_declaration_section:
        diagnostics.extend(_check_keyword_pairs(line))
    diagnostics.extend(_check_assignment_operator(line))
    diagnostics.extend(_check_terminator(state, line))

    return replace(state, parenthesis_balance=balance, compliance=compliance), diagnostics


def finalize_structure(state: ScanState) -> List[Diagnostic]:
    if state.parenthesis_balance != 0:
        return [Diagnostic.error("Unmatched parentheses in code")]
    return []

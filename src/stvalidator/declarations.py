from dataclasses import replace
from typing import List

from .constants import (
    ASSIGNMENT_TARGET_RE,
    DECLARATION_RE,
    IDENTIFIER_RE,
    RESERVED_WORDS,
    STANDARD_DATA_TYPES,
)
from .models import Category, Diagnostic, Severity
from .scanner import ScanState, SourceLine, StepResult


def check_declaration(state: ScanState, line: SourceLine) -> StepResult:
    """解析 VAR 段内的 `name : TYPE` 声明，登记变量并做类型 / 命名 / 保留字检查"""
    if not state.in_declaration_section or line.is_section_keyword or ":" not in line.code:
        return state, []

    match = DECLARATION_RE.match(line.code)
    if not match:
        return state, []

    var_name, data_type = match.groups()
    key = var_name.upper()
    diagnostics: List[Diagnostic] = []
    compliance = state.compliance

    if data_type.upper() in STANDARD_DATA_TYPES:
        compliance = replace(compliance, standard_data_type_used=True)
    else:
        diagnostics.append(Diagnostic.warning(
            f"Non-standard data type '{data_type}' used",
            category=Category.IEC_COMPLIANCE,
            line=line.number,
            column=line.column(match.start(2)),
        ))

    if not IDENTIFIER_RE.match(var_name):
        diagnostics.append(Diagnostic.warning(
            f"Variable '{var_name}' doesn't follow IEC 61131-3 naming convention",
            category=Category.IEC_COMPLIANCE,
            line=line.number,
            column=line.column(0),
        ))
        compliance = replace(compliance, naming_convention_followed=False)

    if key in RESERVED_WORDS:
        diagnostics.append(Diagnostic.error(
            f"'{var_name}' is a reserved word and cannot be used as variable name",
            line=line.number,
            column=line.column(0),
        ))

    declared = state.declared_variables
    if key not in declared:
        declared = declared + (key,)

    return replace(state, declared_variables=declared, compliance=compliance), diagnostics


def record_usage(state: ScanState, line: SourceLine) -> StepResult:
    """记录 VAR 段以外所有 `name :=` 的赋值目标"""
    if state.in_declaration_section:
        return state, []

    targets = {name.upper() for name in ASSIGNMENT_TARGET_RE.findall(line.code)}
    if not targets or targets <= state.used_variables:
        return state, []
    return replace(state, used_variables=state.used_variables | targets), []


def finalize_declarations(state: ScanState) -> List[Diagnostic]:
    """扫描结束后：声明了但从未被赋值的变量"""
    return [
        Diagnostic.warning(
            f"Variable '{name}' declared but never used",
            category=Category.STYLE,
            severity=Severity.LOW,
        )
        for name in state.declared_variables
        if name not in state.used_variables
    ]

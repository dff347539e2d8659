from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class DiagnosticKind(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "info"


class Severity(str, Enum):
    CRITICAL = "critical"
    MEDIUM = "medium"
    LOW = "low"


class Category(str, Enum):
    SYNTAX = "syntax"
    SEMANTICS = "semantics"
    SAFETY = "safety"
    STYLE = "style"
    IEC_COMPLIANCE = "iec61131"


@dataclass(frozen=True)
class Diagnostic:
    """单条诊断结果 (错误 / 警告 / 建议)"""
    kind: DiagnosticKind
    message: str
    severity: Severity
    category: Category
    line: Optional[int] = None
    column: Optional[int] = None

    @classmethod
    def error(cls, message: str, category: Category = Category.SYNTAX, severity: Severity = Severity.CRITICAL,
              line: Optional[int] = None, column: Optional[int] = None) -> "Diagnostic":
        return cls(DiagnosticKind.ERROR, message, severity, category, line, column)

    @classmethod
    def warning(cls, message: str, category: Category, severity: Severity = Severity.MEDIUM,
                line: Optional[int] = None, column: Optional[int] = None) -> "Diagnostic":
        return cls(DiagnosticKind.WARNING, message, severity, category, line, column)

    @classmethod
    def suggestion(cls, message: str, category: Category, severity: Severity = Severity.LOW) -> "Diagnostic":
        return cls(DiagnosticKind.SUGGESTION, message, severity, category)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.kind.value,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
        }
        if self.line is not None:
            data["line"] = self.line
        if self.column is not None:
            data["column"] = self.column
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Diagnostic":
        return cls(
            kind=DiagnosticKind(data["type"]),
            message=data["message"],
            severity=Severity(data["severity"]),
            category=Category(data["category"]),
            line=data.get("line"),
            column=data.get("column"),
        )


# 审计字段名 -> 对外 JSON 字段名
_SAFETY_KEYS = {
    "emergency_stop": "emergencyStop",
    "safety_interlocks": "safetyInterlocks",
    "fail_safe_mechanisms": "failSafeMechanisms",
    "watchdog_timer": "watchdogTimer",
    "input_validation": "inputValidation",
}

_COMPLIANCE_KEYS = {
    "variable_declaration_present": "variableDeclarationPresent",
    "standard_data_type_used": "standardDataTypeUsed",
    "block_structure_compliant": "blockStructureCompliant",
    "naming_convention_followed": "namingConventionFollowed",
}


@dataclass(frozen=True)
class SafetyAudit:
    emergency_stop: bool = False
    safety_interlocks: bool = False
    fail_safe_mechanisms: bool = False
    watchdog_timer: bool = False
    input_validation: bool = False

    def mark(self, flag: str) -> "SafetyAudit":
        """置位某个安全特征；标志只会从 False 变为 True"""
        if getattr(self, flag):
            return self
        return replace(self, **{flag: True})

    def count(self) -> int:
        return sum(1 for f in fields(self) if getattr(self, f.name))

    def to_dict(self) -> Dict[str, bool]:
        return {wire: getattr(self, name) for name, wire in _SAFETY_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SafetyAudit":
        return cls(**{name: bool(data.get(wire, False)) for name, wire in _SAFETY_KEYS.items()})


@dataclass(frozen=True)
class ComplianceAudit:
    variable_declaration_present: bool = False
    standard_data_type_used: bool = False
    block_structure_compliant: bool = False
    naming_convention_followed: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return {wire: getattr(self, name) for name, wire in _COMPLIANCE_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComplianceAudit":
        defaults = cls()
        return cls(**{name: bool(data.get(wire, getattr(defaults, name)))
                      for name, wire in _COMPLIANCE_KEYS.items()})


@dataclass(frozen=True)
class ValidationReport:
    """
    一次校验的最终报告 (不可变)。
    is_valid 由 errors 推导，保证 is_valid == (len(errors) == 0)。
    """
    errors: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[Diagnostic, ...] = ()
    suggestions: Tuple[Diagnostic, ...] = ()
    safety: SafetyAudit = field(default_factory=SafetyAudit)
    compliance: ComplianceAudit = field(default_factory=ComplianceAudit)
    syntax_score: int = 100
    logic_score: int = 100
    safety_score: int = 0

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
            "suggestions": [d.to_dict() for d in self.suggestions],
            "safety": self.safety.to_dict(),
            "compliance": self.compliance.to_dict(),
            "syntaxScore": self.syntax_score,
            "logicScore": self.logic_score,
            "safetyScore": self.safety_score,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationReport":
        return cls(
            errors=tuple(Diagnostic.from_dict(d) for d in data.get("errors", [])),
            warnings=tuple(Diagnostic.from_dict(d) for d in data.get("warnings", [])),
            suggestions=tuple(Diagnostic.from_dict(d) for d in data.get("suggestions", [])),
            safety=SafetyAudit.from_dict(data.get("safety", {})),
            compliance=ComplianceAudit.from_dict(data.get("compliance", {})),
            syntax_score=int(data.get("syntaxScore", 100)),
            logic_score=int(data.get("logicScore", 100)),
            safety_score=int(data.get("safetyScore", 0)),
        )

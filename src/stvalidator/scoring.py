from typing import Sequence, Tuple

from .models import Category, Diagnostic, SafetyAudit

ERROR_PENALTY = 15
WARNING_PENALTY = 5
SEMANTIC_ERROR_PENALTY = 20
SAFETY_FEATURE_POINTS = 20


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def syntax_score(errors: Sequence[Diagnostic], warnings: Sequence[Diagnostic]) -> int:
    return _clamp(100 - ERROR_PENALTY * len(errors) - WARNING_PENALTY * len(warnings))


def logic_score(errors: Sequence[Diagnostic]) -> int:
    # 目前没有规则产出 SEMANTICS 类错误，所以这里恒为 100
    semantic = sum(1 for e in errors if e.category == Category.SEMANTICS)
    return _clamp(100 - SEMANTIC_ERROR_PENALTY * semantic)


def safety_score(safety: SafetyAudit) -> int:
    return _clamp(SAFETY_FEATURE_POINTS * safety.count())


def compute_scores(errors: Sequence[Diagnostic], warnings: Sequence[Diagnostic],
                   safety: SafetyAudit) -> Tuple[int, int, int]:
    """返回 (syntax_score, logic_score, safety_score)"""
    return syntax_score(errors, warnings), logic_score(errors), safety_score(safety)

"""
行分类器 + 段落状态机。

校验过程是一个显式的 fold：
    (ScanState, SourceLine) -> (ScanState, [Diagnostic])
状态按值传递，每一步返回新的 ScanState，不修改任何共享变量。
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterator, List, Optional, Tuple

from .constants import (
    BLOCK_COMMENT_CLOSE,
    BLOCK_COMMENT_OPEN,
    BLOCK_COMMENT_START_RE,
    INLINE_COMMENT_RE,
    LINE_COMMENT,
    POU_OPEN_RE,
    SECTION_CLOSE_RE,
    SECTION_OPEN_RE,
)
from .models import ComplianceAudit, Diagnostic, SafetyAudit


@dataclass(frozen=True)
class SourceLine:
    number: int
    raw: str
    trimmed: str
    upper: str
    # 去掉行内注释后的代码部分
    code: str
    code_upper: str

    def column(self, index: int) -> int:
        """把 code 内的下标换算成原始行中的 1-based 列号"""
        start = self.raw.find(self.code)
        return max(start, 0) + index + 1

    @property
    def is_section_keyword(self) -> bool:
        return bool(SECTION_OPEN_RE.match(self.code_upper) or SECTION_CLOSE_RE.match(self.code_upper))


@dataclass(frozen=True)
class ScanState:
    in_declaration_section: bool = False
    # 记录是否出现过 PROGRAM / FUNCTION / FUNCTION_BLOCK，目前没有规则依赖它
    saw_program_or_block: bool = False
    parenthesis_balance: int = 0
    # 按声明顺序保存，保证未使用变量的报告顺序稳定
    declared_variables: Tuple[str, ...] = ()
    used_variables: FrozenSet[str] = frozenset()
    safety: SafetyAudit = field(default_factory=SafetyAudit)
    compliance: ComplianceAudit = field(default_factory=ComplianceAudit)


StepResult = Tuple[ScanState, List[Diagnostic]]


def preprocess(code: str) -> str:
    """预处理：去掉 BOM，统一换行符 (不裁剪首尾，保证行号不变)"""
    return code.lstrip('\ufeff').replace('\r\n', '\n').replace('\r', '\n')


def _strip_inline_comments(text: str) -> Tuple[str, bool]:
    """去掉行内注释 (跳过字符串字面量)，返回 (代码部分, 是否以未闭合的块注释结尾)"""
    code = INLINE_COMMENT_RE.sub(lambda m: m.group(1) or "", text)
    for match in BLOCK_COMMENT_START_RE.finditer(code):
        if match.group(1) is None:
            return code[:match.start()].strip(), True
    return code.strip(), False


def classify_line(number: int, raw: str, in_block_comment: bool = False) -> Tuple[Optional[SourceLine], bool]:
    """
    对单行做归一化。空行、整行注释以及多行块注释内部的行返回 None。
    第二个返回值是处理完本行后是否仍处于块注释中。
    """
    text = raw.strip()

    if in_block_comment:
        end = text.find(BLOCK_COMMENT_CLOSE)
        if end == -1:
            return None, True
        text = text[end + len(BLOCK_COMMENT_CLOSE):].strip()

    if not text or text.startswith(LINE_COMMENT):
        return None, False

    if text.startswith(BLOCK_COMMENT_OPEN):
        return None, BLOCK_COMMENT_CLOSE not in text

    code, opens_comment = _strip_inline_comments(text)
    if not code:
        return None, opens_comment

    line = SourceLine(
        number=number,
        raw=raw,
        trimmed=text,
        upper=text.upper(),
        code=code,
        code_upper=code.upper(),
    )
    return line, opens_comment


def iter_source_lines(lines: List[str]) -> Iterator[SourceLine]:
    """按顺序产出需要分析的行，跳过空行和注释"""
    in_comment = False
    for number, raw in enumerate(lines, start=1):
        line, in_comment = classify_line(number, raw, in_comment)
        if line is not None:
            yield line


def track_section(state: ScanState, line: SourceLine) -> StepResult:
    """段落状态机：Outside <-> InDeclarationSection"""
    upper = line.code_upper

    if SECTION_OPEN_RE.match(upper):
        state = replace(
            state,
            in_declaration_section=True,
            compliance=replace(state.compliance, variable_declaration_present=True),
        )
    elif SECTION_CLOSE_RE.match(upper):
        state = replace(state, in_declaration_section=False)

    if POU_OPEN_RE.match(upper) and not state.saw_program_or_block:
        state = replace(state, saw_program_or_block=True)

    return state, []

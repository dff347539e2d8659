import re

# ==========================================
# IEC 61131-3 常量表 (对外契约，修改会改变诊断结果)
# ==========================================

# ST 保留字：声明段 / POU / 控制流 / 布尔与运算符
RESERVED_WORDS = frozenset({
    "VAR", "END_VAR", "VAR_INPUT", "VAR_OUTPUT", "VAR_IN_OUT", "VAR_TEMP", "VAR_EXTERNAL", "VAR_GLOBAL",
    "PROGRAM", "END_PROGRAM", "FUNCTION", "END_FUNCTION", "FUNCTION_BLOCK", "END_FUNCTION_BLOCK",
    "IF", "THEN", "ELSE", "ELSIF", "END_IF", "CASE", "OF", "END_CASE",
    "FOR", "TO", "BY", "DO", "END_FOR", "WHILE", "END_WHILE", "REPEAT", "UNTIL", "END_REPEAT",
    "EXIT", "RETURN", "TRUE", "FALSE", "AND", "OR", "XOR", "NOT", "MOD",
})

# 标准基本数据类型
STANDARD_DATA_TYPES = frozenset({
    "BOOL", "SINT", "INT", "DINT", "LINT", "USINT", "UINT", "UDINT", "ULINT",
    "REAL", "LREAL", "TIME", "DATE", "TIME_OF_DAY", "TOD", "DATE_AND_TIME", "DT",
    "STRING", "WSTRING", "BYTE", "WORD", "DWORD", "LWORD",
})

# 声明段关键字族，VAR 可带 CONSTANT / RETAIN 等限定词
DECLARATION_KEYWORDS = ("VAR", "VAR_INPUT", "VAR_OUTPUT", "VAR_IN_OUT", "VAR_TEMP", "VAR_EXTERNAL", "VAR_GLOBAL")
SECTION_TERMINATOR = "END_VAR"

SECTION_OPEN_RE = re.compile(r"^(?:" + "|".join(sorted(DECLARATION_KEYWORDS, key=len, reverse=True)) + r")\b")
SECTION_CLOSE_RE = re.compile("^" + SECTION_TERMINATOR + "$")
POU_OPEN_RE = re.compile(r"^(?:PROGRAM|FUNCTION_BLOCK|FUNCTION)\b")

# 变量声明行: Motor_Start : BOOL;
DECLARATION_RE = re.compile(r"^(\w+)\s*:\s*(\w+)")
IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
ASSIGNMENT_TARGET_RE = re.compile(r"(\w+)\s*:=")

# 字符串字面量，$ 是 ST 的转义符
STRING_LITERAL = r"'(?:\$.|[^'$])*'|\"(?:\$.|[^\"$])*\""

# 注释：行注释与块注释 (* ... *)，group(1) 命中的是字符串，原样保留
INLINE_COMMENT_RE = re.compile(rf"({STRING_LITERAL})|//.*|\(\*.*?\*\)")
BLOCK_COMMENT_START_RE = re.compile(rf"({STRING_LITERAL})|\(\*")
BLOCK_COMMENT_OPEN = "(*"
BLOCK_COMMENT_CLOSE = "*)"
LINE_COMMENT = "//"

# 控制结构关键字对：(开头关键字, 必需的伴随关键字, 报错信息)
KEYWORD_PAIRS = (
    (re.compile(r"\b(?:ELS)?IF\s"), re.compile(r"\bTHEN\b"), "IF statement must be followed by THEN"),
    (re.compile(r"\bFOR\s"), re.compile(r"\bTO\b"), "FOR statement missing TO keyword"),
    (re.compile(r"\bWHILE\s"), re.compile(r"\bDO\b"), "WHILE statement missing DO keyword"),
    (re.compile(r"\bCASE\s"), re.compile(r"\bOF\b"), "CASE statement missing OF keyword"),
)
IF_LINE_RE = KEYWORD_PAIRS[0][0]

BLOCK_END_KEYWORDS = ("END_IF", "END_FOR", "END_WHILE", "END_CASE")
COMPARISON_OPERATORS = (":=", "<=", ">=", "<>")

LANGUAGE_TAGS = frozenset({"structured_text", "st"})

DEFAULT_MAX_LINES = 10000
DEFAULT_LONG_PROGRAM_LINES = 100

# 语句结束检查
RETURN_RE = re.compile(r"^RETURN\b")
EXIT_RE = re.compile(r"\bEXIT\b")
STATEMENT_TERMINATOR = ";"

import re

ST_START_KEYWORDS = ("FUNCTION_BLOCK", "FUNCTION", "PROGRAM", "VAR", "TYPE")


def auto_repair(code_text: str) -> str:
    """从大模型输出里提取纯净的 ST 代码"""
    if not code_text:
        return ""

    # 1. 思考模型会先输出 <think>...</think>
    if "</think>" in code_text:
        code_text = code_text.split("</think>")[-1]

    # 2. 剥离 Markdown 包装 (```st ... ```)
    md_match = re.search(r"```[a-zA-Z]*\n(.*?)```", code_text, flags=re.IGNORECASE | re.DOTALL)
    code = md_match.group(1) if md_match else code_text

    # 3. 过滤掉开头的自然语言废话 (比如 "Here is the code:\n")
    first_idx = len(code)
    for kw in ST_START_KEYWORDS:
        match = re.search(rf"(?m)^[ \t]*({kw})(?:_\w+)?\b", code, flags=re.IGNORECASE)
        if match and match.start(1) < first_idx:
            first_idx = match.start(1)

    if 0 < first_idx < len(code):
        code = code[first_idx:]

    return code.strip()

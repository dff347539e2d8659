from stvalidator import auto_repair


def test_extracts_fenced_block():
    text = "Here is the code:\n```st\nPROGRAM Main\nx := 1;\nEND_PROGRAM\n```\nHope it helps!"
    assert auto_repair(text) == "PROGRAM Main\nx := 1;\nEND_PROGRAM"


def test_drops_leading_chatter():
    text = "Sure! The function block below does it.\n\nFUNCTION_BLOCK FB_Motor\nEND_FUNCTION_BLOCK"
    assert auto_repair(text) == "FUNCTION_BLOCK FB_Motor\nEND_FUNCTION_BLOCK"


def test_strips_think_section():
    text = "<think>PROGRAM draft?</think>\nPROGRAM Real\nEND_PROGRAM"
    assert auto_repair(text) == "PROGRAM Real\nEND_PROGRAM"


def test_keyword_must_start_a_line():
    text = "Every variable is declared first:\nVAR_INPUT\n  a : INT;\nEND_VAR"
    assert auto_repair(text) == "VAR_INPUT\n  a : INT;\nEND_VAR"


def test_plain_code_is_kept():
    assert auto_repair("  x := 1;  \n") == "x := 1;"


def test_empty_input():
    assert auto_repair("") == ""
    assert auto_repair(None) == ""

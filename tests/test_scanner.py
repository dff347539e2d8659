import pytest

from stvalidator.scanner import ScanState, classify_line, iter_source_lines, preprocess, track_section


def _line(text, number=1):
    line, _ = classify_line(number, text)
    assert line is not None
    return line


@pytest.mark.parametrize("text", ["", "   ", "\t", "// comment", "  // indented comment", "(* one line *)"])
def test_skipped_lines(text):
    line, in_comment = classify_line(1, text)
    assert line is None
    assert not in_comment


def test_block_comment_spanning_lines():
    line, in_comment = classify_line(1, "(* start of a long")
    assert line is None and in_comment

    line, in_comment = classify_line(2, "IF x", in_comment)
    assert line is None and in_comment

    line, in_comment = classify_line(3, "end *) x := 1;", in_comment)
    assert not in_comment
    assert line.code == "x := 1;"


def test_inline_comments_are_stripped():
    line = _line("    motor := TRUE; // start (")
    assert line.trimmed == "motor := TRUE; // start ("
    assert line.code == "motor := TRUE;"
    assert line.code_upper == "MOTOR := TRUE;"


def test_trailing_block_comment_opener_continues():
    line, in_comment = classify_line(1, "x := 1; (* note")
    assert line.code == "x := 1;"
    assert in_comment


def test_column_is_relative_to_raw_line():
    line = _line("    speed : FOO;")
    assert line.column(0) == 5
    assert line.column(8) == 13


def test_iter_source_lines_keeps_numbers():
    lines = list(iter_source_lines(["PROGRAM P", "", "// c", "x := 1;"]))
    assert [l.number for l in lines] == [1, 4]


def test_preprocess_keeps_line_count():
    assert preprocess("\ufeffa\r\nb\rc\n").split("\n") == ["a", "b", "c", ""]


@pytest.mark.parametrize("opener", [
    "VAR", "VAR_INPUT", "VAR_OUTPUT", "VAR_IN_OUT", "VAR_TEMP", "VAR_EXTERNAL", "VAR_GLOBAL",
    "var", "VAR CONSTANT", "VAR_GLOBAL RETAIN",
])
def test_section_openers(opener):
    state, found = track_section(ScanState(), _line(opener))
    assert state.in_declaration_section
    assert state.compliance.variable_declaration_present
    assert found == []


@pytest.mark.parametrize("text", ["VARIABLE := 1;", "VAR_1 := 2;", "my_var := 3;"])
def test_identifiers_starting_with_var_are_not_sections(text):
    state, _ = track_section(ScanState(), _line(text))
    assert not state.in_declaration_section


@pytest.mark.parametrize("closer", ["END_VAR", "end_var", "  END_VAR  "])
def test_section_terminator(closer):
    state = ScanState(in_declaration_section=True)
    state, _ = track_section(state, _line(closer))
    assert not state.in_declaration_section


def test_section_state_persists_until_terminator():
    state, _ = track_section(ScanState(), _line("VAR"))
    state, _ = track_section(state, _line("x : INT;"))
    assert state.in_declaration_section
    state, _ = track_section(state, _line("END_VAR"))
    state, _ = track_section(state, _line("x := 1;"))
    assert not state.in_declaration_section


@pytest.mark.parametrize("text", ["PROGRAM Main", "FUNCTION_BLOCK FB_Motor", "FUNCTION Add : INT"])
def test_program_or_block_opener(text):
    state, _ = track_section(ScanState(), _line(text))
    assert state.saw_program_or_block


def test_state_is_not_mutated():
    before = ScanState()
    after, _ = track_section(before, _line("VAR"))
    assert not before.in_declaration_section
    assert after is not before


@pytest.mark.parametrize("text", ["END_VAR;", "END_VAR_X", "END_VAR x"])
def test_terminator_must_match_exactly(text):
    state = ScanState(in_declaration_section=True)
    state, _ = track_section(state, _line(text))
    assert state.in_declaration_section


@pytest.mark.parametrize("text, code", [
    ("url := 'http://host';", "url := 'http://host';"),
    ("s := 'a (* b *) c'; // tail", "s := 'a (* b *) c';"),
    ('w := "it$"s // ok"; (* c *)', 'w := "it$"s // ok";'),
    ("msg := 'don$'t'; // note", "msg := 'don$'t';"),
])
def test_comment_markers_inside_strings_are_kept(text, code):
    line, in_comment = classify_line(1, text)
    assert line.code == code
    assert not in_comment


def test_block_comment_opener_inside_string_does_not_continue():
    line, in_comment = classify_line(1, "s := '(* keep';")
    assert line.code == "s := '(* keep';"
    assert not in_comment

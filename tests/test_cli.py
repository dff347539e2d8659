import json

from stvalidator.cli import EXIT_FAILURE, EXIT_INVALID, EXIT_OK, main


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_validate_valid_file(tmp_path, capsys, clean_program):
    path = _write(tmp_path, "main.st", clean_program)
    assert main(["validate", path]) == EXIT_OK
    assert "Status: VALID" in capsys.readouterr().out


def test_validate_invalid_file_json(tmp_path, capsys):
    path = _write(tmp_path, "bad.st", "x := (a + b;")
    assert main(["validate", "--json", path]) == EXIT_INVALID
    payload = json.loads(capsys.readouterr().out)
    assert payload["isValid"] is False
    assert payload["syntaxScore"] == 85


def test_validate_many_files_json(tmp_path, capsys):
    good = _write(tmp_path, "good.st", "x := 1;")
    bad = _write(tmp_path, "bad.st", "IF a")
    assert main(["validate", "--json", good, bad]) == EXIT_INVALID
    payload = json.loads(capsys.readouterr().out)
    assert payload[good]["isValid"] is True
    assert payload[bad]["isValid"] is False


def test_validate_with_repair(tmp_path, capsys):
    path = _write(tmp_path, "llm.md", "Here you go:\n```st\nx := 1;\n```")
    assert main(["validate", "--repair", "--json", path]) == EXIT_OK
    assert json.loads(capsys.readouterr().out)["isValid"] is True


def test_missing_file(tmp_path):
    assert main(["validate", str(tmp_path / "missing.st")]) == EXIT_FAILURE


def test_missing_config(tmp_path):
    path = _write(tmp_path, "main.st", "x := 1;")
    assert main(["-c", str(tmp_path / "none.yaml"), "validate", path]) == EXIT_FAILURE


def test_clean_missing_input_dir(tmp_path):
    assert main(["clean", str(tmp_path / "missing"), str(tmp_path / "out")]) == EXIT_FAILURE


def test_clean_dataset(tmp_path):
    raw = tmp_path / "raw"
    raw.mkdir()
    (raw / "set.json").write_text(json.dumps([{"output": "x := 1;"}]), encoding="utf-8")
    assert main(["clean", str(raw), str(tmp_path / "out")]) == EXIT_OK
    assert (tmp_path / "out" / "set" / "golden.json").exists()

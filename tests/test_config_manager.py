import pytest

from stvalidator import ConfigError, ConfigManager, ValidatorConfig

ENV_KEYS = ("STV_MAX_LINES", "STV_LONG_PROGRAM_LINES", "STV_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert ConfigManager().validator_config() == ValidatorConfig()


def test_values_from_yaml(tmp_path):
    path = _write_config(tmp_path, "validator:\n  max_lines: 50\n  long_program_lines: 20\n  log_level: debug\n")
    config = ConfigManager(path).validator_config()
    assert config == ValidatorConfig(max_lines=50, long_program_lines=20, log_level="DEBUG")


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = _write_config(tmp_path, "validator:\n  max_lines: 50\n")
    monkeypatch.setenv("STV_MAX_LINES", "7")
    monkeypatch.setenv("STV_LOG_LEVEL", "warning")
    manager = ConfigManager(path)
    assert manager.max_lines == 7
    assert manager.log_level == "WARNING"
    assert manager.long_program_lines == 100


def test_missing_explicit_path(tmp_path):
    with pytest.raises(ConfigError):
        ConfigManager(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize("text", ["validator: [1, 2\n", "- just\n- a list\n"])
def test_broken_config_file(tmp_path, text):
    with pytest.raises(ConfigError):
        ConfigManager(_write_config(tmp_path, text))


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_line_limits(tmp_path, value):
    path = _write_config(tmp_path, f"validator:\n  max_lines: '{value}'\n")
    with pytest.raises(ConfigError):
        ConfigManager(path).validator_config()


def test_empty_file_uses_defaults(tmp_path):
    assert ConfigManager(_write_config(tmp_path, "")).validator_config() == ValidatorConfig()

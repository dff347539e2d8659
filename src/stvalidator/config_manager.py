import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .constants import DEFAULT_LONG_PROGRAM_LINES, DEFAULT_MAX_LINES
from .errors import ConfigError

load_dotenv()

DEFAULT_CONFIG_PATH = "config.yaml"


@dataclass(frozen=True)
class ValidatorConfig:
    max_lines: int = DEFAULT_MAX_LINES
    long_program_lines: int = DEFAULT_LONG_PROGRAM_LINES
    log_level: str = "INFO"


class ConfigManager:
    """
    读取 config.yaml 的 validator 段，环境变量优先级更高：
    STV_MAX_LINES / STV_LONG_PROGRAM_LINES / STV_LOG_LEVEL
    """

    def __init__(self, config_path: Optional[str] = None):
        self._cfg: Dict[str, Any] = {}
        path = config_path or DEFAULT_CONFIG_PATH
        if not os.path.exists(path):
            # 显式指定的配置文件必须存在；默认路径不存在时使用内置默认值
            if config_path:
                raise ConfigError(f"Config file not found: {config_path}")
            return
        try:
            with open(path, 'r', encoding='utf-8') as f:
                self._cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(self._cfg, dict):
            raise ConfigError(f"Config root must be a mapping: {path}")

    def _section(self) -> Dict[str, Any]:
        return self._cfg.get('validator', {}) or {}

    def _int(self, env_key: str, cfg_key: str, default: int) -> int:
        raw = os.getenv(env_key, self._section().get(cfg_key, default))
        try:
            value = int(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{cfg_key} must be an integer, got {raw!r}") from e
        if value <= 0:
            raise ConfigError(f"{cfg_key} must be positive, got {value}")
        return value

    @property
    def max_lines(self) -> int:
        return self._int("STV_MAX_LINES", "max_lines", DEFAULT_MAX_LINES)

    @property
    def long_program_lines(self) -> int:
        return self._int("STV_LONG_PROGRAM_LINES", "long_program_lines", DEFAULT_LONG_PROGRAM_LINES)

    @property
    def log_level(self) -> str:
        return str(os.getenv("STV_LOG_LEVEL", self._section().get('log_level', "INFO"))).upper()

    def validator_config(self) -> ValidatorConfig:
        return ValidatorConfig(
            max_lines=self.max_lines,
            long_program_lines=self.long_program_lines,
            log_level=self.log_level,
        )

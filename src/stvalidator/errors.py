class STValidatorError(Exception):
    """stvalidator 所有异常的基类"""


class UnsupportedLanguageError(STValidatorError, ValueError):
    """调用方传入了非 Structured Text 的语言标签"""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Unsupported language tag: {language!r} (only Structured Text is supported)")


class ConfigError(STValidatorError):
    """配置文件缺失或内容非法"""

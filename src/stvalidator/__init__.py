from .config_manager import ConfigManager, ValidatorConfig
from .errors import ConfigError, STValidatorError, UnsupportedLanguageError
from .formatter import ReportFormatter
from .models import (
    Category,
    ComplianceAudit,
    Diagnostic,
    DiagnosticKind,
    SafetyAudit,
    Severity,
    ValidationReport,
)
from .utils import auto_repair
from .validator import STValidator, validate_code

__version__ = "0.1.0"

__all__ = [
    "Category",
    "ComplianceAudit",
    "ConfigError",
    "ConfigManager",
    "Diagnostic",
    "DiagnosticKind",
    "ReportFormatter",
    "STValidator",
    "STValidatorError",
    "SafetyAudit",
    "Severity",
    "UnsupportedLanguageError",
    "ValidationReport",
    "ValidatorConfig",
    "auto_repair",
    "validate_code",
]

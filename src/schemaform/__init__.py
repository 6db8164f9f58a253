"""SchemaForm package."""

from schemaform.async_runner import run_async
from schemaform.exceptions import (
    AsyncExecutionError,
    DependencyError,
    FormValidationError,
    PackageError,
    SchemaLoadError,
    SchemaParseError,
    SettingsError,
    SubmissionError,
)
from schemaform.logging import configure_logging, get_logger
from schemaform.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("schemaform")

__all__ = [
    "AsyncExecutionError",
    "DependencyError",
    "FormValidationError",
    "PackageError",
    "SchemaLoadError",
    "SchemaParseError",
    "Settings",
    "SettingsError",
    "SubmissionError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "run_async",
]

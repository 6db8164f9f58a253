"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class AsyncExecutionError(PackageError):
    """Raised when an async operation fails in compatibility runner."""

    result: BaseException
    message: str = "Async operation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.result}"


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass(frozen=True)
class SchemaLoadError(PackageError):
    """Raised when the schema source cannot be reached or read."""

    source: str
    detail: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Failed to load schema from '{self.source}': {self.detail}"


@dataclass(frozen=True)
class SchemaParseError(PackageError):
    """Raised when schema text is not a valid JSON/JSON5 document."""

    detail: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Failed to parse schema: {self.detail}"


@dataclass(frozen=True)
class FormValidationError(PackageError):
    """Raised by export when one or more required fields fail validation."""

    errors: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return error message payload."""
        listed = ", ".join(f"{field_id}: {message}" for field_id, message in self.errors.items())
        return f"Missing required fields ({listed})"


@dataclass(frozen=True)
class SubmissionError(PackageError):
    """Raised when the submission endpoint rejects the payload or cannot be reached."""

    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"

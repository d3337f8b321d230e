"""Exception types raised by the roulette ingestion and retention jobs.

Every error carries a short code, a human-readable message and an optional
``details`` dict so that the error log and the operator output stay readable.
"""

from typing import Any, Dict, Optional


class RouletteIngestError(Exception):
    """Base exception for every failure raised by this project."""

    error_code: str = "ERR000"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


class ConfigError(RouletteIngestError):
    """Raised when required configuration (the database URL) is missing.

    Fatal: the process refuses to start.
    """

    error_code = "CFG001"

    def __init__(self, message: str, key: Optional[str] = None):
        details = {"config_key": key} if key else {}
        super().__init__(message, details)


class ValidationError(RouletteIngestError):
    """Raised when the upstream payload does not match the expected shape."""

    error_code = "VAL001"

    def __init__(self, message: str, field: Optional[str] = None, error_count: Optional[int] = None):
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if error_count is not None:
            details["error_count"] = error_count
        super().__init__(message, details)
        self.field = field


class FetchError(RouletteIngestError):
    """Raised when the upstream API cannot be read."""

    error_code = "FET001"

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        details: Dict[str, Any] = {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code


class IntegrityError(RouletteIngestError):
    """Raised when an admitted event has no resolved casino id.

    Signals a logic defect in the pipeline, never bad input.
    """

    error_code = "INT001"


class StorageError(RouletteIngestError):
    """Raised when a database operation inside a pipeline stage fails."""

    error_code = "STO001"

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, details)
        self.operation = operation

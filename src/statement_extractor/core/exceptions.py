"""Custom exception classes for statement extraction.

Each exception maps to a specific error code defined in errors.py.
Field-level problems never raise: a field that cannot be read is simply
absent from the record. Only a document no strategy can handle is a
hard failure.
"""

from typing import Any

from statement_extractor.schemas.internal import ExtractionFailure


class StatementProcessingError(Exception):
    """Base exception for all statement processing errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "PARSE_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (default: 500)
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class BankDetectionError(StatementProcessingError):
    """Raised when the issuing bank cannot be detected from the text.

    Maps to error code PARSE_001.
    """

    pass


class UnknownProviderError(BankDetectionError):
    """No provider signature matched the statement text.

    Not retryable with the same input. ``failure`` carries the structured
    explanation, including any watch-listed bank names that were found.
    """

    def __init__(self, failure: ExtractionFailure):
        self.failure = failure
        super().__init__(
            "PARSE_001",
            details={"detail": failure.detail, "found_keywords": failure.found_keywords},
            http_status=422,
        )


class InputTooLargeError(StatementProcessingError):
    """Raised when submitted statement text exceeds the configured limit."""

    def __init__(self, length: int, limit: int):
        super().__init__(
            "API_002",
            details={"length": length, "limit": limit},
            http_status=413,
        )

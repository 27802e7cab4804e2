"""Error codes and user-friendly messages.

Each catalog entry has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

# Error catalog for statement extraction
ERROR_CATALOG: dict[str, dict] = {
    "PARSE_001": {
        "code": "PARSE_001",
        "message": "Unsupported statement provider detected",
        "user_message": "We couldn't recognize this statement format.",
        "suggestion": "Please submit a statement from HDFC, SBI, ICICI, Axis, or Kotak.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request payload failed validation",
        "user_message": "The request is missing statement text or is malformed.",
        "suggestion": "Send a JSON body with a non-empty 'text' field.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "Statement text exceeds maximum length",
        "user_message": "The statement text is too large.",
        "suggestion": "Please submit the text of a single statement.",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Unhandled internal error",
        "user_message": "An unexpected error occurred.",
        "suggestion": "Please try again. Contact support if the problem persists.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]

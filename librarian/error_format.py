"""Safe error message formatting utilities.

Wrapped causes must always produce a useful message, even when their str()
representation is empty (e.g., TimeoutError(), KeyError of an empty string).
"""

from __future__ import annotations

# Friendly messages for exception types commonly raised with an empty str()
FRIENDLY_MESSAGES: dict[type, str] = {
    FileNotFoundError: "File disappeared before it could be opened.",
    PermissionError: "Permission denied.",
    IsADirectoryError: "Path is a directory, not a file.",
    TimeoutError: "Filesystem operation timed out.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Args:
        e: The exception to format
        include_type: Whether to include the exception type name

    Returns:
        A non-empty message

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'

        >>> format_error_message(PermissionError())
        'PermissionError: Permission denied.'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"

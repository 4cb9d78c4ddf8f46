"""
Echo Chamber Exceptions
=======================

Errors raised at the edges of the application. The predictor itself never
raises for bad input, it answers with a structured result instead. These
exceptions cover the two places where input is turned into values: text
typed into the console menu and settings read from .env or the environment.

Hierarchy:
    ChamberBaseException
    ├── SequenceParseError   - typed text that is not a list of numbers
    └── ConfigurationError   - a setting with a missing or malformed value
"""

from typing import Optional


class ChamberBaseException(Exception):
    """
    Base exception class for all Echo Chamber errors.

    All custom exceptions in this application inherit from this class,
    allowing for easy catching of all adapter-level errors.

    Attributes:
        message (str): Human-readable error description.
        details (Optional[dict]): Additional context about the error.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class SequenceParseError(ChamberBaseException):
    """
    Exception raised when user-typed text cannot be turned into numbers.

    Example:
        >>> raise SequenceParseError("Invalid number: abc", token="abc")
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        details: Optional[dict] = None
    ):
        """
        Initialize the parse error.

        Args:
            message: Human-readable error description.
            token: The piece of input that failed to parse.
            details: Optional dictionary with additional error context.
        """
        self.token = token
        error_details = details or {}
        if token is not None:
            error_details["token"] = token
        super().__init__(message, error_details)


class ConfigurationError(ChamberBaseException):
    """
    Exception raised when a configuration value is missing or malformed.

    Example:
        >>> raise ConfigurationError(
        ...     "PORT must be an integer",
        ...     key="PORT",
        ...     details={"provided": "abc"}
        ... )
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        details: Optional[dict] = None
    ):
        """
        Initialize the configuration error.

        Args:
            message: Human-readable error description.
            key: Name of the setting that failed validation.
            details: Optional dictionary with additional error context.
        """
        self.key = key
        error_details = details or {}
        if key:
            error_details["key"] = key
        super().__init__(message, error_details)

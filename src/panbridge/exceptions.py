#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the panbridge library.

This module defines specialized exception classes for the error conditions
that can occur while talking to the pandoc engine or while decoding the
documents it produces. Recoverable conditions of format negotiation (an
unknown base format, an unknown extension) are never raised: they are
reported as warnings on the resolved format.

Exception Hierarchy
-------------------
- PanbridgeError (base exception)

  - ValidationError (malformed input data)
    - MalformedAstError (JSON that is not a pandoc document or token tree)

  - EngineError (pandoc invocation failures)
    - EngineNotFoundError (pandoc executable missing)
    - EngineTimeoutError (pandoc did not finish in time)

"""

from typing import Any


class PanbridgeError(Exception):
    """Base exception class for all panbridge-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(PanbridgeError):
    """Exception raised for structurally invalid input data.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class MalformedAstError(ValidationError):
    """Exception raised when JSON data is not a valid pandoc AST.

    Parameters
    ----------
    message : str
        Description of what is wrong with the data
    parameter_value : any, optional
        The offending value (or a fragment of it)
    original_error : Exception, optional
        The original decoding error, if any

    """

    def __init__(self, message: str, parameter_value: Any = None, original_error: Exception | None = None):
        """Initialize the malformed AST error."""
        super().__init__(message, parameter_name="ast", parameter_value=parameter_value, original_error=original_error)


class EngineError(PanbridgeError):
    """Exception raised when the pandoc engine fails.

    Negotiation and conversion never recover from engine failures; this
    error reaches the caller unchanged.

    Parameters
    ----------
    message : str
        Description of the failure
    operation : str, optional
        Engine operation that failed (e.g. ``"list_extensions"``)
    returncode : int, optional
        Exit status of the pandoc process
    stderr : str, optional
        Captured standard error of the pandoc process
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    operation : str or None
        The failed operation
    returncode : int or None
        The process exit status
    stderr : str or None
        The process error output

    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the engine error with process details."""
        super().__init__(message, original_error=original_error)
        self.operation = operation
        self.returncode = returncode
        self.stderr = stderr


class EngineNotFoundError(EngineError):
    """Exception raised when the pandoc executable cannot be started.

    Parameters
    ----------
    executable : str
        The executable name or path that was tried
    operation : str, optional
        Engine operation that was attempted
    original_error : Exception, optional
        The underlying OS error

    """

    def __init__(self, executable: str, operation: str | None = None, original_error: Exception | None = None):
        """Initialize the error for a missing executable."""
        super().__init__(
            f"pandoc executable not found: {executable}. Install pandoc or set 'pandoc_path' in the configuration.",
            operation=operation,
            original_error=original_error,
        )
        self.executable = executable


class EngineTimeoutError(EngineError):
    """Exception raised when a pandoc process exceeds the configured timeout.

    Parameters
    ----------
    timeout : float
        The timeout in seconds that was exceeded
    operation : str, optional
        Engine operation that timed out

    """

    def __init__(self, timeout: float, operation: str | None = None):
        """Initialize the timeout error."""
        super().__init__(f"pandoc did not finish within {timeout} seconds", operation=operation)
        self.timeout = timeout


__all__ = [
    "PanbridgeError",
    "ValidationError",
    "MalformedAstError",
    "EngineError",
    "EngineNotFoundError",
    "EngineTimeoutError",
]

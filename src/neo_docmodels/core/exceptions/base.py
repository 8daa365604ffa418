"""Base exceptions for neo-docmodels.

This module defines the root of the exception hierarchy. Every exception
raised by the library carries an error code and a details mapping so that
services can render structured error payloads.
"""

from typing import Any, Dict, Optional


class DocModelsError(Exception):
    """Base exception for all neo-docmodels errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: DocModelsError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-docmodels exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }

"""
Error handling utilities for Token Launcher.

This module defines custom exception classes and error handling
decorators for the application.
"""

import functools
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar, cast

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException

# Type variable for function return type
F = TypeVar('F', bound=Callable[..., Any])

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error codes for the Token Launcher."""

    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"
    RECORD_PARSE_ERROR = "RECORD_PARSE_ERROR"

    # Authority errors
    UNAUTHORIZED = "UNAUTHORIZED"
    IMMUTABLE = "IMMUTABLE"

    # Collaborator errors
    NETWORK_ERROR = "NETWORK_ERROR"
    EXTERNAL_PROCESS_ERROR = "EXTERNAL_PROCESS_ERROR"


class TokenLauncherError(Exception):
    """Base exception for all Token Launcher errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize a new Token Launcher error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the error to a dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(TokenLauncherError):
    """Exception for malformed user input."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details
        )


class ConfigurationError(TokenLauncherError):
    """Exception for invalid or missing settings."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            details=details
        )


class NotFoundError(TokenLauncherError):
    """Exception for an absent account, token, record or file."""

    def __init__(
        self,
        message: str,
        resource_type: str,
        resource_id: str
    ):
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class RecordParseError(TokenLauncherError):
    """Exception for a single token record file that cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Error reading {path}: {reason}",
            code=ErrorCode.RECORD_PARSE_ERROR,
            details={"path": path, "reason": reason}
        )
        self.path = path


class UnauthorizedError(TokenLauncherError):
    """Exception raised when the wallet is not the required authority."""

    def __init__(
        self,
        message: str,
        required_authority: str,
        wallet: str
    ):
        super().__init__(
            message=message,
            code=ErrorCode.UNAUTHORIZED,
            details={"required_authority": required_authority, "wallet": wallet}
        )


class ImmutableMetadataError(TokenLauncherError):
    """Exception raised when updating metadata that is not mutable."""

    def __init__(self, mint_address: str):
        super().__init__(
            message="This token metadata is immutable and cannot be updated",
            code=ErrorCode.IMMUTABLE,
            details={"mint_address": mint_address}
        )


class NetworkError(TokenLauncherError):
    """Exception for transport-level RPC or HTTP failures."""

    def __init__(
        self,
        message: str,
        service_name: str,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        error_details["service_name"] = service_name

        super().__init__(
            message=message,
            code=ErrorCode.NETWORK_ERROR,
            details=error_details
        )


class ExternalProcessError(TokenLauncherError):
    """Exception for a failed or garbled run of an external program."""

    def __init__(
        self,
        message: str,
        command: str,
        raw_diagnostic: str = ""
    ):
        super().__init__(
            message=message,
            code=ErrorCode.EXTERNAL_PROCESS_ERROR,
            details={"command": command, "raw_diagnostic": raw_diagnostic}
        )
        self.raw_diagnostic = raw_diagnostic


def handle_network_errors(service_name: str) -> Callable[[F], F]:
    """
    Decorator converting transport errors into NetworkError.

    Token Launcher errors raised inside the wrapped coroutine pass through
    unchanged.

    Args:
        service_name: Name of the remote service used in the error details

    Returns:
        Decorator for async functions
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except TokenLauncherError:
                raise
            except (httpx.HTTPError, SolanaRpcException, RPCException) as e:
                logger.error(f"Network error in {func.__name__}: {str(e)}")
                raise NetworkError(
                    f"{service_name} request failed: {str(e)}",
                    service_name=service_name,
                    details={"operation": func.__name__}
                ) from e
        return cast(F, wrapper)
    return decorator

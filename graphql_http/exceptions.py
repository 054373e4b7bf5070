"""
Exception handling for the GraphQL HTTP transport.

This module provides the exception hierarchy raised by the client and a
classification helper that maps any failure to an explicit error kind, so
callers can branch on ``error.kind`` without inspecting subclasses.
"""

from __future__ import annotations

import asyncio
import json
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

import aiohttp
from pydantic import ValidationError

if TYPE_CHECKING:
    from .models import GraphQLError


class ErrorKind(str, Enum):
    """Failure categories surfaced by the client."""

    INVALID_ARGUMENT = "invalid_argument"
    TRANSPORT = "transport"
    HTTP = "http"
    CANCELLED = "cancelled"
    BODY_PARSE = "body_parse"
    PROTOCOL = "protocol"
    FIELD_CONVERSION = "field_conversion"
    UNKNOWN = "unknown"


class GraphQLClientError(Exception):
    """
    Base exception for all GraphQL client operations.

    Attributes:
        message: Human-readable error message
        url: URL that caused the error (if applicable)
        details: Additional error details as keyword arguments
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class InvalidArgumentError(GraphQLClientError, ValueError):
    """
    Raised when a required argument is missing.

    Always raised before any network I/O takes place.

    Attributes:
        argument: Name of the offending argument
    """

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, argument: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{argument} must not be None")
        self.argument = argument


class GraphQLTransportError(GraphQLClientError):
    """
    Raised for transport-level failures.

    Covers connection problems, timeouts raised by the HTTP layer and other
    failures that prevent a GraphQL response from being received.

    Attributes:
        original_error: The underlying exception, if any
    """

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        original_error: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, url, **kwargs)
        self.original_error = original_error


class GraphQLHttpError(GraphQLTransportError):
    """
    Raised when a non-success HTTP status arrives with a body that is not
    GraphQL JSON, e.g. an HTML error page served by a gateway.
    """

    kind = ErrorKind.HTTP

    def __init__(
        self,
        status_code: int,
        response_text: Optional[str] = None,
        reason: Optional[str] = None,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        message = f"Unexpected HTTP response: {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message, url, original_error)
        self.status_code = status_code
        self.reason = reason
        self.headers = headers or {}
        self.response_text = response_text


class GraphQLCancelledError(GraphQLTransportError):
    """Raised when a request is cancelled through its cancel event."""

    kind = ErrorKind.CANCELLED


class GraphQLResponseError(GraphQLClientError):
    """
    Raised by ``GraphQLResponse.ensure_no_errors`` for protocol errors.

    Only the first error entry of the response is carried.

    Attributes:
        error: The first GraphQL error entry of the response
    """

    kind = ErrorKind.PROTOCOL

    def __init__(self, error: "GraphQLError") -> None:
        super().__init__(error.message)
        self.error = error


class FieldConversionError(GraphQLClientError):
    """Raised when a field of the response data is missing or cannot be converted."""

    kind = ErrorKind.FIELD_CONVERSION

    def __init__(
        self,
        message: str,
        field_name: str,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.original_error = original_error


class ErrorHandler:
    """
    Utility class for categorizing errors.

    Provides methods to convert aiohttp exceptions to client exceptions and
    to determine the kind of any failure raised out of a request.
    """

    @staticmethod
    def handle_aiohttp_error(
        error: BaseException, url: Optional[str] = None
    ) -> GraphQLTransportError:
        """
        Convert aiohttp and timeout exceptions to a transport error.

        Args:
            error: The original exception
            url: The URL that caused the error

        Returns:
            GraphQLTransportError wrapping the original exception
        """
        if isinstance(error, asyncio.TimeoutError):
            message = f"Request timed out: {error}"
        elif isinstance(error, aiohttp.ClientSSLError):
            message = f"SSL error: {error}"
        elif isinstance(error, aiohttp.ClientConnectionError):
            message = f"Connection error: {error}"
        elif isinstance(error, aiohttp.ClientPayloadError):
            message = f"Payload error: {error}"
        else:
            message = f"Unexpected network error: {error}"

        return GraphQLTransportError(message, url=url, original_error=error)

    @staticmethod
    def classify(error: BaseException) -> ErrorKind:
        """
        Determine the kind of an exception raised by the client.

        Decoder errors are raised unchanged by the client, so they are
        recognised here as body-parse failures.

        Args:
            error: The exception to classify

        Returns:
            The ErrorKind of the exception
        """
        if isinstance(error, GraphQLClientError):
            return error.kind

        if isinstance(error, (json.JSONDecodeError, ValidationError)):
            return ErrorKind.BODY_PARSE

        if isinstance(error, asyncio.CancelledError):
            return ErrorKind.CANCELLED

        if isinstance(error, (aiohttp.ClientError, asyncio.TimeoutError)):
            return ErrorKind.TRANSPORT

        return ErrorKind.UNKNOWN

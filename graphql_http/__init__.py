"""
GraphQL-over-HTTP client transport.

This package sends GraphQL operations as HTTP GET or POST requests and
decodes the replies into typed responses that separate data from
protocol-level errors.
"""

from .client import GraphQLClient
from .exceptions import (
    ErrorHandler,
    ErrorKind,
    FieldConversionError,
    GraphQLCancelledError,
    GraphQLClientError,
    GraphQLHttpError,
    GraphQLResponseError,
    GraphQLTransportError,
    InvalidArgumentError,
)
from .logging import SensitiveDataFilter, StructuredFormatter, setup_logging
from .models import (
    GraphQLError,
    GraphQLErrorLocation,
    GraphQLRequest,
    GraphQLResponse,
)
from .options import (
    DEFAULT_MEDIA_TYPE,
    GraphQLClientOptions,
    NamingConvention,
    SerializationSettings,
)

__version__ = "1.0.0"

__all__ = [
    # Client
    "GraphQLClient",
    # Models
    "GraphQLRequest",
    "GraphQLResponse",
    "GraphQLError",
    "GraphQLErrorLocation",
    # Options
    "GraphQLClientOptions",
    "SerializationSettings",
    "NamingConvention",
    "DEFAULT_MEDIA_TYPE",
    # Exceptions
    "ErrorKind",
    "ErrorHandler",
    "GraphQLClientError",
    "InvalidArgumentError",
    "GraphQLTransportError",
    "GraphQLHttpError",
    "GraphQLCancelledError",
    "GraphQLResponseError",
    "FieldConversionError",
    # Logging
    "setup_logging",
    "SensitiveDataFilter",
    "StructuredFormatter",
]

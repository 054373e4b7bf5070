"""
GraphQL models and data structures.

This module defines the request and response envelopes exchanged with a
GraphQL-over-HTTP endpoint. See
https://graphql.org/learn/serving-over-http/ for the wire shapes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .exceptions import FieldConversionError, GraphQLResponseError

T = TypeVar("T")

# Decoded JSON: dict / list / str / int / float / bool / None
JSONValue = Any


class GraphQLRequest(BaseModel):
    """A single GraphQL operation, optionally named and parameterized."""

    query: str = Field(description="GraphQL document")
    operation_name: Optional[str] = Field(
        default=None, description="Operation to run when the document has several"
    )
    variables: Optional[Dict[str, Any]] = Field(
        default=None, description="Variable values keyed by variable name"
    )

    model_config = ConfigDict(frozen=True)


class GraphQLErrorLocation(BaseModel):
    """Position in the GraphQL document an error refers to."""

    line: int
    column: int

    model_config = ConfigDict(frozen=True)


class GraphQLError(BaseModel):
    """An entry of the ``errors`` array of a GraphQL response."""

    message: str
    locations: Optional[List[GraphQLErrorLocation]] = None
    path: Optional[List[Union[str, int]]] = None
    extensions: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True)


class GraphQLResponse(BaseModel):
    """
    Response of a GraphQLRequest.

    ``data`` is kept as decoded JSON since its shape depends on the query;
    use ``get_data_field_as`` to convert parts of it into typed values.
    Success is decided by ``errors`` alone, never by the HTTP status.
    """

    data: JSONValue = None
    errors: Optional[List[GraphQLError]] = None
    extensions: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True)

    @property
    def error_messages(self) -> List[str]:
        """Get list of error messages."""
        return [error.message for error in self.errors or []]

    def is_success(self) -> bool:
        """True if the response carries no errors."""
        return not self.errors

    def ensure_no_errors(self) -> None:
        """
        Raise if this response contains any errors.

        Raises:
            GraphQLResponseError: Carrying the first error entry
        """
        if self.errors:
            raise GraphQLResponseError(self.errors[0])

    def get_data_field_as(self, field_name: str, type_: Type[T]) -> T:
        """
        Get a field of ``data`` converted to the given type.

        Args:
            field_name: Name of the top-level field in ``data``
            type_: Target type, anything pydantic can validate into

        Returns:
            The converted field value

        Raises:
            FieldConversionError: If the field is absent or not convertible
        """
        if not isinstance(self.data, dict):
            raise FieldConversionError(
                f"Response data is not an object, cannot read field '{field_name}'",
                field_name,
            )
        if field_name not in self.data:
            raise FieldConversionError(
                f"Field '{field_name}' not present in response data", field_name
            )

        try:
            return TypeAdapter(type_).validate_python(self.data[field_name])
        except ValidationError as e:
            raise FieldConversionError(
                f"Cannot convert field '{field_name}' to {getattr(type_, '__name__', type_)}",
                field_name,
                original_error=e,
            ) from e

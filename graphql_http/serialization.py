"""
Encoding of GraphQL requests and decoding of GraphQL responses.

Envelope keys follow the configured naming convention; user content
(``variables`` keys and everything below ``data`` or ``extensions``) is
passed through untouched.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from .models import GraphQLError, GraphQLRequest, GraphQLResponse
from .options import NamingConvention, SerializationSettings

_REQUEST_FIELDS = ("query", "operation_name", "variables")
_RESPONSE_FIELDS = tuple(GraphQLResponse.model_fields)
_ERROR_FIELDS = tuple(GraphQLError.model_fields)


def _rename_keys(
    payload: Dict[str, Any], fields: Iterable[str], naming: NamingConvention
) -> Dict[str, Any]:
    """Map wire keys of a decoded object back to field names; unknown keys are kept."""
    wire_to_field = {naming.apply(name): name for name in fields}
    return {wire_to_field.get(key, key): value for key, value in payload.items()}


def request_to_dict(request: GraphQLRequest, naming: NamingConvention) -> Dict[str, Any]:
    """
    Build the JSON-ready envelope of a request.

    Absent ``operation_name`` and ``variables`` are omitted.
    """
    result: Dict[str, Any] = {}
    for name in _REQUEST_FIELDS:
        value = getattr(request, name)
        if value is not None:
            result[naming.apply(name)] = value
    return result


def encode_request(request: GraphQLRequest, settings: SerializationSettings) -> str:
    """Serialize the whole request as a JSON POST body."""
    return settings.dumps(request_to_dict(request, settings.naming))


def build_get_query_string(
    request: GraphQLRequest, settings: SerializationSettings
) -> str:
    """
    Build the query string of a GET request.

    Parameters are always written in the order query, operationName,
    variables. Values are not percent-encoded here; the HTTP layer quotes
    whatever the URL requires.

    Args:
        request: The request to encode
        settings: Serialization settings providing the JSON encoder

    Returns:
        Query string without the leading "?"
    """
    parts: List[str] = [f"query={request.query}"]
    if request.operation_name is not None:
        parts.append(f"operationName={request.operation_name}")
    if request.variables is not None:
        parts.append(f"variables={settings.dumps(request.variables)}")
    return "&".join(parts)


def decode_response(text: str, settings: SerializationSettings) -> GraphQLResponse:
    """
    Decode a response body into a GraphQLResponse.

    Errors raised by the decode hook (``json.JSONDecodeError`` by default)
    propagate unchanged.
    """
    return build_response(settings.loads(text), settings)


def build_response(payload: Any, settings: SerializationSettings) -> GraphQLResponse:
    """
    Validate a decoded JSON document as a GraphQLResponse.

    Raises:
        pydantic.ValidationError: If the document does not have the response shape
    """
    if isinstance(payload, dict):
        payload = _rename_keys(payload, _RESPONSE_FIELDS, settings.naming)
        errors = payload.get("errors")
        if isinstance(errors, list):
            payload["errors"] = [
                _rename_keys(entry, _ERROR_FIELDS, settings.naming)
                if isinstance(entry, dict)
                else entry
                for entry in errors
            ]
    return GraphQLResponse.model_validate(payload)

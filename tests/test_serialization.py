"""
Tests for request encoding and response decoding.
"""

import json

import pytest
from pydantic import ValidationError

from graphql_http import (
    GraphQLRequest,
    NamingConvention,
    SerializationSettings,
)
from graphql_http.serialization import (
    build_get_query_string,
    decode_response,
    encode_request,
)


class TestGetQueryString:
    """Test GET query string construction."""

    def test_query_only(self):
        """Test bare request encodes only the query."""
        request = GraphQLRequest(query="{ hero { name } }")

        assert build_get_query_string(request, SerializationSettings()) == "query={ hero { name } }"

    def test_parameter_order(self):
        """Test query, operationName and variables are written in that order."""
        request = GraphQLRequest(
            query="query Hero($ep: Episode) { hero(episode: $ep) { name } }",
            operation_name="Hero",
            variables={"ep": "JEDI", "limit": 2},
        )

        query_string = build_get_query_string(request, SerializationSettings())

        assert query_string == (
            "query=query Hero($ep: Episode) { hero(episode: $ep) { name } }"
            "&operationName=Hero"
            '&variables={"ep":"JEDI","limit":2}'
        )

    def test_variables_without_operation_name(self):
        """Test operationName is skipped when absent."""
        request = GraphQLRequest(query="q", variables={"id": "1"})

        assert build_get_query_string(request, SerializationSettings()) == 'query=q&variables={"id":"1"}'

    def test_operation_name_without_variables(self):
        """Test variables are skipped when absent."""
        request = GraphQLRequest(query="q", operation_name="Op")

        assert build_get_query_string(request, SerializationSettings()) == "query=q&operationName=Op"

    def test_empty_variables_are_encoded(self):
        """Test an empty variables mapping is still present."""
        request = GraphQLRequest(query="q", variables={})

        assert build_get_query_string(request, SerializationSettings()) == "query=q&variables={}"


class TestEncodeRequest:
    """Test POST body construction."""

    def test_camel_case_body(self):
        """Test default convention writes operationName."""
        request = GraphQLRequest(query="q", operation_name="X", variables={"first_name": "Luke"})

        body = json.loads(encode_request(request, SerializationSettings()))

        assert body == {"query": "q", "operationName": "X", "variables": {"first_name": "Luke"}}
        assert "operation_name" not in body

    def test_snake_case_body(self):
        """Test snake case convention writes operation_name."""
        settings = SerializationSettings(naming=NamingConvention.SNAKE_CASE)
        request = GraphQLRequest(query="q", operation_name="X")

        body = json.loads(encode_request(request, settings))

        assert body == {"query": "q", "operation_name": "X"}

    def test_absent_fields_omitted(self):
        """Test bare request only carries the query."""
        body = json.loads(encode_request(GraphQLRequest(query="q"), SerializationSettings()))

        assert body == {"query": "q"}

    def test_key_order(self):
        """Test envelope keys are written query first."""
        request = GraphQLRequest(query="q", operation_name="X", variables={"a": 1})

        encoded = encode_request(request, SerializationSettings())

        assert encoded == '{"query":"q","operationName":"X","variables":{"a":1}}'


class TestDecodeResponse:
    """Test response body decoding."""

    def test_data_payload(self):
        """Test data is kept as a JSON tree."""
        response = decode_response('{"data":{"hero":{"name":"R2-D2"}}}', SerializationSettings())

        assert response.data["hero"]["name"] == "R2-D2"
        assert response.errors is None
        assert response.is_success()

    def test_errors_payload(self):
        """Test errors are decoded into GraphQLError entries."""
        body = (
            '{"data":null,"errors":[{"message":"Cannot query field \\"x\\"",'
            '"locations":[{"line":1,"column":3}],"extensions":{"code":"E1"}}]}'
        )

        response = decode_response(body, SerializationSettings())

        assert not response.is_success()
        assert response.errors[0].message == 'Cannot query field "x"'
        assert response.errors[0].locations[0].column == 3
        assert response.errors[0].extensions == {"code": "E1"}

    def test_pascal_case_keys(self):
        """Test envelope keys are mapped back through the convention."""
        settings = SerializationSettings(naming=NamingConvention.PASCAL_CASE)
        body = '{"Data":{"hero":{"Name":"R2-D2"}},"Errors":[{"Message":"partial"}]}'

        response = decode_response(body, settings)

        assert response.data == {"hero": {"Name": "R2-D2"}}
        assert response.errors[0].message == "partial"

    def test_extensions_payload(self):
        """Test top-level extensions are kept."""
        response = decode_response('{"data":{},"extensions":{"cost":3}}', SerializationSettings())

        assert response.extensions == {"cost": 3}

    def test_empty_object(self):
        """Test object with neither data nor errors decodes."""
        response = decode_response("{}", SerializationSettings())

        assert response.data is None
        assert response.errors is None

    def test_malformed_json(self):
        """Test decoder errors propagate unchanged."""
        with pytest.raises(json.JSONDecodeError):
            decode_response("<html>oops</html>", SerializationSettings())

    def test_wrong_shape(self):
        """Test JSON without the response shape fails validation."""
        with pytest.raises(ValidationError):
            decode_response('[{"data":1}]', SerializationSettings())

"""
GraphQL client implementation.

This module provides a GraphQL-over-HTTP client that sends operations as
GET query strings or POST JSON bodies and decodes the replies into
``GraphQLResponse`` objects.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from .exceptions import (
    ErrorHandler,
    GraphQLCancelledError,
    GraphQLHttpError,
    InvalidArgumentError,
)
from .models import GraphQLRequest, GraphQLResponse
from .options import GraphQLClientOptions
from .serialization import build_get_query_string, decode_response, encode_request

logger = logging.getLogger(__name__)


class GraphQLClient:
    """
    Client to access GraphQL endpoints over HTTP.

    The client holds no per-call state and no cache, so one instance can
    serve concurrent calls. Every call performs exactly one HTTP exchange.

    Examples:
        Query via POST:
        ```python
        async with GraphQLClient("https://swapi.example.com/graphql") as client:
            response = await client.post(
                GraphQLRequest(
                    query="query Hero($episode: Episode) { hero(episode: $episode) { name } }",
                    operation_name="Hero",
                    variables={"episode": "JEDI"},
                )
            )
            response.ensure_no_errors()
            hero = response.get_data_field_as("hero", Hero)
        ```

        Reusing an existing session and cancelling a call:
        ```python
        async with aiohttp.ClientSession() as session:
            client = GraphQLClient(endpoint, session=session)
            cancel = asyncio.Event()
            task = asyncio.create_task(client.get_query("{ hero { name } }", cancel))
            cancel.set()
            await task  # raises GraphQLCancelledError
        ```
    """

    def __init__(
        self,
        endpoint: str,
        session: Optional[aiohttp.ClientSession] = None,
        options: Optional[GraphQLClientOptions] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize GraphQL client.

        Args:
            endpoint: Base endpoint URL of the GraphQL server
            session: HTTP session to use; one is created and owned if omitted
            options: Client options, ``GraphQLClientOptions()`` if omitted
            headers: Default headers sent with every request
        """
        if endpoint is None:
            raise InvalidArgumentError("endpoint")

        self.endpoint = str(endpoint)
        self.options = options if options is not None else GraphQLClientOptions()
        self._headers: Dict[str, str] = dict(headers or {})
        self._session = session
        self._owns_session = session is None

    @property
    def options(self) -> GraphQLClientOptions:
        """The options to be used."""
        return self._options

    @options.setter
    def options(self, value: GraphQLClientOptions) -> None:
        if value is None:
            raise InvalidArgumentError("options")
        if not isinstance(value, GraphQLClientOptions):
            raise InvalidArgumentError(
                "options", f"options must be GraphQLClientOptions, got {type(value).__name__}"
            )
        self._options = value

    @property
    def default_request_headers(self) -> Dict[str, str]:
        """Headers sent with each request."""
        return dict(self._headers)

    async def __aenter__(self) -> "GraphQLClient":
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(
        self,
        _exc_type: Optional[type[BaseException]],
        _exc_val: Optional[BaseException],
        _exc_tb: Optional[Any],
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            if not self._session.closed:
                await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(raise_for_status=False)
            self._owns_session = True
        return self._session

    async def get_query(
        self, query: str, cancel_event: Optional[asyncio.Event] = None
    ) -> GraphQLResponse:
        """
        Send a query via GET.

        Args:
            query: The GraphQL document
            cancel_event: Event that cancels the call when set

        Returns:
            The response
        """
        if query is None:
            raise InvalidArgumentError("query")
        return await self.get(GraphQLRequest(query=query), cancel_event)

    async def get(
        self, request: GraphQLRequest, cancel_event: Optional[asyncio.Event] = None
    ) -> GraphQLResponse:
        """
        Send a GraphQLRequest via GET.

        The request is encoded into the query string as query, then
        operationName, then variables.

        Args:
            request: The request
            cancel_event: Event that cancels the call when set

        Returns:
            The response

        Raises:
            InvalidArgumentError: If request or its query is None
            GraphQLHttpError: On a non-success status with an unparseable body
            GraphQLCancelledError: If cancel_event is set before completion
            GraphQLTransportError: On network failures
        """
        self._validate_request(request)

        query_string = build_get_query_string(request, self.options.serialization)
        url = f"{self.endpoint}?{query_string}"
        return await self._send("GET", url, cancel_event, headers=self._headers)

    async def post_query(
        self, query: str, cancel_event: Optional[asyncio.Event] = None
    ) -> GraphQLResponse:
        """
        Send a query via POST.

        Args:
            query: The GraphQL document
            cancel_event: Event that cancels the call when set

        Returns:
            The response
        """
        if query is None:
            raise InvalidArgumentError("query")
        return await self.post(GraphQLRequest(query=query), cancel_event)

    async def post(
        self, request: GraphQLRequest, cancel_event: Optional[asyncio.Event] = None
    ) -> GraphQLResponse:
        """
        Send a GraphQLRequest via POST.

        The whole request is serialized as the JSON body using the configured
        naming convention and sent with the configured media type.

        Args:
            request: The request
            cancel_event: Event that cancels the call when set

        Returns:
            The response

        Raises:
            InvalidArgumentError: If request or its query is None
            GraphQLHttpError: On a non-success status with an unparseable body
            GraphQLCancelledError: If cancel_event is set before completion
            GraphQLTransportError: On network failures
        """
        self._validate_request(request)

        options = self.options
        body = encode_request(request, options.serialization).encode(options.charset)
        headers = {**self._headers, "Content-Type": options.media_type}
        return await self._send("POST", self.endpoint, cancel_event, data=body, headers=headers)

    @staticmethod
    def _validate_request(request: GraphQLRequest) -> None:
        if request is None:
            raise InvalidArgumentError("request")
        if request.query is None:
            raise InvalidArgumentError("request.query")

    async def _send(
        self,
        method: str,
        url: str,
        cancel_event: Optional[asyncio.Event],
        **kwargs: Any,
    ) -> GraphQLResponse:
        if cancel_event is None:
            return await self._exchange(method, url, **kwargs)

        if cancel_event.is_set():
            raise GraphQLCancelledError("Request cancelled before dispatch", url=url)

        exchange = asyncio.ensure_future(self._exchange(method, url, **kwargs))
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({exchange, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not exchange.done():
                exchange.cancel()
                # Let the exchange release its response before returning
                await asyncio.wait({exchange})

        if exchange.cancelled():
            logger.debug("GraphQL %s request to %s cancelled", method, url)
            raise GraphQLCancelledError("Request cancelled", url=url)
        return exchange.result()

    async def _exchange(self, method: str, url: str, **kwargs: Any) -> GraphQLResponse:
        session = self._get_session()
        logger.debug("Sending GraphQL %s request to %s", method, url)
        try:
            async with session.request(method, url, **kwargs) as response:
                logger.debug("GraphQL %s %s returned %s", method, url, response.status)
                return await self._read_response(response)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ErrorHandler.handle_aiohttp_error(e, url) from e

    async def _read_response(self, response: aiohttp.ClientResponse) -> GraphQLResponse:
        """
        Read a response body into a GraphQLResponse.

        A body that parses as a GraphQL response is returned whatever the
        status. A body that does not (malformed JSON, or JSON without the
        response shape) is re-raised unchanged on a 2xx status and reported
        as a GraphQLHttpError otherwise.
        """
        text = await response.text(errors="replace")
        try:
            return decode_response(text, self.options.serialization)
        except ValueError as e:
            if 200 <= response.status < 300:
                raise
            logger.debug(
                "Unparseable body with HTTP status %s from %s", response.status, response.url
            )
            raise GraphQLHttpError(
                response.status,
                response_text=text,
                reason=response.reason,
                url=str(response.url),
                headers=dict(response.headers),
                original_error=e,
            ) from e

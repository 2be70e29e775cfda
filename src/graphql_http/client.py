"""GraphQL HTTP client."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx

from .config import ClientConfig
from .context import Context
from .decoding import decode_into, parse_envelope
from .encoding import (
    JSON_CONTENT_TYPE,
    EncodedBody,
    encode_json,
    encode_multipart_form,
    encode_multipart_request_spec,
)
from .exceptions import (
    GraphQlClientError,
    GraphQlClientErrorCodes,
    GraphQlErrors,
    NonOkStatusError,
)
from .logger import DiagnosticSink, noop_logger
from .types import Request

T = TypeVar("T")

_PROTOCOL_HEADERS = frozenset({"content-type", "accept"})


class Client:
    """Client for a GraphQL endpoint over HTTP.

    Safe to share across concurrent ``run`` calls as long as the underlying
    ``httpx.AsyncClient`` is.

        client = Client("https://example.com/graphql")
        req = Request("query ($key: String!) { items(id: $key) { field1 } }")
        req.var("key", "value")
        data = await client.run(req)
    """

    def __init__(
        self,
        endpoint: str,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        logger: DiagnosticSink | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._config = config or ClientConfig()
        self._logger = logger if logger is not None else noop_logger()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout_seconds)
        if self._config.has_conflicting_modes:
            self._logger.warning(
                "graphql.config.conflicting_modes",
                preferred="use_multipart_form",
                ignored="use_multipart_request_spec",
            )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the transport if it was created by this client."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *_exc_info: Any) -> None:
        await self.aclose()

    async def run(
        self,
        request: Request,
        result: Any = None,
        ctx: Context | None = None,
    ) -> Any:
        """Execute the request and decode the ``data`` field into ``result``.

        Pass ``result=None`` to skip decoding into a target; the decoded
        ``data`` value is returned either way. Server-side GraphQL errors
        raise ``GraphQlErrors`` even when ``data`` was decoded.
        """
        if ctx is not None:
            reason = ctx.err()
            if reason is not None:
                raise GraphQlClientError(reason.code, reason.message)
        if request.files and not self._config.supports_files:
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.CONFIGURATION,
                message="cannot send files without a multipart mode enabled",
            )
        body = self._encode(request)
        return await self._execute(request, body, result, ctx)

    def _encode(self, request: Request) -> EncodedBody:
        if self._config.use_multipart_form:
            body = encode_multipart_form(request)
            self._logger.debug(
                "graphql.request",
                query=request.query,
                variables=request.variables,
            )
            self._logger.debug(
                "graphql.request.files",
                count=len(request.files),
                fields=body.field_names,
            )
            return body
        if self._config.use_multipart_request_spec and request.files:
            body = encode_multipart_request_spec(request)
            for name, value in body.parts or []:
                if value[0] is None:
                    self._logger.debug("graphql.request.field", field=name, value=value[1])
            self._logger.debug(
                "graphql.request.files",
                count=len(request.files),
                fields=body.field_names,
            )
            return body
        body = encode_json(request)
        self._logger.debug(
            "graphql.request",
            query=request.query,
            variables=request.variables,
        )
        return body

    def _headers(self, request: Request, content_type: str) -> httpx.Headers:
        items = [("Content-Type", content_type), ("Accept", JSON_CONTENT_TYPE)]
        if self._config.close_request_body:
            items.append(("Connection", "close"))
        for key, value in request.headers.multi_items():
            if key.lower() in _PROTOCOL_HEADERS:
                continue
            items.append((key, value))
        return httpx.Headers(items)

    async def _execute(
        self,
        request: Request,
        body: EncodedBody,
        result: Any,
        ctx: Context | None,
    ) -> Any:
        http_request = self._http.build_request(
            "POST",
            self._endpoint,
            headers=self._headers(request, body.content_type),
            content=body.content,
            files=body.parts,
        )
        self._logger.debug(
            "graphql.request.headers",
            headers=list(http_request.headers.multi_items()),
        )

        status_code, payload = await self._with_context(self._exchange(http_request), ctx)
        self._logger.debug(
            "graphql.response",
            status_code=status_code,
            body=payload.decode("utf-8", errors="replace"),
        )

        try:
            envelope = parse_envelope(payload)
            decode_into(result, envelope.data)
        except GraphQlClientError as e:
            if status_code != httpx.codes.OK:
                raise NonOkStatusError(status_code, cause=e) from e
            raise
        if envelope.errors:
            raise GraphQlErrors(envelope.errors)
        return envelope.data

    async def _exchange(self, http_request: httpx.Request) -> tuple[int, bytes]:
        try:
            response = await self._http.send(http_request, stream=True)
        except Exception as e:
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.TRANSPORT,
                message=f"send request: {e}",
                cause=e,
            ) from e
        try:
            payload = await response.aread()
        except Exception as e:
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.READ_BODY,
                message=f"reading body: {e}",
                cause=e,
            ) from e
        finally:
            await response.aclose()
        return response.status_code, payload

    async def _with_context(self, aw: Awaitable[T], ctx: Context | None) -> T:
        """``aw`` を ctx のキャンセルと競合させる。キャンセル側が先なら aw を中断する。"""
        if ctx is None:
            return await aw
        exchange = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(ctx.wait())
        try:
            await asyncio.wait({exchange, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            exchange.cancel()
            raise
        finally:
            waiter.cancel()
        if exchange.done():
            return exchange.result()
        exchange.cancel()
        try:
            await exchange
        except asyncio.CancelledError:
            pass
        reason = waiter.result()
        raise GraphQlClientError(reason.code, reason.message)

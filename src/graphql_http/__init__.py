"""Low level GraphQL client over HTTP."""

from .client import Client
from .config import ClientConfig
from .context import Context
from .decoding import decode_into, parse_envelope
from .encoding import EncodedBody
from .exceptions import (
    ErrorLocation,
    GraphQlClientError,
    GraphQlClientErrorCodes,
    GraphQlError,
    GraphQlErrors,
    NonOkStatusError,
)
from .logger import DiagnosticSink, new_logger, noop_logger
from .types import File, GraphQlResponse, Request

__all__ = [
    "Client",
    "ClientConfig",
    "Context",
    "DiagnosticSink",
    "EncodedBody",
    "ErrorLocation",
    "File",
    "GraphQlClientError",
    "GraphQlClientErrorCodes",
    "GraphQlError",
    "GraphQlErrors",
    "GraphQlResponse",
    "NonOkStatusError",
    "Request",
    "decode_into",
    "new_logger",
    "noop_logger",
    "parse_envelope",
]

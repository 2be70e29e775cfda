"""graphql_http テスト共通ヘルパー"""

from __future__ import annotations

import json
from email import policy
from email.parser import BytesParser
from typing import Any

import httpx
import pytest

ENDPOINT = "http://graphql-server:8080/graphql"


def parse_multipart(request: httpx.Request) -> list[tuple[str, str | None, bytes]]:
    """multipart リクエストを (name, filename, payload) のリストにする。"""
    raw = (
        b"Content-Type: "
        + request.headers["content-type"].encode()
        + b"\r\n\r\n"
        + request.content
    )
    message = BytesParser(policy=policy.HTTP).parsebytes(raw)
    return [
        (
            part.get_param("name", header="content-disposition"),
            part.get_filename(),
            part.get_payload(decode=True),
        )
        for part in message.iter_parts()
    ]


def json_body(request: httpx.Request) -> Any:
    return json.loads(request.content)


class RecordingLogger:
    """DiagnosticSink のテスト用実装。"""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, event: str, **kw: Any) -> None:
        self.events.append(("debug", event, kw))

    def warning(self, event: str, **kw: Any) -> None:
        self.events.append(("warning", event, kw))

    def named(self, event: str) -> list[dict[str, Any]]:
        return [kw for _, name, kw in self.events if name == event]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()

"""リクエストボディのエンコード戦略

戦略はいずれも呼び出し単位の ``EncodedBody`` を返す。呼び出し側の Request には
何も書き込まない。
"""

from __future__ import annotations

import json
import secrets
from dataclasses import dataclass
from typing import IO, Any

from .exceptions import GraphQlClientError, GraphQlClientErrorCodes
from .types import Request

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# (field, (filename, content)) または (field, (filename, content, content_type))
MultipartPart = tuple[str, tuple[Any, ...]]


@dataclass(frozen=True)
class EncodedBody:
    """1 回の run で送るボディと Content-Type。

    ``content`` (JSON) と ``parts`` (multipart) のどちらか一方だけを持つ。
    multipart の境界文字列は ``content_type`` に含まれる。
    """

    content_type: str
    content: bytes | None = None
    parts: list[MultipartPart] | None = None

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self.parts or []]


def _dumps(value: Any, what: str) -> str:
    try:
        return json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise GraphQlClientError(
            code=GraphQlClientErrorCodes.ENCODE,
            message=f"encode {what}: {e}",
            cause=e,
        ) from e


def _multipart_content_type() -> str:
    return f"multipart/form-data; boundary={secrets.token_hex(16)}"


def _text_part(name: str, value: str) -> MultipartPart:
    # filename なしのパートは通常のフォームフィールドとして送られる。
    return (name, (None, value))


class _RemainingReader:
    """読み取りだけを公開するラッパー。

    httpx はシーク可能なファイルを先頭に巻き戻してから送るため、seek を隠して
    呼び出し側が読み進めた位置から送らせる。
    """

    def __init__(self, reader: IO[bytes]) -> None:
        self._reader = reader

    def read(self, size: int = -1) -> bytes:
        return self._reader.read(size)


def _file_part(name: str, filename: str, reader: IO[bytes] | bytes, content_type: str) -> MultipartPart:
    content = reader if isinstance(reader, bytes) else _RemainingReader(reader)
    return (name, (filename, content, content_type))


def encode_json(request: Request) -> EncodedBody:
    """``{"query": ..., "variables": ...}`` を 1 つの JSON ドキュメントにする。"""
    body = _dumps({"query": request.query, "variables": request.variables}, "body")
    return EncodedBody(content_type=JSON_CONTENT_TYPE, content=body.encode("utf-8"))


def encode_multipart_form(request: Request) -> EncodedBody:
    """query / variables フィールドとファイルごとのパートを持つ multipart ボディ。

    変数が 1 つもなければ variables フィールドは省略する。
    """
    parts: list[MultipartPart] = [_text_part("query", request.query)]
    if request.variables:
        parts.append(_text_part("variables", _dumps(request.variables, "variables")))
    for f in request.files:
        parts.append(_file_part(f.field, f.name, f.reader, f.content_type))
    return EncodedBody(content_type=_multipart_content_type(), parts=parts)


def multipart_request_spec_operations(
    request: Request,
) -> tuple[dict[str, Any], dict[str, list[str]]]:
    """multipart request spec の operations と map を組み立てる。

    ファイルが 1 つなら ``variables.file``、2 つ以上なら宣言順に
    ``variables.files.<index>`` を指す。同じフィールド名が繰り返された場合は
    後のファイルが map のエントリを上書きする。
    """
    files = request.files
    mapping: dict[str, list[str]] = {}
    variables: dict[str, Any]
    if not files:
        variables = {}
    elif len(files) == 1:
        variables = {"file": None}
        mapping[files[0].field] = ["variables.file"]
    else:
        variables = {"files": [None] * len(files)}
        for index, f in enumerate(files):
            mapping[f.field] = [f"variables.files.{index}"]
    operations = {"query": request.query, "variables": variables}
    return operations, mapping


def encode_multipart_request_spec(request: Request) -> EncodedBody:
    """GraphQL multipart request spec に従った multipart ボディ。

    https://github.com/jaydenseric/graphql-multipart-request-spec

    変数とファイルの併用は表現できないため CONFIGURATION エラーにする。
    各ファイルの後ろには単純な multipart サーバー向けに
    ``<field>=@<filename>`` のテキストフィールドも付ける。
    """
    if request.variables:
        raise GraphQlClientError(
            code=GraphQlClientErrorCodes.CONFIGURATION,
            message=(
                "variables are not supported with the multipart request spec: "
                "https://github.com/jaydenseric/graphql-multipart-request-spec/issues/22"
            ),
        )
    operations, mapping = multipart_request_spec_operations(request)
    parts: list[MultipartPart] = [
        _text_part("operations", _dumps(operations, "operations")),
        _text_part("map", _dumps(mapping, "map")),
    ]
    for f in request.files:
        parts.append(_file_part(f.field, f.name, f.reader, f.content_type))
        parts.append(_text_part(f.field, f"@{f.name}"))
    return EncodedBody(content_type=_multipart_content_type(), parts=parts)

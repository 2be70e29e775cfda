"""graphql_http ライブラリの例外型定義"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


class GraphQlClientError(Exception):
    """graphql_http ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class GraphQlClientErrorCodes:
    """GraphQlClientError のエラーコード定数。"""

    CANCELLED: str = "CANCELLED"
    DEADLINE_EXCEEDED: str = "DEADLINE_EXCEEDED"
    CONFIGURATION: str = "CONFIGURATION"
    ENCODE: str = "ENCODE"
    TRANSPORT: str = "TRANSPORT"
    READ_BODY: str = "READ_BODY"
    DECODE: str = "DECODE"
    NON_200_STATUS: str = "NON_200_STATUS"
    GRAPHQL: str = "GRAPHQL"


class NonOkStatusError(GraphQlClientError):
    """200 以外のステータスでレスポンスをデコードできなかったエラー。"""

    def __init__(self, status_code: int, cause: BaseException | None = None) -> None:
        self.status_code = status_code
        super().__init__(
            GraphQlClientErrorCodes.NON_200_STATUS,
            f"graphql: server returned a non-200 status code: {status_code}",
            cause,
        )

    def __str__(self) -> str:
        return self.message


@dataclass
class ErrorLocation:
    """Error location in a GraphQL document."""

    line: int
    column: int


@dataclass(eq=False)
class GraphQlError(Exception):
    """サーバーが返した単一の GraphQL エラー。"""

    message: str
    locations: list[ErrorLocation] = field(default_factory=list)
    path: list[str | int] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return f"graphql: {self.message}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphQlError:
        return cls(
            message=data.get("message") or "",
            locations=[
                ErrorLocation(line=loc.get("line", 0), column=loc.get("column", 0))
                for loc in data.get("locations") or []
            ],
            path=list(data.get("path") or []),
            extensions=dict(data.get("extensions") or {}),
        )


class GraphQlErrors(GraphQlClientError):
    """サーバーが返した GraphQL エラーの集約。

    メッセージはサーバーの返した順に " | " で連結される。個々の
    location / path / extensions は ``errors`` から参照する。
    """

    def __init__(self, errors: list[GraphQlError]) -> None:
        self.errors = list(errors)
        super().__init__(GraphQlClientErrorCodes.GRAPHQL, self._render())

    def _render(self) -> str:
        if not self.errors:
            return "no error"
        return "graphql: " + " | ".join(e.message for e in self.errors)

    def __str__(self) -> str:
        return self._render()

    def __iter__(self) -> Iterator[GraphQlError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __getitem__(self, index: int) -> GraphQlError:
        return self.errors[index]

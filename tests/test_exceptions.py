"""エラーモデルのユニットテスト"""

from graphql_http import (
    ErrorLocation,
    GraphQlClientError,
    GraphQlClientErrorCodes,
    GraphQlError,
    GraphQlErrors,
    NonOkStatusError,
)


def test_client_error_str_includes_code() -> None:
    err = GraphQlClientError(GraphQlClientErrorCodes.TRANSPORT, "connection refused")
    assert str(err) == "TRANSPORT: connection refused"
    assert err.code == GraphQlClientErrorCodes.TRANSPORT


def test_client_error_keeps_cause() -> None:
    cause = ValueError("boom")
    err = GraphQlClientError(GraphQlClientErrorCodes.DECODE, "decoding response", cause)
    assert err.__cause__ is cause


def test_single_error_message() -> None:
    err = GraphQlError(message="Not found")
    assert str(err) == "graphql: Not found"
    assert err.locations == []
    assert err.path == []
    assert err.extensions == {}


def test_single_error_from_dict() -> None:
    err = GraphQlError.from_dict(
        {
            "message": "Not found",
            "locations": [{"line": 1, "column": 5}],
            "path": ["user", 0, "name"],
            "extensions": {"code": "NOT_FOUND"},
        }
    )
    assert err.locations == [ErrorLocation(line=1, column=5)]
    assert err.path == ["user", 0, "name"]
    assert err.extensions["code"] == "NOT_FOUND"


def test_aggregate_joins_messages_in_order() -> None:
    errs = GraphQlErrors([GraphQlError(message="first"), GraphQlError(message="second")])
    assert str(errs) == "graphql: first | second"
    assert errs.code == GraphQlClientErrorCodes.GRAPHQL
    assert [e.message for e in errs] == ["first", "second"]
    assert len(errs) == 2
    assert errs[1].message == "second"


def test_empty_aggregate() -> None:
    assert str(GraphQlErrors([])) == "no error"


def test_aggregate_is_client_error() -> None:
    assert isinstance(GraphQlErrors([GraphQlError(message="x")]), GraphQlClientError)


def test_non_ok_status_error() -> None:
    err = NonOkStatusError(502)
    assert err.status_code == 502
    assert err.code == GraphQlClientErrorCodes.NON_200_STATUS
    assert str(err) == "graphql: server returned a non-200 status code: 502"

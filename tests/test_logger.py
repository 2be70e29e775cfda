"""ロガーのユニットテスト"""

import io
import json

import httpx
import respx
from conftest import ENDPOINT

from graphql_http import Client, Request, new_logger, noop_logger


def test_new_logger_json_format() -> None:
    """JSON フォーマットでイベントとフィールドが出力されること。"""
    out = io.StringIO()
    logger = new_logger(level="DEBUG", format="json", file=out)
    logger.debug("graphql.request", query="{ x }")
    line = json.loads(out.getvalue())
    assert line["event"] == "graphql.request"
    assert line["query"] == "{ x }"
    assert line["level"] == "debug"
    assert line["logger"] == "graphql_http"


def test_new_logger_text_format() -> None:
    out = io.StringIO()
    logger = new_logger(format="text", file=out)
    logger.warning("graphql.config.conflicting_modes")
    assert "graphql.config.conflicting_modes" in out.getvalue()


def test_new_logger_filters_below_level() -> None:
    out = io.StringIO()
    logger = new_logger(level="INFO", format="json", file=out)
    logger.debug("graphql.response", body="{}")
    assert out.getvalue() == ""


def test_noop_logger_writes_nothing(capsys) -> None:
    logger = noop_logger()
    logger.debug("graphql.request", query="{ x }")
    logger.warning("graphql.config.conflicting_modes")
    assert capsys.readouterr().out == ""


@respx.mock
async def test_client_writes_through_new_logger() -> None:
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={"data": {"x": 1}}))
    out = io.StringIO()
    async with Client(ENDPOINT, logger=new_logger(format="json", file=out)) as client:
        await client.run(Request("{ x }"))
    events = [json.loads(line)["event"] for line in out.getvalue().splitlines()]
    assert events == ["graphql.request", "graphql.request.headers", "graphql.response"]

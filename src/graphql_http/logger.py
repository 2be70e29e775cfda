"""structlog ベースの診断ログ"""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol, TextIO

import structlog


class DiagnosticSink(Protocol):
    """Client が診断情報を書き込むレベル付きロガー。

    structlog の BoundLogger はそのまま渡せる。
    """

    def debug(self, event: str, **kw: Any) -> Any: ...

    def warning(self, event: str, **kw: Any) -> Any: ...


def noop_logger() -> DiagnosticSink:
    """CRITICAL 未満をすべて捨てるロガーを返す。Client のデフォルト。"""
    return structlog.wrap_logger(
        structlog.PrintLogger(),
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
    )


def new_logger(
    level: str = "DEBUG",
    format: str = "text",
    file: TextIO | None = None,
) -> DiagnosticSink:
    """リクエスト/レスポンスを ``file`` (既定は stderr) に書き出すロガーを返す。

    structlog のグローバル設定は変更しない。

    Args:
        level: 出力する最小レベル ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: 出力形式 ("json" or "text")
        file: 出力先
    """
    renderer: structlog.types.Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return structlog.wrap_logger(
        structlog.PrintLogger(file=file or sys.stderr),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.DEBUG)
        ),
        logger="graphql_http",
    )

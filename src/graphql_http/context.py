"""キャンセル可能な実行コンテキスト"""

from __future__ import annotations

import asyncio
import time

from .exceptions import GraphQlClientError, GraphQlClientErrorCodes


class Context:
    """Client.run に渡すキャンセルコンテキスト。

    ``cancel()`` で明示的にキャンセルするか、``timeout`` 秒の期限を設定する。
    run は I/O の前に ``err()`` を確認し、送信中は ``wait()`` と競合させて
    トランスポートの呼び出しを中断する。
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._reason: GraphQlClientError | None = None
        self._event = asyncio.Event()

    @property
    def deadline(self) -> float | None:
        """time.monotonic() 基準の期限。"""
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self.err() is not None

    def cancel(self, reason: str | None = None) -> None:
        """コンテキストをキャンセルする。2 回目以降は何もしない。"""
        self._finish(GraphQlClientErrorCodes.CANCELLED, reason or "context canceled")

    def err(self) -> GraphQlClientError | None:
        """キャンセル理由を返す。キャンセルされていなければ None。"""
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._expire()
        return self._reason

    async def wait(self) -> GraphQlClientError:
        """キャンセルされるまで待ち、その理由を返す。"""
        if self._deadline is None:
            await self._event.wait()
        else:
            remaining = max(self._deadline - time.monotonic(), 0)
            try:
                await asyncio.wait_for(self._event.wait(), timeout=remaining)
            except asyncio.TimeoutError:
                self._expire()
        reason = self.err()
        if reason is None:
            raise RuntimeError("context woke up without a cancellation reason")
        return reason

    def _expire(self) -> None:
        self._finish(GraphQlClientErrorCodes.DEADLINE_EXCEEDED, "context deadline exceeded")

    def _finish(self, code: str, message: str) -> None:
        if self._reason is not None:
            return
        self._reason = GraphQlClientError(code=code, message=message)
        self._event.set()

"""レスポンスエンベロープのデコード"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import MutableMapping
from typing import Any

from .exceptions import GraphQlClientError, GraphQlClientErrorCodes, GraphQlError
from .types import GraphQlResponse


def _decode_error(message: str, cause: BaseException | None = None) -> GraphQlClientError:
    return GraphQlClientError(
        code=GraphQlClientErrorCodes.DECODE,
        message=f"decoding response: {message}",
        cause=cause,
    )


def parse_envelope(body: bytes) -> GraphQlResponse[Any]:
    """``{"data": ..., "errors": [...]}`` をパースする。

    形が合わなければ DECODE エラーを送出する。
    """
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise _decode_error(str(e), e) from e
    if not isinstance(payload, dict):
        raise _decode_error(f"expected a JSON object, got {type(payload).__name__}")

    raw_errors = payload.get("errors")
    if raw_errors is None:
        raw_errors = []
    if not isinstance(raw_errors, list):
        raise _decode_error("errors must be a list")

    errors: list[GraphQlError] = []
    for raw in raw_errors:
        if not isinstance(raw, dict):
            raise _decode_error("each error must be an object")
        locations = raw.get("locations")
        if locations is not None and (
            not isinstance(locations, list)
            or not all(isinstance(loc, dict) for loc in locations)
        ):
            raise _decode_error("error locations must be a list of objects")
        path = raw.get("path")
        if path is not None and not isinstance(path, list):
            raise _decode_error("error path must be a list")
        extensions = raw.get("extensions")
        if extensions is not None and not isinstance(extensions, dict):
            raise _decode_error("error extensions must be an object")
        errors.append(GraphQlError.from_dict(raw))

    return GraphQlResponse(data=payload.get("data"), errors=errors)


def decode_into(target: Any, data: Any) -> None:
    """``data`` を呼び出し側のターゲットに書き込む。

    - None: 何もしない
    - MutableMapping: update で上書き
    - list: 中身を置き換える
    - dataclass インスタンス: 名前が一致する (大文字小文字を区別しない)
      フィールドに代入する。入れ子の dataclass / dict / list には再帰する。

    ``data`` が null の場合ターゲットは変更しない。
    """
    if target is None or data is None:
        return
    if isinstance(target, MutableMapping):
        if not isinstance(data, dict):
            raise _decode_error(f"cannot decode {type(data).__name__} into a mapping")
        target.update(data)
        return
    if isinstance(target, list):
        if not isinstance(data, list):
            raise _decode_error(f"cannot decode {type(data).__name__} into a list")
        target[:] = data
        return
    if dataclasses.is_dataclass(target) and not isinstance(target, type):
        if not isinstance(data, dict):
            raise _decode_error(
                f"cannot decode {type(data).__name__} into {type(target).__name__}"
            )
        _decode_dataclass(target, data)
        return
    raise _decode_error(f"unsupported result target: {type(target).__name__}")


def _decode_dataclass(target: Any, data: dict[str, Any]) -> None:
    by_name = {f.name.lower(): f.name for f in dataclasses.fields(target)}
    for key, value in data.items():
        name = by_name.get(key.lower())
        if name is None:
            continue
        current = getattr(target, name)
        if value is not None and (
            isinstance(current, (MutableMapping, list))
            or (dataclasses.is_dataclass(current) and not isinstance(current, type))
        ):
            decode_into(current, value)
        else:
            setattr(target, name, value)

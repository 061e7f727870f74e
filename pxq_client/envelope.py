"""平台统一响应信封 `{statusCode, comments, data}` 的解析。

- decode_envelope：原始响应体 -> Envelope[T]；JSON 非法、缺字段、类型不符统一视为 DecodeFailure。
- unwrap：data 缺失（或为 null）即平台业务失败，按调用方给出的错误种类抛出。
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import Field, ValidationError

from .errors import ErrorKind, PXQError
from .models import WireModel

T = TypeVar("T")


class Envelope(WireModel, Generic[T]):
    status_code: int = Field(alias="statusCode")
    comments: str
    data: Optional[T] = None


def decode_envelope(raw: Union[bytes, str], data_type: Any) -> Envelope[Any]:
    try:
        return Envelope[data_type].model_validate_json(raw)
    except ValidationError as exc:
        raise PXQError(ErrorKind.DECODE_FAILURE, f"unexpected response shape: {exc.error_count()} error(s)") from exc


def unwrap(envelope: Envelope[T], failure: ErrorKind) -> T:
    if envelope.data is None:
        raise PXQError(failure, envelope.comments)
    return envelope.data


__all__ = ["Envelope", "decode_envelope", "unwrap"]

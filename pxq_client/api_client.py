"""命令共用的调用流水线：构造请求 -> 发送 -> 解析信封 -> 取 data。

不做重试、不做缓存；任何失败都以 PXQError 形式抛出，由调用方决定后续动作。
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .envelope import decode_envelope, unwrap
from .request_builder import ApiRequest, Operation, QueryItems, RequestBuilder


class Transport(Protocol):
    def send(self, request: ApiRequest) -> bytes: ...


class ApiClient:
    def __init__(self, builder: RequestBuilder, transport: Transport) -> None:
        self.builder = builder
        self.transport = transport

    def execute(
        self,
        op: Operation,
        data_type: Any,
        *,
        path_params: Optional[Mapping[str, str]] = None,
        query: Optional[QueryItems] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        request = self.builder.build(op, path_params=path_params, query=query, body=body)
        raw = self.transport.send(request)
        envelope = decode_envelope(raw, data_type)
        return unwrap(envelope, op.failure)


__all__ = ["ApiClient", "Transport"]

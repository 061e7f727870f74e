"""请求构造：把操作描述（Operation）+ 用户参数组装成完整请求。

- src/ver 样板参数在这里统一追加：GET 放在查询串末尾，POST 合并进 JSON body。
  调用方传入的同名 src/ver 一律被配置值覆盖。
- 路径参数与查询值一律百分号编码，关键字等自由文本不会破坏查询串语法。
- 买家接口（auth_required）带 access-token 头；本地没有令牌时直接抛 AuthorizationRequired，不发请求。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

from .config import ClientConfig
from .errors import ErrorKind, PXQError

QueryItems = Sequence[Tuple[str, str]]

ACCESS_TOKEN_HEADER = "access-token"


@dataclass(frozen=True)
class Operation:
    name: str
    method: str
    path: str
    failure: ErrorKind
    auth_required: bool = False
    fixed_query: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ApiRequest:
    method: str
    url: str
    body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)


class RequestBuilder:
    def __init__(self, config: ClientConfig, token_provider: Callable[[], Optional[str]]) -> None:
        self.config = config
        self._token_provider = token_provider

    def boilerplate(self) -> List[Tuple[str, str]]:
        return [("src", self.config.src), ("ver", self.config.ver)]

    def build(
        self,
        op: Operation,
        *,
        path_params: Optional[Mapping[str, str]] = None,
        query: Optional[QueryItems] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> ApiRequest:
        headers: Dict[str, str] = {}
        if op.auth_required:
            token = self._token_provider()
            if not token:
                raise PXQError(ErrorKind.AUTHORIZATION_REQUIRED, f"{op.name} requires login")
            headers[ACCESS_TOKEN_HEADER] = token

        encoded_params = {k: quote(str(v), safe="") for k, v in (path_params or {}).items()}
        path = op.path.format(**encoded_params)

        boilerplate = self.boilerplate()
        reserved = {k for k, _ in boilerplate}
        items: List[Tuple[str, str]] = [
            (k, v) for k, v in list(op.fixed_query) + list(query or ()) if k not in reserved
        ]
        json_body: Optional[Dict[str, Any]] = None
        if op.method == "GET":
            items.extend(boilerplate)
        else:
            json_body = dict(body or {})
            json_body.update(boilerplate)

        url = f"{self.config.base_url}{path}"
        if items:
            url = f"{url}?{urlencode(items, quote_via=quote)}"
        return ApiRequest(method=op.method, url=url, body=json_body, headers=headers)


__all__ = ["Operation", "ApiRequest", "RequestBuilder", "ACCESS_TOKEN_HEADER"]

"""平台 HTTP 传输封装（requests）。

只负责把已构造好的请求发出去并返回原始响应体；连接失败、超时、非 2xx 一律转成
PXQError(TransportFailure)。响应体的解析交给 envelope 模块。
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .errors import ErrorKind, PXQError
from .request_builder import ApiRequest

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0 Safari/537.36"


class HttpTransport:
    def __init__(self, *, timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(self._headers())

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "User-Agent": USER_AGENT}

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        return self._request("GET", url, headers=headers)

    def post(self, url: str, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> bytes:
        return self._request("POST", url, json_body=body, headers=headers)

    def send(self, request: ApiRequest) -> bytes:
        if request.method == "GET":
            return self.get(request.url, request.headers)
        return self.post(request.url, request.body or {}, request.headers)

    def close(self) -> None:
        self.session.close()

    def _request(
        self,
        method: str,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> bytes:
        endpoint = url.split("?", 1)[0]
        logger.debug("%s %s", method, endpoint)
        try:
            resp = self.session.request(method, url, headers=headers, json=json_body, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            logger.warning("%s %s timed out", method, endpoint)
            raise PXQError(ErrorKind.TRANSPORT_FAILURE, "request timed out") from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, endpoint, exc)
            raise PXQError(ErrorKind.TRANSPORT_FAILURE, "network error") from exc

        if not 200 <= resp.status_code < 300:
            logger.warning("%s %s returned HTTP %s", method, endpoint, resp.status_code)
            raise PXQError(ErrorKind.TRANSPORT_FAILURE, f"HTTP {resp.status_code}")
        return resp.content


__all__ = ["HttpTransport"]

"""客户端入口：组合 SessionStore + TokenManager + RequestBuilder + HttpTransport + 命令集。

前端（或 IPC 服务）只需持有一个 PXQApp，通过 app.show / app.user 调用命令。
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from .api_client import ApiClient, Transport
from .config import ClientConfig, get_config
from .http_client import HttpTransport
from .models import SessionTokens
from .request_builder import RequestBuilder
from .session_store import SessionStore
from .show_api import ShowApi
from .token_manager import TokenManager
from .user_api import UserApi


class PXQApp:
    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        store: Optional[SessionStore] = None,
        transport: Optional[Transport] = None,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.events: List[Dict[str, Any]] = []  # 用于测试观测会话状态广播
        self._on_status = on_status

        self.config = config or get_config()
        self.store = store or SessionStore(self.config.resolved_settings_path())
        self.transport = transport or HttpTransport(timeout=self.config.timeout)

        self.tokens = TokenManager(self.store, refresher=self._request_refresh, on_status=self._broadcast)
        self.builder = RequestBuilder(self.config, token_provider=self.tokens.access_token)
        self.api = ApiClient(self.builder, self.transport)

        self.show = ShowApi(self.api)
        self.user = UserApi(self.api, self.tokens)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close:
            close()

    # --- Helpers ---
    def _request_refresh(self, refresh_token: str) -> SessionTokens:
        return self.user.request_refresh(refresh_token)

    def _broadcast(self, status: str) -> None:
        self.events.append({"status": status})
        if self._on_status:
            self._on_status(status)


__all__ = ["PXQApp"]

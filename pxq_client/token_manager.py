"""令牌生命周期：登录写入、按需读取、刷新与清理。

状态：NO_SESSION -> AUTHENTICATED -> REFRESHING -> AUTHENTICATED / NO_SESSION。
本地存储是唯一事实来源，这里不缓存任何令牌；每次授权调用都从存储现读。
刷新是 single-flight：同一时刻最多一个刷新请求，并发调用方共享其结果（成功或同一个错误）。
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from enum import Enum
from typing import Callable, Optional

from .errors import ErrorKind, PXQError
from .models import SessionTokens
from .session_store import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, SessionStore

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    NO_SESSION = "no_session"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"


class TokenManager:
    def __init__(
        self,
        store: SessionStore,
        refresher: Callable[[str], SessionTokens],
        *,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        """refresher: 用 refresh token 调平台刷新接口，平台拒绝时抛 PXQError(SessionExpired)。"""

        self._store = store
        self._refresher = refresher
        self._on_status = on_status
        self._lock = threading.Lock()
        self._inflight: Optional[Future] = None

    @property
    def state(self) -> SessionState:
        with self._lock:
            if self._inflight is not None:
                return SessionState.REFRESHING
        if self._store.get(ACCESS_TOKEN_KEY):
            return SessionState.AUTHENTICATED
        return SessionState.NO_SESSION

    def access_token(self) -> Optional[str]:
        return self._store.get(ACCESS_TOKEN_KEY) or None

    def on_login(self, tokens: SessionTokens) -> None:
        self._store.set(tokens.access_token, tokens.refresh_token)
        logger.info("session established")
        self._notify("authenticated")

    def clear(self) -> None:
        self._store.clear()
        logger.info("session cleared")
        self._notify("none")

    def refresh(self) -> SessionTokens:
        with self._lock:
            inflight = self._inflight
            leader = inflight is None
            if leader:
                inflight = self._inflight = Future()

        if not leader:
            logger.debug("refresh already in progress, waiting for its result")
            return inflight.result()

        try:
            tokens = self._do_refresh()
        except BaseException as exc:
            inflight.set_exception(exc)
            raise
        else:
            inflight.set_result(tokens)
            return tokens
        finally:
            with self._lock:
                self._inflight = None

    # --- Internal ---
    def _do_refresh(self) -> SessionTokens:
        refresh_token = self._store.get(REFRESH_TOKEN_KEY)
        if not refresh_token:
            raise PXQError(ErrorKind.SESSION_EXPIRED, "no refresh token stored")

        try:
            tokens = self._refresher(refresh_token)
        except PXQError as exc:
            if exc.kind == ErrorKind.SESSION_EXPIRED:
                # 失效的 refresh token 无法自动恢复，两个令牌一起清掉，迫使重新登录
                logger.info("refresh rejected by platform, clearing session")
                self._store.clear()
                self._notify("none")
            raise

        self._store.set(tokens.access_token, tokens.refresh_token)
        logger.info("session refreshed")
        self._notify("authenticated")
        return tokens

    def _notify(self, status: str) -> None:
        if self._on_status:
            self._on_status(status)


__all__ = ["SessionState", "TokenManager"]

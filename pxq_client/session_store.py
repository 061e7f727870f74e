"""本地会话存储（`.settings.dat`）。

- 文件内容为 JSON 对象，至少包含 access_token / refresh_token；其它键（前端设置等）原样保留。
- 每次操作都重新打开文件：读 -> 修改 -> 临时文件写入 + fsync -> os.replace，保证不会留下半截文件。
- 读写失败、内容损坏统一抛出 PXQError(StoreFailure)，不返回旧数据。
- 进程内用锁串行化读改写，令牌总是整体替换，不会只更新其中一个。
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import Any, Callable, Dict, Optional

from .errors import ErrorKind, PXQError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"


class SessionStore:
    def __init__(
        self,
        path: str,
        encoder: Optional[Callable[[str], str]] = None,
        decoder: Optional[Callable[[str], str]] = None,
    ) -> None:
        """
        encoder/decoder：可选的加密/解密钩子，签名 str -> str；默认明文保存。
        """

        self.path = path
        self.encoder = encoder
        self.decoder = decoder
        self._lock = threading.RLock()

    # --- Public API ---
    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise PXQError(ErrorKind.STORE_FAILURE, f"field {key} is not a string")
        return value

    def set(self, access_token: str, refresh_token: str) -> None:
        with self._lock:
            record = self._read()
            record[ACCESS_TOKEN_KEY] = access_token
            record[REFRESH_TOKEN_KEY] = refresh_token
            self._write(record)

    def clear(self) -> None:
        with self._lock:
            record = self._read()
            if ACCESS_TOKEN_KEY not in record and REFRESH_TOKEN_KEY not in record:
                return
            record.pop(ACCESS_TOKEN_KEY, None)
            record.pop(REFRESH_TOKEN_KEY, None)
            self._write(record)

    # --- Internal ---
    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            logger.warning("settings file %s is not valid UTF-8", self.path)
            raise PXQError(ErrorKind.STORE_FAILURE, "settings file is not valid UTF-8") from exc
        except OSError as exc:
            raise PXQError(ErrorKind.STORE_FAILURE, f"failed to read settings file: {exc}") from exc

        if not content.strip():
            return {}

        if self.decoder:
            try:
                content = self.decoder(content)
            except Exception as exc:  # noqa: BLE001
                raise PXQError(ErrorKind.STORE_FAILURE, "failed to decode settings file") from exc

        try:
            data = json.loads(content)
        except ValueError as exc:
            logger.warning("settings file %s is not valid JSON", self.path)
            raise PXQError(ErrorKind.STORE_FAILURE, "settings file is not valid JSON") from exc

        if not isinstance(data, dict):
            logger.warning("settings file %s does not hold an object", self.path)
            raise PXQError(ErrorKind.STORE_FAILURE, "settings file is not a JSON object")
        return data

    def _write(self, record: Dict[str, Any]) -> None:
        content = json.dumps(record, ensure_ascii=False)
        if self.encoder:
            try:
                content = self.encoder(content)
            except Exception as exc:  # noqa: BLE001
                raise PXQError(ErrorKind.STORE_FAILURE, "failed to encode settings file") from exc

        parent = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(parent, exist_ok=True)
            tmp_fd, tmp_path = tempfile.mkstemp(prefix=".pxq_settings_", suffix=".tmp", dir=parent)
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PXQError(ErrorKind.STORE_FAILURE, f"failed to write settings file: {exc}") from exc
        finally:
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning("could not remove temp file %s", tmp_path)


__all__ = ["SessionStore", "ACCESS_TOKEN_KEY", "REFRESH_TOKEN_KEY"]

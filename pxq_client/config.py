"""客户端配置。

优先级：环境变量 > 配置文件（pxq-client.json）> 默认值。
配置文件缺失或损坏时使用默认值，不阻断启动。
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pxq-client.json"
SETTINGS_FILENAME = ".settings.dat"

DEFAULT_BASE_URL = "https://m.piaoxingqiu.com/cyy_gatewayapi"
# 平台要求每个请求都带 src/ver，版本号需与平台期望的 Web 客户端版本一致
DEFAULT_SRC = "WEB"
DEFAULT_VER = "4.0.13-20240223084920"
DEFAULT_CITY_ID = "4455"


def default_config_dir() -> str:
    app_data = os.environ.get("APPDATA")
    if os.name == "nt" and app_data:
        return os.path.join(app_data, "pxq")
    xdg = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(xdg, "pxq")


def default_settings_path() -> str:
    return os.path.join(default_config_dir(), SETTINGS_FILENAME)


def default_config_path() -> str:
    return os.path.join(default_config_dir(), CONFIG_FILENAME)


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    settings_path: str = ""
    src: str = DEFAULT_SRC
    ver: str = DEFAULT_VER
    city_id: str = DEFAULT_CITY_ID
    page_size: int = 10
    timeout: float = 10.0
    log_level: str = "INFO"
    ipc_workers: int = 4

    def resolved_settings_path(self) -> str:
        return self.settings_path or default_settings_path()


def load_config(path: str) -> Dict[str, Any]:
    p = (path or "").strip() or default_config_path()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config file %s: %s", p, exc)
        return {}


def get_config(environ: Optional[Dict[str, str]] = None) -> ClientConfig:
    env = os.environ if environ is None else environ
    cfg = load_config(env.get("PXQ_CLIENT_CONFIG") or default_config_path())

    return ClientConfig(
        base_url=(env.get("PXQ_BASE_URL") or cfg.get("base_url") or DEFAULT_BASE_URL).rstrip("/"),
        settings_path=env.get("PXQ_SETTINGS_PATH") or cfg.get("settings_path") or default_settings_path(),
        src=cfg.get("src") or DEFAULT_SRC,
        ver=cfg.get("ver") or DEFAULT_VER,
        city_id=str(cfg.get("city_id") or DEFAULT_CITY_ID),
        page_size=int(cfg.get("page_size", 10)),
        timeout=float(env.get("PXQ_TIMEOUT") or cfg.get("timeout", 10.0)),
        log_level=(env.get("PXQ_LOG_LEVEL") or cfg.get("log_level") or "INFO").upper(),
        ipc_workers=int(cfg.get("ipc_workers", 4)),
    )


__all__ = [
    "ClientConfig",
    "default_config_dir",
    "default_config_path",
    "default_settings_path",
    "get_config",
    "load_config",
]

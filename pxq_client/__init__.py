"""票星球（Piaoxingqiu）桌面客户端后端：认证 API 客户端层。"""

from .app import PXQApp
from .config import ClientConfig, get_config
from .errors import ErrorAction, ErrorKind, PXQError, map_error_to_action
from .models import (
    SeatPlan,
    Session,
    SessionTokens,
    Show,
    ShowPage,
    UserAudience,
    UserProfile,
)
from .session_store import SessionStore
from .token_manager import SessionState, TokenManager

__all__ = [
    "PXQApp",
    "ClientConfig",
    "get_config",
    "ErrorAction",
    "ErrorKind",
    "PXQError",
    "map_error_to_action",
    "SeatPlan",
    "Session",
    "SessionTokens",
    "Show",
    "ShowPage",
    "UserAudience",
    "UserProfile",
    "SessionStore",
    "SessionState",
    "TokenManager",
]

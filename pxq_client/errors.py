"""客户端错误分类（封闭集合）。

- 传输失败、解析失败、授权缺失、会话过期、本地存储失败，以及每个命令各自的业务失败。
- 所有命令只会抛出 PXQError，调用方按 kind 分支，不依赖 comments 文本（不稳定、随语言变化）。
- map_error_to_action 给前端一个处理建议（重新登录/重试/提示）。
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT_FAILURE = "TransportFailure"
    DECODE_FAILURE = "DecodeFailure"
    AUTHORIZATION_REQUIRED = "AuthorizationRequired"
    SESSION_EXPIRED = "SessionExpired"
    STORE_FAILURE = "StoreFailure"

    # 按命令区分的业务失败：信封解析成功但没有 data
    SEARCH_SHOW_FAILURE = "SearchShowFailure"
    QUERY_SHOW_SESSIONS_FAILURE = "QueryShowSessionsFailure"
    GET_SEAT_PLANS_FAILURE = "GetSeatPlansFailure"
    ADD_REMINDER_FAILURE = "AddReminderFailure"
    TICKET_WAITLIST_FAILURE = "TicketWaitlistFailure"
    SEND_VERIFICATION_CODE_FAILURE = "SendVerificationCodeFailure"
    GENERATE_PHOTO_CODE_FAILURE = "GeneratePhotoCodeFailure"
    LOGIN_FAILURE = "LoginFailure"
    GET_USER_PROFILE_FAILURE = "GetUserProfileFailure"
    GET_USER_AUDIENCES_FAILURE = "GetUserAudiencesFailure"


class PXQError(Exception):
    """命令层唯一对外异常，携带错误种类与平台返回的 comments（仅用于诊断）。"""

    def __init__(self, kind: ErrorKind, comments: str = "") -> None:
        super().__init__(comments or kind.value)
        self.kind = kind
        self.comments = comments

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "comments": self.comments}


class ErrorAction(str, Enum):
    RELOGIN = "relogin"
    RETRY = "retry"
    INTERNAL = "internal"
    NOOP = "noop"


def map_error_to_action(kind: ErrorKind) -> ErrorAction:
    if kind in (ErrorKind.AUTHORIZATION_REQUIRED, ErrorKind.SESSION_EXPIRED):
        return ErrorAction.RELOGIN
    if kind == ErrorKind.TRANSPORT_FAILURE:
        return ErrorAction.RETRY
    if kind in (ErrorKind.DECODE_FAILURE, ErrorKind.STORE_FAILURE):
        return ErrorAction.INTERNAL
    # 业务失败：由前端展示对应提示
    return ErrorAction.NOOP


__all__ = ["ErrorKind", "PXQError", "ErrorAction", "map_error_to_action"]

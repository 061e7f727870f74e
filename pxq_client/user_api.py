"""用户相关命令：验证码、手机号登录、资料、令牌刷新、观演人。

登录成功后令牌交给 TokenManager 落盘；refresh_token 走 TokenManager 的 single-flight 刷新，
实际的刷新请求由 request_refresh 发出（作为 TokenManager 的 refresher 注入）。
"""

from __future__ import annotations

from typing import Tuple

from .api_client import ApiClient
from .errors import ErrorKind
from .models import PhotoCode, SessionTokens, UserAudience, UserProfile
from .request_builder import Operation
from .token_manager import SessionState, TokenManager

SEND_VERIFICATION_CODE = Operation(
    name="send_verification_code",
    method="POST",
    path="/user/pub/v3/send_verify_code",
    failure=ErrorKind.SEND_VERIFICATION_CODE_FAILURE,
)
GENERATE_PHOTO_CODE = Operation(
    name="generate_photo_code",
    method="POST",
    path="/user/pub/v3/generate_photo_code",
    failure=ErrorKind.GENERATE_PHOTO_CODE_FAILURE,
)
LOGIN_BY_MOBILE = Operation(
    name="login_by_mobile",
    method="POST",
    path="/user/pub/v3/login_or_register",
    failure=ErrorKind.LOGIN_FAILURE,
)
GET_USER_PROFILE = Operation(
    name="get_user_profile",
    method="GET",
    path="/user/buyer/v3/profile",
    failure=ErrorKind.GET_USER_PROFILE_FAILURE,
    auth_required=True,
)
# 平台拒绝刷新即视为会话过期
REFRESH_TOKEN = Operation(
    name="refresh_token",
    method="POST",
    path="/user/pub/v3/refresh_token",
    failure=ErrorKind.SESSION_EXPIRED,
)
GET_USER_AUDIENCES = Operation(
    name="get_user_audiences",
    method="GET",
    path="/user/buyer/v3/user_audiences",
    failure=ErrorKind.GET_USER_AUDIENCES_FAILURE,
    auth_required=True,
    fixed_query=(("length", "500"), ("offset", "0")),
)


class UserApi:
    def __init__(self, api: ApiClient, tokens: TokenManager) -> None:
        self.api = api
        self.tokens = tokens

    def send_verification_code(self, mobile: str, token: str) -> bool:
        """发送登录短信验证码；token 为图形/滑块验证通过后得到的凭据。"""

        body = {
            "verifyCodeUseType": "USER_LOGIN",
            "cellphone": mobile,
            "messageType": "MOBILE",
            "token": token,
        }
        return self.api.execute(SEND_VERIFICATION_CODE, bool, body=body)

    def generate_photo_code(self, mobile: str) -> str:
        """返回 base64 编码的图形验证码。"""

        body = {"cellphone": mobile, "verifyCodeUseType": "USER_LOGIN", "messageType": "MOBILE"}
        data: PhotoCode = self.api.execute(GENERATE_PHOTO_CODE, PhotoCode, body=body)
        return data.base_code

    def login_by_mobile(self, mobile: str, sms_code: str) -> SessionTokens:
        tokens: SessionTokens = self.api.execute(
            LOGIN_BY_MOBILE,
            SessionTokens,
            body={"cellphone": mobile, "verifyCode": sms_code},
        )
        self.tokens.on_login(tokens)
        return tokens

    def get_user_profile(self) -> UserProfile:
        return self.api.execute(GET_USER_PROFILE, UserProfile)

    def refresh_token(self) -> SessionTokens:
        return self.tokens.refresh()

    def request_refresh(self, refresh_token: str) -> SessionTokens:
        return self.api.execute(
            REFRESH_TOKEN,
            SessionTokens,
            query=[("refreshToken", refresh_token)],
            body={"refreshToken": refresh_token},
        )

    def get_user_audiences(self) -> Tuple[UserAudience, ...]:
        return self.api.execute(GET_USER_AUDIENCES, Tuple[UserAudience, ...])

    def logout(self) -> None:
        self.tokens.clear()

    def session_state(self) -> SessionState:
        return self.tokens.state


__all__ = [
    "UserApi",
    "SEND_VERIFICATION_CODE",
    "GENERATE_PHOTO_CODE",
    "LOGIN_BY_MOBILE",
    "GET_USER_PROFILE",
    "REFRESH_TOKEN",
    "GET_USER_AUDIENCES",
]

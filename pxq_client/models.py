"""平台响应片段对应的 DTO。

字段名与平台 JSON 一一对应（camelCase 别名），解析严格：类型不符或缺少必填字段时整体失败，
只有显式声明为 Optional 的字段允许缺失。所有模型冻结，集合使用 tuple。
"""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)


class Show(WireModel):
    search_type: str = Field(alias="searchType")
    show_id: str = Field(alias="showId")
    std_show_id: str = Field(alias="stdShowId")
    show_name: str = Field(alias="showName")
    show_date: str = Field(alias="showDate")
    city_name: str = Field(alias="cityName")
    show_status: str = Field(alias="showStatus")
    min_original_price: float = Field(alias="minOriginalPrice")
    poster_url: str = Field(alias="posterUrl")
    venue_id: str = Field(alias="venueId")
    venue_name: str = Field(alias="venueName")
    first_show_time: int = Field(alias="firstShowTime")
    last_show_time: int = Field(alias="lastShowTime")
    latest_sale_time: Optional[str] = Field(default=None, alias="latestSaleTime")


class ShowPage(WireModel):
    is_last_page: bool = Field(alias="isLastPage")
    show_list: Tuple[Show, ...] = Field(alias="searchData")


class SeatPlan(WireModel):
    seat_plan_id: str = Field(alias="seatPlanId")
    std_seat_plan_id: str = Field(alias="stdSeatPlanId")
    original_price: float = Field(alias="originalPrice")
    seat_plan_name: str = Field(alias="seatPlanName")
    has_activity: bool = Field(alias="hasActivity")
    can_buy_count: Optional[int] = Field(default=None, alias="canBuyCount")


class Session(WireModel):
    show_limit: int = Field(alias="showLimit")
    show_id: str = Field(alias="showId")
    std_show_id: str = Field(alias="stdShowId")
    support_seat_picking: bool = Field(alias="supportSeatPicking")
    original_seat_pick_type: str = Field(alias="originalSeatPickType")
    show_name: str = Field(alias="showName")
    session_id: str = Field(alias="bizShowSessionId")
    std_show_session_id: str = Field(alias="stdShowSessionId")
    session_name: str = Field(alias="sessionName")
    has_activity: bool = Field(alias="hasActivity")
    has_session_sold_out: bool = Field(alias="hasSessionSoldOut")
    seat_plans: Tuple[SeatPlan, ...] = Field(alias="seatPlans")
    session_status: str = Field(alias="sessionStatus")
    session_sale_time: Optional[int] = Field(default=None, alias="sessionSaleTime")


class SeatPlanList(WireModel):
    seat_plans: Tuple[SeatPlan, ...] = Field(alias="seatPlans")


class Subscription(WireModel):
    subscribed: bool


class PhotoCode(WireModel):
    base_code: str = Field(alias="baseCode")


class SessionTokens(WireModel):
    """登录/刷新返回的令牌对，总是整体写入本地存储。"""

    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")


class UserProfile(WireModel):
    nickname: str
    avatar: str


class UserAudience(WireModel):
    id: str
    id_no: str = Field(alias="idNo")
    id_type: str = Field(alias="idType")
    description: str
    name: str


__all__ = [
    "WireModel",
    "Show",
    "ShowPage",
    "SeatPlan",
    "Session",
    "SeatPlanList",
    "Subscription",
    "PhotoCode",
    "SessionTokens",
    "UserProfile",
    "UserAudience",
]

"""演出相关命令：搜索、场次、票档、开售提醒、缺票登记。"""

from __future__ import annotations

from typing import Tuple

from .api_client import ApiClient
from .errors import ErrorKind, PXQError
from .models import SeatPlan, SeatPlanList, Session, ShowPage, Subscription
from .request_builder import Operation

SEARCH_SHOW_LIST = Operation(
    name="search_show_list",
    method="GET",
    path="/home/pub/v3/show_list/search",
    failure=ErrorKind.SEARCH_SHOW_FAILURE,
)
QUERY_SHOW_SESSIONS = Operation(
    name="query_show_sessions",
    method="GET",
    path="/show/pub/v5/show/{show_id}/sessions",
    failure=ErrorKind.QUERY_SHOW_SESSIONS_FAILURE,
    fixed_query=(("source", "FROM_QUICK_ORDER"), ("isQueryShowBasicInfo", "true")),
)
GET_SEAT_PLANS = Operation(
    name="get_seat_plans",
    method="GET",
    path="/show/pub/v5/show/{show_id}/session/{session_id}/seat_plans",
    failure=ErrorKind.GET_SEAT_PLANS_FAILURE,
    fixed_query=(("source", "FROM_QUICK_ORDER"),),
)
ADD_REMINDER = Operation(
    name="add_reminder",
    method="POST",
    path="/show/buyer/v3/shows/{show_id}/subscribe",
    failure=ErrorKind.ADD_REMINDER_FAILURE,
    auth_required=True,
)
TICKET_WAITLIST = Operation(
    name="ticket_waitlist",
    method="POST",
    path="/show/buyer/v3/shows/{show_id}/subscribe",
    failure=ErrorKind.TICKET_WAITLIST_FAILURE,
    auth_required=True,
)


class ShowApi:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def search_show_list(self, keyword: str, sort_type: str = "DEFAULT", page: int = 1) -> ShowPage:
        """按关键字分页搜索演出，page 从 1 开始。"""

        if page < 1:
            raise PXQError(ErrorKind.SEARCH_SHOW_FAILURE, "page must start at 1")
        config = self.api.builder.config
        query = [
            ("backendCategoryCode", "ALL"),
            ("cityId", config.city_id),
            ("keyword", keyword),
            ("length", str(config.page_size)),
            ("offset", str((page - 1) * config.page_size)),
            ("pageType", "SEARCH_PAGE"),
            ("sortType", sort_type),
        ]
        return self.api.execute(SEARCH_SHOW_LIST, ShowPage, query=query)

    def query_show_sessions(self, show_id: str) -> Tuple[Session, ...]:
        return self.api.execute(
            QUERY_SHOW_SESSIONS,
            Tuple[Session, ...],
            path_params={"show_id": show_id},
        )

    def get_seat_plans(self, show_id: str, session_id: str) -> Tuple[SeatPlan, ...]:
        data: SeatPlanList = self.api.execute(
            GET_SEAT_PLANS,
            SeatPlanList,
            path_params={"show_id": show_id, "session_id": session_id},
        )
        return data.seat_plans

    def add_reminder(self, show_id: str, session_id: str) -> bool:
        """订阅场次开售提醒。"""

        body = self._subscribe_body(show_id, session_id)
        body.update({"subscribeTargetType": "SHOW_SESSION", "remindType": "SALE_REMIND"})
        data: Subscription = self.api.execute(
            ADD_REMINDER,
            Subscription,
            path_params={"show_id": show_id},
            query=[("showSessionId", session_id)],
            body=body,
        )
        return data.subscribed

    def ticket_waitlist(self, show_id: str, session_id: str, seat_plan_id: str) -> bool:
        """票档缺货登记（OOS），有票时平台通知。"""

        body = self._subscribe_body(show_id, session_id)
        body.update({"subscribeTargetType": "SEAT_PLAN", "remindType": "OOS", "seatPlanId": seat_plan_id})
        data: Subscription = self.api.execute(
            TICKET_WAITLIST,
            Subscription,
            path_params={"show_id": show_id},
            query=[("showSessionId", session_id)],
            body=body,
        )
        return data.subscribed

    @staticmethod
    def _subscribe_body(show_id: str, session_id: str) -> dict:
        return {"openId": "", "appId": "", "showId": show_id, "showSessionId": session_id}


__all__ = [
    "ShowApi",
    "SEARCH_SHOW_LIST",
    "QUERY_SHOW_SESSIONS",
    "GET_SEAT_PLANS",
    "ADD_REMINDER",
    "TICKET_WAITLIST",
]

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Union

from pxq_client.app import PXQApp
from pxq_client.config import ClientConfig
from pxq_client.request_builder import ApiRequest
from pxq_client.session_store import SessionStore

BASE_URL = "https://m.piaoxingqiu.com/cyy_gatewayapi"


def envelope(data: Any = None, status_code: int = 200, comments: str = "") -> Dict[str, Any]:
    return {"statusCode": status_code, "comments": comments, "data": data}


def show_json(show_id: str = "S1", name: str = "Hamlet", **overrides: Any) -> Dict[str, Any]:
    payload = {
        "searchType": "SHOW",
        "showId": show_id,
        "stdShowId": f"STD-{show_id}",
        "showName": name,
        "showDate": "2024.03.01-03.03",
        "cityName": "上海",
        "showStatus": "ON_SALE",
        "minOriginalPrice": 180,
        "posterUrl": "https://img.example/p.jpg",
        "venueId": "V1",
        "venueName": "上海大剧院",
        "firstShowTime": 1709280000000,
        "lastShowTime": 1709452800000,
    }
    payload.update(overrides)
    return payload


def seat_plan_json(seat_plan_id: str = "P1", **overrides: Any) -> Dict[str, Any]:
    payload = {
        "seatPlanId": seat_plan_id,
        "stdSeatPlanId": f"STD-{seat_plan_id}",
        "originalPrice": 380.0,
        "seatPlanName": "380元",
        "hasActivity": False,
    }
    payload.update(overrides)
    return payload


def session_json(session_id: str = "SESS1", show_id: str = "S1", **overrides: Any) -> Dict[str, Any]:
    payload = {
        "showLimit": 6,
        "showId": show_id,
        "stdShowId": f"STD-{show_id}",
        "supportSeatPicking": False,
        "originalSeatPickType": "NONE",
        "showName": "Hamlet",
        "bizShowSessionId": session_id,
        "stdShowSessionId": f"STD-{session_id}",
        "sessionName": "2024-03-01 19:30",
        "hasActivity": False,
        "hasSessionSoldOut": False,
        "seatPlans": [seat_plan_json()],
        "sessionStatus": "ON_SALE",
    }
    payload.update(overrides)
    return payload


class FakeTransport:
    """记录发出的请求，按顺序返回预置响应（dict 会被序列化为 JSON，异常会被抛出）。"""

    def __init__(self) -> None:
        self.requests: List[ApiRequest] = []
        self.responses: List[Union[bytes, str, Dict[str, Any], Exception]] = []

    def queue(self, *responses: Union[bytes, str, Dict[str, Any], Exception]) -> None:
        self.responses.extend(responses)

    def send(self, request: ApiRequest) -> bytes:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, dict):
            return json.dumps(resp).encode("utf-8")
        if isinstance(resp, str):
            return resp.encode("utf-8")
        return resp


def make_app(tmpdir: str, transport: Optional[FakeTransport] = None, **kwargs: Any) -> PXQApp:
    config = ClientConfig(base_url=BASE_URL, settings_path=os.path.join(tmpdir, ".settings.dat"))
    return PXQApp(
        config,
        store=SessionStore(config.settings_path),
        transport=transport or FakeTransport(),
        **kwargs,
    )

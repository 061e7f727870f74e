"""前端 IPC（stdio）服务端：桌面前端以子进程方式启动，一行一个 JSON。

请求：
{ "id": "uuid", "cmd": "search_show_list|...|logout|session_state", "params": {...} }

响应：
{ "id": "uuid", "ok": true, "result": ... }
或
{ "id": "uuid", "ok": false, "error": {"kind": "SearchShowFailure", "comments": "...", "action": "noop"} }

事件：
{ "event": "sessionStatus", "payload": {"status": "authenticated|none"} }

请求在线程池中并发执行，响应顺序不保证与请求一致，前端按 id 关联。
日志写 stderr，stdout 只用于协议。
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Dict, Iterable, TextIO

from pydantic import BaseModel

from .app import PXQApp
from .config import get_config
from .errors import PXQError, map_error_to_action

logger = logging.getLogger(__name__)

BAD_REQUEST = "BadRequest"
INTERNAL = "Internal"


class BadRequestError(Exception):
    """请求参数不合法（缺参数、类型不对），与命令执行中的内部错误区分开。"""


def _str_param(params: Dict[str, Any], name: str) -> str:
    if name not in params:
        raise BadRequestError(f"missing param: {name}")
    value = params[name]
    if not isinstance(value, str):
        raise BadRequestError(f"param {name} must be a string")
    return value


def _int_param(params: Dict[str, Any], name: str, default: int) -> int:
    value = params.get(name, default)
    if isinstance(value, bool):
        raise BadRequestError(f"param {name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise BadRequestError(f"param {name} must be an integer") from exc


COMMANDS: Dict[str, Callable[[PXQApp, Dict[str, Any]], Any]] = {
    "search_show_list": lambda app, p: app.show.search_show_list(
        _str_param(p, "keyword"),
        _str_param(p, "sort_type") if "sort_type" in p else "DEFAULT",
        _int_param(p, "page", 1),
    ),
    "query_show_sessions": lambda app, p: app.show.query_show_sessions(_str_param(p, "show_id")),
    "get_seat_plans": lambda app, p: app.show.get_seat_plans(_str_param(p, "show_id"), _str_param(p, "session_id")),
    "add_reminder": lambda app, p: app.show.add_reminder(_str_param(p, "show_id"), _str_param(p, "session_id")),
    "ticket_waitlist": lambda app, p: app.show.ticket_waitlist(
        _str_param(p, "show_id"), _str_param(p, "session_id"), _str_param(p, "seat_plan_id")
    ),
    "send_verification_code": lambda app, p: app.user.send_verification_code(
        _str_param(p, "mobile"), _str_param(p, "token")
    ),
    "generate_photo_code": lambda app, p: app.user.generate_photo_code(_str_param(p, "mobile")),
    "login_by_mobile": lambda app, p: app.user.login_by_mobile(_str_param(p, "mobile"), _str_param(p, "sms_code")),
    "get_user_profile": lambda app, p: app.user.get_user_profile(),
    "refresh_token": lambda app, p: app.user.refresh_token(),
    "get_user_audiences": lambda app, p: app.user.get_user_audiences(),
    "logout": lambda app, p: app.user.logout(),
    "session_state": lambda app, p: app.user.session_state(),
}


class LineWriter:
    """串行化写 stdout，避免并发响应交错成半行。"""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def send(self, obj: Dict[str, Any]) -> None:
        line = json.dumps(obj, ensure_ascii=False)
        with self._lock:
            self._stream.write(line + "\n")
            self._stream.flush()


def to_wire(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


def _error(req_id: Any, kind: str, comments: str, action: str = "noop") -> Dict[str, Any]:
    return {"id": req_id, "ok": False, "error": {"kind": kind, "comments": comments, "action": action}}


def handle_request(app: PXQApp, req: Dict[str, Any]) -> Dict[str, Any]:
    req_id = req.get("id")
    cmd = req.get("cmd")
    handler = COMMANDS.get(cmd) if isinstance(cmd, str) else None
    if handler is None:
        return _error(req_id, BAD_REQUEST, f"unknown cmd: {cmd}")

    params = req.get("params") or {}
    if not isinstance(params, dict):
        return _error(req_id, BAD_REQUEST, "params must be an object")

    try:
        result = handler(app, params)
    except PXQError as exc:
        return _error(req_id, exc.kind.value, exc.comments, map_error_to_action(exc.kind).value)
    except BadRequestError as exc:
        return _error(req_id, BAD_REQUEST, str(exc))
    return {"id": req_id, "ok": True, "result": to_wire(result)}


def _run(app: PXQApp, req: Dict[str, Any], writer: LineWriter) -> None:
    try:
        writer.send(handle_request(app, req))
    except Exception as exc:  # noqa: BLE001
        logger.exception("command %s crashed", req.get("cmd"))
        writer.send(_error(req.get("id"), INTERNAL, str(exc), "internal"))


def serve(app: PXQApp, lines: Iterable[str], writer: LineWriter, *, workers: int = 4) -> None:
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pxq-ipc") as pool:
        for line in lines:
            line = line.strip()
            if not line:
                continue
            try:
                req = json.loads(line)
            except ValueError:
                writer.send(_error(None, BAD_REQUEST, "invalid JSON"))
                continue
            if not isinstance(req, dict):
                writer.send(_error(None, BAD_REQUEST, "request must be an object"))
                continue
            pool.submit(_run, app, req, writer)


def main() -> int:
    config = get_config()
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    writer = LineWriter(sys.stdout)
    app = PXQApp(
        config,
        on_status=lambda status: writer.send({"event": "sessionStatus", "payload": {"status": status}}),
    )
    logger.info("pxq ipc server started, settings at %s", config.resolved_settings_path())
    try:
        serve(app, sys.stdin, writer, workers=config.ipc_workers)
    finally:
        app.close()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

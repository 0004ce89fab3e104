"""
chewcrew.core.exceptions
~~~~~~~~~~~~~~~~~~~~~~~~

业务异常集中定义，方便 API 层统一转换为 ``{"error": ...}`` 应答。

每个异常携带面向客户端的错误消息（``str(exc)``）以及对应的 HTTP
状态码 ``status_code``。
"""
from __future__ import annotations


class ChewCrewException(Exception):
    """所有业务异常的基类。"""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


# ── Room 相关 ─────────────────────────────────────────────────────────

class RoomNotFound(ChewCrewException):
    """房间不存在。"""

    status_code = 404
    default_message = "Room not found"


class RoomEnded(ChewCrewException):
    """房间已结束，不再接受投票。"""

    status_code = 409
    default_message = "Room has ended"


class AlreadyEnded(ChewCrewException):
    """重复关闭房间（仅内部使用，RoomService 会按幂等处理）。"""

    status_code = 409
    default_message = "Room has already ended"


class Unauthorized(ChewCrewException):
    """host ID 不匹配。"""

    status_code = 403
    default_message = "Unauthorized host ID"


class InvalidChoice(ChewCrewException):
    """投票选项不在房间的候选列表中。"""

    status_code = 400

    def __init__(self, choice: str) -> None:
        self.choice = choice
        super().__init__(f"Invalid choice: {choice}")


class DuplicateID(ChewCrewException):
    """房间 ID 冲突（重试耗尽后才会暴露给调用方）。"""

    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"Duplicate room ID: {room_id}")


class EmptyChoiceSet(ChewCrewException):
    """候选类别为空，无法创建房间或计票。"""

    status_code = 502
    default_message = "No categories available"


# ── 外部地点查询 ──────────────────────────────────────────────────────

class PlaceLookupFailed(ChewCrewException):
    """外部地点服务调用失败或超时（可重试，房间保持开放）。"""

    status_code = 503
    default_message = "Place lookup failed"

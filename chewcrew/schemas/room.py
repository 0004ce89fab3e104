"""
chewcrew.schemas.room
~~~~~~~~~~~~~~~~~~~~~

房间相关的 Pydantic 应答模型。

字段约定与前端保持一致：
  - ``hostid`` 仅在创建房间的应答中出现
  - ``voters`` / ``choices`` 为空时省略
  - ``winner`` 在房间开放期间省略
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chewcrew.services.room import RoomSnapshot


class RoomView(BaseModel):
    """对外可见的房间视图，不包含票数。"""

    id: str = Field(..., description="房间 ID")
    hostid: str | None = Field(default=None, description="房主凭证，仅创建时返回")
    voters: list[str] | None = Field(default=None, description="已投票者名单")
    choices: list[str] | None = Field(default=None, description="候选类别")
    winner: str | None = Field(default=None, description="最终结果，结束后才有")

    @classmethod
    def from_snapshot(
        cls, snapshot: RoomSnapshot, host_secret: str | None = None,
    ) -> RoomView:
        """由房间快照构造视图。只有 ``new`` 会传入 ``host_secret``。"""
        return cls(
            id=snapshot.room_id,
            hostid=host_secret,
            voters=list(snapshot.voters) or None,
            choices=list(snapshot.choices) or None,
            winner=snapshot.winner,
        )

    def to_json(self) -> dict[str, Any]:
        """序列化为应答 JSON，省略空字段。"""
        return self.model_dump(exclude_none=True)


class ErrorResponse(BaseModel):
    """统一错误应答体: ``{"error": "<message>"}``。"""

    error: str = Field(..., description="错误信息")

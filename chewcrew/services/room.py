"""
chewcrew.services.room
~~~~~~~~~~~~~~~~~~~~~~

投票房间领域模型 —— 封装一个完整的投票房间实体。

每个 ``Room`` 持有独立的 ``asyncio.Lock``，所有对 ``voters`` /
``vote_counts`` / ``winner`` 的读写都在该锁内完成，房间之间互不干扰。

状态机: ``Open``（winner 为空）→ ``Closed``（winner 已设置，终态）。
"""
from __future__ import annotations

import asyncio
import hmac
from collections.abc import Sequence
from dataclasses import dataclass

from chewcrew.core.exceptions import AlreadyEnded, InvalidChoice, RoomEnded
from chewcrew.places.base import PlaceOptions


@dataclass(frozen=True)
class RoomSnapshot:
    """在房间锁内拷贝出的只读快照。

    Attributes:
        room_id: 房间唯一标识。
        choices: 候选项（声明顺序）。
        voters: 已投票者名单（提交顺序）。
        vote_counts: 每个候选项的票数拷贝。
        winner: 结果；房间开放时为 ``None``。
    """

    room_id: str
    choices: tuple[str, ...]
    voters: tuple[str, ...]
    vote_counts: dict[str, int]
    winner: str | None

    @property
    def is_open(self) -> bool:
        return self.winner is None


class Room:
    """一个投票房间实体。

    Attributes:
        room_id: 房间唯一标识（创建后不可变）。
        choices: 候选项元组（创建后不可变）。
        place_options: 创建时记录的地点查询参数，结束时用于解析具体地点。
    """

    def __init__(
        self,
        room_id: str,
        host_secret: str,
        choices: Sequence[str],
        place_options: PlaceOptions | None = None,
    ) -> None:
        if len(set(choices)) != len(choices):
            raise ValueError(f"Room choices must be distinct: {list(choices)}")
        self.room_id = room_id
        self.choices: tuple[str, ...] = tuple(choices)
        self.place_options: PlaceOptions = place_options or PlaceOptions()
        self._host_secret = host_secret
        self._vote_counts: dict[str, int] = {choice: 0 for choice in self.choices}
        self._voters: list[str] = []
        self._winner: str | None = None
        self._lock = asyncio.Lock()

    @property
    def host_secret(self) -> str:
        """房主凭证，只应出现在创建房间的应答中。"""
        return self._host_secret

    def is_host(self, secret: str) -> bool:
        """校验 host ID（常量时间比较）。"""
        return hmac.compare_digest(self._host_secret.encode(), secret.encode())

    async def record_vote(self, voter_name: str, choice: str) -> None:
        """记录一票。

        Raises:
            RoomEnded: 房间已结束。
            InvalidChoice: ``choice`` 不在候选项中。
        """
        async with self._lock:
            if self._winner is not None:
                raise RoomEnded()
            if choice not in self._vote_counts:
                raise InvalidChoice(choice)
            self._voters.append(voter_name)
            self._vote_counts[choice] += 1

    async def close(self, winner: str) -> RoomSnapshot:
        """设置结果并进入终态。

        Raises:
            AlreadyEnded: 房间已经结束过。
        """
        async with self._lock:
            if self._winner is not None:
                raise AlreadyEnded()
            self._winner = winner
            return self._snapshot()

    async def snapshot(self) -> RoomSnapshot:
        """在锁内获取当前状态的一致快照。"""
        async with self._lock:
            return self._snapshot()

    def _snapshot(self) -> RoomSnapshot:
        # 调用方必须已持有 self._lock
        return RoomSnapshot(
            room_id=self.room_id,
            choices=self.choices,
            voters=tuple(self._voters),
            vote_counts=dict(self._vote_counts),
            winner=self._winner,
        )

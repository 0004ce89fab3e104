"""
chewcrew.services.room_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

投票房间业务服务 —— HTTP 层唯一调用的入口。

- ``get(room_id)``              → 获取房间（隐藏 host ID 与票数）
- ``new(address)``              → 创建房间（唯一返回 host ID 的操作）
- ``vote(room_id, name, vote)`` → 投票
- ``end(room_id, host_id)``     → 房主结束投票并解析具体地点（幂等）

结束投票的加锁策略：在房间锁内拷贝票数，释放锁后调用外部地点服务，
再重新加锁，仅当房间仍开放时写入结果。锁从不跨越网络调用。
"""
from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from chewcrew.core.config import settings
from chewcrew.core.exceptions import (
    AlreadyEnded,
    DuplicateID,
    EmptyChoiceSet,
    PlaceLookupFailed,
    Unauthorized,
)
from chewcrew.core.logging import get_logger
from chewcrew.places.base import PlaceOptions, PlaceProvider
from chewcrew.schemas.room import RoomView
from chewcrew.services.ids import IDGenerator, generate_id
from chewcrew.services.room import Room
from chewcrew.services.room_store import RoomStore
from chewcrew.services.tally import select_winner

logger = get_logger(__name__)

T = TypeVar("T")


class RoomService:
    """投票房间业务服务。

    Attributes:
        store: 房间注册表。
        provider: 外部地点服务。
    """

    def __init__(
        self,
        store: RoomStore,
        provider: PlaceProvider,
        id_generator: IDGenerator = generate_id,
        id_length: int | None = None,
        id_max_attempts: int | None = None,
        lookup_timeout: float | None = None,
        lookup_attempts: int | None = None,
    ) -> None:
        self.store: RoomStore = store
        self.provider: PlaceProvider = provider
        self._id_generator = id_generator
        self._id_length: int = id_length or settings.ID_LENGTH
        self._id_max_attempts: int = id_max_attempts or settings.ID_MAX_ATTEMPTS
        self._lookup_timeout: float = lookup_timeout or settings.PLACE_LOOKUP_TIMEOUT
        self._lookup_attempts: int = lookup_attempts or settings.PLACE_LOOKUP_ATTEMPTS

    async def get(self, room_id: str) -> RoomView:
        """获取房间视图。

        Raises:
            RoomNotFound: 房间不存在。
        """
        room = self.store.lookup(room_id)
        return RoomView.from_snapshot(await room.snapshot())

    async def new(self, address: str) -> RoomView:
        """创建新房间。

        Args:
            address: 转发给地点服务的地址。

        Returns:
            包含 ``hostid`` 的房间视图。

        Raises:
            EmptyChoiceSet: 地点服务没有返回任何类别。
            PlaceLookupFailed: 地点服务调用失败或超时。
            DuplicateID: ID 连续碰撞，重试次数耗尽。
        """
        logger.info("NEW | address=%s", address)
        options = PlaceOptions(address=address)

        categories = await self._call_provider(lambda: self.provider.categories(options))
        # 去重并保持顺序
        choices = list(dict.fromkeys(categories))
        if not choices:
            raise EmptyChoiceSet()

        room_id = ""
        for attempt in range(1, self._id_max_attempts + 1):
            room_id = self._id_generator(self._id_length)
            room = Room(
                room_id=room_id,
                host_secret=self._id_generator(self._id_length),
                choices=choices,
                place_options=options,
            )
            try:
                self.store.create(room)
            except DuplicateID:
                logger.warning(
                    "房间 ID 冲突，重新生成 | room_id=%s | attempt=%d/%d",
                    room_id, attempt, self._id_max_attempts,
                )
                continue

            logger.info("房间已创建 | room_id=%s | choices=%d", room.room_id, len(choices))
            return RoomView.from_snapshot(await room.snapshot(), host_secret=room.host_secret)

        raise DuplicateID(room_id)

    async def vote(self, room_id: str, voter_name: str, choice: str) -> None:
        """投出一票。

        Raises:
            RoomNotFound: 房间不存在。
            RoomEnded: 房间已结束。
            InvalidChoice: 选项不在候选列表中。
        """
        logger.info("VOTE | room_id=%s | name=%s", room_id, voter_name)
        room = self.store.lookup(room_id)
        await room.record_vote(voter_name, choice)

    async def end(self, room_id: str, host_secret: str) -> RoomView:
        """结束投票，计票并解析具体地点。

        已结束的房间直接返回已有结果，不会再次调用地点服务。

        Raises:
            RoomNotFound: 房间不存在。
            Unauthorized: host ID 不匹配。
            PlaceLookupFailed: 地点服务失败或超时，房间保持开放。
        """
        logger.info("END | room_id=%s", room_id)
        room = self.store.lookup(room_id)
        if not room.is_host(host_secret):
            logger.warning("host ID 校验失败 | room_id=%s", room_id)
            raise Unauthorized()

        snapshot = await room.snapshot()
        if not snapshot.is_open:
            return RoomView.from_snapshot(snapshot)

        category = select_winner(snapshot.vote_counts, snapshot.choices)
        place = await self._call_provider(
            lambda: self.provider.resolve(room.place_options, category),
        )
        if not place:
            raise PlaceLookupFailed(f"No place found for category: {category}")

        try:
            snapshot = await room.close(place)
        except AlreadyEnded:
            # 并发的另一次 end 已经写入结果
            snapshot = await room.snapshot()
            logger.info("房间已被并发结束，沿用已有结果 | room_id=%s", room_id)
        else:
            logger.info(
                "投票结束 | room_id=%s | category=%s | winner=%s | voters=%d",
                room_id, category, place, len(snapshot.voters),
            )
        return RoomView.from_snapshot(snapshot)

    async def _call_provider(self, call: Callable[[], Awaitable[T]]) -> T:
        """带超时和有限重试地调用地点服务。"""
        error = PlaceLookupFailed()
        for attempt in range(1, self._lookup_attempts + 1):
            try:
                return await asyncio.wait_for(call(), timeout=self._lookup_timeout)
            except asyncio.TimeoutError:
                error = PlaceLookupFailed(
                    f"Place lookup timed out after {self._lookup_timeout}s",
                )
            except PlaceLookupFailed as e:
                error = e
            logger.warning(
                "地点服务调用失败 | attempt=%d/%d | %s",
                attempt, self._lookup_attempts, error,
            )
        raise error

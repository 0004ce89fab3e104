"""
chewcrew.services.room_store
~~~~~~~~~~~~~~~~~~~~~~~~~~~~

进程内房间注册表 —— 维护 ``room_id → Room`` 映射。

注册表自带一把 ``threading.Lock``，与各房间自己的锁相互独立，
且从不在房间锁内获取。房间在进程生命周期内不会被移除。
"""
from __future__ import annotations

import threading

from chewcrew.core.exceptions import DuplicateID, RoomNotFound
from chewcrew.services.room import Room


class RoomStore:
    """线程安全的房间注册表。"""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}
        self._lock = threading.Lock()

    def create(self, room: Room) -> None:
        """注册新房间。

        Raises:
            DuplicateID: 已存在相同 ID 的房间。
        """
        with self._lock:
            if room.room_id in self._rooms:
                raise DuplicateID(room.room_id)
            self._rooms[room.room_id] = room

    def lookup(self, room_id: str) -> Room:
        """按 ID 获取房间。

        Raises:
            RoomNotFound: 房间不存在。
        """
        with self._lock:
            room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound()
        return room

    def __contains__(self, room_id: object) -> bool:
        with self._lock:
            return room_id in self._rooms

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

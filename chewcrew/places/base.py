"""
chewcrew.places.base
~~~~~~~~~~~~~~~~~~~~

外部地点服务的抽象接口。

核心业务只依赖 ``PlaceProvider``：
  - ``categories(options)``        → 可供投票的类别列表（有序）
  - ``resolve(options, category)`` → 把胜出类别解析为具体地点

具体实现通过构造函数注入 ``RoomService``，方便测试和替换。
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PlaceOptions:
    """地点查询参数。

    Attributes:
        address: 创建房间时传入的地址，原样转发给地点服务。
    """

    address: str = ""


class PlaceProvider(ABC):
    """地点服务接口。失败时实现方应抛出 ``PlaceLookupFailed``。"""

    @abstractmethod
    async def categories(self, options: PlaceOptions) -> list[str]:
        """返回可供投票的类别列表。"""

    @abstractmethod
    async def resolve(self, options: PlaceOptions, category: str) -> str:
        """把类别解析为一个具体地点名称。"""

    async def aclose(self) -> None:
        """释放底层资源。默认无操作。"""

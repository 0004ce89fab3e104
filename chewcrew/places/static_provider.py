"""
chewcrew.places.static_provider
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

基于本地 YAML 目录的地点服务，适合开发环境和离线部署。

目录文件格式::

    categories:
      sushi:
        - Sushi Zen
        - Umi
      pizza: []      # 没有具体地点时，直接返回类别名
"""
from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from pathlib import Path

import yaml

from chewcrew.core.exceptions import PlaceLookupFailed
from chewcrew.core.logging import get_logger
from chewcrew.places.base import PlaceOptions, PlaceProvider

logger = get_logger(__name__)


def _venue_list(category: object, venues: object) -> list[str]:
    """校验并规范化单个类别的地点列表。``None`` 视为空列表。"""
    if venues is None:
        return []
    # 标量（如 ``sushi: Sushi Zen``）会被逐字符迭代，必须拒绝
    if not isinstance(venues, list) or not all(
        isinstance(venue, (str, int, float)) and not isinstance(venue, bool)
        for venue in venues
    ):
        raise ValueError(f"类别 {category} 的地点必须是字符串列表，实际为: {venues!r}")
    return [str(venue) for venue in venues]


class StaticPlaceProvider(PlaceProvider):
    """内存目录实现。地址参数被忽略。

    Attributes:
        catalog: 类别 → 地点列表，保持声明顺序。
    """

    def __init__(
        self,
        catalog: Mapping[str, Sequence[str]],
        rng: random.Random | None = None,
    ) -> None:
        """初始化目录。

        Raises:
            ValueError: 某个类别对应的不是地点列表（或空值）。
        """
        self.catalog: dict[str, list[str]] = {
            str(category): _venue_list(category, venues)
            for category, venues in catalog.items()
        }
        self._rng = rng or random.Random()

    @classmethod
    def from_yaml(cls, path: Path, rng: random.Random | None = None) -> StaticPlaceProvider:
        """从 YAML 文件加载地点目录。

        Raises:
            FileNotFoundError: 目录文件不存在。
            ValueError: 文件缺少 ``categories`` 映射，或某个类别的地点不是列表。
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        categories = data.get("categories")
        if not isinstance(categories, dict):
            raise ValueError(f"地点目录缺少 categories 映射: {path}")

        provider = cls(categories, rng=rng)
        logger.info("地点目录已加载 | path=%s | categories=%d", path, len(provider.catalog))
        return provider

    async def categories(self, options: PlaceOptions) -> list[str]:
        return list(self.catalog)

    async def resolve(self, options: PlaceOptions, category: str) -> str:
        if category not in self.catalog:
            raise PlaceLookupFailed(f"Unknown category: {category}")
        venues = self.catalog[category]
        if not venues:
            return category
        return self._rng.choice(venues)

"""
chewcrew.places
~~~~~~~~~~~~~~~

地点服务实现及工厂。
"""
from __future__ import annotations

from chewcrew.core.config import Settings
from chewcrew.places.base import PlaceOptions, PlaceProvider
from chewcrew.places.http_provider import HttpPlaceProvider
from chewcrew.places.static_provider import StaticPlaceProvider

__all__ = [
    "HttpPlaceProvider",
    "PlaceOptions",
    "PlaceProvider",
    "StaticPlaceProvider",
    "build_place_provider",
]


def build_place_provider(settings: Settings) -> PlaceProvider:
    """根据 ``PLACE_PROVIDER`` 配置创建地点服务实例。"""
    if settings.PLACE_PROVIDER == "http":
        return HttpPlaceProvider(
            base_url=settings.PLACE_API_URL,
            api_key=settings.PLACE_API_KEY,
            timeout=settings.PLACE_LOOKUP_TIMEOUT,
        )
    return StaticPlaceProvider.from_yaml(settings.place_catalog_path)

"""
chewcrew.places.http_provider
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

外部地点服务的 HTTP 客户端封装。

接口约定:
  - ``GET /categories?address=...``         → ``["sushi", "pizza", ...]``
  - ``GET /places?address=...&category=...`` → ``[{"name": "..."}, ...]``

任何传输、状态码或解析错误都会转换为 ``PlaceLookupFailed``。
"""
from __future__ import annotations

from typing import Any

import httpx

from chewcrew.core.exceptions import PlaceLookupFailed
from chewcrew.core.logging import get_logger
from chewcrew.places.base import PlaceOptions, PlaceProvider

logger = get_logger(__name__)


class HttpPlaceProvider(PlaceProvider):
    """基于 ``httpx.AsyncClient`` 的地点服务实现。"""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """初始化客户端。

        Args:
            base_url: 地点服务根地址。
            api_key: 可选的 API Key，以 Bearer Token 形式发送。
            timeout: HTTP 请求超时（秒）。
            client: 可选的 ``httpx.AsyncClient``（用于测试注入 mock transport）。
        """
        self._headers: dict[str, str] = {"Accept": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout,
        )

    async def categories(self, options: PlaceOptions) -> list[str]:
        data = await self._get_json("/categories", {"address": options.address})
        if not isinstance(data, list) or not all(isinstance(c, str) for c in data):
            raise PlaceLookupFailed("Malformed categories response")
        return data

    async def resolve(self, options: PlaceOptions, category: str) -> str:
        data = await self._get_json(
            "/places", {"address": options.address, "category": category},
        )
        names = [
            place["name"]
            for place in (data if isinstance(data, list) else [])
            if isinstance(place, dict) and isinstance(place.get("name"), str) and place["name"]
        ]
        if not names:
            raise PlaceLookupFailed(f"No place found for category: {category}")
        return names[0]

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        try:
            response = await self._client.get(path, params=params, headers=self._headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.error("地点服务调用异常 | path=%s | %s", path, e)
            raise PlaceLookupFailed(f"Place service error: {e}") from e
        except ValueError as e:
            logger.error("地点服务返回非 JSON 内容 | path=%s", path)
            raise PlaceLookupFailed("Malformed place service response") from e

"""
tests.conftest
~~~~~~~~~~~~~~

共享 pytest fixtures —— 用 mock 替代外部地点服务，
使单元测试可在无网络环境下快速运行。
"""
from __future__ import annotations

import os
from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest

# ── 在所有测试导入前设置环境变量 ─────────────────────────────────────
os.environ.setdefault("ENVIRONMENT", "test")  # 关闭限流，日志级别 DEBUG

from fastapi.testclient import TestClient  # noqa: E402

from chewcrew.api.deps import get_room_service  # noqa: E402
from chewcrew.main import app  # noqa: E402
from chewcrew.places.base import PlaceOptions, PlaceProvider  # noqa: E402
from chewcrew.services.room_service import RoomService  # noqa: E402
from chewcrew.services.room_store import RoomStore  # noqa: E402

DEFAULT_CATEGORIES: list[str] = ["sushi", "pizza"]


def _echo(options: PlaceOptions, category: str) -> str:
    return category


@pytest.fixture()
def echo_provider() -> MagicMock:
    """返回一个 mock 的地点服务：类别固定为 sushi / pizza，resolve 原样返回类别名。"""
    provider = MagicMock(spec=PlaceProvider)
    provider.categories = AsyncMock(return_value=list(DEFAULT_CATEGORIES))
    provider.resolve = AsyncMock(side_effect=_echo)
    provider.aclose = AsyncMock()
    return provider


@pytest.fixture()
def room_service(echo_provider: MagicMock) -> RoomService:
    """基于全新注册表和 mock 地点服务的 RoomService。"""
    return RoomService(
        RoomStore(),
        echo_provider,
        lookup_timeout=1.0,
        lookup_attempts=1,
    )


@pytest.fixture()
def client(room_service: RoomService) -> Iterator[TestClient]:
    """注入 ``room_service`` 的 HTTP 测试客户端（不触发 lifespan）。"""
    app.dependency_overrides[get_room_service] = lambda: room_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

"""
chewcrew.main
~~~~~~~~~~~~~

FastAPI 应用入口 —— 注册路由、挂载中间件、定义生命周期。
"""
from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from chewcrew.api import room
from chewcrew.api.deps import get_room_service
from chewcrew.core.config import settings
from chewcrew.core.exceptions import ChewCrewException
from chewcrew.core.logging import get_logger, setup_logging
from chewcrew.core.rate_limit import limiter
from chewcrew.places import build_place_provider
from chewcrew.schemas.room import ErrorResponse
from chewcrew.services.room_service import RoomService
from chewcrew.services.room_store import RoomStore

# 初始化日志系统（必须在其他模块之前）
setup_logging()
logger = get_logger(__name__)


# ── 生命周期 ──────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期钩子：创建房间注册表与地点服务，关闭时释放连接。"""
    # ── 启动 ──
    provider = build_place_provider(settings)
    app.state.room_service = RoomService(RoomStore(), provider)
    logger.info(
        "🚀 应用已启动 | env=%s | debug=%s | log_level=%s | place_provider=%s",
        settings.ENVIRONMENT,
        settings.debug,
        settings.effective_log_level,
        settings.PLACE_PROVIDER,
    )
    yield
    # ── 关闭 ──
    await provider.aclose()
    logger.info("👋 应用已关闭")


# ── 创建 FastAPI 实例 ─────────────────────────────────────────────────

app: FastAPI = FastAPI(
    title=settings.PROJECT_NAME,
    description="ChewCrew 多人投票选餐厅 API",
    version=settings.VERSION,
    debug=settings.debug,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ── CORS 中间件（前端为静态页面，所有环境均允许任意来源）─────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def allow_any_origin(
    request: Request, call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """无论请求是否带 Origin，所有应答都带上 ``Access-Control-Allow-Origin: *``。"""
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


# ── 路由挂载 ──────────────────────────────────────────────────────────
app.include_router(room.router, tags=["Room"])


# ── 异常处理器 ────────────────────────────────────────────────────────

@app.exception_handler(ChewCrewException)
async def chewcrew_exception_handler(request: Request, exc: ChewCrewException) -> JSONResponse:
    """业务异常 → ``{"error": "<message>"}``。

    ``LEGACY_ERROR_STATUS`` 开启时统一返回 500，否则使用异常自带的状态码。
    """
    status_code = 500 if settings.LEGACY_ERROR_STATUS else exc.status_code
    logger.info("业务异常: %s %s -> %s (%d)", request.method, request.url.path, exc, status_code)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """捕获所有未处理异常，返回统一的错误格式。"""
    logger.error("未捕获异常: %s %s -> %s", request.method, request.url, exc, exc_info=True)
    # 非 prod 环境返回详细错误信息，prod 环境隐藏内部细节
    detail = str(exc) if not settings.is_prod else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=detail).model_dump(),
        headers={"Access-Control-Allow-Origin": "*"},
    )


@app.get("/health", tags=["System"])
async def health_check(service: RoomService = Depends(get_room_service)) -> JSONResponse:
    """验证服务是否正常运行。

    Returns:
        包含服务状态与当前房间数的 JSON 响应。
    """
    return JSONResponse(
        content={
            "status": "ok",
            "environment": settings.ENVIRONMENT,
            "debug": settings.debug,
            "rooms": len(service.store),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chewcrew.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.reload,  # 仅 dev 环境开启热重载
        log_level=settings.effective_log_level.lower(),
    )

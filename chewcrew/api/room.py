"""
chewcrew.api.room
~~~~~~~~~~~~~~~~~

投票房间接口 —— 参数全部通过 query string 传递。

端点:
  - ``GET      /room?id=``                  → 获取房间（不含 hostid）
  - ``GET|POST /room/new?address=``         → 创建房间（含 hostid）
  - ``GET|POST /room/vote?id=&name=&vote=`` → 投票（空应答体）
  - ``GET|POST /room/end?id=&hostid=``      → 结束投票（含 winner）

业务异常由 ``chewcrew.main`` 中的异常处理器统一转换为 ``{"error": ...}``。
"""
from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from chewcrew.api.deps import get_room_service
from chewcrew.core.rate_limit import limiter
from chewcrew.schemas.room import RoomView
from chewcrew.services.room_service import RoomService

router: APIRouter = APIRouter()


@router.get("/room", summary="获取房间", response_model=RoomView, response_model_exclude_none=True)
@limiter.limit("20/second")
async def get_room(
    request: Request,
    room_id: str = Query("", alias="id", description="房间 ID"),
    service: RoomService = Depends(get_room_service),
):
    """返回房间信息。不包含 host ID 和票数。"""
    view = await service.get(room_id)
    return JSONResponse(content=view.to_json())


@router.api_route(
    "/room/new",
    methods=["GET", "POST"],
    summary="创建房间",
    response_model=RoomView,
    response_model_exclude_none=True,
)
@limiter.limit("2/second")
async def new_room(
    request: Request,
    address: str = Query("", description="转发给地点服务的地址"),
    service: RoomService = Depends(get_room_service),
):
    """创建房间。这是唯一返回 ``hostid`` 的接口，客户端需自行保存。"""
    view = await service.new(address)
    return JSONResponse(content=view.to_json())


@router.api_route("/room/vote", methods=["GET", "POST"], summary="投票")
@limiter.limit("10/second")
async def cast_vote(
    request: Request,
    room_id: str = Query("", alias="id", description="房间 ID"),
    name: str = Query("", description="投票者名字"),
    vote: str = Query("", description="所选类别"),
    service: RoomService = Depends(get_room_service),
):
    """投出一票。成功时返回空应答体。"""
    await service.vote(room_id, name, vote)
    return Response(status_code=200, media_type="application/json")


@router.api_route(
    "/room/end",
    methods=["GET", "POST"],
    summary="结束投票",
    response_model=RoomView,
    response_model_exclude_none=True,
)
@limiter.limit("2/second")
async def end_room(
    request: Request,
    room_id: str = Query("", alias="id", description="房间 ID"),
    hostid: str = Query("", description="房主凭证"),
    service: RoomService = Depends(get_room_service),
):
    """房主结束投票。重复调用返回同一结果。"""
    view = await service.end(room_id, hostid)
    return JSONResponse(content=view.to_json())

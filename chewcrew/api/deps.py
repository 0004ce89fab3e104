from fastapi import Request

from chewcrew.services.room_service import RoomService


def get_room_service(request: Request) -> RoomService:
    return request.app.state.room_service

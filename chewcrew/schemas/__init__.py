"""
chewcrew.schemas
~~~~~~~~~~~~~~~~
Pydantic schemas and models for the API.
"""
from chewcrew.schemas.room import ErrorResponse, RoomView

__all__ = ["ErrorResponse", "RoomView"]

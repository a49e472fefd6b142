"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """{"success": bool, "message": str, "data": ...}

    Handled failures (duplicates, not found, collaborator errors) use
    success=False with HTTP 200; the status code does not signal them.
    """

    success: bool
    message: str
    data: T | None = None


def ok(message: str, data=None) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


def fail(message: str) -> ApiResponse:
    return ApiResponse(success=False, message=message)

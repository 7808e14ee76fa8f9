"""Module: common."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


# Success envelope shared by every endpoint.
class ApiResponse(BaseModel, Generic[DataT]):
    message: str
    data: DataT


class ErrorResponse(BaseModel):
    message: str
    error: Any | None = None

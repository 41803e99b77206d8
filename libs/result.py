"""Result type shared by use cases

Use cases never raise across their boundary; they return either
``Return.ok(value)`` or ``Return.err(Error(...))``.
"""

from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Error(BaseModel):
    """Typed failure carried by an err Result"""

    code: str
    message: str
    reason: Optional[str] = None


class Result(Generic[T]):
    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self.value = value
        self.error = error

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        """Render as ``{"success": True, "data": ...}`` or ``{"success": False, "error": "..."}``"""
        if self.is_err():
            return {"success": False, "error": self.error.message}
        data = self.value
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        return {"success": True, "data": data}

    def __repr__(self) -> str:
        if self.is_err():
            return f"Result.err({self.error.code}: {self.error.message})"
        return f"Result.ok({self.value!r})"


class Return:
    @staticmethod
    def ok(value: T = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result[Any]:
        return Result(error=error)

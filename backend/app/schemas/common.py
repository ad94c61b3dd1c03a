"""
Response envelope shared by every endpoint.

Success bodies look like {"success": true, "message": "...", "data": {...}};
errors are produced by core.exceptions handlers with success=false.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    message: str
    data: Optional[DataT] = None


def ok(message: str, data=None) -> dict:
    """Build a success envelope."""
    return {"success": True, "message": message, "data": data}

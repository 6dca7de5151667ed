from pydantic import BaseModel
from typing import Dict, Generic, TypeVar, Optional

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    data: Optional[T] = None
    error: Optional[str] = None
    errors: Optional[Dict[str, str]] = None  # per-field validation messages

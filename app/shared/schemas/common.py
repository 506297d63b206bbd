# app/shared/schemas/common.py
from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import datetime


class BaseResponse(BaseModel):
    success: bool = True
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    app: str
    environment: str


class DeleteResponse(BaseResponse):
    deleted_id: int

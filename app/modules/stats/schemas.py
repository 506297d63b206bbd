# app/modules/stats/schemas.py
from enum import Enum
from pydantic import BaseModel
from typing import List


class StatsRole(str, Enum):
    USER = "user"
    RIDER = "rider"


class StatsResponse(BaseModel):
    role: str
    email: str
    total: int
    delivered: int
    pending: int
    earnings: float
    cashed_out: float


class StatusCount(BaseModel):
    status: str
    count: int


class DeliveryStatusCountsResponse(BaseModel):
    counts: List[StatusCount]
    total: int

"""Application DTOs for sales reporting."""

from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


class DailyEarningsDTO(BaseModel):
    day: date
    orders_count: int
    total_earnings: Decimal

    model_config = {"frozen": True}


class SalesStatsDTO(BaseModel):
    total_paid_orders: int = Field(..., ge=0)
    pending_orders: int = Field(..., ge=0)
    total_revenue: Decimal
    unique_customers: int = Field(..., ge=0)
    daily_earnings: List[DailyEarningsDTO] = Field(default_factory=list, description="Last 30 days, newest first")

    model_config = {"frozen": True}

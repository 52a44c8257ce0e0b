"""Analytics Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LogoTapReport(BaseModel):
    """Schema for a client's cumulative logo tap count."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    brand: Any = None
    device_id: Any = Field(None, alias="deviceId")
    taps: Any = Field(None, description="Cumulative taps seen on this device")

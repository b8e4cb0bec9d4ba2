# wearable models: daily biometric snapshots from the patient's device
# mirrors frontend services/wearable-data.ts WearableData, SleepData, MovementData

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


SleepQuality = Literal["Good", "Fair", "Poor"]


class SleepSummary(BaseModel):
    quality: SleepQuality
    duration_hours: float = Field(..., alias="durationHours")

    model_config = {"populate_by_name": True}


class MovementSummary(BaseModel):
    step_count: int = Field(..., alias="stepCount")

    model_config = {"populate_by_name": True}


class WearableReading(BaseModel):
    """one day of wearable sensor data; every physiological field may be missing"""
    timestamp: datetime
    heart_rate_bpm: Optional[int] = Field(None, alias="heartRateBpm")
    heart_rate_variability_ms: Optional[int] = Field(None, alias="heartRateVariabilityMs")
    eda_microsiemens: Optional[float] = Field(None, alias="edaMicrosiemens")
    body_temperature_celsius: Optional[float] = Field(None, alias="bodyTemperatureCelsius")
    sleep_data: Optional[SleepSummary] = Field(None, alias="sleepData")
    movement_data: Optional[MovementSummary] = Field(None, alias="movementData")

    model_config = {"populate_by_name": True}

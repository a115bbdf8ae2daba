from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from engine.enums import Severity
from engine.forecast.supply_demand import Prediction
from engine.series import HistoricalRecord, TimePoint


class HistoricalRecordIn(BaseModel):
    timestamp: datetime
    session_volume: int = Field(ge=0)
    available_providers: int = Field(ge=0)
    active_providers: int = Field(default=0, ge=0)

    def to_record(self) -> HistoricalRecord:
        return HistoricalRecord.from_counts(
            timestamp=self.timestamp,
            session_volume=self.session_volume,
            available_providers=self.available_providers,
            active_providers=self.active_providers,
        )


class TimePointIn(BaseModel):
    timestamp: datetime
    value: float = Field(allow_inf_nan=False)

    def to_point(self) -> TimePoint:
        return TimePoint(timestamp=self.timestamp, value=self.value)


class ForecastRequest(BaseModel):
    records: List[HistoricalRecordIn] = Field(default_factory=list)
    horizon_hours: int = Field(default=24, ge=1, le=336)
    start: Optional[datetime] = None


class AnomalyRequest(BaseModel):
    method: str
    reference: List[float] = Field(default_factory=list)
    series: List[TimePointIn] = Field(default_factory=list)
    current: Optional[float] = Field(default=None, allow_inf_nan=False)
    threshold: Optional[float] = Field(default=None, gt=0.0, allow_inf_nan=False)
    window: Optional[int] = Field(default=None, ge=1, le=1000)
    min_agreement: Optional[int] = Field(default=None, ge=1, le=3)


class OutlierRequest(BaseModel):
    series: List[TimePointIn]
    threshold: Optional[float] = Field(default=None, gt=0.0, allow_inf_nan=False)


class PredictionIn(BaseModel):
    timestamp: datetime
    hour: int = Field(ge=0, le=23)
    day_of_week: int = Field(ge=0, le=6)
    predicted_volume: int = Field(ge=0)
    predicted_available: int = Field(ge=1)
    predicted_ratio: float = Field(ge=0.0, allow_inf_nan=False)
    confidence: float = Field(ge=0.0, le=1.0)
    imbalance_risk: Severity
    lower_bound: int = Field(default=0, ge=0)
    upper_bound: int = Field(default=0, ge=0)

    def to_prediction(self) -> Prediction:
        return Prediction(**self.model_dump())


class RecommendRequest(BaseModel):
    predictions: List[PredictionIn] = Field(default_factory=list)
    now: Optional[datetime] = None

"""
Response models for API endpoints and internal data structures.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, model_serializer

from engine.enums import DetectionMethod, RecommendationType, Severity


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    model_config = ConfigDict(from_attributes=True)

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class PredictionOut(NpModel):

    timestamp: datetime
    hour: int
    day_of_week: int
    predicted_volume: int
    predicted_available: int
    predicted_ratio: float
    confidence: float
    imbalance_risk: Severity
    lower_bound: int
    upper_bound: int


class ForecastSummaryOut(NpModel):

    total_predictions: int
    hours_ahead: int
    risk_counts: Dict[str, int]
    average_confidence: float
    method: str
    data_points: int


class ForecastResponse(NpModel):

    predictions: List[PredictionOut]
    summary: ForecastSummaryOut


class AnomalyDetailsOut(NpModel):

    value: float
    expected: Optional[float] = None
    threshold: Optional[float] = None
    z_score: Optional[float] = None
    deviation: Optional[float] = None


class AnomalyResultOut(NpModel):

    is_anomaly: bool
    score: float
    method: DetectionMethod
    severity: Severity
    details: AnomalyDetailsOut


class TimePointOut(NpModel):

    timestamp: datetime
    value: float


class TargetTimeframeOut(NpModel):

    start: datetime
    end: datetime


class RecommendationMetricsOut(NpModel):

    current_ratio: float
    target_ratio: float
    estimated_impact: str


class RecommendationOut(NpModel):

    id: str
    type: RecommendationType
    severity: Severity
    title: str
    description: str
    rationale: str
    target_timeframe: TargetTimeframeOut
    metrics: RecommendationMetricsOut
    actions: List[str]
    priority: int


class RecommendationSummaryOut(NpModel):

    total: int
    by_severity: Dict[str, int]
    by_type: Dict[str, int]
    highest_priority: Optional[RecommendationOut] = None


class RecommendResponse(NpModel):

    recommendations: List[RecommendationOut]
    summary: RecommendationSummaryOut
    forecast: Optional[ForecastResponse] = None

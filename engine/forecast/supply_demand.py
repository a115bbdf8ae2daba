"""
Supply/demand forecasting that combines independent seasonal forecasts of session volume and available providers into per-hour predictions with an imbalance risk label derived from the predicted ratio.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from config import settings
from engine.enums import Severity
from engine.forecast.holtwinters import forecast_series, validate_horizon
from engine.series import HistoricalRecord, availability_series, day_of_week, volume_series

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prediction:
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


@dataclass(frozen=True)
class ForecastSummary:
    total_predictions: int
    hours_ahead: int
    risk_counts: Dict[str, int] = field(default_factory=dict)
    average_confidence: float = 0.0
    method: str = "holt_winters"
    data_points: int = 0


def classify_risk(ratio: float) -> Severity:
    return Severity.from_ratio(ratio)


def forecast(
    records: Sequence[HistoricalRecord],
    horizon: int,
    start: Optional[datetime] = None,
) -> List[Prediction]:
    horizon = validate_horizon(horizon)

    volume = forecast_series(
        volume_series(records), horizon, default=settings.baseline_default_volume, start=start,
    )
    available = forecast_series(
        availability_series(records), horizon, default=settings.baseline_default_available, start=start,
    )

    predictions: List[Prediction] = []
    for v, a in zip(volume, available):
        predicted_volume = max(0, int(round(v.predicted)))
        predicted_available = max(1, int(round(a.predicted)))
        ratio = predicted_volume / max(1, predicted_available)
        lower = max(0, int(round(v.lower)))
        upper = max(lower, predicted_volume, int(round(v.upper)))
        predictions.append(Prediction(
            timestamp=v.timestamp,
            hour=v.timestamp.hour,
            day_of_week=day_of_week(v.timestamp),
            predicted_volume=predicted_volume,
            predicted_available=predicted_available,
            predicted_ratio=round(ratio, 2),
            confidence=round(min(1.0, max(0.0, (v.confidence + a.confidence) / 2)), 2),
            imbalance_risk=classify_risk(ratio),
            lower_bound=lower,
            upper_bound=upper,
        ))

    log.info(
        "supply/demand forecast | history=%d | horizon=%d | method=%s/%s",
        len(records), horizon,
        volume[0].method if volume else "none",
        available[0].method if available else "none",
    )
    return predictions


def summarize(predictions: Sequence[Prediction], data_points: int = 0) -> ForecastSummary:
    counts = {s.value: 0 for s in (Severity.critical, Severity.high, Severity.medium, Severity.low)}
    for p in predictions:
        counts[p.imbalance_risk.value] += 1
    avg = sum(p.confidence for p in predictions) / len(predictions) if predictions else 0.0
    method = "holt_winters" if data_points >= 2 * settings.forecast_seasonal_period else "baseline"
    return ForecastSummary(
        total_predictions=len(predictions),
        hours_ahead=len(predictions),
        risk_counts=counts,
        average_confidence=round(avg, 2),
        method=method,
        data_points=data_points,
    )

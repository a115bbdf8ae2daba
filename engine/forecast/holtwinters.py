"""
Seasonal forecasting for a single hourly series using additive Holt-Winters (triple exponential smoothing) with a fixed 24-hour season, one-step-ahead residual variance for interval width and confidence scoring, and a flat baseline projection for short or numerically unusable histories.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.stats import norm

from config import settings
from engine import stats
from engine.errors import ConfigurationError
from engine.series import TimePoint, hour_floor

log = logging.getLogger(__name__)

_STEP = timedelta(hours=1)


@dataclass(frozen=True)
class SeriesForecast:
    timestamp: datetime
    predicted: float
    lower: float
    upper: float
    confidence: float
    method: str


@dataclass(frozen=True)
class SeasonalComponents:
    level: float
    trend: float
    seasonal: Tuple[float, ...]
    period: int
    residual_variance: float
    sample_count: int


def _interval_z() -> float:
    coverage = min(max(settings.forecast_interval_coverage, 0.5), 0.999)
    return float(norm.ppf(0.5 + coverage / 2.0))


def validate_horizon(horizon: int) -> int:
    if isinstance(horizon, bool) or not isinstance(horizon, (int, np.integer)):
        raise ConfigurationError(f"horizon must be an integer, got {type(horizon).__name__}")
    if horizon <= 0:
        raise ConfigurationError(f"horizon must be positive, got {horizon}")
    if horizon > settings.forecast_max_horizon:
        raise ConfigurationError(
            f"horizon {horizon} exceeds the maximum of {settings.forecast_max_horizon} hours"
        )
    return int(horizon)


def _initial_components(arr: np.ndarray, period: int) -> Tuple[float, float, np.ndarray]:
    first = arr[:period]
    second = arr[period : 2 * period]
    level = float(first.mean())
    trend = float((second.mean() - first.mean()) / period)

    seasonal = np.zeros(period)
    for phase in range(period):
        seasonal[phase] = float(np.mean(arr[phase::period] - level))
    seasonal -= seasonal.mean()
    return level, trend, seasonal


def fit(
    values: Sequence[float],
    period: int | None = None,
    alpha: float | None = None,
    beta: float | None = None,
    gamma: float | None = None,
) -> SeasonalComponents:
    if period is None:
        period = settings.forecast_seasonal_period
    if alpha is None:
        alpha = settings.forecast_alpha
    if beta is None:
        beta = settings.forecast_beta
    if gamma is None:
        gamma = settings.forecast_gamma

    arr = np.asarray(values, dtype=float)
    if arr.size < 2 * period:
        raise ConfigurationError(
            f"seasonal fit needs at least {2 * period} points, got {arr.size}"
        )

    with np.errstate(over="raise", invalid="raise", divide="raise"):
        level, trend, seasonal = _initial_components(arr, period)
        residuals = np.zeros(arr.size)
        for t, y in enumerate(arr):
            phase = t % period
            s = seasonal[phase]
            residuals[t] = y - (level + trend + s)
            prev_level = level
            level = alpha * (y - s) + (1 - alpha) * (level + trend)
            trend = beta * (level - prev_level) + (1 - beta) * trend
            seasonal[phase] = gamma * (y - level) + (1 - gamma) * s

        # the first season is dominated by initialisation error
        residual_variance = float(np.var(residuals[period:]))

    # rotate so index 0 is the phase of the first future step
    offset = arr.size % period
    rotated = tuple(float(v) for v in np.roll(seasonal, -offset))
    return SeasonalComponents(
        level=float(level),
        trend=float(trend),
        seasonal=rotated,
        period=period,
        residual_variance=residual_variance,
        sample_count=int(arr.size),
    )


def confidence_at(sample_count: int, step: int, residual_variance: float) -> float:
    data_quality = min(1.0, sample_count / settings.forecast_history_full_confidence)
    horizon_penalty = max(0.0, 1.0 - step / settings.forecast_horizon_decay_hours)
    variance_penalty = min(
        settings.forecast_variance_penalty_cap,
        residual_variance / settings.forecast_variance_penalty_divisor,
    )
    raw = settings.forecast_confidence_base * data_quality * horizon_penalty - variance_penalty
    return min(settings.forecast_confidence_max, max(settings.forecast_confidence_min, raw))


def _origin(points: Sequence[TimePoint], start: Optional[datetime]) -> datetime:
    if points:
        return points[-1].timestamp
    if start is not None:
        return start
    return hour_floor(datetime.now(timezone.utc))


def baseline(
    points: Sequence[TimePoint],
    horizon: int,
    default: float,
    start: Optional[datetime] = None,
) -> List[SeriesForecast]:
    """Flat projection of the recent mean, used when seasonal fitting is not possible."""
    origin = _origin(points, start)
    # window over the last points first; non-finite ones inside it are skipped
    vals = stats.finite([p.value for p in points[-settings.baseline_window:]])

    value = math.nan
    margin = math.nan
    if vals.size:
        with np.errstate(all="ignore"):
            value = float(vals.mean())
            spread = stats.std(vals)
        confidence = settings.baseline_confidence
        margin = _interval_z() * spread if spread > 0 else settings.baseline_interval_fraction * value

    if not (math.isfinite(value) and math.isfinite(margin)):
        if vals.size:
            log.warning("baseline of %d points is not finite; using defaults", vals.size)
        value = float(default)
        confidence = settings.baseline_empty_confidence
        margin = settings.baseline_interval_fraction * value

    value = max(0.0, value)
    margin = abs(margin)
    return [
        SeriesForecast(
            timestamp=origin + _STEP * h,
            predicted=round(value, 2),
            lower=round(max(0.0, value - margin), 2),
            upper=round(value + margin, 2),
            confidence=confidence,
            method="baseline",
        )
        for h in range(1, horizon + 1)
    ]


def _seasonal_forecast(
    components: SeasonalComponents,
    origin: datetime,
    horizon: int,
) -> List[SeriesForecast]:
    z = _interval_z()
    growth = settings.forecast_variance_growth_hours
    results: List[SeriesForecast] = []
    for h in range(1, horizon + 1):
        seasonal = components.seasonal[(h - 1) % components.period]
        predicted = max(0.0, components.level + h * components.trend + seasonal)
        margin = z * math.sqrt(components.residual_variance * (1 + h / growth))
        confidence = confidence_at(components.sample_count, h, components.residual_variance)
        if not all(math.isfinite(v) for v in (predicted, margin, confidence)):
            raise FloatingPointError(f"non-finite forecast at step {h}")
        results.append(SeriesForecast(
            timestamp=origin + _STEP * h,
            predicted=round(predicted, 2),
            lower=round(max(0.0, predicted - margin), 2),
            upper=round(predicted + margin, 2),
            confidence=round(confidence, 4),
            method="holt_winters",
        ))
    return results


def forecast_series(
    points: Sequence[TimePoint],
    horizon: int,
    default: float | None = None,
    start: Optional[datetime] = None,
) -> List[SeriesForecast]:
    horizon = validate_horizon(horizon)
    if default is None:
        default = settings.baseline_default_volume
    period = settings.forecast_seasonal_period

    if len(points) < 2 * period:
        log.info(
            "insufficient history for seasonal fit (%d < %d points); using baseline",
            len(points), 2 * period,
        )
        return baseline(points, horizon, default, start)

    values = [p.value for p in points]
    if not np.all(np.isfinite(np.asarray(values, dtype=float))):
        log.warning("series contains non-finite values; using baseline forecast")
        return baseline(points, horizon, default, start)

    try:
        components = fit(values, period=period)
        return _seasonal_forecast(components, _origin(points, start), horizon)
    except (ArithmeticError, ValueError) as exc:
        log.warning("seasonal forecast failed (%s); using baseline forecast", exc)
        return baseline(points, horizon, default, start)

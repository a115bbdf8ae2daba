"""
Detection logic for identifying anomalous values against a reference sample using independent statistical methods (z-score, robust MAD z-score, interquartile range) and time-ordered methods (moving-average deviation, volatility ratio), combined by an ensemble voter, with explicit zero-dispersion guards so every call returns a well-formed result.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np

from config import settings
from engine import stats
from engine.enums import DetectionMethod
from engine.errors import ConfigurationError
from engine.series import TimePoint


@dataclass(frozen=True)
class AnomalyDetails:
    value: float
    expected: Optional[float] = None
    threshold: Optional[float] = None
    z_score: Optional[float] = None
    deviation: Optional[float] = None


@dataclass(frozen=True)
class AnomalyResult:
    is_anomaly: bool
    score: float
    method: DetectionMethod
    details: AnomalyDetails = field(default_factory=lambda: AnomalyDetails(value=0.0))


def _normal(method: DetectionMethod, **details: Optional[float]) -> AnomalyResult:
    return AnomalyResult(is_anomaly=False, score=0.0, method=method, details=AnomalyDetails(**details))


def _values(series: Sequence[Union[TimePoint, float]]) -> np.ndarray:
    return stats.finite([p.value if isinstance(p, TimePoint) else p for p in series])


def _z_style(
    method: DetectionMethod,
    current: float,
    expected: float,
    spread: float,
    threshold: float,
    scale: float = 1.0,
) -> AnomalyResult:
    if spread == 0 or not math.isfinite(spread):
        return _normal(method, value=current, expected=expected)
    z = scale * abs(current - expected) / spread
    return AnomalyResult(
        is_anomaly=z > threshold,
        score=min(1.0, z / (threshold * 2)),
        method=method,
        details=AnomalyDetails(
            value=current,
            expected=expected,
            threshold=threshold,
            z_score=z,
            deviation=spread if method != DetectionMethod.mad else None,
        ),
    )


def zscore(reference: Sequence[float], current: float, threshold: float | None = None) -> AnomalyResult:
    if threshold is None:
        threshold = settings.anomaly_zscore_threshold
    arr = _values(reference)
    if arr.size < settings.anomaly_min_samples or not math.isfinite(current):
        return _normal(DetectionMethod.zscore, value=current)
    return _z_style(DetectionMethod.zscore, current, stats.mean(arr), stats.std(arr), threshold)


def mad(reference: Sequence[float], current: float, threshold: float | None = None) -> AnomalyResult:
    """Modified z-score; robust to outliers already present in the reference."""
    if threshold is None:
        threshold = settings.anomaly_mad_threshold
    arr = _values(reference)
    if arr.size < settings.anomaly_min_samples or not math.isfinite(current):
        return _normal(DetectionMethod.mad, value=current)
    return _z_style(
        DetectionMethod.mad,
        current,
        stats.median(arr),
        stats.mad(arr),
        threshold,
        scale=settings.anomaly_mad_scale,
    )


def iqr(reference: Sequence[float], current: float, multiplier: float | None = None) -> AnomalyResult:
    if multiplier is None:
        multiplier = settings.anomaly_iqr_multiplier
    arr = _values(reference)
    if arr.size < settings.anomaly_iqr_min_samples or not math.isfinite(current):
        return _normal(DetectionMethod.iqr, value=current)

    q1, q3 = stats.quartiles(arr)
    spread = q3 - q1
    if spread == 0:
        return _normal(DetectionMethod.iqr, value=current, expected=stats.median(arr))

    lower = q1 - multiplier * spread
    upper = q3 + multiplier * spread
    score = 0.0
    if current < lower:
        score = min(1.0, (lower - current) / (spread * multiplier))
    elif current > upper:
        score = min(1.0, (current - upper) / (spread * multiplier))

    return AnomalyResult(
        is_anomaly=current < lower or current > upper,
        score=score,
        method=DetectionMethod.iqr,
        details=AnomalyDetails(value=current, expected=(q1 + q3) / 2, threshold=multiplier, deviation=spread),
    )


def moving_average(
    series: Sequence[Union[TimePoint, float]],
    window: int | None = None,
    threshold: float | None = None,
) -> AnomalyResult:
    if window is None:
        window = settings.anomaly_moving_average_window
    if threshold is None:
        threshold = settings.anomaly_moving_average_threshold
    arr = _values(series)
    if arr.size < window + 1:
        last = float(arr[-1]) if arr.size else 0.0
        return _normal(DetectionMethod.moving_average, value=last)

    current = float(arr[-1])
    preceding = arr[-window - 1 : -1]
    return _z_style(
        DetectionMethod.moving_average,
        current,
        stats.moving_average(arr[:-1], window),
        stats.std(preceding),
        threshold,
    )


def volatility(
    series: Sequence[Union[TimePoint, float]],
    window: int | None = None,
    threshold: float | None = None,
) -> AnomalyResult:
    if window is None:
        window = settings.anomaly_volatility_window
    if threshold is None:
        threshold = settings.anomaly_volatility_threshold
    arr = _values(series)
    if arr.size < 2 * window:
        return _normal(DetectionMethod.volatility, value=0.0)

    recent_std = stats.std(arr[-window:])
    historical_std = stats.std(arr[-2 * window : -window])
    if historical_std == 0:
        return _normal(DetectionMethod.volatility, value=recent_std)

    ratio = recent_std / historical_std
    return AnomalyResult(
        is_anomaly=ratio > threshold,
        score=min(1.0, max(0.0, (ratio - 1) / threshold)),
        method=DetectionMethod.volatility,
        details=AnomalyDetails(
            value=recent_std,
            expected=historical_std,
            threshold=threshold,
            z_score=ratio,
        ),
    )


def ensemble(
    reference: Sequence[float],
    current: float,
    min_agreement: int | None = None,
) -> AnomalyResult:
    """Majority vote of z-score, MAD and IQR.

    The reported score is the mean of all three component scores even when
    fewer than ``min_agreement`` methods flag the value.
    """
    if min_agreement is None:
        min_agreement = settings.anomaly_ensemble_min_agreement
    results = [zscore(reference, current), mad(reference, current), iqr(reference, current)]
    votes = sum(1 for r in results if r.is_anomaly)
    score = sum(r.score for r in results) / len(results)
    return AnomalyResult(
        is_anomaly=votes >= min_agreement,
        score=score,
        method=DetectionMethod.ensemble,
        details=AnomalyDetails(value=current, threshold=float(min_agreement)),
    )


def flag_outliers(series: Sequence[TimePoint], threshold: float | None = None) -> List[TimePoint]:
    """Points whose z-score against the whole series exceeds ``threshold``."""
    if threshold is None:
        threshold = settings.anomaly_outlier_threshold
    arr = _values(series)
    if arr.size < settings.anomaly_min_samples:
        return []
    mu, sigma = stats.mean(arr), stats.std(arr)
    if sigma == 0:
        return []
    return [
        p for p in series
        if math.isfinite(p.value) and abs(p.value - mu) / sigma > threshold
    ]


def _check_positive(name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")


def detect(
    method: Union[DetectionMethod, str],
    reference: Sequence[Union[TimePoint, float]],
    current: Optional[float] = None,
    threshold: Optional[float] = None,
    window: Optional[int] = None,
    min_agreement: Optional[int] = None,
) -> AnomalyResult:
    """Run one detection method by name.

    Time-ordered methods read ``reference`` as an ordered series; when
    ``current`` is given it is appended as the newest point.
    """
    try:
        resolved = DetectionMethod(method)
    except ValueError as exc:
        known = ", ".join(m.value for m in DetectionMethod)
        raise ConfigurationError(f"unknown detection method {method!r}; expected one of: {known}") from exc

    _check_positive("threshold", threshold)
    if window is not None and (isinstance(window, bool) or not isinstance(window, int) or window <= 0):
        raise ConfigurationError(f"window must be a positive integer, got {window!r}")
    if min_agreement is not None and not 1 <= min_agreement <= 3:
        raise ConfigurationError(f"min_agreement must be between 1 and 3, got {min_agreement!r}")

    if resolved.is_time_ordered:
        series: List[Union[TimePoint, float]] = list(reference)
        if current is not None:
            series.append(current)
        if resolved == DetectionMethod.moving_average:
            return moving_average(series, window=window, threshold=threshold)
        return volatility(series, window=window, threshold=threshold)

    if current is None:
        raise ConfigurationError(f"{resolved.value} detection requires a current value")
    if window is not None:
        raise ConfigurationError(f"window does not apply to {resolved.value} detection")
    values = [p.value if isinstance(p, TimePoint) else p for p in reference]

    if resolved == DetectionMethod.zscore:
        return zscore(values, current, threshold)
    if resolved == DetectionMethod.mad:
        return mad(values, current, threshold)
    if resolved == DetectionMethod.iqr:
        return iqr(values, current, threshold)
    if threshold is not None:
        raise ConfigurationError("ensemble detection takes min_agreement, not threshold")
    return ensemble(values, current, min_agreement)

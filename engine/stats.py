"""
Statistical primitives shared by the forecaster, anomaly detector and recommendation engine: mean, population variance and standard deviation, median, floor-indexed quartiles, median absolute deviation and trailing moving averages over plain numeric sequences.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def mean(values: Sequence[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def variance(values: Sequence[float]) -> float:
    """Population variance; 0 for fewer than two values."""
    arr = _as_array(values)
    if arr.size < 2:
        return 0.0
    return float(np.var(arr))


def std(values: Sequence[float]) -> float:
    return float(np.sqrt(variance(values)))


def median(values: Sequence[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.median(arr))


def mad(values: Sequence[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.median(np.abs(arr - np.median(arr))))


def quartiles(values: Sequence[float]) -> Tuple[float, float]:
    """Q1 and Q3 read from the sorted sample at floor(n/4) and floor(3n/4)."""
    arr = np.sort(_as_array(values))
    n = arr.size
    if n == 0:
        return 0.0, 0.0
    return float(arr[int(n * 0.25)]), float(arr[int(n * 0.75)])


def moving_average(values: Sequence[float], window: int) -> float:
    arr = _as_array(values)
    if arr.size == 0 or window <= 0:
        return 0.0
    return float(arr[-window:].mean())


def finite(values: Sequence[float]) -> np.ndarray:
    arr = _as_array(values)
    return arr[np.isfinite(arr)]

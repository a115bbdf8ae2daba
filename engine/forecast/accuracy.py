"""
Forecast accuracy scoring (MAPE and RMSE) for comparing predicted values against observed actuals.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from engine.errors import ConfigurationError


@dataclass(frozen=True)
class ForecastAccuracy:
    mape: float
    rmse: float


def accuracy(actual: Sequence[float], predicted: Sequence[float]) -> ForecastAccuracy:
    if len(actual) != len(predicted) or len(actual) == 0:
        raise ConfigurationError("actual and predicted must have the same non-zero length")

    a = np.asarray(actual, dtype=float)
    p = np.asarray(predicted, dtype=float)

    # zero actuals have no defined percentage error
    nonzero = a != 0
    if nonzero.any():
        mape = float(np.mean(np.abs((a[nonzero] - p[nonzero]) / a[nonzero])) * 100)
    else:
        mape = 0.0
    rmse = float(np.sqrt(np.mean((a - p) ** 2)))
    return ForecastAccuracy(mape=round(mape, 2), rmse=round(rmse, 2))

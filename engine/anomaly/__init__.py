"""
Anomaly detection logic for operational metric series, utilizing independent statistical methods (z-score, MAD, IQR, moving-average deviation, volatility ratio) and an ensemble vote, to flag values that depart from their own history.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.anomaly.detection import (
    AnomalyDetails,
    AnomalyResult,
    detect,
    ensemble,
    flag_outliers,
    iqr,
    mad,
    moving_average,
    volatility,
    zscore,
)

__all__ = [
    "AnomalyDetails",
    "AnomalyResult",
    "detect",
    "ensemble",
    "flag_outliers",
    "iqr",
    "mad",
    "moving_average",
    "volatility",
    "zscore",
]

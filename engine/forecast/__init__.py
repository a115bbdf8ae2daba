"""
Forecasting logic for supply/demand imbalance, including seasonal Holt-Winters forecasting of hourly series with confidence intervals, a baseline fallback for short histories, risk classification of the predicted ratio and accuracy scoring.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.forecast.accuracy import ForecastAccuracy, accuracy
from engine.forecast.holtwinters import SeriesForecast, forecast_series
from engine.forecast.supply_demand import (
    ForecastSummary,
    Prediction,
    classify_risk,
    forecast,
    summarize as summarize_forecast,
)

__all__ = [
    "ForecastAccuracy",
    "accuracy",
    "SeriesForecast",
    "forecast_series",
    "ForecastSummary",
    "Prediction",
    "classify_risk",
    "forecast",
    "summarize_forecast",
]

"""
Enumerations for Severity, Recommendation Types and Detection Methods

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @classmethod
    def from_score(cls, score: float) -> Severity:
        from config import settings

        if score >= settings.severity_score_critical:
            return cls.critical
        if score >= settings.severity_score_high:
            return cls.high
        if score >= settings.severity_score_medium:
            return cls.medium
        return cls.low

    @classmethod
    def from_ratio(cls, ratio: float) -> Severity:
        from config import settings

        for threshold, label in settings.risk_ratio_thresholds:
            if ratio > threshold:
                return cls(label)
        return cls.low


class RecommendationType(str, Enum):
    budget_increase = "budget_increase"
    budget_decrease = "budget_decrease"
    priority_shift = "priority_shift"
    tutor_recruitment = "tutor_recruitment"
    demand_incentive = "demand_incentive"
    schedule_optimization = "schedule_optimization"


class DetectionMethod(str, Enum):
    zscore = "z-score"
    mad = "mad"
    iqr = "iqr"
    moving_average = "moving-average"
    volatility = "volatility"
    ensemble = "ensemble"

    @property
    def is_time_ordered(self) -> bool:
        return self in (DetectionMethod.moving_average, DetectionMethod.volatility)

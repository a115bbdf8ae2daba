"""
Test cases for enums used in the forecasting engine, including Severity, RecommendationType and DetectionMethod, validating ratio and score classification.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import DetectionMethod, RecommendationType, Severity


def test_severity_from_score():
    assert Severity.from_score(0.8) == Severity.critical
    assert Severity.from_score(0.5) == Severity.high
    assert Severity.from_score(0.3) == Severity.medium
    assert Severity.from_score(0.1) == Severity.low


@pytest.mark.parametrize(
    "ratio, expected",
    [
        (1.6, Severity.critical),
        (1.3, Severity.high),
        (1.0, Severity.medium),
        (0.5, Severity.low),
        (1.5, Severity.high),
        (1.2, Severity.medium),
        (0.9, Severity.low),
        (0.0, Severity.low),
    ],
)
def test_severity_from_ratio_strict_thresholds(ratio, expected):
    assert Severity.from_ratio(ratio) == expected


def test_recommendation_types():
    assert {t.value for t in RecommendationType} == {
        "budget_increase",
        "budget_decrease",
        "priority_shift",
        "tutor_recruitment",
        "demand_incentive",
        "schedule_optimization",
    }


def test_detection_method_values_and_ordering_flag():
    assert DetectionMethod("z-score") == DetectionMethod.zscore
    assert DetectionMethod.moving_average.is_time_ordered
    assert DetectionMethod.volatility.is_time_ordered
    assert not DetectionMethod.ensemble.is_time_ordered

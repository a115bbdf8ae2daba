"""
Test Suite for API Routes - Anomalies

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from api.requests import AnomalyRequest, OutlierRequest, TimePointIn
from api.routes import anomaly as anomaly_route
from engine.enums import DetectionMethod, Severity

START = datetime(2026, 10, 1, tzinfo=timezone.utc)


def _series(values):
    return [TimePointIn(timestamp=START + timedelta(hours=i), value=v) for i, v in enumerate(values)]


@pytest.mark.asyncio
async def test_detect_route_scores_reference():
    req = AnomalyRequest(method="ensemble", reference=[9, 10, 11, 10, 9, 11, 10, 10], current=50)
    res = await anomaly_route.detect_anomaly(req)
    assert res.is_anomaly is True
    assert res.method == DetectionMethod.ensemble
    assert res.severity == Severity.critical
    assert res.details.value == 50


@pytest.mark.asyncio
async def test_detect_route_prefers_time_series():
    values = [10, 11, 10, 11, 10, 11, 10]
    req = AnomalyRequest(method="moving-average", series=_series(values), current=30, window=7)
    res = await anomaly_route.detect_anomaly(req)
    assert res.is_anomaly is True
    assert res.method == DetectionMethod.moving_average


@pytest.mark.asyncio
async def test_detect_route_normal_value_is_low_severity():
    req = AnomalyRequest(method="z-score", reference=[5, 5, 5, 5], current=5)
    res = await anomaly_route.detect_anomaly(req)
    assert res.is_anomaly is False
    assert res.score == 0.0
    assert res.severity == Severity.low


@pytest.mark.asyncio
async def test_detect_route_unknown_method_is_400():
    req = AnomalyRequest(method="prophet", reference=[1, 2, 3], current=4)
    with pytest.raises(HTTPException) as exc:
        await anomaly_route.detect_anomaly(req)
    assert exc.value.status_code == 400
    assert "prophet" in exc.value.detail


@pytest.mark.asyncio
async def test_detect_route_missing_current_is_400():
    req = AnomalyRequest(method="iqr", reference=[1, 2, 3, 4])
    with pytest.raises(HTTPException) as exc:
        await anomaly_route.detect_anomaly(req)
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_outlier_route():
    req = OutlierRequest(series=_series([10] * 20 + [100]))
    res = await anomaly_route.series_outliers(req)
    assert len(res) == 1
    assert res[0].value == 100
    assert res[0].timestamp == START + timedelta(hours=20)

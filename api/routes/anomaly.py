"""
Anomaly routes scoring a current value against its history with a chosen detection method.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List

from fastapi import APIRouter

from api.requests import AnomalyRequest, OutlierRequest
from api.responses import AnomalyDetailsOut, AnomalyResultOut, TimePointOut
from api.routes.exception import handle_exceptions
from engine import anomaly
from engine.enums import Severity

router = APIRouter(tags=["Anomalies"])


@router.post("/anomalies/detect", response_model=AnomalyResultOut, summary="Score one value against a reference")
@handle_exceptions
async def detect_anomaly(req: AnomalyRequest) -> AnomalyResultOut:
    reference = [p.to_point() for p in req.series] if req.series else list(req.reference)
    result = anomaly.detect(
        req.method,
        reference,
        current=req.current,
        threshold=req.threshold,
        window=req.window,
        min_agreement=req.min_agreement,
    )
    return AnomalyResultOut(
        is_anomaly=result.is_anomaly,
        score=result.score,
        method=result.method,
        severity=Severity.from_score(result.score),
        details=AnomalyDetailsOut.model_validate(result.details),
    )


@router.post("/anomalies/outliers", response_model=List[TimePointOut], summary="Outlying points in a series")
@handle_exceptions
async def series_outliers(req: OutlierRequest) -> List[TimePointOut]:
    points = [p.to_point() for p in req.series]
    return [TimePointOut.model_validate(p) for p in anomaly.flag_outliers(points, req.threshold)]

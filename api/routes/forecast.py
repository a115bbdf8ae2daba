"""
Forecast routes producing hourly supply/demand predictions from historical records.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List

from fastapi import APIRouter

from api.requests import ForecastRequest
from api.responses import ForecastResponse, ForecastSummaryOut, PredictionOut
from api.routes.exception import handle_exceptions
from engine.forecast import Prediction, forecast, summarize_forecast

router = APIRouter(tags=["Forecast"])


def build_forecast(req: ForecastRequest) -> tuple[List[Prediction], ForecastResponse]:
    records = [r.to_record() for r in req.records]
    predictions = forecast(records, req.horizon_hours, start=req.start)
    summary = summarize_forecast(predictions, data_points=len(records))
    return predictions, ForecastResponse(
        predictions=[PredictionOut.model_validate(p) for p in predictions],
        summary=ForecastSummaryOut.model_validate(summary),
    )


@router.post("/forecast", response_model=ForecastResponse, summary="Hourly supply/demand forecast")
@handle_exceptions
async def supply_demand_forecast(req: ForecastRequest) -> ForecastResponse:
    _, response = build_forecast(req)
    return response

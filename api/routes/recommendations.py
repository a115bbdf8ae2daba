"""
Recommendation routes ranking operator actions for forecasted supply/demand imbalance.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime
from typing import Optional, Sequence

from fastapi import APIRouter

from api.requests import ForecastRequest, RecommendRequest
from api.responses import RecommendationOut, RecommendationSummaryOut, RecommendResponse
from api.routes.exception import handle_exceptions
from api.routes.forecast import build_forecast
from engine.forecast import Prediction
from engine.recommend import generate, summarize

router = APIRouter(tags=["Recommendations"])


def _respond(predictions: Sequence[Prediction], now: Optional[datetime] = None) -> RecommendResponse:
    recommendations = generate(predictions, now=now)
    return RecommendResponse(
        recommendations=[RecommendationOut.model_validate(r) for r in recommendations],
        summary=RecommendationSummaryOut.model_validate(summarize(recommendations)),
    )


@router.post("/recommendations", response_model=RecommendResponse, summary="Rank actions for predictions")
@handle_exceptions
async def recommend(req: RecommendRequest) -> RecommendResponse:
    return _respond([p.to_prediction() for p in req.predictions], now=req.now)


@router.post(
    "/recommendations/from-history",
    response_model=RecommendResponse,
    summary="Forecast history and rank actions in one call",
)
@handle_exceptions
async def recommend_from_history(req: ForecastRequest) -> RecommendResponse:
    predictions, forecast_response = build_forecast(req)
    response = _respond(predictions)
    response.forecast = forecast_response
    return response

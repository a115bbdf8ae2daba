"""
Health check route reporting service status and the active model configuration.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter

from api.routes.exception import handle_exceptions
from config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "forecast": {
            "method": "holt_winters",
            "seasonal_period": settings.forecast_seasonal_period,
            "alpha": settings.forecast_alpha,
            "beta": settings.forecast_beta,
            "gamma": settings.forecast_gamma,
        },
    }

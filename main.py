"""
Entry point for the SlotPulse Forecasting Engine API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routes import router
from config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    log.info(
        "forecast engine starting | period=%d | alpha=%.2f | beta=%.2f | gamma=%.2f",
        settings.forecast_seasonal_period,
        settings.forecast_alpha,
        settings.forecast_beta,
        settings.forecast_gamma,
    )
    yield
    log.info("forecast engine stopped")


app = FastAPI(
    title="SlotPulse Forecasting Engine",
    description="Supply/demand imbalance forecasting, anomaly detection and campaign recommendations for scheduled-session marketplaces.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )

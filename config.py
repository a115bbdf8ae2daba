"""
Constants and configuration for SlotPulse.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Tuple

from pydantic_settings import BaseSettings


SLOTPULSE_LOG_LEVEL = os.getenv("SLOTPULSE_LOG_LEVEL", "INFO").upper()
SLOTPULSE_HOST = os.getenv("SLOTPULSE_HOST", "0.0.0.0")
SLOTPULSE_PORT = int(os.getenv("SLOTPULSE_PORT", "4330"))

RISK_LOW = "low"
RISK_MEDIUM = "medium"
RISK_HIGH = "high"
RISK_CRITICAL = "critical"


class Settings(BaseSettings):
    log_level: str = SLOTPULSE_LOG_LEVEL
    host: str = SLOTPULSE_HOST
    port: int = SLOTPULSE_PORT

    # holt-winters forecaster; smoothing constants are fixed, not tuned
    forecast_seasonal_period: int = 24
    forecast_alpha: float = 0.3
    forecast_beta: float = 0.1
    forecast_gamma: float = 0.3
    forecast_history_full_confidence: int = 168
    forecast_horizon_decay_hours: float = 72.0
    forecast_variance_growth_hours: float = 24.0
    forecast_confidence_base: float = 0.95
    forecast_confidence_min: float = 0.3
    forecast_confidence_max: float = 0.95
    forecast_variance_penalty_cap: float = 0.3
    forecast_variance_penalty_divisor: float = 100.0
    forecast_interval_coverage: float = 0.95
    forecast_max_horizon: int = 24 * 14

    # baseline fallback; confidence values are contract values
    baseline_window: int = 24
    baseline_confidence: float = 0.6
    baseline_empty_confidence: float = 0.3
    baseline_default_volume: float = 15.0
    baseline_default_available: float = 20.0
    baseline_interval_fraction: float = 0.2

    # supply/demand ratio -> imbalance risk, evaluated in order with strict ">"
    risk_ratio_thresholds: List[Tuple[float, str]] = [
        (1.5, RISK_CRITICAL),
        (1.2, RISK_HIGH),
        (0.9, RISK_MEDIUM),
    ]

    # anomaly detector defaults
    anomaly_zscore_threshold: float = 3.0
    anomaly_mad_threshold: float = 3.5
    anomaly_mad_scale: float = 0.6745
    anomaly_iqr_multiplier: float = 1.5
    anomaly_iqr_min_samples: int = 4
    anomaly_min_samples: int = 2
    anomaly_moving_average_window: int = 7
    anomaly_moving_average_threshold: float = 2.0
    anomaly_volatility_window: int = 7
    anomaly_volatility_threshold: float = 2.0
    anomaly_ensemble_min_agreement: int = 2
    anomaly_outlier_threshold: float = 2.5

    # severity score cutoffs used to label anomaly scores
    severity_score_critical: float = 0.75
    severity_score_high: float = 0.50
    severity_score_medium: float = 0.25

    # recommendation rules
    recommend_optimal_ratio: float = 0.8
    recommend_surge_increase: float = 0.3
    recommend_gap_size: int = 10
    recommend_imbalance_ratio: float = 0.9
    recommend_recruit_lead_hours: float = 2.0
    recommend_recruit_tail_hours: float = 1.0
    recommend_surge_lead_hours: float = 1.0
    recommend_priorities: Dict[str, Dict[str, int]] = {
        "tutor_recruitment": {RISK_CRITICAL: 10, RISK_HIGH: 8},
        "budget_increase": {RISK_CRITICAL: 9, RISK_HIGH: 7},
        "schedule_optimization": {RISK_CRITICAL: 9, RISK_HIGH: 7, "default": 6},
        "priority_shift": {RISK_CRITICAL: 8, RISK_HIGH: 6, "default": 5},
    }

    model_config = {
        "env_prefix": "SLOTPULSE_",
        "extra": "ignore",
    }


settings = Settings()

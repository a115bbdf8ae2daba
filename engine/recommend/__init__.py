"""
Recommendation logic converting forecasted supply/demand imbalance into typed, prioritized operator actions with rationale, target timeframes and aggregate summaries.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.recommend.rules import (
    Recommendation,
    RecommendationMetrics,
    TargetTimeframe,
    find_critical_periods,
    find_demand_surges,
    find_supply_gaps,
    generate,
)
from engine.recommend.summary import RecommendationSummary, summarize

__all__ = [
    "Recommendation",
    "RecommendationMetrics",
    "TargetTimeframe",
    "find_critical_periods",
    "find_demand_surges",
    "find_supply_gaps",
    "generate",
    "RecommendationSummary",
    "summarize",
]

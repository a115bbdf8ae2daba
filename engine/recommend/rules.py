"""
Recommendation rules turning supply/demand predictions into prioritized operator actions: critical-period recruitment and budget actions, demand-surge scheduling and supply-gap campaign reprioritization, run as three ordered passes whose generation order breaks priority ties.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from config import settings
from engine.enums import RecommendationType, Severity
from engine.forecast.supply_demand import Prediction
from engine.recommend.catalog import ACTIONS, ID_PREFIXES, TITLES

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetTimeframe:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class RecommendationMetrics:
    current_ratio: float
    target_ratio: float
    estimated_impact: str


@dataclass(frozen=True)
class Recommendation:
    id: str
    type: RecommendationType
    severity: Severity
    title: str
    description: str
    rationale: str
    target_timeframe: TargetTimeframe
    metrics: RecommendationMetrics
    actions: Tuple[str, ...]
    priority: int


def _when(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%d %H:%M %Z").strip()


def _priority(rtype: RecommendationType, risk: Severity) -> int:
    table = settings.recommend_priorities[rtype.value]
    value = table.get(risk.value, table.get("default", table.get(Severity.high.value, 1)))
    return max(1, min(10, int(value)))


def _build(
    rtype: RecommendationType,
    index: int,
    prediction: Prediction,
    description: str,
    rationale: str,
    timeframe: TargetTimeframe,
    estimated_impact: str,
) -> Recommendation:
    return Recommendation(
        id=f"{ID_PREFIXES[rtype]}-{index}",
        type=rtype,
        severity=prediction.imbalance_risk,
        title=TITLES[rtype],
        description=description,
        rationale=rationale,
        target_timeframe=timeframe,
        metrics=RecommendationMetrics(
            current_ratio=prediction.predicted_ratio,
            target_ratio=settings.recommend_optimal_ratio,
            estimated_impact=estimated_impact,
        ),
        actions=ACTIONS[rtype],
        priority=_priority(rtype, prediction.imbalance_risk),
    )


def find_critical_periods(predictions: Sequence[Prediction]) -> List[Prediction]:
    return [p for p in predictions if p.imbalance_risk in (Severity.high, Severity.critical)]


def find_demand_surges(predictions: Sequence[Prediction]) -> List[Prediction]:
    surges: List[Prediction] = []
    for previous, current in zip(predictions, predictions[1:]):
        if previous.predicted_volume > 0:
            increase = (current.predicted_volume - previous.predicted_volume) / previous.predicted_volume
        else:
            increase = math.inf if current.predicted_volume > 0 else 0.0
        if increase > settings.recommend_surge_increase and current.predicted_ratio > settings.recommend_imbalance_ratio:
            surges.append(current)
    return surges


def find_supply_gaps(predictions: Sequence[Prediction]) -> List[Prediction]:
    return [
        p for p in predictions
        if p.predicted_volume - p.predicted_available > settings.recommend_gap_size
        and p.predicted_ratio > settings.recommend_imbalance_ratio
    ]


def _critical_period(period: Prediction, index: int, now: datetime) -> List[Recommendation]:
    ratio = period.predicted_ratio
    shortage = max(0, math.ceil(period.predicted_volume - period.predicted_available))
    reduction = round((1 - settings.recommend_optimal_ratio / ratio) * 100) if ratio > 0 else 0

    recruit = _build(
        RecommendationType.tutor_recruitment,
        index,
        period,
        description=f"Critical shortage expected at {_when(period.timestamp)}. Need {shortage} more tutors.",
        rationale=(
            f"Supply-demand ratio of {ratio:.2f} indicates severe shortage. "
            f"Predicted {period.predicted_volume} sessions with only "
            f"{period.predicted_available} available tutors."
        ),
        timeframe=TargetTimeframe(
            start=period.timestamp - timedelta(hours=settings.recommend_recruit_lead_hours),
            end=period.timestamp + timedelta(hours=settings.recommend_recruit_tail_hours),
        ),
        estimated_impact=f"Reduce wait times by {reduction}%",
    )
    budget = _build(
        RecommendationType.budget_increase,
        index,
        period,
        description="Boost tutor recruitment campaigns to address upcoming shortage",
        rationale=(
            "High demand period requires additional tutor capacity. Current campaigns "
            f"insufficient for predicted {ratio:.2f}x demand-supply ratio."
        ),
        timeframe=TargetTimeframe(start=now, end=period.timestamp),
        estimated_impact="Increase tutor sign-ups by 40-60%",
    )
    return [recruit, budget]


def _demand_surge(surge: Prediction, index: int) -> Recommendation:
    return _build(
        RecommendationType.schedule_optimization,
        index,
        surge,
        description=(
            f"Sudden {surge.predicted_volume} session surge expected at {_when(surge.timestamp)}"
        ),
        rationale=(
            "Unusual spike in demand requires proactive tutor scheduling to maintain service quality."
        ),
        timeframe=TargetTimeframe(
            start=surge.timestamp - timedelta(hours=settings.recommend_surge_lead_hours),
            end=surge.timestamp,
        ),
        estimated_impact="Maintain <2min average wait time",
    )


def _supply_gap(gap: Prediction, index: int, now: datetime) -> Recommendation:
    gap_size = gap.predicted_volume - gap.predicted_available
    return _build(
        RecommendationType.priority_shift,
        index,
        gap,
        description=f"{gap_size} tutor shortage forecasted for {_when(gap.timestamp)}",
        rationale=(
            f"Supply gap of {gap_size} tutors requires immediate attention to prevent "
            "service degradation."
        ),
        timeframe=TargetTimeframe(start=now, end=gap.timestamp),
        estimated_impact=f"Close {gap_size} tutor gap",
    )


def generate(
    predictions: Sequence[Prediction],
    now: Optional[datetime] = None,
) -> List[Recommendation]:
    """Build recommendations for a forecast, most urgent first.

    ``now`` anchors the timeframes that start immediately; it defaults to the
    forecast origin (one hour before the earliest prediction) so the output
    depends on the predictions alone.
    """
    predictions = list(predictions)
    if not predictions:
        return []
    if now is None:
        now = min(p.timestamp for p in predictions) - timedelta(hours=1)

    critical = find_critical_periods(predictions)
    surges = find_demand_surges(predictions)
    gaps = find_supply_gaps(predictions)

    recommendations: List[Recommendation] = []
    for index, period in enumerate(critical):
        recommendations.extend(_critical_period(period, index, now))
    offset = len(critical)
    for index, surge in enumerate(surges):
        recommendations.append(_demand_surge(surge, offset + index))
    offset += len(surges)
    for index, gap in enumerate(gaps):
        recommendations.append(_supply_gap(gap, offset + index, now))

    log.info(
        "recommendations generated | predictions=%d | critical=%d | surges=%d | gaps=%d | total=%d",
        len(predictions), len(critical), len(surges), len(gaps), len(recommendations),
    )
    # sorted() is stable, so equal priorities keep generation order
    return sorted(recommendations, key=lambda r: r.priority, reverse=True)

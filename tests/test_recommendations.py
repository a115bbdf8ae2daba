"""
Test cases for the recommendation engine, covering critical-period, demand-surge and supply-gap passes, identifier and priority assignment, stable tie-breaking and the aggregate summary.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import timedelta

import pytest

from conftest import make_prediction
from engine.enums import RecommendationType, Severity
from engine.recommend import (
    find_critical_periods,
    find_demand_surges,
    find_supply_gaps,
    generate,
    summarize,
)
from engine.recommend.catalog import ACTIONS, TITLES


def _hours(t0, *counts):
    return [make_prediction(t0 + timedelta(hours=i), vol, avail) for i, (vol, avail) in enumerate(counts)]


def test_empty_predictions_give_no_recommendations():
    assert generate([]) == []


def test_balanced_forecast_needs_no_action(t0):
    assert generate(_hours(t0, (10, 20), (11, 20), (12, 20))) == []


def test_critical_hour_outranks_high_hour(t0):
    preds = _hours(t0, (13, 10), (16, 10))
    assert [p.imbalance_risk for p in preds] == [Severity.high, Severity.critical]

    recs = generate(preds)
    assert [r.priority for r in recs] == [10, 9, 8, 7]
    assert [r.type for r in recs] == [
        RecommendationType.tutor_recruitment,
        RecommendationType.budget_increase,
        RecommendationType.tutor_recruitment,
        RecommendationType.budget_increase,
    ]
    assert [r.id for r in recs] == ["tutor-recruit-1", "budget-increase-1", "tutor-recruit-0", "budget-increase-0"]
    assert recs[0].severity == Severity.critical
    assert recs[2].severity == Severity.high


def test_critical_period_content(t0):
    preds = _hours(t0, (32, 16))
    recruit, budget = generate(preds)[:2]
    event = preds[0].timestamp

    assert recruit.title == TITLES[RecommendationType.tutor_recruitment]
    assert recruit.actions == ACTIONS[RecommendationType.tutor_recruitment]
    assert "Need 16 more tutors" in recruit.description
    assert "2.00" in recruit.rationale
    assert "32 sessions" in recruit.rationale
    assert recruit.target_timeframe.start == event - timedelta(hours=2)
    assert recruit.target_timeframe.end == event + timedelta(hours=1)
    assert recruit.metrics.current_ratio == 2.0
    assert recruit.metrics.target_ratio == 0.8
    assert recruit.metrics.estimated_impact == "Reduce wait times by 60%"

    assert budget.actions[0] == "Increase tutor acquisition campaign budget by 50%"
    assert budget.target_timeframe.start == event - timedelta(hours=1)
    assert budget.target_timeframe.end == event
    assert budget.metrics.estimated_impact == "Increase tutor sign-ups by 40-60%"


def test_explicit_now_anchors_immediate_timeframes(t0):
    now = t0 - timedelta(hours=6)
    recs = generate(_hours(t0, (132, 120)), now=now)
    assert len(recs) == 1
    assert recs[0].target_timeframe.start == now


def test_demand_surge(t0):
    preds = _hours(t0, (10, 20), (14, 15))
    assert find_demand_surges(preds) == [preds[1]]

    (rec,) = generate(preds)
    assert rec.type == RecommendationType.schedule_optimization
    assert rec.id == "demand-surge-0"
    assert rec.severity == Severity.medium
    assert rec.priority == 6
    assert rec.target_timeframe.start == preds[1].timestamp - timedelta(hours=1)
    assert rec.target_timeframe.end == preds[1].timestamp
    assert rec.metrics.estimated_impact == "Maintain <2min average wait time"
    assert rec.actions[0] == "Alert tutors 1 hour in advance of surge"


def test_surge_requires_imbalance(t0):
    # volume doubles but supply keeps up
    assert find_demand_surges(_hours(t0, (5, 20), (10, 20))) == []


def test_surge_from_zero_volume(t0):
    assert len(find_demand_surges(_hours(t0, (0, 5), (5, 5)))) == 1
    assert find_demand_surges(_hours(t0, (0, 5), (0, 5))) == []


def test_supply_gap(t0):
    preds = _hours(t0, (132, 120))
    assert find_supply_gaps(preds) == preds
    assert find_critical_periods(preds) == []

    (rec,) = generate(preds)
    assert rec.type == RecommendationType.priority_shift
    assert rec.id == "supply-gap-0"
    assert rec.priority == 5
    assert rec.metrics.estimated_impact == "Close 12 tutor gap"
    assert rec.actions == ACTIONS[RecommendationType.priority_shift]
    assert rec.title == "Shift Campaign Priority to Tutor Supply"


def test_gap_threshold_is_strict(t0):
    assert find_supply_gaps(_hours(t0, (120, 110))) == []


def test_ids_are_offset_across_passes_and_ties_keep_generation_order(t0):
    preds = _hours(t0, (10, 20), (32, 16), (26, 20))
    recs = generate(preds)
    assert [(r.id, r.priority) for r in recs] == [
        ("tutor-recruit-0", 10),
        ("budget-increase-0", 9),
        ("demand-surge-2", 9),
        ("tutor-recruit-1", 8),
        ("supply-gap-3", 8),
        ("budget-increase-1", 7),
    ]


def test_priorities_within_bounds_and_sorted(t0):
    preds = _hours(t0, (10, 20), (32, 16), (26, 20), (60, 30), (12, 20), (40, 25))
    recs = generate(preds)
    priorities = [r.priority for r in recs]
    assert priorities == sorted(priorities, reverse=True)
    assert all(1 <= p <= 10 for p in priorities)


def test_generate_is_idempotent(t0):
    preds = _hours(t0, (10, 20), (32, 16), (26, 20))
    assert generate(preds) == generate(preds)


def test_summary_counts(t0):
    recs = generate(_hours(t0, (10, 20), (32, 16), (26, 20)))
    summary = summarize(recs)
    assert summary.total == 6
    assert summary.by_severity == {"critical": 4, "high": 2, "medium": 0, "low": 0}
    assert summary.by_type["tutor_recruitment"] == 2
    assert summary.by_type["budget_decrease"] == 0
    assert sum(summary.by_type.values()) == 6
    assert summary.highest_priority == recs[0]


def test_summary_of_nothing():
    summary = summarize([])
    assert summary.total == 0
    assert summary.highest_priority is None
    assert set(summary.by_severity.values()) == {0}


@pytest.mark.parametrize("volume, available, expected", [(16, 10, 10), (13, 10, 8)])
def test_recruitment_priority_by_risk(t0, volume, available, expected):
    recs = generate(_hours(t0, (volume, available)))
    recruit = [r for r in recs if r.type == RecommendationType.tutor_recruitment]
    assert recruit[0].priority == expected

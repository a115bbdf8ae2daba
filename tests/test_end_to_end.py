"""
End-to-end scenario tests running history through forecasting and recommendation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from conftest import build_history
from engine.enums import RecommendationType, Severity
from engine.forecast import forecast
from engine.recommend import generate, summarize


def test_weekday_afternoon_spike_is_flagged_and_recommended(history):
    preds = forecast(history, 24)
    afternoon = [p for p in preds if 14 <= p.hour <= 18]
    assert len(afternoon) == 5
    assert all(p.day_of_week == 4 for p in afternoon)
    assert any(p.imbalance_risk in (Severity.high, Severity.critical) for p in afternoon)

    recs = generate(preds)
    recruit = [r for r in recs if r.type == RecommendationType.tutor_recruitment]
    assert recruit
    assert max(r.priority for r in recruit) >= 8
    assert all(r.target_timeframe.start < r.target_timeframe.end for r in recs)


def test_quiet_history_produces_no_critical_actions():
    preds = forecast(build_history(spike=False), 24)
    assert all(p.imbalance_risk == Severity.low for p in preds)
    recs = generate(preds)
    assert recs == []
    assert summarize(recs).highest_priority is None


def test_pipeline_is_repeatable(history):
    first = generate(forecast(history, 24))
    second = generate(forecast(history, 24))
    assert first == second

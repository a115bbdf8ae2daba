import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from engine.forecast.supply_demand import Prediction, classify_risk
from engine.series import HistoricalRecord, day_of_week


# Wednesday 2026-10-14 23:00 UTC; the next forecast day is a Thursday
HISTORY_END = datetime(2026, 10, 14, 23, 0, tzinfo=timezone.utc)


def build_history(days=30, end=HISTORY_END, spike=True):
    """Hourly records with a weekday 14:00-18:00 demand spike.

    Spike hours carry 40 sessions against 15 providers; every other hour has
    12 sessions against 18 providers.
    """
    start = end - timedelta(hours=days * 24 - 1)
    records = []
    for i in range(days * 24):
        ts = start + timedelta(hours=i)
        peak = spike and ts.weekday() < 5 and 14 <= ts.hour <= 18
        records.append(HistoricalRecord.from_counts(
            timestamp=ts,
            session_volume=40 if peak else 12,
            available_providers=15 if peak else 18,
            active_providers=15 if peak else 12,
        ))
    return records


def make_prediction(ts, volume, available, confidence=0.8):
    available = max(1, available)
    ratio = volume / available
    return Prediction(
        timestamp=ts,
        hour=ts.hour,
        day_of_week=day_of_week(ts),
        predicted_volume=volume,
        predicted_available=available,
        predicted_ratio=round(ratio, 2),
        confidence=confidence,
        imbalance_risk=classify_risk(ratio),
        lower_bound=max(0, volume - 3),
        upper_bound=volume + 3,
    )


@pytest.fixture
def history():
    return build_history()


@pytest.fixture
def t0():
    return datetime(2026, 10, 15, 0, 0, tzinfo=timezone.utc)

"""
Series types and hourly aggregation for marketplace history, turning raw session start times and provider counts into per-hour supply/demand records and projecting those records into plain timestamp/value series for forecasting and anomaly detection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimePoint:
    timestamp: datetime
    value: float


def day_of_week(ts: datetime) -> int:
    # 0 = Sunday, matching the upstream scheduling system
    return (ts.weekday() + 1) % 7


def hour_floor(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.replace(minute=0, second=0, microsecond=0)


@dataclass(frozen=True)
class HistoricalRecord:
    timestamp: datetime
    hour: int
    day_of_week: int
    session_volume: int
    available_providers: int
    active_providers: int
    supply_demand_ratio: float

    @classmethod
    def from_counts(
        cls,
        timestamp: datetime,
        session_volume: int,
        available_providers: int,
        active_providers: int = 0,
    ) -> HistoricalRecord:
        volume = max(0, int(session_volume))
        available = max(0, int(available_providers))
        ratio = volume / available if available > 0 else 0.0
        return cls(
            timestamp=timestamp,
            hour=timestamp.hour,
            day_of_week=day_of_week(timestamp),
            session_volume=volume,
            available_providers=available,
            active_providers=max(0, int(active_providers)),
            supply_demand_ratio=ratio,
        )


def aggregate_hourly(
    session_starts: Iterable[datetime],
    available_providers: int,
    active_by_hour: Optional[Mapping[datetime, int]] = None,
) -> List[HistoricalRecord]:
    """Bucket session start times into one record per observed calendar hour.

    Every provider on the roster is treated as available in every hour;
    ``active_by_hour`` supplies the distinct providers that actually taught,
    keyed by the hour start.
    """
    counts: Dict[datetime, int] = {}
    for ts in session_starts:
        bucket = hour_floor(ts)
        counts[bucket] = counts.get(bucket, 0) + 1

    active = {hour_floor(k): v for k, v in (active_by_hour or {}).items()}
    records = [
        HistoricalRecord.from_counts(
            timestamp=bucket,
            session_volume=count,
            available_providers=available_providers,
            active_providers=active.get(bucket, 0),
        )
        for bucket, count in counts.items()
    ]
    records.sort(key=lambda r: r.timestamp)
    log.debug("aggregated %d hourly records from session history", len(records))
    return records


def volume_series(records: Sequence[HistoricalRecord]) -> List[TimePoint]:
    return [TimePoint(r.timestamp, float(r.session_volume)) for r in records]


def availability_series(records: Sequence[HistoricalRecord]) -> List[TimePoint]:
    return [TimePoint(r.timestamp, float(r.available_providers)) for r in records]

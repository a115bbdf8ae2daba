"""
Aggregate insights over a recommendation list: totals, counts by severity and type, and the most urgent recommendation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from engine.enums import RecommendationType, Severity
from engine.recommend.rules import Recommendation

_SEVERITY_ORDER = (Severity.critical, Severity.high, Severity.medium, Severity.low)


@dataclass(frozen=True)
class RecommendationSummary:
    total: int
    by_severity: Dict[str, int] = field(default_factory=dict)
    by_type: Dict[str, int] = field(default_factory=dict)
    highest_priority: Optional[Recommendation] = None


def summarize(recommendations: Sequence[Recommendation]) -> RecommendationSummary:
    by_severity = {s.value: 0 for s in _SEVERITY_ORDER}
    by_type = {t.value: 0 for t in RecommendationType}
    for rec in recommendations:
        by_severity[rec.severity.value] += 1
        by_type[rec.type.value] += 1

    highest = max(recommendations, key=lambda r: r.priority) if recommendations else None
    return RecommendationSummary(
        total=len(recommendations),
        by_severity=by_severity,
        by_type=by_type,
        highest_priority=highest,
    )

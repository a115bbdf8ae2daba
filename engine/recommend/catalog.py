"""
Static titles and operator action catalogs attached to each recommendation type.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, Tuple

from engine.enums import RecommendationType

TITLES: Dict[RecommendationType, str] = {
    RecommendationType.tutor_recruitment: "Urgent Tutor Recruitment Needed",
    RecommendationType.budget_increase: "Increase Marketing Budget for Tutor Acquisition",
    RecommendationType.schedule_optimization: "Demand Surge Detected - Optimize Tutor Scheduling",
    RecommendationType.priority_shift: "Shift Campaign Priority to Tutor Supply",
}

ACTIONS: Dict[RecommendationType, Tuple[str, ...]] = {
    RecommendationType.tutor_recruitment: (
        "Send push notifications to inactive tutors",
        "Offer bonus incentives for tutors working this time slot",
        "Enable emergency tutor on-call system",
        "Consider cross-timezone tutor allocation",
    ),
    RecommendationType.budget_increase: (
        "Increase tutor acquisition campaign budget by 50%",
        "Launch targeted ads in underserved time zones",
        "Activate referral bonus program",
        "Fast-track tutor onboarding process",
    ),
    RecommendationType.schedule_optimization: (
        "Alert tutors 1 hour in advance of surge",
        "Enable surge pricing for tutors",
        "Queue management optimization",
        "Prepare overflow capacity",
    ),
    RecommendationType.priority_shift: (
        "Pause student acquisition campaigns temporarily",
        "Reallocate 30% of budget to tutor recruitment",
        "Launch time-slot specific tutor campaigns",
        "Enable tutor shift swapping features",
    ),
}

ID_PREFIXES: Dict[RecommendationType, str] = {
    RecommendationType.tutor_recruitment: "tutor-recruit",
    RecommendationType.budget_increase: "budget-increase",
    RecommendationType.schedule_optimization: "demand-surge",
    RecommendationType.priority_shift: "supply-gap",
}

"""
Dimension Scorers

Individual scoring functions for each fit dimension.
Each scorer produces an integer score between 0 and 100.
All logic is deterministic - no AI/ML components.
"""

from .constants import (
    COST_FIT_TABLE,
    ENGLISH,
    LANGUAGE_FIT_ENGLISH_ALTERNATIVE,
    LANGUAGE_FIT_OTHER,
    LANGUAGE_FIT_PRIMARY_ENGLISH,
    SUPPORT_SCALE,
    TEACHING_FIT_DEFAULT,
    TEACHING_FIT_RULES,
    VISA_FIT_LENIENT,
    VISA_FIT_STRICT,
    WORKLOAD_OVER_PENALTY,
    WORKLOAD_TOLERANCE,
    WORKLOAD_UNDER_PENALTY,
)
from .contracts import FearType, StudentProfile, University


def score_teaching_fit(profile: StudentProfile, university: University) -> int:
    """
    Discrete lookup on (confidence, teaching style).

    Rules are checked in priority order; the first match wins.
    """
    for confidence, style, score in TEACHING_FIT_RULES:
        if university.teaching_style != style:
            continue
        if confidence is None or profile.confidence_level == confidence:
            return score
    return TEACHING_FIT_DEFAULT


def score_workload_fit(profile: StudentProfile, university: University) -> int:
    """
    Compare workload intensity to what the student's confidence tolerates.

    Going over the tolerance is penalised three times as steeply as staying under.
    """
    max_workload = WORKLOAD_TOLERANCE[profile.confidence_level]
    workload = university.workload_intensity

    if workload <= max_workload:
        return 100 - WORKLOAD_UNDER_PENALTY * (max_workload - workload)
    return max(0, 100 - WORKLOAD_OVER_PENALTY * (workload - max_workload))


def score_language_fit(profile: StudentProfile, university: University) -> int:
    language = university.language_requirements
    if language.primary == ENGLISH:
        return LANGUAGE_FIT_PRIMARY_ENGLISH
    if ENGLISH in language.alternatives:
        return LANGUAGE_FIT_ENGLISH_ALTERNATIVE
    return LANGUAGE_FIT_OTHER


def score_cost_fit(profile: StudentProfile, university: University) -> int:
    return COST_FIT_TABLE[profile.budget_level][university.tuition.tier]


def score_visa_fit(profile: StudentProfile, university: University) -> int:
    table = VISA_FIT_STRICT if profile.main_fear == FearType.VISA else VISA_FIT_LENIENT
    return table[university.visa_difficulty]


def score_support_fit(profile: StudentProfile, university: University) -> int:
    return university.international_student_support * SUPPORT_SCALE


# Scorer per breakdown dimension, in breakdown order
DIMENSION_SCORERS = {
    "teaching": score_teaching_fit,
    "workload": score_workload_fit,
    "language": score_language_fit,
    "cost": score_cost_fit,
    "visa": score_visa_fit,
    "support": score_support_fit,
}

"""
Eligibility Filter

Removes universities that violate the hard constraints implied by a profile.
Applied before scoring so impossible options never reach the ranking stage.
"""

import logging
from typing import Iterable, List, Optional

from .constants import LOW_CONFIDENCE_MAX_WORKLOAD
from .contracts import (
    BudgetLevel,
    ConfidenceLevel,
    FearType,
    StudentProfile,
    TuitionTier,
    University,
    VisaDifficulty,
)

logger = logging.getLogger(__name__)


def rejection_reason(profile: StudentProfile, university: University) -> Optional[str]:
    """
    Return why a university fails the profile's hard constraints, or None if it passes.

    Hard constraints:
    - Target country (exact match only)
    - Low budget excludes high tuition
    - Visa fear excludes hard visas
    - Low confidence excludes workload >= 9
    """
    if profile.target_country and university.country != profile.target_country:
        return f"country {university.country} != target {profile.target_country}"

    if profile.budget_level == BudgetLevel.LOW and university.tuition.tier == TuitionTier.HIGH:
        return "high tuition on low budget"

    if profile.main_fear == FearType.VISA and university.visa_difficulty == VisaDifficulty.HARD:
        return "hard visa with visa fear"

    if (
        profile.confidence_level == ConfidenceLevel.LOW
        and university.workload_intensity >= LOW_CONFIDENCE_MAX_WORKLOAD
    ):
        return f"workload {university.workload_intensity} too high for low confidence"

    return None


def is_eligible(profile: StudentProfile, university: University) -> bool:
    return rejection_reason(profile, university) is None


def filter_eligible(
    profile: StudentProfile,
    universities: Iterable[University]
) -> List[University]:
    """
    Keep universities that satisfy every hard constraint.

    Catalog order is preserved. An empty result is a valid outcome.

    Args:
        profile: Student profile
        universities: Catalog universities in catalog order

    Returns:
        Eligible universities
    """
    eligible: List[University] = []
    evaluated = 0

    for university in universities:
        evaluated += 1
        reason = rejection_reason(profile, university)
        if reason:
            logger.debug(f"Filtered out {university.id}: {reason}")
            continue
        eligible.append(university)

    logger.info(f"🔎 Eligibility filter: {len(eligible)}/{evaluated} universities pass")
    return eligible

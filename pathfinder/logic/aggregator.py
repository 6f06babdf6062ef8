"""
Score Aggregator

Combines individual dimension scores into an overall fit score.
Applies the fixed weights and half-up rounding.
"""

from typing import Dict, Iterable, List

from .constants import DIMENSION_WEIGHT_PERCENTS
from .contracts import FitBreakdown, FitScore, ScoredCandidate, StudentProfile, University
from .dimension_scorers import DIMENSION_SCORERS


def weighted_overall(breakdown: Dict[str, int]) -> int:
    """
    Weighted sum of the breakdown, rounded half-up to an integer.

    Computed in hundredths with whole-percent weights, so 22.5 always rounds to 23.
    """
    hundredths = sum(
        breakdown[dim] * percent
        for dim, percent in DIMENSION_WEIGHT_PERCENTS.items()
    )
    overall = (hundredths + 50) // 100
    return max(0, min(100, overall))


def calculate_fit_score(
    profile: StudentProfile,
    university: University
) -> FitScore:
    """
    Compute all dimension scores and aggregate into the overall fit score.

    Args:
        profile: Student's profile
        university: Candidate university

    Returns:
        FitScore with overall value and breakdown
    """
    breakdown = {
        dim: scorer(profile, university)
        for dim, scorer in DIMENSION_SCORERS.items()
    }

    return FitScore(
        overall=weighted_overall(breakdown),
        breakdown=FitBreakdown(**breakdown),
    )


def score_candidates(
    profile: StudentProfile,
    universities: Iterable[University]
) -> List[ScoredCandidate]:
    """Score every university, keeping catalog order."""
    return [
        ScoredCandidate(university=u, fit_score=calculate_fit_score(profile, u))
        for u in universities
    ]

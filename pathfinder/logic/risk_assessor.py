"""
Risk Assessor

Computes the four risk categories (financial, visa, academic, time) for a
selected university. Mitigation lists are fixed templates, not computed.
"""

import logging
from typing import Optional

from .constants import (
    ACADEMIC_CAPACITY,
    ACADEMIC_LIKELIHOOD_DEFAULT,
    ACADEMIC_LIKELIHOOD_OVERLOAD,
    ACADEMIC_MITIGATION,
    FINANCIAL_LIKELIHOOD_DEFAULT,
    FINANCIAL_LIKELIHOOD_MISMATCH,
    FINANCIAL_MISMATCH,
    FINANCIAL_MITIGATION,
    TIME_MITIGATION,
    TIME_RISK_LIKELIHOOD,
    TIME_RISK_SEVERITY,
    VISA_MITIGATION,
    VISA_RISK_TABLE,
)
from .contracts import (
    CostOfLivingTier,
    Country,
    RiskAssessment,
    RiskEntry,
    Severity,
    StudentProfile,
    University,
)

logger = logging.getLogger(__name__)


def _format_cost(amount: float) -> str:
    return f"{amount:,.0f}"


def has_budget_mismatch(profile: StudentProfile, university: University) -> bool:
    return (profile.budget_level, university.tuition.tier) in FINANCIAL_MISMATCH


def assess_financial_risk(
    profile: StudentProfile,
    university: University,
    country: Optional[Country]
) -> RiskEntry:
    """
    Financial risk from budget/tuition mismatch and cost of living.

    A missing country record counts as unknown cost of living, which never
    raises severity on its own.
    """
    mismatch = has_budget_mismatch(profile, university)

    if country is None:
        logger.debug(f"No country record for {university.country}; cost of living treated as unknown")
        high_cost_of_living = False
    else:
        high_cost_of_living = country.cost_of_living.tier == CostOfLivingTier.HIGH

    budget = profile.budget_level.value
    if mismatch:
        description = (
            f"Tuition ({university.tuition.currency} {_format_cost(university.tuition.annual_cost)}) "
            f"may exceed your {budget} budget"
        )
    elif high_cost_of_living:
        description = f"Tuition fits a {budget} budget, but living costs in {university.country} are high"
    else:
        description = f"Costs are manageable with {budget} budget"

    return RiskEntry(
        severity=Severity.HIGH if (mismatch or high_cost_of_living) else Severity.LOW,
        likelihood=FINANCIAL_LIKELIHOOD_MISMATCH if mismatch else FINANCIAL_LIKELIHOOD_DEFAULT,
        description=description,
        mitigation=list(FINANCIAL_MITIGATION),
    )


def assess_visa_risk(profile: StudentProfile, university: University) -> RiskEntry:
    severity, likelihood = VISA_RISK_TABLE[university.visa_difficulty]
    return RiskEntry(
        severity=severity,
        likelihood=likelihood,
        description=f"Visa difficulty is {university.visa_difficulty.value} for {university.country}",
        mitigation=list(VISA_MITIGATION),
    )


def assess_academic_risk(profile: StudentProfile, university: University) -> RiskEntry:
    capacity = ACADEMIC_CAPACITY[profile.confidence_level]
    overload = university.workload_intensity > capacity

    if overload:
        description = (
            f"Workload intensity ({university.workload_intensity}/10) may be challenging "
            f"for your {profile.confidence_level.value} confidence level"
        )
    else:
        description = "Workload is manageable for your confidence level"

    return RiskEntry(
        severity=Severity.HIGH if overload else Severity.LOW,
        likelihood=ACADEMIC_LIKELIHOOD_OVERLOAD if overload else ACADEMIC_LIKELIHOOD_DEFAULT,
        description=description,
        mitigation=list(ACADEMIC_MITIGATION),
    )


def assess_time_risk(profile: StudentProfile, university: University) -> RiskEntry:
    # Always present; not conditioned on inputs
    return RiskEntry(
        severity=TIME_RISK_SEVERITY,
        likelihood=TIME_RISK_LIKELIHOOD,
        description="Potential delays in graduation or visa processing",
        mitigation=list(TIME_MITIGATION),
    )


def assess_risks(
    profile: StudentProfile,
    university: University,
    country: Optional[Country] = None
) -> RiskAssessment:
    """
    Assess all four risk categories independently.

    Args:
        profile: Student profile
        university: Selected university
        country: Catalog record for the university's country, if any

    Returns:
        RiskAssessment
    """
    return RiskAssessment(
        financial=assess_financial_risk(profile, university, country),
        visa=assess_visa_risk(profile, university),
        academic=assess_academic_risk(profile, university),
        time=assess_time_risk(profile, university),
    )

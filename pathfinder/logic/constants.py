"""
Decision Engine Constants

Defines all lookup tables, weights, thresholds and templates used by the path engine.
All values are deterministic with no AI/ML components.
"""

from typing import Dict, List, Tuple

from .contracts import (
    BudgetLevel,
    ConfidenceLevel,
    Severity,
    TeachingStyle,
    TuitionTier,
    VisaDifficulty,
)

# =============================================================================
# DIMENSION WEIGHTS
# =============================================================================

# Weights for each fit dimension (must sum to 1.0)
DIMENSION_WEIGHTS: Dict[str, float] = {
    "teaching": 0.20,   # Teaching style vs confidence
    "workload": 0.15,   # Workload intensity vs tolerance
    "language": 0.15,   # Language of instruction
    "cost": 0.25,       # Budget vs tuition tier
    "visa": 0.15,       # Visa difficulty vs fear
    "support": 0.10,    # International student support
}

assert abs(sum(DIMENSION_WEIGHTS.values()) - 1.0) < 1e-9, "dimension weights must sum to 1.0"

# Whole-percent weights so the overall score is computed without float drift
DIMENSION_WEIGHT_PERCENTS: Dict[str, int] = {
    dim: round(weight * 100) for dim, weight in DIMENSION_WEIGHTS.items()
}

# =============================================================================
# FIT LOOKUP TABLES
# =============================================================================

# Teaching fit rules, checked in priority order: (confidence or None, style, score)
TEACHING_FIT_RULES: List[Tuple[object, TeachingStyle, int]] = [
    (ConfidenceLevel.HIGH, TeachingStyle.RESEARCH_FOCUSED, 90),
    (ConfidenceLevel.LOW, TeachingStyle.LECTURE_HEAVY, 85),
    (None, TeachingStyle.MIXED, 80),
]
TEACHING_FIT_DEFAULT = 70

# Maximum workload (1-10) a student tolerates before the fit score drops
WORKLOAD_TOLERANCE: Dict[ConfidenceLevel, int] = {
    ConfidenceLevel.LOW: 5,
    ConfidenceLevel.MEDIUM: 7,
    ConfidenceLevel.HIGH: 10,
}
WORKLOAD_UNDER_PENALTY = 5
WORKLOAD_OVER_PENALTY = 15

ENGLISH = "English"
LANGUAGE_FIT_PRIMARY_ENGLISH = 95
LANGUAGE_FIT_ENGLISH_ALTERNATIVE = 80
LANGUAGE_FIT_OTHER = 60

COST_FIT_TABLE: Dict[BudgetLevel, Dict[TuitionTier, int]] = {
    BudgetLevel.LOW: {
        TuitionTier.FREE: 100,
        TuitionTier.LOW: 90,
        TuitionTier.MEDIUM: 40,
        TuitionTier.HIGH: 10,
    },
    BudgetLevel.MEDIUM: {
        TuitionTier.FREE: 100,
        TuitionTier.LOW: 95,
        TuitionTier.MEDIUM: 85,
        TuitionTier.HIGH: 50,
    },
    BudgetLevel.HIGH: {
        TuitionTier.FREE: 100,
        TuitionTier.LOW: 95,
        TuitionTier.MEDIUM: 90,
        TuitionTier.HIGH: 85,
    },
}

# Used when the student's main fear is visa
VISA_FIT_STRICT: Dict[VisaDifficulty, int] = {
    VisaDifficulty.EASY: 100,
    VisaDifficulty.MEDIUM: 60,
    VisaDifficulty.HARD: 20,
}

VISA_FIT_LENIENT: Dict[VisaDifficulty, int] = {
    VisaDifficulty.EASY: 100,
    VisaDifficulty.MEDIUM: 85,
    VisaDifficulty.HARD: 70,
}

SUPPORT_SCALE = 10

# =============================================================================
# ELIGIBILITY THRESHOLDS
# =============================================================================

LOW_CONFIDENCE_MAX_WORKLOAD = 9  # workload >= this is excluded for low confidence

# =============================================================================
# TUITION BANDING
# =============================================================================

# Annual cost upper bounds (exclusive) for each tier; 0 is always free
TUITION_TIER_BANDS: List[Tuple[float, TuitionTier]] = [
    (10000, TuitionTier.LOW),
    (30000, TuitionTier.MEDIUM),
]

# =============================================================================
# RISK TABLES
# =============================================================================

FINANCIAL_MISMATCH: List[Tuple[BudgetLevel, TuitionTier]] = [
    (BudgetLevel.LOW, TuitionTier.MEDIUM),
    (BudgetLevel.MEDIUM, TuitionTier.HIGH),
]
FINANCIAL_LIKELIHOOD_MISMATCH = 70
FINANCIAL_LIKELIHOOD_DEFAULT = 30

VISA_RISK_TABLE: Dict[VisaDifficulty, Tuple[Severity, int]] = {
    VisaDifficulty.EASY: (Severity.LOW, 10),
    VisaDifficulty.MEDIUM: (Severity.MEDIUM, 30),
    VisaDifficulty.HARD: (Severity.HIGH, 60),
}

# Workload a student can carry before academic risk becomes high
ACADEMIC_CAPACITY: Dict[ConfidenceLevel, int] = {
    ConfidenceLevel.LOW: 3,
    ConfidenceLevel.MEDIUM: 7,
    ConfidenceLevel.HIGH: 10,
}
ACADEMIC_LIKELIHOOD_OVERLOAD = 60
ACADEMIC_LIKELIHOOD_DEFAULT = 20

TIME_RISK_SEVERITY = Severity.MEDIUM
TIME_RISK_LIKELIHOOD = 40

FINANCIAL_MITIGATION = [
    "Apply for scholarships",
    "Look for part-time work opportunities",
    "Consider student loans",
    "Budget carefully for living expenses",
]

VISA_MITIGATION = [
    "Start visa process early",
    "Prepare all documents thoroughly",
    "Seek visa consultation",
    "Have backup country options",
]

ACADEMIC_MITIGATION = [
    "Start with lighter course load",
    "Use university tutoring services",
    "Form study groups",
    "Manage time effectively",
]

TIME_MITIGATION = [
    "Plan for buffer time",
    "Stay on top of deadlines",
    "Have contingency plans",
]

# =============================================================================
# PATH ASSEMBLY
# =============================================================================

EXCLUSION_WORKLOAD_THRESHOLD = 9
EXCLUSION_ACCEPTANCE_RATE = 10
TOP_RANKED_CUTOFF = 50

ALL_COUNTRIES_MARKER = "All"

# Timeline offsets in days from the run date
APPLICATION_DEADLINE_OFFSET_DAYS = 180
VISA_APPLICATION_OFFSET_DAYS = 270
PROGRAM_START_OFFSET_DAYS = 365

# =============================================================================
# SELECTION CONFIGURATION
# =============================================================================

PATH_COUNT = 3
UNCONSTRAINED_SLOTS = 2  # leading picks that ignore country diversity
MAX_SCHOLARSHIPS_PER_PATH = 3

ENGINE_VERSION = "1.0.0"

# Lookup tables must cover every enum combination
assert set(COST_FIT_TABLE) == set(BudgetLevel)
assert all(set(row) == set(TuitionTier) for row in COST_FIT_TABLE.values())
assert set(VISA_FIT_STRICT) == set(VISA_FIT_LENIENT) == set(VisaDifficulty) == set(VISA_RISK_TABLE)
assert set(WORKLOAD_TOLERANCE) == set(ACADEMIC_CAPACITY) == set(ConfidenceLevel)

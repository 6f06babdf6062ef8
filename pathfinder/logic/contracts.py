"""
Data Contracts for the Path Decision Engine

Defines Pydantic models for StudentProfile (input), the catalog records
(University, Scholarship, Country) and PathsOutput (output).
These contracts are the API boundary for the decision engine.
"""

from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================

class SituationType(str, Enum):
    """Where the student is in their decision."""
    DONT_KNOW = "dont_know"
    STUDY_ABROAD = "study_abroad"
    UNSURE_CHOICE = "unsure_choice"
    SOMETHING_WRONG = "something_wrong"
    EXPLORE_SAFELY = "explore_safely"


class EducationStage(str, Enum):
    HIGH_SCHOOL = "high_school"
    BACHELORS = "bachelors"
    MASTERS = "masters"
    PHD = "phd"
    BOOTCAMP = "bootcamp"
    WORKING = "working"


class BudgetLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FearType(str, Enum):
    """The student's primary worry about studying abroad."""
    MONEY = "money"
    VISA = "visa"
    FAILURE = "failure"
    TIME = "time"


class TeachingStyle(str, Enum):
    LECTURE_HEAVY = "lecture_heavy"
    PROJECT_BASED = "project_based"
    RESEARCH_FOCUSED = "research_focused"
    MIXED = "mixed"


class TuitionTier(str, Enum):
    FREE = "free"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class VisaDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class CostOfLivingTier(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProficiencyLevel(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Coverage(str, Enum):
    FULL = "full"
    PARTIAL = "partial"


class PathType(str, Enum):
    UNIVERSITY = "university"
    BOOTCAMP = "bootcamp"
    INTERNSHIP = "internship"
    ALTERNATIVE = "alternative"


class TimelineEventType(str, Enum):
    DECISION = "decision"
    DEADLINE = "deadline"
    MILESTONE = "milestone"
    RISK = "risk"
    FALLBACK = "fallback"


class ScenarioType(str, Enum):
    BEST = "best"
    LIKELY = "likely"
    FAILURE = "failure"


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class StudentProfile(BaseModel):
    """
    Input contract for the decision engine.
    Every enum field is required; a profile cannot be built without them.
    """
    # Identity (optional, for tracking)
    student_id: Optional[str] = None

    situation: SituationType
    current_country: str = Field(min_length=1)
    target_country: Optional[str] = None
    education_stage: EducationStage

    # Drivers of the engine
    budget_level: BudgetLevel
    main_fear: FearType
    confidence_level: ConfidenceLevel

    class Config:
        frozen = True


# =============================================================================
# CATALOG RECORDS
# =============================================================================

class LanguageRequirements(BaseModel):
    primary: str
    alternatives: List[str] = Field(default_factory=list)
    proficiency_required: ProficiencyLevel = ProficiencyLevel.INTERMEDIATE

    class Config:
        frozen = True


class Tuition(BaseModel):
    currency: str
    annual_cost: float = Field(ge=0)
    tier: TuitionTier

    class Config:
        frozen = True


class DataSource(BaseModel):
    """Where each catalog field was sourced from."""
    tuition: str = ""
    ranking: str = ""
    workload: str = ""
    visa: str = ""
    acceptance: str = ""

    class Config:
        frozen = True


class University(BaseModel):
    id: str
    name: str
    country: str
    city: str
    ranking: int = Field(gt=0)
    teaching_style: TeachingStyle
    workload_intensity: int = Field(ge=1, le=10)
    language_requirements: LanguageRequirements
    tuition: Tuition
    visa_difficulty: VisaDifficulty
    international_student_support: int = Field(ge=1, le=10)
    acceptance_rate: float = Field(ge=0, le=100)
    website: str = ""
    image_url: Optional[str] = None
    data_source: Optional[DataSource] = None

    class Config:
        frozen = True


class ScholarshipEligibility(BaseModel):
    countries: List[str] = Field(default_factory=list)  # empty means any country
    education_stages: List[EducationStage] = Field(default_factory=list)
    min_gpa: Optional[float] = None
    age_limit: Optional[int] = None
    work_experience_required: Optional[bool] = None

    class Config:
        frozen = True


class ScholarshipAmount(BaseModel):
    currency: str
    value: float = Field(ge=0)
    coverage: Coverage

    class Config:
        frozen = True


class Scholarship(BaseModel):
    id: str
    name: str
    provider: str
    country: str
    eligibility: ScholarshipEligibility
    amount: ScholarshipAmount
    deadline: date
    competitiveness: Severity
    application_complexity: int = Field(default=5, ge=1, le=10)
    website: str = ""

    class Config:
        frozen = True


class CostOfLiving(BaseModel):
    tier: CostOfLivingTier
    monthly_average: float = Field(ge=0)
    currency: str

    class Config:
        frozen = True


class VisaProcessing(BaseModel):
    difficulty: VisaDifficulty
    average_processing_days: int = Field(ge=0)
    success_rate: float = Field(ge=0, le=100)
    requirements: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class PostStudyWork(BaseModel):
    allowed: bool
    duration: Optional[str] = None
    restrictions: Optional[str] = None

    class Config:
        frozen = True


class Country(BaseModel):
    code: str
    name: str
    cost_of_living: CostOfLiving
    language_barrier: int = Field(ge=1, le=10)
    culture_shock_risk: int = Field(ge=1, le=10)
    visa_processing: VisaProcessing
    post_study_work: PostStudyWork
    safety_rating: int = Field(ge=1, le=10)

    class Config:
        frozen = True


# =============================================================================
# DERIVED VALUES
# =============================================================================

class FitBreakdown(BaseModel):
    """Per-dimension fit scores, each on a 0-100 scale."""
    teaching: int = Field(ge=0, le=100)
    workload: int = Field(ge=0, le=100)
    language: int = Field(ge=0, le=100)
    cost: int = Field(ge=0, le=100)
    visa: int = Field(ge=0, le=100)
    support: int = Field(ge=0, le=100)

    class Config:
        frozen = True

    def as_dict(self) -> Dict[str, int]:
        return {
            "teaching": self.teaching,
            "workload": self.workload,
            "language": self.language,
            "cost": self.cost,
            "visa": self.visa,
            "support": self.support,
        }


class FitScore(BaseModel):
    overall: int = Field(ge=0, le=100)
    breakdown: FitBreakdown

    class Config:
        frozen = True


class RiskEntry(BaseModel):
    severity: Severity
    likelihood: int = Field(ge=0, le=100)
    description: str
    mitigation: List[str] = Field(min_length=1)

    class Config:
        frozen = True


class RiskAssessment(BaseModel):
    financial: RiskEntry
    visa: RiskEntry
    academic: RiskEntry
    time: RiskEntry

    class Config:
        frozen = True

    def categories(self):
        """Iterate (category, entry) pairs in a fixed order."""
        return [
            ("financial", self.financial),
            ("visa", self.visa),
            ("academic", self.academic),
            ("time", self.time),
        ]


class TimelineEvent(BaseModel):
    id: str
    date: date
    title: str
    description: str
    type: TimelineEventType
    importance: Severity
    completed: bool = False

    class Config:
        frozen = True


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class Path(BaseModel):
    """
    One fully assembled recommendation.
    Created fresh per request; never mutated after assembly.
    """
    id: str
    type: PathType = PathType.UNIVERSITY
    name: str
    description: str
    fit_score: FitScore
    risks: RiskAssessment
    not_for_you_if: List[str] = Field(default_factory=list)
    details: University
    scholarships: List[Scholarship] = Field(default_factory=list, max_length=3)
    timeline: List[TimelineEvent] = Field(default_factory=list)

    class Config:
        frozen = True


class EngineError(BaseModel):
    """Failure reported as a value rather than raised."""
    code: str
    message: str
    details: List[str] = Field(default_factory=list)


class PathsOutput(BaseModel):
    """
    Output contract for the decision engine.
    Paths are in selection order, highest fit first.
    """
    student_id: Optional[str] = None

    paths: List[Path] = Field(default_factory=list)

    # Summary Statistics
    total_candidates_evaluated: int = 0
    total_eligible: int = 0
    total_recommended: int = 0

    engine_version: str = "1.0.0"

    # Warnings/Notes
    warnings: List[str] = Field(default_factory=list)
    error: Optional[EngineError] = None


# =============================================================================
# INTERMEDIATE DATA STRUCTURES
# =============================================================================

class ScoredCandidate(BaseModel):
    """
    A university with its computed fit score.
    Used between scoring and selection stages.
    """
    university: University
    fit_score: FitScore

    class Config:
        frozen = True

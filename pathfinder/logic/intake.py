"""
Profile Intake

Turns serialized profiles and wizard answers into a validated StudentProfile.
Missing or unrecognised required fields are rejected, never defaulted.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .contracts import (
    BudgetLevel,
    ConfidenceLevel,
    EducationStage,
    FearType,
    SituationType,
    StudentProfile,
)


class InvalidProfileError(ValueError):
    """Raised when a profile is missing required fields or has invalid values."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("Invalid student profile: " + "; ".join(problems))


def _describe_errors(exc: ValidationError) -> List[str]:
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "profile"
        problems.append(f"{field}: {error.get('msg', 'invalid value')}")
    return problems


def parse_profile(data: Dict[str, Any]) -> StudentProfile:
    """
    Validate a serialized profile.

    Raises:
        InvalidProfileError: when any required field is missing or invalid
    """
    if not isinstance(data, dict):
        raise InvalidProfileError(["profile: expected an object"])
    try:
        return StudentProfile(**data)
    except ValidationError as e:
        raise InvalidProfileError(_describe_errors(e)) from e


# =============================================================================
# WIZARD ANSWERS
# =============================================================================

def map_budget_level(text: str) -> Optional[BudgetLevel]:
    lower = text.lower()
    if "low" in lower:
        return BudgetLevel.LOW
    if "high" in lower:
        return BudgetLevel.HIGH
    if "medium" in lower or "mid" in lower:
        return BudgetLevel.MEDIUM
    return None


def map_education_stage(text: str) -> Optional[EducationStage]:
    lower = text.lower()
    if "high school" in lower or "high_school" in lower:
        return EducationStage.HIGH_SCHOOL
    if "master" in lower:
        return EducationStage.MASTERS
    if "phd" in lower or "doctor" in lower:
        return EducationStage.PHD
    if "bootcamp" in lower:
        return EducationStage.BOOTCAMP
    # Degree words win over "work" ("Bachelor's, working part-time")
    if "bachelor" in lower or "undergrad" in lower:
        return EducationStage.BACHELORS
    if "work" in lower:
        return EducationStage.WORKING
    return None


def map_fear(text: str) -> Optional[FearType]:
    lower = text.lower()
    if "visa" in lower:
        return FearType.VISA
    if "money" in lower or "cost" in lower or "afford" in lower:
        return FearType.MONEY
    if "fail" in lower:
        return FearType.FAILURE
    if "time" in lower:
        return FearType.TIME
    return None


def map_confidence(text: str) -> Optional[ConfidenceLevel]:
    lower = text.lower()
    for level in ConfidenceLevel:
        if level.value in lower:
            return level
    return None


def _first_answer(answers: Dict[str, str], *keys: str) -> str:
    for key in keys:
        value = answers.get(key)
        if value:
            return str(value)
    return ""


def profile_from_answers(
    answers: Dict[str, str],
    situation: SituationType = SituationType.STUDY_ABROAD,
    student_id: Optional[str] = None
) -> StudentProfile:
    """
    Map free-form wizard answers onto a StudentProfile.

    Recognised keys: current-country, target-country, education-stage (or stage),
    budget, main-fear (or fear), confidence.

    Raises:
        InvalidProfileError: when a required answer is missing or cannot be mapped
    """
    problems: List[str] = []

    current_country = _first_answer(answers, "current-country", "current_country").strip()
    if not current_country:
        problems.append("current-country: answer is required")

    mapped = {
        "education-stage": map_education_stage(_first_answer(answers, "education-stage", "stage")),
        "budget": map_budget_level(_first_answer(answers, "budget")),
        "main-fear": map_fear(_first_answer(answers, "main-fear", "fear")),
        "confidence": map_confidence(_first_answer(answers, "confidence")),
    }
    for key, value in mapped.items():
        if value is None:
            problems.append(f"{key}: missing or unrecognised answer")

    if problems:
        raise InvalidProfileError(problems)

    target_country = _first_answer(answers, "target-country", "target_country").strip() or None

    return StudentProfile(
        student_id=student_id,
        situation=situation,
        current_country=current_country,
        target_country=target_country,
        education_stage=mapped["education-stage"],
        budget_level=mapped["budget"],
        main_fear=mapped["main-fear"],
        confidence_level=mapped["confidence"],
    )

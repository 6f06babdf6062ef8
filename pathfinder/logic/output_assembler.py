"""
Output Assembler

Transforms selected candidates into the final Path records and the
PathsOutput contract. Derives "not for you if" exclusions, matches
scholarships and lays out the timeline.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Sequence

from .constants import (
    ALL_COUNTRIES_MARKER,
    APPLICATION_DEADLINE_OFFSET_DAYS,
    ENGINE_VERSION,
    ENGLISH,
    EXCLUSION_ACCEPTANCE_RATE,
    EXCLUSION_WORKLOAD_THRESHOLD,
    MAX_SCHOLARSHIPS_PER_PATH,
    PATH_COUNT,
    PROGRAM_START_OFFSET_DAYS,
    TOP_RANKED_CUTOFF,
    VISA_APPLICATION_OFFSET_DAYS,
)
from .contracts import (
    Path,
    PathsOutput,
    PathType,
    RiskAssessment,
    Scholarship,
    ScoredCandidate,
    Severity,
    StudentProfile,
    TimelineEvent,
    TimelineEventType,
    TuitionTier,
    University,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMELINE_OFFSETS = (
    APPLICATION_DEADLINE_OFFSET_DAYS,
    VISA_APPLICATION_OFFSET_DAYS,
    PROGRAM_START_OFFSET_DAYS,
)


def generate_exclusions(university: University) -> List[str]:
    """Conditions under which this path is a poor choice. Each is checked independently."""
    exclusions: List[str] = []

    if university.workload_intensity >= EXCLUSION_WORKLOAD_THRESHOLD:
        exclusions.append("you prefer a relaxed academic environment")

    if university.tuition.tier == TuitionTier.HIGH:
        exclusions.append("you have strict budget constraints")

    language = university.language_requirements
    if language.primary != ENGLISH and ENGLISH not in language.alternatives:
        exclusions.append(f"you're not comfortable learning in {language.primary}")

    if university.acceptance_rate < EXCLUSION_ACCEPTANCE_RATE:
        exclusions.append("you need a safer acceptance option")

    return exclusions


def scholarship_matches(
    profile: StudentProfile,
    university: University,
    scholarship: Scholarship
) -> bool:
    if scholarship.country != university.country:
        return False

    if profile.education_stage not in scholarship.eligibility.education_stages:
        return False

    allowed = scholarship.eligibility.countries
    if allowed and profile.current_country not in allowed and ALL_COUNTRIES_MARKER not in allowed:
        return False

    return True


def find_matching_scholarships(
    profile: StudentProfile,
    university: University,
    scholarships: Iterable[Scholarship],
    limit: int = MAX_SCHOLARSHIPS_PER_PATH
) -> List[Scholarship]:
    """Scholarships the student qualifies for at this university, in catalog order."""
    matches: List[Scholarship] = []
    for scholarship in scholarships:
        if len(matches) >= limit:
            break
        if scholarship_matches(profile, university, scholarship):
            matches.append(scholarship)
    return matches


def generate_timeline(
    university: University,
    as_of: date,
    offsets: Sequence[int] = DEFAULT_TIMELINE_OFFSETS
) -> List[TimelineEvent]:
    """
    Three fixed-offset milestones measured from `as_of`.

    Offsets are policy values, not institution deadlines.
    """
    application_days, visa_days, start_days = offsets

    return [
        TimelineEvent(
            id="evt-1",
            date=as_of + timedelta(days=application_days),
            title="Application Deadline",
            description=f"Submit application to {university.name}",
            type=TimelineEventType.DEADLINE,
            importance=Severity.HIGH,
        ),
        TimelineEvent(
            id="evt-2",
            date=as_of + timedelta(days=visa_days),
            title="Visa Application",
            description="Apply for student visa",
            type=TimelineEventType.DECISION,
            importance=Severity.HIGH,
        ),
        TimelineEvent(
            id="evt-3",
            date=as_of + timedelta(days=start_days),
            title="Program Starts",
            description="Begin studies",
            type=TimelineEventType.MILESTONE,
            importance=Severity.HIGH,
        ),
    ]


def describe_university(university: University) -> str:
    prefix = "Top-ranked" if university.ranking <= TOP_RANKED_CUTOFF else "Quality"
    style = university.teaching_style.value.replace("_", "-")
    return f"{prefix} {style} university in {university.city}, {university.country}"


def assemble_path(
    scored: ScoredCandidate,
    risks: RiskAssessment,
    scholarships: List[Scholarship],
    timeline: List[TimelineEvent]
) -> Path:
    """
    Convert a selected candidate into a Path.

    Args:
        scored: The selected candidate and its fit score
        risks: Risk assessment for the candidate
        scholarships: Matched scholarships (at most 3)
        timeline: Generated milestones

    Returns:
        Path object
    """
    university = scored.university

    return Path(
        id=f"path-{university.id}",
        type=PathType.UNIVERSITY,
        name=f"Study at {university.name}",
        description=describe_university(university),
        fit_score=scored.fit_score,
        risks=risks,
        not_for_you_if=generate_exclusions(university),
        details=university,
        scholarships=scholarships,
        timeline=timeline,
    )


def assemble_output(
    profile: StudentProfile,
    paths: List[Path],
    total_evaluated: int,
    total_eligible: int,
    path_count: int = PATH_COUNT
) -> PathsOutput:
    """
    Assemble the final PathsOutput.

    Args:
        profile: Original student profile
        paths: Assembled paths in selection order
        total_evaluated: Catalog universities evaluated
        total_eligible: Universities passing the hard constraints
        path_count: Number of paths requested

    Returns:
        Complete PathsOutput
    """
    warnings = _generate_warnings(profile, paths, total_evaluated, total_eligible, path_count)
    for warning in warnings:
        logger.warning(f"⚠️ {warning}")

    return PathsOutput(
        student_id=profile.student_id,
        paths=paths,
        total_candidates_evaluated=total_evaluated,
        total_eligible=total_eligible,
        total_recommended=len(paths),
        engine_version=ENGINE_VERSION,
        warnings=warnings,
    )


def _generate_warnings(
    profile: StudentProfile,
    paths: List[Path],
    total_evaluated: int,
    total_eligible: int,
    path_count: int
) -> List[str]:
    """Generate any warnings for the output."""
    warnings: List[str] = []

    if total_evaluated == 0:
        warnings.append("The catalog is empty; no universities could be evaluated.")
    elif total_eligible == 0:
        warnings.append("No universities match your hard constraints. Consider broadening your preferences.")
    elif len(paths) < path_count:
        warnings.append(
            f"Only {len(paths)} path(s) available for your constraints (requested {path_count})."
        )

    return warnings

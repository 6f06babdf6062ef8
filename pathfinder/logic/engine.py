"""
Path Decision Engine

Main orchestrator that combines all components into a single pipeline.
This is the primary entry point for generating paths.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .aggregator import calculate_fit_score, score_candidates
from .catalog import Catalog
from .constants import (
    APPLICATION_DEADLINE_OFFSET_DAYS,
    ENGINE_VERSION,
    MAX_SCHOLARSHIPS_PER_PATH,
    PATH_COUNT,
    PROGRAM_START_OFFSET_DAYS,
    UNCONSTRAINED_SLOTS,
    VISA_APPLICATION_OFFSET_DAYS,
)
from .contracts import EngineError, Path, PathsOutput, ScoredCandidate, StudentProfile
from .eligibility import filter_eligible, rejection_reason
from .intake import InvalidProfileError, parse_profile
from .output_assembler import (
    assemble_output,
    assemble_path,
    find_matching_scholarships,
    generate_timeline,
)
from .ranker import rank_candidates, select_diverse
from .risk_assessor import assess_risks

logger = logging.getLogger(__name__)


class EngineConfig(BaseModel):
    """Selection and timeline policy for the engine."""
    path_count: int = Field(default=PATH_COUNT, ge=1)
    unconstrained_slots: int = Field(default=UNCONSTRAINED_SLOTS, ge=0)
    max_scholarships_per_path: int = Field(default=MAX_SCHOLARSHIPS_PER_PATH, ge=0, le=3)
    timeline_offsets_days: Tuple[int, int, int] = (
        APPLICATION_DEADLINE_OFFSET_DAYS,
        VISA_APPLICATION_OFFSET_DAYS,
        PROGRAM_START_OFFSET_DAYS,
    )

    class Config:
        frozen = True


class PathfinderEngine:
    """
    Main decision engine that orchestrates the path pipeline.

    Pipeline flow:
    1. Eligibility Filter - Drop universities violating hard constraints
    2. Fit Scoring - Score six dimensions and aggregate
    3. Ranking - Stable sort by overall fit
    4. Diversity Selection - Pick N paths across countries
    5. Risk Assessment - Four risk categories per pick
    6. Path Assembly - Exclusions, scholarships, timeline
    """

    def __init__(self, catalog: Catalog, config: Optional[EngineConfig] = None):
        """
        Initialize the decision engine.

        Args:
            catalog: Read-only catalog snapshot shared across requests
            config: Selection/timeline policy; defaults to the standard policy
        """
        self.catalog = catalog
        self.config = config or EngineConfig()
        self.version = ENGINE_VERSION

    def _run(self, profile: StudentProfile, as_of: date) -> Tuple[List[Path], int, int]:
        universities = self.catalog.universities
        logger.info(
            f"🚀 Generating paths for student: {profile.student_id or 'anonymous'} "
            f"(budget={profile.budget_level.value}, fear={profile.main_fear.value}, "
            f"confidence={profile.confidence_level.value}, target={profile.target_country or 'any'})"
        )

        # Step 1: Hard constraints
        eligible = filter_eligible(profile, universities)
        if not eligible:
            return [], len(universities), 0

        # Step 2 & 3: Score and rank
        ranked = rank_candidates(score_candidates(profile, eligible))

        # Step 4: Diversity selection
        selected = select_diverse(
            ranked,
            count=self.config.path_count,
            unconstrained_slots=self.config.unconstrained_slots,
        )

        # Step 5 & 6: Risks, scholarships, timeline
        paths = [self._build_path(profile, scored, as_of) for scored in selected]
        logger.info(f"✨ Path pipeline complete: {len(paths)} paths")

        return paths, len(universities), len(eligible)

    def _build_path(self, profile: StudentProfile, scored: ScoredCandidate, as_of: date) -> Path:
        university = scored.university
        risks = assess_risks(profile, university, self.catalog.country_named(university.country))
        scholarships = find_matching_scholarships(
            profile,
            university,
            self.catalog.scholarships,
            limit=self.config.max_scholarships_per_path,
        )
        timeline = generate_timeline(university, as_of, self.config.timeline_offsets_days)
        return assemble_path(scored, risks, scholarships, timeline)

    def generate_paths(
        self,
        profile: StudentProfile,
        as_of: Optional[date] = None
    ) -> List[Path]:
        """
        Generate at most `path_count` paths for a student profile.

        Args:
            profile: Validated student profile
            as_of: Date the timeline is measured from (defaults to today)

        Returns:
            Paths in selection order, best fit first
        """
        paths, _, _ = self._run(profile, as_of or date.today())
        return paths

    def recommend(
        self,
        profile: StudentProfile,
        as_of: Optional[date] = None
    ) -> PathsOutput:
        """
        Generate paths wrapped with summary counts and warnings.

        Zero eligible universities is a valid outcome, not an error.
        """
        paths, evaluated, eligible = self._run(profile, as_of or date.today())
        return assemble_output(
            profile=profile,
            paths=paths,
            total_evaluated=evaluated,
            total_eligible=eligible,
            path_count=self.config.path_count,
        )

    def recommend_from_dict(
        self,
        profile_data: Dict[str, Any],
        as_of: Optional[date] = None
    ) -> PathsOutput:
        """
        Generate paths from a dictionary profile.

        Convenience method for API integration. An invalid profile is reported
        as an error value and the pipeline does not run.
        """
        try:
            profile = parse_profile(profile_data)
        except InvalidProfileError as e:
            logger.warning(f"Rejected profile: {e}")
            student_id = profile_data.get("student_id") if isinstance(profile_data, dict) else None
            return PathsOutput(
                student_id=student_id,
                engine_version=self.version,
                error=EngineError(code="invalid_profile", message=str(e), details=e.problems),
            )
        return self.recommend(profile, as_of=as_of)

    def score_single_university(
        self,
        profile: StudentProfile,
        university_id: str
    ) -> Optional[dict]:
        """
        Score a single university for a student.

        Useful for getting detailed scoring on a specific university
        the student is interested in, even one the filter would reject.

        Returns:
            Dict with scoring details, or None if the id is not in the catalog
        """
        university = self.catalog.university(university_id)
        if university is None:
            return None

        fit_score = calculate_fit_score(profile, university)
        risks = assess_risks(profile, university, self.catalog.country_named(university.country))
        reason = rejection_reason(profile, university)

        return {
            "university_id": university.id,
            "overall_score": fit_score.overall,
            "is_eligible": reason is None,
            "rejection_reason": reason,
            "dimension_scores": fit_score.breakdown.as_dict(),
            "risks": {
                category: {
                    "severity": entry.severity.value,
                    "likelihood": entry.likelihood,
                    "description": entry.description,
                }
                for category, entry in risks.categories()
            },
        }


# Convenience function for simple usage
def generate_paths(
    profile: StudentProfile,
    catalog: Catalog,
    as_of: Optional[date] = None
) -> List[Path]:
    """
    Convenience function to get paths with the default policy.

    Args:
        profile: Student profile
        catalog: Catalog snapshot
        as_of: Timeline anchor date

    Returns:
        List of Path
    """
    engine = PathfinderEngine(catalog)
    return engine.generate_paths(profile, as_of=as_of)

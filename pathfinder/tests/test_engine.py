"""
Test the path engine end to end with in-memory catalogs.
"""

import itertools

import pytest

from pathfinder.logic.catalog import Catalog
from pathfinder.logic.contracts import (
    BudgetLevel,
    ConfidenceLevel,
    FearType,
    TuitionTier,
    VisaDifficulty,
)
from pathfinder.logic.eligibility import filter_eligible
from pathfinder.logic.engine import EngineConfig, PathfinderEngine, generate_paths


class TestPipeline:
    def test_sample_selection(self, sample_engine, profile, as_of):
        output = sample_engine.recommend(profile, as_of=as_of)
        # RWTH 89, TCD 88, TUM 87 (Germany repeat), Tohoku 80, MIT 69
        assert [p.id for p in output.paths] == ["path-uni-rwth", "path-uni-tcd", "path-uni-tohoku"]
        assert [p.fit_score.overall for p in output.paths] == [89, 88, 80]
        assert output.total_candidates_evaluated == 5
        assert output.total_eligible == 5
        assert output.total_recommended == 3
        assert output.warnings == []
        assert output.engine_version == "1.0.0"

    def test_path_contents(self, sample_engine, profile, as_of):
        rwth, tcd, tohoku = sample_engine.generate_paths(profile, as_of=as_of)
        assert [s.id for s in rwth.scholarships] == ["sch-daad", "sch-open"]
        assert [s.id for s in tcd.scholarships] == ["sch-ireland"]
        assert rwth.not_for_you_if == []
        assert tohoku.not_for_you_if == ["you're not comfortable learning in Japanese"]
        assert tcd.risks.financial.severity.value == "high"
        # No country record for Japan
        assert tohoku.risks.financial.severity.value == "low"
        assert rwth.timeline[0].date.isoformat() == "2026-07-14"

    def test_germany_target_low_budget_visa_fear(self, make_profile, make_university, as_of):
        german = make_university(
            id="uni-de", country="Germany", teaching_style="research_focused", workload_intensity=8,
            language={"primary": "German", "alternatives": ["English"]},
            tuition={"currency": "EUR", "annual_cost": 0, "tier": "free"},
            visa_difficulty="easy",
        )
        american = make_university(
            id="uni-us", country="United States",
            tuition={"currency": "USD", "annual_cost": 55000, "tier": "high"},
            visa_difficulty="hard",
        )
        profile = make_profile(
            budget_level="low", main_fear="visa", confidence_level="low", target_country="Germany",
        )
        output = PathfinderEngine(Catalog([german, american])).recommend(profile, as_of=as_of)

        assert len(output.paths) == 1
        path = output.paths[0]
        assert path.details.id == "uni-de"
        assert path.fit_score.breakdown.cost >= 90
        assert path.fit_score.overall == 82
        assert output.total_eligible == 1

    def test_fewer_than_three_warns(self, sample_engine, make_profile, as_of):
        output = sample_engine.recommend(make_profile(target_country="Germany"), as_of=as_of)
        assert [p.details.id for p in output.paths] == ["uni-rwth", "uni-tum"]
        assert output.warnings == ["Only 2 path(s) available for your constraints (requested 3)."]

    def test_empty_catalog(self, profile, as_of):
        output = PathfinderEngine(Catalog()).recommend(profile, as_of=as_of)
        assert output.paths == []
        assert output.total_candidates_evaluated == 0
        assert output.error is None
        assert len(output.warnings) == 1

    def test_no_eligible_universities(self, sample_engine, make_profile, as_of):
        output = sample_engine.recommend(make_profile(target_country="Atlantis"), as_of=as_of)
        assert output.paths == []
        assert output.total_candidates_evaluated == 5
        assert output.warnings[0].startswith("No universities match")

    def test_deterministic(self, sample_engine, profile, as_of):
        first = sample_engine.recommend(profile, as_of=as_of).model_dump_json()
        second = sample_engine.recommend(profile, as_of=as_of).model_dump_json()
        assert first == second

    def test_module_level_generate_paths(self, sample_catalog, profile, as_of):
        paths = generate_paths(profile, sample_catalog, as_of=as_of)
        assert [p.id for p in paths] == ["path-uni-rwth", "path-uni-tcd", "path-uni-tohoku"]


class TestInvariants:
    """Hard constraints and selection guarantees over every profile combination."""

    @pytest.fixture
    def combos(self):
        return list(itertools.product(BudgetLevel, FearType, ConfidenceLevel))

    def test_hard_constraints_hold(self, sample_engine, make_profile, combos, as_of):
        for budget, fear, confidence in combos:
            profile = make_profile(budget_level=budget, main_fear=fear, confidence_level=confidence)
            for path in sample_engine.generate_paths(profile, as_of=as_of):
                university = path.details
                if budget == BudgetLevel.LOW:
                    assert university.tuition.tier != TuitionTier.HIGH
                if fear == FearType.VISA:
                    assert university.visa_difficulty != VisaDifficulty.HARD
                if confidence == ConfidenceLevel.LOW:
                    assert university.workload_intensity < 9

    def test_selection_guarantees(self, sample_engine, sample_catalog, make_profile, combos, as_of):
        for budget, fear, confidence in combos:
            profile = make_profile(budget_level=budget, main_fear=fear, confidence_level=confidence)
            paths = sample_engine.generate_paths(profile, as_of=as_of)
            ids = [p.details.id for p in paths]

            assert len(ids) == len(set(ids)) <= 3
            assert all(len(p.scholarships) <= 3 for p in paths)

            eligible = filter_eligible(profile, sample_catalog.universities)
            assert len(paths) == min(3, len(eligible))

            if len(paths) == 3:
                leading = {paths[0].details.country, paths[1].details.country}
                if any(u.country not in leading for u in eligible):
                    assert paths[2].details.country not in leading


class TestConfig:
    def test_path_count(self, sample_catalog, profile, as_of):
        engine = PathfinderEngine(sample_catalog, EngineConfig(path_count=2))
        output = engine.recommend(profile, as_of=as_of)
        assert len(output.paths) == 2
        assert output.warnings == []

    def test_timeline_offsets(self, sample_catalog, profile, as_of):
        engine = PathfinderEngine(sample_catalog, EngineConfig(timeline_offsets_days=(10, 20, 30)))
        path = engine.generate_paths(profile, as_of=as_of)[0]
        assert [(e.date - as_of).days for e in path.timeline] == [10, 20, 30]

    def test_scholarship_limit(self, sample_catalog, profile, as_of):
        engine = PathfinderEngine(sample_catalog, EngineConfig(max_scholarships_per_path=1))
        path = engine.generate_paths(profile, as_of=as_of)[0]
        assert [s.id for s in path.scholarships] == ["sch-daad"]


class TestDictEntryPoint:
    def test_invalid_profile_is_an_error_value(self, sample_engine, as_of):
        output = sample_engine.recommend_from_dict(
            {"student_id": "s-9", "situation": "study_abroad", "current_country": "India"},
            as_of=as_of,
        )
        assert output.error is not None
        assert output.error.code == "invalid_profile"
        assert output.student_id == "s-9"
        assert output.paths == []
        assert any("budget_level" in problem for problem in output.error.details)

    def test_valid_dict(self, sample_engine, as_of):
        output = sample_engine.recommend_from_dict({
            "situation": "explore_safely",
            "current_country": "India",
            "education_stage": "masters",
            "budget_level": "medium",
            "main_fear": "money",
            "confidence_level": "medium",
        }, as_of=as_of)
        assert output.error is None
        assert output.total_recommended == 3


class TestScoreSingleUniversity:
    def test_unknown_id(self, sample_engine, profile):
        assert sample_engine.score_single_university(profile, "uni-nope") is None

    def test_ineligible_university_still_scored(self, sample_engine, make_profile):
        profile = make_profile(budget_level="low")
        result = sample_engine.score_single_university(profile, "uni-mit")
        assert result["is_eligible"] is False
        assert result["rejection_reason"] == "high tuition on low budget"
        assert result["dimension_scores"]["cost"] == 10
        assert set(result["risks"]) == {"financial", "visa", "academic", "time"}

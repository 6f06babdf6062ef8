from datetime import date

import pytest

from pathfinder.logic.catalog import Catalog
from pathfinder.logic.contracts import (
    CostOfLiving,
    Country,
    LanguageRequirements,
    PostStudyWork,
    Scholarship,
    ScholarshipAmount,
    ScholarshipEligibility,
    StudentProfile,
    Tuition,
    University,
    VisaProcessing,
)
from pathfinder.logic.engine import PathfinderEngine


# ── Builders ──────────────────────────────────────────────────────────────────

def build_profile(**overrides):
    fields = {
        "student_id": "student-001",
        "situation": "study_abroad",
        "current_country": "India",
        "target_country": None,
        "education_stage": "masters",
        "budget_level": "medium",
        "main_fear": "money",
        "confidence_level": "medium",
    }
    fields.update(overrides)
    return StudentProfile(**fields)


def build_university(**overrides):
    language = overrides.pop("language", None) or {"primary": "English"}
    tuition = overrides.pop("tuition", None) or {"currency": "EUR", "annual_cost": 5000, "tier": "low"}
    fields = {
        "id": "uni-test",
        "name": "Test University",
        "country": "Germany",
        "city": "Berlin",
        "ranking": 60,
        "teaching_style": "mixed",
        "workload_intensity": 7,
        "language_requirements": LanguageRequirements(**language),
        "tuition": Tuition(**tuition),
        "visa_difficulty": "easy",
        "international_student_support": 8,
        "acceptance_rate": 40,
        "website": "https://example.edu",
    }
    fields.update(overrides)
    return University(**fields)


def build_scholarship(**overrides):
    eligibility = overrides.pop("eligibility", None) or {"countries": ["All"], "education_stages": ["masters"]}
    fields = {
        "id": "sch-test",
        "name": "Test Scholarship",
        "provider": "Test Foundation",
        "country": "Germany",
        "eligibility": ScholarshipEligibility(**eligibility),
        "amount": ScholarshipAmount(currency="EUR", value=5000, coverage="partial"),
        "deadline": date(2026, 9, 30),
        "competitiveness": "medium",
    }
    fields.update(overrides)
    return Scholarship(**fields)


def build_country(name="Germany", code="DE", cost_tier="medium"):
    return Country(
        code=code,
        name=name,
        cost_of_living=CostOfLiving(tier=cost_tier, monthly_average=1200, currency="EUR"),
        language_barrier=5,
        culture_shock_risk=5,
        visa_processing=VisaProcessing(difficulty="easy", average_processing_days=30, success_rate=90),
        post_study_work=PostStudyWork(allowed=True, duration="18 months"),
        safety_rating=8,
    )


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def make_profile():
    return build_profile


@pytest.fixture
def make_university():
    return build_university


@pytest.fixture
def make_scholarship():
    return build_scholarship


@pytest.fixture
def make_country():
    return build_country


@pytest.fixture
def as_of():
    return date(2026, 1, 15)


@pytest.fixture
def profile():
    return build_profile()


@pytest.fixture
def sample_catalog():
    """Four countries, one without a country record, several scholarships."""
    universities = [
        build_university(
            id="uni-tum", name="Technical University of Munich", country="Germany", city="Munich",
            ranking=37, teaching_style="research_focused", workload_intensity=8,
            language={"primary": "German", "alternatives": ["English"]},
            tuition={"currency": "EUR", "annual_cost": 0, "tier": "free"},
            acceptance_rate=8,
        ),
        build_university(
            id="uni-rwth", name="RWTH Aachen University", country="Germany", city="Aachen",
            ranking=99, teaching_style="lecture_heavy", workload_intensity=7,
            language={"primary": "German", "alternatives": ["English"]},
            tuition={"currency": "EUR", "annual_cost": 0, "tier": "free"},
        ),
        build_university(
            id="uni-mit", name="Massachusetts Institute of Technology", country="United States",
            city="Cambridge", ranking=1, teaching_style="research_focused", workload_intensity=10,
            tuition={"currency": "USD", "annual_cost": 53790, "tier": "high"},
            visa_difficulty="hard", international_student_support=9, acceptance_rate=4,
        ),
        build_university(
            id="uni-tcd", name="Trinity College Dublin", country="Ireland", city="Dublin",
            ranking=87, teaching_style="lecture_heavy", workload_intensity=5,
            tuition={"currency": "EUR", "annual_cost": 9800, "tier": "low"},
            international_student_support=7,
        ),
        build_university(
            id="uni-tohoku", name="Tohoku University", country="Japan", city="Sendai",
            ranking=107, teaching_style="lecture_heavy", workload_intensity=6,
            language={"primary": "Japanese"},
            tuition={"currency": "JPY", "annual_cost": 5400, "tier": "low"},
            visa_difficulty="medium", international_student_support=6,
        ),
    ]
    scholarships = [
        build_scholarship(id="sch-daad", country="Germany"),
        build_scholarship(
            id="sch-open", country="Germany",
            eligibility={"countries": [], "education_stages": ["bachelors", "masters"]},
        ),
        build_scholarship(
            id="sch-brazil-only", country="Germany",
            eligibility={"countries": ["Brazil"], "education_stages": ["masters"]},
        ),
        build_scholarship(
            id="sch-ireland", country="Ireland",
            eligibility={"countries": ["India"], "education_stages": ["masters", "phd"]},
        ),
    ]
    countries = [
        build_country("Germany", "DE", "medium"),
        build_country("United States", "US", "high"),
        build_country("Ireland", "IE", "high"),
    ]
    return Catalog(universities, scholarships, countries)


@pytest.fixture
def sample_engine(sample_catalog):
    return PathfinderEngine(sample_catalog)


@pytest.fixture
def sample_path(sample_engine, profile, as_of):
    return sample_engine.generate_paths(profile, as_of=as_of)[0]

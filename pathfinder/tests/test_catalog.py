"""
Test catalog loading from the seed file and from the database tables.
"""

import itertools
import json
from contextlib import contextmanager
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import catalog_upload
from db import Base
from pathfinder.logic.adapter import tuition_tier_for_cost, university_from_dict
from pathfinder.logic.catalog import DEFAULT_SEED_PATH, Catalog, load_catalog
from pathfinder.logic.contracts import (
    BudgetLevel,
    ConfidenceLevel,
    EducationStage,
    FearType,
    TeachingStyle,
    TuitionTier,
)
from pathfinder.logic.engine import PathfinderEngine
from pathfinder.models import PfUniversity


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def uploaded(session_factory, monkeypatch):
    """Run the upload script against an in-memory database."""
    @contextmanager
    def fake_get_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        finally:
            db.close()

    monkeypatch.setattr(catalog_upload, "get_db", fake_get_db)
    monkeypatch.setattr(catalog_upload, "init_db", lambda: None)
    counts = catalog_upload.upload_catalog()
    return counts


# ── Tests ─────────────────────────────────────────────────────────────────────

class TestTuitionTier:
    @pytest.mark.parametrize("cost,expected", [
        (0, TuitionTier.FREE),
        (None, TuitionTier.FREE),
        (9999, TuitionTier.LOW),
        (10000, TuitionTier.MEDIUM),
        (29999.99, TuitionTier.MEDIUM),
        (30000, TuitionTier.HIGH),
    ])
    def test_bands(self, cost, expected):
        assert tuition_tier_for_cost(cost) == expected


class TestAdapter:
    def test_normalizes_seed_tags(self):
        university = university_from_dict({
            "id": "uni-1",
            "name": "Somewhere University",
            "country": "DE",
            "ranking": 120,
            "teaching_style": "Research-Focused",
            "workload_intensity": 6,
            "tuition": {"currency": "EUR", "annual_cost": 1500},
            "visa_difficulty": "Easy",
            "international_student_support": 7,
            "acceptance_rate": 30,
        })
        assert university.country == "Germany"
        assert university.teaching_style == TeachingStyle.RESEARCH_FOCUSED
        assert university.tuition.tier == TuitionTier.LOW
        assert university.language_requirements.primary == "English"


class TestSeedCatalog:
    def test_loads_bundled_seed(self):
        catalog = Catalog.from_seed()
        assert len(catalog.universities) == 10
        assert len(catalog.scholarships) == 7
        assert len(catalog.countries) == 8
        assert len(catalog) == 10

    def test_lookups(self):
        catalog = Catalog.from_seed()
        assert catalog.university("uni-tum").tuition.tier == TuitionTier.FREE
        assert catalog.university("uni-tudelft").tuition.tier == TuitionTier.MEDIUM
        assert catalog.country_named("Germany").code == "DE"
        # Tohoku has no country record
        assert catalog.country_named("Japan") is None
        assert catalog.university("uni-missing") is None

    def test_catalog_is_immutable(self):
        catalog = Catalog.from_seed()
        assert isinstance(catalog.universities, tuple)
        with pytest.raises(Exception):
            catalog.universities[0].ranking = 2

    def test_env_override(self, tmp_path, monkeypatch):
        with open(DEFAULT_SEED_PATH, "r", encoding="utf-8") as f:
            data = json.load(f)
        data["universities"] = data["universities"][:2]
        custom = tmp_path / "catalog.json"
        custom.write_text(json.dumps(data), encoding="utf-8")

        monkeypatch.setenv("PATHFINDER_CATALOG_PATH", str(custom))
        assert len(load_catalog().universities) == 2

    def test_runs_end_to_end(self, make_profile):
        engine = PathfinderEngine(Catalog.from_seed())
        output = engine.recommend(make_profile(budget_level="low", main_fear="visa"), as_of=date(2026, 1, 15))
        assert output.total_recommended == 3
        for path in output.paths:
            assert path.details.tuition.tier != TuitionTier.HIGH
            assert path.details.visa_difficulty.value != "hard"


class TestDatabaseCatalog:
    def test_upload_counts(self, uploaded):
        assert uploaded == {"universities": 10, "scholarships": 7, "countries": 8}

    def test_round_trip_matches_seed(self, uploaded, session_factory):
        db = session_factory()
        try:
            from_db = Catalog.from_session(db)
        finally:
            db.close()
        seed = Catalog.from_seed()

        assert {u.id: u for u in from_db.universities} == {u.id: u for u in seed.universities}
        assert {s.id: s for s in from_db.scholarships} == {s.id: s for s in seed.scholarships}
        assert {c.code: c for c in from_db.countries} == {c.code: c for c in seed.countries}

    def test_rows_keep_seed_order(self, uploaded, session_factory):
        db = session_factory()
        try:
            from_db = load_catalog(db)
        finally:
            db.close()
        seed = Catalog.from_seed()
        assert [u.id for u in from_db.universities] == [u.id for u in seed.universities]
        assert [s.id for s in from_db.scholarships] == [s.id for s in seed.scholarships]
        assert [c.code for c in from_db.countries] == [c.code for c in seed.countries]

    def test_database_and_seed_give_same_paths(self, uploaded, session_factory, make_profile):
        db = session_factory()
        try:
            db_engine = PathfinderEngine(Catalog.from_session(db))
        finally:
            db.close()
        seed_engine = PathfinderEngine(Catalog.from_seed())
        as_of = date(2026, 1, 15)

        for budget, fear, confidence, stage, target in itertools.product(
            BudgetLevel, FearType, ConfidenceLevel, EducationStage, (None, "Germany", "Ireland"),
        ):
            profile = make_profile(
                budget_level=budget,
                main_fear=fear,
                confidence_level=confidence,
                education_stage=stage,
                target_country=target,
            )
            assert db_engine.generate_paths(profile, as_of=as_of) == seed_engine.generate_paths(profile, as_of=as_of)

    def test_bad_rows_are_skipped(self, uploaded, session_factory):
        db = session_factory()
        try:
            db.add(PfUniversity(id="uni-broken", name="Broken", country="Nowhere", ranking=0))
            db.commit()
            catalog = Catalog.from_session(db)
        finally:
            db.close()
        assert catalog.university("uni-broken") is None
        assert len(catalog.universities) == 10

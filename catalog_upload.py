import argparse
import json
import logging
from datetime import datetime

from dotenv import load_dotenv

from db import get_db, init_db
from pathfinder.logic.adapter import (
    country_from_dict,
    scholarship_from_dict,
    university_from_dict,
)
from pathfinder.logic.catalog import DEFAULT_SEED_PATH
from pathfinder.models import PfCountry, PfScholarship, PfUniversity

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def university_row(entry, scraped_at, position=None):
    # Validate through the contract before writing
    university = university_from_dict(entry)
    return PfUniversity(
        id=university.id,
        name=university.name,
        country=university.country,
        city=university.city,
        ranking=university.ranking,
        teaching_style=university.teaching_style.value,
        workload_intensity=university.workload_intensity,
        language_requirements=university.language_requirements.model_dump(mode="json"),
        tuition_currency=university.tuition.currency,
        tuition_annual_cost=university.tuition.annual_cost,
        tuition_tier=university.tuition.tier.value,
        visa_difficulty=university.visa_difficulty.value,
        international_student_support=university.international_student_support,
        acceptance_rate=university.acceptance_rate,
        website=university.website,
        image_url=university.image_url,
        data_source=university.data_source.model_dump() if university.data_source else None,
        scraped_at=scraped_at,
        catalog_position=position,
    )


def scholarship_row(entry, scraped_at, position=None):
    scholarship = scholarship_from_dict(entry)
    eligibility = scholarship.eligibility
    return PfScholarship(
        id=scholarship.id,
        name=scholarship.name,
        provider=scholarship.provider,
        country=scholarship.country,
        eligible_countries=list(eligibility.countries),
        education_stages=[stage.value for stage in eligibility.education_stages],
        min_gpa=eligibility.min_gpa,
        age_limit=eligibility.age_limit,
        work_experience_required=eligibility.work_experience_required,
        amount_currency=scholarship.amount.currency,
        amount_value=scholarship.amount.value,
        coverage=scholarship.amount.coverage.value,
        deadline=scholarship.deadline,
        competitiveness=scholarship.competitiveness.value,
        application_complexity=scholarship.application_complexity,
        website=scholarship.website,
        scraped_at=scraped_at,
        catalog_position=position,
    )


def country_row(entry, scraped_at, position=None):
    country = country_from_dict(entry)
    return PfCountry(
        code=country.code,
        name=country.name,
        cost_of_living=country.cost_of_living.model_dump(mode="json"),
        language_barrier=country.language_barrier,
        culture_shock_risk=country.culture_shock_risk,
        visa_processing=country.visa_processing.model_dump(mode="json"),
        post_study_work=country.post_study_work.model_dump(),
        safety_rating=country.safety_rating,
        scraped_at=scraped_at,
        catalog_position=position,
    )


def upload_catalog(path=DEFAULT_SEED_PATH):
    """Upsert every record of a seed catalog JSON file into the pf_* tables."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    init_db()
    scraped_at = datetime.utcnow()
    counts = {"universities": 0, "scholarships": 0, "countries": 0}

    with get_db() as db:
        for position, entry in enumerate(data.get("countries", [])):
            db.merge(country_row(entry, scraped_at, position))
            counts["countries"] += 1
        for position, entry in enumerate(data.get("universities", [])):
            db.merge(university_row(entry, scraped_at, position))
            counts["universities"] += 1
        for position, entry in enumerate(data.get("scholarships", [])):
            db.merge(scholarship_row(entry, scraped_at, position))
            counts["scholarships"] += 1

    logger.info(
        f"✅ Uploaded {counts['universities']} universities, "
        f"{counts['scholarships']} scholarships, {counts['countries']} countries from {path}"
    )
    return counts


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load a catalog JSON file into the database")
    parser.add_argument("path", nargs="?", default=DEFAULT_SEED_PATH)
    args = parser.parse_args()
    upload_catalog(args.path)

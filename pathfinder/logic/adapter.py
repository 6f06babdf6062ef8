"""
Data Adapter for the Path Decision Engine

Reads catalog rows (pf_universities, pf_scholarships, pf_countries) or raw seed
dicts and transforms them into the normalized contracts used by the engine.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking/selection
- NO DB writes
- NO AI/LLM usage
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..models import PfCountry, PfScholarship, PfUniversity
from .constants import TUITION_TIER_BANDS
from .contracts import (
    Country,
    CostOfLiving,
    DataSource,
    LanguageRequirements,
    PostStudyWork,
    Scholarship,
    ScholarshipAmount,
    ScholarshipEligibility,
    Tuition,
    TuitionTier,
    University,
    VisaProcessing,
)

logger = logging.getLogger(__name__)


# Country code to name mapping
COUNTRY_CODE_MAP = {
    "AU": "Australia",
    "CA": "Canada",
    "DE": "Germany",
    "GB": "United Kingdom",
    "UK": "United Kingdom",
    "IE": "Ireland",
    "US": "United States",
    "USA": "United States",
    "NZ": "New Zealand",
    "SG": "Singapore",
    "NL": "Netherlands",
    "FR": "France",
    "JP": "Japan",
}


def tuition_tier_for_cost(annual_cost: Optional[float]) -> TuitionTier:
    """
    Band an annual tuition cost into a tier.

    0 is free, below 10k is low, below 30k is medium, anything else is high.
    """
    if not annual_cost:
        return TuitionTier.FREE
    for upper_bound, tier in TUITION_TIER_BANDS:
        if annual_cost < upper_bound:
            return tier
    return TuitionTier.HIGH


def _get_country_name(code_or_name: str) -> str:
    """Convert country code to full name."""
    if not code_or_name:
        return ""
    upper = code_or_name.upper()
    return COUNTRY_CODE_MAP.get(upper, code_or_name)


def _normalize_tag(value: Optional[str]) -> Optional[str]:
    """'research-focused' / 'Research Focused' -> 'research_focused'."""
    if value is None:
        return None
    return value.strip().lower().replace("-", "_").replace(" ", "_")


def _parse_date(value: Any) -> Optional[date]:
    """Parse date string to date object."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    for fmt in ["%Y-%m-%d", "%Y/%m/%d", "%d-%m-%Y", "%d/%m/%Y"]:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


# =============================================================================
# DICT -> CONTRACT
# =============================================================================

def university_from_dict(data: Dict[str, Any]) -> University:
    """Build a University from a seed/scraped dict."""
    tuition = data.get("tuition") or {}
    annual_cost = tuition.get("annual_cost", 0) or 0
    tier = _normalize_tag(tuition.get("tier")) or tuition_tier_for_cost(annual_cost)

    language = data.get("language_requirements") or {}
    source = data.get("data_source")

    return University(
        id=str(data["id"]),
        name=data["name"],
        country=_get_country_name(data["country"]),
        city=data.get("city") or "",
        ranking=data["ranking"],
        teaching_style=_normalize_tag(data["teaching_style"]),
        workload_intensity=data["workload_intensity"],
        language_requirements=LanguageRequirements(
            primary=language.get("primary", "English"),
            alternatives=language.get("alternatives") or [],
            proficiency_required=_normalize_tag(language.get("proficiency_required")) or "intermediate",
        ),
        tuition=Tuition(
            currency=tuition.get("currency", "USD"),
            annual_cost=annual_cost,
            tier=tier,
        ),
        visa_difficulty=_normalize_tag(data["visa_difficulty"]),
        international_student_support=data["international_student_support"],
        acceptance_rate=data["acceptance_rate"],
        website=data.get("website") or "",
        image_url=data.get("image_url"),
        data_source=DataSource(**source) if source else None,
    )


def scholarship_from_dict(data: Dict[str, Any]) -> Scholarship:
    """Build a Scholarship from a seed dict."""
    eligibility = data.get("eligibility") or {}
    amount = data.get("amount") or {}

    return Scholarship(
        id=str(data["id"]),
        name=data["name"],
        provider=data.get("provider") or "",
        country=_get_country_name(data["country"]),
        eligibility=ScholarshipEligibility(
            countries=eligibility.get("countries") or [],
            education_stages=[_normalize_tag(s) for s in eligibility.get("education_stages") or []],
            min_gpa=eligibility.get("min_gpa"),
            age_limit=eligibility.get("age_limit"),
            work_experience_required=eligibility.get("work_experience_required"),
        ),
        amount=ScholarshipAmount(
            currency=amount.get("currency", "USD"),
            value=amount.get("value", 0),
            coverage=_normalize_tag(amount.get("coverage")) or "partial",
        ),
        deadline=_parse_date(data["deadline"]),
        competitiveness=_normalize_tag(data.get("competitiveness")) or "medium",
        application_complexity=data.get("application_complexity") or 5,
        website=data.get("website") or "",
    )


def country_from_dict(data: Dict[str, Any]) -> Country:
    """Build a Country from a seed dict."""
    cost = data.get("cost_of_living") or {}
    visa = data.get("visa_processing") or {}
    work = data.get("post_study_work") or {}

    return Country(
        code=data["code"],
        name=data["name"],
        cost_of_living=CostOfLiving(
            tier=_normalize_tag(cost.get("tier")) or "medium",
            monthly_average=cost.get("monthly_average", 0),
            currency=cost.get("currency", "USD"),
        ),
        language_barrier=data.get("language_barrier", 5),
        culture_shock_risk=data.get("culture_shock_risk", 5),
        visa_processing=VisaProcessing(
            difficulty=_normalize_tag(visa.get("difficulty")) or "medium",
            average_processing_days=visa.get("average_processing_days", 0),
            success_rate=visa.get("success_rate", 0),
            requirements=visa.get("requirements") or [],
        ),
        post_study_work=PostStudyWork(
            allowed=bool(work.get("allowed", False)),
            duration=work.get("duration"),
            restrictions=work.get("restrictions"),
        ),
        safety_rating=data.get("safety_rating", 5),
    )


# =============================================================================
# ROW -> CONTRACT
# =============================================================================

def university_from_row(row: PfUniversity) -> University:
    """Transform a pf_universities row into a University."""
    return university_from_dict({
        "id": row.id,
        "name": row.name,
        "country": row.country,
        "city": row.city,
        "ranking": row.ranking,
        "teaching_style": row.teaching_style,
        "workload_intensity": row.workload_intensity,
        "language_requirements": row.language_requirements,
        "tuition": {
            "currency": row.tuition_currency,
            "annual_cost": row.tuition_annual_cost,
            "tier": row.tuition_tier,
        },
        "visa_difficulty": row.visa_difficulty,
        "international_student_support": row.international_student_support,
        "acceptance_rate": row.acceptance_rate,
        "website": row.website,
        "image_url": row.image_url,
        "data_source": row.data_source,
    })


def scholarship_from_row(row: PfScholarship) -> Scholarship:
    """Transform a pf_scholarships row into a Scholarship."""
    return scholarship_from_dict({
        "id": row.id,
        "name": row.name,
        "provider": row.provider,
        "country": row.country,
        "eligibility": {
            "countries": row.eligible_countries,
            "education_stages": row.education_stages,
            "min_gpa": row.min_gpa,
            "age_limit": row.age_limit,
            "work_experience_required": row.work_experience_required,
        },
        "amount": {
            "currency": row.amount_currency,
            "value": row.amount_value,
            "coverage": row.coverage,
        },
        "deadline": row.deadline,
        "competitiveness": row.competitiveness,
        "application_complexity": row.application_complexity,
        "website": row.website,
    })


def country_from_row(row: PfCountry) -> Country:
    """Transform a pf_countries row into a Country."""
    return country_from_dict({
        "code": row.code,
        "name": row.name,
        "cost_of_living": row.cost_of_living,
        "language_barrier": row.language_barrier,
        "culture_shock_risk": row.culture_shock_risk,
        "visa_processing": row.visa_processing,
        "post_study_work": row.post_study_work,
        "safety_rating": row.safety_rating,
    })


def _transform_rows(rows, transform, label: str) -> List:
    records = []
    for row in rows:
        try:
            records.append(transform(row))
        except Exception as e:
            # Skip rows that fail conversion
            logger.warning(f"Skipping {label} row {getattr(row, 'id', None) or getattr(row, 'code', None)}: {e}")
    return records


def fetch_catalog_records(db: Session) -> Dict[str, List]:
    """
    Read every catalog table and transform rows into contracts.

    Rows come back in the order they were uploaded (catalog_position), so
    tie-breaks match the source catalog. Rows without a position follow,
    ordered by primary key.
    """
    universities = _transform_rows(
        db.query(PfUniversity).order_by(
            PfUniversity.catalog_position.is_(None), PfUniversity.catalog_position, PfUniversity.id
        ).all(),
        university_from_row,
        "university",
    )
    scholarships = _transform_rows(
        db.query(PfScholarship).order_by(
            PfScholarship.catalog_position.is_(None), PfScholarship.catalog_position, PfScholarship.id
        ).all(),
        scholarship_from_row,
        "scholarship",
    )
    countries = _transform_rows(
        db.query(PfCountry).order_by(
            PfCountry.catalog_position.is_(None), PfCountry.catalog_position, PfCountry.code
        ).all(),
        country_from_row,
        "country",
    )

    logger.info(
        f"📦 Catalog rows loaded: {len(universities)} universities, "
        f"{len(scholarships)} scholarships, {len(countries)} countries"
    )

    return {
        "universities": universities,
        "scholarships": scholarships,
        "countries": countries,
    }

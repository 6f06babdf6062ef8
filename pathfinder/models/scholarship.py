from sqlalchemy import Boolean, Column, Integer, String, Float, Date, DateTime, JSON

from .base import Base


class PfScholarship(Base):
    __tablename__ = "pf_scholarships"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    provider = Column(String)
    country = Column(String, nullable=False, index=True)

    # Eligibility
    eligible_countries = Column(JSON)
    education_stages = Column(JSON)
    min_gpa = Column(Float)
    age_limit = Column(Integer)
    work_experience_required = Column(Boolean)

    # Award
    amount_currency = Column(String)
    amount_value = Column(Float)
    coverage = Column(String)

    deadline = Column(Date)
    competitiveness = Column(String)
    application_complexity = Column(Integer)
    website = Column(String)
    scraped_at = Column(DateTime)
    catalog_position = Column(Integer, index=True)  # order within the source catalog

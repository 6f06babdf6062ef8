from sqlalchemy import Column, Integer, String, Float, DateTime, JSON

from .base import Base


class PfUniversity(Base):
    __tablename__ = "pf_universities"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    country = Column(String, nullable=False, index=True)
    city = Column(String)
    ranking = Column(Integer)
    teaching_style = Column(String)
    workload_intensity = Column(Integer)

    # {"primary": ..., "alternatives": [...], "proficiency_required": ...}
    language_requirements = Column(JSON)

    tuition_currency = Column(String)
    tuition_annual_cost = Column(Float)
    tuition_tier = Column(String)  # derived from cost when empty

    visa_difficulty = Column(String)
    international_student_support = Column(Integer)
    acceptance_rate = Column(Float)
    website = Column(String)
    image_url = Column(String)

    # Meta
    data_source = Column(JSON)
    scraped_at = Column(DateTime)
    catalog_position = Column(Integer, index=True)  # order within the source catalog

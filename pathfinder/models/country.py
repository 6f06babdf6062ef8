from sqlalchemy import Column, Integer, String, DateTime, JSON

from .base import Base


class PfCountry(Base):
    __tablename__ = "pf_countries"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False, unique=True)

    # {"tier": ..., "monthly_average": ..., "currency": ...}
    cost_of_living = Column(JSON)
    language_barrier = Column(Integer)
    culture_shock_risk = Column(Integer)

    # {"difficulty": ..., "average_processing_days": ..., "success_rate": ..., "requirements": [...]}
    visa_processing = Column(JSON)
    post_study_work = Column(JSON)
    safety_rating = Column(Integer)
    scraped_at = Column(DateTime)
    catalog_position = Column(Integer, index=True)  # order within the source catalog

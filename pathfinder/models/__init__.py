# Export all catalog models for easy imports
from .base import Base
from .university import PfUniversity
from .scholarship import PfScholarship
from .country import PfCountry

__all__ = [
    "Base",
    "PfUniversity",
    "PfScholarship",
    "PfCountry",
]

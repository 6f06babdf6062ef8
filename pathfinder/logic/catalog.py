"""
Catalog

Read-only snapshot of universities, scholarships and countries.
Built once at process start and shared across requests; nothing in the
engine mutates it.
"""

import json
import logging
import os
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from .adapter import (
    country_from_dict,
    fetch_catalog_records,
    scholarship_from_dict,
    university_from_dict,
)
from .contracts import Country, Scholarship, University

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "data",
    "seed_catalog.json",
)


class Catalog:
    """Immutable collections of catalog records, in catalog order."""

    def __init__(
        self,
        universities: Iterable[University] = (),
        scholarships: Iterable[Scholarship] = (),
        countries: Iterable[Country] = (),
    ):
        self._universities: Tuple[University, ...] = tuple(universities)
        self._scholarships: Tuple[Scholarship, ...] = tuple(scholarships)
        self._countries: Tuple[Country, ...] = tuple(countries)
        self._countries_by_name: Dict[str, Country] = {c.name: c for c in self._countries}
        self._universities_by_id: Dict[str, University] = {u.id: u for u in self._universities}

    @property
    def universities(self) -> Tuple[University, ...]:
        return self._universities

    @property
    def scholarships(self) -> Tuple[Scholarship, ...]:
        return self._scholarships

    @property
    def countries(self) -> Tuple[Country, ...]:
        return self._countries

    def country_named(self, name: str) -> Optional[Country]:
        """Exact-name lookup; None when the catalog has no record."""
        return self._countries_by_name.get(name)

    def university(self, university_id: str) -> Optional[University]:
        return self._universities_by_id.get(university_id)

    def __len__(self) -> int:
        return len(self._universities)

    def __repr__(self) -> str:
        return (
            f"Catalog(universities={len(self._universities)}, "
            f"scholarships={len(self._scholarships)}, countries={len(self._countries)})"
        )

    # -------------------------------------------------------------------------
    # Loaders
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict) -> "Catalog":
        """Build from a {"universities": [...], "scholarships": [...], "countries": [...]} dict."""
        return cls(
            universities=[university_from_dict(u) for u in data.get("universities", [])],
            scholarships=[scholarship_from_dict(s) for s in data.get("scholarships", [])],
            countries=[country_from_dict(c) for c in data.get("countries", [])],
        )

    @classmethod
    def from_seed(cls, path: Optional[str] = None) -> "Catalog":
        """Load the bundled (or given) JSON seed catalog."""
        path = path or DEFAULT_SEED_PATH
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        catalog = cls.from_dict(data)
        logger.info(f"📚 Seed catalog loaded from {path}: {catalog!r}")
        return catalog

    @classmethod
    def from_session(cls, db: Session) -> "Catalog":
        """Load every catalog table through the adapter."""
        records = fetch_catalog_records(db)
        return cls(**records)


def load_catalog(db: Optional[Session] = None) -> Catalog:
    """
    Load the catalog once for the process.

    Uses the database when a session is given, otherwise the seed file named by
    PATHFINDER_CATALOG_PATH (or the bundled seed).
    """
    if db is not None:
        return Catalog.from_session(db)
    return Catalog.from_seed(os.getenv("PATHFINDER_CATALOG_PATH"))

"""
Path Decision Logic Module

Provides the deterministic engine that turns a student profile into
up to three ranked, risk-annotated study paths.
"""

from .contracts import (
    StudentProfile,
    University,
    Scholarship,
    Country,
    FitScore,
    FitBreakdown,
    RiskAssessment,
    RiskEntry,
    TimelineEvent,
    Path,
    PathsOutput,
    EngineError,
    ScoredCandidate,
)
from .catalog import Catalog, load_catalog
from .engine import EngineConfig, PathfinderEngine, generate_paths
from .intake import InvalidProfileError, parse_profile, profile_from_answers

__all__ = [
    # Main engine
    "PathfinderEngine",
    "EngineConfig",
    "generate_paths",

    # Catalog
    "Catalog",
    "load_catalog",

    # Intake
    "InvalidProfileError",
    "parse_profile",
    "profile_from_answers",

    # Contracts
    "StudentProfile",
    "University",
    "Scholarship",
    "Country",
    "FitScore",
    "FitBreakdown",
    "RiskAssessment",
    "RiskEntry",
    "TimelineEvent",
    "Path",
    "PathsOutput",
    "EngineError",
    "ScoredCandidate",
]

"""
Path API Routes

Exposes the path decision engine via REST API.
Endpoints: POST /paths, POST /paths/from-answers, POST /paths/{path_id}/narrative
"""

import json
import logging
import uuid
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from .ai.narrator import NARRATIVE_KINDS, NarrativeGenerator, narrate
from .logic.contracts import (
    Path,
    PathsOutput,
    RiskEntry,
    Scholarship,
    ScenarioType,
    SituationType,
    TimelineEvent,
    University,
)
from .logic.engine import PathfinderEngine
from .logic.intake import InvalidProfileError, parse_profile, profile_from_answers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/paths", tags=["paths"])


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================

class PathsRequest(BaseModel):
    """Request body for the paths endpoint."""
    student_profile: Dict[str, Any] = Field(
        ...,
        description="Student profile with situation, budget, fear and confidence",
        examples=[{
            "situation": "study_abroad",
            "current_country": "India",
            "target_country": "Germany",
            "education_stage": "bachelors",
            "budget_level": "low",
            "main_fear": "money",
            "confidence_level": "medium"
        }]
    )
    as_of: Optional[date] = Field(
        default=None,
        description="Date the timeline is measured from (defaults to today)"
    )


class AnswersRequest(BaseModel):
    """Request body for wizard answers."""
    situation: SituationType = SituationType.STUDY_ABROAD
    answers: Dict[str, str] = Field(..., description="Wizard answers keyed by question id")
    as_of: Optional[date] = None


class NarrativeRequest(BaseModel):
    """Request body for a streamed narrative about one path."""
    student_profile: Dict[str, Any]
    kind: str = Field(default="explanation", pattern="^(" + "|".join(NARRATIVE_KINDS) + ")$")
    scenario_type: ScenarioType = ScenarioType.LIKELY
    emergency_type: str = "unexpected setback"
    as_of: Optional[date] = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_engine(request: Request) -> PathfinderEngine:
    return request.app.state.engine


def get_narrator(request: Request) -> NarrativeGenerator:
    return request.app.state.narrator


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("", summary="Generate study paths")
@router.post("/", summary="Generate study paths", include_in_schema=False)
def create_paths(
    request: PathsRequest,
    engine: PathfinderEngine = Depends(get_engine)
):
    """
    Generate up to three ranked study paths for a student profile.

    **Request Body:**
    - `student_profile`: Situation, budget, fear, confidence and countries
    - `as_of`: Optional timeline anchor date

    **Response:**
    - Paths with fit scores, risks, exclusions, scholarships and timeline
    - Summary counts and warnings
    """
    try:
        as_of = request.as_of or date.today()
        output = engine.recommend_from_dict(request.student_profile, as_of=as_of)
        if output.error is not None:
            raise HTTPException(status_code=400, detail=output.error.message)
        return _serialize_output(output, _request_id(request.student_profile, as_of))

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Path generation failed")
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.post("/from-answers", summary="Generate study paths from wizard answers")
def create_paths_from_answers(
    request: AnswersRequest,
    engine: PathfinderEngine = Depends(get_engine)
):
    """Map free-form wizard answers to a profile, then generate paths."""
    try:
        profile = profile_from_answers(request.answers, request.situation)
    except InvalidProfileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        as_of = request.as_of or date.today()
        output = engine.recommend(profile, as_of=as_of)
        return _serialize_output(output, _request_id(profile.model_dump(mode="json"), as_of))
    except Exception as e:
        logger.exception("Path generation from answers failed")
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.post("/{path_id}/narrative", summary="Stream a narrative for one path")
def stream_narrative(
    path_id: str,
    request: NarrativeRequest,
    engine: PathfinderEngine = Depends(get_engine),
    narrator: NarrativeGenerator = Depends(get_narrator)
):
    """
    Stream an explanation, risk walkthrough, scenario or emergency plan as plain text.

    The path is regenerated from the profile; a path id that is not among the
    student's paths is a 404.
    """
    try:
        profile = parse_profile(request.student_profile)
    except InvalidProfileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    paths = engine.generate_paths(profile, as_of=request.as_of)
    path = next((p for p in paths if p.id == path_id), None)
    if path is None:
        raise HTTPException(status_code=404, detail=f"Path not found: {path_id}")

    chunks = narrate(
        narrator,
        request.kind,
        profile,
        path,
        scenario_type=request.scenario_type,
        emergency_type=request.emergency_type,
    )
    return StreamingResponse(chunks, media_type="text/plain")


# =============================================================================
# SERIALIZATION
# =============================================================================

def _request_id(student_profile: Dict[str, Any], as_of: date) -> str:
    """Stable id: the same profile and anchor date always give the same id."""
    key = json.dumps(student_profile, sort_keys=True, default=str) + "|" + as_of.isoformat()
    return str(uuid.uuid5(uuid.NAMESPACE_URL, key))


def _serialize_output(output: PathsOutput, request_id: str) -> Dict[str, Any]:
    """Convert PathsOutput to the JSON response envelope."""
    return {
        "request_id": request_id,
        "student_id": output.student_id,
        "summary": {
            "total_evaluated": output.total_candidates_evaluated,
            "total_eligible": output.total_eligible,
            "total_recommended": output.total_recommended,
        },
        "paths": [_serialize_path(p) for p in output.paths],
        "warnings": output.warnings,
        "engine_version": output.engine_version,
    }


def _serialize_path(path: Path) -> Dict[str, Any]:
    """Convert Path to JSON-serializable dict."""
    return {
        "id": path.id,
        "type": path.type.value,
        "name": path.name,
        "description": path.description,
        "fit_score": {
            "overall": path.fit_score.overall,
            "breakdown": path.fit_score.breakdown.as_dict(),
        },
        "risks": {category: _serialize_risk(entry) for category, entry in path.risks.categories()},
        "not_for_you_if": list(path.not_for_you_if),
        "details": _serialize_university(path.details),
        "scholarships": [_serialize_scholarship(s) for s in path.scholarships],
        "timeline": [_serialize_event(e) for e in path.timeline],
    }


def _serialize_risk(entry: RiskEntry) -> Dict[str, Any]:
    return {
        "severity": entry.severity.value,
        "likelihood": entry.likelihood,
        "description": entry.description,
        "mitigation": list(entry.mitigation),
    }


def _serialize_university(university: University) -> Dict[str, Any]:
    return university.model_dump(mode="json")


def _serialize_scholarship(scholarship: Scholarship) -> Dict[str, Any]:
    return {
        "id": scholarship.id,
        "name": scholarship.name,
        "provider": scholarship.provider,
        "country": scholarship.country,
        "amount": {
            "currency": scholarship.amount.currency,
            "value": scholarship.amount.value,
            "coverage": scholarship.amount.coverage.value,
        },
        "deadline": scholarship.deadline.isoformat(),
        "competitiveness": scholarship.competitiveness.value,
        "website": scholarship.website,
    }


def _serialize_event(event: TimelineEvent) -> Dict[str, Any]:
    return {
        "id": event.id,
        "date": event.date.isoformat(),
        "title": event.title,
        "description": event.description,
        "type": event.type.value,
        "importance": event.importance.value,
        "completed": event.completed,
    }


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Path engine health check")
def health_check(engine: PathfinderEngine = Depends(get_engine)):
    """Check if the path engine is operational."""
    return {
        "status": "ok",
        "engine": "pathfinder",
        "version": engine.version,
        "catalog": {
            "universities": len(engine.catalog.universities),
            "scholarships": len(engine.catalog.scholarships),
            "countries": len(engine.catalog.countries),
        },
    }

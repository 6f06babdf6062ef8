"""
Path Narrator

Streams human-readable narratives (explanation, risks, scenarios, emergency
plans) for already-assembled paths. Narrators only read; they never change
scores, risks or timelines.
"""

import logging
import os
from typing import Any, Callable, Iterator, Optional, Protocol

import openai
from pydantic import BaseModel

from ..logic.contracts import Path, ScenarioType, Severity, StudentProfile
from .prompt_builder import (
    SYSTEM_PROMPTS,
    build_emergency_prompt,
    build_explanation_prompt,
    build_risk_prompt,
    build_scenario_prompt,
)

logger = logging.getLogger(__name__)

NARRATIVE_KINDS = ("explanation", "risks", "scenario", "emergency")


class NarrativeGenerator(Protocol):
    def explain_path(self, profile: StudentProfile, path: Path) -> Iterator[str]: ...

    def explain_risks(self, profile: StudentProfile, path: Path) -> Iterator[str]: ...

    def scenario(
        self, profile: StudentProfile, path: Path, scenario_type: ScenarioType
    ) -> Iterator[str]: ...

    def emergency_plan(
        self, emergency_type: str, profile: StudentProfile, path: Path
    ) -> Iterator[str]: ...


def _word_chunks(text: str) -> Iterator[str]:
    for word in text.split(" "):
        yield word + " "


# =============================================================================
# TEMPLATE NARRATOR
# =============================================================================

SCENARIO_TEMPLATES = {
    ScenarioType.BEST: (
        "In the best case scenario, everything aligns. You get accepted, funding comes through, "
        "and you do well in your studies. Within 2-3 years, you complete the program and "
        "secure opportunities in your field."
    ),
    ScenarioType.LIKELY: (
        "Most likely, you'll face some challenges but overcome them. Expect a mix of successes "
        "and setbacks. With planning and persistence, you should complete this path in the "
        "expected timeframe."
    ),
    ScenarioType.FAILURE: (
        "If things don't go as planned, you have options. Common issues include visa delays, "
        "funding gaps, or academic challenges. Recovery steps: 1) Reassess and adjust timeline, "
        "2) Explore alternative funding, 3) Consider backup programs, 4) Seek mentorship and support."
    ),
}


class TemplateNarrator:
    """Deterministic narratives built from the path data. Used when no AI backend is configured."""

    def explain_path(self, profile: StudentProfile, path: Path) -> Iterator[str]:
        considerations = "\n".join(f"- Not ideal if {item}" for item in path.not_for_you_if)
        notable_risks = "\n".join(
            f"- {category}: {entry.description}"
            for category, entry in path.risks.categories()
            if entry.severity != Severity.LOW
        )
        text = (
            f"This {path.type.value} path has been recommended based on your profile.\n\n"
            f"**Why this path fits:**\n"
            f"- Your {profile.budget_level.value} budget was compared with the cost structure\n"
            f"- The path was checked against your main concern about {profile.main_fear.value}\n"
            f"- Fit score: {path.fit_score.overall}/100\n\n"
            f"**Key considerations:**\n{considerations or '- None flagged'}\n\n"
            f"**Main risks to be aware of:**\n{notable_risks or '- No high or medium risks flagged'}\n\n"
            f"Note: This is a basic explanation generated from the engine's data."
        )
        return _word_chunks(text)

    def explain_risks(self, profile: StudentProfile, path: Path) -> Iterator[str]:
        sections = "\n\n".join(
            f"**{category.upper()} Risk ({entry.severity.value}):**\n{entry.description}\n\n"
            "Mitigation strategies:\n" + "\n".join(f"- {m}" for m in entry.mitigation)
            for category, entry in path.risks.categories()
        )
        text = (
            f"Based on your profile, here are the main risks:\n\n{sections}\n\n"
            f"Your main fear is {profile.main_fear.value}, so pay special attention to related risks."
        )
        return _word_chunks(text)

    def scenario(
        self, profile: StudentProfile, path: Path, scenario_type: ScenarioType
    ) -> Iterator[str]:
        return _word_chunks(SCENARIO_TEMPLATES[scenario_type])

    def emergency_plan(
        self, emergency_type: str, profile: StudentProfile, path: Path
    ) -> Iterator[str]:
        yield f"Emergency Plan for {emergency_type}:\n\n"
        yield "1. Stay calm and assess the situation\n"
        yield f"2. Contact {path.details.name} immediately\n"
        yield "3. Explore alternative options\n"
        yield "4. Seek professional advice\n"


# =============================================================================
# OPENAI NARRATOR
# =============================================================================

class NarratorSettings(BaseModel):
    """Credentials and model choice for the AI narrator."""
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    azure_endpoint: Optional[str] = None
    azure_api_key: Optional[str] = None
    azure_deployment: str = "gpt-4"
    azure_api_version: str = "2024-08-01-preview"
    temperature: float = 0.3
    max_tokens: int = 700

    @classmethod
    def from_env(cls) -> "NarratorSettings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT"),
            azure_api_key=os.getenv("AZURE_OPENAI_API_KEY"),
            azure_deployment=os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4"),
            azure_api_version=os.getenv("AZURE_OPENAI_API_VERSION", "2024-08-01-preview"),
        )

    @property
    def azure_configured(self) -> bool:
        return bool(self.azure_endpoint and self.azure_api_key)

    @property
    def configured(self) -> bool:
        return self.azure_configured or bool(self.openai_api_key)


class OpenAINarrator:
    """Streams chat completions; any API failure falls back to the template narrative."""

    def __init__(self, client: Any, model: str, temperature: float = 0.3, max_tokens: int = 700,
                 fallback: Optional[TemplateNarrator] = None):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.fallback = fallback or TemplateNarrator()

    @classmethod
    def from_settings(cls, settings: NarratorSettings) -> "OpenAINarrator":
        if settings.azure_configured:
            client = openai.AzureOpenAI(
                azure_endpoint=settings.azure_endpoint,
                api_key=settings.azure_api_key,
                api_version=settings.azure_api_version,
                azure_deployment=settings.azure_deployment,
            )
            model = settings.azure_deployment
        else:
            client = openai.OpenAI(api_key=settings.openai_api_key)
            model = settings.openai_model
        return cls(client, model, settings.temperature, settings.max_tokens)

    def _stream(self, kind: str, user_prompt: str, fallback: Callable[[], Iterator[str]]) -> Iterator[str]:
        sent = 0
        try:
            stream = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPTS[kind]},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    sent += 1
                    yield delta
        except Exception as e:
            logger.error(f"❌ Error generating {kind} narrative after {sent} chunks: {e}")
            # Template text only replaces a stream that never started
            if sent == 0:
                yield from fallback()

    def explain_path(self, profile: StudentProfile, path: Path) -> Iterator[str]:
        return self._stream(
            "explanation",
            build_explanation_prompt(profile, path),
            lambda: self.fallback.explain_path(profile, path),
        )

    def explain_risks(self, profile: StudentProfile, path: Path) -> Iterator[str]:
        return self._stream(
            "risks",
            build_risk_prompt(profile, path),
            lambda: self.fallback.explain_risks(profile, path),
        )

    def scenario(
        self, profile: StudentProfile, path: Path, scenario_type: ScenarioType
    ) -> Iterator[str]:
        return self._stream(
            "scenario",
            build_scenario_prompt(profile, path, scenario_type),
            lambda: self.fallback.scenario(profile, path, scenario_type),
        )

    def emergency_plan(
        self, emergency_type: str, profile: StudentProfile, path: Path
    ) -> Iterator[str]:
        return self._stream(
            "emergency",
            build_emergency_prompt(emergency_type, profile, path),
            lambda: self.fallback.emergency_plan(emergency_type, profile, path),
        )


def build_narrator(settings: Optional[NarratorSettings] = None) -> NarrativeGenerator:
    """
    Choose the narrator once at process start.

    Returns an OpenAINarrator when credentials are configured, else a TemplateNarrator.
    """
    settings = settings or NarratorSettings.from_env()
    if not settings.configured:
        logger.warning("⚠️ No OpenAI credentials found. Narratives will use templates.")
        return TemplateNarrator()

    backend = "Azure OpenAI" if settings.azure_configured else "OpenAI"
    logger.info(f"🤖 Narratives streamed from {backend}")
    return OpenAINarrator.from_settings(settings)


def narrate(
    narrator: NarrativeGenerator,
    kind: str,
    profile: StudentProfile,
    path: Path,
    scenario_type: ScenarioType = ScenarioType.LIKELY,
    emergency_type: str = "unexpected setback"
) -> Iterator[str]:
    """
    Dispatch one narrative kind. The narrator works on a private deep copy of the path.

    Raises:
        ValueError: for an unknown narrative kind
    """
    snapshot = path.model_copy(deep=True)
    if kind == "explanation":
        return narrator.explain_path(profile, snapshot)
    if kind == "risks":
        return narrator.explain_risks(profile, snapshot)
    if kind == "scenario":
        return narrator.scenario(profile, snapshot, scenario_type)
    if kind == "emergency":
        return narrator.emergency_plan(emergency_type, profile, snapshot)
    raise ValueError(f"Unknown narrative kind: {kind}")

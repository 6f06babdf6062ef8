from typing import List

from ..logic.contracts import Path, ScenarioType, StudentProfile
from .safety_rules import (
    EMERGENCY_ROLE,
    EXPLANATION_ROLE,
    RISK_ROLE,
    SAFETY_RULES,
    SCENARIO_ROLE,
    SCENARIO_TONE,
)


def build_system_prompt(role: str) -> str:
    """Constructs the system prompt for one narrative kind."""
    rules_str = "\n".join([f"- {rule}" for rule in SAFETY_RULES])

    return f"""{role}

SAFETY RULES (NON-NEGOTIABLE):
{rules_str}
"""


def _profile_lines(profile: StudentProfile) -> List[str]:
    return [
        f"- Situation: {profile.situation.value}",
        f"- Country: {profile.current_country}",
        f"- Education Stage: {profile.education_stage.value}",
        f"- Budget: {profile.budget_level.value}",
        f"- Main Fear: {profile.main_fear.value}",
        f"- Confidence: {profile.confidence_level.value}",
    ]


def _risk_summary(path: Path) -> str:
    return ", ".join(
        f"{category}: {entry.severity.value} ({entry.likelihood}%)"
        for category, entry in path.risks.categories()
    )


def build_explanation_prompt(profile: StudentProfile, path: Path) -> str:
    profile_block = "\n".join(_profile_lines(profile))
    return f"""
STUDENT PROFILE:
{profile_block}

RECOMMENDED PATH:
- Type: {path.type.value}
- Name: {path.name}
- Fit Score: {path.fit_score.overall}/100
- Main Risks: {_risk_summary(path)}

TASK:
Explain:
1. Why this path matches their situation
2. Key tradeoffs they should understand
3. What we're uncertain about
4. What assumptions we made

Keep it conversational, supportive, and under 300 words.
"""


def build_risk_prompt(profile: StudentProfile, path: Path) -> str:
    risks = "\n\n".join(
        f"{category.upper()}: {entry.severity.value} severity, {entry.likelihood}% likelihood\n"
        f"  Description: {entry.description}\n"
        f"  Mitigation: {', '.join(entry.mitigation)}"
        for category, entry in path.risks.categories()
    )
    return f"""
STUDENT CONTEXT:
- Budget: {profile.budget_level.value}
- Main Fear: {profile.main_fear.value}
- Confidence: {profile.confidence_level.value}

RISKS:
{risks}

TASK:
Provide a clear, supportive explanation of these risks and how to manage them. Keep it under 250 words.
"""


def build_scenario_prompt(profile: StudentProfile, path: Path, scenario_type: ScenarioType) -> str:
    recovery = "- Recovery steps and fallback options\n" if scenario_type == ScenarioType.FAILURE else ""
    return f"""
Create a {scenario_type.value} case scenario for this student path:

Path: {path.name} ({path.type.value})
Student: {profile.education_stage.value} from {profile.current_country}
Budget: {profile.budget_level.value}

Create a {SCENARIO_TONE[scenario_type.value]} scenario spanning 2-5 years.

Include:
- Key milestones with approximate dates
- Decision points
{recovery}
Keep it under 200 words, story-like format.
"""


def build_emergency_prompt(emergency_type: str, profile: StudentProfile, path: Path) -> str:
    return f"""
EMERGENCY: {emergency_type}

STUDENT CONTEXT:
- Current Path: {path.name}
- Country: {profile.current_country}
- Budget: {profile.budget_level.value}
- Main Fear: {profile.main_fear.value}

TASK:
Create a recovery plan with:
1. Immediate actions (within 48 hours)
2. Short-term steps (1-2 weeks)
3. Long-term alternatives (1-3 months)
4. Fallback paths

Keep it under 250 words, clear and actionable.
"""


SYSTEM_PROMPTS = {
    "explanation": build_system_prompt(EXPLANATION_ROLE),
    "risks": build_system_prompt(RISK_ROLE),
    "scenario": build_system_prompt(SCENARIO_ROLE),
    "emergency": build_system_prompt(EMERGENCY_ROLE),
}

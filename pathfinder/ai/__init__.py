"""
AI Narrative Module

Streams explanations of engine output. Never alters engine results.
"""

from .narrator import (
    NarrativeGenerator,
    NarratorSettings,
    OpenAINarrator,
    TemplateNarrator,
    build_narrator,
    narrate,
)

__all__ = [
    "NarrativeGenerator",
    "NarratorSettings",
    "OpenAINarrator",
    "TemplateNarrator",
    "build_narrator",
    "narrate",
]

"""Profession-specific prompt tailoring.

This module keeps the fixed profession table in the domain layer so the
prompt builders and the CLI onboarding flow share one source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProfessionContext:
    """Title and tailoring guidance appended to personalized prompts."""

    title: str
    guidance: str


_PROFESSIONS: dict[str, ProfessionContext] = {
    "healthcare-professional": ProfessionContext(
        title="healthcare professional",
        guidance=(
            "Focus on practical applications in healthcare, patient care improvements, and regulatory "
            "compliance. Avoid technical code examples."
        ),
    ),
    "business-manager": ProfessionContext(
        title="business manager",
        guidance=(
            "Emphasize business value, ROI, strategic implications, and management perspectives. Use "
            "business case studies and avoid technical implementation details."
        ),
    ),
    "software-developer": ProfessionContext(
        title="software developer",
        guidance=(
            "Include detailed code examples, technical implementation details, best practices, and "
            "architectural considerations."
        ),
    ),
    "data-scientist": ProfessionContext(
        title="data scientist",
        guidance=(
            "Focus on data analysis applications, statistical concepts, and include relevant code examples "
            "for data processing and visualization."
        ),
    ),
    "designer": ProfessionContext(
        title="designer",
        guidance=(
            "Emphasize user experience, visual design principles, and creative applications. Focus on design "
            "thinking and user-centered approaches."
        ),
    ),
    "educator": ProfessionContext(
        title="educator",
        guidance=(
            "Focus on pedagogical applications, teaching methodologies, and educational technology. Emphasize "
            "how concepts can be taught to others."
        ),
    ),
    "consultant": ProfessionContext(
        title="consultant",
        guidance=(
            "Emphasize strategic applications, client value, and implementation frameworks. Focus on business "
            "impact and consulting methodologies."
        ),
    ),
}

GENERIC_PROFESSION = ProfessionContext(
    title="professional",
    guidance="Provide balanced content with both theoretical and practical perspectives.",
)


def known_professions() -> list[str]:
    """Profession keys accepted by `profession_context` (used by onboarding)."""

    return list(_PROFESSIONS)


def profession_context(profession: str) -> ProfessionContext:
    return _PROFESSIONS.get((profession or "").strip().lower(), GENERIC_PROFESSION)

"""Data models for profile generation requests."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rirekisho.documents.models import PersonalRecord


class GenerationMode(str, Enum):
    """How the LLM should treat the applicant's text."""

    TRANSLATE = "translate"  # source is not Japanese: translate into Japanese
    REFINE = "refine"  # source is already Japanese: polish it


class IdentityOverrides(BaseModel):
    """Identity fields typed in by the applicant.

    Any field set here wins over what the LLM produced.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    given_name: str | None = None
    family_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    birth_date: str | None = None
    gender: str | None = None
    photo: str | None = None


class GenerationRequest(BaseModel):
    """Input to the generative text service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    identity: IdentityOverrides = Field(
        default_factory=IdentityOverrides,
        description="Identity fields supplied by the applicant",
    )
    free_text: str | None = Field(
        default=None,
        description="Free-text profile, e.g. text extracted from an uploaded resume",
    )
    structured_draft: PersonalRecord | None = Field(
        default=None,
        description="Partially filled record to refine",
    )
    job_description: str | None = Field(
        default=None,
        description="Target job description used to emphasise relevant experience",
    )

    def source_text(self) -> str:
        """All applicant-written prose, used for language detection."""
        parts = [self.free_text or ""]
        draft = self.structured_draft
        if draft is not None:
            parts.extend([draft.professional_summary, draft.self_promotion])
            parts.extend(entry.narrative for entry in draft.work_history)
        return "\n".join(p for p in parts if p)

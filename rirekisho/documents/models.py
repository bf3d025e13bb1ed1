"""Data models for the document generation core.

Contains Pydantic models for:
- PersonalRecord: the normalized personal-history record (sole input)
- ValidationReport: field-presence flags derived from a record

and plain dataclasses for the ephemeral outputs of a generation call.

Models accept both snake_case names and the camelCase names produced by the
generative service, so its JSON payload validates without coercion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base model shared by every part of the personal record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        """Treat explicit nulls as absent so every field falls back to its default."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")


class Identity(RecordModel):
    """Basic personal information shown in the document headers."""

    given_name: str = Field(default="", description="Given name")
    family_name: str = Field(default="", description="Family name")
    given_name_kana: str | None = Field(
        default=None, description="Phonetic (furigana) given name"
    )
    family_name_kana: str | None = Field(
        default=None, description="Phonetic (furigana) family name"
    )
    email: str = Field(default="", description="Contact email")
    phone: str | None = Field(default=None, description="Contact phone")
    address: str | None = Field(default=None, description="Current address")
    birth_date: str | None = Field(
        default=None, description="Birth date (YYYY-MM-DD)"
    )
    gender: str | None = Field(default=None, description="Gender as written")
    photo: str | None = Field(
        default=None,
        description="ID photo as a data URL (data:image/jpeg;base64,...)",
    )

    @property
    def full_name(self) -> str:
        """Family name first, as written on Japanese forms."""
        return " ".join(p for p in (self.family_name, self.given_name) if p).strip()

    @property
    def full_name_kana(self) -> str:
        """Phonetic name in family-first order, or an empty string."""
        parts = (self.family_name_kana or "", self.given_name_kana or "")
        return " ".join(p for p in parts if p).strip()


class EducationEntry(RecordModel):
    """Education history entry."""

    institution: str = Field(..., description="School or university name")
    credential: str | None = Field(
        default=None, description="Degree, faculty or course"
    )
    start_period: str | None = Field(default=None, description="Start (YYYY-MM)")
    end_period: str | None = Field(default=None, description="End (YYYY-MM)")
    is_ongoing: bool = Field(default=False, description="Still enrolled")


class WorkEntry(RecordModel):
    """Work history entry."""

    organization: str = Field(..., description="Company or organization name")
    title: str = Field(default="", description="Position held")
    start_period: str | None = Field(default=None, description="Start (YYYY-MM)")
    end_period: str | None = Field(default=None, description="End (YYYY-MM)")
    is_ongoing: bool = Field(default=False, description="Still employed")
    narrative: str = Field(default="", description="Description of duties")
    achievements: list[str] = Field(
        default_factory=list, description="Notable achievements"
    )


class LanguageSkill(RecordModel):
    """Spoken/written language and proficiency."""

    language: str = Field(..., description="Language name")
    proficiency_level: str = Field(
        default="",
        description="Proficiency (Native, Business, Conversational, ...)",
    )


class PersonalRecord(RecordModel):
    """Normalized personal-history record used to build both documents."""

    identity: Identity = Field(
        default_factory=Identity,
        description="Basic personal information",
    )
    education: list[EducationEntry] = Field(
        default_factory=list, description="Education history, display order"
    )
    work_history: list[WorkEntry] = Field(
        default_factory=list,
        description="Work history, display order",
    )
    skills: list[str] = Field(default_factory=list, description="Skills")
    certifications: list[str] = Field(
        default_factory=list, description="Licenses and certifications"
    )
    languages: list[LanguageSkill] = Field(
        default_factory=list, description="Language skills"
    )
    professional_summary: str = Field(
        default="", description="Career summary (Shokumu Keirekisho)"
    )
    self_promotion: str = Field(
        default="", description="Self promotion / motivation (Rirekisho)"
    )
    personal_requests: str | None = Field(
        default=None,
        description="Personal requests; the form's default sentence is used if empty",
    )

    @classmethod
    def from_dict(cls, data: dict) -> PersonalRecord:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class ValidationReport(BaseModel):
    """Field-presence report. A flag is True when the field is missing."""

    birth_date: bool = Field(default=False, description="Birth date missing")
    address: bool = Field(default=False, description="Address missing")
    phone: bool = Field(default=False, description="Phone missing")
    email: bool = Field(default=False, description="Email missing")
    education: bool = Field(default=False, description="No education entries")
    work_history: bool = Field(default=False, description="No work entries")

    @property
    def has_missing(self) -> bool:
        """Whether any field is reported missing."""
        return any(self.model_dump().values())

    def missing_fields(self) -> list[str]:
        """Names of the missing fields, in declaration order."""
        return [name for name, missing in self.model_dump().items() if missing]


@dataclass(frozen=True)
class GeneratedDocument:
    """A serialized document and its logical filename inside the archive."""

    filename: str
    content: bytes


@dataclass
class GenerationResult:
    """Result of a complete document generation call.

    On failure no partial output is carried: both ``archive_bytes`` and
    ``validation`` stay ``None``.
    """

    success: bool
    error: str | None = None

    archive_bytes: bytes | None = None
    archive_name: str | None = None
    validation: ValidationReport | None = None

    completed_at: datetime = field(default_factory=datetime.now)

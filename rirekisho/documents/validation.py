"""Field-presence validation for personal records."""

from __future__ import annotations

from rirekisho.documents.models import PersonalRecord, ValidationReport


def is_blank(value: str | None) -> bool:
    """True for ``None``, empty and whitespace-only strings."""
    return value is None or not str(value).strip()


def validate_record(record: PersonalRecord) -> ValidationReport:
    """Report which required fields are absent or empty.

    Pure function of the record; safe to call any number of times.
    """
    identity = record.identity
    return ValidationReport(
        birth_date=is_blank(identity.birth_date),
        address=is_blank(identity.address),
        phone=is_blank(identity.phone),
        email=is_blank(identity.email),
        education=not record.education,
        work_history=not record.work_history,
    )

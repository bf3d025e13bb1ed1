"""Rirekisho (履歴書) layout engine.

Builds the two-page standardized form as plain data:

Page 1
    title, date line, identity grid with the photo cell, and the
    education/work history table padded to the form's line count.
Page 2
    licenses/certifications table padded to its own line count, the
    motivation block and the personal requests block.

Missing optional fields render as blank cells, never as omitted sections.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from rirekisho.documents.dates import format_birth_date, tokenize_period
from rirekisho.documents.imaging import PhotoFit
from rirekisho.documents.models import EducationEntry, PersonalRecord, WorkEntry
from rirekisho.documents.rows import Row, pad_rows
from rirekisho.documents.styles import DEFAULT_STYLE, DocumentStyle

logger = logging.getLogger(__name__)

TITLE = "履歴書"

# Identity grid labels
LABEL_KANA = "ふりがな"
LABEL_NAME = "氏名"
LABEL_BIRTH_DATE = "生年月日"
LABEL_GENDER = "性別"
LABEL_ADDRESS = "現住所"
LABEL_PHONE = "電話"
LABEL_EMAIL = "E-mail"

# Rows of the identity grid that sit beside the photo cell
PHOTO_SPAN_ROWS = 4
PHOTO_PLACEHOLDER = "写真"

# History table
HISTORY_COLUMN = "学歴・職歴"
EDUCATION_HEADING = "学歴"
WORK_HEADING = "職歴"
ENTERED = "入学"
GRADUATED = "卒業"
ENROLLED = "在学中"
JOINED = "入社"
LEFT = "退社"
STILL_EMPLOYED = "現在に至る"
CLOSING_MARKER = "以上"

# Page 2
CERTIFICATION_COLUMN = "免許・資格"
MOTIVATION_HEADING = "志望の動機・特技・アピールポイントなど"
REQUESTS_HEADING = "本人希望記入欄（特に給料・職種・勤務時間・勤務地・その他についての希望などがあれば記入）"

YEAR_COLUMN = "年"
MONTH_COLUMN = "月"


@dataclass(frozen=True)
class IdentityField:
    """One label/value line of the identity grid."""

    label: str
    value: str


@dataclass
class RirekishoLayout:
    """Everything the renderer needs to draw the Rirekisho."""

    title: str
    date_line: str
    identity: list[IdentityField]
    photo: PhotoFit | None
    history_rows: list[Row]
    certification_rows: list[Row]
    motivation: str
    personal_requests: str
    style: DocumentStyle = field(default=DEFAULT_STYLE)

    @property
    def photo_placeholder(self) -> str | None:
        return PHOTO_PLACEHOLDER if self.photo is None else None


def _join(*parts: str | None) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip())


def education_rows(entry: EducationEntry) -> list[Row]:
    """Entered/graduated pair for one school."""
    school = _join(entry.institution, entry.credential)
    rows = [Row.entry(_join(school, ENTERED), tokenize_period(entry.start_period))]
    if entry.is_ongoing:
        rows.append(Row.entry(_join(school, ENROLLED)))
    else:
        rows.append(
            Row.entry(_join(school, GRADUATED), tokenize_period(entry.end_period))
        )
    return rows


def work_rows(entry: WorkEntry) -> list[Row]:
    """Joined/left pair for one employer; ongoing employment ends with a marker."""
    rows = [
        Row.entry(
            _join(entry.organization, JOINED, entry.title),
            tokenize_period(entry.start_period),
        )
    ]
    if entry.is_ongoing:
        rows.append(Row.marker(STILL_EMPLOYED))
    else:
        rows.append(
            Row.entry(_join(entry.organization, LEFT), tokenize_period(entry.end_period))
        )
    return rows


def build_history_rows(record: PersonalRecord) -> list[Row]:
    """History table rows before padding, in display order."""
    rows: list[Row] = [Row.heading(EDUCATION_HEADING)]
    for entry in record.education:
        rows.extend(education_rows(entry))

    rows.append(Row.heading(WORK_HEADING))
    for entry in record.work_history:
        rows.extend(work_rows(entry))

    rows.append(Row.closing(CLOSING_MARKER))
    return rows


def build_certification_rows(record: PersonalRecord) -> list[Row]:
    """Certification rows before padding, followed by language rows."""
    rows = [Row.entry(cert.strip()) for cert in record.certifications if cert.strip()]
    for lang in record.languages:
        if not lang.language.strip():
            continue
        level = lang.proficiency_level.strip()
        rows.append(Row.entry(f"{lang.language}（{level}）" if level else lang.language))
    return rows


def build_identity(record: PersonalRecord) -> list[IdentityField]:
    """Identity grid lines; the first PHOTO_SPAN_ROWS sit beside the photo."""
    identity = record.identity
    return [
        IdentityField(LABEL_KANA, identity.full_name_kana),
        IdentityField(LABEL_NAME, identity.full_name),
        IdentityField(LABEL_BIRTH_DATE, format_birth_date(identity.birth_date)),
        IdentityField(LABEL_GENDER, (identity.gender or "").strip()),
        IdentityField(LABEL_ADDRESS, (identity.address or "").strip()),
        IdentityField(LABEL_PHONE, (identity.phone or "").strip()),
        IdentityField(LABEL_EMAIL, identity.email.strip()),
    ]


def build_rirekisho_layout(
    record: PersonalRecord,
    photo: PhotoFit | None = None,
    style: DocumentStyle = DEFAULT_STYLE,
    today: date | None = None,
) -> RirekishoLayout:
    """Build the Rirekisho layout for a record.

    Args:
        record: The personal record.
        photo: Fitted photo, or None to draw the placeholder glyph.
        style: Style configuration; supplies the padded row counts.
        today: Date printed on the form. Defaults to the current date.

    Returns:
        The complete two-page layout.
    """
    today = today or date.today()

    history = pad_rows(build_history_rows(record), style.history_min_rows)
    certifications = pad_rows(
        build_certification_rows(record), style.certification_min_rows
    )
    logger.debug(
        f"Rirekisho layout: {len(history)} history rows, "
        f"{len(certifications)} certification rows"
    )

    requests = (record.personal_requests or "").strip()
    return RirekishoLayout(
        title=TITLE,
        date_line=f"{today.year}年{today.month}月{today.day}日現在",
        identity=build_identity(record),
        photo=photo,
        history_rows=history,
        certification_rows=certifications,
        motivation=record.self_promotion.strip(),
        personal_requests=requests or style.personal_requests_default,
        style=style,
    )

"""Shokumu Keirekisho (職務経歴書) layout engine.

A free-form document whose length follows its content. Section order is
fixed: header, summary, work history, skills, self promotion, closing marker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from rirekisho.documents.dates import format_span
from rirekisho.documents.models import PersonalRecord, WorkEntry

TITLE = "職務経歴書"
NAME_PREFIX = "氏名　"

SUMMARY_HEADING = "■職務要約"
WORK_HEADING = "■職務経歴"
SKILLS_HEADING = "■スキル"
SELF_PROMOTION_HEADING = "■自己PR"

TITLE_PREFIX = "役職："
DUTIES_HEADING = "【業務内容】"
ACHIEVEMENTS_HEADING = "【実績】"
LANGUAGES_HEADING = "【語学】"
CLOSING_MARKER = "以上"

SECTION_ORDER = (SUMMARY_HEADING, WORK_HEADING, SKILLS_HEADING, SELF_PROMOTION_HEADING)


@dataclass(frozen=True)
class WorkBlock:
    """One employer in the work history section."""

    organization: str
    period: str
    title: str
    duties: str
    achievements: list[str] = field(default_factory=list)

    @property
    def has_achievements(self) -> bool:
        return bool(self.achievements)


@dataclass
class ShokumuLayout:
    """Everything the renderer needs to draw the Shokumu Keirekisho."""

    title: str
    date_line: str
    name_line: str
    summary: str
    work_blocks: list[WorkBlock]
    skills: list[str]
    languages: list[str]
    self_promotion: str
    closing: str = CLOSING_MARKER
    section_order: tuple[str, ...] = SECTION_ORDER


def build_work_block(entry: WorkEntry) -> WorkBlock:
    """Convert a work entry into its display block."""
    achievements = [a.strip() for a in entry.achievements if a and a.strip()]
    return WorkBlock(
        organization=entry.organization.strip(),
        period=format_span(entry.start_period, entry.end_period, entry.is_ongoing),
        title=entry.title.strip(),
        duties=entry.narrative.strip(),
        achievements=achievements,
    )


def build_shokumu_layout(
    record: PersonalRecord,
    today: date | None = None,
) -> ShokumuLayout:
    """Build the Shokumu Keirekisho layout for a record.

    Work entries keep their given order; skills keep order and duplicates.
    """
    today = today or date.today()

    languages = []
    for lang in record.languages:
        if not lang.language.strip():
            continue
        level = lang.proficiency_level.strip()
        languages.append(f"{lang.language}: {level}" if level else lang.language)

    return ShokumuLayout(
        title=TITLE,
        date_line=f"{today.year}年{today.month:02d}月{today.day:02d}日現在",
        name_line=f"{NAME_PREFIX}{record.identity.full_name}",
        summary=record.professional_summary.strip(),
        work_blocks=[build_work_block(entry) for entry in record.work_history],
        skills=[s.strip() for s in record.skills if s and s.strip()],
        languages=languages,
        self_promotion=record.self_promotion.strip(),
    )

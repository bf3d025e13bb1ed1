"""Unit tests for the Shokumu Keirekisho layout engine."""

from datetime import date

from rirekisho.documents.models import PersonalRecord, WorkEntry
from rirekisho.documents.shokumu import (
    SECTION_ORDER,
    build_shokumu_layout,
    build_work_block,
)


class TestBuildWorkBlock:
    def test_ongoing_block(self, sample_record):
        block = build_work_block(sample_record.work_history[0])

        assert block.organization == "Acme Corp"
        assert block.period == "2018年01月 〜 現在"
        assert block.achievements == ["処理時間を50%短縮", "新人研修を企画"]
        assert block.has_achievements

    def test_empty_achievements_are_omitted(self):
        block = build_work_block(
            WorkEntry(organization="Old Co", achievements=["", "  "])
        )

        assert block.achievements == []
        assert not block.has_achievements


class TestBuildShokumuLayout:
    """Tests for build_shokumu_layout."""

    def test_section_order(self, sample_record):
        layout = build_shokumu_layout(sample_record, today=date(2024, 4, 1))

        assert layout.section_order == SECTION_ORDER
        assert layout.section_order == ("■職務要約", "■職務経歴", "■スキル", "■自己PR")
        assert layout.closing == "以上"

    def test_header(self, sample_record):
        layout = build_shokumu_layout(sample_record, today=date(2024, 4, 1))

        assert layout.title == "職務経歴書"
        assert layout.date_line == "2024年04月01日現在"
        assert layout.name_line == "氏名　山田 太郎"

    def test_scenario_single_block(self, sample_record):
        layout = build_shokumu_layout(sample_record)

        assert len(layout.work_blocks) == 1
        assert len(layout.work_blocks[0].achievements) == 2
        assert layout.skills == ["Python", "SQL", "AWS"]

    def test_skills_keep_order_and_duplicates(self):
        record = PersonalRecord(skills=["Go", "Python", "Go"])

        assert build_shokumu_layout(record).skills == ["Go", "Python", "Go"]

    def test_languages(self, full_record):
        layout = build_shokumu_layout(full_record)

        assert layout.languages == ["英語: ビジネス"]

    def test_empty_record(self):
        layout = build_shokumu_layout(PersonalRecord())

        assert layout.work_blocks == []
        assert layout.summary == ""
        assert layout.name_line == "氏名　"

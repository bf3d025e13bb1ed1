"""End-to-end generation: record in, archive of two parsed documents out."""

import zipfile
from datetime import date
from io import BytesIO

import pytest
from docx import Document

from rirekisho.documents.archive import RIREKISHO_FILENAME, SHOKUMU_FILENAME
from rirekisho.documents.config import DocumentConfig
from rirekisho.documents.models import PersonalRecord
from rirekisho.documents.renderer import BULLET_STYLE
from rirekisho.documents.service import DocumentService


@pytest.fixture
def scenario_record() -> PersonalRecord:
    """One school, one ongoing employer with two achievements, three skills, no photo."""
    return PersonalRecord.from_dict(
        {
            "identity": {
                "givenName": "Taro",
                "familyName": "Yamada",
                "email": "taro@example.com",
            },
            "education": [
                {
                    "institution": "Sample University",
                    "startPeriod": "2010-04",
                    "endPeriod": "2014-03",
                }
            ],
            "workHistory": [
                {
                    "organization": "Acme Corp",
                    "startPeriod": "2018-01",
                    "isOngoing": True,
                    "narrative": "Backend development.",
                    "achievements": ["Cut latency by 40%", "Mentored two engineers"],
                }
            ],
            "skills": ["Python", "Go", "SQL"],
        }
    )


@pytest.mark.asyncio
async def test_scenario_archive(scenario_record):
    service = DocumentService(config=DocumentConfig(_env_file=None))

    result = await service.generate(scenario_record, today=date(2024, 4, 1))

    assert result.success is True
    assert result.validation.missing_fields() == ["birth_date", "address", "phone"]

    with zipfile.ZipFile(BytesIO(result.archive_bytes)) as archive:
        assert sorted(archive.namelist()) == sorted([RIREKISHO_FILENAME, SHOKUMU_FILENAME])
        rirekisho = Document(BytesIO(archive.read(RIREKISHO_FILENAME)))
        shokumu = Document(BytesIO(archive.read(SHOKUMU_FILENAME)))

    # Page 1 history table: header + 15 rows, 4 of them with entry text
    history = rirekisho.tables[1]
    assert len(history.rows) == 16
    entry_texts = [
        row.cells[2].text
        for row in history.rows[1:]
        if row.cells[2].text not in ("", "学歴", "職歴", "以上")
    ]
    assert entry_texts == [
        "Sample University 入学",
        "Sample University 卒業",
        "Acme Corp 入社",
        "現在に至る",
    ]

    texts = [p.text for p in shokumu.paragraphs]
    start, end = texts.index("■職務経歴"), texts.index("■スキル")
    work_section = shokumu.paragraphs[start:end]
    assert sum(1 for p in work_section if p.text.startswith("Acme Corp")) == 1
    assert [p.text for p in work_section if p.style.name == BULLET_STYLE] == [
        "Cut latency by 40%",
        "Mentored two engineers",
    ]

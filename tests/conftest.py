"""Pytest configuration and shared fixtures."""

import pytest

from rirekisho.documents.models import (
    EducationEntry,
    Identity,
    LanguageSkill,
    PersonalRecord,
    WorkEntry,
)
from tests.helpers import make_png, to_data_url


@pytest.fixture
def png_data_url() -> str:
    """Portrait 400x600 PNG as a data URL."""
    return to_data_url(make_png(400, 600))


@pytest.fixture
def sample_identity() -> Identity:
    """Identity with every contact field filled in."""
    return Identity(
        given_name="太郎",
        family_name="山田",
        given_name_kana="たろう",
        family_name_kana="やまだ",
        email="taro@example.com",
        phone="090-1234-5678",
        address="東京都千代田区1-1",
        birth_date="1990-01-01",
        gender="男",
    )


@pytest.fixture
def sample_record(sample_identity) -> PersonalRecord:
    """One school, one ongoing employer with two achievements, three skills."""
    return PersonalRecord(
        identity=sample_identity,
        education=[
            EducationEntry(
                institution="Sample University",
                credential="工学部",
                start_period="2010-04",
                end_period="2014-03",
            )
        ],
        work_history=[
            WorkEntry(
                organization="Acme Corp",
                title="エンジニア",
                start_period="2018-01",
                is_ongoing=True,
                narrative="社内システムの開発を担当。",
                achievements=["処理時間を50%短縮", "新人研修を企画"],
            )
        ],
        skills=["Python", "SQL", "AWS"],
        professional_summary="Web システム開発に従事してきました。",
        self_promotion="粘り強く課題に取り組みます。",
    )


@pytest.fixture
def full_record(sample_record) -> PersonalRecord:
    """Sample record plus certifications and languages."""
    return sample_record.model_copy(
        update={
            "certifications": ["基本情報技術者", "TOEIC 900点"],
            "languages": [
                LanguageSkill(language="英語", proficiency_level="ビジネス"),
            ],
            "personal_requests": "勤務地は東京を希望します。",
        }
    )

"""Unit tests for the personal record models."""

import pytest
from pydantic import ValidationError

from rirekisho.documents.models import Identity, PersonalRecord, ValidationReport


class TestPersonalRecord:
    """Tests for PersonalRecord parsing."""

    def test_accepts_camel_case_payload(self):
        """The generative service's camelCase JSON validates as-is."""
        record = PersonalRecord.from_dict(
            {
                "identity": {
                    "givenName": "Taro",
                    "familyName": "Yamada",
                    "givenNameKana": "タロウ",
                    "birthDate": "1990-01-01",
                    "email": "t@example.com",
                },
                "workHistory": [
                    {
                        "organization": "Acme Corp",
                        "startPeriod": "2018-01",
                        "isOngoing": True,
                        "achievements": ["a", "b"],
                    }
                ],
                "languages": [{"language": "英語", "proficiencyLevel": "Native"}],
                "professionalSummary": "summary",
                "selfPromotion": "promo",
            }
        )

        assert record.identity.given_name == "Taro"
        assert record.work_history[0].is_ongoing is True
        assert record.languages[0].proficiency_level == "Native"
        assert record.professional_summary == "summary"

    def test_accepts_snake_case(self):
        record = PersonalRecord(identity=Identity(given_name="Taro", family_name="Yamada"))

        assert record.identity.full_name == "Yamada Taro"

    def test_defaults(self):
        record = PersonalRecord()

        assert record.education == []
        assert record.work_history == []
        assert record.personal_requests is None
        assert record.identity.email == ""

    def test_entries_require_names(self):
        with pytest.raises(ValidationError):
            PersonalRecord.from_dict({"education": [{"startPeriod": "2010-04"}]})

    def test_frozen(self):
        record = PersonalRecord()

        with pytest.raises(ValidationError):
            record.skills = ["x"]

    def test_unknown_keys_are_ignored(self):
        record = PersonalRecord.from_dict({"skills": ["Go"], "extraneous": 1})

        assert record.skills == ["Go"]

    def test_nulls_fall_back_to_defaults(self):
        """Explicit nulls from the generative service read as absent values."""
        record = PersonalRecord.from_dict(
            {
                "identity": {"givenName": "Taro", "email": None},
                "education": None,
                "workHistory": [
                    {
                        "organization": "Acme Corp",
                        "title": None,
                        "narrative": None,
                        "achievements": None,
                    }
                ],
            }
        )

        assert record.identity.email == ""
        assert record.education == []
        work = record.work_history[0]
        assert (work.title, work.narrative, work.achievements) == ("", "", [])

    def test_to_dict(self, sample_record):
        data = sample_record.to_dict()

        assert data["identity"]["family_name"] == "山田"
        assert data["work_history"][0]["achievements"] == ["処理時間を50%短縮", "新人研修を企画"]


class TestIdentity:
    def test_full_name_kana_skips_missing_parts(self):
        identity = Identity(family_name_kana="やまだ")

        assert identity.full_name_kana == "やまだ"

    def test_full_name_empty(self):
        assert Identity().full_name == ""


class TestValidationReport:
    def test_missing_fields(self):
        report = ValidationReport(phone=True, education=True)

        assert report.has_missing
        assert report.missing_fields() == ["phone", "education"]

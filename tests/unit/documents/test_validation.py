"""Unit tests for the field-presence validator."""

import pytest

from rirekisho.documents.models import Identity, PersonalRecord
from rirekisho.documents.validation import is_blank, validate_record


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_values(self, value):
        assert is_blank(value) is True

    def test_non_blank(self):
        assert is_blank(" a ") is False


class TestValidateRecord:
    """Tests for validate_record."""

    def test_complete_record_has_no_missing_fields(self, sample_record):
        report = validate_record(sample_record)

        assert report.has_missing is False
        assert report.missing_fields() == []

    def test_empty_record_reports_everything(self):
        report = validate_record(PersonalRecord())

        assert report.missing_fields() == [
            "birth_date",
            "address",
            "phone",
            "email",
            "education",
            "work_history",
        ]

    def test_whitespace_counts_as_missing(self, sample_record):
        """Whitespace-only strings are treated the same as absent values."""
        identity = sample_record.identity.model_copy(
            update={"phone": "   ", "address": "\n", "email": " "}
        )
        record = sample_record.model_copy(update={"identity": identity})

        report = validate_record(record)

        assert report.phone is True
        assert report.address is True
        assert report.email is True
        assert report.birth_date is False

    def test_empty_sequences_are_missing(self):
        record = PersonalRecord(
            identity=Identity(
                email="a@example.com",
                phone="1",
                address="x",
                birth_date="2000-01-01",
            )
        )

        report = validate_record(record)

        assert report.education is True
        assert report.work_history is True
        assert report.missing_fields() == ["education", "work_history"]

    def test_idempotent(self, sample_record):
        assert validate_record(sample_record) == validate_record(sample_record)

    def test_null_email_counts_as_missing(self):
        record = PersonalRecord.from_dict({"identity": {"givenName": "Taro", "email": None}})

        report = validate_record(record)

        assert report.email is True
        assert report.phone is True

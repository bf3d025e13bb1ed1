"""Unit tests for the ProfileGenerationService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rirekisho.documents.models import Identity, PersonalRecord
from rirekisho.generation.config import GenerationConfig
from rirekisho.generation.llm import LLMError
from rirekisho.generation.models import GenerationMode, GenerationRequest, IdentityOverrides
from rirekisho.generation.prompts import PROFILE_SYSTEM_PROMPT
from rirekisho.generation.service import ProfileGenerationService, apply_identity_overrides


@pytest.fixture
def config():
    return GenerationConfig(_env_file=None, use_mock=False)


@pytest.fixture
def generated_record():
    return PersonalRecord(
        identity=Identity(given_name="Taro", family_name="Yamada", email="llm@example.com"),
        skills=["Python"],
    )


@pytest.fixture
def mock_llm(generated_record):
    llm = MagicMock()
    llm.generate_structured = AsyncMock(return_value=generated_record)
    return llm


class TestChooseMode:
    def test_uses_free_text_and_draft(self, config):
        service = ProfileGenerationService(config=config, llm=MagicMock())
        draft = PersonalRecord(professional_summary="Web システムの開発を担当してきました。")

        assert service.choose_mode(GenerationRequest(structured_draft=draft)) is GenerationMode.REFINE
        assert (
            service.choose_mode(GenerationRequest(free_text="Backend engineer"))
            is GenerationMode.TRANSLATE
        )


class TestGenerate:
    """Tests for ProfileGenerationService.generate."""

    @pytest.mark.asyncio
    async def test_calls_llm_with_record_schema(self, config, mock_llm, generated_record):
        service = ProfileGenerationService(config=config, llm=mock_llm)

        record = await service.generate(GenerationRequest(free_text="Backend engineer"))

        assert record == generated_record
        kwargs = mock_llm.generate_structured.await_args.kwargs
        assert kwargs["output_model"] is PersonalRecord
        assert kwargs["system_prompt"] == PROFILE_SYSTEM_PROMPT
        assert "Backend engineer" in kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_applicant_identity_wins(self, config, mock_llm):
        service = ProfileGenerationService(config=config, llm=mock_llm)
        request = GenerationRequest(
            identity=IdentityOverrides(email="me@example.com", photo="data:image/png;base64,AAAA"),
            free_text="Backend engineer",
        )

        record = await service.generate(request)

        assert record.identity.email == "me@example.com"
        assert record.identity.photo == "data:image/png;base64,AAAA"
        assert record.identity.given_name == "Taro"

    @pytest.mark.asyncio
    async def test_llm_errors_propagate(self, config):
        llm = MagicMock()
        llm.generate_structured = AsyncMock(side_effect=LLMError("down"))
        service = ProfileGenerationService(config=config, llm=llm)

        with pytest.raises(LLMError):
            await service.generate(GenerationRequest(free_text="x"))

    @pytest.mark.asyncio
    async def test_mock_mode_skips_llm(self, mock_llm):
        service = ProfileGenerationService(
            config=GenerationConfig(_env_file=None, use_mock=True), llm=mock_llm
        )

        record = await service.generate(
            GenerationRequest(identity=IdentityOverrides(family_name="佐藤"))
        )

        mock_llm.generate_structured.assert_not_awaited()
        assert record.identity.family_name == "佐藤"
        assert record.work_history[0].is_ongoing is True
        assert len(record.education) == 1


class TestApplyIdentityOverrides:
    def test_blank_overrides_are_ignored(self, generated_record):
        request = GenerationRequest(identity=IdentityOverrides(email="  ", phone=None))

        assert apply_identity_overrides(generated_record, request) is generated_record

    def test_other_fields_untouched(self, generated_record):
        request = GenerationRequest(identity=IdentityOverrides(phone="03-0000-0000"))

        record = apply_identity_overrides(generated_record, request)

        assert record.identity.phone == "03-0000-0000"
        assert record.skills == ["Python"]

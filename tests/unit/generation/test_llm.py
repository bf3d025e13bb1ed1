"""Unit tests for the LLM client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from rirekisho.documents.models import PersonalRecord
from rirekisho.generation.config import GenerationConfig
from rirekisho.generation.llm import LLMError, ProfileLLM, extract_json


def _response(content=None, tool_arguments=None):
    tool_calls = None
    if tool_arguments is not None:
        tool_calls = [SimpleNamespace(function=SimpleNamespace(arguments=tool_arguments))]
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def config():
    return GenerationConfig(_env_file=None, llm_api_key=None, llm_base_url=None, llm_max_retries=1)


class TestExtractJson:
    def test_plain_object(self):
        assert extract_json('{"a": 1}') == '{"a": 1}'

    def test_fenced(self):
        assert extract_json('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_leading_prose(self):
        assert extract_json('Here you go: {"a": {"b": 2}} thanks') == '{"a": {"b": 2}}'


class TestModelName:
    def test_openai_default(self, config):
        assert ProfileLLM(config).model_name() == "gpt-4o"

    def test_anthropic_prefix(self):
        config = GenerationConfig(_env_file=None, llm_provider="anthropic", llm_model="claude-x")

        assert ProfileLLM(config).model_name() == "anthropic/claude-x"

    def test_custom_endpoint_is_openai_compatible(self):
        config = GenerationConfig(
            _env_file=None, llm_provider="local", llm_model="m", llm_base_url="http://x"
        )

        assert ProfileLLM(config).model_name() == "openai/m"


class TestGenerateStructured:
    """Tests for ProfileLLM.generate_structured."""

    @pytest.mark.asyncio
    async def test_parses_content(self, config):
        llm = ProfileLLM(config)
        payload = '{"skills": ["Python"], "identity": {"familyName": "山田"}}'

        with patch.object(llm, "_call_completion", AsyncMock(return_value=_response(payload))):
            record = await llm.generate_structured("prompt", PersonalRecord, "system")

        assert record.skills == ["Python"]
        assert record.identity.family_name == "山田"

    @pytest.mark.asyncio
    async def test_tool_call_fallback(self, config):
        llm = ProfileLLM(config)
        response = _response(content=None, tool_arguments='{"skills": ["Go"]}')

        with patch.object(llm, "_call_completion", AsyncMock(return_value=response)):
            record = await llm.generate_structured("prompt", PersonalRecord)

        assert record.skills == ["Go"]

    @pytest.mark.asyncio
    async def test_invalid_output_is_not_retried(self, config):
        llm = ProfileLLM(config)
        call = AsyncMock(return_value=_response('{"workHistory": [{"title": "x"}]}'))

        with patch.object(llm, "_call_completion", call):
            with pytest.raises(LLMError, match="validation"):
                await llm.generate_structured("prompt", PersonalRecord)

        assert call.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_content(self, config):
        llm = ProfileLLM(config)

        with patch.object(llm, "_call_completion", AsyncMock(return_value=_response(""))):
            with pytest.raises(LLMError, match="no content"):
                await llm.generate_structured("prompt", PersonalRecord)

    @pytest.mark.asyncio
    async def test_retries_then_fails(self, config):
        llm = ProfileLLM(config)
        call = AsyncMock(side_effect=RuntimeError("connection reset"))

        with patch.object(llm, "_call_completion", call), patch(
            "rirekisho.generation.llm.asyncio.sleep", AsyncMock()
        ):
            with pytest.raises(LLMError, match="after retries"):
                await llm.generate_structured("prompt", PersonalRecord)

        assert call.await_count == 2

    @pytest.mark.asyncio
    async def test_call_completion_passes_settings(self):
        config = GenerationConfig(
            _env_file=None,
            llm_api_key="sk-test",
            llm_base_url="http://localhost:8000/v1",
            llm_reasoning_effort="Low",
            llm_timeout=30,
        )
        llm = ProfileLLM(config)

        with patch(
            "rirekisho.generation.llm.acompletion", AsyncMock(return_value="ok")
        ) as completion:
            await llm._call_completion([{"role": "user", "content": "hi"}], PersonalRecord)

        kwargs = completion.await_args.kwargs
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["base_url"] == "http://localhost:8000/v1"
        assert kwargs["reasoning_effort"] == "low"
        assert kwargs["timeout"] == 30
        assert kwargs["response_format"] is PersonalRecord

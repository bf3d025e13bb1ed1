"""LLM client for profile generation.

Wraps LiteLLM with structured (Pydantic) output, linear-backoff retries and a
single error type.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TypeVar

from litellm import Timeout, acompletion
from pydantic import BaseModel, ValidationError

from rirekisho.generation.config import GenerationConfig, get_generation_config

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class LLMError(Exception):
    """Exception raised when LLM operations fail."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class ProfileLLM:
    """LLM client that returns validated Pydantic models."""

    def __init__(self, config: GenerationConfig | None = None):
        """Initialize the LLM client.

        Args:
            config: Optional GenerationConfig. Uses global config if not provided.
        """
        self.config = config or get_generation_config()
        self._setup_provider_env()

    def _setup_provider_env(self) -> None:
        """Export the Anthropic base URL, which LiteLLM only reads from env."""
        if self.config.llm_base_url and self.config.llm_provider == "anthropic":
            # The Anthropic SDK appends /v1 itself
            base_url = self.config.llm_base_url.rstrip("/").removesuffix("/v1")
            os.environ["ANTHROPIC_BASE_URL"] = base_url
            if self.config.llm_api_key:
                os.environ["ANTHROPIC_API_KEY"] = self.config.llm_api_key

    def model_name(self) -> str:
        """Model identifier with the provider prefix LiteLLM expects."""
        model = self.config.llm_model
        provider = self.config.llm_provider

        if "/" in model:
            return model
        if provider == "anthropic":
            return f"anthropic/{model}"
        # Custom endpoints are treated as OpenAI-compatible
        if self.config.llm_base_url:
            return f"openai/{model}"
        if provider == "openai":
            return model
        return f"{provider}/{model}"

    async def generate_structured(
        self,
        prompt: str,
        output_model: type[T],
        system_prompt: str | None = None,
    ) -> T:
        """Generate output matching a Pydantic model.

        Args:
            prompt: The user prompt to send to the LLM.
            output_model: Pydantic model class defining the expected output.
            system_prompt: Optional system prompt.

        Returns:
            Parsed model instance.

        Raises:
            LLMError: If the call fails after retries or the response does
                not validate.
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        attempts = self.config.llm_max_retries + 1
        for attempt in range(attempts):
            try:
                response = await self._call_completion(messages, output_model)
                return self._parse_response(response, output_model)

            except LLMError:
                # Validation failures are not retried
                raise

            except Timeout as e:
                raise LLMError(
                    f"LLM request timed out after {self.config.llm_timeout}s. "
                    "Increase `GENERATION_LLM_TIMEOUT` or use a faster model.",
                    e,
                ) from e

            except Exception as e:
                if attempt + 1 >= attempts:
                    raise LLMError(f"LLM call failed after retries: {e}", e) from e

                is_rate_limit = "rate_limit" in str(e).lower() or "429" in str(e)
                wait_time = (8 if is_rate_limit else 2) * (attempt + 1)
                logger.warning(
                    f"LLM call failed (attempt {attempt + 1}), retrying in {wait_time}s: {e}"
                )
                await asyncio.sleep(wait_time)

        raise LLMError("LLM call was not attempted")

    async def _call_completion(
        self,
        messages: list[dict],
        response_format: type[BaseModel] | None = None,
    ):
        kwargs = {
            "model": self.model_name(),
            "messages": messages,
            "timeout": self.config.llm_timeout,
        }

        effort = (self.config.llm_reasoning_effort or "").strip().lower()
        if effort:
            kwargs["reasoning_effort"] = effort

        if self.config.llm_api_key:
            kwargs["api_key"] = self.config.llm_api_key

        # Anthropic reads its base URL from the environment
        if self.config.llm_base_url and self.config.llm_provider != "anthropic":
            kwargs["base_url"] = self.config.llm_base_url

        if response_format is not None:
            kwargs["response_format"] = response_format

        return await acompletion(**kwargs)

    def _parse_response(self, response, output_model: type[T]) -> T:
        message = response.choices[0].message
        content = getattr(message, "content", None)

        # Some providers return structured output as tool call arguments
        if not content:
            tool_calls = getattr(message, "tool_calls", None) or []
            if tool_calls:
                content = getattr(tool_calls[0].function, "arguments", None)

        if not content:
            raise LLMError("LLM returned no content to parse.")

        try:
            return output_model.model_validate_json(extract_json(content))
        except ValidationError as e:
            raise LLMError(f"Failed to parse LLM response - validation error: {e}", e) from e


def extract_json(content: str) -> str:
    """Strip markdown fences and leading prose around a JSON object."""
    content = content.strip()

    if content.startswith("```"):
        first_newline = content.find("\n")
        if first_newline != -1:
            content = content[first_newline + 1 :]
        content = content.removesuffix("```").strip()

    if content.startswith("{"):
        return content

    start = content.find("{")
    if start == -1:
        return content

    depth = 0
    for index in range(start, len(content)):
        if content[index] == "{":
            depth += 1
        elif content[index] == "}":
            depth -= 1
            if depth == 0:
                return content[start : index + 1]
    return content

"""Profile generation: applicant input to PersonalRecord via an LLM.

Main Entry Point:
    ProfileGenerationService - picks translate/refine mode and calls the LLM

Example:
    from rirekisho.generation import GenerationRequest, ProfileGenerationService

    service = ProfileGenerationService()
    record = await service.generate(GenerationRequest(free_text=resume_text))
"""

from rirekisho.generation.config import GenerationConfig, get_generation_config
from rirekisho.generation.language import detect_mode, japanese_ratio
from rirekisho.generation.llm import LLMError, ProfileLLM
from rirekisho.generation.mock import MockProfileGenerator
from rirekisho.generation.models import (
    GenerationMode,
    GenerationRequest,
    IdentityOverrides,
)
from rirekisho.generation.service import ProfileGenerationService

__all__ = [
    "ProfileGenerationService",
    "MockProfileGenerator",
    "ProfileLLM",
    "LLMError",
    "GenerationConfig",
    "get_generation_config",
    "GenerationMode",
    "GenerationRequest",
    "IdentityOverrides",
    "detect_mode",
    "japanese_ratio",
]

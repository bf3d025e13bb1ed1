"""Profile generation service.

Turns identity fields plus free text and/or a structured draft into a
PersonalRecord ready for document generation.
"""

from __future__ import annotations

import logging

from rirekisho.documents.models import PersonalRecord
from rirekisho.generation.config import GenerationConfig, get_generation_config
from rirekisho.generation.language import detect_mode
from rirekisho.generation.llm import ProfileLLM
from rirekisho.generation.mock import MockProfileGenerator
from rirekisho.generation.models import GenerationMode, GenerationRequest
from rirekisho.generation.prompts import PROFILE_SYSTEM_PROMPT, build_profile_prompt

logger = logging.getLogger(__name__)


class ProfileGenerationService:
    """Service for producing a PersonalRecord with an LLM.

    The LLM output is validated against PersonalRecord; identity fields the
    applicant supplied always replace the generated ones.
    """

    def __init__(
        self,
        config: GenerationConfig | None = None,
        llm: ProfileLLM | None = None,
    ):
        """Initialize the generation service.

        Args:
            config: Optional GenerationConfig. Uses global config if not provided.
            llm: Optional LLM client (injected in tests).
        """
        self.config = config or get_generation_config()
        self._llm = llm

    @property
    def llm(self) -> ProfileLLM:
        if self._llm is None:
            self._llm = ProfileLLM(config=self.config)
        return self._llm

    def choose_mode(self, request: GenerationRequest) -> GenerationMode:
        """Translate non-Japanese input, refine Japanese input."""
        return detect_mode(request.source_text(), self.config.japanese_ratio_threshold)

    async def generate(self, request: GenerationRequest) -> PersonalRecord:
        """Generate a personal record.

        Raises:
            LLMError: If the LLM call fails or returns an invalid record.
        """
        if self.config.use_mock:
            record = await MockProfileGenerator().generate(request)
            return apply_identity_overrides(record, request)

        mode = self.choose_mode(request)
        logger.info(f"Generating personal record ({mode.value} mode)")

        prompt = build_profile_prompt(request, mode)
        record = await self.llm.generate_structured(
            prompt=prompt,
            output_model=PersonalRecord,
            system_prompt=PROFILE_SYSTEM_PROMPT,
        )

        logger.info(
            f"Generated record with {len(record.education)} education and "
            f"{len(record.work_history)} work entries"
        )
        return apply_identity_overrides(record, request)


def apply_identity_overrides(
    record: PersonalRecord, request: GenerationRequest
) -> PersonalRecord:
    """Return a copy of ``record`` with the applicant's identity fields applied."""
    overrides = {
        name: value
        for name, value in request.identity.model_dump().items()
        if value is not None and str(value).strip()
    }
    if not overrides:
        return record

    identity = record.identity.model_copy(update=overrides)
    return record.model_copy(update={"identity": identity})

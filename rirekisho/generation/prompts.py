"""Prompt builders for LLM-based profile generation."""

from __future__ import annotations

import json

from rirekisho.generation.models import GenerationMode, GenerationRequest

PROFILE_SYSTEM_PROMPT = """You are an assistant that prepares Japanese job-application documents (履歴書 and 職務経歴書).

You must follow these rules:
- Be truthful. Do NOT invent employers, schools, dates, certifications or achievements.
- Periods are "YYYY-MM" strings. Leave a period empty when the source does not state it.
- Set isOngoing to true only when the source says the person is still studying or employed there.
- Write all prose fields in natural, polite Japanese business style (です・ます調).
- Output MUST be valid JSON only (no markdown), matching the required schema.
"""

MODE_INSTRUCTIONS = {
    GenerationMode.TRANSLATE: [
        "The source material is not written in Japanese.",
        "Translate it into Japanese. Keep proper nouns (company, school and product names) in their original spelling.",
        "Provide katakana readings for the applicant's name in familyNameKana/givenNameKana.",
    ],
    GenerationMode.REFINE: [
        "The source material is already written in Japanese.",
        "Refine the wording for a job application without changing any facts.",
        "Provide furigana (hiragana) readings for the applicant's name in familyNameKana/givenNameKana.",
    ],
}


def build_profile_prompt(request: GenerationRequest, mode: GenerationMode) -> str:
    """Build the user prompt for structured profile generation."""
    lines = [
        "Produce a complete PersonalRecord for the applicant.",
        "",
        *MODE_INSTRUCTIONS[mode],
        "",
        "Field guidance:",
        "- professionalSummary: 3-5 sentences summarising the career (職務要約).",
        "- selfPromotion: one paragraph on strengths and motivation (自己PR).",
        "- workHistory[].narrative: duties in the role; achievements: one concrete result per item.",
        "- skills: short skill names, most relevant first.",
        "- languages: language plus proficiencyLevel (Native, Business, Conversational, ...).",
    ]

    identity = request.identity.model_dump(mode="json", exclude_none=True, by_alias=True)
    identity.pop("photo", None)
    if identity:
        lines += ["", "Applicant identity (authoritative, copy as given):", json.dumps(identity, ensure_ascii=False)]

    if request.structured_draft is not None:
        draft = request.structured_draft.model_dump(mode="json", by_alias=True)
        draft.get("identity", {}).pop("photo", None)
        lines += ["", "Existing draft record (JSON):", json.dumps(draft, ensure_ascii=False)]

    if request.free_text:
        lines += ["", "Source material:", request.free_text.strip()]

    if request.job_description:
        lines += [
            "",
            "Target job description (emphasise relevant experience, do not add new facts):",
            request.job_description.strip(),
        ]

    return "\n".join(lines)

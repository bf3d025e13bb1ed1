"""Deterministic stand-in for the LLM, used for demos and offline runs."""

from __future__ import annotations

import logging

from rirekisho.documents.models import (
    EducationEntry,
    Identity,
    LanguageSkill,
    PersonalRecord,
    WorkEntry,
)
from rirekisho.generation.models import GenerationRequest

logger = logging.getLogger(__name__)


class MockProfileGenerator:
    """Returns a fixed sample record, keeping the applicant's own identity fields."""

    async def generate(self, request: GenerationRequest) -> PersonalRecord:
        logger.info("Using mock profile generator")
        overrides = request.identity

        identity = Identity(
            given_name=overrides.given_name or "Taro",
            family_name=overrides.family_name or "Yamada",
            given_name_kana="タロウ",
            family_name_kana="ヤマダ",
            email=overrides.email or "taro.yamada@example.com",
            phone=overrides.phone or "090-1234-5678",
            address=overrides.address or "東京都千代田区",
            birth_date=overrides.birth_date or "1990-01-01",
            gender=overrides.gender,
            photo=overrides.photo,
        )

        return PersonalRecord(
            identity=identity,
            education=[
                EducationEntry(
                    institution="Indian Institute of Technology (IIT), Delhi",
                    credential="Bachelor of Technology in Computer Science",
                    start_period="2010-08",
                    end_period="2014-06",
                )
            ],
            work_history=[
                WorkEntry(
                    organization="Tech Solutions Inc.",
                    title="シニアソフトウェアエンジニア",
                    start_period="2018-01",
                    is_ongoing=True,
                    narrative="React と Node.js を用いたクラウド型 CRM システムの開発を、5名のチームを率いて担当。",
                    achievements=[
                        "コード最適化によりシステム性能を30%向上。",
                        "若手開発者へのアジャイル開発の指導。",
                    ],
                ),
                WorkEntry(
                    organization="StartUp Hub",
                    title="ソフトウェアデベロッパー",
                    start_period="2014-07",
                    end_period="2017-12",
                    narrative="EC 事業者向けレスポンシブ Web アプリケーションの開発。",
                ),
            ],
            skills=["JavaScript/TypeScript", "React", "Node.js", "AWS", "Python"],
            certifications=["AWS Certified Solutions Architect"],
            languages=[
                LanguageSkill(language="英語", proficiency_level="ネイティブ"),
                LanguageSkill(language="日本語", proficiency_level="日常会話（N4）"),
            ],
            professional_summary=(
                "フルスタック Web 開発に8年以上携わってきたソフトウェアエンジニアです。"
                "スケーラブルなシステムの構築とチームの牽引に実績があります。"
            ),
            self_promotion=(
                "課題に主体的に取り組み、異なる文化背景を持つメンバーとの協働を得意としています。"
                "これまでの技術力を活かし、貴社の事業に貢献したいと考えております。"
            ),
        )

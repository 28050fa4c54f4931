import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from .classifier import classify
from .core.config import EngineSettings, engine_settings
from .couple import build_couple
from .definitions import get_question_bank
from .errors import ValidationError
from .loader import load_content_tables
from .models import ContentTables, CoupleResult, IndividualResult, QuestionBank
from .results_generator import aggregate
from .scorer import parse_answers, score
from .validator import validate

logger = logging.getLogger(__name__)

Timestamp = Union[datetime, str, None]


class DatingDNAEngine:
    """
    Turns questionnaire answers into validated individual and couple results.

    Building a result and validating it happen together: every public method
    either returns a result that satisfies all section contracts or raises.
    """
    def __init__(self, settings: Optional[EngineSettings] = None, tables: Optional[ContentTables] = None):
        """
        Args:
            settings: Engine settings; defaults to the environment-driven ``engine_settings``.
            tables: Pre-loaded content tables; defaults to the file named by ``settings.content_path``.
        """
        self.settings = settings or engine_settings
        self.tables = tables or load_content_tables(self.settings.content_path)

    def _bank(self, bank_id: Optional[str]) -> QuestionBank:
        return get_question_bank(bank_id or self.settings.default_question_bank)

    @staticmethod
    def _timestamp(completed_at: Timestamp) -> str:
        if completed_at is None:
            return datetime.now(timezone.utc).isoformat()
        if isinstance(completed_at, datetime):
            return completed_at.isoformat()
        return completed_at

    @staticmethod
    def _validate(result: Union[IndividualResult, CoupleResult]) -> None:
        try:
            validate(result)
        except ValidationError as e:
            logger.error("Generated result failed validation", extra={"validation_error": e.to_dict()})
            raise

    def assess(self, answers: Mapping[str, Any], bank_id: Optional[str] = None,
               completed_at: Timestamp = None) -> IndividualResult:
        """Scores, classifies and builds a validated individual result."""
        bank = self._bank(bank_id)
        parsed = parse_answers(
            answers, bank,
            strict=self.settings.strict_input,
            require_complete=self.settings.require_complete,
        )
        scores = score(parsed, bank)
        profile = classify(scores)
        bundle = aggregate(profile.type_code, scores, self.tables)

        result = IndividualResult(
            question_bank=bank.id,
            type_code=profile.type_code,
            type_name=profile.type_name,
            scores=scores,
            completed_at=self._timestamp(completed_at),
            relationship_approach=bundle.relationship_approach,
            strengths=bundle.strengths,
            growth_opportunities=bundle.growth_opportunities,
            quick_wins=bundle.quick_wins,
            plan_30_day=bundle.plan_30_day,
            narrative=bundle.narrative,
            supporting_content=bundle.supporting_content,
        )
        self._validate(result)
        logger.info(
            "Individual assessment complete",
            extra={"type_code": result.type_code, "question_bank": bank.id, "answered": len(parsed)},
        )
        return result

    def combine(self, result_a: IndividualResult, result_b: IndividualResult) -> CoupleResult:
        """Builds and validates the couple result for two existing individual results."""
        couple = build_couple(result_a, result_b, self.tables)
        self._validate(couple)
        logger.info(
            "Couple profile complete",
            extra={
                "partner_a": result_a.type_code,
                "partner_b": result_b.type_code,
                "mismatches": couple.joint_profile.compatibility.mismatches,
            },
        )
        return couple

    def assess_couple(self, answers_a: Mapping[str, Any], answers_b: Mapping[str, Any],
                      bank_id: Optional[str] = None, completed_at: Timestamp = None) -> CoupleResult:
        """Assesses both partners with the same bank and combines them."""
        result_a = self.assess(answers_a, bank_id, completed_at)
        result_b = self.assess(answers_b, bank_id, completed_at)
        return self.combine(result_a, result_b)

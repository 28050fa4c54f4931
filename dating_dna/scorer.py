# dating_dna/scorer.py
# Turns raw questionnaire answers into normalized dimension scores.

import logging
from typing import Any, Dict, Mapping, Optional, Union

from .definitions import DIMENSION_ORDER, LIKERT_MIDPOINT
from .errors import IncompleteAssessmentError, InputError
from .models import (
    Dimension,
    ForcedAnswer,
    ForcedChoiceQuestion,
    LikertAnswer,
    LikertQuestion,
    QuestionBank,
    Scores,
)

logger = logging.getLogger(__name__)

# --- Constants ---

FORCED_WEIGHT = 1  # "A" -> +1, "B" -> -1
LIKERT_MAX_DEVIATION = 3  # |value - midpoint| on a 1..7 scale

AnswerValue = Union[ForcedAnswer, LikertAnswer]


# --- Answer parsing ---

def _parse_single(question: Union[ForcedChoiceQuestion, LikertQuestion], raw_value: Any) -> AnswerValue:
    if isinstance(question, ForcedChoiceQuestion):
        if raw_value not in ("A", "B"):
            raise InputError(
                f"Question '{question.id}' is forced-choice and expects 'A' or 'B', got {raw_value!r}"
            )
        return ForcedAnswer(choice=raw_value)

    # bool is an int subclass; True must not pass as a Likert 1
    if isinstance(raw_value, bool) or not isinstance(raw_value, int):
        raise InputError(f"Question '{question.id}' is Likert and expects an integer 1-7, got {raw_value!r}")
    if not 1 <= raw_value <= 7:
        raise InputError(f"Question '{question.id}' Likert value {raw_value} is outside 1-7")
    return LikertAnswer(value=raw_value)


def parse_answers(
    raw_answers: Optional[Mapping[str, Any]],
    bank: QuestionBank,
    strict: bool = True,
    require_complete: bool = False,
) -> Dict[str, AnswerValue]:
    """
    Converts a raw ``{question_id: "A" | "B" | 1..7}`` mapping into typed answers.

    In strict mode an unknown question id or an out-of-domain value raises
    InputError. In lenient mode the offending entry is dropped with a warning
    and contributes nothing to the score.

    Missing answers are allowed (they score as the neutral midpoint) unless
    ``require_complete`` is set, in which case IncompleteAssessmentError lists them.
    """
    if raw_answers is None:
        raw_answers = {}
    if not isinstance(raw_answers, Mapping):
        raise InputError(f"Answers must be a mapping of question id to answer, got {type(raw_answers).__name__}")

    parsed: Dict[str, AnswerValue] = {}
    for question_id, raw_value in raw_answers.items():
        question = bank.get(question_id)
        try:
            if question is None:
                raise InputError(f"Unknown question id '{question_id}' for bank '{bank.id}'")
            parsed[question_id] = _parse_single(question, raw_value)
        except InputError as e:
            if strict:
                raise
            logger.warning(f"Ignoring answer in lenient mode: {e}")

    missing = [qid for qid in bank.question_ids if qid not in parsed]
    if missing:
        if require_complete:
            raise IncompleteAssessmentError(missing)
        logger.debug(f"{len(missing)} of {len(bank.questions)} questions unanswered in bank '{bank.id}'; scoring them as neutral.")

    return parsed


# --- Scoring ---

def _contribution(question: Union[ForcedChoiceQuestion, LikertQuestion], answer: AnswerValue) -> int:
    if isinstance(question, ForcedChoiceQuestion) and isinstance(answer, ForcedAnswer):
        return FORCED_WEIGHT if answer.choice == "A" else -FORCED_WEIGHT
    if isinstance(question, LikertQuestion) and isinstance(answer, LikertAnswer):
        centered = answer.value - LIKERT_MIDPOINT
        return -centered if question.reverse_scored else centered
    logger.warning(f"Answer of type {type(answer).__name__} does not match question '{question.id}' ({question.kind}); ignoring it.")
    return 0


def raw_dimension_sums(answers: Mapping[str, AnswerValue], bank: QuestionBank) -> Dict[Dimension, int]:
    """Sums the signed contribution of every answered question, per dimension."""
    sums = {dimension: 0 for dimension in DIMENSION_ORDER}
    for question in bank.questions:
        answer = answers.get(question.id)
        if answer is None:
            continue
        sums[question.dimension] += _contribution(question, answer)
    return sums


def max_raw_per_dimension(bank: QuestionBank) -> int:
    """Largest absolute raw sum a single dimension can reach in ``bank`` (16 for the full bank)."""
    return bank.forced_per_dimension * FORCED_WEIGHT + bank.likert_per_dimension * LIKERT_MAX_DEVIATION


def normalize(raw: float, max_raw: int) -> float:
    """Maps a raw sum in [-max_raw, max_raw] onto 0-100, clamped and rounded to 2 decimals."""
    percent = ((raw + max_raw) / (2 * max_raw)) * 100
    return round(min(100.0, max(0.0, percent)), 2)


def score(answers: Mapping[str, Any], bank: QuestionBank) -> Scores:
    """
    Calculates the four normalized dimension scores.

    Accepts either parsed answers or the raw ``{question_id: "A" | "B" | 1..7}``
    mapping (or a mix of both); raw values are parsed strictly first.
    """
    raw = {qid: value for qid, value in answers.items() if not isinstance(value, (ForcedAnswer, LikertAnswer))}
    if raw:
        answers = {**answers, **parse_answers(raw, bank)}
    sums = raw_dimension_sums(answers, bank)
    max_raw = max_raw_per_dimension(bank)
    normalized = {dimension: normalize(sums[dimension], max_raw) for dimension in DIMENSION_ORDER}
    logger.debug(f"Raw sums {[sums[d] for d in DIMENSION_ORDER]} normalized to {[normalized[d] for d in DIMENSION_ORDER]} (bank '{bank.id}').")

    return Scores(
        social_energy=normalized[Dimension.SOCIAL_ENERGY],
        attraction_driver=normalized[Dimension.ATTRACTION_DRIVER],
        decision_filter=normalized[Dimension.DECISION_FILTER],
        relationship_rhythm=normalized[Dimension.RELATIONSHIP_RHYTHM],
    )

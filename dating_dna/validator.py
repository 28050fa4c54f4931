# dating_dna/validator.py
# Length and shape contracts for generated results. Every check raises
# ValidationError on the first violation; nothing is repaired here.

import logging
import re
from typing import Dict, Mapping, NamedTuple, Optional, Sequence, Union

from .classifier import is_valid_type_code
from .definitions import DIMENSION_ORDER
from .errors import ValidationError
from .models import CoupleResult, IndividualResult, Scores

logger = logging.getLogger(__name__)

SENTENCE_SPLIT = re.compile(r"[.!?]+")
PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


# --- Counting ---

def count_words(text: str) -> int:
    return len(text.split())


def count_sentences(text: str) -> int:
    return len([piece for piece in SENTENCE_SPLIT.split(text) if piece.strip()])


def count_paragraphs(text: str) -> int:
    return len([piece for piece in PARAGRAPH_SPLIT.split(text) if piece.strip()])


# --- Contracts ---

class Bounds(NamedTuple):
    lower: int
    upper: Optional[int] = None

    def contains(self, value: int) -> bool:
        return value >= self.lower and (self.upper is None or value <= self.upper)

    def describe(self, unit: str) -> str:
        if self.upper is None:
            return f"at least {self.lower} {unit}"
        return f"{self.lower}-{self.upper} {unit}"


class TextContract(NamedTuple):
    words: Bounds
    sentences: Bounds
    paragraphs: Optional[Bounds] = None


class ListContract(NamedTuple):
    items: Bounds
    words: Optional[Bounds] = None  # over the concatenated text of all items
    item_sentences: Optional[Bounds] = None


def _doubled(bounds: Bounds, allowance: int = 0) -> Bounds:
    return Bounds(bounds.lower * 2, bounds.upper * 2 + allowance)


INDIVIDUAL_TEXT: Dict[str, TextContract] = {
    "relationshipApproach": TextContract(Bounds(100, 260), Bounds(5, 9)),
    "narrative.overviewSummary": TextContract(Bounds(100, 260), Bounds(5, 12)),
    "narrative.personalityInsights": TextContract(Bounds(100, 260), Bounds(5, 10)),
    "narrative.communicationStyle": TextContract(Bounds(70, 200), Bounds(5, 8)),
    "narrative.compatibilityFactors": TextContract(Bounds(80, 220), Bounds(5, 9)),
    "narrative.growthAreas": TextContract(Bounds(90, 240), Bounds(5, 10)),
    "narrative.strengthsSection": TextContract(Bounds(60, 180), Bounds(4, 7)),
    "narrative.expandedNarrative": TextContract(Bounds(180, 600), Bounds(8, 30), Bounds(3, 6)),
}

INDIVIDUAL_LISTS: Dict[str, ListContract] = {
    "strengths": ListContract(Bounds(3, 10), Bounds(150, 650), Bounds(1, 4)),
    "growthOpportunities": ListContract(Bounds(3, 8), Bounds(120, 700), Bounds(1, 4)),
    "quickWins": ListContract(Bounds(3, 10), Bounds(100, 600)),
    "plan30Day": ListContract(Bounds(10, 20), Bounds(100, 600)),
    "supportingContent.contextualExamples": ListContract(Bounds(3, 10)),
    "supportingContent.actionPlan7Days": ListContract(Bounds(3, 10)),
    "supportingContent.actionPlan30Days": ListContract(Bounds(5, 20)),
}

STRAND_FIELD_SENTENCES = Bounds(1, 3)

# Joint quick wins and the joint plan are never truncated, so their limits are
# the sum of both partners' limits. Each joint quick win adds "Both partners:"
# and "Timeline:" around the partner's text.
JOINT_QUICK_WIN_FRAMING_WORDS = 3
_QW = INDIVIDUAL_LISTS["quickWins"]
_PLAN = INDIVIDUAL_LISTS["plan30Day"]

COUPLE_TEXT: Dict[str, TextContract] = {
    "relationshipApproach": TextContract(Bounds(90, 280), Bounds(5, 10)),
    "narrative.overviewSummary": TextContract(Bounds(100, 280), Bounds(5, 12)),
    "narrative.coupleDynamics": TextContract(Bounds(80, 260), Bounds(5, 10)),
    "narrative.communicationStyleAsCouple": TextContract(Bounds(80, 220), Bounds(5, 8)),
    "narrative.intimacyPatterns": TextContract(Bounds(70, 240), Bounds(5, 9)),
    "narrative.sharedGrowthAreas": TextContract(Bounds(70, 240), Bounds(5, 10)),
    "narrative.jointStrengths": TextContract(Bounds(50, 200), Bounds(4, 7)),
    "narrative.expandedNarrative": TextContract(Bounds(180, 600), Bounds(8, 30), Bounds(3, 6)),
}

COUPLE_LISTS: Dict[str, ListContract] = {
    "jointStrengths": ListContract(Bounds(3, 10), Bounds(150, 900), Bounds(2, 6)),
    "sharedGrowthAreas": ListContract(Bounds(3, 8), Bounds(120, 900)),
    "jointQuickWins": ListContract(
        _doubled(_QW.items),
        _doubled(_QW.words, JOINT_QUICK_WIN_FRAMING_WORDS * _doubled(_QW.items).upper),
    ),
    "joint30DayPlan": ListContract(_doubled(_PLAN.items), _doubled(_PLAN.words)),
    "supportingContent.everydayExamples": ListContract(Bounds(3, 10)),
    "supportingContent.jointActionPlan7Days": ListContract(Bounds(3, 10)),
    "supportingContent.jointActionPlan30Days": ListContract(Bounds(3, 20)),
}


# --- Primitive checks ---

def _check_bounds(section: str, value: int, bounds: Bounds, unit: str) -> None:
    if bounds.contains(value):
        return
    direction = "Too few" if value < bounds.lower else "Too many"
    raise ValidationError(
        message=f"{direction} {unit}",
        section=section,
        expected_range=bounds.describe(unit),
        actual_value=f"{value} {unit}",
    )


def check_text(section: str, text: str, contract: TextContract) -> None:
    if not text or not text.strip():
        raise ValidationError("Section is empty", section, contract.words.describe("words"), "0 words")
    _check_bounds(section, count_words(text), contract.words, "words")
    _check_bounds(section, count_sentences(text), contract.sentences, "sentences")
    if contract.paragraphs is not None:
        _check_bounds(section, count_paragraphs(text), contract.paragraphs, "paragraphs")


def check_list(
    section: str,
    item_texts: Sequence[str],
    contract: ListContract,
    sentence_texts: Sequence[str] = (),
    unit: str = "items",
) -> None:
    """
    Checks the item count, the word total over ``item_texts`` and, when the
    contract asks for it, the sentence count of each entry in ``sentence_texts``.
    """
    _check_bounds(section, len(item_texts), contract.items, unit)
    if contract.words is not None:
        _check_bounds(section, count_words(" ".join(item_texts)), contract.words, "words")
    if contract.item_sentences is not None:
        for index, text in enumerate(sentence_texts):
            _check_bounds(f"{section}[{index}]", count_sentences(text), contract.item_sentences, "sentences")


def _check_type_code(section: str, type_code: str) -> None:
    if not is_valid_type_code(type_code):
        raise ValidationError("Invalid type code", section, "4 pole letters in dimension order", repr(type_code))


def _check_scores(section: str, scores: Scores) -> None:
    for dimension in DIMENSION_ORDER:
        value = scores.for_dimension(dimension)
        if not 0 <= value <= 100:
            raise ValidationError("Score out of range", f"{section}.{dimension.value}", "0-100", str(value))


def _check_strands(section: str, strands: Mapping, required_sentences: Optional[Bounds]) -> None:
    missing = [d.value for d in DIMENSION_ORDER if d.value not in strands]
    if missing:
        raise ValidationError(
            "Missing dimension breakdowns", section, "all 4 dimensions", f"missing {', '.join(missing)}"
        )
    for key in (d.value for d in DIMENSION_ORDER):
        for field, text in strands[key].model_dump(by_alias=True).items():
            field_section = f"{section}.{key}.{field}"
            if not text or not str(text).strip():
                raise ValidationError("Field is empty", field_section, "non-empty text", "empty")
            if required_sentences is not None:
                _check_bounds(field_section, count_sentences(text), required_sentences, "sentences")


# --- Result validation ---

def validate_individual(result: IndividualResult, prefix: str = "") -> None:
    """Validates one individual result; ``prefix`` namespaces sections inside a couple result."""
    p = prefix
    narrative = result.narrative
    support = result.supporting_content

    _check_type_code(f"{p}typeCode", result.type_code)
    _check_scores(f"{p}scores", result.scores)
    check_text(f"{p}relationshipApproach", result.relationship_approach, INDIVIDUAL_TEXT["relationshipApproach"])

    check_list(
        f"{p}strengths",
        [f"{s.title} {s.detail}" for s in result.strengths],
        INDIVIDUAL_LISTS["strengths"],
        sentence_texts=[s.detail for s in result.strengths],
    )
    check_list(
        f"{p}growthOpportunities",
        [f"{g.title} {g.rationale} {g.action}" for g in result.growth_opportunities],
        INDIVIDUAL_LISTS["growthOpportunities"],
        sentence_texts=[t for g in result.growth_opportunities for t in (g.rationale, g.action)],
    )
    check_list(
        f"{p}quickWins",
        [f"{q.action} {q.expected_outcome} {q.timeframe}" for q in result.quick_wins],
        INDIVIDUAL_LISTS["quickWins"],
    )
    check_list(f"{p}plan30Day", result.plan_30_day.all_actions(), INDIVIDUAL_LISTS["plan30Day"])

    narrative_fields = [
        ("overviewSummary", narrative.overview_summary),
        ("personalityInsights", narrative.personality_insights),
        ("communicationStyle", narrative.communication_style),
        ("compatibilityFactors", narrative.compatibility_factors),
        ("growthAreas", narrative.growth_areas),
        ("strengthsSection", narrative.strengths_section),
        ("expandedNarrative", narrative.expanded_narrative),
    ]
    for name, text in narrative_fields:
        check_text(f"{p}narrative.{name}", text, INDIVIDUAL_TEXT[f"narrative.{name}"])

    _check_strands(f"{p}supportingContent.strandBreakdowns", support.strand_breakdowns, STRAND_FIELD_SENTENCES)
    check_list(
        f"{p}supportingContent.contextualExamples",
        [e.response for e in support.contextual_examples],
        INDIVIDUAL_LISTS["supportingContent.contextualExamples"],
    )
    check_list(
        f"{p}supportingContent.actionPlan7Days",
        [d.action for d in support.action_plan_7_days],
        INDIVIDUAL_LISTS["supportingContent.actionPlan7Days"],
    )
    check_list(
        f"{p}supportingContent.actionPlan30Days",
        [a for week in support.action_plan_30_days for a in week.actions],
        INDIVIDUAL_LISTS["supportingContent.actionPlan30Days"],
        unit="actions",
    )


def validate_couple(result: CoupleResult) -> None:
    """Validates both partners first, then the joint profile."""
    validate_individual(result.partner_a, prefix="partnerA.")
    validate_individual(result.partner_b, prefix="partnerB.")

    p = "jointProfile."
    joint = result.joint_profile
    narrative = joint.narrative
    support = joint.supporting_content

    _check_bounds(f"{p}compatibility", joint.compatibility.mismatches, Bounds(0, 4), "mismatches")

    check_list(
        f"{p}jointStrengths",
        [f"{s.title} {s.how_to_leverage}" for s in joint.joint_strengths],
        COUPLE_LISTS["jointStrengths"],
        sentence_texts=[s.how_to_leverage for s in joint.joint_strengths],
    )
    check_list(
        f"{p}sharedGrowthAreas",
        [f"{g.title} {g.supportive_behavior} {g.shared_practice}" for g in joint.shared_growth_areas],
        COUPLE_LISTS["sharedGrowthAreas"],
    )
    check_text(f"{p}relationshipApproach", joint.relationship_approach, COUPLE_TEXT["relationshipApproach"])
    check_list(
        f"{p}jointQuickWins",
        [f"{q.action} {q.implementation}" for q in joint.joint_quick_wins],
        COUPLE_LISTS["jointQuickWins"],
    )
    check_list(f"{p}joint30DayPlan", joint.joint_30_day_plan.all_actions(), COUPLE_LISTS["joint30DayPlan"])

    narrative_fields = [
        ("overviewSummary", narrative.overview_summary),
        ("coupleDynamics", narrative.couple_dynamics),
        ("communicationStyleAsCouple", narrative.communication_style_as_couple),
        ("intimacyPatterns", narrative.intimacy_patterns),
        ("sharedGrowthAreas", narrative.shared_growth_areas),
        ("jointStrengths", narrative.joint_strengths),
        ("expandedNarrative", narrative.expanded_narrative),
    ]
    for name, text in narrative_fields:
        check_text(f"{p}narrative.{name}", text, COUPLE_TEXT[f"narrative.{name}"])

    _check_strands(f"{p}supportingContent.strandBreakdowns", support.strand_breakdowns, None)
    check_list(
        f"{p}supportingContent.everydayExamples",
        [e.couple_insight for e in support.everyday_examples],
        COUPLE_LISTS["supportingContent.everydayExamples"],
    )
    check_list(
        f"{p}supportingContent.jointActionPlan7Days",
        [d.collaborative_action for d in support.joint_action_plan_7_days],
        COUPLE_LISTS["supportingContent.jointActionPlan7Days"],
    )
    check_list(
        f"{p}supportingContent.jointActionPlan30Days",
        [a for week in support.joint_action_plan_30_days for a in week.progressive_actions],
        COUPLE_LISTS["supportingContent.jointActionPlan30Days"],
        unit="actions",
    )


def validate(result: Union[IndividualResult, CoupleResult]) -> None:
    """Raises ValidationError on the first contract violation; returns None when the result is valid."""
    if isinstance(result, CoupleResult):
        validate_couple(result)
    elif isinstance(result, IndividualResult):
        validate_individual(result)
    else:
        raise TypeError(f"Cannot validate object of type {type(result).__name__}")
    logger.debug(f"{result.assessment_type} result passed validation.")

# dating_dna/models.py
# Pydantic models for questions, answers, scores, content tables and results.

from enum import Enum
from types import MappingProxyType
from typing import Annotated, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Immutable base model; serializes with camelCase keys via ``model_dump(by_alias=True)``."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


def read_only(mapping) -> Mapping:
    """Wraps a validated dict so mapping fields stay as immutable as the model holding them."""
    return MappingProxyType(dict(mapping))


class Dimension(str, Enum):
    SOCIAL_ENERGY = "socialEnergy"
    ATTRACTION_DRIVER = "attractionDriver"
    DECISION_FILTER = "decisionFilter"
    RELATIONSHIP_RHYTHM = "relationshipRhythm"


# --- Questions ---

class ForcedOptions(EngineModel):
    a: str  # points to the first pole
    b: str


class ForcedChoiceQuestion(EngineModel):
    id: str
    dimension: Dimension
    prompt: str
    kind: Literal["forced"] = "forced"
    options: ForcedOptions


class LikertQuestion(EngineModel):
    id: str
    dimension: Dimension
    prompt: str
    kind: Literal["likert"] = "likert"
    reverse_scored: bool = False


Question = Annotated[Union[ForcedChoiceQuestion, LikertQuestion], Field(discriminator="kind")]


class QuestionBank(EngineModel):
    id: str
    name: str
    forced_per_dimension: int
    likert_per_dimension: int
    questions: Tuple[Question, ...]

    @model_validator(mode="after")
    def _check_composition(self):
        seen = set()
        for question in self.questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question ID '{question.id}' in bank '{self.id}'")
            seen.add(question.id)

        for dimension in Dimension:
            in_dimension = [q for q in self.questions if q.dimension == dimension]
            forced = sum(1 for q in in_dimension if q.kind == "forced")
            likert = len(in_dimension) - forced
            if forced != self.forced_per_dimension or likert != self.likert_per_dimension:
                raise ValueError(
                    f"Bank '{self.id}' dimension '{dimension.value}' has {forced} forced and {likert} "
                    f"likert questions; expected {self.forced_per_dimension} and {self.likert_per_dimension}"
                )
        return self

    def get(self, question_id: str) -> Optional[Union[ForcedChoiceQuestion, LikertQuestion]]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def for_dimension(self, dimension: Dimension) -> List[Union[ForcedChoiceQuestion, LikertQuestion]]:
        return [q for q in self.questions if q.dimension == dimension]

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]


# --- Answers ---

class ForcedAnswer(EngineModel):
    kind: Literal["forced"] = "forced"
    choice: Literal["A", "B"]


class LikertAnswer(EngineModel):
    kind: Literal["likert"] = "likert"
    value: int = Field(ge=1, le=7)


# --- Scores & type ---

class Scores(EngineModel):
    social_energy: float = Field(ge=0, le=100)
    attraction_driver: float = Field(ge=0, le=100)
    decision_filter: float = Field(ge=0, le=100)
    relationship_rhythm: float = Field(ge=0, le=100)

    def for_dimension(self, dimension: Dimension) -> float:
        return {
            Dimension.SOCIAL_ENERGY: self.social_energy,
            Dimension.ATTRACTION_DRIVER: self.attraction_driver,
            Dimension.DECISION_FILTER: self.decision_filter,
            Dimension.RELATIONSHIP_RHYTHM: self.relationship_rhythm,
        }[dimension]


class TypeProfile(EngineModel):
    type_code: str
    type_name: str


# --- Individual content ---

class Strength(EngineModel):
    title: str
    detail: str


class GrowthOpportunity(EngineModel):
    title: str
    rationale: str
    action: str


class QuickWin(EngineModel):
    action: str
    expected_outcome: str
    timeframe: str


class ThirtyDayPlan(EngineModel):
    week1: Tuple[str, ...]
    week2: Tuple[str, ...]
    week3: Tuple[str, ...]
    week4: Tuple[str, ...]

    def weeks(self) -> List[Tuple[str, ...]]:
        return [self.week1, self.week2, self.week3, self.week4]

    def all_actions(self) -> List[str]:
        return [action for week in self.weeks() for action in week]


class IndividualNarrative(EngineModel):
    overview_summary: str
    personality_insights: str
    communication_style: str
    compatibility_factors: str
    growth_areas: str
    strengths_section: str
    expanded_narrative: str


class StrandBreakdown(EngineModel):
    description: str
    implications: str
    tips: str


class ContextualExample(EngineModel):
    scenario: str
    response: str
    insight: str


class DailyAction(EngineModel):
    day: int
    action: str
    purpose: str


class WeeklyActions(EngineModel):
    week: int
    actions: Tuple[str, ...]
    goals: str


class SupportingContent(EngineModel):
    strand_breakdowns: Mapping[str, StrandBreakdown]  # keyed by Dimension value
    contextual_examples: Tuple[ContextualExample, ...]
    action_plan_7_days: Tuple[DailyAction, ...]
    action_plan_30_days: Tuple[WeeklyActions, ...]

    @field_validator("strand_breakdowns")
    @classmethod
    def _freeze_strands(cls, value):
        return read_only(value)

    @field_serializer("strand_breakdowns", mode="wrap")
    def _dump_strands(self, value, handler):
        return handler(dict(value))


class ContentBundle(EngineModel):
    relationship_approach: str
    strengths: Tuple[Strength, ...]
    growth_opportunities: Tuple[GrowthOpportunity, ...]
    quick_wins: Tuple[QuickWin, ...]
    plan_30_day: ThirtyDayPlan
    narrative: IndividualNarrative
    supporting_content: SupportingContent


class IndividualResult(EngineModel):
    assessment_type: Literal["singles"] = "singles"
    question_bank: str
    type_code: str
    type_name: str
    scores: Scores
    completed_at: str
    relationship_approach: str
    strengths: Tuple[Strength, ...]
    growth_opportunities: Tuple[GrowthOpportunity, ...]
    quick_wins: Tuple[QuickWin, ...]
    plan_30_day: ThirtyDayPlan
    narrative: IndividualNarrative
    supporting_content: SupportingContent


# --- Couple content ---

class CompatibilitySummary(EngineModel):
    mismatches: int
    summary: str


class JointStrength(EngineModel):
    title: str
    how_to_leverage: str


class SharedGrowthArea(EngineModel):
    title: str
    supportive_behavior: str
    shared_practice: str


class JointQuickWin(EngineModel):
    action: str
    implementation: str


class CoupleNarrative(EngineModel):
    overview_summary: str
    couple_dynamics: str
    communication_style_as_couple: str
    intimacy_patterns: str
    shared_growth_areas: str
    joint_strengths: str
    expanded_narrative: str


class CoupleStrandBreakdown(EngineModel):
    partner_a_description: str
    partner_b_description: str
    comparison: str
    implications: str


class EverydayExample(EngineModel):
    scenario: str
    partner_a_response: str
    partner_b_response: str
    couple_insight: str


class CollaborativeAction(EngineModel):
    day: int
    collaborative_action: str
    purpose: str


class ProgressiveWeek(EngineModel):
    week: int
    progressive_actions: Tuple[str, ...]
    goals: str


class CoupleSupportingContent(EngineModel):
    strand_breakdowns: Mapping[str, CoupleStrandBreakdown]
    everyday_examples: Tuple[EverydayExample, ...]
    joint_action_plan_7_days: Tuple[CollaborativeAction, ...]
    joint_action_plan_30_days: Tuple[ProgressiveWeek, ...]

    @field_validator("strand_breakdowns")
    @classmethod
    def _freeze_strands(cls, value):
        return read_only(value)

    @field_serializer("strand_breakdowns", mode="wrap")
    def _dump_strands(self, value, handler):
        return handler(dict(value))


class JointProfile(EngineModel):
    compatibility: CompatibilitySummary
    joint_strengths: Tuple[JointStrength, ...]
    shared_growth_areas: Tuple[SharedGrowthArea, ...]
    relationship_approach: str
    joint_quick_wins: Tuple[JointQuickWin, ...]
    joint_30_day_plan: ThirtyDayPlan
    narrative: CoupleNarrative
    supporting_content: CoupleSupportingContent


class CoupleResult(EngineModel):
    assessment_type: Literal["couples"] = "couples"
    partner_a: IndividualResult
    partner_b: IndividualResult
    joint_profile: JointProfile


# --- Static content tables (assets/content.yml) ---

class PolePhrases(EngineModel):
    style: str
    approach: str
    insight: str
    communication: str
    compatibility: str
    growth_focus: str
    strength_focus: str
    in_practice: str
    tip: str


class WeeklyPlanEntry(EngineModel):
    week1: str
    week2: str
    week3: str
    week4: str

    def for_week(self, week: int) -> str:
        return getattr(self, f"week{week}")


class PoleContent(EngineModel):
    word: str
    phrases: PolePhrases
    strengths: Tuple[Strength, ...] = Field(min_length=1)
    growth: Tuple[GrowthOpportunity, ...] = Field(min_length=1)
    plan: WeeklyPlanEntry


class ContentTables(EngineModel):
    version: str
    poles: Mapping[str, PoleContent]
    weekly_anchors: WeeklyPlanEntry

    @field_validator("poles")
    @classmethod
    def _freeze_poles(cls, value):
        return read_only(value)

# dating_dna/results_generator.py
# Builds the templated content bundle (strengths, growth, quick wins, plans and
# narrative prose) for a type code from the static content tables.

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, TypeVar

from .classifier import is_valid_type_code, type_name_from_code
from .definitions import DIMENSION_LABELS, DIMENSION_ORDER
from .errors import InputError
from .loader import load_content_tables
from .models import (
    ContentBundle,
    ContentTables,
    ContextualExample,
    DailyAction,
    Dimension,
    GrowthOpportunity,
    IndividualNarrative,
    PoleContent,
    QuickWin,
    Scores,
    StrandBreakdown,
    Strength,
    SupportingContent,
    ThirtyDayPlan,
    WeeklyActions,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# --- Constants ---

STRENGTH_BOUNDS = (3, 10)
GROWTH_BOUNDS = (3, 8)
QUICK_WIN_BOUNDS = (3, 10)

GROWTH_OUTCOME = "Lower friction and clearer signals in how you date."
GROWTH_TIMEFRAME = "7–14 days"
STRENGTH_TIMEFRAME = "This week"

DIMENSION_IMPLICATIONS = {
    Dimension.SOCIAL_ENERGY: "This shapes where you prefer to meet people and how you recharge between dates.",
    Dimension.ATTRACTION_DRIVER: "This shapes which qualities catch your attention and what keeps you interested over time.",
    Dimension.DECISION_FILTER: "This shapes how you evaluate partners and make important relationship choices.",
    Dimension.RELATIONSHIP_RHYTHM: "This shapes how quickly you like a relationship to progress and how much structure feels comfortable.",
}

# (scenario, leading dimension, supporting dimension, insight)
CONTEXTUAL_SCENARIOS = [
    ("Planning a first date with someone new",
     Dimension.RELATIONSHIP_RHYTHM, Dimension.SOCIAL_ENERGY,
     "Choosing dates that fit your natural style lets your personality come through and makes a good first impression more likely."),
    ("Meeting someone interesting at a busy social event",
     Dimension.SOCIAL_ENERGY, Dimension.DECISION_FILTER,
     "Knowing how you approach new people helps you make genuine connections without forcing a style that is not yours."),
    ("Deciding whether to become exclusive",
     Dimension.DECISION_FILTER, Dimension.ATTRACTION_DRIVER,
     "Understanding how you decide helps you make commitments that satisfy both your practical needs and your feelings."),
    ("Moving from casual dating to something serious",
     Dimension.RELATIONSHIP_RHYTHM, Dimension.ATTRACTION_DRIVER,
     "Talking openly about your preferred pace reduces anxiety for both people during an important transition."),
    ("Working through an early disagreement",
     Dimension.DECISION_FILTER, Dimension.RELATIONSHIP_RHYTHM,
     "Knowing your natural conflict style helps you handle disagreements in ways that build trust instead of distance."),
    ("Judging long-term compatibility after a few months",
     Dimension.ATTRACTION_DRIVER, Dimension.DECISION_FILTER,
     "Recognizing what draws you in helps you judge long-term fit with clear eyes."),
]


# --- Helpers ---

def bounded(items: Sequence[T], lower: int, upper: int, section: str) -> List[T]:
    """Clips ``items`` to at most ``upper`` entries; too few entries are left for the validator to reject."""
    if len(items) < lower:
        logger.warning(f"Section '{section}' has {len(items)} items, below the minimum of {lower}.")
    return list(items[:upper])


def display_percent(value: float) -> int:
    """Whole-number percentage for prose; halves round up (62.5 -> 63)."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _percent(scores: Scores, dimension: Dimension) -> str:
    return f"{display_percent(scores.for_dimension(dimension))}%"


def _label(dimension: Dimension) -> str:
    return DIMENSION_LABELS[dimension].lower()


def resolve_poles(type_code: str, tables: ContentTables) -> List[PoleContent]:
    if not is_valid_type_code(type_code):
        raise InputError(f"Invalid type code {type_code!r}")
    return [tables.poles[letter] for letter in type_code]


# --- Lists ---

def build_strengths(poles: Sequence[PoleContent]) -> List[Strength]:
    flat = [strength for pole in poles for strength in pole.strengths]
    return bounded(flat, *STRENGTH_BOUNDS, section="strengths")


def build_growth_opportunities(poles: Sequence[PoleContent]) -> List[GrowthOpportunity]:
    flat = [item for pole in poles for item in pole.growth]
    return bounded(flat, *GROWTH_BOUNDS, section="growthOpportunities")


def build_quick_wins(growth: Sequence[GrowthOpportunity], strengths: Sequence[Strength]) -> List[QuickWin]:
    """One quick win per growth item, then one per strength; duplicates dropped, order kept."""
    candidates = [
        QuickWin(action=item.action, expected_outcome=GROWTH_OUTCOME, timeframe=GROWTH_TIMEFRAME)
        for item in growth
    ]
    candidates += [
        QuickWin(action=f"Leverage: {strength.title}", expected_outcome=strength.detail, timeframe=STRENGTH_TIMEFRAME)
        for strength in strengths
    ]
    unique = list(dict.fromkeys(candidates))
    return bounded(unique, *QUICK_WIN_BOUNDS, section="quickWins")


def build_plan(poles: Sequence[PoleContent], tables: ContentTables) -> ThirtyDayPlan:
    weeks = {}
    for week in range(1, 5):
        weeks[f"week{week}"] = [tables.weekly_anchors.for_week(week)] + [pole.plan.for_week(week) for pole in poles]
    return ThirtyDayPlan(**weeks)


# --- Prose ---

def build_relationship_approach(type_code: str, type_name: str, poles: Sequence[PoleContent]) -> str:
    sentences = [pole.phrases.approach for pole in poles]
    sentences.append(
        f"This {type_code} approach gives your dating life a recognizable shape, and knowing that shape "
        f"lets you choose settings and partners that fit it."
    )
    sentences.append(
        f"Your best results come from {poles[0].phrases.strength_focus} and {poles[2].phrases.strength_focus}."
    )
    sentences.append(
        f"Over the long run, you do best with partners who respect that you are a {type_name} "
        f"and who meet you at a pace that suits your rhythm."
    )
    return " ".join(sentences)


def _overview(type_code: str, type_name: str, scores: Scores, poles: Sequence[PoleContent]) -> str:
    p = [pole.phrases for pole in poles]
    w = [pole.word for pole in poles]
    se, ad, df, rr = (_percent(scores, d) for d in DIMENSION_ORDER)
    return " ".join([
        f"As a {type_name} ({type_code}), you bring {p[0].style} and {p[1].style} to dating, "
        f"filtered through {p[2].style} and paced by {p[3].style}.",
        "Your profile describes how you tend to meet people, what draws you in, how you decide, "
        "and how quickly you like things to move.",
        f"Your social energy score of {se} points toward the {w[0]} pole, and your attraction driver "
        f"score of {ad} points toward the {w[1]} pole.",
        f"Your decision filter score of {df} leans {w[2]}, and your relationship rhythm score of {rr} leans {w[3]}.",
        "None of these scores is a verdict, and each one simply describes where you start when nothing else is pushing you.",
        "Used well, this profile helps you pick better settings, ask better questions, and notice sooner when a connection fits.",
    ])


def _personality_insights(type_code: str, poles: Sequence[PoleContent]) -> str:
    sentences = [f"Your {type_code} profile rests on four dimensions that shape how you date."]
    for dimension, pole in zip(DIMENSION_ORDER, poles):
        sentences.append(f"On {_label(dimension)}, your {pole.word} side means you {pole.phrases.insight}.")
    sentences.append(
        "Together these four tendencies explain much of what feels easy for you in dating "
        "and what takes deliberate effort."
    )
    return " ".join(sentences)


def _communication_style(poles: Sequence[PoleContent]) -> str:
    sentences = ["Your communication style follows directly from your type."]
    sentences += [pole.phrases.communication for pole in poles]
    sentences.append("Naming these habits early helps a new partner read you accurately instead of guessing.")
    return " ".join(sentences)


def _compatibility_factors(type_code: str, poles: Sequence[PoleContent]) -> str:
    sentences = [
        "Compatibility is less about finding a copy of yourself and more about understanding "
        "where you match and where you differ."
    ]
    sentences += [pole.phrases.compatibility for pole in poles]
    sentences.append(
        f"Partners who share several of your {type_code} letters will feel familiar quickly, "
        f"while partners with opposite letters can stretch you in useful ways."
    )
    return " ".join(sentences)


def _growth_areas(poles: Sequence[PoleContent]) -> str:
    sentences = [
        "Your growth areas are not flaws, and they mark the places where a small change in habit pays off quickly."
    ]
    for dimension, pole in zip(DIMENSION_ORDER, poles):
        sentences.append(f"On {_label(dimension)}, your next step is {pole.phrases.growth_focus}.")
    sentences.append(
        "Your plan below turns these themes into concrete growth opportunities with specific actions "
        "you can start this week."
    )
    sentences.append("Pick one at a time, track what changes, and let early wins build momentum for the harder ones.")
    return " ".join(sentences)


def _strengths_section(poles: Sequence[PoleContent]) -> str:
    p = [pole.phrases for pole in poles]
    w = [pole.word for pole in poles]
    return " ".join([
        "Your strengths are the qualities that come easily to you and that partners notice early.",
        f"As a {w[0]} and {w[1]} type, you shine at {p[0].strength_focus} and {p[1].strength_focus}.",
        f"Your {w[2]} and {w[3]} leanings help with {p[2].strength_focus} and {p[3].strength_focus}.",
        "Lean on these deliberately, especially early in a connection when first impressions carry the most weight.",
    ])


def _expanded_narrative(type_code: str, type_name: str, poles: Sequence[PoleContent]) -> str:
    p = [pole.phrases for pole in poles]
    paragraphs = [
        f"Your Dating DNA is a starting map rather than a fixed label. As a {type_name}, you carry a consistent "
        f"set of instincts into every new connection, and those instincts shape which dates feel natural and "
        f"which feel like work. Understanding them lets you plan around them instead of fighting them.",
        f"On the social side, you {p[0].insight}. When it comes to attraction, you {p[1].insight}. These two "
        f"tendencies decide where you meet people and what keeps you interested after the first date.",
        f"In decisions, you {p[2].insight}. In pacing, you {p[3].insight}. Together they set how quickly you "
        f"commit and what evidence you need before you do.",
        f"The most useful next step is to pick one strength and one growth area from this report and practice "
        f"both for a month. Your {type_code} profile will not change overnight, and it does not need to. Small, "
        f"steady adjustments compound, and the people you date will notice the difference long before you do.",
    ]
    return "\n\n".join(paragraphs)


def build_narrative(type_code: str, type_name: str, scores: Scores, poles: Sequence[PoleContent]) -> IndividualNarrative:
    return IndividualNarrative(
        overview_summary=_overview(type_code, type_name, scores, poles),
        personality_insights=_personality_insights(type_code, poles),
        communication_style=_communication_style(poles),
        compatibility_factors=_compatibility_factors(type_code, poles),
        growth_areas=_growth_areas(poles),
        strengths_section=_strengths_section(poles),
        expanded_narrative=_expanded_narrative(type_code, type_name, poles),
    )


# --- Supporting content ---

def build_supporting_content(
    type_code: str,
    scores: Scores,
    poles: Sequence[PoleContent],
    strengths: Sequence[Strength],
    growth: Sequence[GrowthOpportunity],
) -> SupportingContent:
    by_dimension = dict(zip(DIMENSION_ORDER, poles))

    breakdowns = {
        dimension.value: StrandBreakdown(
            description=(
                f"Your {_label(dimension)} score of {_percent(scores, dimension)} places you on the "
                f"{by_dimension[dimension].word} side of this dimension."
            ),
            implications=DIMENSION_IMPLICATIONS[dimension],
            tips=by_dimension[dimension].phrases.tip,
        )
        for dimension in DIMENSION_ORDER
    }

    examples = []
    for scenario, leading, supporting, insight in CONTEXTUAL_SCENARIOS:
        lead, support = by_dimension[leading], by_dimension[supporting]
        examples.append(ContextualExample(
            scenario=scenario,
            response=(
                f"Your {lead.word} side means you tend to {lead.phrases.in_practice}, while your "
                f"{support.word} side means you tend to {support.phrases.in_practice}."
            ),
            insight=insight,
        ))

    seven_days = [
        DailyAction(day=1, action=f"Read your full {type_code} profile once without skimming",
                    purpose="Understand your natural patterns before changing anything"),
        DailyAction(day=2, action=f"Use your {strengths[0].title} strength on purpose in one conversation",
                    purpose="Build confidence in what already works"),
        DailyAction(day=3, action=f"Notice one moment when your {poles[0].word} energy shaped a conversation",
                    purpose="Connect the profile to real situations"),
        DailyAction(day=4, action=f"Start the {growth[0].title} practice",
                    purpose="Begin one targeted improvement"),
        DailyAction(day=5, action="Try the first quick win on your list",
                    purpose="Get an early, visible result"),
        DailyAction(day=6, action="Share one insight from your profile with a friend you trust",
                    purpose="Get an outside view of your patterns"),
        DailyAction(day=7, action="Review the week and choose what to keep doing",
                    purpose="Turn insights into habits"),
    ]

    thirty_days = [
        WeeklyActions(week=1, goals="Build self-awareness and confidence", actions=[
            f"Study your {type_code} profile in full",
            f"Practice {strengths[0].title} in one real situation",
            "Note which settings give you the most energy",
        ]),
        WeeklyActions(week=2, goals="Improve day-to-day dating habits", actions=[
            f"Work on {growth[0].title}",
            f"Work on {growth[1].title}",
            "Apply one communication insight on a date",
        ]),
        WeeklyActions(week=3, goals="Make clearer partner choices", actions=[
            "Evaluate current connections against your compatibility factors",
            f"Lean on {strengths[1].title} in a harder moment",
            "Refine your approach based on what you noticed",
        ]),
        WeeklyActions(week=4, goals="Sustain long-term improvement", actions=[
            "Review progress on your growth areas",
            "Set one relationship goal for next month",
            "Schedule a monthly self-check",
        ]),
    ]

    return SupportingContent(
        strand_breakdowns=breakdowns,
        contextual_examples=examples,
        action_plan_7_days=seven_days,
        action_plan_30_days=thirty_days,
    )


# --- Aggregation ---

def aggregate(type_code: str, scores: Scores, tables: Optional[ContentTables] = None) -> ContentBundle:
    """
    Assembles the full content bundle for ``type_code``.

    Pure: the same type code, scores and tables always produce the same bundle.
    """
    tables = tables or load_content_tables()
    poles = resolve_poles(type_code, tables)
    type_name = type_name_from_code(type_code)

    strengths = build_strengths(poles)
    growth = build_growth_opportunities(poles)
    quick_wins = build_quick_wins(growth, strengths)

    bundle = ContentBundle(
        relationship_approach=build_relationship_approach(type_code, type_name, poles),
        strengths=strengths,
        growth_opportunities=growth,
        quick_wins=quick_wins,
        plan_30_day=build_plan(poles, tables),
        narrative=build_narrative(type_code, type_name, scores, poles),
        supporting_content=build_supporting_content(type_code, scores, poles, strengths, growth),
    )
    logger.debug(
        f"Aggregated content for {type_code}: {len(strengths)} strengths, {len(growth)} growth items, "
        f"{len(quick_wins)} quick wins."
    )
    return bundle

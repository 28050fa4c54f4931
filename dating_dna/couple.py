# dating_dna/couple.py
# Merges two individual results into a joint couple profile.

import logging
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from .classifier import is_valid_type_code
from .definitions import DIMENSION_LABELS, DIMENSION_ORDER, POLE_WORDS
from .errors import InputError
from .loader import load_content_tables
from .models import (
    CollaborativeAction,
    CompatibilitySummary,
    ContentTables,
    CoupleNarrative,
    CoupleResult,
    CoupleStrandBreakdown,
    CoupleSupportingContent,
    Dimension,
    EverydayExample,
    IndividualResult,
    JointProfile,
    JointQuickWin,
    JointStrength,
    ProgressiveWeek,
    SharedGrowthArea,
    ThirtyDayPlan,
)
from .results_generator import bounded, display_percent, resolve_poles

logger = logging.getLogger(__name__)

T = TypeVar("T")

# --- Constants ---

# Keyed by Hamming distance between the two type codes.
COMPATIBILITY_SENTENCES: Dict[int, str] = {
    0: "You share the same Dating DNA type, which gives you a natural shared language and very few surprises.",
    1: "Your types differ on a single letter, so you align closely while still giving each other one healthy point of contrast.",
    2: "Your types split evenly, with two shared letters for comfort and two different ones that can strengthen the partnership.",
    3: "Your types contrast on three letters, which makes for a dynamic relationship that grows fastest when you balance each other deliberately.",
    4: "Your types are opposite on every letter, which can create powerful synergy once you understand and respect how differently you each operate.",
}

ALIGNMENT_THRESHOLD = 25  # |score A - score B| below this reads as high alignment
HIGH_ALIGNMENT = "High alignment"
COMPLEMENTARY = "Complementary differences"

JOINT_STRENGTH_BOUNDS = (3, 10)
SHARED_GROWTH_BOUNDS = (3, 8)

COUPLE_IMPLICATIONS = {
    Dimension.SOCIAL_ENERGY: "This affects how you spend your free time as a couple and how you each recharge.",
    Dimension.ATTRACTION_DRIVER: "This affects what you each value in the relationship and how you talk about the future.",
    Dimension.DECISION_FILTER: "This affects how you make decisions together and work through disagreements.",
    Dimension.RELATIONSHIP_RHYTHM: "This affects the pace and amount of structure that feel comfortable to both of you.",
}

EVERYDAY_SCENARIOS = [
    ("Planning a weekend together", Dimension.RELATIONSHIP_RHYTHM,
     "Agreeing up front on how much of the weekend to plan keeps both of you relaxed."),
    ("Choosing how to spend a free evening", Dimension.SOCIAL_ENERGY,
     "Alternating between your preferred settings lets each of you recharge in turn."),
    ("Talking about the next year together", Dimension.ATTRACTION_DRIVER,
     "Balancing what works now with what you are building keeps both of you invested."),
    ("Resolving a disagreement about money", Dimension.DECISION_FILTER,
     "Agreeing on how you will decide matters as much as the decision itself."),
]


# --- Type comparison ---

def count_mismatches(code_a: str, code_b: str) -> int:
    """Number of positions where the two type codes differ (0-4)."""
    for code in (code_a, code_b):
        if not is_valid_type_code(code):
            raise InputError(f"Invalid type code {code!r}")
    return sum(1 for a, b in zip(code_a, code_b) if a != b)


def compatibility_sentence(mismatches: int) -> str:
    try:
        return COMPATIBILITY_SENTENCES[mismatches]
    except KeyError:
        raise InputError(f"Mismatch count must be between 0 and 4, got {mismatches!r}") from None


# --- Joint lists ---

def _dedupe_by_title(items: Sequence[T], title: Callable[[T], str]) -> List[T]:
    seen = set()
    unique = []
    for item in items:
        if title(item) in seen:
            continue
        seen.add(title(item))
        unique.append(item)
    return unique


def build_joint_strengths(result_a: IndividualResult, result_b: IndividualResult) -> List[JointStrength]:
    merged = _dedupe_by_title(list(result_a.strengths) + list(result_b.strengths), lambda s: s.title)
    joint = [
        JointStrength(
            title=s.title,
            how_to_leverage=(
                f"Both partners can draw on {s.title} together. {s.detail} "
                f"Set aside a few minutes each month to notice where this shared strength showed up."
            ),
        )
        for s in merged
    ]
    return bounded(joint, *JOINT_STRENGTH_BOUNDS, section="jointProfile.jointStrengths")


def build_shared_growth(result_a: IndividualResult, result_b: IndividualResult) -> List[SharedGrowthArea]:
    merged = _dedupe_by_title(
        list(result_a.growth_opportunities) + list(result_b.growth_opportunities), lambda g: g.title
    )
    shared = [
        SharedGrowthArea(
            title=g.title,
            supportive_behavior=f"Both partners can support each other here. {g.action}",
            shared_practice=f"Practice together with this in mind. {g.rationale}",
        )
        for g in merged
    ]
    return bounded(shared, *SHARED_GROWTH_BOUNDS, section="jointProfile.sharedGrowthAreas")


def build_joint_quick_wins(result_a: IndividualResult, result_b: IndividualResult) -> List[JointQuickWin]:
    """Partner A's quick wins followed by partner B's; never truncated."""
    return [
        JointQuickWin(action=qw.action, implementation=f"Both partners: {qw.expected_outcome} Timeline: {qw.timeframe}.")
        for qw in list(result_a.quick_wins) + list(result_b.quick_wins)
    ]


def build_joint_plan(result_a: IndividualResult, result_b: IndividualResult) -> ThirtyDayPlan:
    """Week-by-week concatenation of both plans; never truncated."""
    a, b = result_a.plan_30_day, result_b.plan_30_day
    return ThirtyDayPlan(
        week1=a.week1 + b.week1,
        week2=a.week2 + b.week2,
        week3=a.week3 + b.week3,
        week4=a.week4 + b.week4,
    )


# --- Prose ---

def _words(code: str) -> List[str]:
    return [POLE_WORDS[letter] for letter in code]


def _label(dimension: Dimension) -> str:
    return DIMENSION_LABELS[dimension].lower()


def build_couple_approach(result_a: IndividualResult, result_b: IndividualResult, mismatches: int) -> str:
    return " ".join([
        f"As a {result_a.type_code} and {result_b.type_code} couple, you bring together "
        f"a {result_a.type_name} and a {result_b.type_name}.",
        compatibility_sentence(mismatches),
        "Your combined profile shows where you will naturally move in step and where you will need "
        "to translate for each other.",
        f"You match on {4 - mismatches} of the four dimensions and differ on {mismatches}, which sets "
        f"how much translation your relationship needs.",
        "Where your letters differ, slow down, ask what the other person needs, and treat the difference "
        "as information rather than a problem.",
        "Where they match, protect the ease you already have by making time for it on purpose.",
    ])


def _overview(result_a: IndividualResult, result_b: IndividualResult, compatibility: str) -> str:
    a, b = _words(result_a.type_code), _words(result_b.type_code)
    return " ".join([
        f"As a {result_a.type_code} and {result_b.type_code} couple, you combine "
        f"a {result_a.type_name} with a {result_b.type_name}.",
        compatibility,
        f"On social energy, Partner A leans {a[0]} and Partner B leans {b[0]}, while on attraction "
        f"Partner A leans {a[1]} and Partner B leans {b[1]}.",
        f"On decisions, Partner A leans {a[2]} and Partner B leans {b[2]}, and on pacing "
        f"Partner A leans {a[3]} and Partner B leans {b[3]}.",
        "Shared letters give you easy common ground, and different letters show you where patience "
        "and curiosity will pay off most.",
        "This profile is meant to help you talk about those patterns openly rather than to predict "
        "how your relationship will turn out.",
    ])


def _couple_dynamics(result_a: IndividualResult, result_b: IndividualResult) -> str:
    a, b = _words(result_a.type_code), _words(result_b.type_code)
    sentences = [
        f"Your day-to-day dynamic is shaped by how a {result_a.type_name} and a {result_b.type_name} fit together."
    ]
    for index, dimension in enumerate(DIMENSION_ORDER):
        if a[index] == b[index]:
            sentences.append(
                f"You both lean {a[index]} on {_label(dimension)}, so this dimension is likely to feel easy and familiar."
            )
        else:
            sentences.append(
                f"On {_label(dimension)}, Partner A leans {a[index]} while Partner B leans {b[index]}, "
                f"so you will each need to stretch a little toward the other."
            )
    sentences.append("Naming these patterns out loud keeps small differences from turning into repeated arguments.")
    return " ".join(sentences)


def _communication(result_a: IndividualResult, result_b: IndividualResult) -> str:
    a, b = _words(result_a.type_code), _words(result_b.type_code)
    if a[2] == b[2]:
        decision = "Because you share a decision filter, you tend to agree on what counts as a good reason."
    else:
        decision = ("Because your decision filters differ, agree early on whether a conversation needs "
                    "feelings first or solutions first.")
    return " ".join([
        "As a couple, your communication blends two personal styles.",
        f"Partner A brings a {a[2]} filter to conversations and Partner B brings a {b[2]} filter.",
        f"Partner A tends toward {a[0]} social energy and Partner B tends toward {b[0]} social energy, "
        f"which affects how much you each want to talk things through.",
        decision,
        "A simple habit helps both styles, which is to summarize what you heard before you respond.",
        "Check in weekly about what felt easy to discuss and what felt hard, and adjust from there.",
    ])


def _intimacy(result_a: IndividualResult, result_b: IndividualResult) -> str:
    a, b = _words(result_a.type_code), _words(result_b.type_code)
    if a[3] == b[3]:
        rhythm = f"You both prefer a {a[3]} rhythm, so you already agree on how quickly closeness should build."
    else:
        rhythm = (f"Partner A prefers a {a[3]} rhythm and Partner B prefers a {b[3]} one, so closeness will "
                  f"build fastest when you alternate planned and unplanned time.")
    if a[1] == b[1]:
        attraction = (f"You are both {a[1]}-focused in attraction, which means you notice the same kind "
                      f"of signals in each other.")
    else:
        attraction = (f"One of you is {a[1]}-focused and the other is {b[1]}-focused in attraction, "
                      f"so share openly what makes you feel wanted.")
    return " ".join([
        "Intimacy grows through the mix of planned closeness and spontaneous moments you create together.",
        rhythm,
        attraction,
        "Small rituals such as a weekly date, a daily check-in, or a shared hobby keep intimacy from "
        "depending on mood alone.",
        "Ask each other what made you feel closest this week and repeat it on purpose.",
    ])


def _shared_growth_narrative(shared: Sequence[SharedGrowthArea]) -> str:
    first = shared[0].title if shared else "the area that feels most urgent"
    return " ".join([
        "Your shared growth areas are the places where supporting each other pays off most.",
        f"This profile lists {len(shared)} of them, drawn from both of your individual results.",
        f"The first one to work on together is {first}.",
        "Choose one area at a time, agree on a small shared practice, and review how it went at the end of each week.",
        "Growth goes faster when each partner supports the other's effort instead of keeping score.",
        "Celebrate progress out loud, even when it is small.",
    ])


def _joint_strengths_narrative(joint: Sequence[JointStrength]) -> str:
    titles = " and ".join(s.title for s in joint[:2]) or "what you already do well"
    return " ".join([
        "Your joint strengths are the qualities you can lean on when things get hard.",
        f"Together you bring {len(joint)} distinct strengths, starting with {titles}.",
        "Naming the strength you are using in a given moment makes it easier to repeat it on purpose.",
        "When one of you is stretched thin, the other can carry a shared strength for both of you.",
    ])


def _expanded_narrative(result_a: IndividualResult, result_b: IndividualResult, compatibility: str,
                        tables: ContentTables) -> str:
    pa = [pole.phrases for pole in resolve_poles(result_a.type_code, tables)]
    pb = [pole.phrases for pole in resolve_poles(result_b.type_code, tables)]
    paragraphs = [
        f"Every couple is two sets of instincts learning to share one life. Yours pairs a {result_a.type_name} "
        f"with a {result_b.type_name}. {compatibility}",
        f"On the social side, Partner A tends to {pa[0].insight}, while Partner B tends to {pb[0].insight}. "
        f"In attraction, Partner A tends to {pa[1].insight}, while Partner B tends to {pb[1].insight}.",
        f"In decisions, Partner A tends to {pa[2].insight}, while Partner B tends to {pb[2].insight}. "
        f"In pacing, Partner A tends to {pa[3].insight}, while Partner B tends to {pb[3].insight}.",
        "None of these differences is a problem on its own. What matters is whether you talk about them "
        "before they harden into habits. Use the joint plan in this report as a shared starting point, "
        "review it together every week, and adjust it as you learn more about each other.",
    ]
    return "\n\n".join(paragraphs)


# --- Supporting content ---

def build_couple_supporting_content(
    result_a: IndividualResult,
    result_b: IndividualResult,
    joint: Sequence[JointStrength],
    shared: Sequence[SharedGrowthArea],
    tables: ContentTables,
) -> CoupleSupportingContent:
    poles_a = dict(zip(DIMENSION_ORDER, resolve_poles(result_a.type_code, tables)))
    poles_b = dict(zip(DIMENSION_ORDER, resolve_poles(result_b.type_code, tables)))

    breakdowns = {}
    for dimension in DIMENSION_ORDER:
        score_a = result_a.scores.for_dimension(dimension)
        score_b = result_b.scores.for_dimension(dimension)
        breakdowns[dimension.value] = CoupleStrandBreakdown(
            partner_a_description=(
                f"Partner A leans {poles_a[dimension].word} on {_label(dimension)} with a score of {display_percent(score_a)}%."
            ),
            partner_b_description=(
                f"Partner B leans {poles_b[dimension].word} on {_label(dimension)} with a score of {display_percent(score_b)}%."
            ),
            comparison=HIGH_ALIGNMENT if abs(score_a - score_b) < ALIGNMENT_THRESHOLD else COMPLEMENTARY,
            implications=COUPLE_IMPLICATIONS[dimension],
        )

    examples = [
        EverydayExample(
            scenario=scenario,
            partner_a_response=f"Partner A tends to {poles_a[dimension].phrases.in_practice}.",
            partner_b_response=f"Partner B tends to {poles_b[dimension].phrases.in_practice}.",
            couple_insight=insight,
        )
        for scenario, dimension, insight in EVERYDAY_SCENARIOS
    ]

    first_strength = joint[0].title if joint else "a shared strength"
    first_growth = shared[0].title if shared else "one growth area"

    seven_days = [
        CollaborativeAction(day=1, collaborative_action="Read both profiles together and each point out one surprise",
                            purpose="Build a shared vocabulary for your differences"),
        CollaborativeAction(day=2, collaborative_action=f"Name a recent moment when you used {first_strength} together",
                            purpose="Start from what already works"),
        CollaborativeAction(day=3, collaborative_action="Plan one date that suits both of your rhythms",
                            purpose="Practice meeting in the middle"),
        CollaborativeAction(day=4, collaborative_action=f"Choose {first_growth} as your first shared growth area",
                            purpose="Focus your effort on one change"),
        CollaborativeAction(day=5, collaborative_action="Try one joint quick win together",
                            purpose="Get an early shared result"),
        CollaborativeAction(day=6, collaborative_action="Talk through one everyday example from your profile",
                            purpose="Connect the profile to real life"),
        CollaborativeAction(day=7, collaborative_action="Hold a twenty-minute review of the week",
                            purpose="Decide together what to keep doing"),
    ]

    thirty_days = [
        ProgressiveWeek(week=1, goals="Understand each other's patterns", progressive_actions=[
            "Read both individual profiles side by side",
            "Agree on one word for each of your differences",
            "Schedule a weekly check-in",
        ]),
        ProgressiveWeek(week=2, goals="Build on shared strengths", progressive_actions=[
            f"Use {first_strength} deliberately in one plan together",
            "Try two joint quick wins",
            "Notice one moment when your styles clicked",
        ]),
        ProgressiveWeek(week=3, goals="Work on one shared growth area", progressive_actions=[
            f"Practice {first_growth} together",
            "Discuss one disagreement using your decision styles",
            "Adjust your weekly plan to fit both rhythms",
        ]),
        ProgressiveWeek(week=4, goals="Make the progress stick", progressive_actions=[
            "Review what changed this month",
            "Pick the next shared growth area",
            "Plan a date that celebrates your progress",
        ]),
    ]

    return CoupleSupportingContent(
        strand_breakdowns=breakdowns,
        everyday_examples=examples,
        joint_action_plan_7_days=seven_days,
        joint_action_plan_30_days=thirty_days,
    )


# --- Assembly ---

def build_couple(result_a: IndividualResult, result_b: IndividualResult,
                 tables: Optional[ContentTables] = None) -> CoupleResult:
    """
    Builds the joint profile for two individual results.

    Joint strengths and shared growth areas are deduplicated by title and
    clipped; joint quick wins and the joint plan keep every item from both
    partners. The compatibility sentence depends only on the number of
    differing letters, so swapping partners does not change it.
    """
    tables = tables or load_content_tables()
    mismatches = count_mismatches(result_a.type_code, result_b.type_code)
    compatibility = compatibility_sentence(mismatches)

    joint = build_joint_strengths(result_a, result_b)
    shared = build_shared_growth(result_a, result_b)

    narrative = CoupleNarrative(
        overview_summary=_overview(result_a, result_b, compatibility),
        couple_dynamics=_couple_dynamics(result_a, result_b),
        communication_style_as_couple=_communication(result_a, result_b),
        intimacy_patterns=_intimacy(result_a, result_b),
        shared_growth_areas=_shared_growth_narrative(shared),
        joint_strengths=_joint_strengths_narrative(joint),
        expanded_narrative=_expanded_narrative(result_a, result_b, compatibility, tables),
    )

    profile = JointProfile(
        compatibility=CompatibilitySummary(mismatches=mismatches, summary=compatibility),
        joint_strengths=joint,
        shared_growth_areas=shared,
        relationship_approach=build_couple_approach(result_a, result_b, mismatches),
        joint_quick_wins=build_joint_quick_wins(result_a, result_b),
        joint_30_day_plan=build_joint_plan(result_a, result_b),
        narrative=narrative,
        supporting_content=build_couple_supporting_content(result_a, result_b, joint, shared, tables),
    )
    logger.debug(
        f"Built couple profile {result_a.type_code}+{result_b.type_code}: {mismatches} mismatches, "
        f"{len(joint)} joint strengths, {len(profile.joint_quick_wins)} joint quick wins."
    )
    return CoupleResult(partner_a=result_a, partner_b=result_b, joint_profile=profile)

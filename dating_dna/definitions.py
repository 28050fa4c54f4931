# dating_dna/definitions.py
# Static definitions for the Dating DNA dimensions and question banks.

from typing import Dict, List, Tuple

from .errors import InputError
from .models import Dimension, QuestionBank

# --- Dimensions ---

# Fixed order; a type code carries one pole letter per dimension in this order.
DIMENSION_ORDER: List[Dimension] = [
    Dimension.SOCIAL_ENERGY,
    Dimension.ATTRACTION_DRIVER,
    Dimension.DECISION_FILTER,
    Dimension.RELATIONSHIP_RHYTHM,
]

# (first pole, second pole). Forced answer "A" and agreement on a non-reversed
# Likert item both point to the first pole.
DIMENSION_POLES: Dict[Dimension, Tuple[str, str]] = {
    Dimension.SOCIAL_ENERGY: ("C", "F"),
    Dimension.ATTRACTION_DRIVER: ("P", "T"),
    Dimension.DECISION_FILTER: ("L", "H"),
    Dimension.RELATIONSHIP_RHYTHM: ("S", "O"),
}

DIMENSION_LABELS: Dict[Dimension, str] = {
    Dimension.SOCIAL_ENERGY: "Social Energy",
    Dimension.ATTRACTION_DRIVER: "Attraction Driver",
    Dimension.DECISION_FILTER: "Decision Filter",
    Dimension.RELATIONSHIP_RHYTHM: "Relationship Rhythm",
}

POLE_WORDS: Dict[str, str] = {
    "C": "Connector",
    "F": "Focuser",
    "P": "Present",
    "T": "Potential",
    "L": "Logic",
    "H": "Heart",
    "S": "Structured",
    "O": "Organic",
}

LIKERT_SCALE: Dict[int, str] = {
    1: "Strongly disagree",
    2: "Disagree",
    3: "Somewhat disagree",
    4: "Neutral",
    5: "Somewhat agree",
    6: "Agree",
    7: "Strongly agree",
}
LIKERT_MIDPOINT = 4

# --- Full assessment: 4 forced-choice + 4 Likert items per dimension ---
FULL_QUESTIONS = [
    # Social Energy
    {"id": "SE-FC-1", "dimension": "socialEnergy", "kind": "forced",
     "prompt": "At a social event, you usually...",
     "options": {"a": "Meet as many new people as you can", "b": "Stay with one or two good conversations"}},
    {"id": "SE-FC-2", "dimension": "socialEnergy", "kind": "forced",
     "prompt": "Your ideal way to find a match is...",
     "options": {"a": "Through a wide network of friends, events and apps", "b": "Through a small circle you already trust"}},
    {"id": "SE-FC-3", "dimension": "socialEnergy", "kind": "forced",
     "prompt": "After a busy week, a good night out looks like...",
     "options": {"a": "A lively group dinner or party", "b": "A quiet evening with one person"}},
    {"id": "SE-FC-4", "dimension": "socialEnergy", "kind": "forced",
     "prompt": "When messaging matches, you tend to...",
     "options": {"a": "Keep several conversations going at once", "b": "Focus on one or two promising people"}},
    {"id": "SE-LK-1", "dimension": "socialEnergy", "kind": "likert",
     "prompt": "I feel energized after meeting several new people in one evening."},
    {"id": "SE-LK-2", "dimension": "socialEnergy", "kind": "likert", "reverse_scored": True,
     "prompt": "I prefer getting to know one person deeply before meeting anyone else."},
    {"id": "SE-LK-3", "dimension": "socialEnergy", "kind": "likert",
     "prompt": "I enjoy being introduced to new people by friends."},
    {"id": "SE-LK-4", "dimension": "socialEnergy", "kind": "likert", "reverse_scored": True,
     "prompt": "Large social gatherings tend to drain my energy."},

    # Attraction Driver
    {"id": "AD-FC-1", "dimension": "attractionDriver", "kind": "forced",
     "prompt": "What attracts you most early on?",
     "options": {"a": "How well we fit right now", "b": "What we could build together"}},
    {"id": "AD-FC-2", "dimension": "attractionDriver", "kind": "forced",
     "prompt": "When judging a new match, you weigh...",
     "options": {"a": "Their current lifestyle and habits", "b": "Their ambitions and direction"}},
    {"id": "AD-FC-3", "dimension": "attractionDriver", "kind": "forced",
     "prompt": "A promising partner is someone who...",
     "options": {"a": "Already fits easily into my life", "b": "Shares a vision I want to grow toward"}},
    {"id": "AD-FC-4", "dimension": "attractionDriver", "kind": "forced",
     "prompt": "You are more likely to keep dating someone because...",
     "options": {"a": "Our everyday time together feels easy", "b": "I can picture an exciting future with them"}},
    {"id": "AD-LK-1", "dimension": "attractionDriver", "kind": "likert",
     "prompt": "I care more about present chemistry than future plans."},
    {"id": "AD-LK-2", "dimension": "attractionDriver", "kind": "likert",
     "prompt": "I need to enjoy ordinary days with someone before I commit."},
    {"id": "AD-LK-3", "dimension": "attractionDriver", "kind": "likert", "reverse_scored": True,
     "prompt": "I value long-term potential over present fit."},
    {"id": "AD-LK-4", "dimension": "attractionDriver", "kind": "likert",
     "prompt": "A partner's current routine tells me more than their goals do."},

    # Decision Filter
    {"id": "DF-FC-1", "dimension": "decisionFilter", "kind": "forced",
     "prompt": "When deciding whether to see someone again, you rely on...",
     "options": {"a": "A clear look at compatibility", "b": "How the date made me feel"}},
    {"id": "DF-FC-2", "dimension": "decisionFilter", "kind": "forced",
     "prompt": "In a disagreement, you first want to...",
     "options": {"a": "Find a practical solution", "b": "Feel understood"}},
    {"id": "DF-FC-3", "dimension": "decisionFilter", "kind": "forced",
     "prompt": "A good reason to commit is...",
     "options": {"a": "Our values and goals line up", "b": "It simply feels right"}},
    {"id": "DF-FC-4", "dimension": "decisionFilter", "kind": "forced",
     "prompt": "When a friend asks about your date, you describe...",
     "options": {"a": "What we have in common", "b": "The emotional connection"}},
    {"id": "DF-LK-1", "dimension": "decisionFilter", "kind": "likert",
     "prompt": "I decide with my head more than my heart."},
    {"id": "DF-LK-2", "dimension": "decisionFilter", "kind": "likert", "reverse_scored": True,
     "prompt": "My gut feeling usually settles relationship decisions for me."},
    {"id": "DF-LK-3", "dimension": "decisionFilter", "kind": "likert",
     "prompt": "I like to list pros and cons before making a big relationship choice."},
    {"id": "DF-LK-4", "dimension": "decisionFilter", "kind": "likert", "reverse_scored": True,
     "prompt": "Emotional chemistry matters more to me than practical compatibility."},

    # Relationship Rhythm
    {"id": "RR-FC-1", "dimension": "relationshipRhythm", "kind": "forced",
     "prompt": "Early in dating, you prefer that...",
     "options": {"a": "There's a clear plan", "b": "It unfolds naturally"}},
    {"id": "RR-FC-2", "dimension": "relationshipRhythm", "kind": "forced",
     "prompt": "Talking about exclusivity should happen...",
     "options": {"a": "At a clear point we both expect", "b": "Whenever it comes up on its own"}},
    {"id": "RR-FC-3", "dimension": "relationshipRhythm", "kind": "forced",
     "prompt": "Your ideal weekend with a partner is...",
     "options": {"a": "Planned ahead with a few set activities", "b": "Open, with room for whatever comes up"}},
    {"id": "RR-FC-4", "dimension": "relationshipRhythm", "kind": "forced",
     "prompt": "Relationship milestones should...",
     "options": {"a": "Follow a rough timeline", "b": "Happen when they feel right"}},
    {"id": "RR-LK-1", "dimension": "relationshipRhythm", "kind": "likert",
     "prompt": "I feel more secure when a relationship has defined milestones."},
    {"id": "RR-LK-2", "dimension": "relationshipRhythm", "kind": "likert", "reverse_scored": True,
     "prompt": "I enjoy letting a relationship develop without a timeline."},
    {"id": "RR-LK-3", "dimension": "relationshipRhythm", "kind": "likert",
     "prompt": "I like to know when I will next see someone before a date ends."},
    {"id": "RR-LK-4", "dimension": "relationshipRhythm", "kind": "likert", "reverse_scored": True,
     "prompt": "Spontaneous plans feel more romantic to me than scheduled ones."},
]

# --- Snapshot: 1 forced-choice + 1 Likert item per dimension ---
SNAPSHOT_QUESTIONS = [
    {"id": "SN-SE-FC", "dimension": "socialEnergy", "kind": "forced",
     "prompt": "On a night out you would rather...",
     "options": {"a": "Cast a wide net", "b": "Keep it selective"}},
    {"id": "SN-SE-LK", "dimension": "socialEnergy", "kind": "likert",
     "prompt": "Meeting lots of new people gives me energy."},
    {"id": "SN-AD-FC", "dimension": "attractionDriver", "kind": "forced",
     "prompt": "What draws you in first?",
     "options": {"a": "How we fit today", "b": "Where we could go together"}},
    {"id": "SN-AD-LK", "dimension": "attractionDriver", "kind": "likert", "reverse_scored": True,
     "prompt": "I value long-term potential over present fit."},
    {"id": "SN-DF-FC", "dimension": "decisionFilter", "kind": "forced",
     "prompt": "Big relationship choices are best made with...",
     "options": {"a": "A clear head", "b": "A full heart"}},
    {"id": "SN-DF-LK", "dimension": "decisionFilter", "kind": "likert",
     "prompt": "I decide with my head more than my heart."},
    {"id": "SN-RR-FC", "dimension": "relationshipRhythm", "kind": "forced",
     "prompt": "Early dating feels best when...",
     "options": {"a": "There's a clear plan", "b": "It unfolds naturally"}},
    {"id": "SN-RR-LK", "dimension": "relationshipRhythm", "kind": "likert", "reverse_scored": True,
     "prompt": "Spontaneous plans feel more romantic to me than scheduled ones."},
]

FULL_QUESTION_BANK = QuestionBank.model_validate({
    "id": "full",
    "name": "Dating DNA Full Assessment",
    "forced_per_dimension": 4,
    "likert_per_dimension": 4,
    "questions": FULL_QUESTIONS,
})

SNAPSHOT_QUESTION_BANK = QuestionBank.model_validate({
    "id": "snapshot",
    "name": "Dating DNA Snapshot",
    "forced_per_dimension": 1,
    "likert_per_dimension": 1,
    "questions": SNAPSHOT_QUESTIONS,
})

QUESTION_BANKS: Dict[str, QuestionBank] = {
    FULL_QUESTION_BANK.id: FULL_QUESTION_BANK,
    SNAPSHOT_QUESTION_BANK.id: SNAPSHOT_QUESTION_BANK,
}


def get_question_bank(bank_id: str) -> QuestionBank:
    """Returns the question bank registered under ``bank_id``."""
    try:
        return QUESTION_BANKS[bank_id]
    except KeyError:
        raise InputError(
            f"Unknown question bank '{bank_id}'. Available: {', '.join(sorted(QUESTION_BANKS))}"
        ) from None

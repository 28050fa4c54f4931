# tests/validation/test_validator.py
import pytest

from dating_dna.errors import ValidationError
from dating_dna.models import JointQuickWin
from dating_dna.validator import (
    COUPLE_LISTS,
    INDIVIDUAL_TEXT,
    Bounds,
    check_list,
    check_text,
    count_paragraphs,
    count_sentences,
    count_words,
    validate,
    validate_couple,
    validate_individual,
)


@pytest.fixture(scope="module")
def individual(engine, make_answers):
    return engine.assess(make_answers("CPLS"), completed_at="2024-01-01T00:00:00+00:00")


@pytest.fixture(scope="module")
def couple(engine, make_answers, individual):
    partner = engine.assess(make_answers("FTHO"), completed_at="2024-01-01T00:00:00+00:00")
    return engine.combine(individual, partner)


def expect_failure(result, section, message=None):
    with pytest.raises(ValidationError) as excinfo:
        validate(result)
    assert excinfo.value.section == section
    if message:
        assert excinfo.value.message == message
    return excinfo.value

# --- Counting ---

def test_count_words():
    assert count_words("One two  three\nfour") == 4
    assert count_words("   ") == 0


@pytest.mark.parametrize("text, expected", [
    ("Hi. There! Really?", 3),
    ("Trailing text without a terminator", 1),
    ("Wait... what?!", 2),
    ("", 0),
])
def test_count_sentences(text, expected):
    assert count_sentences(text) == expected


def test_count_paragraphs():
    assert count_paragraphs("First.\n\nSecond.\n  \nThird.") == 3
    assert count_paragraphs("Line one.\nLine two.") == 1


def test_bounds():
    assert Bounds(1, 3).contains(3)
    assert not Bounds(1, 3).contains(4)
    assert Bounds(2).contains(1000)
    assert Bounds(1, 3).describe("sentences") == "1-3 sentences"
    assert Bounds(2).describe("items") == "at least 2 items"


def test_joint_limits_are_doubled():
    """Joint quick wins and plan limits are the sum of both partners' limits."""
    assert COUPLE_LISTS["jointQuickWins"].items == Bounds(6, 20)
    assert COUPLE_LISTS["jointQuickWins"].words == Bounds(200, 1260)
    assert COUPLE_LISTS["joint30DayPlan"].items == Bounds(20, 40)
    assert COUPLE_LISTS["joint30DayPlan"].words == Bounds(200, 1200)

# --- Primitive checks ---

def test_check_text_too_few_words():
    with pytest.raises(ValidationError) as excinfo:
        check_text("relationshipApproach", "Far too short.", INDIVIDUAL_TEXT["relationshipApproach"])
    error = excinfo.value
    assert error.message == "Too few words"
    assert error.expected_range == "100-260 words"
    assert error.actual_value == "3 words"
    assert error.to_dict() == {
        "section": "relationshipApproach",
        "expected_range": "100-260 words",
        "actual_value": "3 words",
        "message": "Too few words",
    }


def test_check_text_empty():
    with pytest.raises(ValidationError, match="Section is empty"):
        check_text("narrative.overviewSummary", "  ", INDIVIDUAL_TEXT["narrative.overviewSummary"])


def test_check_text_too_many_sentences():
    text = " ".join(["Short one."] * 60)
    with pytest.raises(ValidationError) as excinfo:
        check_text("narrative.strengthsSection", text, INDIVIDUAL_TEXT["narrative.strengthsSection"])
    assert excinfo.value.message == "Too many sentences"
    assert excinfo.value.actual_value == "60 sentences"


def test_check_list_item_sentences():
    contract = COUPLE_LISTS["jointStrengths"]
    with pytest.raises(ValidationError) as excinfo:
        check_list("jointStrengths", ["word " * 60] * 3, contract, sentence_texts=["One.", "One. Two.", "Three."])
    assert excinfo.value.section == "jointStrengths[0]"
    assert excinfo.value.message == "Too few sentences"

# --- Individual results ---

def test_valid_individual_passes(individual):
    assert validate(individual) is None


def test_relationship_approach_too_short(individual):
    broken = individual.model_copy(update={"relationship_approach": "Too short."})
    expect_failure(broken, "relationshipApproach", "Too few words")


def test_expanded_narrative_single_paragraph(individual):
    flat = individual.narrative.expanded_narrative.replace("\n\n", " ")
    broken = individual.model_copy(update={
        "narrative": individual.narrative.model_copy(update={"expanded_narrative": flat}),
    })
    error = expect_failure(broken, "narrative.expandedNarrative", "Too few paragraphs")
    assert error.expected_range == "3-6 paragraphs"


def test_too_few_strengths(individual):
    broken = individual.model_copy(update={"strengths": individual.strengths[:2]})
    error = expect_failure(broken, "strengths", "Too few items")
    assert error.actual_value == "2 items"


def test_strength_detail_too_many_sentences(individual):
    first = individual.strengths[0].model_copy(update={"detail": "One. Two. Three. Four. Five."})
    broken = individual.model_copy(update={"strengths": [first] + list(individual.strengths[1:])})
    expect_failure(broken, "strengths[0]", "Too many sentences")


def test_score_out_of_range(individual):
    broken = individual.model_copy(update={"scores": individual.scores.model_copy(update={"social_energy": 120.0})})
    expect_failure(broken, "scores.socialEnergy", "Score out of range")


def test_invalid_type_code(individual):
    expect_failure(individual.model_copy(update={"type_code": "XXXX"}), "typeCode", "Invalid type code")


def test_missing_strand_breakdowns(individual):
    support = individual.supporting_content.model_copy(update={"strand_breakdowns": {}})
    expect_failure(
        individual.model_copy(update={"supporting_content": support}),
        "supportingContent.strandBreakdowns",
        "Missing dimension breakdowns",
    )


def test_validate_individual_prefix(individual):
    broken = individual.model_copy(update={"relationship_approach": "Too short."})
    with pytest.raises(ValidationError) as excinfo:
        validate_individual(broken, prefix="partnerB.")
    assert excinfo.value.section == "partnerB.relationshipApproach"

# --- Couple results ---

def test_valid_couple_passes(couple):
    assert validate_couple(couple) is None


def test_couple_partner_errors_are_prefixed(couple):
    broken_partner = couple.partner_a.model_copy(update={"relationship_approach": "Too short."})
    expect_failure(couple.model_copy(update={"partner_a": broken_partner}), "partnerA.relationshipApproach")


def test_couple_joint_section(couple):
    joint = couple.joint_profile.model_copy(update={"joint_strengths": couple.joint_profile.joint_strengths[:1]})
    expect_failure(couple.model_copy(update={"joint_profile": joint}), "jointProfile.jointStrengths", "Too few items")


def test_too_many_joint_strengths(couple):
    strengths = couple.joint_profile.joint_strengths
    joint = couple.joint_profile.model_copy(update={"joint_strengths": strengths + strengths[:1]})
    error = expect_failure(couple.model_copy(update={"joint_profile": joint}), "jointProfile.jointStrengths", "Too many items")
    assert error.expected_range == "3-10 items"


def test_joint_quick_wins_over_word_limit(couple):
    """Twenty wins at the item ceiling still fail when their text runs past the word ceiling."""
    wins = tuple(JointQuickWin(action="Act.", implementation="word " * 70) for _ in range(20))
    joint = couple.joint_profile.model_copy(update={"joint_quick_wins": wins})
    error = expect_failure(couple.model_copy(update={"joint_profile": joint}), "jointProfile.jointQuickWins", "Too many words")
    assert error.expected_range == "200-1260 words"


def test_couple_mismatch_range(couple):
    compatibility = couple.joint_profile.compatibility.model_copy(update={"mismatches": 5})
    joint = couple.joint_profile.model_copy(update={"compatibility": compatibility})
    expect_failure(couple.model_copy(update={"joint_profile": joint}), "jointProfile.compatibility", "Too many mismatches")


def test_validate_rejects_other_types():
    with pytest.raises(TypeError):
        validate({"typeCode": "CPLS"})

import itertools
import logging

import pytest

from dating_dna.definitions import DIMENSION_ORDER, DIMENSION_POLES, FULL_QUESTION_BANK
from dating_dna.engine import DatingDNAEngine
from dating_dna.loader import load_content_tables
from dating_dna.models import ForcedChoiceQuestion, QuestionBank

ALL_TYPE_CODES = ["".join(letters) for letters in itertools.product(*(DIMENSION_POLES[d] for d in DIMENSION_ORDER))]


def answers_for_type(type_code: str, bank: QuestionBank = FULL_QUESTION_BANK) -> dict:
    """Builds a complete, maximally decisive answer set that classifies as ``type_code``."""
    answers = {}
    for question in bank.questions:
        first_pole = DIMENSION_POLES[question.dimension][0]
        wants_first = type_code[DIMENSION_ORDER.index(question.dimension)] == first_pole
        if isinstance(question, ForcedChoiceQuestion):
            answers[question.id] = "A" if wants_first else "B"
        else:
            agree = wants_first != question.reverse_scored
            answers[question.id] = 7 if agree else 1
    return answers


def neutral_answers(bank: QuestionBank = FULL_QUESTION_BANK) -> dict:
    """Likert items at the midpoint; forced items split evenly between A and B per dimension."""
    answers = {}
    for dimension in DIMENSION_ORDER:
        forced = [q for q in bank.for_dimension(dimension) if isinstance(q, ForcedChoiceQuestion)]
        for index, question in enumerate(forced):
            answers[question.id] = "A" if index % 2 == 0 else "B"
        for question in bank.for_dimension(dimension):
            if not isinstance(question, ForcedChoiceQuestion):
                answers[question.id] = 4
    return answers


@pytest.fixture(scope="session")
def tables():
    return load_content_tables()


@pytest.fixture(scope="session")
def engine(tables):
    return DatingDNAEngine(tables=tables)


@pytest.fixture(scope="session")
def make_answers():
    return answers_for_type


@pytest.fixture(scope="session")
def type_codes():
    return list(ALL_TYPE_CODES)


@pytest.fixture(scope="session")
def make_neutral_answers():
    return neutral_answers


@pytest.fixture
def restore_root_logging():
    """Restores the root logger handlers and level after the test."""
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield root_logger
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)

# dating_dna/classifier.py
# Maps dimension scores to a four-letter type code and display name.

import logging

from .definitions import DIMENSION_ORDER, DIMENSION_POLES, POLE_WORDS
from .errors import InputError
from .models import Dimension, Scores, TypeProfile

logger = logging.getLogger(__name__)

POLE_THRESHOLD = 50.0  # score >= threshold -> first pole


def pole_for(dimension: Dimension, score: float) -> str:
    first, second = DIMENSION_POLES[dimension]
    return first if score >= POLE_THRESHOLD else second


def is_valid_type_code(code) -> bool:
    if not isinstance(code, str) or len(code) != len(DIMENSION_ORDER):
        return False
    return all(letter in DIMENSION_POLES[dimension] for letter, dimension in zip(code, DIMENSION_ORDER))


def type_name_from_code(code: str) -> str:
    """'CPLS' -> 'Connector–Present Logic–Structured'."""
    if not is_valid_type_code(code):
        raise InputError(f"Invalid type code {code!r}")
    words = [POLE_WORDS[letter] for letter in code]
    return f"{words[0]}–{words[1]} {words[2]}–{words[3]}"


def classify(scores: Scores) -> TypeProfile:
    code = "".join(pole_for(dimension, scores.for_dimension(dimension)) for dimension in DIMENSION_ORDER)
    logger.debug(f"Classified scores as type {code}.")
    return TypeProfile(type_code=code, type_name=type_name_from_code(code))

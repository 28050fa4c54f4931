import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError as SchemaValidationError

from .definitions import DIMENSION_POLES, POLE_WORDS
from .errors import ContentConfigurationError
from .models import ContentTables

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PATH = Path(__file__).resolve().parent / "assets" / "content.yml"

# Phrases spliced into the middle of template sentences; a stray period here
# would change every sentence count downstream.
CLAUSE_PHRASES = ("style", "insight", "growth_focus", "strength_focus", "in_practice")
SENTENCE_PUNCTUATION = re.compile(r"[.!?]")


def load_content_data(data: Dict[str, Any]) -> ContentTables:
    """
    Validates raw content data against the ContentTables model
    and performs the cross-checks pydantic cannot express.
    """
    try:
        tables = ContentTables.model_validate(data)
    except SchemaValidationError as e:
        raise ContentConfigurationError(f"Content tables failed schema validation: {e}") from e

    expected = {letter for poles in DIMENSION_POLES.values() for letter in poles}
    missing = sorted(expected - set(tables.poles))
    if missing:
        raise ContentConfigurationError(f"Content tables are missing poles: {', '.join(missing)}")
    unknown = sorted(set(tables.poles) - expected)
    if unknown:
        raise ContentConfigurationError(f"Content tables define unknown poles: {', '.join(unknown)}")

    for letter, pole in tables.poles.items():
        if pole.word != POLE_WORDS[letter]:
            raise ContentConfigurationError(f"Pole '{letter}' word is '{pole.word}', expected '{POLE_WORDS[letter]}'")

        for name in CLAUSE_PHRASES:
            if SENTENCE_PUNCTUATION.search(getattr(pole.phrases, name)):
                raise ContentConfigurationError(f"Phrase '{name}' of pole '{letter}' must not contain sentence punctuation")

        titles = set()
        for item in list(pole.strengths) + list(pole.growth):
            if item.title in titles:
                raise ContentConfigurationError(f"Duplicate title '{item.title}' in pole '{letter}'")
            titles.add(item.title)

    return tables


@lru_cache(maxsize=None)
def load_content_tables(path: Optional[str] = None) -> ContentTables:
    """
    Loads the content tables from YAML, validates them and caches the result
    per path, so each file is read at most once per process.
    """
    file_path = Path(path) if path else DEFAULT_CONTENT_PATH
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ContentConfigurationError(f"Content file not found: {file_path}")
    except yaml.YAMLError as e:
        raise ContentConfigurationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise ContentConfigurationError(f"YAML file is empty or invalid: {file_path}")

    tables = load_content_data(data)
    logger.info(f"Loaded content tables version {tables.version} from {file_path}")
    return tables

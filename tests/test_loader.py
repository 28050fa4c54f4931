# tests/test_loader.py
import copy

import pytest
import yaml

from dating_dna.errors import ContentConfigurationError
from dating_dna.loader import DEFAULT_CONTENT_PATH, load_content_data, load_content_tables
from dating_dna.models import ContentTables

with open(DEFAULT_CONTENT_PATH, 'r', encoding='utf-8') as f:
    VALID_CONTENT = yaml.safe_load(f)


@pytest.fixture
def content():
    return copy.deepcopy(VALID_CONTENT)

# --- load_content_data ---

def test_load_valid_content(content):
    tables = load_content_data(content)
    assert isinstance(tables, ContentTables)
    assert tables.version == "1.0.0"
    assert set(tables.poles) == set("CFPTLHSO")
    assert tables.poles["H"].word == "Heart"


def test_schema_error_is_wrapped(content):
    del content["weekly_anchors"]
    with pytest.raises(ContentConfigurationError, match="schema validation"):
        load_content_data(content)


def test_empty_strength_list_rejected(content):
    content["poles"]["C"]["strengths"] = []
    with pytest.raises(ContentConfigurationError, match="schema validation"):
        load_content_data(content)


def test_missing_pole(content):
    del content["poles"]["O"]
    with pytest.raises(ContentConfigurationError, match="missing poles: O"):
        load_content_data(content)


def test_unknown_pole(content):
    content["poles"]["X"] = copy.deepcopy(content["poles"]["C"])
    with pytest.raises(ContentConfigurationError, match="unknown poles: X"):
        load_content_data(content)


def test_pole_word_mismatch(content):
    content["poles"]["F"]["word"] = "Listener"
    with pytest.raises(ContentConfigurationError, match="expected 'Focuser'"):
        load_content_data(content)


@pytest.mark.parametrize("phrase", ["style", "insight", "growth_focus", "strength_focus", "in_practice"])
def test_clause_phrase_punctuation(content, phrase):
    content["poles"]["P"]["phrases"][phrase] += ". Then more"
    with pytest.raises(ContentConfigurationError, match=f"Phrase '{phrase}' of pole 'P'"):
        load_content_data(content)


def test_duplicate_title_within_pole(content):
    pole = content["poles"]["L"]
    pole["growth"][0]["title"] = pole["strengths"][0]["title"]
    with pytest.raises(ContentConfigurationError, match="Duplicate title"):
        load_content_data(content)

# --- load_content_tables ---

def test_default_tables_are_cached():
    assert load_content_tables() is load_content_tables()


def test_load_from_custom_file(tmp_path, content):
    content["version"] = "2.0.0-test"
    path = tmp_path / "content.yml"
    path.write_text(yaml.safe_dump(content, allow_unicode=True), encoding='utf-8')
    assert load_content_tables(str(path)).version == "2.0.0-test"


def test_missing_file(tmp_path):
    with pytest.raises(ContentConfigurationError, match="not found"):
        load_content_tables(str(tmp_path / "missing.yml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("poles: [unclosed\n", encoding='utf-8')
    with pytest.raises(ContentConfigurationError, match="Error parsing YAML"):
        load_content_tables(str(path))


def test_empty_yaml(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding='utf-8')
    with pytest.raises(ContentConfigurationError, match="empty or invalid"):
        load_content_tables(str(path))


def test_loaded_tables_are_read_only(content):
    tables = load_content_data(content)
    with pytest.raises(TypeError):
        tables.poles["C"] = tables.poles["F"]
    with pytest.raises(AttributeError):
        tables.poles["C"].strengths.clear()

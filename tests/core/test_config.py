# tests/core/test_config.py
import pytest

from dating_dna.core.config import EngineSettings

SETTING_NAMES = ["LOG_LEVEL", "CONTENT_PATH", "DEFAULT_QUESTION_BANK", "STRICT_INPUT", "REQUIRE_COMPLETE"]


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTING_NAMES:
        monkeypatch.delenv(f"DATING_DNA_{name}", raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = EngineSettings()
    assert settings.log_level == "INFO"
    assert settings.content_path is None
    assert settings.default_question_bank == "full"
    assert settings.strict_input is True
    assert settings.require_complete is False


def test_environment_overrides(clean_env):
    clean_env.setenv("DATING_DNA_LOG_LEVEL", "DEBUG")
    clean_env.setenv("DATING_DNA_DEFAULT_QUESTION_BANK", "snapshot")
    clean_env.setenv("DATING_DNA_STRICT_INPUT", "false")
    clean_env.setenv("DATING_DNA_REQUIRE_COMPLETE", "1")
    clean_env.setenv("DATING_DNA_CONTENT_PATH", "/tmp/content.yml")
    settings = EngineSettings()
    assert settings.log_level == "DEBUG"
    assert settings.default_question_bank == "snapshot"
    assert settings.strict_input is False
    assert settings.require_complete is True
    assert settings.content_path == "/tmp/content.yml"


def test_keyword_arguments_win_over_environment(clean_env):
    clean_env.setenv("DATING_DNA_STRICT_INPUT", "false")
    assert EngineSettings(strict_input=True).strict_input is True

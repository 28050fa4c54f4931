from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class EngineSettings(BaseSettings):
    log_level: str = "INFO"
    content_path: Optional[str] = None  # None -> packaged assets/content.yml
    default_question_bank: str = "full"
    strict_input: bool = True  # reject unknown ids and out-of-domain answers
    require_complete: bool = False  # reject partial answer sets

    model_config = SettingsConfigDict(env_prefix='DATING_DNA_')

# Instantiate settings
engine_settings = EngineSettings()

if __name__ == "__main__":
    # For testing the configuration loading
    print("Dating DNA Engine Configuration:")
    print(f"  Log level: {engine_settings.log_level}")
    print(f"  Content path: {engine_settings.content_path or '(packaged default)'}")
    print(f"  Default question bank: {engine_settings.default_question_bank}")
    print(f"  Strict input: {engine_settings.strict_input}")
    print(f"  Require complete: {engine_settings.require_complete}")
    print("\nTo override, set environment variables like DATING_DNA_LOG_LEVEL, DATING_DNA_STRICT_INPUT, DATING_DNA_CONTENT_PATH.")

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class AssessmentSettings(BaseSettings):
    content_path: Optional[str] = None  # Bundled content when unset
    session_key: str = "assessmentData"
    redis_url: Optional[str] = None  # In-memory store when unset
    result_ttl_seconds: Optional[int] = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='ASSESSMENT_')

# Instantiate settings
assessment_settings = AssessmentSettings()

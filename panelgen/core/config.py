from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings): # load all key=value pairs from .env
    """ Load Keys and generation defaults"""
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'panels.db'}"
    GEMINI_KEY: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None
    DEFAULT_LLM_MODEL: str = "gemini-2.5-flash"

    # generation policy
    ENDPOINT_PLACEMENT: str = "corner" # "corner" or "border"
    WALL_SPACE: str = "node" # "node" or "cell"
    MAX_PLACEMENT_ATTEMPTS: int = 25 # redraws per symbol before it is skipped

    PANEL_LIST_LIMIT: int = 20
    EXAMPLE_PANEL_COUNT: int = 3 # stored panels handed to the LLM as examples
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app_errors.log"

    model_config = SettingsConfigDict(
        env_file = BASE_DIR/".env",
        env_file_encoding = "utf-8",
        extra = "ignore",
    )

settings = Settings()

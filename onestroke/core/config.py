from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Optional


BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings): # load all key=value pairs from .env
    """ Game and hosting settings"""
    LEVELS_FILE: Optional[str] = None # JSON catalog, built-in levels if not set
    SKIP_INVALID_LEVELS: bool = False
    NODE_HIT_RADIUS: float = 36.0 # pixels
    CANVAS_SCALE: float = 0.9 # share of min(width, height) used by the level
    SUCCESS_DELAY: float = 2.0 # seconds the success banner stays before next level
    HINT_COUNT: int = 2
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = f"{BASE_DIR / 'app_errors.log'}"

    model_config = SettingsConfigDict(
        env_file = BASE_DIR/".env",
        env_file_encoding = "utf-8",
        extra = "ignore",
    )

settings = Settings()

# =======================================================================================
# securepass/config.py - Configuration Management
# =======================================================================================
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

def _env_float(name: str, default: float) -> Optional[float]:
    """Helper to parse float environment variables; non-positive means 'no limit'."""
    v = os.getenv(name)
    try:
        value = float(v) if v else default
    except ValueError:
        value = default
    return value if value > 0 else None

class Config:
    # Database (backs the key-value store)
    DB_URL: str = os.getenv("DB_URL", "sqlite:///securepass.db")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "20"))

    # API Settings
    API_DEBUG: bool = os.getenv("API_DEBUG", "false").lower() == "true"
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Plausibility check (generative AI text service)
    AI_API_KEY: str = os.getenv("AI_API_KEY", "")
    AI_MODEL: str = os.getenv("AI_MODEL", "gemini-2.5-flash")
    AI_API_URL: str = os.getenv(
        "AI_API_URL", "https://generativelanguage.googleapis.com/v1beta/models"
    )
    AI_TIMEOUT: Optional[float] = _env_float("AI_TIMEOUT", 30.0)

    # Pass defaults
    DEFAULT_DEPARTMENT: str = os.getenv("DEFAULT_DEPARTMENT", "Main Reception")

config = Config()

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "db" / "seed_enrollments.json"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    ENROLLMENTS_DATA_PATH = os.getenv("ENROLLMENTS_DATA_PATH", "./data/enrollments.json")
    ENROLLMENTS_SEED_PATH = os.getenv("ENROLLMENTS_SEED_PATH", str(DEFAULT_SEED_PATH))
    ENROLLMENTS_BOOTSTRAP_SEED = _env_flag("ENROLLMENTS_BOOTSTRAP_SEED", True)
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-secret")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE")
    CORS_ALLOW_ORIGINS = [
        origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
    ]

settings = Settings()

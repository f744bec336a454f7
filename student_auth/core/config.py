import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3002"))
API_PREFIX = os.getenv("API_PREFIX", "/api")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["*"])

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./student_auth.db")
DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "168"))

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

ADMIN_SEED_EMAIL = os.getenv("ADMIN_SEED_EMAIL", "admin@iset.tn")
ADMIN_SEED_PASSWORD = os.getenv("ADMIN_SEED_PASSWORD", "admin123")
ADMIN_SEED_NAME = os.getenv("ADMIN_SEED_NAME", "Administrateur")
# Off by default so an operator-changed admin password survives restarts.
ADMIN_SEED_RESET_PASSWORD = _get_bool(os.getenv("ADMIN_SEED_RESET_PASSWORD"), default=False)


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if not 4 <= BCRYPT_ROUNDS <= 31:
        raise RuntimeError("BCRYPT_ROUNDS must be between 4 and 31.")

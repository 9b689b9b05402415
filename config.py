import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./identity.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRATION_MINUTES = int(data.get("JWT_EXPIRATION_MINUTES", 60))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 8))
    PASSWORD_RESET_TOKEN_TTL_HOURS = int(data.get("PASSWORD_RESET_TOKEN_TTL_HOURS", 24))
    PASSWORD_RESET_MAX_ISSUE_ATTEMPTS = int(data.get("PASSWORD_RESET_MAX_ISSUE_ATTEMPTS", 3))
    PASSWORD_RESET_INVALIDATE_OUTSTANDING = bool(
        data.get("PASSWORD_RESET_INVALIDATE_OUTSTANDING", False)
    )
    PASSWORD_RESET_URL = data.get(
        "PASSWORD_RESET_URL", "https://app.example.com/reset-password?token={token}"
    )

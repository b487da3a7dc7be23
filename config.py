"""
DocBridge Configuration
Supports AWS Parameter Store for production secrets
"""
import logging
import os
from functools import lru_cache

import boto3

logger = logging.getLogger(__name__)


def get_parameter(name: str, default: str = "") -> str:
    """Get parameter from AWS Parameter Store or environment"""
    # Environment variable takes precedence
    env_key = name.upper().replace("-", "_").replace("/", "_")
    if env_key in os.environ:
        return os.environ[env_key]

    if os.environ.get("USE_PARAMETER_STORE"):
        try:
            ssm = boto3.client("ssm", region_name=os.environ.get("AWS_REGION", "us-west-2"))
            path = os.environ.get("PARAMETER_STORE_PATH", "/docbridge/prod/")
            response = ssm.get_parameter(Name=f"{path}{name}", WithDecryption=True)
            return response["Parameter"]["Value"]
        except Exception as e:
            logger.warning("Could not load %s from Parameter Store: %s", name, e)

    return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw.isdigit() else default


class Config:
    """Base configuration"""
    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")

    # Security
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600

    # File uploads
    MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
    MAX_UPLOAD_LABEL = "10 MB"
    # Leave headroom for the multipart envelope; the file itself is checked against MAX_UPLOAD_BYTES
    MAX_CONTENT_LENGTH = MAX_UPLOAD_BYTES + 64 * 1024
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "/tmp/docbridge_uploads")

    # OpenAI
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4.1")
    OPENAI_TIMEOUT = _env_int("OPENAI_TIMEOUT", 60)

    # "llm", "heuristic", or "auto" (llm when a key is configured)
    ACTION_PLAN_MODE = os.environ.get("ACTION_PLAN_MODE", "auto").strip().lower()

    # Google Cloud Translation
    GOOGLE_CLOUD_PROJECT_ID = os.environ.get("GOOGLE_CLOUD_PROJECT_ID", "")
    GOOGLE_CLOUD_LOCATION = os.environ.get("GOOGLE_CLOUD_LOCATION", "global")
    TRANSLATION_SOURCE_LANGUAGE = os.environ.get("TRANSLATION_SOURCE_LANGUAGE", "en")
    MAX_TRANSLATE_CHUNK = _env_int("MAX_TRANSLATE_CHUNK", 25_000)  # Google's per-request character limit

    # AWS
    AWS_REGION = os.environ.get("AWS_REGION", "us-west-2")

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # App Version
    APP_VERSION = os.environ.get("APP_VERSION", "2026.10")
    BUILD_TIME = os.environ.get("BUILD_TIME", "")
    GIT_COMMIT = os.environ.get("GIT_COMMIT", "")


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Override with Parameter Store in production
    SECRET_KEY = get_parameter("secret-key", Config.SECRET_KEY)
    OPENAI_API_KEY = get_parameter("openai-api-key", Config.OPENAI_API_KEY)
    GOOGLE_CLOUD_PROJECT_ID = get_parameter("google-cloud-project-id", Config.GOOGLE_CLOUD_PROJECT_ID)


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    WTF_CSRF_ENABLED = False
    OPENAI_API_KEY = ""
    ACTION_PLAN_MODE = "auto"
    GOOGLE_CLOUD_PROJECT_ID = "test-project"
    UPLOAD_FOLDER = os.path.join(os.environ.get("TMPDIR", "/tmp"), "docbridge_test_uploads")


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


@lru_cache()
def get_config(env: str = None):
    """Get configuration by environment name"""
    env = env or os.environ.get("FLASK_ENV", "development")
    return config.get(env, DevelopmentConfig)

import os
from datetime import timedelta

from dotenv import load_dotenv


load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///feed.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv(
        "JSON_WEB_TOKEN_SECRET",
        os.getenv("JWT_SECRET_KEY", "dev-secret"),
    )
    JWT_IDENTITY_CLAIM = "userId"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "60"))
    )

    POSTS_PER_PAGE = int(os.getenv("POSTS_PER_PAGE", "2"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    MINIO_ENDPOINT = os.getenv("MINIO_ENDPOINT", "localhost:9000")
    MINIO_ACCESS_KEY = os.getenv("MINIO_ACCESS_KEY", "admin")
    MINIO_SECRET_KEY = os.getenv("MINIO_SECRET_KEY", "supersecret")
    MINIO_BUCKET = os.getenv("MINIO_BUCKET", "feed-images")
    MINIO_SECURE = _env_bool("MINIO_SECURE", False)
    MINIO_CONNECT_TIMEOUT = float(os.getenv("MINIO_CONNECT_TIMEOUT", "5"))
    MINIO_READ_TIMEOUT = float(os.getenv("MINIO_READ_TIMEOUT", "20"))
    MINIO_HTTP_POOL_MAXSIZE = int(os.getenv("MINIO_HTTP_POOL_MAXSIZE", "32"))
    MEDIA_LOCAL_FALLBACK_ENABLED = _env_bool(
        "MEDIA_LOCAL_FALLBACK_ENABLED",
        True,
    )
    MEDIA_STREAM_CHUNK_SIZE = int(os.getenv("MEDIA_STREAM_CHUNK_SIZE", str(256 * 1024)))

    _cors_origins_raw = os.getenv("CORS_ALLOWED_ORIGINS", "").strip()
    if _cors_origins_raw:
        CORS_ALLOWED_ORIGINS = [
            item.strip() for item in _cors_origins_raw.split(",") if item.strip()
        ]
    else:
        CORS_ALLOWED_ORIGINS = "*"

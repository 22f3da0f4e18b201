from threading import Lock

import urllib3
from flask import current_app
from minio import Minio


_lock = Lock()
_client = None
_client_settings = None


def _settings_from_config():
    config = current_app.config
    return {
        "endpoint": config["MINIO_ENDPOINT"],
        "access_key": config["MINIO_ACCESS_KEY"],
        "secret_key": config["MINIO_SECRET_KEY"],
        "secure": config["MINIO_SECURE"],
        "connect_timeout": config["MINIO_CONNECT_TIMEOUT"],
        "read_timeout": config["MINIO_READ_TIMEOUT"],
        "pool_size": config.get("MINIO_HTTP_POOL_MAXSIZE", 32),
    }


def _build_client(settings):
    pool = urllib3.PoolManager(
        timeout=urllib3.Timeout(
            connect=settings["connect_timeout"],
            read=settings["read_timeout"],
        ),
        retries=False,
        maxsize=settings["pool_size"],
    )
    return Minio(
        settings["endpoint"],
        access_key=settings["access_key"],
        secret_key=settings["secret_key"],
        secure=settings["secure"],
        http_client=pool,
    )


def get_minio_client():
    global _client, _client_settings

    settings = _settings_from_config()
    with _lock:
        if _client is None or _client_settings != settings:
            _client = _build_client(settings)
            _client_settings = settings
        return _client


def image_bucket() -> str:
    return current_app.config["MINIO_BUCKET"]


def ensure_image_bucket(client) -> str:
    """Create the image bucket on first upload; returns its name."""
    bucket = image_bucket()
    if not client.bucket_exists(bucket):
        client.make_bucket(bucket)
    return bucket

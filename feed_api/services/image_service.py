import logging
import os
import uuid

from flask import current_app

from feed_api.errors import MediaStorageError, ValidationFailed
from feed_api.extensions.minio_client import ensure_image_bucket, get_minio_client, image_bucket


logger = logging.getLogger(__name__)

ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
}

OBJECT_PREFIX = "images/"
LOCAL_PREFIX = "static/images/"


def _extension_for_mimetype(mimetype: str) -> str:
    mapping = {
        "image/jpeg": "jpeg",
        "image/jpg": "jpeg",
        "image/png": "png",
        "image/webp": "webp",
    }
    return mapping.get(mimetype, mimetype.split("/")[-1])


def _get_stream_and_length(file_storage):
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return stream, length
    except (AttributeError, OSError):
        return stream, -1


def _local_image_root() -> str:
    return os.path.join(current_app.static_folder, "images")


def _store_locally(file_storage, filename: str) -> str:
    absolute_path = os.path.join(_local_image_root(), filename)
    os.makedirs(os.path.dirname(absolute_path), exist_ok=True)

    stream = getattr(file_storage, "stream", None)
    if stream is not None and hasattr(stream, "seek"):
        stream.seek(0)

    file_storage.save(absolute_path)
    return LOCAL_PREFIX + filename


def save_image(file_storage) -> str:
    """Store an uploaded image and return its path in the asset store.

    MinIO objects are named ``images/<uuid>.<ext>``. When MinIO cannot be
    reached and the local fallback is enabled, the file lands in the static
    folder and the path is ``static/images/<uuid>.<ext>``.
    """
    if not getattr(file_storage, "filename", ""):
        raise ValidationFailed("No image provided.")

    mimetype = file_storage.mimetype or ""
    if mimetype not in ALLOWED_IMAGE_MIME_TYPES:
        raise ValidationFailed(f"Unsupported media type: {mimetype}")

    filename = f"{uuid.uuid4()}.{_extension_for_mimetype(mimetype)}"
    fallback_enabled = bool(current_app.config.get("MEDIA_LOCAL_FALLBACK_ENABLED", True))

    try:
        minio = get_minio_client()
        bucket = ensure_image_bucket(minio)

        object_name = OBJECT_PREFIX + filename
        stream, length = _get_stream_and_length(file_storage)
        upload_kwargs = {
            "bucket_name": bucket,
            "object_name": object_name,
            "data": stream,
            "length": length,
            "content_type": mimetype,
        }
        if length == -1:
            upload_kwargs["part_size"] = 10 * 1024 * 1024

        minio.put_object(**upload_kwargs)
        return object_name
    except Exception as e:
        if not fallback_enabled:
            raise MediaStorageError() from e
        logger.warning("MinIO upload failed, storing %s locally: %s", filename, e)

    try:
        return _store_locally(file_storage, filename)
    except OSError as e:
        raise MediaStorageError() from e


def clear_image(image_path) -> None:
    """Delete a stored image. Failures are logged and never raised."""
    if not image_path:
        return

    try:
        if image_path.startswith(LOCAL_PREFIX):
            root = os.path.realpath(_local_image_root())
            absolute_path = os.path.realpath(
                os.path.join(root, image_path[len(LOCAL_PREFIX):])
            )
            if os.path.dirname(absolute_path) != root:
                logger.warning("Refusing to delete image outside %s: %s", root, image_path)
                return
            os.remove(absolute_path)
        elif image_path.startswith(OBJECT_PREFIX) and ".." not in image_path:
            get_minio_client().remove_object(
                bucket_name=image_bucket(),
                object_name=image_path,
            )
        else:
            logger.warning("Ignoring image path outside the asset store: %s", image_path)
            return
    except Exception:
        logger.exception("Could not delete image %s", image_path)
        return

    logger.info("Deleted image %s", image_path)

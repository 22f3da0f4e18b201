import logging

from flask import Blueprint, Response, current_app, jsonify, request, stream_with_context
from minio.error import S3Error

from feed_api.extensions.minio_client import get_minio_client, image_bucket

logger = logging.getLogger(__name__)

media_bp = Blueprint("media", __name__)


def _media_error_response(error: S3Error):
    if error.code in {"NoSuchKey", "NoSuchBucket", "NoSuchObject"}:
        return jsonify({"message": "Media not found"}), 404
    return jsonify({"message": "Media unavailable"}), 503


@media_bp.route("/media/<path:object_name>", methods=["GET", "HEAD"])
def get_media(object_name: str):
    bucket = image_bucket()

    try:
        minio = get_minio_client()
        stat = minio.stat_object(bucket_name=bucket, object_name=object_name)
    except S3Error as e:
        return _media_error_response(e)
    except Exception:
        logger.exception("Could not stat %s", object_name)
        return jsonify({"message": "Media unavailable"}), 503

    headers = {
        "Content-Type": getattr(stat, "content_type", None) or "application/octet-stream",
        "Cache-Control": "public, max-age=604800",
    }
    if getattr(stat, "size", None) is not None:
        headers["Content-Length"] = str(stat.size)
    etag = (getattr(stat, "etag", None) or "").strip('"')
    if etag:
        headers["ETag"] = f'"{etag}"'

    if request.method == "HEAD":
        return Response(status=200, headers=headers)

    try:
        minio_response = minio.get_object(bucket_name=bucket, object_name=object_name)
    except S3Error as e:
        return _media_error_response(e)
    except Exception:
        logger.exception("Could not fetch %s", object_name)
        return jsonify({"message": "Media unavailable"}), 503

    chunk_size = max(int(current_app.config.get("MEDIA_STREAM_CHUNK_SIZE", 256 * 1024)), 1024)

    def _stream():
        try:
            yield from minio_response.stream(chunk_size)
        finally:
            minio_response.close()
            minio_response.release_conn()

    return Response(
        stream_with_context(_stream()),
        status=200,
        headers=headers,
        direct_passthrough=True,
    )

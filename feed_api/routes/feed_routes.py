from flask import Blueprint, jsonify, request

from feed_api.routes.decorators import token_required
from feed_api.services import post_service


feed_bp = Blueprint("feed", __name__)


def _read_post_fields():
    content_type = (request.content_type or "").lower()

    if "multipart/form-data" in content_type:
        return (
            request.form.get("title"),
            request.form.get("content"),
            request.form.get("image"),
            request.files.get("image"),
        )

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    return data.get("title"), data.get("content"), data.get("image"), None


@feed_bp.route("/posts", methods=["GET"])
def list_posts():
    page = request.args.get("page", default=1, type=int)

    data = post_service.get_posts(page)
    return jsonify({"message": "Fetched posts successfully.", **data}), 200


@feed_bp.route("/post", methods=["POST"])
@token_required
def create_post(user_id):
    title, content, _, image = _read_post_fields()

    result = post_service.create_post(title, content, image, user_id)
    return jsonify({"message": "Post created successfully!", **result}), 201


@feed_bp.route("/post/<int:post_id>", methods=["GET"])
def get_post(post_id):
    post = post_service.get_post(post_id)
    return jsonify({"message": "Post fetched.", "post": post}), 200


@feed_bp.route("/post/<int:post_id>", methods=["PUT"])
@token_required
def update_post(post_id, user_id):
    title, content, image_url, image_file = _read_post_fields()

    post = post_service.update_post(
        post_id,
        title=title,
        content=content,
        image_url=image_url,
        image_file=image_file,
        user_id=user_id,
    )
    return jsonify({"message": "Post updated!", "post": post}), 200


@feed_bp.route("/post/<int:post_id>", methods=["DELETE"])
@token_required
def delete_post(post_id, user_id):
    post_service.delete_post(post_id, user_id)
    return jsonify({"message": "Deleted post."}), 200

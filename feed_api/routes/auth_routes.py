from flask import Blueprint, jsonify, request

from feed_api.errors import ValidationFailed
from feed_api.routes.decorators import token_required
from feed_api.services import auth_service


auth_bp = Blueprint("auth", __name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed("Invalid JSON body")
    return data


@auth_bp.route("/signup", methods=["PUT", "POST"])
def signup():
    user = auth_service.signup(_json_body())
    return jsonify({"message": "User created!", "userId": str(user.id)}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    return jsonify(auth_service.login(_json_body())), 200


@auth_bp.route("/status", methods=["GET"])
@token_required
def get_status(user_id):
    return jsonify({"status": auth_service.get_status(user_id)}), 200


@auth_bp.route("/status", methods=["PATCH"])
@token_required
def update_status(user_id):
    auth_service.update_status(user_id, _json_body())
    return jsonify({"message": "User updated."}), 200

import logging

from marshmallow import ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from feed_api.errors import NotFound, Unauthenticated, ValidationFailed
from feed_api.repositories import user_repository
from feed_api.schemas.user_schema import login_schema, signup_schema, status_schema
from feed_api.services.token_service import issue_token


logger = logging.getLogger(__name__)


def _load(schema, data):
    try:
        return schema.load(data or {})
    except ValidationError as e:
        raise ValidationFailed(data=e.messages) from e


def signup(data):
    fields = _load(signup_schema, data)
    email = fields["email"].lower()

    if user_repository.get_by_email(email):
        raise ValidationFailed(data={"email": ["E-Mail address already exists!"]})

    user = user_repository.create_user(
        email=email,
        password_hash=generate_password_hash(fields["password"]),
        name=fields["name"],
    )
    logger.info("Registered user %s", user.id)
    return user


def login(data):
    fields = _load(login_schema, data)

    user = user_repository.get_by_email(fields["email"].lower())
    if not user:
        raise Unauthenticated("A user with this email could not be found.")
    if not check_password_hash(user.password_hash, fields["password"]):
        raise Unauthenticated("Wrong password!")

    return {
        "token": issue_token(user),
        "userId": str(user.id),
    }


def _get_user(user_id):
    user = user_repository.get_by_id(user_id)
    if not user:
        raise NotFound("User not found.")
    return user


def get_status(user_id):
    return _get_user(user_id).status


def update_status(user_id, data):
    fields = _load(status_schema, data)
    user = _get_user(user_id)
    user.status = fields["status"]
    user_repository.save(user)
    return user.status

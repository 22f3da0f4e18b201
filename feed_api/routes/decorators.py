from functools import wraps

from flask import request

from feed_api.services.token_service import verify_authorization_header


def token_required(view):
    """Verify the bearer token and pass the caller's id as ``user_id``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user_id = verify_authorization_header(request.headers.get("Authorization"))
        return view(*args, user_id=user_id, **kwargs)

    return wrapper

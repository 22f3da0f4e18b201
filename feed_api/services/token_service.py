from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTDecodeError

from feed_api.errors import TokenInvalid, Unauthenticated


BEARER_PREFIX = "Bearer "


def issue_token(user) -> str:
    return create_access_token(
        identity=str(user.id),
        additional_claims={"email": user.email},
    )


def verify_authorization_header(auth_header) -> str:
    """Resolve the ``Authorization`` header to the caller's user id.

    Raises ``Unauthenticated`` when the header is missing or malformed, or
    when the token carries no user id, and ``TokenInvalid`` when the token
    fails signature or expiry checks.
    """
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise Unauthenticated()

    token = auth_header[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthenticated()

    claim = current_app.config.get("JWT_IDENTITY_CLAIM", "userId")
    try:
        decoded_token = decode_token(token)
    except JWTDecodeError as e:
        # Verified token, but no identity claim to resolve.
        if str(e) == f"Missing claim: {claim}":
            raise Unauthenticated() from e
        raise TokenInvalid(str(e) or TokenInvalid.message) from e
    except Exception as e:
        raise TokenInvalid(str(e) or TokenInvalid.message) from e

    user_id = decoded_token.get(claim) if decoded_token else None
    if not user_id:
        raise Unauthenticated()

    return str(user_id)

import datetime as dt
import flask
import jwt
import logging
from jwt import InvalidTokenError

from .authentication import BearerAuthentication
from .exceptions import ApiError

# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------


def get_jwt_settings():
    config = flask.current_app.config
    return {
        "key": config["SECRET_KEY"],
        "algorithm": config["BOOKSTORE_JWT_ALGORITHM"],
        "issuer": config.get("BOOKSTORE_JWT_ISSUER"),
        "audience": config.get("BOOKSTORE_JWT_AUDIENCE"),
    }


def encode_token(user, roles, *, now=None):
    """Issue a signed token for a user.

    The payload carries the user's id as ``sub`` along with the email and the
    role names, which :py:class:`RoleAuthorization` checks.

    :param user: The authenticated user.
    :param roles: The names of the roles held by the user.
    :return: The encoded token.
    :rtype: str
    """
    settings = get_jwt_settings()
    now = now or dt.datetime.now(dt.timezone.utc)
    expires_in = dt.timedelta(
        minutes=flask.current_app.config["BOOKSTORE_JWT_EXPIRES_MINUTES"]
    )

    payload = {
        "sub": str(user.id),
        "email": user.email,
        "roles": sorted(roles),
        "iat": now,
        "exp": now + expires_in,
    }
    if settings["issuer"]:
        payload["iss"] = settings["issuer"]
    if settings["audience"]:
        payload["aud"] = settings["audience"]

    return jwt.encode(
        payload, settings["key"], algorithm=settings["algorithm"]
    )


# -----------------------------------------------------------------------------


class JwtAuthentication(BearerAuthentication):
    """Authenticate requests carrying a bearer token from the login endpoint.

    Requests without an Authorization header are anonymous. Requests with a
    token that fails to decode are rejected with a 401.
    """

    def get_credentials_from_token(self, token):
        try:
            payload = self.decode_token(token)
        except InvalidTokenError as e:
            logger.warning("invalid token", exc_info=True)
            raise ApiError(401, {"code": "invalid_token"}) from e

        return payload

    def decode_token(self, token):
        return jwt.decode(token, **self.get_decode_options())

    def get_decode_options(self):
        settings = get_jwt_settings()
        args = {"key": settings["key"], "algorithms": [settings["algorithm"]]}

        if settings["issuer"]:
            args["issuer"] = settings["issuer"]
        if settings["audience"]:
            args["audience"] = settings["audience"]

        return args

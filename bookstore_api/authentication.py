import flask

from .exceptions import ApiError

# -----------------------------------------------------------------------------

BEARER_SCHEME = "bearer"

# -----------------------------------------------------------------------------


def get_request_credentials():
    """Return what the view's authentication found, or ``None``."""
    return flask.g.get("bookstore_credentials")


def set_request_credentials(credentials):
    flask.g.bookstore_credentials = credentials


def parse_bearer_token(header):
    """Pull the token out of an ``Authorization: Bearer <token>`` value.

    :raises ApiError: 401 if the header is not two words or names another
        scheme.
    """
    words = header.split()
    if len(words) != 2:
        raise ApiError(401, {"code": "invalid_authorization"})

    scheme, token = words
    if scheme.lower() != BEARER_SCHEME:
        raise ApiError(401, {"code": "invalid_authorization.scheme"})

    return token


# -----------------------------------------------------------------------------


class NoOpAuthentication:
    """Treat every request as anonymous."""

    def authenticate_request(self):
        set_request_credentials(None)


class BearerAuthentication:
    """Authenticate requests from a bearer token.

    Requests without an ``Authorization`` header are anonymous; whether that
    is allowed is up to the view's authorization. Subclasses decide what a
    token means in :py:meth:`get_credentials_from_token`, and must raise a
    401 :py:class:`ApiError` for a token they reject.
    """

    def authenticate_request(self):
        header = flask.request.headers.get("Authorization")
        if header is None:
            set_request_credentials(None)
            return

        token = parse_bearer_token(header)
        set_request_credentials(self.get_credentials_from_token(token))

    def get_credentials_from_token(self, token):
        raise NotImplementedError()

import flask
import logging

from .authentication import get_request_credentials
from .exceptions import ApiError

# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)

ADMINISTRATOR = "Administrator"
CUSTOMER = "Customer"

SAFE_METHODS = frozenset(("GET", "HEAD", "OPTIONS"))

# -----------------------------------------------------------------------------


class NoOpAuthorization:
    """Allow every request."""

    def authorize_request(self):
        pass


class RoleAuthorization:
    """Gate requests on the roles carried by the request credentials.

    Safe methods need an authenticated user holding one of `read_roles`, or
    any authenticated user when `read_roles` is empty. Other methods need
    one of `write_roles`. Nothing is enforced unless the
    ``BOOKSTORE_REQUIRE_AUTHORIZATION`` config value is set.

    :param read_roles: Roles allowed to read.
    :param write_roles: Roles allowed to create, update, and delete.
    """

    def __init__(self, *, read_roles=(), write_roles=(ADMINISTRATOR,)):
        self.read_roles = frozenset(read_roles)
        self.write_roles = frozenset(write_roles)

    def authorize_request(self):
        if not flask.current_app.config["BOOKSTORE_REQUIRE_AUTHORIZATION"]:
            return

        request = flask.request
        credentials = get_request_credentials()
        if credentials is None:
            logger.warning(
                "rejected anonymous %s %s", request.method, request.path
            )
            raise ApiError(401, {"code": "invalid_credentials.missing"})

        required_roles = self.get_required_roles(request.method)
        roles = frozenset(credentials.get("roles", ()))
        if required_roles and not roles & required_roles:
            logger.warning(
                "rejected %s %s for roles %s",
                request.method,
                request.path,
                sorted(roles),
            )
            raise ApiError(403, {"code": "invalid_credentials.role"})

    def get_required_roles(self, method):
        if method in SAFE_METHODS:
            return self.read_roles

        return self.write_roles

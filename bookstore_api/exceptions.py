import flask
import traceback
from werkzeug.exceptions import default_exceptions

from .utils import iter_validation_errors

# -----------------------------------------------------------------------------

#: The only error text a client ever sees for a server-side failure.
INTERNAL_ERROR_MESSAGE = (
    "Internal Server Error. Contact the Bookstore API team for support."
)

# -----------------------------------------------------------------------------


def describe_http_exception(exc):
    """Turn a Werkzeug HTTP exception into an error entry.

    ``MethodNotAllowed`` becomes ``{"code": "method_not_allowed", ...}``.
    """
    return {
        "code": exc.name.lower().replace(" ", "_"),
        "detail": exc.description,
    }


class ApiError(Exception):
    """An error that renders as a JSON ``{"errors": [...]}`` response.

    With no explicit errors, the standard HTTP reason for `status_code` is
    used. Outside production (``debug`` or ``testing``), the body also
    carries the active traceback under ``debug``.

    :param int status_code: The response status.
    :param dict errors: Error entries with a ``code`` and optionally a
        ``detail`` and a ``source`` pointer.
    """

    def __init__(self, status_code, *errors):
        super().__init__(status_code, *errors)
        self.status_code = status_code

        if not errors and status_code in default_exceptions:
            reason = default_exceptions[status_code]()
            errors = (describe_http_exception(reason),)
        self.body = {"errors": errors}

        app = flask.current_app
        if app.debug or app.testing:
            self.body["debug"] = traceback.format_exc()

    @classmethod
    def from_http_exception(cls, exc):
        if exc.code == 500:
            return InternalFault()

        return cls(exc.code, describe_http_exception(exc))

    def render(self):
        return flask.jsonify(self.body), self.status_code

    @property
    def response(self):
        # Lets a debugger see where an API error came from.
        if flask.current_app.config["BOOKSTORE_TRAP_API_ERRORS"]:
            raise self

        return self.render()


# -----------------------------------------------------------------------------


class InvalidInput(ApiError):
    """Malformed, missing, or mismatched client data.

    Raised before any write reaches the entity store.
    """

    def __init__(self, *errors):
        super().__init__(400, *errors)

    @classmethod
    def from_validation_error(cls, error, format_validation_error):
        return cls(
            *(
                format_validation_error(message, path)
                for message, path in iter_validation_errors(error.messages)
            )
        )


class NotFound(ApiError):
    """The id does not resolve to a stored entity. Renders an empty body."""

    def __init__(self):
        super().__init__(404)

    def render(self):
        return "", self.status_code


class InternalFault(ApiError):
    """A collaborator raised, or reported failure on a write.

    Both causes collapse to the same 500 response carrying only
    :py:data:`INTERNAL_ERROR_MESSAGE`. Details belong in the log, so no
    ``debug`` traceback is attached in any mode.
    """

    def __init__(self):
        super().__init__(
            500,
            {
                "code": "internal_server_error",
                "detail": INTERNAL_ERROR_MESSAGE,
            },
        )
        self.body.pop("debug", None)

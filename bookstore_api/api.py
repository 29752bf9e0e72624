from werkzeug.exceptions import HTTPException

from .exceptions import ApiError

# -----------------------------------------------------------------------------

# Signed, so that ids below 1 reach the views and are rejected as bad input
# rather than falling through to a routing 404.
ITEM_ID_RULE = "<int(signed=True):id>"

# -----------------------------------------------------------------------------


def get_item_endpoint(endpoint):
    """Name the item endpoint that goes with a collection endpoint."""
    return f"{endpoint}_item"


def render_api_error(error):
    return error.response


def render_http_exception(error):
    return ApiError.from_http_exception(error).response


# -----------------------------------------------------------------------------


class Api:
    """Flask extension that mounts the bookstore views under a path prefix.

    Each resource gets a collection rule, ``<prefix>/<name>``, and an item
    rule, ``<prefix>/<name>/<id>``. Binding the extension also makes every
    HTTP error, including unknown routes, render as a JSON error body.

    :param app: The Flask application object, if binding immediately.
    :param str prefix: The path prefix for resource rules.
    """

    def __init__(self, app=None, prefix=""):
        self.prefix = prefix
        self.app = app

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.extensions["bookstore_api"] = self

        app.register_error_handler(ApiError, render_api_error)
        app.register_error_handler(HTTPException, render_http_exception)

    def add_resource(self, name, list_view, item_view, *, app=None):
        """Mount the collection and item views for a resource.

        The collection view is registered under `name` as its endpoint and
        the item view under :py:func:`get_item_endpoint` of it, which is
        what :py:meth:`ResourceView.make_created_response` links new items to.

        :param str name: The resource name, e.g. ``"authors"``.
        :param list_view: The view class for the collection rule.
        :param item_view: The view class for the item rule.
        """
        app = app or self.app
        rule = f"{self.prefix}/{name}"

        app.add_url_rule(rule, view_func=list_view.as_view(name))
        app.add_url_rule(
            f"{rule}/{ITEM_ID_RULE}",
            view_func=item_view.as_view(get_item_endpoint(name)),
        )

    def add_view(self, rule, view, *, app=None):
        """Mount a single view that is not part of a resource."""
        app = app or self.app
        app.add_url_rule(
            f"{self.prefix}{rule}", view_func=view.as_view(view.__name__)
        )

    def add_ping(self, rule, *, app=None):
        """Add an unprefixed health check that answers 200 with no body."""
        app = app or self.app

        @app.route(rule)
        def ping():
            return "", 200

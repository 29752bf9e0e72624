from flask import Flask

from . import cli, settings
from .api import Api
from .log import configure_logging
from .models import db
from .routes import register_routes

# -----------------------------------------------------------------------------

API_PREFIX = "/api"

# -----------------------------------------------------------------------------


def create_app(config=None):
    """Build the Bookstore API application.

    Configuration is read from :py:mod:`bookstore_api.settings`, then from
    the file named by the ``BOOKSTORE_SETTINGS`` environment variable if it
    is set, then from `config`.

    :param dict config: Config values that override all other sources.
    :return: The application.
    :rtype: :py:class:`flask.Flask`
    """
    app = Flask(__name__)
    app.config.from_object(settings)
    app.config.from_envvar("BOOKSTORE_SETTINGS", silent=True)
    if config:
        app.config.update(config)

    configure_logging(app)

    db.init_app(app)

    api = Api(app, prefix=API_PREFIX)
    register_routes(api)

    cli.init_app(app)

    return app

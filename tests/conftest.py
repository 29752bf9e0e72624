import os
import pytest
from flask.testing import FlaskClient

from bookstore_api import create_app
from bookstore_api.identity import IdentityStore
from bookstore_api.models import db as database
from bookstore_api.seed import SEED_ROLES, seed_roles
from bookstore_api.testing import ApiClient

# -----------------------------------------------------------------------------


@pytest.fixture
def app():
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": os.environ.get(
                "DATABASE_URL", "sqlite://"
            ),
            "SECRET_KEY": "test-secret-key",
            "BOOKSTORE_REQUIRE_AUTHORIZATION": False,
            "BOOKSTORE_SEED_ON_STARTUP": False,
        }
    )

    with app.app_context():
        yield app


@pytest.fixture
def db(app):
    database.create_all()

    yield database

    database.session.remove()
    database.drop_all()


@pytest.fixture
def identity(db):
    return IdentityStore(db.session)


@pytest.fixture
def roles(identity):
    seed_roles(identity, SEED_ROLES)


@pytest.fixture
def client(app):
    app.test_client_class = ApiClient
    return app.test_client()


@pytest.fixture
def base_client(app):
    app.test_client_class = FlaskClient
    return app.test_client()

import datetime as dt
import jwt
import pytest
from types import SimpleNamespace

from bookstore_api.exceptions import ApiError
from bookstore_api.jwt import JwtAuthentication, encode_token

# -----------------------------------------------------------------------------


@pytest.fixture
def user():
    return SimpleNamespace(id=7, email="reader@example.com")


@pytest.fixture
def claims(app):
    app.config["BOOKSTORE_JWT_ISSUER"] = "bookstore"
    app.config["BOOKSTORE_JWT_AUDIENCE"] = "bookstore-clients"


# -----------------------------------------------------------------------------


def test_encode_token(app, user):
    now = dt.datetime.now(dt.timezone.utc)
    token = encode_token(user, ["Customer", "Administrator"], now=now)

    payload = jwt.decode(token, "test-secret-key", algorithms=["HS256"])
    assert payload["sub"] == "7"
    assert payload["email"] == "reader@example.com"
    assert payload["roles"] == ["Administrator", "Customer"]
    assert payload["exp"] == int((now + dt.timedelta(minutes=60)).timestamp())
    assert "iss" not in payload
    assert "aud" not in payload


def test_decode_token(app, user):
    token = encode_token(user, ["Customer"])

    payload = JwtAuthentication().decode_token(token)
    assert payload["roles"] == ["Customer"]


def test_decode_token_with_claims(app, user, claims):
    token = encode_token(user, ["Customer"])

    payload = JwtAuthentication().decode_token(token)
    assert payload["iss"] == "bookstore"
    assert payload["aud"] == "bookstore-clients"


def test_wrong_audience(app, user, claims):
    token = encode_token(user, ["Customer"])
    app.config["BOOKSTORE_JWT_AUDIENCE"] = "someone-else"

    with app.test_request_context():
        with pytest.raises(ApiError) as excinfo:
            JwtAuthentication().get_credentials_from_token(token)

    assert excinfo.value.status_code == 401
    assert excinfo.value.body["errors"] == ({"code": "invalid_token"},)


def test_expired_token(app, user):
    now = dt.datetime.now(dt.timezone.utc) - dt.timedelta(hours=2)
    token = encode_token(user, ["Customer"], now=now)

    with app.test_request_context():
        with pytest.raises(ApiError) as excinfo:
            JwtAuthentication().get_credentials_from_token(token)

    assert excinfo.value.status_code == 401


def test_wrong_key(app, user):
    token = jwt.encode({"sub": "7"}, "another-key", algorithm="HS256")

    with app.test_request_context():
        with pytest.raises(ApiError):
            JwtAuthentication().get_credentials_from_token(token)

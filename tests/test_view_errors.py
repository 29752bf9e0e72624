import flask
import logging
import pytest
from unittest.mock import Mock

from bookstore_api import views
from bookstore_api.exceptions import INTERNAL_ERROR_MESSAGE, NotFound
from bookstore_api.models import Author
from bookstore_api.repository import RepositoryBase
from bookstore_api.testing import assert_response, get_body

# -----------------------------------------------------------------------------


@pytest.fixture
def repository(monkeypatch):
    repository = Mock(spec=RepositoryBase)
    monkeypatch.setattr(views.AuthorViewBase, "repository", repository)
    return repository


@pytest.fixture
def view_records(caplog):
    caplog.set_level(logging.INFO, logger="bookstore_api")

    def get_records():
        return [
            record
            for record in caplog.records
            if record.name == "bookstore_api.view"
        ]

    return get_records


def author_data(**kwargs):
    data = {"firstName": "Jane", "lastName": "Doe", "bio": "writer"}
    data.update(kwargs)
    return data


def assert_internal_fault(response):
    assert_response(
        response,
        500,
        [{"code": "internal_server_error", "detail": INTERNAL_ERROR_MESSAGE}],
    )
    assert "debug" not in get_body(response)


# -----------------------------------------------------------------------------


def test_list_raises(client, repository, view_records):
    repository.find_all.side_effect = RuntimeError("database is on fire")

    response = client.get("/authors")
    assert_internal_fault(response)
    assert "database is on fire" not in response.get_data(as_text=True)

    (record,) = view_records()
    assert record.levelno == logging.ERROR
    assert record.getMessage().startswith("AuthorListView - list:")
    assert "database is on fire" in record.getMessage()
    assert record.exc_info[0] is RuntimeError


def test_retrieve_raises(client, repository, view_records):
    repository.find_by_id.side_effect = RuntimeError("connection reset")

    response = client.get("/authors/1")
    assert_internal_fault(response)

    (record,) = view_records()
    assert record.levelno == logging.ERROR
    assert "AuthorView - retrieve" in record.getMessage()


def test_create_raises(client, repository):
    repository.create.side_effect = RuntimeError()

    response = client.post("/authors", data=author_data())
    assert_internal_fault(response)


def test_create_fails(client, repository, view_records):
    repository.create.return_value = False

    response = client.post("/authors", data=author_data())
    assert_internal_fault(response)

    (record,) = view_records()
    assert record.levelno == logging.ERROR
    assert record.getMessage() == (
        "AuthorListView - create: failed creating Author"
    )
    assert record.exc_info is None


def test_update_fails(client, repository, view_records):
    repository.update.return_value = False

    response = client.put("/authors/5", data=author_data(id=5))
    assert_internal_fault(response)

    (record,) = view_records()
    assert record.getMessage() == (
        "AuthorView - update: failed updating Author 5"
    )

    (item,) = repository.update.call_args[0]
    assert item.id == 5
    assert item.first_name == "Jane"


def test_update_id_mismatch(client, repository, view_records):
    response = client.put("/authors/5", data=author_data(id=6))
    assert_response(response, 400, [{"code": "invalid_id.mismatch"}])

    assert repository.method_calls == []

    (record,) = view_records()
    assert record.levelno == logging.WARNING


def test_update_success(client, repository, view_records):
    repository.update.return_value = True

    response = client.put("/authors/5", data=author_data(id=5))
    assert_response(response, 204)

    (record,) = view_records()
    assert record.levelno == logging.INFO
    assert record.getMessage() == "AuthorView - update: updated Author 5"


def test_destroy_zero_id(client, repository):
    response = client.delete("/authors/0")
    assert_response(response, 400, [{"code": "invalid_id"}])

    assert repository.method_calls == []


def test_destroy_missing(client, repository, view_records):
    repository.exists.return_value = False

    response = client.delete("/authors/3")
    assert_response(response, 404)
    assert response.get_data(as_text=True) == ""

    repository.find_by_id.assert_not_called()
    repository.delete.assert_not_called()

    (record,) = view_records()
    assert record.levelno == logging.WARNING


def test_destroy_fails(client, repository, view_records):
    repository.exists.return_value = True
    repository.find_by_id.return_value = Author(
        id=3, first_name="Jane", last_name="Doe"
    )
    repository.delete.return_value = False

    response = client.delete("/authors/3")
    assert_internal_fault(response)

    (record,) = view_records()
    assert record.getMessage() == (
        "AuthorView - destroy: failed deleting Author 3"
    )


def test_list_success_logs_once(client, repository, view_records):
    repository.find_all.return_value = []

    response = client.get("/authors")
    assert_response(response, 200, [])

    (record,) = view_records()
    assert record.levelno == logging.INFO


# -----------------------------------------------------------------------------


@pytest.fixture
def error_routes(app):
    @app.route("/abort/<int:status_code>")
    def abort(status_code):
        flask.abort(status_code)


def test_unknown_route(base_client):
    response = base_client.get("/api/widgets")
    assert_response(response, 404, [{"code": "not_found"}])


def test_method_not_allowed(client):
    response = client.patch("/authors/1", data={})
    assert_response(response, 405, [{"code": "method_not_allowed"}])


def test_abort_internal_server_error(base_client, error_routes):
    response = base_client.get("/abort/500")
    assert_internal_fault(response)


def test_abort_bad_request(base_client, error_routes):
    response = base_client.get("/abort/400")
    assert_response(response, 400, [{"code": "bad_request"}])


def test_trap_api_errors(app, client, repository):
    app.config["BOOKSTORE_TRAP_API_ERRORS"] = True
    repository.find_by_id.return_value = None

    with pytest.raises(NotFound):
        client.get("/authors/1")

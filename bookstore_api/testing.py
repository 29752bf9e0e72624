"""Test helpers for exercising the API through the Flask test client."""

import json
import unittest.mock
from collections.abc import Mapping, Sequence

from flask.testing import FlaskClient

# -----------------------------------------------------------------------------

#: Stands for a body or key that must not be there, e.g. the empty body of a
#: 204 or 404 response, or ``{"bio": ABSENT}`` in an expected shape.
ABSENT = unittest.mock.sentinel.ABSENT

# -----------------------------------------------------------------------------


class ApiClient(FlaskClient):
    """A test client that speaks JSON to the API.

    Paths are relative to the API prefix, and a ``data`` argument is sent as
    a JSON body.
    """

    def open(self, path, *args, **kwargs):
        prefix = self.application.extensions["bookstore_api"].prefix

        if "data" in kwargs:
            kwargs.setdefault("content_type", "application/json")
            if kwargs["content_type"] == "application/json":
                kwargs["data"] = json.dumps(kwargs["data"])

        return super().open(f"{prefix}{path}", *args, **kwargs)


# -----------------------------------------------------------------------------


def assert_shape(actual, expected, path=()):
    """Assert that `actual` holds at least what `expected` describes.

    Mappings may carry extra keys, except those expected to be
    :py:data:`ABSENT`. Sequences must match item by item. Anything else is
    compared with ``==``, so ``unittest.mock.ANY`` matches any value.
    """
    where = f" at {'/'.join(str(key) for key in path)}" if path else ""

    if isinstance(expected, Mapping):
        assert isinstance(actual, Mapping), f"{actual!r} is not a dict{where}"
        for key, value in expected.items():
            if value is ABSENT:
                assert key not in actual, f"unexpected {key!r}{where}"
            else:
                assert key in actual, f"missing {key!r} in {actual!r}{where}"
                assert_shape(actual[key], value, (*path, key))
    elif isinstance(expected, Sequence) and not isinstance(expected, str):
        assert isinstance(actual, Sequence), f"{actual!r} is not a list{where}"
        assert len(actual) == len(expected), (
            f"expected {len(expected)} items, got {len(actual)}{where}"
        )
        for index, (actual_item, expected_item) in enumerate(
            zip(actual, expected)
        ):
            assert_shape(actual_item, expected_item, (*path, index))
    else:
        assert expected == actual, f"{actual!r} != {expected!r}{where}"


# -----------------------------------------------------------------------------


def get_body(response):
    assert response.mimetype == "application/json"
    return json.loads(response.get_data(as_text=True))


def get_errors(response):
    return get_body(response)["errors"]


def assert_response(response, expected_status_code, expected_data=ABSENT):
    """Assert on the status and, optionally, the contents of a response.

    For error statuses, `expected_data` is checked against the ``errors``
    list rather than the whole body.

    :return: The body, the error list, or :py:data:`ABSENT` when the
        response is empty.
    """
    status_code = response.status_code
    assert status_code == expected_status_code, (
        f"expected status code {expected_status_code!r}, got {status_code!r}"
    )

    if not response.content_length:
        response_data = ABSENT
    elif status_code >= 400:
        response_data = get_errors(response)
    else:
        response_data = get_body(response)

    if expected_data is not ABSENT:
        assert_shape(response_data, expected_data)

    return response_data

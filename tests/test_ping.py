from bookstore_api.testing import assert_response

# -----------------------------------------------------------------------------


def test_ping(base_client):
    response = base_client.get("/ping")
    assert_response(response, 200)
    assert response.get_data(as_text=True) == ""


def test_ping_not_prefixed(client):
    response = client.get("/ping")
    assert_response(response, 404)

import pytest
import requests

from engine_export.exceptions import ApiError, MalformedResponseError, TransportError

from conftest import ENGINE_URL


def test_get_sends_auth_and_json_headers(make_client):
    client, session = make_client(lambda endpoint, body: (200, {"search_fields": {}}))

    assert client.get("search_settings") == {"search_fields": {}}

    call = session.calls[0]
    assert call["url"] == f"{ENGINE_URL}/search_settings"
    assert call["headers"]["Authorization"] == "Bearer private-secretkey1234"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["body"] is None
    assert call["timeout"] == 30.0


def test_get_encodes_body_as_json(make_client):
    client, session = make_client(lambda endpoint, body: (200, []))

    client.get("documents", ["park_zion", "park_arches"])

    assert session.calls[0]["body"] == ["park_zion", "park_arches"]


@pytest.mark.parametrize("status", [401, 403, 404, 500])
def test_error_status_raises_api_error(make_client, status):
    client, _ = make_client(lambda endpoint, body: (status, {"error": "nope"}))

    with pytest.raises(ApiError) as excinfo:
        client.get("synonyms")

    assert excinfo.value.status_code == status
    assert excinfo.value.endpoint == "synonyms"
    assert "nope" in excinfo.value.body
    assert "synonyms" in str(excinfo.value)


def test_connection_failure_raises_transport_error(make_client):
    client, _ = make_client(
        lambda endpoint, body: requests.exceptions.ConnectionError("connection refused")
    )

    with pytest.raises(TransportError, match="connection refused") as excinfo:
        client.get("curations")
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)


def test_non_json_body_raises_malformed(make_client):
    client, _ = make_client(lambda endpoint, body: (200, b"<html>maintenance</html>"))

    with pytest.raises(MalformedResponseError):
        client.get("synonyms")


def test_get_documents_requires_array(make_client):
    client, _ = make_client(lambda endpoint, body: (200, {"results": []}))

    with pytest.raises(MalformedResponseError):
        client.get_documents(["a"])


def test_api_key_not_logged(make_client, caplog):
    client, _ = make_client(lambda endpoint, body: (403, {"error": "denied"}))

    with caplog.at_level("DEBUG"), pytest.raises(ApiError):
        client.get("synonyms")

    assert "secretkey1234" not in caplog.text


def test_context_manager_closes_session(make_client):
    client, session = make_client(lambda endpoint, body: (200, {}))
    with client:
        pass
    assert session.closed

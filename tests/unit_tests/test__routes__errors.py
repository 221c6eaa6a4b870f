from unittest.mock import MagicMock

from botocore.exceptions import NoCredentialsError
from fastapi import status
from fastapi.testclient import TestClient

from store_api.dynamodb import records
from store_api.main import create_app
from store_api.routers import s3 as s3_routes
from tests.fixtures.app_fixtures import assert_cors, make_settings


def test__unknown_route_is_404(client: TestClient):
    response = client.get("/nope")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.text == "not found: GET /nope"
    assert_cors(response)


def test__unsupported_method_is_404(client: TestClient):
    response = client.put("/dynamodb/item")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.text == "not found: PUT /dynamodb/item"


def test__no_trailing_slash_redirect(client: TestClient):
    response = client.get("/dynamodb", follow_redirects=False)

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test__options_preflight_on_any_path(client: TestClient):
    for path in ("/dynamodb/item", "/does/not/exist"):
        response = client.options(path)

        assert response.status_code == status.HTTP_200_OK
        assert response.content == b""
        assert_cors(response)


def test__empty_body_is_400(client: TestClient):
    response = client.post("/dynamodb/item")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "empty body"
    assert_cors(response)


def test__invalid_json_is_400(client: TestClient):
    response = client.post("/dynamodb", content=b"{not json")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "invalid json body"


def test__non_object_json_is_400(client: TestClient):
    response = client.post("/dynamodb", json=["x"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test__missing_body_field_is_400(client: TestClient):
    response = client.post("/dynamodb/item", json={"part": "posts", "idx": "0001"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "missing field: value"


def test__empty_entity_id_is_400(client: TestClient):
    response = client.post("/dynamodb", json={"id": "", "value": "v"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "missing field: id"


def test__strict_rejects_empty_part(client: TestClient, monkeypatch):
    calls = []
    monkeypatch.setattr(records, "get_item_value", lambda *args, **kwargs: calls.append(args))

    response = client.get("/dynamodb/item?part=&idx=x")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "missing field: part"
    assert calls == []


def test__strict_rejects_empty_idx_in_body(client: TestClient):
    response = client.post("/dynamodb/item", json={"part": "posts", "idx": "", "value": "v"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "missing field: idx"


def test__permissive_passes_empty_part_to_backend(permissive_client: TestClient, monkeypatch):
    calls = []

    def fake_get_item_value(table_name, part, idx, dynamodb_client=None):
        calls.append((part, idx))
        return None

    monkeypatch.setattr(records, "get_item_value", fake_get_item_value)

    response = permissive_client.get("/dynamodb/item?part=&idx=x")

    assert calls == [("", "x")]
    assert response.status_code == status.HTTP_200_OK
    assert response.text == "Value not found"


def test__permissive_defaults_missing_params(permissive_client: TestClient, monkeypatch):
    calls = []
    monkeypatch.setattr(records, "delete_item", lambda table_name, part, idx, dynamodb_client=None: calls.append((part, idx)))

    response = permissive_client.delete("/dynamodb/item")

    assert calls == [("", "")]
    assert response.text == "Success"


def test__dynamodb_failure_is_500(mocked_aws):
    client = TestClient(create_app(make_settings(record_table_name="no-such-table", entity_table_name="no-such-table")))

    for response in (
        client.get("/dynamodb/item", params={"part": "p", "idx": "i"}),
        client.post("/dynamodb/item", json={"part": "p", "idx": "i", "value": "v"}),
        client.get("/dynamodb/list"),
        client.get("/dynamodb/x"),
        client.post("/dynamodb", json={"id": "x"}),
        client.delete("/dynamodb/item", params={"part": "p", "idx": "i"}),
        client.delete("/dynamodb/x"),
    ):
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.text == "dynamodb error"
        assert_cors(response)


def test__s3_failure_is_500(mocked_aws):
    client = TestClient(create_app(make_settings(s3_bucket="no-such-bucket")))

    response = client.get("/api/s3/list")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.text == "s3 error"


def test__filename_required_for_signed_urls(client: TestClient):
    for route in ("/api/s3/upload-url", "/api/s3/download-url", "/api/s3/delete-url"):
        response = client.get(route, params={"part": "posts", "idx": "0001"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.text == "missing field: filename"


def test__unexpected_error_is_500_with_cors(client: TestClient, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(records, "get_item_value", boom)

    response = client.get("/dynamodb/item", params={"part": "p", "idx": "i"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.text == "internal server error"
    assert_cors(response)


def test__signing_failure_is_500(client: TestClient, monkeypatch):
    failing_client = MagicMock()
    failing_client.generate_presigned_url.side_effect = NoCredentialsError()
    monkeypatch.setattr(s3_routes, "get_s3_client", lambda settings: failing_client)

    for route in ("/api/s3/upload-url", "/api/s3/download-url", "/api/s3/delete-url"):
        response = client.get(route, params={"filename": "a.txt"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.text == "s3 error"
        assert_cors(response)


def test__non_utf8_body_is_400(client: TestClient):
    response = client.post(
        "/dynamodb",
        content='{"id": "x", "value": "y"}'.encode("utf-16"),
        headers={"content-type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "invalid json body"

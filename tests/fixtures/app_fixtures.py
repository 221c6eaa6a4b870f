"""Settings and API clients for route tests."""
import pytest
from fastapi.testclient import TestClient

from store_api.main import create_app
from store_api.settings import Settings
from tests.consts import TEST_BUCKET_NAME, TEST_ENTITY_TABLE, TEST_RECORD_TABLE


def make_settings(**overrides) -> Settings:
    values = dict(
        s3_bucket=TEST_BUCKET_NAME,
        s3_path="",
        record_table_name=TEST_RECORD_TABLE,
        entity_table_name=TEST_ENTITY_TABLE,
        key_validation="strict",
        AWS_DEFAULT_REGION="us-east-1",
        AWS_ENDPOINT_URL=None,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(mocked_aws, settings) -> TestClient:
    """API client wired to the moto bucket and tables."""
    return TestClient(create_app(settings))


@pytest.fixture
def permissive_client(mocked_aws) -> TestClient:
    return TestClient(create_app(make_settings(key_validation="permissive")))


CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET,POST,DELETE,OPTIONS",
    "access-control-allow-headers": "Content-Type,Authorization",
}


def assert_cors(response):
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value

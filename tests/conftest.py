from tests.fixtures.aws_fixtures import dynamodb_client, mocked_aws, s3_client  # noqa: F401
from tests.fixtures.app_fixtures import client, permissive_client, settings  # noqa: F401

"""Functions for the (part, idx) record table: lookup, overwrite and delete."""

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from store_api.aws.clients import get_dynamodb_client
from store_api.errors import StoreError

try:
    from mypy_boto3_dynamodb import DynamoDBClient
except ImportError:
    ...

logger = logging.getLogger(__name__)

# Attribute names go through placeholders to stay clear of reserved words
_KEY_NAMES = {"#part": "part", "#idx": "idx"}


def _record_key(part: str, idx: str) -> dict:
    return {"part": {"S": part}, "idx": {"S": idx}}


def get_item_value(
    table_name: str,
    part: str,
    idx: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> Optional[str]:
    """
    Look up the `value` stored under a composite key.

    :param table_name: The name of the record table.
    :param part: Partition half of the key.
    :param idx: Index half of the key.
    :param dynamodb_client: An optional boto3 DynamoDB client. If not provided, the shared one is used.
    :return: The stored value, or None when there is no record or its value is not a string.
    """
    dynamodb_client = dynamodb_client or get_dynamodb_client()
    try:
        response = dynamodb_client.query(
            TableName=table_name,
            KeyConditionExpression="#part = :part AND #idx = :idx",
            ExpressionAttributeNames=_KEY_NAMES,
            ExpressionAttributeValues={":part": {"S": part}, ":idx": {"S": idx}},
        )
    except (ClientError, BotoCoreError) as e:
        raise StoreError("dynamodb", "query") from e

    items = response.get("Items") or []
    if not items:
        return None
    return items[0].get("value", {}).get("S")


def put_item(
    table_name: str,
    part: str,
    idx: str,
    value: str,
    pk: Optional[str] = None,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> None:
    """
    Write a record, replacing whatever was stored under the same key.

    :param pk: Optional extra attribute written alongside the key and value.
    """
    dynamodb_client = dynamodb_client or get_dynamodb_client()
    item = _record_key(part, idx)
    item["value"] = {"S": value}
    if pk is not None:
        item["pk"] = {"S": pk}

    try:
        dynamodb_client.put_item(TableName=table_name, Item=item)
    except (ClientError, BotoCoreError) as e:
        raise StoreError("dynamodb", "put") from e
    logger.debug(f"Stored {table_name}[{part}/{idx}]")


def delete_item(
    table_name: str,
    part: str,
    idx: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> None:
    """Delete a record. Deleting a missing key is not an error."""
    dynamodb_client = dynamodb_client or get_dynamodb_client()
    try:
        dynamodb_client.delete_item(TableName=table_name, Key=_record_key(part, idx))
    except (ClientError, BotoCoreError) as e:
        raise StoreError("dynamodb", "delete") from e
    logger.debug(f"Deleted {table_name}[{part}/{idx}]")

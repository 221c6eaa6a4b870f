"""Functions for the id-keyed entity table."""

import logging
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from store_api.aws.clients import get_dynamodb_client
from store_api.errors import StoreError
from store_api.schemas import Entity

try:
    from mypy_boto3_dynamodb import DynamoDBClient
except ImportError:
    ...

logger = logging.getLogger(__name__)


def _to_entities(items: List[dict]) -> List[Entity]:
    """Convert raw DynamoDB items, skipping any without a string `id`."""
    entities = []
    for item in items:
        entity_id = item.get("id", {}).get("S")
        if entity_id is None:
            continue
        entities.append(Entity(id=entity_id, value=item.get("value", {}).get("S")))
    return entities


def scan_entities(
    table_name: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> List[Entity]:
    """Read one page of the whole table, in no particular order."""
    dynamodb_client = dynamodb_client or get_dynamodb_client()
    try:
        response = dynamodb_client.scan(TableName=table_name)
    except (ClientError, BotoCoreError) as e:
        raise StoreError("dynamodb", "scan") from e
    return _to_entities(response.get("Items") or [])


def query_entities_by_id(
    table_name: str,
    entity_id: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> List[Entity]:
    dynamodb_client = dynamodb_client or get_dynamodb_client()
    try:
        response = dynamodb_client.query(
            TableName=table_name,
            KeyConditionExpression="#id = :id",
            ExpressionAttributeNames={"#id": "id"},
            ExpressionAttributeValues={":id": {"S": entity_id}},
        )
    except (ClientError, BotoCoreError) as e:
        raise StoreError("dynamodb", "query") from e
    return _to_entities(response.get("Items") or [])


def upsert_entity(
    table_name: str,
    entity_id: str,
    value: Optional[str] = None,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> None:
    """
    Create or update an entity.

    A non-empty `value` is written with an update expression, so other
    attributes on the item survive. An empty or missing `value` leaves the
    stored value (if any) untouched; the entity is only created when it does
    not exist yet.
    """
    dynamodb_client = dynamodb_client or get_dynamodb_client()
    key = {"id": {"S": entity_id}}

    if value:
        try:
            dynamodb_client.update_item(
                TableName=table_name,
                Key=key,
                UpdateExpression="SET #value = :value",
                ExpressionAttributeNames={"#value": "value"},
                ExpressionAttributeValues={":value": {"S": value}},
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError("dynamodb", "upsert") from e
        logger.debug(f"Stored entity {entity_id} in {table_name}")
        return

    try:
        dynamodb_client.put_item(
            TableName=table_name,
            Item=key,
            ConditionExpression="attribute_not_exists(#id)",
            ExpressionAttributeNames={"#id": "id"},
        )
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
            logger.debug(f"Entity {entity_id} already exists, keeping stored value")
            return
        raise StoreError("dynamodb", "upsert") from e
    except BotoCoreError as e:
        raise StoreError("dynamodb", "upsert") from e
    logger.debug(f"Created entity {entity_id} in {table_name}")


def delete_entity_by_id(
    table_name: str,
    entity_id: str,
    dynamodb_client: Optional["DynamoDBClient"] = None,
) -> None:
    dynamodb_client = dynamodb_client or get_dynamodb_client()
    try:
        dynamodb_client.delete_item(TableName=table_name, Key={"id": {"S": entity_id}})
    except (ClientError, BotoCoreError) as e:
        raise StoreError("dynamodb", "delete") from e
    logger.debug(f"Deleted entity {entity_id} from {table_name}")

"""
Routes for the two DynamoDB tables.

Declaration order matters: `/dynamodb/item` and `/dynamodb/list` must be
registered before the `/dynamodb/{entity_id}` catch-all.
"""
import logging
from typing import Tuple

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from store_api.aws.clients import get_dynamodb_client
from store_api.dynamodb import entities, records
from store_api.http_utils import JSONUTF8Response, query_param, read_json_object, require
from store_api.schemas import EntityPayload, RecordPayload
from store_api.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _record_key_from_query(request: Request, settings: Settings) -> Tuple[str, str]:
    part = query_param(request, "part")
    idx = query_param(request, "idx", "index")
    if settings.strict_keys:
        require(part=part, idx=idx)
    return part, idx


####################################
# --- (part, idx) record table --- #
####################################

@router.get("/dynamodb/item", response_class=PlainTextResponse)
async def get_record(request: Request):
    """Return the value stored under `part` and `idx`, or "Value not found"."""
    settings: Settings = request.app.state.settings
    part, idx = _record_key_from_query(request, settings)

    value = records.get_item_value(
        settings.record_table_name,
        part,
        idx,
        dynamodb_client=get_dynamodb_client(settings),
    )
    if value is None:
        return PlainTextResponse("Value not found")
    return PlainTextResponse(value)


@router.post("/dynamodb/item", response_class=PlainTextResponse)
async def put_record(request: Request):
    """Overwrite the record named by the body's `part` and `idx`."""
    settings: Settings = request.app.state.settings
    payload = RecordPayload.model_validate(await read_json_object(request))
    if settings.strict_keys:
        require(part=payload.part, idx=payload.idx)

    records.put_item(
        settings.record_table_name,
        payload.part,
        payload.idx,
        payload.value,
        pk=payload.pk,
        dynamodb_client=get_dynamodb_client(settings),
    )
    logger.info(f"Saved record {payload.part}/{payload.idx}")
    return PlainTextResponse("Success")


@router.delete("/dynamodb/item", response_class=PlainTextResponse)
async def delete_record(request: Request):
    settings: Settings = request.app.state.settings
    part, idx = _record_key_from_query(request, settings)

    records.delete_item(
        settings.record_table_name,
        part,
        idx,
        dynamodb_client=get_dynamodb_client(settings),
    )
    logger.info(f"Deleted record {part}/{idx}")
    return PlainTextResponse("Success")


########################
# --- Entity table --- #
########################

@router.get("/dynamodb/list", response_class=JSONUTF8Response)
async def list_entities(request: Request):
    settings: Settings = request.app.state.settings
    items = entities.scan_entities(
        settings.entity_table_name,
        dynamodb_client=get_dynamodb_client(settings),
    )
    return JSONUTF8Response([item.model_dump() for item in items])


@router.get("/dynamodb/{entity_id:path}", response_class=JSONUTF8Response)
async def get_entities(request: Request, entity_id: str):
    """Return every entity whose id equals the last path segment(s)."""
    settings: Settings = request.app.state.settings
    items = entities.query_entities_by_id(
        settings.entity_table_name,
        entity_id,
        dynamodb_client=get_dynamodb_client(settings),
    )
    return JSONUTF8Response([item.model_dump() for item in items])


@router.post("/dynamodb", response_class=PlainTextResponse)
async def save_entity(request: Request):
    """Create or update an entity. Omitting `value` keeps the stored one."""
    settings: Settings = request.app.state.settings
    payload = EntityPayload.model_validate(await read_json_object(request))
    require(id=payload.id)

    entities.upsert_entity(
        settings.entity_table_name,
        payload.id,
        payload.value,
        dynamodb_client=get_dynamodb_client(settings),
    )
    logger.info(f"Saved entity {payload.id}")
    return PlainTextResponse("Entity saved successfully.")


@router.delete("/dynamodb/{entity_id:path}", response_class=PlainTextResponse)
async def delete_entity(request: Request, entity_id: str):
    settings: Settings = request.app.state.settings
    entities.delete_entity_by_id(
        settings.entity_table_name,
        entity_id,
        dynamodb_client=get_dynamodb_client(settings),
    )
    logger.info(f"Deleted entity {entity_id}")
    return PlainTextResponse(f"Entity deleted successfully. ({entity_id})")

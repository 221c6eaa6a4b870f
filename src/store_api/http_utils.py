"""Request parsing and response helpers shared by the routers."""
import json
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from store_api.errors import BadRequestError


class JSONUTF8Response(JSONResponse):
    media_type = "application/json; charset=utf-8"


def query_param(request: Request, *names: str, default: str = "") -> str:
    """Return the first value of the first of `names` present in the query string."""
    for name in names:
        values = request.query_params.getlist(name)
        if values:
            return values[0]
    return default


def require(**fields: str) -> None:
    """Raise BadRequestError naming the first empty field."""
    for name, value in fields.items():
        if not value:
            raise BadRequestError(f"missing field: {name}")


async def read_json_object(request: Request) -> Dict[str, Any]:
    """Decode a UTF-8 JSON object body."""
    body = await request.body()
    if not body:
        raise BadRequestError("empty body")
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise BadRequestError("invalid json body")
    if not isinstance(payload, dict):
        raise BadRequestError("json body must be an object")
    return payload

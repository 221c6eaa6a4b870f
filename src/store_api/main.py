from textwrap import dedent
import logging

import pydantic
from fastapi import FastAPI
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from store_api.cors import add_cors_headers
from store_api.errors import (
    BadRequestError,
    StoreError,
    handle_bad_request_errors,
    handle_broad_exceptions,
    handle_http_exceptions,
    handle_pydantic_validation_errors,
    handle_store_errors,
)
from store_api.routers.dynamodb import router as dynamodb_router
from store_api.routers.health import router as health_router
from store_api.routers.s3 import router as s3_router
from store_api.settings import Settings

# Set up logging
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()
    logging.getLogger("store_api").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="Store API",
        summary="Records in DynamoDB, uploads in S3",
        version="v1",
        description=dedent(
            """\
        | Area | Routes |
        | --- | --- |
        | Records | `GET/POST/DELETE /dynamodb/item` |
        | Entities | `GET /dynamodb/list`, `GET/DELETE /dynamodb/{id}`, `POST /dynamodb` |
        | Objects | `GET /api/s3/list`, `GET /api/s3/{upload,download,delete}-url` |
        """
        ),
        redirect_slashes=False,
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.settings = settings
    logger.info(
        f"Serving bucket {settings.s3_bucket!r} (base path {settings.s3_path!r}), "
        f"tables {settings.record_table_name!r}/{settings.entity_table_name!r}, "
        f"{settings.key_validation} key validation"
    )

    # Order matters: /dynamodb/item and /dynamodb/list before /dynamodb/{id}
    app.include_router(health_router, tags=["health"])
    app.include_router(dynamodb_router, tags=["dynamodb"])
    app.include_router(s3_router, tags=["s3"])

    app.add_exception_handler(StoreError, handle_store_errors)
    app.add_exception_handler(BadRequestError, handle_bad_request_errors)
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.add_exception_handler(StarletteHTTPException, handle_http_exceptions)

    # The last middleware added runs first, so CORS wraps the broad handler
    app.middleware("http")(handle_broad_exceptions)
    app.middleware("http")(add_cors_headers)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)

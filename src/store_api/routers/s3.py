"""Routes for listing the bucket and handing out signed URLs."""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from store_api.aws.clients import get_s3_client
from store_api.http_utils import JSONUTF8Response, query_param, require
from store_api.s3.keys import build_object_key
from store_api.s3.presign import presign_delete, presign_download, presign_upload
from store_api.s3.read_objects import list_objects
from store_api.schemas import ListObjectsResponse
from store_api.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/s3")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _object_key(request: Request, settings: Settings, upload_area: bool) -> str:
    """Key for the `filename` query param, nested under `part`/`idx` when both are given."""
    filename = query_param(request, "filename")
    require(filename=filename)
    return build_object_key(
        settings.s3_path,
        filename,
        part=query_param(request, "part"),
        idx=query_param(request, "idx", "index"),
        upload_area=upload_area,
    )


@router.get("/list", response_class=JSONUTF8Response)
async def list_folder(request: Request):
    """
    List one level of the upload area.

    The listed prefix is `{s3_path}upload/[{part}/{idx}/]{prefix}`.
    """
    settings: Settings = request.app.state.settings
    full_prefix = build_object_key(
        settings.s3_path,
        query_param(request, "prefix"),
        part=query_param(request, "part"),
        idx=query_param(request, "idx", "index"),
        upload_area=True,
    )

    folders, files = list_objects(
        settings.s3_bucket,
        full_prefix,
        s3_client=get_s3_client(settings),
    )
    return JSONUTF8Response(ListObjectsResponse(folders=folders, files=files).model_dump())


@router.get("/upload-url", response_class=PlainTextResponse)
async def upload_url(request: Request):
    settings: Settings = request.app.state.settings
    object_key = _object_key(request, settings, upload_area=True)
    content_type = query_param(request, "contentType") or DEFAULT_CONTENT_TYPE

    url = presign_upload(
        settings.s3_bucket,
        object_key,
        content_type,
        storage_class=settings.upload_storage_class,
        expires_in=settings.presign_expiry_seconds,
        s3_client=get_s3_client(settings),
    )
    return PlainTextResponse(url)


@router.get("/download-url", response_class=PlainTextResponse)
async def download_url(request: Request):
    settings: Settings = request.app.state.settings
    object_key = _object_key(request, settings, upload_area=False)

    url = presign_download(
        settings.s3_bucket,
        object_key,
        expires_in=settings.presign_expiry_seconds,
        s3_client=get_s3_client(settings),
    )
    return PlainTextResponse(url)


@router.get("/delete-url", response_class=PlainTextResponse)
async def delete_url(request: Request):
    settings: Settings = request.app.state.settings
    object_key = _object_key(request, settings, upload_area=False)

    url = presign_delete(
        settings.s3_bucket,
        object_key,
        expires_in=settings.presign_expiry_seconds,
        s3_client=get_s3_client(settings),
    )
    return PlainTextResponse(url)

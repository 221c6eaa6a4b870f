"""Signed URLs that let a client PUT, GET or DELETE one object directly."""

import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from store_api.aws.clients import get_s3_client
from store_api.errors import StoreError

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 900
DEFAULT_UPLOAD_STORAGE_CLASS = "GLACIER_IR"


def _presign(
    s3_client: "S3Client",
    client_method: str,
    http_method: str,
    params: dict,
    expires_in: int,
) -> str:
    try:
        url = s3_client.generate_presigned_url(
            ClientMethod=client_method,
            Params=params,
            ExpiresIn=expires_in,
            HttpMethod=http_method,
        )
    except (ClientError, BotoCoreError) as e:
        raise StoreError("s3", f"presign {http_method}") from e
    logger.info(f"Signed {http_method} s3://{params['Bucket']}/{params['Key']} for {expires_in}s")
    return url


def presign_upload(
    bucket_name: str,
    object_key: str,
    content_type: str,
    storage_class: str = DEFAULT_UPLOAD_STORAGE_CLASS,
    expires_in: int = DEFAULT_EXPIRES_IN,
    s3_client: Optional["S3Client"] = None,
) -> str:
    """
    Sign a PUT for one object.

    The content type and storage class are part of the signature, so the
    uploader has to send the same `Content-Type` and the object always lands
    in `storage_class`.
    """
    s3_client = s3_client or get_s3_client()
    params = {
        "Bucket": bucket_name,
        "Key": object_key,
        "ContentType": content_type,
        "StorageClass": storage_class,
    }
    return _presign(s3_client, "put_object", "PUT", params, expires_in)


def presign_download(
    bucket_name: str,
    object_key: str,
    expires_in: int = DEFAULT_EXPIRES_IN,
    s3_client: Optional["S3Client"] = None,
) -> str:
    s3_client = s3_client or get_s3_client()
    params = {"Bucket": bucket_name, "Key": object_key}
    return _presign(s3_client, "get_object", "GET", params, expires_in)


def presign_delete(
    bucket_name: str,
    object_key: str,
    expires_in: int = DEFAULT_EXPIRES_IN,
    s3_client: Optional["S3Client"] = None,
) -> str:
    s3_client = s3_client or get_s3_client()
    params = {"Bucket": bucket_name, "Key": object_key}
    return _presign(s3_client, "delete_object", "DELETE", params, expires_in)

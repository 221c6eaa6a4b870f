"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

import logging
from typing import List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from store_api.aws.clients import get_s3_client
from store_api.errors import StoreError

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)

DELIMITER = "/"


def list_objects(
    bucket_name: str,
    prefix: str,
    s3_client: Optional["S3Client"] = None,
) -> Tuple[List[str], List[str]]:
    """
    List the immediate children of a prefix.

    :param bucket_name: The name of the S3 bucket.
    :param prefix: Key prefix to list under. Only one level is returned.
    :param s3_client: An optional boto3 S3 client. If not provided, the shared one is used.
    :return: (folders, files). Folders are common prefixes ending in "/". Files are
        object keys, excluding a placeholder object whose key equals the prefix.
    """
    s3_client = s3_client or get_s3_client()
    try:
        response = s3_client.list_objects_v2(
            Bucket=bucket_name,
            Prefix=prefix,
            Delimiter=DELIMITER,
        )
    except (ClientError, BotoCoreError) as e:
        raise StoreError("s3", "list") from e

    folders = [p["Prefix"] for p in response.get("CommonPrefixes", []) if p.get("Prefix")]
    files = [
        obj["Key"]
        for obj in response.get("Contents", [])
        if obj.get("Key") and obj["Key"] != prefix
    ]
    logger.debug(f"Listed s3://{bucket_name}/{prefix}: {len(folders)} folders, {len(files)} files")
    return folders, files

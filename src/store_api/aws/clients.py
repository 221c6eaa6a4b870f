"""AWS client management."""
import logging
import threading
from typing import Any, Dict, Optional, Tuple

import boto3
from botocore.config import Config

from store_api.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Singleton manager for AWS service clients.

    Clients are created on first use and shared for the life of the process,
    one per (service, region, endpoint).
    """
    _instance = None
    _clients: Dict[Tuple[str, str, Optional[str]], Any] = {}
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(AWSClientManager, cls).__new__(cls)
        return cls._instance

    def get_client(self, service_name: str, settings: Optional[Settings] = None) -> Any:
        """Get or create an AWS service client."""
        settings = settings or get_settings()
        cache_key = (service_name, settings.aws_region, settings.aws_endpoint_url)
        client = self._clients.get(cache_key)
        if client is not None:
            return client

        with self._lock:
            # Another thread may have won the race
            if cache_key in self._clients:
                return self._clients[cache_key]

            client_kwargs = {
                'region_name': settings.aws_region
            }
            if settings.aws_endpoint_url:
                client_kwargs['endpoint_url'] = settings.aws_endpoint_url
            if service_name == 's3':
                # Presigned URLs carry X-Amz-Expires only with SigV4
                client_kwargs['config'] = Config(signature_version='s3v4')

            try:
                client = boto3.client(service_name, **client_kwargs)
            except Exception as e:
                logger.error(f"Error creating {service_name} client: {str(e)}")
                raise

            self._clients[cache_key] = client
            logger.debug(f"Created {service_name} client in {settings.aws_region}")
            return client

    def clear_clients(self):
        """Clear all cached clients."""
        with self._lock:
            self._clients.clear()
        logger.debug("Cleared all AWS clients")

# Convenience functions for common operations

def get_s3_client(settings: Optional[Settings] = None):
    """Get the S3 client."""
    return AWSClientManager().get_client('s3', settings)

def get_dynamodb_client(settings: Optional[Settings] = None):
    """Get the DynamoDB client."""
    return AWSClientManager().get_client('dynamodb', settings)

def clear_clients():
    AWSClientManager().clear_clients()

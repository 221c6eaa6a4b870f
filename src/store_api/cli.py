# cli.py
import logging

import click

from store_api.settings import get_settings

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Store API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  S3 Bucket: {settings.s3_bucket}")
    print(f"  S3 Base Path: {settings.s3_path!r}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  Record Table: {settings.record_table_name}")
    print(f"  Entity Table: {settings.entity_table_name}")
    print(f"  Key Validation: {settings.key_validation}")
    print(f"  Signed URL Expiry: {settings.presign_expiry_seconds}s")
    print(f"  Upload Storage Class: {settings.upload_storage_class}")
    print(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Interface to bind")
@click.option("--port", default=8000, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the API locally with uvicorn"""
    import uvicorn

    logging.basicConfig(level=get_settings().log_level.upper())
    logger.info(f"Starting Store API on {host}:{port}")
    uvicorn.run(
        "store_api.main:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


if __name__ == "__main__":
    cli()

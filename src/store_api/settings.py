# src/store_api/settings.py
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

KEY_VALIDATION_MODES = ("strict", "permissive")


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from store_api.settings import get_settings
        settings = get_settings()
        bucket = settings.s3_bucket
    """

    # S3 Configuration
    s3_bucket: str = Field(
        description="Bucket holding uploaded objects (required)"
    )

    s3_path: str = Field(
        default="",
        description="Base key prefix prepended to every object key"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # DynamoDB Configuration
    record_table_name: str = Field(
        default="blog_deepria_master",
        description="Table keyed by (part, idx)"
    )

    entity_table_name: str = Field(
        default="testTable",
        description="Table keyed by id"
    )

    key_validation: str = Field(
        default="strict",
        description="strict: reject empty part/idx with 400, permissive: pass them through"
    )

    # Presigned URL Configuration
    presign_expiry_seconds: int = Field(
        default=900,
        gt=0,
        description="Lifetime of generated signed URLs"
    )

    upload_storage_class: str = Field(
        default="GLACIER_IR",
        description="Storage class pinned on signed upload URLs"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("key_validation")
    @classmethod
    def validate_key_validation(cls, v):
        """Validate key validation mode is one of the allowed values."""
        v = v.lower()
        if v not in KEY_VALIDATION_MODES:
            raise ValueError(f"Invalid key_validation: {v}. Must be one of {list(KEY_VALIDATION_MODES)}")
        return v

    @property
    def strict_keys(self) -> bool:
        return self.key_validation == "strict"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()

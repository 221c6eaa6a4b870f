####################################
# --- Request/response schemas --- #
####################################

from typing import List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
)


class RecordPayload(BaseModel):
    """Body of `POST /dynamodb/item`."""
    part: str = Field(description="Partition half of the composite key.")
    idx: str = Field(
        validation_alias=AliasChoices("idx", "index"),
        description="Index half of the composite key. `index` is accepted as well.",
    )
    pk: Optional[str] = Field(None, description="Extra attribute stored alongside the record.")
    value: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"part": "posts", "idx": "0001", "pk": "posts#0001", "value": "hello"}
        }
    )


class EntityPayload(BaseModel):
    """Body of `POST /dynamodb`."""
    id: str
    value: Optional[str] = None


class Entity(BaseModel):
    """A row of the entity table."""
    id: str
    value: Optional[str] = None


class ListObjectsResponse(BaseModel):
    """Response model for `GET /api/s3/list`."""
    folders: List[str]
    files: List[str]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "folders": ["upload/posts/0001/images/"],
                "files": ["upload/posts/0001/cover.png"],
            }
        }
    )

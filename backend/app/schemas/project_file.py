import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

FileType = Literal["file", "folder"]

# Bounds the (project_id, path) unique index entry
MAX_NAME_LENGTH = 255
MAX_PATH_LENGTH = 1024

camel_config = {"alias_generator": to_camel, "populate_by_name": True}


class ProjectFileResponse(BaseModel):
    id: uuid.UUID
    name: str
    path: str
    type: FileType
    content: str
    language: str
    project_id: uuid.UUID
    parent_id: uuid.UUID | None
    is_root: bool
    created_at: datetime
    updated_at: datetime

    model_config = {**camel_config, "from_attributes": True}


class ProjectFileCreate(BaseModel):
    # Required fields are checked by the service so the error message is uniform.
    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    path: str | None = Field(default=None, max_length=MAX_PATH_LENGTH)
    type: FileType | None = None
    content: str | None = None
    project_id: uuid.UUID | None = None
    parent_id: uuid.UUID | None = None

    model_config = camel_config


class ProjectFileSeed(BaseModel):
    name: str = Field(max_length=MAX_NAME_LENGTH)
    path: str = Field(max_length=MAX_PATH_LENGTH)
    type: FileType
    content: str = ""

    model_config = camel_config


class ProjectFileUpdate(BaseModel):
    content: str | None = None
    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    path: str | None = Field(default=None, max_length=MAX_PATH_LENGTH)

    model_config = camel_config


class FileDeleteResponse(BaseModel):
    message: str
    deleted_file_id: uuid.UUID

    model_config = camel_config

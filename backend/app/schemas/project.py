import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.project_file import ProjectFileResponse, ProjectFileSeed, camel_config

Framework = Literal["react", "vanilla"]


class ProjectCreate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    framework: Framework = "react"
    files: list[ProjectFileSeed] | None = None

    model_config = camel_config


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    is_public: bool | None = None

    model_config = camel_config


class ProjectResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    owner_id: str
    file_ids: list[str]
    framework: Framework
    is_public: bool
    last_accessed: datetime
    created_at: datetime
    updated_at: datetime
    files: list[ProjectFileResponse] = []

    model_config = {**camel_config, "from_attributes": True}


class RecentProject(BaseModel):
    id: uuid.UUID
    name: str
    last_accessed: datetime

    model_config = {**camel_config, "from_attributes": True}


class ProjectStats(BaseModel):
    total_projects: int
    recent_projects: list[RecentProject]

    model_config = camel_config


class ProjectDeleteResponse(BaseModel):
    message: str
    deleted_project_id: uuid.UUID

    model_config = camel_config

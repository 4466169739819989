"""Ownership checks shared by the project and file services.

A resource that exists but belongs to someone else is reported exactly like a
missing one, so callers cannot discover ids they do not own.
"""
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models.project import Project
from app.models.project_file import ProjectFile


async def find_owned_project(db: AsyncSession, owner_id: str, project_id: uuid.UUID) -> Project | None:
    result = await db.execute(
        select(Project)
        .where(Project.id == project_id, Project.owner_id == owner_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def require_project(db: AsyncSession, owner_id: str, project_id: uuid.UUID) -> Project:
    project = await find_owned_project(db, owner_id, project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


async def require_file(db: AsyncSession, owner_id: str, file_id: uuid.UUID) -> tuple[ProjectFile, Project]:
    """Resolve a file and its project, failing unless the project is owned by ``owner_id``."""
    file = await db.get(ProjectFile, file_id)
    if not file:
        raise NotFoundError("File not found")
    project = await find_owned_project(db, owner_id, file.project_id)
    if not project:
        raise NotFoundError("File not found")
    return file, project

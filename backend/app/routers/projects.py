import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_owner
from app.dependencies import get_db
from app.schemas.project import (
    ProjectCreate,
    ProjectDeleteResponse,
    ProjectResponse,
    ProjectStats,
    ProjectUpdate,
)
from app.services import project_service

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(owner_id: str = Depends(get_current_owner), db: AsyncSession = Depends(get_db)):
    return await project_service.list_projects(db, owner_id)


# Registered before /{project_id} so "user" is not read as an id
@router.get("/user/stats", response_model=ProjectStats)
async def get_stats(owner_id: str = Depends(get_current_owner), db: AsyncSession = Depends(get_db)):
    return await project_service.get_stats(db, owner_id)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: uuid.UUID,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.get_project(db, owner_id, project_id)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    data: ProjectCreate,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.create_project(db, owner_id, data)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    data: ProjectUpdate,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.update_project(db, owner_id, project_id, data)


@router.delete("/{project_id}", response_model=ProjectDeleteResponse)
async def delete_project(
    project_id: uuid.UUID,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await project_service.delete_project(db, owner_id, project_id)
    return ProjectDeleteResponse(message="Project deleted successfully", deleted_project_id=deleted_id)

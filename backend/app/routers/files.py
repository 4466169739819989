import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_owner
from app.dependencies import get_db
from app.schemas.project_file import (
    FileDeleteResponse,
    ProjectFileCreate,
    ProjectFileResponse,
    ProjectFileUpdate,
)
from app.services import file_service

router = APIRouter(prefix="/api/files", tags=["files"])


@router.post("", response_model=ProjectFileResponse, status_code=201)
async def create_file(
    data: ProjectFileCreate,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    return await file_service.create_file(db, owner_id, data)


@router.get("/project/{project_id}", response_model=list[ProjectFileResponse])
async def list_files(
    project_id: uuid.UUID,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    return await file_service.list_files(db, owner_id, project_id)


@router.get("/{file_id}", response_model=ProjectFileResponse)
async def get_file(
    file_id: uuid.UUID,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    return await file_service.get_file(db, owner_id, file_id)


@router.put("/{file_id}", response_model=ProjectFileResponse)
async def update_file(
    file_id: uuid.UUID,
    data: ProjectFileUpdate,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    return await file_service.update_file(db, owner_id, file_id, data)


@router.delete("/{file_id}", response_model=FileDeleteResponse)
async def delete_file(
    file_id: uuid.UUID,
    owner_id: str = Depends(get_current_owner),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await file_service.delete_file(db, owner_id, file_id)
    return FileDeleteResponse(message="File deleted successfully", deleted_file_id=deleted_id)

import logging
import uuid

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from app.db.base import utcnow
from app.errors import ValidationError
from app.models.project import DEFAULT_DESCRIPTION, Project
from app.models.project_file import ProjectFile
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectStats, ProjectUpdate, RecentProject
from app.schemas.project_file import ProjectFileResponse
from app.services import file_service
from app.services.ownership import require_project

logger = logging.getLogger(__name__)

RECENT_PROJECTS_LIMIT = 5


async def with_files(db: AsyncSession, project: Project) -> ProjectResponse:
    """Build the project payload with its files resolved from ``ProjectFile.project_id``.

    ``file_ids`` is rewritten from the resolved files when it has drifted.
    """
    files = await file_service.get_project_files(db, project.id)
    actual = [str(f.id) for f in files]
    if set(actual) != set(project.file_ids or []):
        logger.info("Reconciling file list for project %s", project.id)
        await file_service.write_file_ids(db, project.id, actual)
        await db.commit()
        set_committed_value(project, "file_ids", actual)

    response = ProjectResponse.model_validate(project)
    response.files = [ProjectFileResponse.model_validate(f) for f in files]
    return response


async def list_projects(db: AsyncSession, owner_id: str) -> list[ProjectResponse]:
    result = await db.execute(
        select(Project)
        .where(Project.owner_id == owner_id)
        .order_by(Project.updated_at.desc())
        .execution_options(populate_existing=True)
    )
    return [await with_files(db, project) for project in result.scalars().all()]


async def get_project(db: AsyncSession, owner_id: str, project_id: uuid.UUID) -> ProjectResponse:
    project = await require_project(db, owner_id, project_id)

    now = utcnow()
    await db.execute(
        update(Project)
        .where(Project.id == project.id)
        .values(last_accessed=now, updated_at=Project.updated_at)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    set_committed_value(project, "last_accessed", now)
    return await with_files(db, project)


async def create_project(db: AsyncSession, owner_id: str, data: ProjectCreate) -> ProjectResponse:
    name = (data.name or "").strip()
    if not name:
        raise ValidationError("Project name is required")

    project = Project(
        id=uuid.uuid4(),
        name=name,
        description=(data.description or "").strip() or DEFAULT_DESCRIPTION,
        owner_id=owner_id,
        framework=data.framework,
        file_ids=[],
    )
    files = file_service.build_seed_files(project.id, data.files or [])
    project.file_ids = [str(f.id) for f in files]

    db.add(project)
    await db.flush()
    db.add_all(files)
    await db.commit()
    await db.refresh(project)
    logger.info("Created project %s (%d files) for user %s", project.id, len(files), owner_id)
    return await with_files(db, project)


async def update_project(
    db: AsyncSession, owner_id: str, project_id: uuid.UUID, data: ProjectUpdate
) -> ProjectResponse:
    project = await require_project(db, owner_id, project_id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
        if not changes["name"]:
            raise ValidationError("Project name cannot be empty")
    if changes.get("description") is not None:
        changes["description"] = changes["description"].strip()

    for field, value in changes.items():
        # An explicit null means "leave it", same as an absent field
        if value is not None:
            setattr(project, field, value)
    project.updated_at = utcnow()
    await db.commit()
    await db.refresh(project)
    return await with_files(db, project)


async def delete_project(db: AsyncSession, owner_id: str, project_id: uuid.UUID) -> uuid.UUID:
    project = await require_project(db, owner_id, project_id)
    result = await db.execute(delete(ProjectFile).where(ProjectFile.project_id == project.id))
    await db.execute(delete(Project).where(Project.id == project.id))
    await db.commit()
    logger.info("Deleted project %s and %d files", project_id, result.rowcount)
    return project_id


async def get_stats(db: AsyncSession, owner_id: str) -> ProjectStats:
    total = await db.scalar(select(func.count()).select_from(Project).where(Project.owner_id == owner_id))
    result = await db.execute(
        select(Project.id, Project.name, Project.last_accessed)
        .where(Project.owner_id == owner_id)
        .order_by(Project.last_accessed.desc())
        .limit(RECENT_PROJECTS_LIMIT)
    )
    return ProjectStats(
        total_projects=total or 0,
        recent_projects=[RecentProject.model_validate(row) for row in result.all()],
    )

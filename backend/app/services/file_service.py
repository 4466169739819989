import logging
import posixpath
import re
import uuid
from collections.abc import Iterable

from sqlalchemy import Select, delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import utcnow
from app.errors import ConflictError, ValidationError
from app.models.project import Project
from app.models.project_file import ProjectFile
from app.schemas.project_file import ProjectFileCreate, ProjectFileSeed, ProjectFileUpdate
from app.services.ownership import require_file, require_project

logger = logging.getLogger(__name__)

_LAST_SEGMENT = re.compile(r"[^/]+$")


def renamed_path(path: str, name: str) -> str:
    """Replace the final segment of ``path`` with ``name``, keeping the parent directory."""
    return _LAST_SEGMENT.sub(lambda _: name, path)


async def get_file_by_path(db: AsyncSession, project_id: uuid.UUID, path: str) -> ProjectFile | None:
    result = await db.execute(
        select(ProjectFile).where(
            ProjectFile.project_id == project_id,
            ProjectFile.path == path,
        )
    )
    return result.scalar_one_or_none()


async def get_project_files(db: AsyncSession, project_id: uuid.UUID) -> list[ProjectFile]:
    # "folder" sorts after "file", so descending type puts folders first
    result = await db.execute(
        select(ProjectFile)
        .where(ProjectFile.project_id == project_id)
        .order_by(ProjectFile.type.desc(), ProjectFile.name.asc())
    )
    return list(result.scalars().all())


async def collect_subtree_ids(db: AsyncSession, root_id: uuid.UUID) -> list[uuid.UUID]:
    """Return ``root_id`` and the ids of every node below it, walking ``parent_id`` level by level."""
    ids = [root_id]
    seen = {root_id}
    frontier = [root_id]
    while frontier:
        result = await db.execute(select(ProjectFile.id).where(ProjectFile.parent_id.in_(frontier)))
        frontier = [child_id for child_id in result.scalars().all() if child_id not in seen]
        seen.update(frontier)
        ids.extend(frontier)
    return ids


async def write_file_ids(db: AsyncSession, project_id: uuid.UUID, file_ids: list[str]) -> None:
    # Keeps updated_at as is: membership bookkeeping is not a project edit.
    await db.execute(
        update(Project)
        .where(Project.id == project_id)
        .values(file_ids=file_ids, updated_at=Project.updated_at)
        .execution_options(synchronize_session=False)
    )


def locked_file_ids(project_id: uuid.UUID) -> Select:
    # Row lock serializes concurrent read-modify-write of the same project's list
    return select(Project.file_ids).where(Project.id == project_id).with_for_update()


async def sync_membership(
    db: AsyncSession,
    project_id: uuid.UUID,
    added: Iterable[uuid.UUID] = (),
    removed: Iterable[uuid.UUID] = (),
) -> bool:
    """
    Best-effort update of a project's ``file_ids``.

    Runs after the file write has been committed. A failure is logged and
    reported through the return value; the file write stands either way.
    """
    removed_ids = {str(file_id) for file_id in removed}
    try:
        result = await db.execute(locked_file_ids(project_id))
        current = result.scalar_one_or_none()
        if current is None:
            return False
        file_ids = [file_id for file_id in current if file_id not in removed_ids]
        for file_id in added:
            if str(file_id) not in file_ids:
                file_ids.append(str(file_id))
        await write_file_ids(db, project_id, file_ids)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.warning("Could not sync file list for project %s", project_id, exc_info=True)
        return False
    return True


def build_seed_files(project_id: uuid.UUID, seeds: list[ProjectFileSeed]) -> list[ProjectFile]:
    """
    Turn a project's initial file set into ``ProjectFile`` rows.

    Entries are linked to the seeded folder whose path is their directory, so
    a nested seed set arrives as a proper tree.
    """
    paths = [seed.path.strip() for seed in seeds]
    duplicates = {path for path in paths if paths.count(path) > 1}
    if duplicates:
        raise ConflictError(f"Duplicate path in initial files: {sorted(duplicates)[0]}")

    folders: dict[str, ProjectFile] = {}
    files = []
    for seed in sorted(seeds, key=lambda s: s.path.strip().rstrip("/").count("/")):
        name = seed.name.strip()
        path = seed.path.strip()
        if not name or not path:
            raise ValidationError("Initial files need a name and a path")
        key = path.rstrip("/")
        parent = folders.get(posixpath.dirname(key))
        file = ProjectFile(
            id=uuid.uuid4(),
            name=name,
            path=path,
            type=seed.type,
            content=seed.content,
            project_id=project_id,
            parent_id=parent.id if parent else None,
            is_root=parent is None,
        )
        if seed.type == "folder":
            folders[key] = file
        files.append(file)
    return files


async def list_files(db: AsyncSession, owner_id: str, project_id: uuid.UUID) -> list[ProjectFile]:
    await require_project(db, owner_id, project_id)
    return await get_project_files(db, project_id)


async def get_file(db: AsyncSession, owner_id: str, file_id: uuid.UUID) -> ProjectFile:
    file, _ = await require_file(db, owner_id, file_id)
    return file


async def create_file(db: AsyncSession, owner_id: str, data: ProjectFileCreate) -> ProjectFile:
    name = (data.name or "").strip()
    path = (data.path or "").strip()
    if not name or not path or not data.type or not data.project_id:
        raise ValidationError("Name, path, type, and projectId are required")

    project = await require_project(db, owner_id, data.project_id)

    if data.parent_id is not None:
        parent = await db.get(ProjectFile, data.parent_id)
        if not parent or parent.project_id != project.id or not parent.is_folder:
            raise ValidationError("Parent folder not found")

    if await get_file_by_path(db, project.id, path):
        raise ConflictError("File/folder already exists at this path")

    file = ProjectFile(
        name=name,
        path=path,
        type=data.type,
        content=data.content or "",
        project_id=project.id,
        parent_id=data.parent_id,
        is_root=data.parent_id is None,
    )
    db.add(file)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        # Either a concurrent create took the path or the parent folder was deleted meanwhile
        if await get_file_by_path(db, data.project_id, path):
            raise ConflictError("File/folder already exists at this path") from e
        raise ValidationError("Parent folder not found") from e
    await db.refresh(file)
    logger.info("Created %s %s in project %s", file.type, file.path, project.id)

    if not await sync_membership(db, project.id, added=[file.id]):
        # The rollback expired the new row; reload it for the response
        await db.refresh(file)
    return file


async def update_file(
    db: AsyncSession, owner_id: str, file_id: uuid.UUID, data: ProjectFileUpdate
) -> ProjectFile:
    file, _ = await require_file(db, owner_id, file_id)

    new_name = file.name
    new_path = file.path
    if data.name is not None:
        new_name = data.name.strip()
        if not new_name:
            raise ValidationError("Name cannot be empty")
        if new_name != file.name:
            new_path = renamed_path(file.path, new_name)
    if data.path is not None:
        new_path = data.path.strip()
        if not new_path:
            raise ValidationError("Path cannot be empty")

    descendants: list[tuple[ProjectFile, str]] = []
    if new_path != file.path:
        existing = await get_file_by_path(db, file.project_id, new_path)
        if existing and existing.id != file.id:
            raise ConflictError("Path already exists")
        if file.is_folder:
            descendants = await _moved_descendants(db, file, new_path)

    now = utcnow()
    if data.content is not None:
        file.content = data.content
    file.name = new_name
    file.path = new_path
    file.updated_at = now
    for child, child_path in descendants:
        child.path = child_path
        child.updated_at = now
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("Path already exists") from e
    await db.refresh(file)
    return file


async def _moved_descendants(
    db: AsyncSession, folder: ProjectFile, new_path: str
) -> list[tuple[ProjectFile, str]]:
    """Pair each node under ``folder`` with its path once the folder moves to ``new_path``.

    Only nodes whose path sits under the folder's current path are rewritten.
    """
    old_prefix = folder.path.rstrip("/") + "/"
    new_prefix = new_path.rstrip("/") + "/"
    subtree = await collect_subtree_ids(db, folder.id)
    result = await db.execute(select(ProjectFile).where(ProjectFile.id.in_(subtree[1:])))
    moved = [
        (child, new_prefix + child.path[len(old_prefix):])
        for child in result.scalars().all()
        if child.path.startswith(old_prefix)
    ]
    if not moved:
        return moved

    taken = await db.execute(
        select(ProjectFile.path).where(
            ProjectFile.project_id == folder.project_id,
            ProjectFile.path.in_([path for _, path in moved]),
            ProjectFile.id.not_in(subtree),
        )
    )
    clash = taken.scalars().first()
    if clash is not None:
        raise ConflictError(f"Path already exists: {clash}")
    return moved


async def delete_file(db: AsyncSession, owner_id: str, file_id: uuid.UUID) -> uuid.UUID:
    file, project = await require_file(db, owner_id, file_id)

    kind, path = file.type, file.path
    if file.is_folder:
        doomed = await collect_subtree_ids(db, file.id)
    else:
        doomed = [file.id]
    await db.execute(delete(ProjectFile).where(ProjectFile.id.in_(doomed)))
    await db.commit()
    logger.info("Deleted %s %s (%d nodes) from project %s", kind, path, len(doomed), project.id)

    await sync_membership(db, project.id, removed=doomed)
    return file_id

import posixpath
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, Uuid, event, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow

FILE_TYPES = ("file", "folder")
DEFAULT_LANGUAGE = "plaintext"

LANGUAGE_BY_EXTENSION = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".css": "css",
    ".html": "html",
    ".json": "json",
}


def detect_language(name: str, current: str | None = None) -> str:
    """Map a file name to an editor language, keeping ``current`` for unknown extensions."""
    _, ext = posixpath.splitext(name or "")
    return LANGUAGE_BY_EXTENSION.get(ext.lower(), current or DEFAULT_LANGUAGE)


class ProjectFile(Base):
    __tablename__ = "project_files"
    __table_args__ = (
        UniqueConstraint("project_id", "path", name="uq_project_files_project_path"),
        Index("ix_project_files_parent_id", "parent_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    language: Mapped[str] = mapped_column(String(30), nullable=False, default=DEFAULT_LANGUAGE)
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("project_files.id", ondelete="CASCADE"), nullable=True
    )
    is_root: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"


@event.listens_for(ProjectFile, "before_insert")
@event.listens_for(ProjectFile, "before_update")
def _refresh_language(mapper, connection, target: ProjectFile) -> None:
    if target.type == "file":
        target.language = detect_language(target.name, target.language)

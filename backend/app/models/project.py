import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow

DEFAULT_DESCRIPTION = "My React Project"
FRAMEWORKS = ("react", "vanilla")


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_owner_created", "owner_id", "created_at"),
        Index("ix_projects_last_accessed", "last_accessed"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default=DEFAULT_DESCRIPTION)
    owner_id: Mapped[str] = mapped_column(Text, nullable=False)
    # Denormalized cache of ProjectFile.project_id; reconciled on read.
    file_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    framework: Mapped[str] = mapped_column(String(20), nullable=False, default="react")
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_accessed: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )

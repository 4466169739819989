from app.models.project import Project
from app.models.project_file import ProjectFile

__all__ = ["Project", "ProjectFile"]

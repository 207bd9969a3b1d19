from .project import ProjectCreate, ProjectResponse, ProjectUpdate

__all__ = ["ProjectCreate", "ProjectResponse", "ProjectUpdate"]

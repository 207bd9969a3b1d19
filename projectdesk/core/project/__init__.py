from .project_manager import InvalidProjectData, ProjectManager

__all__ = ["InvalidProjectData", "ProjectManager"]

# ============================================
# tracker/models/__init__.py
# ============================================
from .user import User
from .project import Project, ProjectAssignment
from .bug import Bug

__all__ = [
    'User',
    'Project',
    'ProjectAssignment',
    'Bug',
]

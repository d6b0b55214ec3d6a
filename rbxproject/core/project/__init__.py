"""Project file model and loader.

This package describes project files: a name and a tree of nodes that maps
onto an instance tree, with content optionally drawn from paths on disk.
"""

from .node import (
    PROJECT_FILENAME,
    PROJECT_SUFFIX,
    ExplicitValue,
    ProjectNode,
    UnresolvedValue,
    is_project_file,
)
from .project import Project, load_project
from .validator import (
    DiagnosticKind,
    ProjectDiagnostic,
    ProjectValidator,
    ValidationResult,
)

__all__ = [
    'PROJECT_FILENAME',
    'PROJECT_SUFFIX',
    'DiagnosticKind',
    'ExplicitValue',
    'Project',
    'ProjectDiagnostic',
    'ProjectNode',
    'ProjectValidator',
    'UnresolvedValue',
    'ValidationResult',
    'is_project_file',
    'load_project',
]

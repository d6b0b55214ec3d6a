"""rbxproject.

Loads, validates and exposes project files: JSON documents describing a tree
of named instances, where each node may set its class, draw its content from
a path on disk, assign properties and declare how unknown instances are
treated during live sync.

Key features:
1. Strict, closed schema parsing with errors that point at the offending key
2. Locating project files from either a file or a folder path
3. Non-fatal diagnostics returned to the caller instead of printed
4. Stable serialization for writing projects back to disk
"""

from rbxproject.core.errors.errors import (
    BaseError,
    ProjectError,
    ProjectIoError,
    ProjectParseError,
)
from rbxproject.core.project import (
    PROJECT_FILENAME,
    DiagnosticKind,
    Project,
    ProjectDiagnostic,
    ProjectNode,
    is_project_file,
    load_project,
)
from rbxproject.core.settings.settings import ProjectSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    # Project model
    "Project",
    "ProjectNode",
    "ProjectDiagnostic",
    "DiagnosticKind",
    "PROJECT_FILENAME",
    "is_project_file",
    "load_project",

    # Errors
    "BaseError",
    "ProjectError",
    "ProjectIoError",
    "ProjectParseError",

    # Settings
    "ProjectSettings",
    "get_settings",

    # Version
    "__version__"
]

"""Project files: locating, loading, validating and saving them.

A project file maps a top-level name and a tree of nodes onto an instance
tree. This module finds the file for a given path, parses it against the
closed project schema and returns an immutable Project.
"""

import json
import logging
import stat
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from rbxproject.core.errors.errors import ProjectError, ProjectIoError, ProjectParseError
from rbxproject.core.models import StrictBaseModel
from rbxproject.core.settings.settings import ProjectSettings, get_settings

from .node import FILE_CONTEXT_KEY, PROJECT_FILENAME, ProjectNode, is_project_file
from .paths import resolve_path
from .validator import ProjectDiagnostic, ProjectValidator, ValidationResult

logger = logging.getLogger(__name__)

Port = Annotated[int, Field(ge=0, le=65535)]
# Place IDs are unsigned 64-bit integers.
PlaceId = Annotated[int, Field(ge=0, le=2**64 - 1)]


class Project(StrictBaseModel):
    """A parsed project file.

    Relative paths in the tree are relative to ``folder_location``, the folder
    containing the file this project was loaded from.
    """

    # The name of the top-level instance described by the project.
    name: str

    # The tree of instances described by this project. Projects always
    # describe at least one instance.
    tree: ProjectNode

    # If set, the default port live sync should use for this project.
    serve_port: Port | None = Field(default=None, alias="servePort")

    # If set and not empty, the place IDs this project may be live synced
    # into. Guards against syncing into the wrong place.
    serve_place_ids: frozenset[PlaceId] | None = Field(default=None, alias="servePlaceIds")

    _file_location: Path | None = PrivateAttr(default=None)
    _diagnostics: tuple[ProjectDiagnostic, ...] = PrivateAttr(default=())

    @staticmethod
    def is_project_file(path: str | Path) -> bool:
        """Tell whether the given path names a project file."""
        return is_project_file(path)

    @classmethod
    def locate(cls, path: str | Path) -> Path | None:
        """Find the project file represented by the given path.

        The path is either a ``.project.json`` file or a folder containing a
        ``default.project.json`` file. Anything else, including paths that
        cannot be inspected, locates nothing.
        """
        path = Path(path)
        try:
            mode = path.stat().st_mode
        except (OSError, ValueError) as e:
            logger.debug(f"No project at {path}: {e}")
            return None

        if stat.S_ISREG(mode):
            return path if is_project_file(path) else None

        if not stat.S_ISDIR(mode):
            return None

        child_path = path / PROJECT_FILENAME
        try:
            child_mode = child_path.stat().st_mode
        except (OSError, ValueError) as e:
            logger.debug(f"No {PROJECT_FILENAME} in {path}: {e}")
            return None

        if stat.S_ISREG(child_mode):
            return child_path

        # A folder named like a default project file can never be parsed.
        logger.debug(f"{child_path} is not a regular file, ignoring it")
        return None

    @classmethod
    def load_fuzzy(cls, fuzzy_project_location: str | Path) -> "Project | None":
        """Locate and load the project at the given path.

        Returns:
            The loaded project, or None when no project file was found

        Raises:
            ProjectIoError: The located file could not be read
            ProjectParseError: The located file is not a valid project
        """
        project_path = cls.locate(fuzzy_project_location)
        if project_path is None:
            logger.debug(f"No project found at {fuzzy_project_location}")
            return None
        return cls.load_exact(project_path)

    @classmethod
    def load_exact(cls, project_file_location: str | Path) -> "Project":
        """Load the project file at exactly the given path."""
        project_file_location = Path(project_file_location)
        try:
            contents = project_file_location.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ProjectIoError(project_file_location, e) from e

        return cls._parse(contents, project_file_location)

    @classmethod
    def load_from_slice(cls, contents: bytes | str, project_file_location: str | Path) -> "Project":
        """Load a project from content already in memory.

        The location is still required: it anchors the relative paths in the tree.

        Raises:
            ProjectParseError: The content is not a valid project
        """
        return cls._parse(contents, Path(project_file_location))

    @classmethod
    def _parse(cls, contents: bytes | str, project_file_location: Path) -> "Project":
        try:
            project = cls.model_validate_json(
                contents,
                by_alias=True,
                by_name=False,
                context={FILE_CONTEXT_KEY: True},
            )
        except PydanticValidationError as e:
            raise ProjectParseError.from_validation_error(project_file_location, e) from e

        project._file_location = project_file_location.absolute()
        project._diagnostics = tuple(project.check_compatibility().diagnostics)
        project._report_diagnostics()

        logger.info(f"Loaded project '{project.name}' from {project._file_location}")
        return project

    def _report_diagnostics(self) -> None:
        if not self._diagnostics or not get_settings().log_diagnostics:
            return
        for diagnostic in self._diagnostics:
            logger.warning(f"{self._file_location}: {diagnostic}")

    def check_compatibility(self) -> ValidationResult:
        """Check the tree for problems that do not prevent loading it."""
        return ProjectValidator().validate(self)

    @property
    def diagnostics(self) -> tuple[ProjectDiagnostic, ...]:
        """Diagnostics collected when this project was loaded."""
        return self._diagnostics

    @property
    def file_location(self) -> Path:
        """The project file this project was loaded from."""
        if self._file_location is None:
            raise RuntimeError(f"Project '{self.name}' was not loaded from a file")
        return self._file_location

    @property
    def folder_location(self) -> Path:
        """The folder that relative paths in this project are resolved against."""
        return self.file_location.parent

    def resolve_node_path(self, node: ProjectNode) -> Path | None:
        """Get the filesystem location of a node's ``$path``, if it has one."""
        if node.path is None:
            return None
        return resolve_path(node.path, self.folder_location)

    def effective_serve_port(self, settings: ProjectSettings | None = None) -> int:
        """The live sync port: servePort, or the configured default."""
        if self.serve_port is not None:
            return self.serve_port
        return (settings or get_settings()).default_serve_port

    def accepts_place_id(self, place_id: int) -> bool:
        """Tell whether live sync into the given place is allowed."""
        if not self.serve_place_ids:
            return True
        return place_id in self.serve_place_ids

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize into the project file representation."""
        anchor = self.folder_location if self._file_location is not None else None

        out: dict[str, Any] = {"name": self.name}
        if self.serve_port is not None:
            out["servePort"] = self.serve_port
        if self.serve_place_ids is not None:
            out["servePlaceIds"] = sorted(self.serve_place_ids)
        out["tree"] = self.tree.to_json_dict(anchor)
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_json_dict(), indent=2, ensure_ascii=False) + "\n"

    def save(self) -> None:
        """Write this project back to its file location.

        The content goes to a sibling temporary file first, which then replaces
        the project file, so a failed save leaves the previous file intact.

        Raises:
            ProjectIoError: The file could not be written
        """
        location = self.file_location
        temp_location = location.with_name(f"{location.name}.tmp")
        try:
            temp_location.write_text(self.to_json(), encoding="utf-8")
            temp_location.replace(location)
        except OSError as e:
            temp_location.unlink(missing_ok=True)
            raise ProjectIoError(location, e, operation="write") from e

        logger.info(f"Saved project '{self.name}' to {self.file_location}")


def load_project(path: str | Path) -> Project:
    """Locate and load a project, failing when there is none.

    Args:
        path: A project file, or a folder containing default.project.json

    Returns:
        Loaded project

    Raises:
        ProjectError: No project was found, or it could not be loaded
    """
    project = Project.load_fuzzy(path)
    if project is None:
        raise ProjectError(f"No project found at '{path}'", path, "locate")
    return project

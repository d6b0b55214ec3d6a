"""Project tree validation utilities.

Validation never rejects a project: it returns diagnostics describing parts of
an otherwise valid tree that should be fixed. How they are presented (logged,
shown in a UI, failing a CI job) is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .node import ProjectNode
    from .project import Project


class DiagnosticKind(str, Enum):
    RESERVED_NAME = "reserved_name"
    CLASS_NAME_WITH_PATH = "class_name_with_path"


@dataclass(frozen=True)
class ProjectDiagnostic:
    """A single non-fatal problem found in a project tree."""

    kind: DiagnosticKind
    node_path: tuple[str, ...]
    key: str
    message: str

    @property
    def location(self) -> str:
        return ".".join(("tree", *self.node_path))

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class ValidationResult:
    """Encapsulates validation output."""

    diagnostics: list[ProjectDiagnostic] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.diagnostics

    def add(self, diagnostic: ProjectDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[ProjectDiagnostic]) -> None:
        self.diagnostics.extend(diagnostics)

    def of_kind(self, kind: DiagnosticKind) -> list[ProjectDiagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]


def reserved_name_diagnostic(node_path: tuple[str, ...], key: str) -> ProjectDiagnostic:
    return ProjectDiagnostic(
        kind=DiagnosticKind.RESERVED_NAME,
        node_path=node_path,
        key=key,
        message=(
            "Keys starting with '$' are reserved to ensure forward compatibility. "
            f"This project uses the key '{key}', which should be renamed."
        ),
    )


def class_name_with_path_diagnostic(
    node_path: tuple[str, ...], class_name: str, path: str
) -> ProjectDiagnostic:
    return ProjectDiagnostic(
        kind=DiagnosticKind.CLASS_NAME_WITH_PATH,
        node_path=node_path,
        key="$className",
        message=(
            f"$className '{class_name}' is set together with $path '{path}'. "
            "Only 'Folder' is always compatible with the class produced by $path."
        ),
    )


class ProjectValidator:
    """Run every tree check over a loaded project."""

    def validate(self, project: Project) -> ValidationResult:
        return self.validate_tree(project.tree)

    def validate_tree(self, tree: ProjectNode) -> ValidationResult:
        result = ValidationResult()
        result.extend(tree.validate_reserved_names())
        result.extend(tree.find_class_conflicts())
        return result

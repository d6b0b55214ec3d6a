"""Recursive description of an instance and its descendants in a project."""

import copy
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

from pydantic import (
    Field,
    JsonValue,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)

from rbxproject.core.models import StrictBaseModel

from .paths import render_path
from .validator import (
    ProjectDiagnostic,
    class_name_with_path_diagnostic,
    reserved_name_diagnostic,
)

PROJECT_FILENAME = "default.project.json"
PROJECT_SUFFIX = ".project.json"

# Class that is compatible with whatever a $path produces.
CONTAINER_CLASS_NAME = "Folder"

# Validation context flag set by the loader. Node objects coming from a file
# carry their children inline and must be split into fields and children.
FILE_CONTEXT_KEY = "project_file"

RESERVED_KEYS = frozenset({
    "$className",
    "$path",
    "$properties",
    "$ignoreUnknownInstances",
})


def is_project_file(path: str | Path) -> bool:
    """Tell whether the given path names a project file.

    Only the file name is checked, the filesystem is never touched.
    """
    return Path(path).name.endswith(PROJECT_SUFFIX)


class ExplicitValue(StrictBaseModel):
    """A property value that names its type, e.g. ``{"Type": "Color3", "Value": [1, 0, 0]}``."""

    type: str = Field(..., alias="Type")
    value: JsonValue = Field(..., alias="Value")


# Property values are kept as written. Resolving them against the property
# types of a class happens when instances are built.
UnresolvedValue = Union[ExplicitValue, bool, int, float, str, list[Union[int, float]]]


def _dump_value(value: UnresolvedValue) -> Any:
    if isinstance(value, ExplicitValue):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return list(value)
    return value


class ProjectNode(StrictBaseModel):
    """Describes an instance and its descendants in a project.

    In a project file every key of a node object that is not one of the
    reserved ``$`` fields names a child node.
    """

    # If set, defines the ClassName of the described instance. Required when
    # path is not set. When path is set, only a class compatible with the
    # content of path may be given; see find_class_conflicts.
    class_name: str | None = Field(default=None, alias="$className")

    # Children by name, always ordered by name. Read-only.
    children: Mapping[str, "ProjectNode"] = Field(default_factory=dict)

    # Properties assigned to the resulting instance, not yet resolved. Read-only.
    properties: Mapping[str, UnresolvedValue] = Field(default_factory=dict, alias="$properties")

    # Whether instances that this project does not describe are left alone
    # (True) or removed (False) during live sync. When unset the default
    # depends on path, see effective_ignore_unknown_instances.
    ignore_unknown_instances: bool | None = Field(default=None, alias="$ignoreUnknownInstances")

    # File or folder that supplies the content of this instance, relative to
    # the folder containing the project file.
    path: Path | None = Field(default=None, alias="$path", strict=False)

    @model_validator(mode="before")
    @classmethod
    def _project_reserved_keys(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict) or not (info.context or {}).get(FILE_CONTEXT_KEY):
            return data

        fields: dict[str, Any] = {}
        children: dict[str, Any] = {}
        for key, value in data.items():
            if key in RESERVED_KEYS:
                fields[key] = value
            else:
                children[key] = value
        fields["children"] = children
        return fields

    @field_validator("children", "properties")
    @classmethod
    def _freeze_mapping(cls, v: dict[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(sorted(v.items())))

    @field_serializer("children", "properties")
    def _serialize_mapping(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)

    # Mapping views can be neither pickled nor deep copied, so both go
    # through plain dicts.

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> "ProjectNode":
        return type(self)(
            class_name=self.class_name,
            children=copy.deepcopy(dict(self.children), memo),
            properties=copy.deepcopy(dict(self.properties), memo),
            ignore_unknown_instances=self.ignore_unknown_instances,
            path=self.path,
        )

    def __getstate__(self) -> dict[str, Any]:
        state = super().__getstate__()
        state["__dict__"] = {
            **state["__dict__"],
            "children": dict(self.children),
            "properties": dict(self.properties),
        }
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        fields = state["__dict__"]
        state["__dict__"] = {
            **fields,
            "children": MappingProxyType(fields["children"]),
            "properties": MappingProxyType(fields["properties"]),
        }
        super().__setstate__(state)

    @model_validator(mode="after")
    def _require_class_source(self) -> "ProjectNode":
        if self.class_name is None and self.path is None:
            raise ValueError("a node must set $className, $path, or both")
        return self

    @property
    def effective_ignore_unknown_instances(self) -> bool:
        """Resolve ignore_unknown_instances, applying the default when unset.

        A node without path keeps unknown instances; a node with path owns
        everything under it and unknown instances are removed.
        """
        if self.ignore_unknown_instances is not None:
            return self.ignore_unknown_instances
        return self.path is None

    def walk(self, node_path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], "ProjectNode"]]:
        """Yield ``(node_path, node)`` for this node and all descendants, depth first."""
        yield node_path, self
        for name, child in self.children.items():
            yield from child.walk((*node_path, name))

    def validate_reserved_names(self) -> list[ProjectDiagnostic]:
        """Report every child name in the tree that starts with ``$``."""
        diagnostics = []
        for node_path, _ in self.walk():
            if node_path and node_path[-1].startswith("$"):
                diagnostics.append(reserved_name_diagnostic(node_path, node_path[-1]))
        return diagnostics

    def find_class_conflicts(self) -> list[ProjectDiagnostic]:
        """Report nodes that set both path and a class other than Folder.

        Whether such a class matches the content of path can only be known
        once that content is read, so these are recorded, not rejected.
        """
        diagnostics = []
        for node_path, node in self.walk():
            if (
                node.path is not None
                and node.class_name is not None
                and node.class_name != CONTAINER_CLASS_NAME
            ):
                diagnostics.append(
                    class_name_with_path_diagnostic(node_path, node.class_name, node.path.as_posix())
                )
        return diagnostics

    def to_json_dict(self, anchor: Path | None = None) -> dict[str, Any]:
        """Serialize into the project file representation.

        Unset fields are omitted and ``$path`` is written relative to ``anchor``.
        """
        out: dict[str, Any] = {}
        if self.class_name is not None:
            out["$className"] = self.class_name
        if self.ignore_unknown_instances is not None:
            out["$ignoreUnknownInstances"] = self.ignore_unknown_instances
        if self.path is not None:
            out["$path"] = render_path(self.path, anchor)
        if self.properties:
            out["$properties"] = {
                name: _dump_value(value) for name, value in sorted(self.properties.items())
            }
        for name, child in self.children.items():
            out[name] = child.to_json_dict(anchor)
        return out

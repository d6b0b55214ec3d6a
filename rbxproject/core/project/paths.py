"""Anchor relative handling of ``$path`` values.

Every ``$path`` in a project is relative to the folder containing the project
file, no matter how deep in the tree it appears.
"""

from pathlib import Path


def resolve_path(path: Path, anchor: Path) -> Path:
    """Return the filesystem location a ``$path`` value refers to.

    Absolute paths are returned unchanged.
    """
    return anchor / path


def render_path(path: Path, anchor: Path | None = None) -> str:
    """Render a ``$path`` value for writing into a project file.

    Paths under ``anchor`` are written relative to it. Separators are always
    forward slashes so files stay portable between platforms.
    """
    if anchor is not None and path.is_absolute() and path.is_relative_to(anchor):
        path = path.relative_to(anchor)
    return path.as_posix()

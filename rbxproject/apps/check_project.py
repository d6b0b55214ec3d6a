#!/usr/bin/env python3
"""Check a project file and report what it describes.

Usage:
    rbxproject-check path/to/project           # folder with default.project.json
    rbxproject-check game.project.json --tree  # also print the instance tree
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from rbxproject.core.errors.errors import LoggingHandler, ProjectError
from rbxproject.core.project import Project, ProjectNode
from rbxproject.core.settings.settings import get_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_NOT_FOUND = 2
EXIT_DIAGNOSTICS = 3


def _node_label(name: str, node: ProjectNode) -> str:
    label = f"[bold]{escape(name)}[/bold]"
    if node.class_name is not None:
        label += f" [cyan]{escape(node.class_name)}[/cyan]"
    if node.path is not None:
        label += f" [green]$path={escape(node.path.as_posix())}[/green]"
    if node.properties:
        label += f" [dim]({len(node.properties)} properties)[/dim]"
    if not node.effective_ignore_unknown_instances:
        label += " [magenta]owns unknown instances[/magenta]"
    return label


def render_tree(project: Project) -> Tree:
    """Build a rich tree of the instances a project describes."""
    root = Tree(_node_label(project.name, project.tree))

    def add_children(branch: Tree, node: ProjectNode) -> None:
        for name, child in node.children.items():
            add_children(branch.add(_node_label(name, child)), child)

    add_children(root, project.tree)
    return root


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rbxproject-check",
        description="Locate, load and validate a project file.",
    )
    parser.add_argument("path", help="Project file, or folder containing default.project.json")
    parser.add_argument("--tree", action="store_true", help="Print the described instance tree")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with a non-zero status when diagnostics are found",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override RBXPROJECT_LOG_LEVEL",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    console = Console()

    try:
        project = Project.load_fuzzy(args.path)
    except ProjectError as e:
        LoggingHandler(include_context=False)(e)
        return EXIT_LOAD_FAILED

    if project is None:
        console.print(f"[red]No project found at {escape(args.path)}[/red]")
        return EXIT_NOT_FOUND

    console.print(
        f"Project [bold]{escape(project.name)}[/bold] loaded from {escape(str(project.file_location))}"
    )
    console.print(f"Serve port: {project.effective_serve_port(settings)}")
    if project.serve_place_ids:
        place_ids = ", ".join(str(place_id) for place_id in sorted(project.serve_place_ids))
        console.print(f"Serve place IDs: {place_ids}")

    for diagnostic in project.diagnostics:
        console.print(f"[yellow]warning[/yellow] {escape(str(diagnostic))}")

    if args.tree:
        console.print(render_tree(project))

    if args.strict and project.diagnostics:
        return EXIT_DIAGNOSTICS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""Tests for the rbxproject-check command."""

import logging

from rbxproject.apps.check_project import (
    EXIT_DIAGNOSTICS,
    EXIT_LOAD_FAILED,
    EXIT_NOT_FOUND,
    EXIT_OK,
    main,
    render_tree,
)
from rbxproject.core.project.project import Project


class TestMain:
    """Test the command entry point."""

    def test_valid_project(self, tmp_path, write_project, sample_document, capsys):
        write_project(sample_document)

        assert main([str(tmp_path)]) == EXIT_OK

        out = capsys.readouterr().out
        assert "Sample" in out
        assert "Serve port: 8000" in out
        assert "1818, 2929" in out

    def test_tree_output(self, tmp_path, write_project, sample_document, capsys):
        write_project(sample_document)

        assert main([str(tmp_path), "--tree"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "Baseplate" in out
        assert "$path=src/shared" in out

    def test_location_with_markup_characters(self, tmp_path, write_project, sample_document, capsys):
        folder = tmp_path / "a[" / "b]"
        write_project(sample_document, folder=folder)

        assert main([str(folder)]) == EXIT_OK
        assert "Sample" in capsys.readouterr().out

    def test_missing_project(self, tmp_path, capsys):
        assert main([str(tmp_path / "nothing")]) == EXIT_NOT_FOUND
        assert "No project found" in capsys.readouterr().out

    def test_invalid_project(self, tmp_path, write_project, caplog):
        write_project({"name": "Broken", "tree": {"$className": "Folder"}, "foo": 1})

        with caplog.at_level(logging.ERROR):
            assert main([str(tmp_path)]) == EXIT_LOAD_FAILED

        assert "Invalid project file" in caplog.text
        assert "foo" in caplog.text

    def test_diagnostics_with_strict(self, tmp_path, write_project, capsys):
        write_project({"name": "Odd", "tree": {"$className": "Folder", "$x": {"$className": "Folder"}}})

        assert main([str(tmp_path)]) == EXIT_OK
        assert "warning" in capsys.readouterr().out
        assert main([str(tmp_path), "--strict"]) == EXIT_DIAGNOSTICS


class TestRenderTree:
    """Test render_tree."""

    def test_labels(self, write_project, sample_document):
        project = Project.load_exact(write_project(sample_document))

        tree = render_tree(project)

        assert "Sample" in str(tree.label)
        child_labels = [str(child.label) for child in tree.children]
        assert len(child_labels) == 2
        assert "ReplicatedStorage" in child_labels[0]
        assert "owns unknown instances" in child_labels[1]

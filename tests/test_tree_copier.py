"""Unit tests for TreeCopier."""

import os
from unittest.mock import patch

import pytest

from scaffolder.exceptions import AccessDeniedError, ScaffoldIOError, TemplateNotFoundError
from scaffolder.template import TreeCopier, copy_tree


@pytest.fixture
def template(tmp_path):
    """Template tree with nested directories and unresolved names."""
    root = tmp_path / "template" / "[%project_name%]"
    (root / "src" / "%project_name%").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "README.md").write_text("Hello %project_name%", encoding="utf-8")
    (root / "src" / "%project_name%" / "main.py").write_text("print('hi')\n")
    (root / "logo.bin").write_bytes(bytes(range(256)))
    return root


class TestTreeCopier:
    """Test suite for verbatim tree duplication."""

    def test_copies_structure_verbatim(self, template, tmp_path):
        destination = tmp_path / "out" / "copy"

        copied = TreeCopier().copy(template, destination)

        assert copied == 3
        assert (destination / "README.md").read_text(encoding="utf-8") == "Hello %project_name%"
        assert (destination / "src" / "%project_name%" / "main.py").exists()
        assert (destination / "empty").is_dir()

    def test_binary_content_identical(self, template, tmp_path):
        destination = tmp_path / "copy"
        copy_tree(template, destination)
        assert (destination / "logo.bin").read_bytes() == bytes(range(256))

    def test_creates_destination_ancestors(self, template, tmp_path):
        destination = tmp_path / "a" / "b" / "c"
        TreeCopier().copy(template, destination)
        assert destination.is_dir()

    def test_missing_source_raises_not_found(self, tmp_path):
        destination = tmp_path / "copy"

        with pytest.raises(TemplateNotFoundError) as exc_info:
            TreeCopier().copy(tmp_path / "missing", destination)

        assert exc_info.value.kind == "not_found"
        assert not destination.exists()

    def test_source_that_is_a_file_raises_not_found(self, tmp_path):
        source = tmp_path / "file.txt"
        source.write_text("x")
        with pytest.raises(TemplateNotFoundError):
            TreeCopier().copy(source, tmp_path / "copy")

    def test_existing_file_is_not_overwritten(self, template, tmp_path):
        destination = tmp_path / "copy"
        destination.mkdir()
        (destination / "README.md").write_text("keep me")

        with pytest.raises(ScaffoldIOError) as exc_info:
            TreeCopier().copy(template, destination)

        assert "already exists" in str(exc_info.value)
        assert (destination / "README.md").read_text() == "keep me"

    def test_copy_failure_is_classified(self, template, tmp_path):
        with patch("scaffolder.template.copier.shutil.copy2", side_effect=PermissionError(13, "denied")):
            with pytest.raises(AccessDeniedError):
                TreeCopier().copy(template, tmp_path / "copy")

    def test_generic_os_error_becomes_io_error(self, template, tmp_path):
        with patch("scaffolder.template.copier.shutil.copy2", side_effect=OSError(5, "I/O error")):
            with pytest.raises(ScaffoldIOError) as exc_info:
                TreeCopier().copy(template, tmp_path / "copy")
        assert exc_info.value.kind == "io_error"

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires FIFO support")
    def test_skips_special_files(self, template, tmp_path):
        os.mkfifo(template / "pipe")
        destination = tmp_path / "copy"

        TreeCopier().copy(template, destination)

        assert not (destination / "pipe").exists()
        assert (destination / "README.md").exists()

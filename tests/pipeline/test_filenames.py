"""Unit tests for filename validation, path resolution and references."""

import re
from pathlib import Path

import pytest

from mdpaste.pipeline.filenames import (
    build_reference,
    generate_default_name,
    resolve_image_path,
    validate_filename,
)
from mdpaste.utils.exceptions import (
    DUPLICATE_FILENAME,
    EMPTY_FILENAME,
    UNSAFE_FILENAME,
    PasteError,
    UserCancelled,
)


class TestGenerateDefaultName:
    """Tests for generate_default_name."""

    def test_default_pattern(self):
        name = generate_default_name()
        assert re.fullmatch(r"img_[0-9A-Za-z]{6}\.png", name)

    def test_custom_prefix_and_length(self):
        name = generate_default_name(prefix="shot-", length=10, extension=".png")
        assert re.fullmatch(r"shot-[0-9A-Za-z]{10}\.png", name)

    def test_repeated_calls_differ(self):
        names = {generate_default_name() for _ in range(50)}
        assert len(names) > 1


class TestValidateFilename:
    """Tests for validate_filename, in rule order."""

    def test_dismissed_prompt_is_silent_cancel(self):
        with pytest.raises(UserCancelled) as exc_info:
            validate_filename(None)
        assert exc_info.value.silent is True

    @pytest.mark.parametrize("value", ["", " ", "   \t  "])
    def test_rejects_empty_or_whitespace(self, value):
        with pytest.raises(PasteError) as exc_info:
            validate_filename(value)
        assert exc_info.value.code == EMPTY_FILENAME
        assert exc_info.value.silent is False

    @pytest.mark.security
    @pytest.mark.parametrize(
        "value", ["..", "../secret", "sub/../../x.png", "a..b", "..\\win.png"]
    )
    def test_rejects_parent_traversal(self, value):
        with pytest.raises(PasteError) as exc_info:
            validate_filename(value)
        assert exc_info.value.code == UNSAFE_FILENAME

    @pytest.mark.security
    def test_rejects_absolute_path(self):
        with pytest.raises(PasteError) as exc_info:
            validate_filename("/etc/passwd")
        assert exc_info.value.code == UNSAFE_FILENAME

    def test_allows_subfolder_separator(self):
        assert validate_filename("diagrams/flow") == "diagrams/flow.png"

    def test_trims_whitespace(self):
        assert validate_filename("  diagram  ") == "diagram.png"

    def test_appends_missing_extension(self):
        assert validate_filename("diagram") == "diagram.png"

    @pytest.mark.parametrize("value", ["diagram.png", "diagram.PNG"])
    def test_does_not_duplicate_extension(self, value):
        result = validate_filename(value)
        assert result == value
        assert result.lower().count(".png") == 1

    def test_other_extension_gets_png_appended(self):
        assert validate_filename("photo.jpg") == "photo.jpg.png"

    @pytest.mark.parametrize("value", ["sub/", "sub\\", "a/b/", "sub/."])
    def test_rejects_missing_name_after_folder(self, value):
        with pytest.raises(PasteError) as exc_info:
            validate_filename(value)
        assert exc_info.value.code == UNSAFE_FILENAME


class TestResolveImagePath:
    """Tests for resolve_image_path."""

    def test_creates_missing_folder(self, tmp_path: Path):
        result = resolve_image_path(tmp_path, "images", "diagram.png")
        assert result == tmp_path / "images" / "diagram.png"
        assert (tmp_path / "images").is_dir()
        assert not result.exists()

    def test_creates_nested_subfolders(self, tmp_path: Path):
        result = resolve_image_path(tmp_path, "images", "a/b/c.png")
        assert (tmp_path / "images" / "a" / "b").is_dir()
        assert result.name == "c.png"

    def test_existing_folder_is_fine(self, tmp_path: Path):
        (tmp_path / "images").mkdir()
        resolve_image_path(tmp_path, "images", "x.png")
        resolve_image_path(tmp_path, "images", "y.png")
        assert (tmp_path / "images").is_dir()

    def test_duplicate_raises_without_touching_file(self, tmp_path: Path):
        existing = tmp_path / "images" / "diagram.png"
        existing.parent.mkdir()
        existing.write_bytes(b"original")

        with pytest.raises(PasteError) as exc_info:
            resolve_image_path(tmp_path, "images", "diagram.png")

        assert exc_info.value.code == DUPLICATE_FILENAME
        assert "duplcate filename" in str(exc_info.value)
        assert existing.read_bytes() == b"original"


    @pytest.mark.security
    @pytest.mark.parametrize("folder", ["../outside", "images/../../x", "/tmp/images"])
    def test_unsafe_folder_rejected_before_mkdir(self, tmp_path: Path, folder):
        workspace = tmp_path / "proj"
        workspace.mkdir()

        with pytest.raises(PasteError) as exc_info:
            resolve_image_path(workspace, folder, "x.png")

        assert exc_info.value.code == UNSAFE_FILENAME
        assert list(tmp_path.iterdir()) == [workspace]
        assert list(workspace.iterdir()) == []


class TestBuildReference:
    """Tests for build_reference."""

    def test_sibling_folder(self):
        ref = build_reference(Path("/proj/images/diagram.png"), Path("/proj/notes.md"))
        assert ref == "![image](images/diagram.png)\n"

    def test_document_in_subfolder(self):
        ref = build_reference(Path("/proj/images/d.png"), Path("/proj/docs/guide/intro.md"))
        assert ref == "![image](../../images/d.png)\n"

    def test_spaces_are_percent_encoded(self):
        ref = build_reference(
            Path("/proj/my images/a b.png"), Path("/proj/notes.md")
        )
        assert ref == "![image](my%20images/a%20b.png)\n"

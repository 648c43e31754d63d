"""
Tests for edit values and their factories.
"""
import pytest

from zenith.core.edits import (
    EditIdGenerator,
    EditKind,
    ImageEdit,
    ImageKind,
    TextEdit,
    create_image_edit,
    create_text_edit,
    detect_image_kind,
    image_edit_from_bytes,
)
from zenith.core.edits.models import edit_from_dict, edit_to_dict
from zenith.core.errors import InvalidImageKind


@pytest.fixture
def ids():
    return EditIdGenerator()


class TestTextEdit:

    def test_create_uses_defaults_at_anchor(self, ids):
        edit = create_text_edit(ids, 50, 75)

        assert edit.kind is EditKind.TEXT
        assert (edit.x, edit.y) == (50, 75)
        assert (edit.width, edit.height) == (100, 20)
        assert edit.text == "New Text"
        assert edit.font_size == 14
        assert edit.font_family == "Helvetica"

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            TextEdit(id="a", x=0, y=0, width=0, height=20)
        with pytest.raises(ValueError):
            TextEdit(id="a", x=0, y=0, width=10, height=20, font_size=0)

    def test_merged_applies_known_fields(self, ids):
        edit = create_text_edit(ids, 0, 0)
        moved = edit.merged({"x": 12, "y": 30, "text": "Hello"})

        assert (moved.x, moved.y, moved.text) == (12, 30, "Hello")
        assert moved.id == edit.id
        assert edit.x == 0

    def test_merged_cannot_change_id_or_kind(self, ids):
        edit = create_text_edit(ids, 0, 0)
        patched = edit.merged({"id": "other", "type": "image", "src": b"x"})

        assert patched is edit
        assert isinstance(patched, TextEdit)

    def test_merged_without_changes_returns_same_edit(self, ids):
        edit = create_text_edit(ids, 5, 5)
        assert edit.merged({"x": 5, "y": 5}) is edit


class TestImageEdit:

    def test_create_keeps_aspect_ratio_at_fixed_offset(self, ids):
        edit = create_image_edit(ids, 400, 200, b"data")

        assert edit.kind is EditKind.IMAGE
        assert (edit.width, edit.height) == (200, 100)
        assert (edit.x, edit.y) == (50, 50)

    def test_from_bytes_reads_natural_size(self, ids, png_bytes):
        edit = image_edit_from_bytes(ids, png_bytes)

        assert edit.width == 200
        assert edit.height == pytest.approx(100)
        assert edit.src == png_bytes
        assert edit.image_kind is ImageKind.PNG

    def test_from_bytes_accepts_jpeg(self, ids, jpeg_bytes):
        edit = image_edit_from_bytes(ids, jpeg_bytes)

        assert edit.image_kind is ImageKind.JPEG
        assert edit.height == pytest.approx(100)

    def test_from_bytes_rejects_other_payloads(self, ids):
        with pytest.raises(InvalidImageKind):
            image_edit_from_bytes(ids, b"GIF89a not supported")

    def test_from_bytes_rejects_truncated_png(self, ids, png_bytes):
        with pytest.raises(InvalidImageKind):
            image_edit_from_bytes(ids, png_bytes[:16])

    def test_text_patch_is_ignored(self, ids):
        edit = create_image_edit(ids, 100, 100, b"data")
        assert edit.merged({"text": "nope", "font_size": 30}) is edit


def test_detect_image_kind_by_signature(png_bytes, jpeg_bytes):
    assert detect_image_kind(jpeg_bytes) is ImageKind.JPEG
    assert detect_image_kind(png_bytes) is ImageKind.PNG
    assert detect_image_kind(b"anything else") is ImageKind.PNG


def test_ids_are_never_repeated(ids):
    generated = [ids.next_id() for _ in range(500)]
    assert len(set(generated)) == len(generated)


def test_image_edit_serializes_as_data_url(ids, png_bytes):
    edit = image_edit_from_bytes(ids, png_bytes)
    data = edit_to_dict(edit)

    assert data["type"] == "image"
    assert data["src"].startswith("data:image/png;base64,")
    assert edit_from_dict(data) == edit


def test_text_edit_dict_uses_camel_case_keys(ids):
    data = edit_to_dict(create_text_edit(ids, 1, 2))

    assert data["fontSize"] == 14
    assert data["fontFamily"] == "Helvetica"
    assert isinstance(edit_from_dict(data), TextEdit)


def test_unknown_edit_type_is_rejected():
    with pytest.raises(TypeError):
        edit_to_dict(object())
    with pytest.raises(ValueError):
        edit_from_dict({"type": "drawing", "id": "1", "x": 0, "y": 0, "width": 1, "height": 1})

"""
Tests for file type checks.
"""
import pytest

from zenith.core.errors import InvalidFileKind, InvalidImageKind
from zenith.utils.file_kinds import export_file_name, require_image, require_pdf


def test_require_pdf():
    require_pdf("/tmp/report.pdf")
    with pytest.raises(InvalidFileKind):
        require_pdf("/tmp/report.docx")


@pytest.mark.parametrize("name", ["photo.png", "photo.jpg", "photo.jpeg"])
def test_require_image_accepts_png_and_jpeg(name):
    require_image(name)


@pytest.mark.parametrize("name", ["photo.gif", "photo.webp", "photo"])
def test_require_image_rejects_other_kinds(name):
    with pytest.raises(InvalidImageKind):
        require_image(name)


def test_export_file_name():
    assert export_file_name("/home/me/docs/report.pdf") == "edited-report.pdf"

import os

# ── HEADLESS QT SETUP ───────────────────────────────────────────────────────
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import fitz  # PyMuPDF
import pytest

from zenith.core.edits import EditPersistence


def make_pdf(page_count: int = 3, width: float = 100, height: float = 200) -> bytes:
    """A small PDF whose pages read "Page 1", "Page 2", ..."""
    doc = fitz.open()
    for number in range(1, page_count + 1):
        page = doc.new_page(width=width, height=height)
        page.insert_text((10, 20), f"Page {number}", fontsize=8)
    data = doc.tobytes()
    doc.close()
    return data


def make_image(width: int, height: int, output: str = "png") -> bytes:
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.clear_with(200)
    return pix.tobytes(output)


# ── FIXTURES ────────────────────────────────────────────────────────────────
@pytest.fixture
def pdf_bytes():
    return make_pdf()


@pytest.fixture
def pdf_file(tmp_path, pdf_bytes):
    path = tmp_path / "report.pdf"
    path.write_bytes(pdf_bytes)
    return path


@pytest.fixture
def png_bytes():
    return make_image(400, 200)


@pytest.fixture
def jpeg_bytes():
    return make_image(300, 150, "jpg")


@pytest.fixture
def persistence(tmp_path):
    return EditPersistence(tmp_path / "sessions")

"""
Tests for the background export thread.
"""
from zenith.core.edits import EMPTY_EDIT_MAP, ImageEdit, TextEdit
from zenith.core.export import ExportWorker


def run_worker(qtbot, worker):
    with qtbot.waitSignal(worker.finished, timeout=10000) as blocker:
        worker.start()
    worker.wait()
    return blocker.args


def test_export_writes_file(qtbot, tmp_path, pdf_bytes):
    output = tmp_path / "edited-report.pdf"
    edits = EMPTY_EDIT_MAP.with_added_edit(1, TextEdit(id="t", x=10, y=40, width=80, height=20))
    worker = ExportWorker(pdf_bytes, str(output), edits, (1, 2, 3))

    success, message = run_worker(qtbot, worker)

    assert success
    assert message == "Exported PDF to edited-report.pdf"
    assert output.read_bytes().startswith(b"%PDF")
    assert list(tmp_path.iterdir()) == [output]


def test_failed_export_leaves_no_file(qtbot, tmp_path, pdf_bytes):
    output = tmp_path / "edited-report.pdf"
    edits = EMPTY_EDIT_MAP.with_added_edit(1, ImageEdit(id="i", x=0, y=0, width=10, height=10, src=b"junk"))
    worker = ExportWorker(pdf_bytes, str(output), edits, (1, 2, 3))

    success, message = run_worker(qtbot, worker)

    assert not success
    assert message.startswith("An error occurred while exporting the PDF")
    assert list(tmp_path.iterdir()) == []


def test_missing_directory_is_reported(qtbot, tmp_path, pdf_bytes):
    output = tmp_path / "missing" / "out.pdf"
    worker = ExportWorker(pdf_bytes, str(output), EMPTY_EDIT_MAP, (1, 2, 3))

    success, _ = run_worker(qtbot, worker)

    assert not success
    assert not output.exists()

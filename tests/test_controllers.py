"""
Tests for the document and edit controllers.
"""
import pytest
from PyQt5.QtWidgets import QMessageBox

from tests.conftest import make_pdf
from zenith.controllers import DocumentController, EditController
from zenith.core.document import PDFDocumentReader
from zenith.core.edits import EMPTY_EDIT_MAP, EditSession, TextEdit


@pytest.fixture
def alerts(monkeypatch):
    """Record message boxes instead of showing them."""
    shown = []

    def record(kind):
        def fake(parent, title, text, *args):
            shown.append((kind, title))
            return QMessageBox.Yes
        return fake

    monkeypatch.setattr(QMessageBox, "warning", record("warning"))
    monkeypatch.setattr(QMessageBox, "critical", record("critical"))
    monkeypatch.setattr(QMessageBox, "question", record("question"))
    return shown


@pytest.fixture
def session():
    return EditSession()


@pytest.fixture
def documents(qapp, session, persistence):
    controller = DocumentController(PDFDocumentReader(), session, persistence)
    yield controller
    controller.reader.close_document()


@pytest.fixture
def edits(qapp, session):
    return EditController(session)


class TestDocumentController:

    def test_open_pdf(self, qtbot, documents, session, pdf_file, alerts):
        with qtbot.waitSignal(documents.document_loaded) as blocker:
            assert documents.open_file(str(pdf_file))

        assert blocker.args == [3]
        assert session.page_order == (1, 2, 3)
        assert alerts == []

    def test_rejects_non_pdf(self, tmp_path, documents, alerts):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        assert not documents.open_file(str(path))
        assert alerts == [("warning", "Invalid File")]
        assert not documents.is_loaded()

    def test_reports_unreadable_pdf(self, tmp_path, documents, alerts):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")

        assert not documents.open_file(str(path))
        assert alerts == [("critical", "Error")]
        assert not documents.is_loaded()

    def test_failed_open_keeps_current_document(self, tmp_path, documents, pdf_file, alerts):
        documents.open_file(str(pdf_file))
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")

        documents.open_file(str(path))

        assert documents.file_path == str(pdf_file)
        assert documents.reader.get_page_count() == 3

    def test_offers_to_restore_saved_edits(self, documents, session, persistence,
                                           pdf_file, pdf_bytes, alerts):
        stored = EMPTY_EDIT_MAP.with_added_edit(1, TextEdit(id="x-1", x=5, y=5, width=50, height=20))
        persistence.save(pdf_bytes, "report.pdf", stored, (2, 1, 3))

        documents.open_file(str(pdf_file))

        assert alerts == [("question", "Restore Edits")]
        assert session.edits == stored
        assert session.page_order == (2, 1, 3)

    def test_malformed_saved_session_is_ignored(self, documents, session, persistence,
                                                 pdf_file, pdf_bytes, alerts):
        path = persistence.get_json_path(pdf_bytes)
        path.parent.mkdir(parents=True)
        path.write_text("[]")

        assert documents.open_file(str(pdf_file))
        assert alerts == []
        assert session.edits.is_empty()
        assert documents.is_loaded()

    def test_declined_restore_discards_saved_edits(self, monkeypatch, documents, session,
                                                   persistence, pdf_file, pdf_bytes):
        monkeypatch.setattr(QMessageBox, "question", lambda *args: QMessageBox.No)
        stored = EMPTY_EDIT_MAP.with_added_edit(1, TextEdit(id="x-1", x=5, y=5, width=50, height=20))
        persistence.save(pdf_bytes, "report.pdf", stored, (1, 2, 3))

        documents.open_file(str(pdf_file))

        assert session.edits.is_empty()
        assert not persistence.has_saved_session(pdf_bytes)

    def test_move_page_autosaves(self, qtbot, documents, persistence, pdf_file, pdf_bytes):
        documents.open_file(str(pdf_file))

        with qtbot.waitSignal(documents.page_order_changed):
            assert documents.move_page(2, 0)

        assert persistence.load(pdf_bytes)[1] == (3, 1, 2)
        assert not documents.move_page(None, 1)

    def test_default_export_path(self, documents, pdf_file):
        documents.open_file(str(pdf_file))
        assert documents.default_export_path() == str(pdf_file.parent / "edited-report.pdf")

    def test_export_without_document_warns(self, documents, tmp_path, alerts):
        assert not documents.export(str(tmp_path / "out.pdf"))
        assert alerts == [("warning", "No PDF")]

    def test_export_runs_once_at_a_time(self, qtbot, documents, session, persistence,
                                        pdf_file, pdf_bytes, tmp_path):
        documents.open_file(str(pdf_file))
        session.add_text(1, 10, 40)
        documents.autosave()
        states = []
        documents.export_state_changed.connect(states.append)
        output = tmp_path / "edited-report.pdf"

        with qtbot.waitSignal(documents.export_finished, timeout=10000) as blocker:
            assert documents.export(str(output))
            assert documents.is_exporting()
            assert not documents.export(str(output))

        assert blocker.args[0] is True
        assert states == [True, False]
        assert not documents.is_exporting()
        assert output.exists()
        assert not persistence.has_saved_session(pdf_bytes)

    def test_export_clears_only_the_exported_session(self, qtbot, documents, session, persistence,
                                                     pdf_file, pdf_bytes, tmp_path, alerts):
        documents.open_file(str(pdf_file))
        session.add_text(1, 10, 40)
        documents.autosave()
        other_bytes = make_pdf(page_count=2)
        other_file = tmp_path / "other.pdf"
        other_file.write_bytes(other_bytes)

        with qtbot.waitSignal(documents.export_finished, timeout=10000) as blocker:
            assert documents.export(str(tmp_path / "edited-report.pdf"))
            assert documents.open_file(str(other_file))
            session.add_text(2, 5, 5)
            documents.autosave()

        assert blocker.args[0] is True
        assert not persistence.has_saved_session(pdf_bytes)
        assert persistence.has_saved_session(other_bytes)

    def test_failed_export_alerts(self, qtbot, documents, pdf_file, tmp_path, alerts):
        documents.open_file(str(pdf_file))
        output = tmp_path / "missing" / "out.pdf"

        with qtbot.waitSignal(documents.export_finished, timeout=10000) as blocker:
            documents.export(str(output))

        assert blocker.args[0] is False
        assert ("critical", "Export Failed") in alerts


class TestEditController:

    def test_add_text_emits_changes(self, qtbot, edits, session):
        with qtbot.waitSignals([edits.edits_changed, edits.selection_changed]):
            edit_id = edits.add_text(1, 30, 40)

        assert session.selected_edit_id == edit_id

    def test_insert_image(self, tmp_path, edits, session, png_bytes, alerts):
        path = tmp_path / "photo.png"
        path.write_bytes(png_bytes)

        assert edits.insert_image(2, str(path))
        assert len(session.edits_for_page(2)) == 1
        assert alerts == []

    @pytest.mark.parametrize("name, content", [
        ("photo.gif", b"GIF89a"),
        ("fake.png", b"not really a png"),
    ])
    def test_insert_image_rejects_bad_files(self, tmp_path, edits, session, alerts, name, content):
        path = tmp_path / name
        path.write_bytes(content)

        assert not edits.insert_image(1, str(path))
        assert alerts == [("warning", "Invalid Image")]
        assert not session.has_edits()

    def test_set_font_size_needs_selected_text(self, edits, session):
        assert not edits.set_font_size(1, 20)

        edit_id = edits.add_text(1, 0, 0)
        assert edits.set_font_size(1, 20)
        assert session.edits.find_edit(1, edit_id).font_size == 20

    def test_delete_selected(self, qtbot, edits, session):
        edits.add_text(1, 0, 0)

        with qtbot.waitSignal(edits.selection_changed) as blocker:
            assert edits.delete_selected(1)

        assert blocker.args == [None]
        assert not session.has_edits()
        assert not edits.delete_selected(1)

    def test_undo_redo(self, edits, session):
        edit_id = edits.add_text(1, 0, 0)
        edits.set_text(1, edit_id, "Changed")

        assert edits.undo()
        assert session.edits.find_edit(1, edit_id).text == "New Text"
        assert edits.redo()
        assert session.edits.find_edit(1, edit_id).text == "Changed"
        assert not edits.redo()

    def test_unchanged_update_is_silent(self, qtbot, edits):
        edit_id = edits.add_text(1, 0, 0)

        with qtbot.assertNotEmitted(edits.edits_changed):
            assert not edits.update_edit(1, edit_id, {"x": 0})

    def test_update_with_invalid_size_is_rejected(self, qtbot, edits, session):
        edit_id = edits.add_text(1, 0, 0)
        history = session.history

        with qtbot.assertNotEmitted(edits.edits_changed):
            assert not edits.update_edit(1, edit_id, {"width": 0})
            assert not edits.set_font_size(1, -3)

        assert session.history is history

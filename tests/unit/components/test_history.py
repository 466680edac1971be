"""
Unit tests for reversible edits and the undo/redo log.
"""

import pytest
from folio.config import Config
from folio.document import Document, DocumentState
from folio.dom import make_container, make_text
from folio.history import AddElementEdit, EditHistory, EditRecord, RemoveElementEdit, SetStateEdit


class CountingEdit(EditRecord):
    description = "count"

    def __init__(self, log):
        self.log = log

    def apply(self):
        self.log.append("apply")

    def revert(self):
        self.log.append("revert")


def occurrences(doc, element):
    return sum(1 for node in doc.root.depth_first() if node is element)


class TestEditHistory:
    def setup_method(self):
        self.history = EditHistory()
        self.log = []

    def test_execute_applies_immediately(self):
        self.history.execute(CountingEdit(self.log))
        assert self.log == ["apply"]
        assert self.history.can_undo
        assert not self.history.can_redo

    def test_undo_reverts_and_enables_redo(self):
        edit = CountingEdit(self.log)
        self.history.execute(edit)
        assert self.history.undo() is edit
        assert self.log == ["apply", "revert"]
        assert self.history.can_redo
        assert not self.history.can_undo

    def test_redo_reapplies(self):
        edit = CountingEdit(self.log)
        self.history.execute(edit)
        self.history.undo()
        assert self.history.redo() is edit
        assert self.log == ["apply", "revert", "apply"]

    def test_lifo_order(self):
        first, second = CountingEdit([]), CountingEdit([])
        self.history.execute(first)
        self.history.execute(second)
        assert self.history.undo() is second
        assert self.history.undo() is first

    def test_new_edit_clears_redo(self):
        self.history.execute(CountingEdit(self.log))
        self.history.undo()
        self.history.execute(CountingEdit(self.log))
        assert not self.history.can_redo
        assert self.history.redo() is None

    def test_undo_on_empty_is_noop(self, caplog):
        with caplog.at_level("INFO", logger="folio.history"):
            assert self.history.undo() is None
        assert "Nothing to undo" in caplog.text

    def test_redo_on_empty_is_noop(self, caplog):
        with caplog.at_level("INFO", logger="folio.history"):
            assert self.history.redo() is None
        assert "Nothing to redo" in caplog.text

    def test_clear(self):
        self.history.execute(CountingEdit(self.log))
        self.history.clear()
        assert not self.history.can_undo


class TestAddElementEdit:
    def setup_method(self):
        self.doc = Document(config=Config())
        self.history = EditHistory()

    def test_add_undo_redo_leaves_one_copy(self):
        x = make_text("X")
        self.history.execute(AddElementEdit(self.doc, x))
        self.history.undo()
        assert occurrences(self.doc, x) == 0
        self.history.redo()
        assert occurrences(self.doc, x) == 1
        assert self.doc.root.children == [x]

    def test_undo_removes_structurally(self):
        keep = self.doc.add_element(make_text("keep"))
        x = make_text("X")
        self.history.execute(AddElementEdit(self.doc, x))
        self.history.undo()
        assert self.doc.root.children == [keep]
        assert x.parent is None

    def test_redo_restores_same_position(self):
        a = self.doc.add_element(make_text("a"))
        x = make_text("X")
        self.history.execute(AddElementEdit(self.doc, x))
        b = self.doc.add_element(make_text("b"))
        self.history.undo()
        assert self.doc.root.children == [a, b]
        self.history.redo()
        assert self.doc.root.children == [a, x, b]

    def test_add_of_attached_element_is_rejected(self):
        x = self.doc.add_element(make_text("X"))
        with pytest.raises(ValueError, match="already belongs"):
            self.history.execute(AddElementEdit(self.doc, x))
        assert occurrences(self.doc, x) == 1
        assert not self.history.can_undo

    def test_add_into_nested_container(self):
        chapter = self.doc.add_element(make_container("chapter"))
        x = make_text("X")
        self.history.execute(AddElementEdit(self.doc, x, parent=chapter, index=0))
        assert chapter.children == [x]
        self.history.undo()
        assert chapter.children == []

    def test_notifies_observers(self):
        calls = []

        class Observer:
            def on_document_changed(self, document):
                calls.append(len(document.root.children))

        self.doc.attach(Observer())
        self.history.execute(AddElementEdit(self.doc, make_text("X")))
        self.history.undo()
        self.history.redo()
        assert calls == [1, 0, 1]


class TestRemoveElementEdit:
    def setup_method(self):
        self.doc = Document(config=Config())
        self.history = EditHistory()

    def test_remove_and_restore_position(self):
        a = self.doc.add_element(make_text("a"))
        b = self.doc.add_element(make_text("b"))
        c = self.doc.add_element(make_text("c"))
        self.history.execute(RemoveElementEdit(self.doc, b))
        assert self.doc.root.children == [a, c]
        self.history.undo()
        assert self.doc.root.children == [a, b, c]
        self.history.redo()
        assert self.doc.root.children == [a, c]

    def test_remove_detached_raises(self):
        with pytest.raises(ValueError, match="not attached"):
            self.history.execute(RemoveElementEdit(self.doc, make_text("loose")))
        assert not self.history.can_undo


class TestSetStateEdit:
    def test_undo_restores_previous_state(self):
        doc = Document(config=Config())
        history = EditHistory()
        history.execute(SetStateEdit(doc, DocumentState.REVIEW))
        history.execute(SetStateEdit(doc, DocumentState.PUBLISHED))
        history.undo()
        assert doc.state is DocumentState.REVIEW
        history.undo()
        assert doc.state is DocumentState.DRAFT
        history.redo()
        assert doc.state is DocumentState.REVIEW

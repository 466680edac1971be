"""
Unit tests for export strategies, validation and the persistence facade.
"""

from folio.config import Config
from folio.document import Document
from folio.dom import Container, bold, make_container, make_text
from folio.export import DocumentExporter, ExportResult, MarkdownExportStrategy, PdfExportStrategy
from folio.persistence import SAVED_MARKER, FileManager
from folio.validation import AdvancedValidator, BasicValidator, DocumentValidator


def small_document():
    doc = Document(config=Config())
    doc.add_element(make_text("hello world"))
    chapter = make_container("c")
    chapter.add(make_text("again"))
    doc.add_element(chapter)
    return doc


class TestDocumentExporter:
    def test_no_strategy_reports_benign_failure(self, caplog):
        with caplog.at_level("WARNING", logger="folio.export"):
            result = DocumentExporter().export(small_document())
        assert result == ExportResult(ok=False, message="No export strategy set")
        assert "No export strategy set" in caplog.text

    def test_pdf_strategy(self):
        result = DocumentExporter(PdfExportStrategy()).export(small_document())
        assert result.ok
        assert result.format == "pdf"
        assert result.message == "PDF export completed (3 elements, 3 words)"

    def test_switch_strategy(self):
        exporter = DocumentExporter(PdfExportStrategy())
        exporter.set_strategy(MarkdownExportStrategy())
        result = exporter.export(small_document())
        assert result.format == "markdown"
        assert result.message.startswith("Markdown export completed")

    def test_unset_strategy(self):
        exporter = DocumentExporter(PdfExportStrategy())
        exporter.set_strategy(None)
        assert not exporter.export(small_document()).ok


class TestValidation:
    def test_basic_validator_passes(self):
        assert BasicValidator().validate(small_document())

    def test_stops_at_first_failure(self):
        calls = []

        class Strict(DocumentValidator):
            def check_spelling(self, document):
                calls.append("spelling")
                return False

            def check_grammar(self, document):
                calls.append("grammar")
                return True

        assert not Strict().validate(small_document())
        assert calls == ["spelling"]

    def test_structure_check_detects_foreign_parent(self):
        doc = small_document()
        doc.root.children[0].parent = Container(name="elsewhere")
        assert not BasicValidator().validate(doc)


class TestAdvancedValidator:
    def test_without_dictionary_accepts_any_words(self):
        assert AdvancedValidator().validate(small_document())

    def test_known_words_pass(self):
        validator = AdvancedValidator({"Hello", "world", "again"})
        assert validator.validate(small_document())

    def test_unknown_word_fails_spelling(self, caplog):
        doc = small_document()
        doc.add_element(bold(make_text("Wrold.")))
        validator = AdvancedValidator({"hello", "world", "again"})
        with caplog.at_level("WARNING", logger="folio.validation"):
            assert not validator.check_spelling(doc)
            assert not validator.validate(doc)
        assert "wrold" in caplog.text
        assert "Validation failed at check_spelling" in caplog.text

    def test_repeated_word_fails_grammar(self):
        doc = small_document()
        doc.add_element(make_text("the the end"))
        assert not AdvancedValidator().check_grammar(doc)
        assert not AdvancedValidator().validate(doc)

    def test_repeat_across_blocks_counts(self):
        doc = Document(config=Config())
        doc.add_element(make_text("see"))
        doc.add_element(make_text("See again"))
        assert not AdvancedValidator().check_grammar(doc)

    def test_checks_run_in_order(self, caplog):
        with caplog.at_level("INFO", logger="folio.validation"):
            assert AdvancedValidator().validate(small_document())
        text = caplog.text
        assert text.index("Advanced spell check") < text.index("Advanced grammar check")
        assert "Validation passed" in text

    def test_grammar_skipped_after_spelling_failure(self, caplog):
        validator = AdvancedValidator({"hello"})
        with caplog.at_level("INFO", logger="folio.validation"):
            assert not validator.validate(small_document())
        assert "Advanced spell check" in caplog.text
        assert "Advanced grammar check" not in caplog.text


class TestFileManager:
    def test_save_writes_marker(self, tmp_path):
        target = tmp_path / "doc.txt"
        assert FileManager().save(small_document(), target)
        assert target.read_text(encoding="utf-8") == SAVED_MARKER

    def test_save_to_missing_directory_fails(self, tmp_path):
        assert not FileManager().save(small_document(), tmp_path / "missing" / "doc.txt")

    def test_load_returns_populated_document(self, tmp_path):
        doc = FileManager(Config()).load(tmp_path / "doc.txt")
        assert isinstance(doc, Document)
        assert [child.text for child in doc.root.children] == ["Loaded content"]

"""
Unit tests for the term index
Run with: pytest tests/test_term_index.py -v
"""

import json
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from searchine.index import TermIndex


@pytest.fixture
def term_index():
    index = TermIndex()
    index.add_document(0, ["python", "search", "python"])
    index.add_document(1, ["search", "engine"])
    index.add_document(2, ["python", "engine", "engine", "engine"])
    return index


class TestTermIndex:
    """Test TermIndex class."""

    def test_add_document(self, term_index):
        """Test postings carry per-document frequencies."""
        assert term_index.vocabulary_size() == 3
        assert term_index.get_term_frequency("python", 0) == 2
        assert term_index.get_term_frequency("engine", 2) == 3
        assert term_index.get_term_frequency("engine", 0) == 0
        assert term_index.get_term_frequency("missing", 0) == 0
        assert len(term_index.get_postings("search")) == 2
        assert term_index.document_ids() == {0, 1, 2}

    def test_add_document_twice_keeps_postings(self, term_index):
        """Test re-adding a document leaves existing frequencies alone."""
        term_index.add_document(0, ["python"] * 10)
        assert term_index.get_term_frequency("python", 0) == 2

    def test_empty_document_is_recorded(self):
        """Test a document without tokens still counts as indexed."""
        index = TermIndex()
        assert index.add_document(4, []) == 0
        assert index.document_ids() == {4}
        assert index.vocabulary_size() == 0

    def test_remove_document(self, term_index):
        """Test removal drops postings and emptied terms."""
        removed = term_index.remove_document(1)

        assert removed == 2
        assert term_index.get_postings("search").document_ids() == [0]
        assert 1 not in term_index.document_ids()

        term_index.remove_document(0)
        assert not term_index.contains_term("search")
        assert term_index.contains_term("python")

    def test_match_all(self, term_index):
        """Test boolean AND matching."""
        assert term_index.match_all(["python"]) == [0, 2]
        assert term_index.match_all(["python", "engine"]) == [2]
        assert term_index.match_all(["search", "search"]) == [0, 1]
        assert term_index.match_all(["python", "missing"]) == []
        assert term_index.match_all([]) == []

    def test_statistics(self, term_index):
        """Test index statistics."""
        stats = term_index.get_statistics()
        assert stats['num_documents'] == 3
        assert stats['vocabulary_size'] == 3
        assert stats['total_postings'] == 6

    def test_persistence(self, term_index, tmp_path):
        """Test write then load restores postings."""
        out = tmp_path / "index.json"
        term_index.write_to_file(out)

        restored = TermIndex.from_file(out)

        assert restored.document_ids() == {0, 1, 2}
        assert restored.get_term_frequency("engine", 2) == 3
        assert restored.match_all(["python", "search"]) == [0]

    def test_unsupported_version(self, tmp_path):
        """Test an unknown format version is rejected."""
        out = tmp_path / "index.json"
        out.write_text(json.dumps({"version": 99, "documents": [], "dictionary": {}}))
        with pytest.raises(ValueError):
            TermIndex.from_file(out)

    def test_malformed_document(self, tmp_path):
        """Test a document missing keys is rejected."""
        out = tmp_path / "index.json"
        out.write_text(json.dumps({"version": 1, "dictionary": {}}))
        with pytest.raises(ValueError):
            TermIndex.from_file(out)

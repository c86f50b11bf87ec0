"""
Unit tests for postings and postings lists
Run with: pytest tests/test_postings.py -v
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from searchine.postings import Posting, PostingsList, FrequencyPosting, FrequencyPostingsList


class TestFrequencyPosting:
    """Test FrequencyPosting class."""

    def test_create_posting(self):
        """Test creating a frequency posting."""
        posting = FrequencyPosting(1, 5)
        assert posting.document_id == 1
        assert posting.frequency == 5
        assert isinstance(posting, Posting)

    def test_default_frequency(self):
        """Test a posting defaults to one occurrence."""
        assert FrequencyPosting(3).frequency == 1

    def test_negative_frequency(self):
        """Test negative frequencies are rejected."""
        with pytest.raises(ValueError):
            FrequencyPosting(1, -1)

    def test_add_occurrence(self):
        """Test counting an occurrence in place."""
        posting = FrequencyPosting(1, 5)
        posting.add_occurrence()
        assert posting.frequency == 6

    def test_identity_by_document_id(self):
        """Test equality and hashing ignore the frequency."""
        assert FrequencyPosting(5, 1) == FrequencyPosting(5, 99)
        assert hash(FrequencyPosting(5, 1)) == hash(FrequencyPosting(5, 99))
        assert FrequencyPosting(5, 1) != FrequencyPosting(6, 1)
        assert len({FrequencyPosting(5, 1), FrequencyPosting(5, 99)}) == 1

    def test_ordering_with_foreign_type(self):
        """Test ordering against another type is unsupported, not an AttributeError."""
        assert FrequencyPosting(1) < FrequencyPosting(2)
        assert FrequencyPosting(1).__lt__(1) is NotImplemented
        with pytest.raises(TypeError):
            FrequencyPosting(1) < 2

    def test_posting_serialization(self):
        """Test serialization and deserialization."""
        data = FrequencyPosting(4, 2).to_dict()
        assert data == {'document_id': 4, 'frequency': 2}

        restored = FrequencyPosting.from_dict(data)
        assert restored.document_id == 4
        assert restored.frequency == 2


class TestFrequencyPostingsList:
    """Test FrequencyPostingsList class."""

    def test_empty_list(self):
        """Test creating an empty postings list."""
        pl = FrequencyPostingsList()
        assert len(pl) == 0
        assert pl.get(1) is None
        assert isinstance(pl, PostingsList)

    def test_add_get_remove(self):
        """Test the basic add, get and remove cycle."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(1, 5))
        pl.add(FrequencyPosting(2, 3))
        pl.add(FrequencyPosting(3, 7))

        assert len(pl) == 3

        posting = pl.get(2)
        assert posting.document_id == 2
        assert posting.frequency == 3

        pl.remove(2)
        assert len(pl) == 2
        assert pl.get(2) is None

    def test_add_existing_document_keeps_frequency(self):
        """Test a second posting for a document does not update the first."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(5, 1))
        pl.add(FrequencyPosting(5, 99))

        assert len(pl) == 1
        assert pl.get(5).frequency == 1

    def test_upsert_replaces(self):
        """Test upsert overwrites the posting for a document."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(5, 1))

        previous = pl.upsert(FrequencyPosting(5, 99))

        assert previous.frequency == 1
        assert len(pl) == 1
        assert pl.get(5).frequency == 99
        assert pl.upsert(FrequencyPosting(6, 2)) is None
        assert len(pl) == 2

    def test_add_occurrence_through_get(self):
        """Test incrementing a stored posting via get()."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(1, 1))
        pl.get(1).add_occurrence()
        assert pl.get(1).frequency == 2

    def test_remove_returns_posting(self):
        """Test remove returns the removed posting or None."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(1, 4))

        assert pl.remove(1).frequency == 4
        assert pl.remove(1) is None
        assert len(pl) == 0

    def test_remove_unknown_keeps_length(self):
        """Test removing an absent document changes nothing."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(1))
        pl.remove(42)
        assert len(pl) == 1

    def test_contains(self):
        """Test membership by document id."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(1))
        assert pl.contains(1)
        assert not pl.contains(2)

    def test_iteration_is_sorted(self):
        """Test iterating yields postings by ascending document id."""
        pl = FrequencyPostingsList()
        for doc_id in (7, 2, 5):
            pl.add(FrequencyPosting(doc_id, doc_id * 10))

        assert [p.document_id for p in pl] == [2, 5, 7]
        assert pl.document_ids() == [2, 5, 7]
        assert pl.total_frequency() == 140

    def test_postings_list_serialization(self):
        """Test serialization and deserialization."""
        pl = FrequencyPostingsList()
        pl.add(FrequencyPosting(2, 3))
        pl.add(FrequencyPosting(1, 5))

        data = pl.to_dict()
        assert data == {'postings': [
            {'document_id': 1, 'frequency': 5},
            {'document_id': 2, 'frequency': 3},
        ]}

        restored = FrequencyPostingsList.from_dict(data)
        assert len(restored) == 2
        assert restored.get(1).frequency == 5
        assert restored.get(2).frequency == 3


class TestPostingsListContract:
    """Test the abstract contract can host other posting kinds."""

    class BooleanPosting(Posting):
        def __init__(self, document_id):
            self._document_id = document_id

        @property
        def document_id(self):
            return self._document_id

        @property
        def frequency(self):
            return 1

    class BooleanPostingsList(PostingsList):
        def __init__(self):
            self.postings = {}

        def add(self, posting):
            self.postings.setdefault(posting.document_id, posting)

        def remove(self, document_id):
            return self.postings.pop(document_id, None)

        def get(self, document_id):
            return self.postings.get(document_id)

        def __len__(self):
            return len(self.postings)

        def document_ids(self):
            return sorted(self.postings)

    def test_abstract_classes_cannot_be_instantiated(self):
        """Test the base classes are abstract."""
        with pytest.raises(TypeError):
            Posting()
        with pytest.raises(TypeError):
            PostingsList()

    @pytest.mark.parametrize("factory", ["frequency", "boolean"])
    def test_contract(self, factory):
        """Test add/get/remove/len behave the same for each implementation."""
        if factory == "frequency":
            pl, make = FrequencyPostingsList(), FrequencyPosting
        else:
            pl, make = self.BooleanPostingsList(), self.BooleanPosting

        pl.add(make(2))
        pl.add(make(1))
        assert pl.get(1) is not None
        assert pl.contains(2)
        assert len(pl) == 2
        assert pl.document_ids() == [1, 2]

        pl.remove(1)
        assert pl.get(1) is None
        assert len(pl) == 1
        assert pl.document_ids() == [2]

"""
Frequency postings: one posting per document, carrying the number of
occurrences of the term in that document.
"""

from typing import Dict, Iterator, List, Optional

from .base import Posting, PostingsList


class FrequencyPosting(Posting):
    """
    Posting carrying the frequency of a term in a document.

    Equality and hashing use the document id only: two postings for the same
    document are the same element whatever their frequencies.
    """

    def __init__(self, document_id: int, frequency: int = 1):
        """
        Create a frequency posting.

        Args:
            document_id: Document identifier
            frequency: Number of occurrences of the term in the document
        """
        if frequency < 0:
            raise ValueError(f"frequency must be non-negative, got {frequency}")
        self._document_id = document_id
        self._frequency = frequency

    @property
    def document_id(self) -> int:
        return self._document_id

    @property
    def frequency(self) -> int:
        return self._frequency

    def add_occurrence(self) -> None:
        """Count one more occurrence of the term in the document."""
        self._frequency += 1

    def __eq__(self, other):
        """Equality based on document_id."""
        if not isinstance(other, FrequencyPosting):
            return NotImplemented
        return self._document_id == other._document_id

    def __hash__(self):
        return hash(self._document_id)

    def __lt__(self, other):
        """Compare by document_id for sorting."""
        if not isinstance(other, FrequencyPosting):
            return NotImplemented
        return self._document_id < other._document_id

    def __repr__(self):
        return f"FrequencyPosting(document_id={self._document_id}, frequency={self._frequency})"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'document_id': self._document_id,
            'frequency': self._frequency
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FrequencyPosting':
        """Create from dictionary."""
        return cls(
            document_id=data['document_id'],
            frequency=data['frequency']
        )


class FrequencyPostingsList(PostingsList[FrequencyPosting]):
    """
    Postings list for a single term, stored as a set of postings keyed by
    document id. No two postings for the same document coexist.
    """

    def __init__(self):
        """Initialize empty postings list."""
        self._postings: Dict[int, FrequencyPosting] = {}

    def add(self, posting: FrequencyPosting) -> None:
        """
        Add a posting unless the document is already in the list.

        A posting for a document that is already present is ignored: the
        stored frequency is NOT updated. Use upsert() to replace it, or
        get(doc_id).add_occurrence() to count an occurrence.
        """
        if posting.document_id not in self._postings:
            self._postings[posting.document_id] = posting

    def upsert(self, posting: FrequencyPosting) -> Optional[FrequencyPosting]:
        """
        Insert a posting, replacing any posting for the same document.

        Returns:
            The replaced posting, or None if the document was not in the list
        """
        previous = self._postings.get(posting.document_id)
        self._postings[posting.document_id] = posting
        return previous

    def remove(self, document_id: int) -> Optional[FrequencyPosting]:
        return self._postings.pop(document_id, None)

    def get(self, document_id: int) -> Optional[FrequencyPosting]:
        return self._postings.get(document_id)

    def document_ids(self) -> List[int]:
        """Sorted ids of the documents containing this term."""
        return sorted(self._postings)

    def total_frequency(self) -> int:
        """Get total occurrences of the term across all documents."""
        return sum(p.frequency for p in self._postings.values())

    def __len__(self) -> int:
        """Number of documents containing this term."""
        return len(self._postings)

    def __iter__(self) -> Iterator[FrequencyPosting]:
        """Iterate over postings in ascending document id order."""
        return iter(sorted(self._postings.values()))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'postings': [p.to_dict() for p in self]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FrequencyPostingsList':
        """Create from dictionary."""
        pl = cls()
        for posting_data in data['postings']:
            pl.add(FrequencyPosting.from_dict(posting_data))
        return pl

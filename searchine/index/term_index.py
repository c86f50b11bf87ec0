"""
Term index: maps each term to its frequency postings list.
"""

from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union
import logging

from searchine.postings import FrequencyPosting, FrequencyPostingsList
from searchine.utils.jsonio import read_json, write_json

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class TermIndex:
    """
    Inverted index over registry document ids.
    One FrequencyPostingsList per term.
    """

    def __init__(self):
        """Initialize empty term index."""
        # Term -> FrequencyPostingsList mapping
        self.dictionary: Dict[str, FrequencyPostingsList] = {}

        # Ids of indexed documents, including those without any terms
        self.documents: Set[int] = set()

    def add_document(self, document_id: int, tokens: Iterable[str]) -> int:
        """
        Add the postings of a document.

        Terms for which the document already has a posting keep their
        existing frequency; remove_document() first to re-index a document.

        Args:
            document_id: Registry document id
            tokens: Tokens of the document

        Returns:
            Number of distinct terms in the document
        """
        counts = Counter(tokens)
        self.documents.add(document_id)
        for term, frequency in counts.items():
            postings = self.dictionary.get(term)
            if postings is None:
                postings = self.dictionary[term] = FrequencyPostingsList()
            postings.add(FrequencyPosting(document_id, frequency))
        return len(counts)

    def remove_document(self, document_id: int) -> int:
        """
        Remove a document from every postings list.
        Terms left without postings are dropped.

        Returns:
            Number of postings removed
        """
        self.documents.discard(document_id)
        removed = 0
        for term in list(self.dictionary):
            postings = self.dictionary[term]
            if postings.remove(document_id) is not None:
                removed += 1
                if len(postings) == 0:
                    del self.dictionary[term]
        return removed

    def get_postings(self, term: str) -> Optional[FrequencyPostingsList]:
        """Get postings list for a term, or None if the term is unknown."""
        return self.dictionary.get(term)

    def get_term_frequency(self, term: str, document_id: int) -> int:
        """Get the frequency of a term in a document (0 if absent)."""
        postings = self.get_postings(term)
        posting = postings.get(document_id) if postings else None
        return posting.frequency if posting else 0

    def contains_term(self, term: str) -> bool:
        """Check if term exists in vocabulary."""
        return term in self.dictionary

    def vocabulary_size(self) -> int:
        """Get size of vocabulary (number of unique terms)."""
        return len(self.dictionary)

    def document_ids(self) -> Set[int]:
        """Get ids of all indexed documents."""
        return set(self.documents)

    def match_all(self, terms: Iterable[str]) -> List[int]:
        """
        Find the documents containing every term.

        Args:
            terms: Query terms

        Returns:
            Sorted document ids; empty if any term is unknown or no terms given
        """
        unique_terms = list(dict.fromkeys(terms))
        if not unique_terms:
            return []

        postings_lists = []
        for term in unique_terms:
            postings = self.get_postings(term)
            if postings is None:
                return []
            postings_lists.append(postings)

        # Intersect starting from the shortest list
        postings_lists.sort(key=len)
        matches = set(postings_lists[0].document_ids())
        for postings in postings_lists[1:]:
            matches = {doc_id for doc_id in matches if postings.contains(doc_id)}
            if not matches:
                break
        return sorted(matches)

    def get_statistics(self) -> Dict:
        """Get index statistics."""
        return {
            'num_documents': len(self.documents),
            'vocabulary_size': len(self.dictionary),
            'total_postings': sum(len(p) for p in self.dictionary.values())
        }

    def to_dict(self) -> dict:
        """Convert index to dictionary for serialization."""
        return {
            'version': FORMAT_VERSION,
            'documents': sorted(self.documents),
            'dictionary': {term: postings.to_dict() for term, postings in self.dictionary.items()}
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TermIndex':
        """Create index from dictionary."""
        if not isinstance(data, dict):
            raise ValueError(f"Index document must be a JSON object, got {type(data).__name__}")
        version = data.get('version')
        if version != FORMAT_VERSION:
            raise ValueError(f"Unsupported index format version: {version!r}")

        index = cls()
        try:
            index.documents = set(data['documents'])
            for term, postings_data in data['dictionary'].items():
                index.dictionary[term] = FrequencyPostingsList.from_dict(postings_data)
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed index document: {e!r}") from e
        return index

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'TermIndex':
        """Load the term index from disk."""
        index = cls.from_dict(read_json(path))
        logger.debug(f"Loaded term index with {index.vocabulary_size()} terms from {path}")
        return index

    def write_to_file(self, path: Union[str, Path]) -> None:
        """Write the term index to disk."""
        write_json(path, self.to_dict())
        logger.debug(f"Wrote term index with {self.vocabulary_size()} terms to {path}")

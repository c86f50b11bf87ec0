from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar


class Posting(ABC):
    """
    A posting identifies a document and reports a frequency value for it.
    """

    @property
    @abstractmethod
    def document_id(self) -> int:
        """Document the posting is about."""
        pass

    @property
    @abstractmethod
    def frequency(self) -> int:
        """Frequency value of the term in the document."""
        pass


P = TypeVar('P', bound=Posting)


class PostingsList(ABC, Generic[P]):
    """
    Base postings list class with abstract methods to inherit for specific
    storage strategies (frequency, positional, boolean, ...).

    Contract:
        - after add(p), get(p.document_id) returns a posting for that document,
          not necessarily p itself if one was already present
        - after remove(doc_id), get(doc_id) returns None and len() dropped by
          at most one
    """

    @abstractmethod
    def add(self, posting: P) -> None:
        """
        Adds a posting to the list.

        Args:
            posting: The posting to add
        """
        pass

    @abstractmethod
    def remove(self, document_id: int) -> Optional[P]:
        """
        Removes the posting for a document.

        Args:
            document_id: Document whose posting is removed

        Returns:
            The removed posting, or None if the document was not in the list
        """
        pass

    @abstractmethod
    def get(self, document_id: int) -> Optional[P]:
        """
        Looks up the posting for a document.

        Args:
            document_id: Document to look up

        Returns:
            The posting if present, None otherwise
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Number of documents in the list."""
        pass

    @abstractmethod
    def document_ids(self) -> List[int]:
        """
        Lists the documents in the list.

        Returns:
            Document ids in ascending order
        """
        pass

    def contains(self, document_id: int) -> bool:
        return self.get(document_id) is not None

"""
Document registry: the authoritative record of which documents are known,
under which document id, and as of which modification time.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union
import logging

from searchine.utils.jsonio import read_json, write_json

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Largest id representable as an unsigned 32-bit integer
MAX_DOCUMENT_ID = 2 ** 32 - 1

# Version of the persisted registry document.
# Documents without a version field are the legacy layout (no next_id).
FORMAT_VERSION = 1


def read_modified(path: PathLike) -> datetime:
    """
    Read the last-modified time of a file as an aware UTC datetime.

    Raises:
        FileNotFoundError, PermissionError, OSError: if the file is inaccessible
    """
    return datetime.fromtimestamp(Path(path).stat().st_mtime, tz=timezone.utc)


@dataclass(frozen=True)
class Entry:
    """
    Registry entry for one document.

    Attributes:
        document_id: Registry-assigned identifier (unsigned 32-bit)
        modified: Modification time of the document when it was registered
    """
    document_id: int
    modified: datetime

    def __post_init__(self):
        if isinstance(self.document_id, bool) or not isinstance(self.document_id, int):
            raise TypeError(f"document_id must be an int, got {type(self.document_id).__name__}")
        if not 0 <= self.document_id <= MAX_DOCUMENT_ID:
            raise ValueError(f"document_id out of range: {self.document_id}")

    def __eq__(self, other):
        """Equality based on document_id."""
        if not isinstance(other, Entry):
            return NotImplemented
        return self.document_id == other.document_id

    def __hash__(self):
        return hash(self.document_id)

    def __lt__(self, other):
        """Compare by document_id for sorting."""
        if not isinstance(other, Entry):
            return NotImplemented
        return self.document_id < other.document_id

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'document_id': self.document_id,
            'modified': self.modified.isoformat()
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Entry':
        """Create from dictionary."""
        return cls(
            document_id=data['document_id'],
            modified=datetime.fromisoformat(data['modified'])
        )


@dataclass(frozen=True)
class CorpusChanges:
    """
    Difference between the registry and the documents currently on disk.

    Attributes:
        added: Paths on disk the registry does not know
        removed: Known paths that are no longer on disk
        modified: Known paths whose modification time changed
    """
    added: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)
    modified: List[Path] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def __len__(self) -> int:
        return len(self.added) + len(self.removed) + len(self.modified)


class Registry:
    """
    Maps the document paths of a root directory to registry entries.

    Document ids are handed out by a counter that starts at 0 and only grows.
    It is persisted together with the mapping, so an id freed by remove()
    is never handed out again.
    """

    def __init__(self, root_dir: Optional[PathLike] = None):
        """
        Initialize an empty registry.

        Args:
            root_dir: Root directory of the corpus (defaults to the current directory)
        """
        self.root_dir = Path(root_dir) if root_dir is not None else Path()
        self.index: Dict[Path, Entry] = {}
        self.next_id = 0

    def __repr__(self):
        return f"Registry(root_dir={str(self.root_dir)!r}, documents={len(self.index)}, next_id={self.next_id})"

    def insert(self, document_path: PathLike) -> None:
        """
        Register a document and assign it the next document id.

        Inserting a known path is a no-op: its entry, including the stored
        modification time, is left as it is. Use remove() then insert() to
        refresh a document.

        Args:
            document_path: Path of the document

        Raises:
            OSError: if the modification time of a new document cannot be read
            OverflowError: if the document id space is exhausted
        """
        path = Path(document_path)
        if path in self.index:
            return

        modified = read_modified(path)
        if self.next_id > MAX_DOCUMENT_ID:
            raise OverflowError("No document ids left in this registry")

        self.index[path] = Entry(self.next_id, modified)
        self.next_id += 1

    @classmethod
    def from_paths(cls, paths: Iterable[PathLike], root_dir: Optional[PathLike] = None) -> 'Registry':
        """
        Build a registry by inserting paths in iteration order.

        The iteration order decides which document gets which id.
        """
        registry = cls(root_dir)
        for path in paths:
            registry.insert(path)
        return registry

    @classmethod
    def from_file(cls, path: PathLike) -> 'Registry':
        """
        Load a registry from a JSON file.

        Raises:
            FileNotFoundError, PermissionError: if the file cannot be read
            ValueError: if the content is not a valid registry document
        """
        registry = cls.from_dict(read_json(path))
        logger.debug(f"Loaded registry with {len(registry)} documents from {path}")
        return registry

    def write_to_file(self, path: PathLike) -> None:
        """Write the whole registry to a JSON file."""
        write_json(path, self.to_dict())
        logger.debug(f"Wrote registry with {len(self)} documents to {path}")

    def contains_path(self, document_path: PathLike) -> bool:
        """Check if a document path is registered."""
        return Path(document_path) in self.index

    def get_entry(self, document_path: PathLike) -> Optional[Entry]:
        return self.index.get(Path(document_path))

    def get_document_id(self, document_path: PathLike) -> Optional[int]:
        """
        Get the document id for a path.

        Args:
            document_path: Path of the document

        Returns:
            Document id if the path is registered, None otherwise
        """
        entry = self.get_entry(document_path)
        return entry.document_id if entry else None

    def get_last_modified(self, document_path: PathLike) -> Optional[datetime]:
        """
        Get the modification time recorded for a path.

        Args:
            document_path: Path of the document

        Returns:
            Recorded modification time if the path is registered, None otherwise
        """
        entry = self.get_entry(document_path)
        return entry.modified if entry else None

    def get_modified(self, document_path: PathLike) -> Optional[datetime]:
        """Same as get_last_modified()."""
        return self.get_last_modified(document_path)

    def remove(self, document_path: PathLike) -> Optional[Entry]:
        """
        Remove a document from the registry.

        Remaining ids are not renumbered and the freed id is not reused.

        Returns:
            The removed entry, or None if the path was not registered
        """
        return self.index.pop(Path(document_path), None)

    def diff(self, current_paths: Iterable[PathLike]) -> CorpusChanges:
        """
        Compare the registry with the documents found by a directory walk.

        Args:
            current_paths: Paths of the documents currently on disk

        Returns:
            CorpusChanges with sorted added, removed and modified paths
        """
        current = {Path(p) for p in current_paths}

        added = sorted(p for p in current if p not in self.index)
        removed = sorted(p for p in self.index if p not in current)
        modified = sorted(
            p for p in current
            if p in self.index and read_modified(p) != self.index[p].modified
        )
        return CorpusChanges(added=added, removed=removed, modified=modified)

    def paths(self) -> List[Path]:
        return list(self.index.keys())

    def document_ids(self) -> List[int]:
        return [entry.document_id for entry in self.index.values()]

    def items(self) -> Iterator[Tuple[Path, Entry]]:
        return iter(self.index.items())

    def __iter__(self) -> Iterator[Tuple[Path, Entry]]:
        """Iterate over (path, entry) pairs in no particular order."""
        return self.items()

    def __len__(self) -> int:
        return len(self.index)

    def __contains__(self, document_path) -> bool:
        return self.contains_path(document_path)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'version': FORMAT_VERSION,
            'root_dir': str(self.root_dir),
            'next_id': self.next_id,
            'index': {str(path): entry.to_dict() for path, entry in self.index.items()}
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Registry':
        """
        Create from dictionary.

        Raises:
            ValueError: on an unsupported version or a malformed document
        """
        if not isinstance(data, dict):
            raise ValueError(f"Registry document must be a JSON object, got {type(data).__name__}")

        version = data.get('version')
        if version is not None and (not isinstance(version, int) or version > FORMAT_VERSION):
            raise ValueError(f"Unsupported registry format version: {version!r}")

        try:
            registry = cls(root_dir=data['root_dir'])
            for path, entry_data in data['index'].items():
                registry.index[Path(path)] = Entry.from_dict(entry_data)
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed registry document: {e!r}") from e

        highest = max(registry.document_ids(), default=-1)
        if version is None:
            # Legacy layout: ids were the mapping size at insertion time
            logger.warning("Registry document has no version field; reading legacy layout")
            registry.next_id = highest + 1
        else:
            next_id = data.get('next_id')
            if isinstance(next_id, bool) or not isinstance(next_id, int) or next_id <= highest:
                raise ValueError(f"Invalid next_id {next_id!r} for highest document id {highest}")
            registry.next_id = next_id

        return registry

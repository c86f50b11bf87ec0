"""
Read-only document id -> path view of a registry.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .registry import Registry

logger = logging.getLogger(__name__)


class ReverseRegistry:
    """
    Maps document ids back to document paths.

    Built once from a registry snapshot. It has no mutation API; when the
    registry changes, build a new one.
    """

    def __init__(self, inner: Dict[int, Path]):
        self._inner = inner

    @classmethod
    def from_registry(cls, registry: Registry) -> 'ReverseRegistry':
        """
        Invert a registry.

        A well-formed registry never repeats a document id. If one does,
        the path seen last wins and a warning is logged.
        """
        inner: Dict[int, Path] = {}
        for path, entry in registry:
            previous = inner.get(entry.document_id)
            if previous is not None:
                logger.warning(
                    f"Document id {entry.document_id} is shared by {previous} and {path}; keeping {path}"
                )
            inner[entry.document_id] = path
        return cls(inner)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'ReverseRegistry':
        """
        Load a persisted registry and invert it.

        Raises:
            FileNotFoundError, PermissionError, ValueError: as Registry.from_file
        """
        return cls.from_registry(Registry.from_file(path))

    def get_path(self, document_id: int) -> Optional[Path]:
        """Get the path of a document id, or None if the id is unknown."""
        return self._inner.get(document_id)

    def __len__(self) -> int:
        return len(self._inner)

    def __contains__(self, document_id) -> bool:
        return document_id in self._inner

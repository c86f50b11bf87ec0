"""
Corpus enumeration.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith('.') for part in path.relative_to(root).parts)


def walk_corpus(
    root_dir: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
    include_hidden: bool = False,
    exclude: Optional[Iterable[Union[str, Path]]] = None
) -> List[Path]:
    """
    List the documents below a root directory.

    The result is sorted, so the walk is deterministic; the registry assigns
    document ids in this order.

    Args:
        root_dir: Directory to walk recursively
        extensions: Allowed file suffixes (e.g. ['.txt', '.md']); None allows all
        include_hidden: Whether to descend into dot-files and dot-directories
        exclude: Directories whose contents are never part of the corpus

    Returns:
        Sorted list of file paths
    """
    root = Path(root_dir)
    if not root.is_dir():
        raise NotADirectoryError(f"Corpus root is not a directory: {root}")

    allowed = {ext.lower() for ext in extensions} if extensions else None
    excluded = [Path(p).resolve() for p in (exclude or [])]

    documents = []
    for path in root.rglob('*'):
        if not path.is_file():
            continue
        if not include_hidden and _is_hidden(path, root):
            continue
        if allowed is not None and path.suffix.lower() not in allowed:
            continue
        resolved = path.resolve()
        if any(ex == resolved or ex in resolved.parents for ex in excluded):
            continue
        documents.append(path)

    documents.sort()
    logger.debug(f"Found {len(documents)} documents under {root}")
    return documents

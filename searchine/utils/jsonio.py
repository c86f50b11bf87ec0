"""
JSON file helpers shared by the registry and the term index.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


def read_json(path: Union[str, Path]) -> Any:
    """
    Read a whole JSON document from disk.

    Args:
        path: File to read

    Returns:
        The decoded document

    Raises:
        FileNotFoundError, PermissionError: if the file cannot be opened
        json.JSONDecodeError: if the content is not valid JSON
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json(path: Union[str, Path], data: Any, indent: Optional[int] = None) -> None:
    """
    Write a whole JSON document to disk.

    The document is written to a temporary sibling first and then moved over
    the target, so an interrupted write never leaves a truncated file behind.

    Args:
        path: Destination file
        data: JSON-serializable object
        indent: Optional indentation for human-readable output
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + '.tmp')
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=indent)
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote {path}")

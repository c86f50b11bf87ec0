"""
Document registry and its reverse view.
"""

from .registry import Entry, Registry, CorpusChanges, read_modified, FORMAT_VERSION, MAX_DOCUMENT_ID
from .reverse import ReverseRegistry

__all__ = [
    'Entry',
    'Registry',
    'CorpusChanges',
    'ReverseRegistry',
    'read_modified',
    'FORMAT_VERSION',
    'MAX_DOCUMENT_ID',
]

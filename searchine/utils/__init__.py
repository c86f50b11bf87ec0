"""Utility functions."""

from .corpus import walk_corpus
from .jsonio import read_json, write_json

__all__ = ['walk_corpus', 'read_json', 'write_json']

"""
searchine - indexing substrate of a local document search tool.
"""

from .collection import Entry, Registry, ReverseRegistry, CorpusChanges
from .postings import Posting, PostingsList, FrequencyPosting, FrequencyPostingsList
from .index import TermIndex

__version__ = '0.1.0'

__all__ = [
    'Entry',
    'Registry',
    'ReverseRegistry',
    'CorpusChanges',
    'Posting',
    'PostingsList',
    'FrequencyPosting',
    'FrequencyPostingsList',
    'TermIndex',
]

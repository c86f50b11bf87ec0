"""
Posting and postings list contracts, and the frequency implementation.
"""

from .base import Posting, PostingsList
from .freq import FrequencyPosting, FrequencyPostingsList

__all__ = [
    'Posting',
    'PostingsList',
    'FrequencyPosting',
    'FrequencyPostingsList',
]

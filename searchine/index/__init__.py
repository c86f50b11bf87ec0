"""Term index."""

from .term_index import TermIndex

__all__ = ['TermIndex']

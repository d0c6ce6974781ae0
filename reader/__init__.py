"""
reader/
-------
Text data layer.  Public API:

    from reader import Document, DocumentSet, Blacklist, tokenize
"""

from reader.document     import Document, tokenize, make_title
from reader.document_set import DocumentSet
from reader.blacklist    import Blacklist

__all__ = [
    "Document",    "tokenize",  "make_title",
    "DocumentSet",
    "Blacklist",
]

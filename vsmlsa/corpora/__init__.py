"""
This package contains the vocabulary, the term-document matrix and plain-text corpus readers.
"""

# bring corpus classes directly into package namespace, to save some typing
from .dictionary import Dictionary  # noqa:F401 must appear before the other classes

from .termdoc import Document, TermDocumentMatrix, build_term_document_matrix, query_vector  # noqa:F401
from .textcorpus import documents_from_texts, read_documents  # noqa:F401

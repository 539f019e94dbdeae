"""
This package contains implementations of pairwise similarity queries.
"""

# bring classes directly into package namespace, to save some typing
from .docsim import MatrixSimilarity, rank  # noqa:F401

"""
This package contains algorithms for extracting document representations from their raw
term-document counts.
"""

# bring model classes directly into package namespace, to save some typing
from .tfidfmodel import TfidfModel, compute_idf, df2idf, weight  # noqa:F401
from .lsimodel import LsiModel, Projection, reduce_svd  # noqa:F401

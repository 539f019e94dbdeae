"""
This package contains functionality to turn tokenized documents into a term-document matrix, weight it
with TF-IDF, rank documents against queries by cosine similarity and reduce the matrix with a truncated SVD
(Latent Semantic Analysis).

"""

__version__ = "0.1.0.dev0"

import logging

from vsmlsa import (  # noqa:F401
    corpora,
    interfaces,
    matutils,
    models,
    parsing,
    similarities,
    utils,
)
from vsmlsa.corpora.termdoc import build_term_document_matrix, query_vector  # noqa:F401
from vsmlsa.errors import DimensionMismatchError, EmptyCorpusError, InvalidRankError  # noqa:F401
from vsmlsa.models.lsimodel import reduce_svd  # noqa:F401
from vsmlsa.models.tfidfmodel import compute_idf, weight  # noqa:F401
from vsmlsa.parsing.preprocessing import tokenize  # noqa:F401
from vsmlsa.similarities.docsim import rank  # noqa:F401
from vsmlsa.session import CorpusSession  # noqa:F401

logger = logging.getLogger("vsmlsa")
if not logger.handlers:  # To ensure reload() doesn't add another one
    logger.addHandler(logging.NullHandler())

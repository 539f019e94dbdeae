#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Rank documents by cosine similarity to a query in the Vector Space Model.

:class:`~vsmlsa.similarities.docsim.MatrixSimilarity` keeps the unit-normalized document vectors in one
in-memory matrix, so that a query costs a single matrix-vector product. :func:`~vsmlsa.similarities.docsim.rank`
is the one-shot functional form.

.. sourcecode:: pycon

    >>> from vsmlsa.models import TfidfModel
    >>> from vsmlsa.similarities import MatrixSimilarity
    >>> from vsmlsa.test.utils import shipment_matrix
    >>>
    >>> tfidf = TfidfModel(shipment_matrix)
    >>> index = MatrixSimilarity(tfidf[shipment_matrix])
    >>> index.rank(tfidf[["gold", "silver", "truck"]])  # [('d2', 0.82...), ('d3', 0.32...), ('d1', 0.08...)]

Similarity of a zero vector (an empty query, or a query/document made only of tokens with zero weight)
to anything is defined as 0.

"""

from collections.abc import Mapping
import logging

import numpy

from vsmlsa import interfaces, matutils
from vsmlsa.errors import DimensionMismatchError


logger = logging.getLogger(__name__)


def _iter_documents(documents):
    if isinstance(documents, Mapping):
        return list(documents.items())
    return [(doc_id, vector) for doc_id, vector in documents]


class MatrixSimilarity(interfaces.SimilarityABC):
    """Compute cosine similarity against a set of documents by storing the index matrix in memory.

    Examples
    --------
    .. sourcecode:: pycon

        >>> from vsmlsa.models import TfidfModel
        >>> from vsmlsa.similarities import MatrixSimilarity
        >>> from vsmlsa.test.utils import common_matrix
        >>>
        >>> tfidf = TfidfModel(common_matrix)
        >>> index = MatrixSimilarity(tfidf[common_matrix], num_best=3)
        >>> top3 = index[tfidf[["human", "computer", "interaction"]]]

    """
    def __init__(self, documents, num_best=None, dtype=numpy.float64, num_features=None):
        """

        Parameters
        ----------
        documents : {dict of (object, numpy.ndarray), iterable of (object, numpy.ndarray)}
            Weighted document vectors keyed by document id, in ranking tie-break order.
        num_best : int, optional
            If set, indexing (`index[query]`) returns only the `num_best` most similar `(doc_id, similarity)`
            pairs. Otherwise, it returns a full vector with one float for every document in the index.
        dtype : numpy.dtype, optional
            Datatype to store the internal matrix in.
        num_features : int, optional
            Size of the vocabulary. Inferred from the first document if not given.

        Raises
        ------
        DimensionMismatchError
            If some document vector does not have `num_features` entries.

        """
        documents = _iter_documents(documents)
        if num_features is None:
            if not documents:
                raise ValueError(
                    "cannot index an empty set of documents without `num_features` set explicitly"
                )
            num_features = len(documents[0][1])

        self.num_features = num_features
        self.num_best = num_best
        self.normalize = True
        self.doc_ids = [doc_id for doc_id, _ in documents]

        logger.info("creating matrix with %i documents and %i features", len(documents), num_features)
        self.index = numpy.empty(shape=(len(documents), num_features), dtype=dtype)
        # populate the numpy index matrix with unit-normalized document vectors
        for docno, (doc_id, vector) in enumerate(documents):
            if docno % 1000 == 0:
                logger.debug("PROGRESS: at document #%i/%i", docno, len(documents))
            vector = numpy.asarray(vector, dtype=float)
            if vector.shape != (num_features,):
                raise DimensionMismatchError(num_features, vector.size, name='document %r' % (doc_id,))
            vector, length = matutils.unitvec(vector, return_norm=True)
            if length == 0.0:
                logger.debug("document %r has a zero vector; its similarity to any query is 0", doc_id)
            self.index[docno] = vector

    def __len__(self):
        return self.index.shape[0]

    def get_similarities(self, query):
        """Get similarity between `query` and this index.

        Warnings
        --------
        Do not use this function directly, use the :class:`~vsmlsa.similarities.docsim.MatrixSimilarity.__getitem__`
        or :meth:`~vsmlsa.similarities.docsim.MatrixSimilarity.rank` instead: they normalize the query first.

        Parameters
        ----------
        query : numpy.ndarray
            One (unit) query vector, or a 2D array with one query per row.

        Return
        ------
        :class:`numpy.ndarray`
            Similarities, shape `(num_docs,)` or `(num_queries, num_docs)`.

        """
        query = numpy.asarray(query, dtype=self.index.dtype)
        if query.shape[-1] != self.num_features:
            raise DimensionMismatchError(self.num_features, query.shape[-1], name='query')
        return numpy.dot(self.index, query.T).T

    def rank(self, query, num_best=None):
        """Rank all indexed documents by cosine similarity to `query`.

        Parameters
        ----------
        query : numpy.ndarray
            Weighted query vector (need not be normalized).
        num_best : int, optional
            Return only the top `num_best` documents.

        Returns
        -------
        list of (object, float)
            `(doc_id, similarity)` pairs by descending similarity; documents with equal similarity keep
            their index order.

        """
        query = numpy.asarray(query, dtype=float)
        if query.ndim != 1:
            raise ValueError("rank() expects a single query vector, got shape %s" % (query.shape,))
        query, length = matutils.unitvec(query, return_norm=True)
        if length == 0.0:
            logger.warning("query vector has zero length; every document gets similarity 0")
        return self._ranked(self.get_similarities(query), num_best)

    def __str__(self):
        return "%s<%i docs, %i features>" % (self.__class__.__name__, len(self), self.num_features)


def rank(query_weighted, document_weighted_vectors, num_best=None):
    """Rank documents by cosine similarity of their weighted vectors to a weighted query.

    Parameters
    ----------
    query_weighted : numpy.ndarray
        Weighted query vector.
    document_weighted_vectors : {dict of (object, numpy.ndarray), iterable of (object, numpy.ndarray)}
        Weighted document vectors keyed by document id, in corpus order.
    num_best : int, optional
        Return only the top `num_best` documents.

    Returns
    -------
    list of (object, float)
        `(doc_id, similarity)` pairs by descending similarity, ties in corpus order.

    Raises
    ------
    DimensionMismatchError
        If the query and document vectors differ in length.

    """
    query_weighted = numpy.asarray(query_weighted, dtype=float)
    index = MatrixSimilarity(document_weighted_vectors, num_features=query_weighted.shape[-1])
    return index.rank(query_weighted, num_best=num_best)

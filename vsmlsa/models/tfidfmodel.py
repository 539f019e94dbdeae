#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""This module implements the `Term Frequency - Inverse Document Frequency
<https://en.wikipedia.org/wiki/Tf%E2%80%93idf>`_ weighting of the vector space bag-of-words model.

The weight of token :math:`t` in document :math:`d` of a corpus of :math:`D` documents is

.. math:: weight_{t,d} = frequency_{t,d} * log_{b} \\frac{D}{document\\_freq_{t}}

with the logarithm base :math:`b = 10` by default, so that the weights match the classic worked examples.

Examples
--------
.. sourcecode:: pycon

    >>> from vsmlsa.corpora.termdoc import build_term_document_matrix
    >>> from vsmlsa.models.tfidfmodel import compute_idf, weight
    >>>
    >>> matrix, dfs, vocabulary = build_term_document_matrix([("d1", ["gold", "fire"]), ("d2", ["gold", "truck"])])
    >>> idfs = compute_idf(dfs, matrix.num_docs)
    >>> doc_vectors = weight(matrix, idfs)  # {'d1': array([0., 0.30103, 0.]), 'd2': array([0., 0., 0.30103])}

"""

import logging
import numbers

import numpy as np

from vsmlsa import interfaces, matutils
from vsmlsa.corpora.termdoc import TermDocumentMatrix, query_vector
from vsmlsa.errors import DimensionMismatchError, EmptyCorpusError


logger = logging.getLogger(__name__)

DEFAULT_LOG_BASE = 10.0


def _check_log_base(log_base):
    if not isinstance(log_base, numbers.Real) or isinstance(log_base, bool) or not log_base > 0 or log_base == 1:
        raise ValueError("log_base must be a positive real number other than 1, got %r" % (log_base,))


def df2idf(docfreq, totaldocs, log_base=DEFAULT_LOG_BASE, add=0.0):
    r"""Compute inverse-document-frequency for a term with the given document frequency `docfreq`:
    :math:`idf = add + log_{log\_base} \frac{totaldocs}{docfreq}`

    Parameters
    ----------
    docfreq : {int, float}
        Document frequency.
    totaldocs : int
        Total number of documents.
    log_base : float, optional
        Base of logarithm.
    add : float, optional
        Offset.

    Returns
    -------
    float
        Inverse document frequency.

    """
    _check_log_base(log_base)
    return add + np.log(float(totaldocs) / docfreq) / np.log(log_base)


def compute_idf(doc_frequency, total_docs, log_base=DEFAULT_LOG_BASE):
    """Compute the inverse document frequency of every vocabulary token.

    Parameters
    ----------
    doc_frequency : array_like of int
        Document frequency of each token, indexed by token id.
    total_docs : int
        Number of documents in the corpus.
    log_base : float, optional
        Base of the logarithm; a positive real other than 1.

    Returns
    -------
    numpy.ndarray
        `log_base`-logarithm of `total_docs / doc_frequency`, elementwise. Exactly 0.0 for tokens
        present in every document.

    Raises
    ------
    EmptyCorpusError
        If `total_docs` is less than 1.
    ValueError
        If `log_base` is invalid, or some document frequency lies outside `[1, total_docs]`.

    """
    _check_log_base(log_base)
    if total_docs < 1:
        raise EmptyCorpusError(total_docs)
    dfs = np.asarray(doc_frequency, dtype=np.float64)
    if dfs.ndim != 1:
        raise ValueError("doc_frequency must be a vector, got an array of shape %s" % (dfs.shape,))
    bad = np.nonzero((dfs < 1) | (dfs > total_docs))[0]
    if len(bad):
        raise ValueError(
            "document frequency %r of token #%i lies outside [1, %i]" % (dfs[bad[0]], bad[0], total_docs)
        )
    idfs = np.log(total_docs / dfs) / np.log(log_base)
    logger.info("calculated IDF weights for %i documents and %i features", total_docs, len(idfs))
    return idfs


def weight(matrix_or_query, idf_vector):
    """Multiply raw counts by the inverse document frequency of their tokens.

    Parameters
    ----------
    matrix_or_query : {:class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`, numpy.ndarray}
        Whole term-document matrix, a single count vector (for example from
        :func:`~vsmlsa.corpora.termdoc.query_vector`), or a 2D count array of shape `(num_terms, num_docs)`.
    idf_vector : numpy.ndarray
        Output of :func:`~vsmlsa.models.tfidfmodel.compute_idf`.

    Returns
    -------
    {dict of (object, numpy.ndarray), numpy.ndarray}
        For a :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`, a `doc_id -> weighted vector` dict in column
        order. Otherwise the weighted array, with the same shape as the input.

    Raises
    ------
    DimensionMismatchError
        If the number of rows/entries differs from `len(idf_vector)`.

    """
    idfs = np.asarray(idf_vector, dtype=np.float64)
    if isinstance(matrix_or_query, TermDocumentMatrix):
        if matrix_or_query.num_terms != len(idfs):
            raise DimensionMismatchError(len(idfs), matrix_or_query.num_terms, name='term-document matrix')
        weighted = matrix_or_query.counts * idfs[:, np.newaxis]
        return {doc_id: weighted[:, col] for col, doc_id in enumerate(matrix_or_query.doc_ids)}

    counts = np.asarray(matrix_or_query, dtype=np.float64)
    if counts.ndim not in (1, 2):
        raise ValueError("expected a count vector or a 2D count array, got shape %s" % (counts.shape,))
    if counts.shape[0] != len(idfs):
        raise DimensionMismatchError(len(idfs), counts.shape[0])
    if counts.ndim == 2:
        return counts * idfs[:, np.newaxis]
    return counts * idfs


class TfidfModel(interfaces.TransformationABC):
    """Objects of this class realize the transformation between a term-document count matrix (int)
    and TF-IDF weighted vectors (non-negative floats).

    Examples
    --------
    .. sourcecode:: pycon

        >>> from vsmlsa.models import TfidfModel
        >>> from vsmlsa.test.utils import shipment_matrix
        >>>
        >>> model = TfidfModel(shipment_matrix)
        >>> doc_vectors = model[shipment_matrix]  # weight every document
        >>> query, unknown = model.query(["gold", "silver", "truck", "copper"])
        >>> unknown
        {'copper': 1}

    """
    def __init__(self, matrix=None, dictionary=None, log_base=DEFAULT_LOG_BASE, normalize=False):
        """

        Parameters
        ----------
        matrix : :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`, optional
            Matrix to collect document frequencies from.
        dictionary : :class:`~vsmlsa.corpora.dictionary.Dictionary`, optional
            If given (and `matrix` is not), its document frequencies are used directly.
        log_base : float, optional
            Base of the IDF logarithm.
        normalize : bool, optional
            Scale every output vector to unit euclidean length?

        """
        _check_log_base(log_base)
        self.log_base = log_base
        self.normalize = normalize
        self.id2word = None
        self.num_docs, self.num_nnz, self.dfs, self.idfs = None, None, None, None

        if matrix is not None:
            if dictionary is not None:
                logger.warning("constructor received both a matrix and a dictionary; ignoring the dictionary")
            self.initialize(matrix)
        elif dictionary is not None:
            self.id2word = dictionary
            self.num_docs, self.num_nnz = dictionary.num_docs, dictionary.num_nnz
            self.dfs = dictionary.dfs_vector()
            self.idfs = compute_idf(self.dfs, self.num_docs, log_base=self.log_base)
        else:
            # NOTE: everything is left uninitialized; presumably the model will
            # be initialized later, through `initialize()`
            pass

    def __str__(self):
        return "%s(num_docs=%s, num_nnz=%s, log_base=%s)" % (
            self.__class__.__name__, self.num_docs, self.num_nnz, self.log_base
        )

    def initialize(self, matrix):
        """Compute inverse document weights, which will be used to modify term frequencies for documents.

        Parameters
        ----------
        matrix : :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`
            Input term-document matrix.

        """
        logger.info("collecting document frequencies from %s", matrix)
        self.id2word = matrix.dictionary
        self.num_docs = matrix.num_docs
        self.num_nnz = int(np.count_nonzero(matrix.counts))
        self.dfs = matrix.doc_frequencies()
        self.idfs = compute_idf(self.dfs, self.num_docs, log_base=self.log_base)

    def _check_initialized(self):
        if self.idfs is None:
            raise ValueError("%s has no IDF weights yet; call initialize() first" % self)

    def _finish(self, vec):
        if not self.normalize:
            return vec
        if vec.ndim == 2:
            # one document per column
            return np.column_stack([matutils.unitvec(col) for col in vec.T]) if vec.shape[1] else vec
        return matutils.unitvec(vec)

    def query(self, tokens):
        """Weight a tokenized query.

        Parameters
        ----------
        tokens : list of str
            Query tokens, tokenized the same way as the corpus documents.

        Returns
        -------
        (numpy.ndarray, dict of (str, int))
            Weighted query vector, and the query tokens unknown to the vocabulary with their counts.
            Unknown tokens get zero weight (NOT infinity/huge weight, as strict application of the IDF
            formula would dictate).

        """
        self._check_initialized()
        counts, unknown = query_vector(tokens, self.id2word)
        if unknown:
            logger.warning("ignoring %i query terms missing from the vocabulary: %s", len(unknown), sorted(unknown))
        return self._finish(weight(counts, self.idfs)), unknown

    def __getitem__(self, doc):
        """Get the tf-idf representation of a query or of a whole matrix.

        Parameters
        ----------
        doc : {list of str, numpy.ndarray, :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`}
            Query tokens, a dense count vector over the vocabulary, or a term-document matrix.

        Returns
        -------
        {numpy.ndarray, dict of (object, numpy.ndarray)}
            Weighted vector, or a `doc_id -> weighted vector` dict for a matrix.

        """
        self._check_initialized()
        if isinstance(doc, TermDocumentMatrix):
            return {doc_id: self._finish(vec) for doc_id, vec in weight(doc, self.idfs).items()}
        if isinstance(doc, np.ndarray):
            return self._finish(weight(doc, self.idfs))
        return self.query(doc)[0]

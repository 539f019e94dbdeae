#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Module for `Latent Semantic Analysis (aka Latent Semantic Indexing)
<https://en.wikipedia.org/wiki/Latent_semantic_analysis#Latent_semantic_indexing>`_.

The term-document matrix :math:`A` is factorized by the SVD as :math:`A = U \\Sigma V^T` and truncated to the
:math:`k` largest singular values. By the Eckart-Young theorem :math:`\\hat{A} = U_k \\Sigma_k V_k^T` is the best
rank-:math:`k` approximation of :math:`A` in the Frobenius norm; its entries reveal indirect associations
between terms and documents that share no tokens.

The decomposition itself is delegated to :func:`scipy.linalg.svd`. The signs of a pair of matching
U and V columns are arbitrary (negating both gives an equally valid factorization), so only magnitudes and
products of loadings are meaningful.

Examples
--------
.. sourcecode:: pycon

    >>> from vsmlsa.test.utils import common_matrix
    >>> from vsmlsa.models import LsiModel
    >>>
    >>> model = LsiModel(common_matrix, num_topics=2)
    >>> model.show_topic(1, topn=3)  # three terms with the largest loadings on the second dimension
    >>> query_latent = model[["human", "computer"]]  # fold a query into the latent space

"""

import logging
import numbers

import numpy as np
import scipy.linalg

from vsmlsa import interfaces, matutils, utils
from vsmlsa.corpora.termdoc import TermDocumentMatrix, query_vector
from vsmlsa.errors import DimensionMismatchError, InvalidRankError
from vsmlsa.similarities.docsim import MatrixSimilarity


logger = logging.getLogger(__name__)


def _as_matrix(matrix):
    if isinstance(matrix, TermDocumentMatrix):
        return np.asarray(matrix.counts, dtype=np.float64)
    a = np.asarray(matrix, dtype=np.float64)
    if a.ndim != 2:
        raise ValueError("expected a 2D term-document matrix, got an array of shape %s" % (a.shape,))
    return a


def _check_rank(k, shape):
    max_rank = min(shape)
    if not isinstance(k, numbers.Integral) or isinstance(k, bool) or not 1 <= k <= max_rank:
        raise InvalidRankError(k, max_rank)


def reduce_svd(matrix, k):
    """Decompose a term-document matrix and keep only its `k` largest singular values.

    Parameters
    ----------
    matrix : {:class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`, numpy.ndarray}
        Matrix with tokens as rows and documents as columns.
    k : int
        Target rank, `1 <= k <= min(num_terms, num_docs)`.

    Returns
    -------
    (numpy.ndarray, numpy.ndarray, numpy.ndarray, numpy.ndarray)
        `U_k` of shape `(num_terms, k)`, singular values `sigma_k` sorted in descending order,
        `V_k` of shape `(num_docs, k)` and the rank-`k` reconstruction `U_k * diag(sigma_k) * V_k^T`.

    Raises
    ------
    InvalidRankError
        If `k` lies outside `[1, min(num_terms, num_docs)]`.

    """
    a = _as_matrix(matrix)
    _check_rank(k, a.shape)

    logger.info("computing SVD of %ix%i matrix, keeping %i factors", a.shape[0], a.shape[1], k)
    u, s, vt = scipy.linalg.svd(a, full_matrices=False)
    u_k, s_k, v_k = u[:, :k], s[:k], vt[:k].T

    if len(s) > k and s[0] > 0.0:
        logger.debug("kept %.3f%% of the spectrum energy", 100.0 * np.sum(s_k ** 2) / np.sum(s ** 2))
    reconstructed = np.dot(u_k * s_k, v_k.T)
    return u_k, s_k, v_k, reconstructed


def reconstruction_error(matrix, reconstructed):
    """Frobenius norm of the difference between `matrix` and its approximation `reconstructed`."""
    a = _as_matrix(matrix)
    return float(np.linalg.norm(a - reconstructed))


class Projection(utils.SaveLoad):
    """Low-rank factors of a term-document matrix, `u` (terms x k), `s` (k) and `v` (documents x k)."""
    def __init__(self, u, s, v):
        self.u, self.s, self.v = u, s, v

    @property
    def num_topics(self):
        return len(self.s)

    def reconstruct(self):
        """Get the approximation `u * diag(s) * v^T` of the original matrix."""
        return np.dot(self.u * self.s, self.v.T)


class LsiModel(interfaces.TransformationABC):
    """Model for `Latent Semantic Indexing
    <https://en.wikipedia.org/wiki/Latent_semantic_analysis#Latent_semantic_indexing>`_.

    Attributes
    ----------
    projection : :class:`~vsmlsa.models.lsimodel.Projection`
        Truncated SVD factors.
    doc_ids : tuple
        Document ids, in the row order of `projection.v`.
    id2word : :class:`~vsmlsa.corpora.dictionary.Dictionary`
        Vocabulary, if known.

    """
    def __init__(self, matrix, num_topics=2, id2word=None, doc_ids=None):
        """

        Parameters
        ----------
        matrix : {:class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`, numpy.ndarray}
            Term-document matrix; counts or weighted values.
        num_topics : int, optional
            Number of latent dimensions to keep.
        id2word : :class:`~vsmlsa.corpora.dictionary.Dictionary`, optional
            Vocabulary; taken from `matrix` if that is a :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`.
        doc_ids : iterable of object, optional
            Document ids; taken from `matrix` if that is a :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`,
            otherwise the column numbers are used.

        """
        if isinstance(matrix, TermDocumentMatrix):
            id2word = matrix.dictionary if id2word is None else id2word
            doc_ids = matrix.doc_ids if doc_ids is None else doc_ids
        a = _as_matrix(matrix)
        if doc_ids is None:
            doc_ids = range(a.shape[1])

        self.id2word = id2word
        self.doc_ids = tuple(doc_ids)
        self.num_terms, self.num_docs = a.shape
        self.num_topics = num_topics
        if len(self.doc_ids) != self.num_docs:
            raise ValueError("got %i document ids for %i matrix columns" % (len(self.doc_ids), self.num_docs))
        if id2word is not None and len(id2word) != self.num_terms:
            raise DimensionMismatchError(self.num_terms, len(id2word), name='id2word')

        u, s, v, _ = reduce_svd(a, num_topics)
        self.projection = Projection(u, s, v)
        logger.info("%s", self)

    def __str__(self):
        return "%s(num_terms=%s, num_docs=%s, num_topics=%s)" % (
            self.__class__.__name__, self.num_terms, self.num_docs, self.num_topics
        )

    def _as_term_vector(self, vec):
        if isinstance(vec, np.ndarray):
            vec = vec.astype(float)
        else:
            if self.id2word is None:
                raise ValueError("cannot fold in tokens: this model was built without a vocabulary (id2word)")
            vec, unknown = query_vector(vec, self.id2word)
            if unknown:
                logger.warning("ignoring %i query terms missing from the vocabulary: %s", len(unknown), sorted(unknown))
            vec = vec.astype(float)
        if vec.shape[0] != self.num_terms:
            raise DimensionMismatchError(self.num_terms, vec.shape[0])
        return vec

    def __getitem__(self, vec, scaled=False):
        """Fold a term vector (a query, or a new document) into the latent space.

        Parameters
        ----------
        vec : {numpy.ndarray, list of str}
            Dense term vector (counts or weights), or tokens to be counted over `id2word`.
        scaled : bool, optional
            Divide the coordinates by the singular values (`sigma_k^-1 * U_k^T * vec`)? Coordinates
            of dimensions with a (numerically) zero singular value are then 0.

        Returns
        -------
        numpy.ndarray
            Latent vector of length `num_topics`, `U_k^T * vec` unless `scaled`.

        """
        topic_dist = np.dot(self.projection.u.T, self._as_term_vector(vec))
        if scaled:
            s = self.projection.s
            # same cutoff as numpy.linalg.matrix_rank
            tol = s.max() * max(self.num_terms, self.num_docs) * np.finfo(s.dtype).eps
            nonzero = s > tol
            if not nonzero.all():
                logger.warning("%i latent dimensions have a zero singular value; their coordinate is 0",
                               np.count_nonzero(~nonzero))
            topic_dist = np.where(nonzero, topic_dist / np.where(nonzero, s, 1.0), 0.0)
        return topic_dist

    def fold_in(self, vec, scaled=False):
        """Same as `self[vec]`, with the `scaled` option exposed."""
        return self.__getitem__(vec, scaled=scaled)

    def document_vectors(self, scaled=False):
        """Get latent coordinates of the documents the model was built from.

        Parameters
        ----------
        scaled : bool, optional
            Return rows of `V_k` instead of `sigma_k * V_k^T` columns.

        Returns
        -------
        dict of (object, numpy.ndarray)
            `doc_id -> latent vector`, in matrix column order. Unscaled vectors are comparable to the
            output of `self[query]`, scaled ones to `self.fold_in(query, scaled=True)`.

        """
        v = self.projection.v if scaled else self.projection.v * self.projection.s
        return {doc_id: v[docno] for docno, doc_id in enumerate(self.doc_ids)}

    def rank(self, query, num_best=None):
        """Rank the model's documents by cosine similarity to `query` in the latent space.

        Parameters
        ----------
        query : {numpy.ndarray, list of str}
            Query term vector or tokens.
        num_best : int, optional
            Return only the top `num_best` documents.

        Returns
        -------
        list of (object, float)
            `(doc_id, similarity)` pairs, most similar first, ties in corpus order.

        """
        index = MatrixSimilarity(self.document_vectors(), num_features=self.num_topics)
        return index.rank(self[query], num_best=num_best)

    def reconstruct(self):
        """Get the rank-`num_topics` approximation of the original matrix, with terms as rows."""
        return self.projection.reconstruct()

    def reconstruction_error(self, matrix):
        """Frobenius norm of the difference between `matrix` and the model's low-rank approximation."""
        return reconstruction_error(matrix, self.reconstruct())

    def get_topics(self):
        """Get the term loadings of every latent dimension.

        Returns
        -------
        numpy.ndarray
            The term-topic matrix with shape (`num_topics`, `vocabulary_size`), i.e. `U_k^T`.

        """
        return self.projection.u.T.copy()

    def show_topic(self, topicno, topn=10):
        """Get the words that define a topic along with their contribution.

        Parameters
        ----------
        topicno : int
            The topic id number.
        topn : int
            Number of words to be included to the result.

        Returns
        -------
        list of (str, float)
            Topic representation in BoW format, terms ordered by the absolute value of their loading.

        """
        if not 0 <= topicno < self.num_topics:
            raise ValueError("topic number %r out of range [0, %i)" % (topicno, self.num_topics))
        c = self.projection.u[:, topicno]
        most = matutils.argsort(np.abs(c), topn, reverse=True)
        words = self.id2word if self.id2word is not None else {}
        return [(words.get(val, str(val)), float(c[val])) for val in most]

    def show_topics(self, num_topics=-1, num_words=10, log=False, formatted=True):
        """Get the most significant topics.

        Parameters
        ----------
        num_topics : int, optional
            The number of topics to be selected, if -1 - all topics will be in result (ordered by significance).
        num_words : int, optional
            The number of words to be included per topics (ordered by significance).
        log : bool, optional
            If True - log topics with logger.
        formatted : bool, optional
            If True - each topic represented as string, otherwise - in BoW format.

        Returns
        -------
        list of (int, str)
            If `formatted=True`, return sequence with (topic_id, string representation of topics) **OR**
        list of (int, list of (str, float))
            Otherwise, return sequence with (topic_id, [(word, value), ... ]).

        """
        shown = []
        if num_topics < 0:
            num_topics = self.num_topics
        for i in range(min(num_topics, self.num_topics)):
            topic = self.show_topic(i, topn=num_words)
            if formatted:
                topic = ' + '.join('%.3f*"%s"' % (v, k) for k, v in topic)
            shown.append((i, topic))
            if log:
                logger.info("topic #%i(%.3f): %s", i, self.projection.s[i], topic)
        return shown

    def print_topics(self, num_topics=20, num_words=10):
        """Log the most significant topics, see :meth:`show_topics`."""
        return self.show_topics(num_topics=num_topics, num_words=num_words, log=True)

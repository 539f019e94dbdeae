#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Thread-safe holder of the current corpus and the structures derived from it.

All derived structures (term-document matrix, vocabulary, IDF weights, similarity index) are bundled
into one immutable :class:`~vsmlsa.session.CorpusSnapshot`. Replacing the corpus builds a complete new
snapshot first and then swaps the reference under a lock, so concurrent readers always see either the
old or the new corpus, never a mix of both.

.. sourcecode:: pycon

    >>> from vsmlsa.session import CorpusSession
    >>> from vsmlsa.test.utils import shipment_documents
    >>>
    >>> session = CorpusSession(shipment_documents)
    >>> session.rank(["gold", "silver", "truck"])  # [('d2', 0.82...), ('d3', 0.32...), ('d1', 0.08...)]
    >>> lsi = session.lsi(2)  # computed once, reused until the next `update()`

"""

import logging
import threading

from vsmlsa import utils
from vsmlsa.corpora.termdoc import build_term_document_matrix
from vsmlsa.errors import EmptyCorpusError
from vsmlsa.models.lsimodel import LsiModel, _check_rank
from vsmlsa.models.tfidfmodel import DEFAULT_LOG_BASE, TfidfModel
from vsmlsa.similarities.docsim import MatrixSimilarity


logger = logging.getLogger(__name__)


class CorpusSnapshot(utils.SaveLoad):
    """Everything derived from one version of the corpus.

    Attributes
    ----------
    matrix : :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`
        Raw counts.
    doc_frequency : numpy.ndarray
        Document frequency of every row token.
    dictionary : :class:`~vsmlsa.corpora.dictionary.Dictionary`
        Vocabulary.
    tfidf : :class:`~vsmlsa.models.tfidfmodel.TfidfModel`
        IDF weights of the vocabulary.
    index : :class:`~vsmlsa.similarities.docsim.MatrixSimilarity`
        Unit-normalized TF-IDF document vectors.

    """
    def __init__(self, documents, log_base=DEFAULT_LOG_BASE):
        self.matrix, self.doc_frequency, self.dictionary = build_term_document_matrix(documents)
        self.tfidf = TfidfModel(self.matrix, log_base=log_base)
        self.index = MatrixSimilarity(self.tfidf[self.matrix], num_features=self.matrix.num_terms)
        self.lsi_models = {}

    def __str__(self):
        return "%s<%i documents, %i terms>" % (
            self.__class__.__name__, self.matrix.num_docs, self.matrix.num_terms
        )


class CorpusSession:
    """Serve ranking queries over a corpus that may be replaced at any time.

    Queries run without locking against whatever snapshot is current when they start.
    Only :meth:`update` and the LSI cache are serialized.

    """
    def __init__(self, documents=None, log_base=DEFAULT_LOG_BASE):
        """

        Parameters
        ----------
        documents : iterable of {:class:`~vsmlsa.corpora.termdoc.Document`, (object, iterable of str)}, optional
            Initial corpus. If not given, the session starts empty and :meth:`update` must be called first.
        log_base : float, optional
            Base of the IDF logarithm used for every snapshot.

        """
        self.log_base = log_base
        self.lock_update = threading.RLock()  # only one thread can modify the session at a time
        self.lock_lsi = threading.Lock()
        self._snapshot = None
        self._generation = 0  # update call that produced the current snapshot
        self._generations_issued = 0
        if documents is not None:
            self.update(documents)

    def __str__(self):
        return "%s<%s>" % (self.__class__.__name__, self._snapshot)

    @property
    def snapshot(self):
        """The current :class:`~vsmlsa.session.CorpusSnapshot`, or None before any corpus is loaded."""
        return self._snapshot

    def _current(self):
        snapshot = self._snapshot
        if snapshot is None:
            raise EmptyCorpusError(0, "no corpus loaded yet; call update() first")
        return snapshot

    def update(self, documents):
        """Replace the corpus.

        The new snapshot is built before the lock is taken; a failure (for example an empty corpus)
        leaves the current snapshot in place.

        Concurrent updates take effect in the order they were called, not the order their builds finish:
        a build that completes after a later call has already been swapped in is discarded.

        Parameters
        ----------
        documents : iterable of {:class:`~vsmlsa.corpora.termdoc.Document`, (object, iterable of str)}
            The complete new corpus.

        Returns
        -------
        :class:`~vsmlsa.session.CorpusSnapshot`
            The snapshot now in effect.

        """
        generation = self._next_generation()
        snapshot = CorpusSnapshot(documents, log_base=self.log_base)
        return self._swap(snapshot, generation)

    @utils.synchronous('lock_update')
    def _next_generation(self):
        self._generations_issued += 1
        return self._generations_issued

    @utils.synchronous('lock_update')
    def _swap(self, snapshot, generation):
        if generation < self._generation:
            logger.info("discarding %s: superseded by a later update", snapshot)
            return self._snapshot
        previous, self._snapshot, self._generation = self._snapshot, snapshot, generation
        logger.info("replaced %s with %s", previous, snapshot)
        return snapshot

    def rank(self, query_tokens, num_best=None):
        """Rank the current corpus by TF-IDF cosine similarity to a tokenized query.

        Parameters
        ----------
        query_tokens : list of str
            Query tokens; tokens outside the vocabulary are logged and ignored.
        num_best : int, optional
            Return only the top `num_best` documents.

        Returns
        -------
        list of (object, float)
            `(doc_id, similarity)` pairs, most similar first, ties in corpus order.

        Raises
        ------
        EmptyCorpusError
            If no corpus was loaded yet.

        """
        snapshot = self._current()
        query, _ = snapshot.tfidf.query(query_tokens)
        return snapshot.index.rank(query, num_best=num_best)

    def lsi(self, num_topics):
        """Get the latent semantic model of rank `num_topics` for the current corpus.

        Models are computed from the raw counts at most once per snapshot and rank.

        Raises
        ------
        EmptyCorpusError
            If no corpus was loaded yet.
        InvalidRankError
            If `num_topics` is outside `[1, min(num_terms, num_docs)]`.

        """
        snapshot = self._current()
        _check_rank(num_topics, snapshot.matrix.shape)
        return self._lsi(snapshot, num_topics)

    @utils.synchronous('lock_lsi')
    def _lsi(self, snapshot, num_topics):
        model = snapshot.lsi_models.get(num_topics)
        if model is None:
            model = LsiModel(snapshot.matrix, num_topics=num_topics)
            snapshot.lsi_models[num_topics] = model
        else:
            logger.debug("reusing cached %s", model)
        return model

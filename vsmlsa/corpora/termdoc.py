#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Dense term-document count matrix, shared as the sole input by the TF-IDF and LSA branches.

Rows are vocabulary tokens (in :class:`~vsmlsa.corpora.dictionary.Dictionary` id order), columns are documents
in corpus order.

Examples
--------
.. sourcecode:: pycon

    >>> from vsmlsa.corpora.termdoc import build_term_document_matrix
    >>>
    >>> documents = [("d1", ["gold", "silver"]), ("d2", ["gold", "truck", "truck"])]
    >>> matrix, dfs, vocabulary = build_term_document_matrix(documents)
    >>> matrix.counts
    array([[1, 1],
           [1, 0],
           [0, 2]])
    >>> [vocabulary[tokenid] for tokenid in vocabulary]
    ['gold', 'silver', 'truck']

"""

from collections import namedtuple
import logging

import numpy as np

from vsmlsa import matutils, utils
from vsmlsa.corpora.dictionary import Dictionary
from vsmlsa.errors import EmptyCorpusError


logger = logging.getLogger(__name__)


class Document(namedtuple('Document', ['id', 'tokens'])):
    """A document identifier plus its tokens, as produced by the tokenizer. Immutable."""
    __slots__ = ()

    def __new__(cls, id, tokens):
        if isinstance(tokens, str):
            raise TypeError("document %r: expected a sequence of tokens, not a single string" % (id,))
        return super(Document, cls).__new__(cls, id, tuple(tokens))


def _as_documents(documents):
    result = [doc if isinstance(doc, Document) else Document(*doc) for doc in documents]
    seen = set()
    for doc in result:
        if doc.id in seen:
            raise ValueError("duplicate document id %r: document ids must be unique" % (doc.id,))
        seen.add(doc.id)
    return result


class TermDocumentMatrix(utils.SaveLoad):
    """Read-only matrix of per-document token counts.

    Attributes
    ----------
    counts : numpy.ndarray
        Integer array of shape `(num_terms, num_docs)`, flagged read-only.
    doc_ids : tuple
        Document identifiers, in column order.
    dictionary : :class:`~vsmlsa.corpora.dictionary.Dictionary`
        Vocabulary; token id `i` labels row `i`.

    """
    def __init__(self, counts, doc_ids, dictionary):
        counts = np.array(counts, dtype=np.int64)
        if counts.ndim != 2 or counts.shape != (len(dictionary), len(doc_ids)):
            raise ValueError(
                "counts of shape %s do not match %i tokens x %i documents"
                % (counts.shape, len(dictionary), len(doc_ids))
            )
        counts.flags.writeable = False
        self.counts = counts
        self.doc_ids = tuple(doc_ids)
        self.dictionary = dictionary
        self._id2col = {doc_id: col for col, doc_id in enumerate(self.doc_ids)}

    @classmethod
    def load(cls, fname, mmap=None):
        obj = super(TermDocumentMatrix, cls).load(fname, mmap=mmap)
        obj.counts.flags.writeable = False
        return obj

    @property
    def shape(self):
        return self.counts.shape

    @property
    def num_terms(self):
        return self.counts.shape[0]

    @property
    def num_docs(self):
        return self.counts.shape[1]

    def __len__(self):
        return self.num_docs

    def __iter__(self):
        """Iterate over documents in bag-of-words format, in column order.

        Yields
        ------
        list of (int, int)
            Non-zero `(token_id, count)` pairs of the next document.

        """
        for col in range(self.num_docs):
            yield [(int(termid), int(count)) for termid, count in matutils.full2sparse(self.counts[:, col])]

    def __str__(self):
        return "%s<%i terms, %i documents>" % (self.__class__.__name__, self.num_terms, self.num_docs)

    def doc_index(self, doc_id):
        """Get the column index of `doc_id`; raises `KeyError` for unknown ids."""
        return self._id2col[doc_id]

    def column(self, doc_id):
        """Get the (read-only) count vector of document `doc_id`."""
        return self.counts[:, self.doc_index(doc_id)]

    def count(self, token, doc_id):
        """Get how many times `token` occurs in document `doc_id`; 0 for tokens outside the vocabulary."""
        tokenid = self.dictionary.token2id.get(token)
        if tokenid is None:
            return 0
        return int(self.counts[tokenid, self.doc_index(doc_id)])

    def doc_lengths(self):
        """Get the number of tokens of each document, i.e. the column sums."""
        return self.counts.sum(axis=0)

    def doc_frequencies(self):
        """Get the number of documents each token occurs in, i.e. non-zero entries per row."""
        return np.count_nonzero(self.counts, axis=1).astype(np.int64)


def build_term_document_matrix(documents):
    """Count tokens of every document into a dense term-document matrix.

    Parameters
    ----------
    documents : iterable of {:class:`~vsmlsa.corpora.termdoc.Document`, (object, iterable of str)}
        Ordered documents; their order fixes the column order of the matrix.

    Returns
    -------
    (:class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`, numpy.ndarray, :class:`~vsmlsa.corpora.dictionary.Dictionary`)
        The count matrix, the document frequency of each row token, and the vocabulary.

    Raises
    ------
    EmptyCorpusError
        If `documents` is empty.
    ValueError
        If two documents share the same id.

    Notes
    -----
    Documents without any token are accepted; they become all-zero columns.

    """
    documents = _as_documents(documents)
    if not documents:
        raise EmptyCorpusError(0)

    for doc in documents:
        if not doc.tokens:
            logger.warning("document %r has no tokens; it will be an all-zero column", doc.id)

    dictionary = Dictionary(doc.tokens for doc in documents)
    bows = [dictionary.doc2bow(doc.tokens) for doc in documents]
    counts = matutils.corpus2dense(bows, len(dictionary), num_docs=len(documents), dtype=np.int64)
    matrix = TermDocumentMatrix(counts, [doc.id for doc in documents], dictionary)
    doc_frequency = dictionary.dfs_vector()
    doc_frequency.flags.writeable = False

    logger.info(
        "built %s with %i non-zero entries (%i corpus positions)",
        matrix, dictionary.num_nnz, dictionary.num_pos,
    )
    return matrix, doc_frequency, dictionary


def query_vector(tokens, dictionary):
    """Count `tokens` over the vocabulary of `dictionary`.

    Parameters
    ----------
    tokens : iterable of str
        Query tokens, tokenized the same way as the corpus documents.
    dictionary : :class:`~vsmlsa.corpora.dictionary.Dictionary`
        Vocabulary of the corpus.

    Returns
    -------
    (numpy.ndarray, dict of (str, int))
        Dense count vector of length `len(dictionary)`, and the tokens missing from the vocabulary
        with their counts. Missing tokens contribute nothing to the vector.

    """
    bow, unknown = dictionary.doc2bow(tokens, return_missing=True)
    return matutils.sparse2full(bow, len(dictionary), dtype=np.int64), unknown

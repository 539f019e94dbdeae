#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Basic interfaces used across the whole package.

The interfaces are realized as abstract base classes. This means some functionality is already
provided in the interface itself, and subclasses should inherit from these interfaces
and implement the missing methods.

"""

import logging

import numpy as np

from vsmlsa import utils, matutils


logger = logging.getLogger(__name__)

SIMILARITY_DECIMALS = 12  # precision at which two similarities are considered equal when ranking


class TransformationABC(utils.SaveLoad):
    """Transformation interface.

    A 'transformation' is any object which accepts a document via the `__getitem__` (notation `[]`)
    and returns its representation in another vector space:

    .. sourcecode:: pycon

        >>> from vsmlsa.models import TfidfModel
        >>> from vsmlsa.test.utils import common_matrix
        >>>
        >>> model = TfidfModel(common_matrix)
        >>> weighted = model[["graph", "minors"]]  # weight one query
        >>> weighted_docs = model[common_matrix]  # weight every document of the matrix

    """
    def __getitem__(self, vec):
        """Transform a single document, or a whole term-document matrix, from one vector space into another.

        Parameters
        ----------
        vec : {list of str, numpy.ndarray, :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`}
            Query tokens, dense count vector, or a whole matrix.

        """
        raise NotImplementedError('cannot instantiate abstract base class')


class SimilarityABC(utils.SaveLoad):
    """Interface for similarity search over a fixed collection of documents.

    For each similarity search, the input is a query vector, and the output are the similarities
    to the individual indexed documents.

    Subclasses set `self.doc_ids`, `self.num_best` and `self.normalize`, and implement
    :meth:`get_similarities`.

    """
    def __init__(self, documents):
        """

        Parameters
        ----------
        documents : {dict of (object, numpy.ndarray), iterable of (object, numpy.ndarray)}
            Document vectors keyed by document id.

        """
        raise NotImplementedError("cannot instantiate Abstract Base Class")

    def get_similarities(self, query):
        """Get similarities of the given query vector(s) against this index.

        Parameters
        ----------
        query : numpy.ndarray
            One query vector, or a 2D array with one query per row.

        """
        raise NotImplementedError("cannot instantiate Abstract Base Class")

    def __getitem__(self, query):
        """Get similarities of the given query against this index.

        Uses :meth:`~vsmlsa.interfaces.SimilarityABC.get_similarities` internally.

        Parameters
        ----------
        query : numpy.ndarray
            One query vector, or a 2D array with one query per row.

        Returns
        -------
        {numpy.ndarray, list of (object, float)}
            One similarity per indexed document, in index order; or, if `num_best` is set, the `num_best`
            most similar `(doc_id, similarity)` pairs of a single query.

        """
        query = np.asarray(query, dtype=float)
        if self.normalize:
            if query.ndim == 2:
                query = np.vstack([matutils.unitvec(v) for v in query]) if len(query) else query
            else:
                query = matutils.unitvec(query)
        result = self.get_similarities(query)

        if self.num_best is None:
            return result
        if result.ndim == 2:
            return [self._ranked(sims, self.num_best) for sims in result]
        return self._ranked(result, self.num_best)

    def _ranked(self, sims, topn=None):
        """Pair `sims` with document ids, most similar first; equal scores keep index order.

        Scores are compared after rounding to `SIMILARITY_DECIMALS` decimals, so cosines that only differ
        by floating point error (a document and a scaled copy of it) count as ties.

        """
        best = matutils.argsort(np.round(sims, SIMILARITY_DECIMALS), topn=topn, reverse=True)
        return [(self.doc_ids[docno], float(sims[docno])) for docno in best]

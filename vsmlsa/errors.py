#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Exceptions raised on invalid input to the term-document, weighting, ranking and SVD routines.

All of them subclass :class:`ValueError`, so code that already guards calls with ``except ValueError``
keeps working. Each exception carries the offending parameter as an attribute.

"""


class EmptyCorpusError(ValueError):
    """No documents were supplied.

    Attributes
    ----------
    num_docs : int
        Number of documents that was supplied (always less than 1).

    """
    def __init__(self, num_docs=0, msg=None):
        self.num_docs = num_docs
        if msg is None:
            msg = "cannot process an empty corpus (got %s documents, need at least 1)" % num_docs
        super(EmptyCorpusError, self).__init__(msg)


class InvalidRankError(ValueError):
    """Requested SVD rank `k` lies outside `[1, min(num_terms, num_docs)]`.

    Attributes
    ----------
    rank : object
        The requested rank.
    max_rank : int
        Largest rank allowed for the matrix, `min(num_terms, num_docs)`.

    """
    def __init__(self, rank, max_rank):
        self.rank = rank
        self.max_rank = max_rank
        super(InvalidRankError, self).__init__(
            "invalid rank %r: expected an integer in [1, %i]" % (rank, max_rank)
        )


class DimensionMismatchError(ValueError):
    """A vector's length differs from the vocabulary size it is used against.

    Attributes
    ----------
    expected : int
        Required dimensionality (vocabulary size).
    got : int
        Actual dimensionality of the offending vector.

    """
    def __init__(self, expected, got, name='vector'):
        self.expected = expected
        self.got = got
        super(DimensionMismatchError, self).__init__(
            "%s has %i dimensions, expected %i (one per vocabulary token)" % (name, got, expected)
        )

#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""This module implements the concept of a Dictionary -- a mapping between words and their integer ids.

Ids double as the row indexes of the term-document matrix. They are assigned once, after the whole corpus
has been scanned: most widespread tokens (highest document frequency) first, ties broken alphabetically.

"""

from collections import Counter
from collections.abc import Mapping
import itertools
import logging

import numpy as np

from vsmlsa import utils


logger = logging.getLogger(__name__)


def _as_tokens(document, caller):
    if isinstance(document, str):
        raise TypeError("%s expects an array of unicode tokens on input, not a single string" % caller)
    return [w if isinstance(w, str) else str(w, 'utf-8') for w in document]


class Dictionary(utils.SaveLoad, Mapping):
    """Dictionary encapsulates the mapping between normalized words and their integer ids.

    The mapping is fixed at construction time; there is no way to add documents afterwards.

    Attributes
    ----------
    token2id : dict of (str, int)
        token -> token_id. I.e. the reverse mapping to `self[token_id]`.
    cfs : dict of (int, int)
        Collection frequencies: token_id -> how many instances of this token are contained in the documents.
    dfs : dict of (int, int)
        Document frequencies: token_id -> how many documents contain this token.
    num_docs : int
        Number of documents processed.
    num_pos : int
        Total number of corpus positions (number of processed words).
    num_nnz : int
        Total number of non-zeroes in the BOW matrix (sum of the number of unique
        words per document over the entire corpus).

    """
    def __init__(self, documents=None):
        """

        Parameters
        ----------
        documents : iterable of iterable of str, optional
            Documents used to build the mapping and collect corpus statistics.

        Examples
        --------
        .. sourcecode:: pycon

            >>> from vsmlsa.corpora import Dictionary
            >>>
            >>> dct = Dictionary([["gold", "silver", "truck"], ["gold", "truck"]])
            >>> dct.token2id
            {'gold': 0, 'truck': 1, 'silver': 2}
            >>> dct.doc2bow(["truck", "copper", "gold", "truck"])
            [(0, 1), (1, 2)]

        """
        self.token2id = {}
        self.id2token = {}
        self.cfs = {}
        self.dfs = {}

        self.num_docs = 0
        self.num_pos = 0
        self.num_nnz = 0

        if documents is not None:
            self._build(documents)

    def _build(self, documents):
        """Scan `documents` once, collect frequencies and assign the final token ids."""
        dfs, cfs = Counter(), Counter()
        for docno, document in enumerate(documents):
            if docno % 10000 == 0:
                logger.debug("adding document #%i to %s", docno, self)
            counter = Counter(_as_tokens(document, "Dictionary"))
            self.num_docs += 1
            self.num_pos += sum(counter.values())
            self.num_nnz += len(counter)
            cfs.update(counter)
            dfs.update(counter.keys())

        # most widespread tokens get the lowest ids; alphabetical order breaks ties deterministically
        ordered = sorted(dfs, key=lambda token: (-dfs[token], token))
        self.token2id = {token: tokenid for tokenid, token in enumerate(ordered)}
        self.id2token = utils.revdict(self.token2id)
        self.dfs = {self.token2id[token]: df for token, df in dfs.items()}
        self.cfs = {self.token2id[token]: cf for token, cf in cfs.items()}

        logger.info("built %s from %i documents (total %i corpus positions)", self, self.num_docs, self.num_pos)

    @staticmethod
    def from_documents(documents):
        """Create :class:`~vsmlsa.corpora.dictionary.Dictionary` from `documents`.

        Equivalent to `Dictionary(documents=documents)`.

        Parameters
        ----------
        documents : iterable of iterable of str
            Input corpus.

        Returns
        -------
        :class:`~vsmlsa.corpora.dictionary.Dictionary`
            Dictionary initialized from `documents`.

        """
        return Dictionary(documents=documents)

    def __getitem__(self, tokenid):
        """Get the string token that corresponds to `tokenid`.

        Raises
        ------
        KeyError
            If this Dictionary doesn't contain such `tokenid`.

        """
        return self.id2token[tokenid]  # will throw for non-existent ids

    def __iter__(self):
        """Iterate over all token ids, in ascending order."""
        return iter(range(len(self)))

    def keys(self):
        """Get all stored ids.

        Returns
        -------
        list of int
            List of all token ids.

        """
        return list(range(len(self)))

    def __len__(self):
        """Get number of stored tokens."""
        return len(self.token2id)

    def __str__(self):
        some_keys = list(itertools.islice(self.token2id.keys(), 5))
        return "%s<%i unique tokens: %s%s>" % (
            self.__class__.__name__, len(self), some_keys, '...' if len(self) > 5 else ''
        )

    def dfs_vector(self):
        """Get document frequencies as a vector aligned with the token ids.

        Returns
        -------
        numpy.ndarray
            Integer vector of length `len(self)`, entry `i` holds the document frequency of token id `i`.

        """
        result = np.zeros(len(self), dtype=np.int64)
        for tokenid, df in self.dfs.items():
            result[tokenid] = df
        return result

    def doc2bow(self, document, return_missing=False):
        """Convert `document` into the bag-of-words (BoW) format = list of `(token_id, token_count)` tuples.

        Parameters
        ----------
        document : list of str
            Input document.
        return_missing : bool, optional
            Return missing tokens (tokens present in `document` but not in self) with frequencies?

        Return
        ------
        list of (int, int)
            BoW representation of `document`, in ascending id order.
        list of (int, int), dict of (str, int)
            If `return_missing` is True, return BoW representation of `document` + dictionary with missing
            tokens and their frequencies.

        Examples
        --------
        .. sourcecode:: pycon

            >>> from vsmlsa.corpora import Dictionary
            >>> dct = Dictionary([["gold", "silver", "truck"], ["gold", "truck"]])
            >>> dct.doc2bow(["silver", "copper"], return_missing=True)
            ([(2, 1)], {'copper': 1})

        """
        counter = Counter(_as_tokens(document, "doc2bow"))

        token2id = self.token2id
        result = sorted((token2id[w], freq) for w, freq in counter.items() if w in token2id)
        if return_missing:
            missing = dict(sorted((w, freq) for w, freq in counter.items() if w not in token2id))
            return result, missing
        return result

    def doc2idx(self, document, unknown_word_index=-1):
        """Convert `document` (a list of words) into a list of indexes = list of `token_id`.

        Parameters
        ----------
        document : list of str
            Input document
        unknown_word_index : int, optional
            Index to use for words not in the dictionary.

        Returns
        -------
        list of int
            Token ids for tokens in `document`, in the same order.

        """
        return [self.token2id.get(word, unknown_word_index) for word in _as_tokens(document, "doc2idx")]

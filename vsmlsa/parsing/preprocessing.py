#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""This module contains methods for parsing and preprocessing strings.

:func:`~vsmlsa.parsing.preprocessing.tokenize` is the fixed rule set used for corpus documents and
queries alike: lowercase, then split into maximal runs of alphabetic characters. Stop words are kept.

Examples
--------
.. sourcecode:: pycon

    >>> from vsmlsa.parsing.preprocessing import tokenize, remove_stopword_tokens
    >>> tokenize("Delivery of silver arrived in a silver truck.")
    ['delivery', 'of', 'silver', 'arrived', 'in', 'a', 'silver', 'truck']
    >>> remove_stopword_tokens(tokenize("Shipment of gold damaged in a fire."))
    ['shipment', 'gold', 'damaged', 'fire']

"""

import re
import string

from vsmlsa import utils


STOPWORDS = frozenset([
    'a', 'about', 'above', 'after', 'again', 'against', 'all', 'am', 'an', 'and', 'any', 'are', 'as', 'at',
    'be', 'because', 'been', 'before', 'being', 'below', 'between', 'both', 'but', 'by', 'can', 'could',
    'did', 'do', 'does', 'doing', 'down', 'during', 'each', 'few', 'for', 'from', 'further', 'had', 'has',
    'have', 'having', 'he', 'her', 'here', 'hers', 'herself', 'him', 'himself', 'his', 'how', 'i', 'if',
    'in', 'into', 'is', 'it', 'its', 'itself', 'just', 'me', 'more', 'most', 'my', 'myself', 'no', 'nor',
    'not', 'now', 'of', 'off', 'on', 'once', 'only', 'or', 'other', 'our', 'ours', 'ourselves', 'out',
    'over', 'own', 'same', 'she', 'should', 'so', 'some', 'such', 'than', 'that', 'the', 'their', 'theirs',
    'them', 'themselves', 'then', 'there', 'these', 'they', 'this', 'those', 'through', 'to', 'too',
    'under', 'until', 'up', 'very', 'was', 'we', 'were', 'what', 'when', 'where', 'which', 'while', 'who',
    'whom', 'why', 'will', 'with', 'would', 'you', 'your', 'yours', 'yourself', 'yourselves',
])


RE_PUNCT = re.compile(r'([%s])+' % re.escape(string.punctuation), re.UNICODE)
RE_NUMERIC = re.compile(r"[0-9]+", re.UNICODE)
RE_WHITESPACE = re.compile(r"(\s)+", re.UNICODE)


def tokenize(text):
    """Split `text` into lowercase alphabetic tokens.

    Parameters
    ----------
    text : {str, bytes}
        Raw document or query text; bytes are decoded as utf8.

    Returns
    -------
    list of str
        Tokens in order of appearance. Digits and punctuation act as separators.

    """
    return list(utils.tokenize(text, lowercase=True))


def remove_stopword_tokens(tokens, stopwords=None):
    """Remove stopword tokens using list `stopwords`.

    Parameters
    ----------
    tokens : iterable of str
        Sequence of tokens.
    stopwords : iterable of str, optional
        Sequence of stopwords
        If None - using :const:`~vsmlsa.parsing.preprocessing.STOPWORDS`

    Returns
    -------
    list of str
        List of tokens without `stopwords`.

    """
    if stopwords is None:
        stopwords = STOPWORDS
    return [token for token in tokens if token not in stopwords]


def remove_stopwords(s, stopwords=None):
    """Remove :const:`~vsmlsa.parsing.preprocessing.STOPWORDS` from the whitespace-separated words of `s`.

    Matching is case sensitive.

    Parameters
    ----------
    s : str
    stopwords : iterable of str, optional
        Sequence of stopwords
        If None - using :const:`~vsmlsa.parsing.preprocessing.STOPWORDS`

    Returns
    -------
    str
        Unicode string without `stopwords`.

    """
    s = utils.to_unicode(s)
    return " ".join(remove_stopword_tokens(s.split(), stopwords))


def strip_punctuation(s):
    """Replace ASCII punctuation characters with spaces in `s` using :const:`~vsmlsa.parsing.preprocessing.RE_PUNCT`.

    Parameters
    ----------
    s : str

    Returns
    -------
    str
        Unicode string without punctuation characters.

    """
    s = utils.to_unicode(s)
    return RE_PUNCT.sub(" ", s)


def strip_numeric(s):
    """Remove digits from `s` using :const:`~vsmlsa.parsing.preprocessing.RE_NUMERIC`."""
    s = utils.to_unicode(s)
    return RE_NUMERIC.sub("", s)


def strip_multiple_whitespaces(s):
    """Collapse runs of whitespace characters (tabs, newlines...) in `s` into a single space."""
    s = utils.to_unicode(s)
    return RE_WHITESPACE.sub(" ", s)


def lower_to_unicode(text, encoding='utf8', errors='strict'):
    """Lowercase `text` and convert to unicode, using :func:`vsmlsa.utils.any2unicode`."""
    return utils.to_unicode(text.lower(), encoding, errors)


DEFAULT_FILTERS = [
    lower_to_unicode, strip_punctuation, strip_multiple_whitespaces, strip_numeric, remove_stopwords,
]


def preprocess_string(s, filters=DEFAULT_FILTERS):
    """Apply list of chosen filters to `s`, then split on whitespace.

    Default list of filters:

    * :func:`~vsmlsa.parsing.preprocessing.lower_to_unicode`,
    * :func:`~vsmlsa.parsing.preprocessing.strip_punctuation`,
    * :func:`~vsmlsa.parsing.preprocessing.strip_multiple_whitespaces`,
    * :func:`~vsmlsa.parsing.preprocessing.strip_numeric`,
    * :func:`~vsmlsa.parsing.preprocessing.remove_stopwords`.

    Parameters
    ----------
    s : str
    filters: list of functions, optional

    Returns
    -------
    list of str
        Processed strings (cleaned).

    Examples
    --------
    .. sourcecode:: pycon

        >>> from vsmlsa.parsing.preprocessing import preprocess_string
        >>> preprocess_string("Shipment of 3 gold bars, damaged in a fire!")
        ['shipment', 'gold', 'bars', 'damaged', 'fire']

    """
    s = utils.to_unicode(s)
    for f in filters:
        s = f(s)
    return s.split()

#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""This module contains various general utility functions."""

from functools import wraps
import logging
import pickle as _pickle
import re
import unicodedata

import numpy as np
from smart_open import open  # noqa:F401


logger = logging.getLogger(__name__)


PAT_ALPHABETIC = re.compile(r'(((?![\d])\w)+)', re.UNICODE)


def synchronous(tlockname):
    """A decorator to place an instance-based lock around a method.

    Parameters
    ----------
    tlockname : str
        Name of the instance attribute holding the lock (for example a :class:`threading.Lock`).

    """
    def _synched(func):
        @wraps(func)
        def _synchronizer(self, *args, **kwargs):
            tlock = getattr(self, tlockname)
            logger.debug("acquiring lock %r for %s", tlockname, func.__name__)

            with tlock:  # use lock as a context manager to perform safe acquire/release pairs
                logger.debug("acquired lock %r for %s", tlockname, func.__name__)
                result = func(self, *args, **kwargs)
                logger.debug("releasing lock %r for %s", tlockname, func.__name__)
                return result
        return _synchronizer
    return _synched


def any2unicode(text, encoding='utf8', errors='strict'):
    """Convert `text` (bytestring in given encoding or unicode) to unicode.

    Parameters
    ----------
    text : str
        Input text.
    errors : str, optional
        Error handling behaviour if `text` is a bytestring.
    encoding : str, optional
        Encoding of `text` if it is a bytestring.

    Returns
    -------
    str
        Unicode version of `text`.

    """
    if isinstance(text, str):
        return text
    return str(text, encoding, errors=errors)


to_unicode = any2unicode


def deaccent(text):
    """Remove accentuation from the given string.

    Parameters
    ----------
    text : str
        Input string.

    Returns
    -------
    str
        Unicode string without accentuation.

    Examples
    --------
    .. sourcecode:: pycon

        >>> from vsmlsa.utils import deaccent
        >>> deaccent("Šéf chomutovských komunistů dostal poštou bílý prášek")
        'Sef chomutovskych komunistu dostal postou bily prasek'

    """
    text = to_unicode(text)
    norm = unicodedata.normalize("NFD", text)
    result = ''.join(ch for ch in norm if unicodedata.category(ch) != 'Mn')
    return unicodedata.normalize("NFC", result)


def tokenize(text, lowercase=False, deacc=False, encoding='utf8', errors="strict"):
    """Iteratively yield tokens as unicode strings, optionally removing accent marks and lowercasing.

    Parameters
    ----------
    text : {str, bytes}
        Input string.
    lowercase : bool, optional
        Lowercase the input string?
    deacc : bool, optional
        Remove accentuation from string by :func:`~vsmlsa.utils.deaccent`?
    encoding : str, optional
        Encoding of input string, used as parameter for :func:`~vsmlsa.utils.to_unicode`.
    errors : str, optional
        Error handling behaviour, used as parameter for :func:`~vsmlsa.utils.to_unicode`.

    Yields
    ------
    str
        Contiguous sequences of alphabetic characters (no digits!), using :func:`~vsmlsa.utils.simple_tokenize`

    Examples
    --------
    .. sourcecode:: pycon

        >>> from vsmlsa.utils import tokenize
        >>> list(tokenize('Shipment of gold damaged in a fire.', lowercase=True))
        ['shipment', 'of', 'gold', 'damaged', 'in', 'a', 'fire']

    """
    text = to_unicode(text, encoding, errors=errors)
    if lowercase:
        text = text.lower()
    if deacc:
        text = deaccent(text)
    return simple_tokenize(text)


def simple_tokenize(text):
    """Tokenize input text using :const:`vsmlsa.utils.PAT_ALPHABETIC`.

    Parameters
    ----------
    text : str
        Input text.

    Yields
    ------
    str
        Tokens from `text`.

    """
    for match in PAT_ALPHABETIC.finditer(text):
        yield match.group()


def simple_preprocess(doc, deacc=False, min_len=2, max_len=15):
    """Convert a document into a list of lowercase tokens, dropping tokens that are too short or too long.

    Parameters
    ----------
    doc : str
        Input document.
    deacc : bool, optional
        Remove accentuation using :func:`~vsmlsa.utils.deaccent`?
    min_len : int, optional
        Minimal length of token in result (inclusive).
    max_len : int, optional
        Maximal length of token in result (inclusive).

    Returns
    -------
    list of str
        Tokens extracted from `doc`.

    """
    tokens = [
        token for token in tokenize(doc, lowercase=True, deacc=deacc, errors='ignore')
        if min_len <= len(token) <= max_len and not token.startswith('_')
    ]
    return tokens


class SaveLoad:
    """Objects of classes inheriting from this one can be pickled to disk, and loaded back.

    Files are opened through `smart_open <https://github.com/RaRe-Technologies/smart_open>`_, so `fname`
    may also point to a compressed (`.gz`, `.bz2`) or remote file.

    Warnings
    --------
    This uses pickle for de/serializing, so objects must not contain unpicklable attributes,
    such as lambda functions etc.

    """
    @classmethod
    def load(cls, fname, mmap=None):
        """Load a previously saved object (using :meth:`~vsmlsa.utils.SaveLoad.save`) from file.

        Parameters
        ----------
        fname : str
            Path to file that contains needed object.
        mmap : str, optional
            Memory-map option. Large arrays saved separately can be loaded via mmap (shared memory)
            using `mmap='r'`. Must be None for compressed files.

        Returns
        -------
        object
            Object loaded from `fname`.

        Raises
        ------
        TypeError
            If the file holds an object of a different class.

        """
        logger.info("loading %s object from %s", cls.__name__, fname)

        compress, subname = SaveLoad._adapt_by_suffix(fname)

        obj = unpickle(fname)
        if not isinstance(obj, cls):
            raise TypeError("%s holds a %s object, not %s" % (fname, type(obj).__name__, cls.__name__))
        obj._load_specials(fname, mmap, compress, subname)
        logger.info("loaded %s", fname)
        return obj

    def _load_specials(self, fname, mmap, compress, subname):
        """Load the numpy arrays that were stored into separate files by :meth:`_save_specials`."""
        for attrib in getattr(self, '__numpys', []):
            logger.info("loading %s from %s with mmap=%s", attrib, subname(fname, attrib), mmap)

            if compress:
                if mmap:
                    raise IOError(
                        'Cannot mmap compressed object %s in file %s. ' % (attrib, subname(fname, attrib))
                        + 'Use `load(fname, mmap=None)` or uncompress files manually.'
                    )
                with np.load(subname(fname, attrib)) as f:
                    val = f['val']
            else:
                val = np.load(subname(fname, attrib), mmap_mode=mmap)

            setattr(self, attrib, val)

    @staticmethod
    def _adapt_by_suffix(fname):
        """Get the compress setting and a filename formula for separately stored arrays.

        Parameters
        ----------
        fname : str
            Input filename.

        Returns
        -------
        (bool, function)
            First argument will be True if `fname` compressed.

        """
        compress, suffix = (True, 'npz') if fname.endswith('.gz') or fname.endswith('.bz2') else (False, 'npy')
        return compress, lambda *args: '.'.join(args + (suffix,))

    def _smart_save(self, fname, separately=None, sep_limit=10 * 1024**2, pickle_protocol=4):
        """Save the object to file, storing large numpy arrays into separate files.

        Parameters
        ----------
        fname : str
            Path to file.
        separately : list of str, optional
            Attributes to store in separate files. If None, any numpy array with at least
            `sep_limit` elements is stored separately.
        sep_limit : int, optional
            Size limit for automatic separation.
        pickle_protocol : int, optional
            Protocol number for pickle.

        """
        logger.info("saving %s object under %s, separately %s", self.__class__.__name__, fname, separately)

        compress, subname = SaveLoad._adapt_by_suffix(fname)

        asides = self._save_specials(fname, separately, sep_limit, compress, subname)
        try:
            pickle(self, fname, protocol=pickle_protocol)
        finally:
            # restore attribs handled specially
            for attrib, val in asides.items():
                setattr(self, attrib, val)
            self.__dict__.pop('__numpys', None)
        logger.info("saved %s", fname)

    def _save_specials(self, fname, separately, sep_limit, compress, subname):
        """Write out large numpy attributes and detach them from `self` before pickling.

        Returns
        -------
        dict of (str, numpy.ndarray)
            Attributes that were set aside; the caller must restore them.

        """
        if separately is None:
            separately = [
                attrib for attrib, val in self.__dict__.items()
                if isinstance(val, np.ndarray) and val.size >= sep_limit
            ]

        asides = {}
        try:
            for attrib in separately:
                val = getattr(self, attrib)
                if not isinstance(val, np.ndarray):
                    logger.info("not storing attribute %s separately (not a numpy array)", attrib)
                    continue
                logger.info("storing np array '%s' to %s", attrib, subname(fname, attrib))
                if compress:
                    np.savez_compressed(subname(fname, attrib), val=np.ascontiguousarray(val))
                else:
                    np.save(subname(fname, attrib), np.ascontiguousarray(val))
                asides[attrib] = val
                delattr(self, attrib)
            self.__dict__['__numpys'] = list(asides)
        except Exception:
            # restore the attributes if exception-interrupted
            for attrib, val in asides.items():
                setattr(self, attrib, val)
            raise
        return asides

    def save(self, fname_or_handle, separately=None, sep_limit=10 * 1024**2, pickle_protocol=4):
        """Save the object to file.

        Parameters
        ----------
        fname_or_handle : str or file-like
            Path to output file or already opened file-like object. If the object is a file handle,
            no special array handling will be performed, all attributes will be saved to the same file.
        separately : list of str or None, optional
            Attributes to store in separate files; None detects large numpy arrays automatically.
        sep_limit : int, optional
            Limit for automatic separation.
        pickle_protocol : int, optional
            Protocol number for pickle.

        See Also
        --------
        :meth:`~vsmlsa.utils.SaveLoad.load`

        """
        try:
            _pickle.dump(self, fname_or_handle, protocol=pickle_protocol)
            logger.info("saved %s object", self.__class__.__name__)
        except TypeError:  # `fname_or_handle` does not have write attribute
            self._smart_save(fname_or_handle, separately, sep_limit, pickle_protocol=pickle_protocol)


def pickle(obj, fname, protocol=4):
    """Pickle object `obj` to file `fname`, using smart_open so that `fname` can be on S3, HDFS, compressed etc.

    Parameters
    ----------
    obj : object
        Any python object.
    fname : str
        Path to pickle file.
    protocol : int, optional
        Pickle protocol number.

    """
    with open(fname, 'wb') as fout:  # 'b' for binary, needed on Windows
        _pickle.dump(obj, fout, protocol=protocol)


def unpickle(fname):
    """Load object from `fname`, using smart_open so that `fname` can be on S3, HDFS, compressed etc.

    Parameters
    ----------
    fname : str
        Path to pickle file.

    Returns
    -------
    object
        Python object loaded from `fname`.

    """
    with open(fname, 'rb') as f:
        return _pickle.load(f, encoding='latin1')


def revdict(d):
    """Reverse a dictionary mapping, i.e. `{1: 2, 3: 4}` -> `{2: 1, 4: 3}`.

    Parameters
    ----------
    d : dict
        Input dictionary.

    Returns
    -------
    dict
        Reversed dictionary mapping.

    Notes
    -----
    When two keys map to the same value, only one of them will be kept in the result (which one is kept is arbitrary).

    """
    return {v: k for (k, v) in dict(d).items()}

#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Math helper functions."""

import logging
import math

import numpy as np
import scipy.linalg

from vsmlsa.errors import DimensionMismatchError


logger = logging.getLogger(__name__)


def blas(name, ndarray):
    """Helper for getting the appropriate BLAS function, using :func:`scipy.linalg.get_blas_funcs`.

    Parameters
    ----------
    name : str
        Name(s) of BLAS functions, without the type prefix.
    ndarray : numpy.ndarray
        Arrays can be given to determine optimal prefix of BLAS routines.

    Returns
    -------
    object
        BLAS function for the needed operation on the given data type.

    """
    return scipy.linalg.get_blas_funcs((name,), (ndarray,))[0]


blas_nrm2 = blas('nrm2', np.array([], dtype=float))


def argsort(x, topn=None, reverse=False):
    """Efficiently calculate indices of the `topn` smallest elements in array `x`.

    Parameters
    ----------
    x : array_like
        Array to get the smallest element indices from.
    topn : int, optional
        Number of indices of the smallest (greatest) elements to be returned.
        If not given, indices of all elements will be returned in ascending (descending) order.
    reverse : bool, optional
        Return the `topn` greatest elements in descending order,
        instead of smallest elements in ascending order?

    Returns
    -------
    numpy.ndarray
        Array of `topn` indices that sort the array in the requested order.

    Notes
    -----
    Equal elements keep their original relative order (the sort is stable), also when `reverse` is set.

    """
    x = np.asarray(x)  # unify code path for when `x` is not a np array (list, tuple...)
    if topn is None:
        topn = x.size
    if topn <= 0:
        return np.array([], dtype=np.intp)
    if reverse:
        x = -x
    return np.argsort(x, kind='stable')[:topn]


def sparse2full(doc, length, dtype=np.float64):
    """Convert a document in bag-of-words format into a dense numpy array.

    Parameters
    ----------
    doc : list of (int, number)
        Document in BoW format.
    length : int
        Vector dimensionality, typically the vocabulary size.
    dtype : data-type, optional
        Data type of the output vector.

    Returns
    -------
    numpy.ndarray
        Dense numpy vector for `doc`.

    See Also
    --------
    :func:`~vsmlsa.matutils.full2sparse`
        Convert dense array to bag-of-words format.

    """
    result = np.zeros(length, dtype=dtype)  # fill with zeroes (default value)
    # convert indices to int as numpy no longer indexes by floats
    doc = dict((int(id_), val_) for (id_, val_) in doc)
    # overwrite some of the zeroes with explicit values
    result[list(doc)] = list(doc.values())
    return result


def full2sparse(vec, eps=1e-9):
    """Convert a dense numpy array into the bag-of-words format.

    Parameters
    ----------
    vec : numpy.ndarray
        Dense input vector.
    eps : float
        Feature weight threshold value. Features with `abs(weight) < eps` are considered sparse and
        won't be included in the BOW result.

    Returns
    -------
    list of (int, float)
        BoW format of `vec`, with near-zero values omitted (sparse vector).

    """
    vec = np.asarray(vec, dtype=float)
    nnz = np.nonzero(abs(vec) > eps)[0]
    return list(zip(nnz.tolist(), vec.take(nnz).tolist()))


def corpus2dense(corpus, num_terms, num_docs=None, dtype=np.float64):
    """Convert corpus into a dense numpy 2D array, with documents as columns.

    Parameters
    ----------
    corpus : iterable of iterable of (int, number)
        Input corpus in the bag-of-words format.
    num_terms : int
        Number of terms in the dictionary. Number of rows of the resulting matrix.
    num_docs : int, optional
        Number of documents in the corpus. If provided, a slightly more memory-efficient code path is taken.
    dtype : data-type, optional
        Data type of the output matrix.

    Returns
    -------
    numpy.ndarray
        Dense 2D array of shape `(num_terms, num_docs)`.

    """
    if num_docs is not None:
        # we know the number of documents => don't bother column_stacking
        docno, result = -1, np.empty((num_terms, num_docs), dtype=dtype)
        for docno, doc in enumerate(corpus):
            result[:, docno] = sparse2full(doc, num_terms, dtype=dtype)
        assert docno + 1 == num_docs
    else:
        columns = [sparse2full(doc, num_terms, dtype=dtype) for doc in corpus]
        if not columns:
            return np.zeros((num_terms, 0), dtype=dtype)
        result = np.column_stack(columns)
    return result.astype(dtype)


def veclen(vec):
    """Calculate L2 (euclidean) length of a dense vector.

    Parameters
    ----------
    vec : numpy.ndarray
        Input vector.

    Returns
    -------
    float
        Length of `vec`.

    """
    vec = np.asarray(vec, dtype=float)
    if vec.size == 0:
        return 0.0
    return float(blas_nrm2(vec))


def unitvec(vec, return_norm=False):
    """Scale a vector to unit L2 length.

    Parameters
    ----------
    vec : {numpy.ndarray, list of (int, float)}
        Input vector, dense or in bag-of-words format.
    return_norm : bool, optional
        Return the length of vector `vec`, in addition to the normalized vector itself?

    Returns
    -------
    {numpy.ndarray, list of (int, float)}
        Normalized vector in same format as `vec`.
    float
        Length of `vec` before normalization, if `return_norm` is set.

    Notes
    -----
    A zero vector is returned unchanged (as zeros, never NaN), with norm 0.0.

    """
    if isinstance(vec, np.ndarray):
        vec = vec.astype(float)
        length = veclen(vec)
        if length > 0.0:
            vec = vec / length
        if return_norm:
            return vec, length
        return vec

    vec = list(vec)
    if vec and not (isinstance(vec[0], (tuple, list)) and len(vec[0]) == 2):
        raise ValueError("unknown input type: expected a numpy array or a list of (int, float) pairs")
    length = math.sqrt(sum(val ** 2 for _, val in vec))
    if length > 0.0:
        vec = [(termid, val / length) for termid, val in vec]
    if return_norm:
        return vec, length
    return vec


def cossim(vec1, vec2):
    """Get cosine similarity between two dense vectors, computed directly as `(v1 . v2) / (|v1| * |v2|)`.

    Cosine similarity is a number between `<-1.0, 1.0>`, higher means more similar.

    Parameters
    ----------
    vec1 : numpy.ndarray
        First vector.
    vec2 : numpy.ndarray
        Second vector, of the same length as `vec1`.

    Returns
    -------
    float
        Cosine similarity between `vec1` and `vec2`; 0.0 if either vector has zero length.

    Raises
    ------
    DimensionMismatchError
        If the two vectors differ in length.

    """
    vec1, vec2 = np.asarray(vec1, dtype=float), np.asarray(vec2, dtype=float)
    if vec1.shape != vec2.shape:
        raise DimensionMismatchError(vec1.size, vec2.size)
    vec1len, vec2len = veclen(vec1), veclen(vec2)
    if vec1len == 0.0 or vec2len == 0.0:
        return 0.0
    return float(np.dot(vec1, vec2)) / (vec1len * vec2len)

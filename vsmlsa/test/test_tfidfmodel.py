#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Automated tests for inverse document frequency and tf-idf weighting.
"""

import logging
import math
import unittest

import numpy as np
from testfixtures import log_capture

from vsmlsa.errors import DimensionMismatchError, EmptyCorpusError
from vsmlsa.models import tfidfmodel
from vsmlsa.test.utils import (
    common_dictionary, common_matrix, get_tmpfile, shipment_dfs, shipment_dictionary, shipment_matrix,
)


LOG3 = math.log10(3)  # idf of a token in one of three documents
LOG15 = math.log10(1.5)  # idf of a token in two of three documents


class TestComputeIdf(unittest.TestCase):
    def test_shipment(self):
        idfs = tfidfmodel.compute_idf(shipment_dfs, 3)
        token2id = shipment_dictionary.token2id
        self.assertEqual(idfs[token2id['of']], 0.0)
        self.assertEqual(idfs[token2id['a']], 0.0)
        self.assertAlmostEqual(idfs[token2id['silver']], LOG3)
        self.assertAlmostEqual(idfs[token2id['gold']], LOG15)
        self.assertAlmostEqual(idfs[token2id['silver']], 0.4771, places=4)
        self.assertAlmostEqual(idfs[token2id['truck']], 0.1761, places=4)

    def test_zero_iff_everywhere(self):
        idfs = tfidfmodel.compute_idf(common_matrix.doc_frequencies(), common_matrix.num_docs)
        everywhere = common_matrix.doc_frequencies() == common_matrix.num_docs
        self.assertTrue(np.array_equal(idfs == 0.0, everywhere))
        self.assertTrue(np.all(idfs >= 0.0))

    def test_log_base(self):
        idfs = tfidfmodel.compute_idf([1, 2, 4], 4, log_base=2)
        self.assertTrue(np.allclose(idfs, [2.0, 1.0, 0.0]))
        idfs = tfidfmodel.compute_idf([1], 3, log_base=math.e)
        self.assertTrue(np.allclose(idfs, [math.log(3)]))

    def test_invalid_log_base(self):
        for log_base in (1, 1.0, 0, -10, True, 'ten'):
            with self.assertRaises(ValueError):
                tfidfmodel.compute_idf([1, 2], 2, log_base=log_base)

    def test_empty_corpus(self):
        with self.assertRaises(EmptyCorpusError):
            tfidfmodel.compute_idf([], 0)

    def test_df_out_of_range(self):
        self.assertRaises(ValueError, tfidfmodel.compute_idf, [0, 1], 3)
        self.assertRaises(ValueError, tfidfmodel.compute_idf, [1, 4], 3)

    def test_df2idf(self):
        self.assertAlmostEqual(tfidfmodel.df2idf(1, 3), LOG3)
        self.assertAlmostEqual(tfidfmodel.df2idf(2, 8, log_base=2.0, add=1.0), 3.0)


class TestWeight(unittest.TestCase):
    def setUp(self):
        self.idfs = tfidfmodel.compute_idf(shipment_dfs, 3)
        self.token2id = shipment_dictionary.token2id

    def test_matrix(self):
        weighted = tfidfmodel.weight(shipment_matrix, self.idfs)
        self.assertEqual(list(weighted), ['d1', 'd2', 'd3'])
        # "silver" occurs twice in d2
        self.assertAlmostEqual(weighted['d2'][self.token2id['silver']], 2 * LOG3)
        self.assertEqual(weighted['d1'][self.token2id['of']], 0.0)
        self.assertEqual(weighted['d1'][self.token2id['truck']], 0.0)

    def test_vector_and_array(self):
        counts = shipment_matrix.counts
        weighted = tfidfmodel.weight(counts, self.idfs)
        self.assertEqual(weighted.shape, counts.shape)
        self.assertTrue(np.allclose(weighted[:, 1], tfidfmodel.weight(counts[:, 1], self.idfs)))

    def test_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatchError) as ctx:
            tfidfmodel.weight(np.ones(5), self.idfs)
        self.assertEqual(ctx.exception.expected, 11)
        self.assertEqual(ctx.exception.got, 5)
        self.assertRaises(DimensionMismatchError, tfidfmodel.weight, common_matrix, self.idfs)


class TestTfidfModel(unittest.TestCase):
    def test_init(self):
        model1 = tfidfmodel.TfidfModel(common_matrix)
        self.assertTrue(np.array_equal(model1.dfs, common_dictionary.dfs_vector()))
        self.assertEqual(model1.num_docs, 9)
        self.assertEqual(model1.num_nnz, 28)

        # create the transformation model by directly supplying the dictionary
        model2 = tfidfmodel.TfidfModel(dictionary=common_dictionary)
        self.assertTrue(np.allclose(model1.idfs, model2.idfs))

    def test_uninitialized(self):
        model = tfidfmodel.TfidfModel()
        self.assertRaises(ValueError, model.__getitem__, ['human'])
        model.initialize(common_matrix)
        self.assertEqual(len(model[['human']]), len(common_dictionary))

    def test_transform_tokens(self):
        model = tfidfmodel.TfidfModel(shipment_matrix)
        query = model[['gold', 'silver', 'truck']]
        expected = np.zeros(len(shipment_dictionary))
        expected[shipment_dictionary.token2id['gold']] = LOG15
        expected[shipment_dictionary.token2id['silver']] = LOG3
        expected[shipment_dictionary.token2id['truck']] = LOG15
        self.assertTrue(np.allclose(query, expected))

    def test_transform_matrix(self):
        model = tfidfmodel.TfidfModel(shipment_matrix)
        weighted = model[shipment_matrix]
        idfs = tfidfmodel.compute_idf(shipment_dfs, 3)
        for doc_id, vector in tfidfmodel.weight(shipment_matrix, idfs).items():
            self.assertTrue(np.allclose(weighted[doc_id], vector))

    def test_normalize(self):
        model = tfidfmodel.TfidfModel(shipment_matrix, normalize=True)
        query = model[['gold', 'silver', 'truck']]
        self.assertAlmostEqual(np.linalg.norm(query), 1.0)
        for vector in model[shipment_matrix].values():
            self.assertAlmostEqual(np.linalg.norm(vector), 1.0)
        weighted = model[np.asarray(shipment_matrix.counts)]
        self.assertTrue(np.allclose(np.linalg.norm(weighted, axis=0), 1.0))
        # a query made only of zero-idf tokens stays zero
        self.assertFalse(model[['of', 'a']].any())

    @log_capture()
    def test_unknown_terms(self, loglines):
        model = tfidfmodel.TfidfModel(shipment_matrix)
        query, unknown = model.query(['gold', 'copper', 'copper'])
        self.assertEqual(unknown, {'copper': 2})
        self.assertAlmostEqual(query.sum(), LOG15)
        self.assertTrue("ignoring 1 query terms missing from the vocabulary: ['copper']" in str(loglines))

        # unknown terms are not remembered between queries
        _, unknown = model.query(['gold'])
        self.assertEqual(unknown, {})

    def test_persistence(self):
        fname = get_tmpfile('vsmlsa_models.tst')
        model = tfidfmodel.TfidfModel(common_matrix, normalize=True)
        model.save(fname)
        model2 = tfidfmodel.TfidfModel.load(fname)
        self.assertTrue(np.allclose(model.idfs, model2.idfs))
        tstvec = ['human', 'graph', 'graph']
        self.assertTrue(np.allclose(model[tstvec], model2[tstvec]))
        self.assertTrue(np.allclose(model[[]], model2[[]]))  # try projecting an empty vector

    def test_persistence_compressed(self):
        fname = get_tmpfile('vsmlsa_models.tst.gz')
        model = tfidfmodel.TfidfModel(common_matrix)
        model.save(fname)
        model2 = tfidfmodel.TfidfModel.load(fname, mmap=None)
        self.assertTrue(np.allclose(model.idfs, model2.idfs))


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main()

#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Automated tests for similarity algorithms (the similarities package).
"""

import logging
import unittest

import numpy
from testfixtures import log_capture

from vsmlsa import matutils, similarities
from vsmlsa.errors import DimensionMismatchError
from vsmlsa.models import TfidfModel
from vsmlsa.test.utils import common_matrix, get_tmpfile, shipment_matrix


def count_vectors(matrix):
    return {doc_id: numpy.asarray(matrix.column(doc_id), dtype=float) for doc_id in matrix.doc_ids}


class TestMatrixSimilarity(unittest.TestCase):
    def setUp(self):
        self.documents = count_vectors(common_matrix)

    def test_full(self):
        index = similarities.MatrixSimilarity(self.documents)
        self.assertEqual(len(index), 9)
        self.assertEqual(index.num_features, 12)
        self.assertTrue(numpy.allclose(numpy.linalg.norm(index.index, axis=1), 1.0))

        sims = index[self.documents['c1']]
        self.assertEqual(sims.shape, (9,))
        self.assertAlmostEqual(sims[0], 1.0)
        self.assertAlmostEqual(sims[2], 0.28867513)
        self.assertAlmostEqual(sims[3], 0.23570226)
        self.assertAlmostEqual(sims[1], 0.23570226)
        self.assertTrue(numpy.allclose(sims[5:], 0.0))

    def test_num_best(self):
        index = similarities.MatrixSimilarity(self.documents, num_best=2)
        sims = index[self.documents['c1']]
        self.assertEqual([doc_id for doc_id, _ in sims], ['c1', 'c3'])
        self.assertAlmostEqual(sims[1][1], 0.28867513)

    def test_chunking(self):
        index = similarities.MatrixSimilarity(self.documents)
        query = numpy.vstack([self.documents['c1'], 3 * self.documents['m2']])
        sims = index[query]
        self.assertEqual(sims.shape, (2, 9))
        self.assertTrue(numpy.allclose(sims[0], index[self.documents['c1']]))
        self.assertAlmostEqual(sims[1][6], 1.0)

        index.num_best = 1
        sims = index[query]
        self.assertEqual([best[0][0] for best in sims], ['c1', 'm2'])

    def test_agrees_with_cossim(self):
        tfidf = TfidfModel(common_matrix)
        vectors = tfidf[common_matrix]
        index = similarities.MatrixSimilarity(vectors)
        query = tfidf[['human', 'computer', 'interaction', 'survey']]
        for doc_id, sim in index.rank(query):
            self.assertTrue(numpy.isclose(sim, matutils.cossim(query, vectors[doc_id]), rtol=1e-6, atol=1e-12))

    def test_pairs_input(self):
        index = similarities.MatrixSimilarity([('a', [1.0, 0.0]), ('b', [0.0, 2.0])])
        self.assertEqual(index.doc_ids, ['a', 'b'])
        self.assertEqual(index.rank([0.0, 1.0]), [('b', 1.0), ('a', 0.0)])

    def test_empty(self):
        self.assertRaises(ValueError, similarities.MatrixSimilarity, [])
        index = similarities.MatrixSimilarity([], num_features=3)
        self.assertEqual(index.rank([1.0, 0.0, 0.0]), [])

    def test_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatchError):
            similarities.MatrixSimilarity([('a', [1.0, 0.0]), ('b', [1.0, 0.0, 0.0])])
        index = similarities.MatrixSimilarity(self.documents)
        with self.assertRaises(DimensionMismatchError) as ctx:
            index.rank(numpy.ones(3))
        self.assertEqual(ctx.exception.expected, 12)
        self.assertEqual(ctx.exception.got, 3)

    def test_persistence(self):
        fname = get_tmpfile('vsmlsa_similarities.tst')
        index = similarities.MatrixSimilarity(self.documents)
        index.save(fname)
        index2 = similarities.MatrixSimilarity.load(fname)
        self.assertTrue(numpy.allclose(index.index, index2.index))
        self.assertEqual(index.doc_ids, index2.doc_ids)


class TestRank(unittest.TestCase):
    def test_shipment(self):
        tfidf = TfidfModel(shipment_matrix)
        ranking = similarities.rank(tfidf[['gold', 'silver', 'truck']], tfidf[shipment_matrix])
        self.assertEqual([doc_id for doc_id, _ in ranking], ['d2', 'd3', 'd1'])
        self.assertTrue(numpy.allclose([sim for _, sim in ranking], [0.8248, 0.3272, 0.0801], atol=1e-3))

    def test_ties_keep_corpus_order(self):
        documents = [('x', [1.0, 0.0]), ('y', [0.0, 1.0]), ('z', [1.0, 0.0]), ('w', [2.0, 0.0])]
        ranking = similarities.rank([1.0, 0.0], documents)
        self.assertEqual([doc_id for doc_id, _ in ranking], ['x', 'z', 'w', 'y'])

    def test_scaled_copy_ties_keep_corpus_order(self):
        tfidf = TfidfModel(common_matrix)
        vectors = tfidf[common_matrix]
        for doc_id, vector in vectors.items():
            documents = [('a', vector), ('b', 3 * vector)]
            for query in vectors.values():
                ranking = similarities.rank(query, documents)
                self.assertEqual([name for name, _ in ranking], ['a', 'b'], doc_id)
                self.assertTrue(numpy.isclose(ranking[0][1], ranking[1][1]))

    def test_scale_invariance(self):
        tfidf = TfidfModel(common_matrix)
        vectors = tfidf[common_matrix]
        query = tfidf[['graph', 'minors', 'system']]
        ranking = similarities.rank(query, vectors)
        scaled = similarities.rank(query, {doc_id: 7.5 * vector for doc_id, vector in vectors.items()})
        self.assertEqual([doc_id for doc_id, _ in ranking], [doc_id for doc_id, _ in scaled])
        self.assertTrue(numpy.allclose([sim for _, sim in ranking], [sim for _, sim in scaled]))

    @log_capture()
    def test_zero_query(self, loglines):
        ranking = similarities.rank(numpy.zeros(2), [('a', [1.0, 0.0]), ('b', [0.0, 1.0])])
        self.assertEqual(ranking, [('a', 0.0), ('b', 0.0)])
        self.assertTrue("query vector has zero length" in str(loglines))

    def test_zero_document(self):
        ranking = similarities.rank([1.0, 1.0], [('a', [0.0, 0.0]), ('b', [0.0, 1.0])])
        self.assertEqual(ranking[0][0], 'b')
        self.assertEqual(ranking[1], ('a', 0.0))
        self.assertFalse(any(numpy.isnan(sim) for _, sim in ranking))

    def test_num_best(self):
        tfidf = TfidfModel(shipment_matrix)
        ranking = similarities.rank(tfidf[['gold', 'silver', 'truck']], tfidf[shipment_matrix], num_best=1)
        self.assertEqual(len(ranking), 1)
        self.assertEqual(ranking[0][0], 'd2')

    def test_dimension_mismatch(self):
        self.assertRaises(DimensionMismatchError, similarities.rank, [1.0, 0.0, 0.0], [('a', [1.0, 0.0])])


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main()

#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Automated tests for reading plain-text corpora.
"""

import logging
import unittest

from testfixtures import log_capture

from vsmlsa import utils
from vsmlsa.corpora import Document, build_term_document_matrix, documents_from_texts, read_documents
from vsmlsa.test.utils import shipment_documents, shipment_texts, temporary_file


class TestReadDocuments(unittest.TestCase):
    def write(self, fname, lines):
        with utils.open(fname, 'w', encoding='utf8') as fout:
            for line in lines:
                fout.write(line + '\n')

    def test_numbered(self):
        with temporary_file('corpus.txt') as fname:
            self.write(fname, shipment_texts[:2] + [''] + shipment_texts[2:])
            documents = read_documents(fname)
        self.assertEqual(documents, shipment_documents)
        self.assertEqual([doc.id for doc in documents], ['d1', 'd2', 'd3'])

    def test_explicit_ids(self):
        with temporary_file('corpus.txt.gz') as fname:
            self.write(fname, ['first\tGold truck', 'Silver truck', 'x\t'])
            documents = read_documents(fname)
        self.assertEqual(documents[0], Document('first', ['gold', 'truck']))
        self.assertEqual(documents[1], Document('d2', ['silver', 'truck']))
        self.assertEqual(documents[2], Document('x', []))

    @log_capture()
    def test_generated_ids_skip_explicit_ones(self, loglines):
        with temporary_file('corpus.txt') as fname:
            self.write(fname, ['d2\tGold truck', 'Silver truck', 'Gold silver', 'Truck', 'd1\tSilver'])
            documents = read_documents(fname)
        self.assertEqual([doc.id for doc in documents], ['d2', 'd3', 'd4', 'd5', 'd1'])
        self.assertEqual(documents[1], Document('d3', ['silver', 'truck']))
        self.assertTrue("id d2 of document #2 is already in use" in str(loglines))
        # the ids are unique, so the documents build into a matrix
        matrix, _, _ = build_term_document_matrix(documents)
        self.assertEqual(matrix.doc_ids, ('d2', 'd3', 'd4', 'd5', 'd1'))

    def test_custom_tokenizer(self):
        documents = documents_from_texts([('a', 'Gold Truck')], tokenizer=str.split)
        self.assertEqual(documents, [Document('a', ['Gold', 'Truck'])])


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main()

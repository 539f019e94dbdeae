#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Automated tests for the parsing module.
"""

import logging
import unittest

from vsmlsa import utils
from vsmlsa.parsing.preprocessing import (
    STOPWORDS,
    preprocess_string,
    remove_stopword_tokens,
    remove_stopwords,
    strip_multiple_whitespaces,
    strip_numeric,
    strip_punctuation,
    tokenize,
)


class TestPreprocessing(unittest.TestCase):
    def test_tokenize(self):
        self.assertEqual(
            tokenize("Shipment of gold damaged in a fire."),
            ['shipment', 'of', 'gold', 'damaged', 'in', 'a', 'fire'],
        )
        # digits and punctuation separate tokens
        self.assertEqual(tokenize("R2D2, meet C-3PO"), ['r', 'd', 'meet', 'c', 'po'])
        self.assertEqual(tokenize(u"Žluťoučký kůň".encode('utf8')), [u'žluťoučký', u'kůň'])
        self.assertEqual(tokenize(""), [])

    def test_utils_tokenize(self):
        self.assertEqual(list(utils.tokenize("Gold Truck")), ['Gold', 'Truck'])
        self.assertEqual(list(utils.tokenize(u"Žluťoučký kůň", lowercase=True, deacc=True)), ['zlutoucky', 'kun'])
        self.assertEqual(utils.simple_preprocess("A gold truck, extraordinarilyverylong"), ['gold', 'truck'])

    def test_remove_stopword_tokens(self):
        tokens = tokenize("Delivery of silver arrived in a silver truck.")
        self.assertEqual(remove_stopword_tokens(tokens), ['delivery', 'silver', 'arrived', 'silver', 'truck'])
        self.assertEqual(
            remove_stopword_tokens(tokens, stopwords=['silver']), ['delivery', 'of', 'arrived', 'in', 'a', 'truck']
        )
        self.assertTrue('the' in STOPWORDS)

    def test_remove_stopwords(self):
        self.assertEqual(remove_stopwords("the gold truck"), "gold truck")

    def test_strip_numeric(self):
        self.assertEqual(strip_numeric("salut les amis du 59"), "salut les amis du ")

    def test_strip_punctuation(self):
        self.assertEqual(strip_punctuation("gold, silver; truck!"), "gold  silver  truck ")

    def test_strip_multiple_whitespaces(self):
        self.assertEqual(strip_multiple_whitespaces("gold \t\n  truck"), "gold truck")

    def test_preprocess_string(self):
        self.assertEqual(
            preprocess_string("Shipment of 3 gold bars, damaged in a fire!"),
            ['shipment', 'gold', 'bars', 'damaged', 'fire'],
        )
        self.assertEqual(preprocess_string("Gold  TRUCK", filters=[str.lower]), ['gold', 'truck'])


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main()

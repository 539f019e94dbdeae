#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
USAGE: %(program)s -i CORPUS -q QUERY [--lsi K] [--log-base B] [--topn N]

Rank the documents of a plain-text corpus by similarity to a query and print one `doc_id<TAB>score`
line per document, most similar first.

The corpus holds one document per line, either as plain text or as `doc_id<TAB>text`; documents
without an explicit id are numbered d1, d2, ... Compressed (.gz, .bz2) and remote (s3://, http://)
files are read transparently.

By default documents are ranked by cosine similarity of their TF-IDF vectors. With `--lsi K`,
the raw term-document counts are reduced to K latent dimensions first and documents are ranked
by cosine similarity in that latent space.

Example:
    python -m vsmlsa.scripts.rank_documents -i corpus.txt -q "gold silver truck"

"""

import argparse
import logging
import os.path
import sys

from vsmlsa.corpora.textcorpus import read_documents
from vsmlsa.models.tfidfmodel import DEFAULT_LOG_BASE
from vsmlsa.parsing.preprocessing import tokenize
from vsmlsa.session import CorpusSession


logger = logging.getLogger(__name__)


def rank_documents(input_file, query, num_topics=None, log_base=DEFAULT_LOG_BASE, topn=None):
    """Rank documents of `input_file` against the raw `query` text.

    Parameters
    ----------
    input_file : str
        Path or URI of the one-document-per-line corpus.
    query : str
        Raw query text, tokenized like the documents.
    num_topics : int, optional
        Rank in an LSI space of this many dimensions instead of the TF-IDF space.
    log_base : float, optional
        Base of the IDF logarithm.
    topn : int, optional
        Return only this many documents.

    Returns
    -------
    list of (str, float)
        `(doc_id, score)` pairs, most similar first.

    """
    session = CorpusSession(read_documents(input_file), log_base=log_base)
    query_tokens = tokenize(query)
    if num_topics is None:
        return session.rank(query_tokens, num_best=topn)
    return session.lsi(num_topics).rank(query_tokens, num_best=topn)


def main(argv=None):
    program = os.path.basename(sys.argv[0])
    parser = argparse.ArgumentParser(
        prog=program, description=__doc__ % {'program': program},
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-i", "--input", required=True, help="Path to the corpus, one document per line")
    parser.add_argument("-q", "--query", required=True, help="Query text")
    parser.add_argument("--lsi", type=int, default=None, metavar="K", help="Rank in a K-dimensional LSI space")
    parser.add_argument(
        "--log-base", type=float, default=DEFAULT_LOG_BASE, metavar="B",
        help="Base of the IDF logarithm (default: %(default)s)",
    )
    parser.add_argument("--topn", type=int, default=None, metavar="N", help="Print only the N best documents")
    args = parser.parse_args(argv)

    logger.info("running %s", ' '.join(sys.argv))
    ranking = rank_documents(args.input, args.query, num_topics=args.lsi, log_base=args.log_base, topn=args.topn)
    for doc_id, score in ranking:
        print("%s\t%.6f" % (doc_id, score))
    logger.info("finished running %s", program)
    return ranking


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.INFO)
    main()

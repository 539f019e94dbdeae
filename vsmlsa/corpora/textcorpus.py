#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Turn raw texts into tokenized :class:`~vsmlsa.corpora.termdoc.Document` objects.

The input file format is one document per line, either plain text or `doc_id<TAB>text`.
Files are opened with :func:`vsmlsa.utils.open` (smart_open), so compressed and remote paths work too.

"""

import logging

from vsmlsa import utils
from vsmlsa.corpora.termdoc import Document
from vsmlsa.parsing.preprocessing import tokenize


logger = logging.getLogger(__name__)


def documents_from_texts(texts, tokenizer=None):
    """Tokenize `(doc_id, text)` pairs.

    Parameters
    ----------
    texts : iterable of (object, str)
        Document ids and their raw texts.
    tokenizer : callable, optional
        Function mapping a text to a sequence of tokens.
        Defaults to :func:`vsmlsa.parsing.preprocessing.tokenize`.

    Returns
    -------
    list of :class:`~vsmlsa.corpora.termdoc.Document`

    """
    if tokenizer is None:
        tokenizer = tokenize
    return [Document(doc_id, tokenizer(text)) for doc_id, text in texts]


def read_documents(fname, tokenizer=None, encoding='utf8'):
    """Read and tokenize a one-document-per-line text file.

    Lines of the form `doc_id<TAB>text` use `doc_id` as the identifier, other lines are numbered
    `d1`, `d2`, ... by their position among non-blank lines. A generated id that is already used
    elsewhere in the file is skipped in favour of the next free number. Blank lines are skipped.

    Parameters
    ----------
    fname : str
        Path or URI of the input file.
    tokenizer : callable, optional
        Function mapping a text to a sequence of tokens.
    encoding : str, optional
        Text encoding of the file.

    Returns
    -------
    list of :class:`~vsmlsa.corpora.termdoc.Document`

    """
    lines = []
    with utils.open(fname, 'r', encoding=encoding) as fin:
        for line in fin:
            line = line.rstrip('\r\n')
            if not line.strip():
                continue
            if '\t' in line:
                doc_id, text = line.split('\t', 1)
                lines.append((doc_id.strip(), text))
            else:
                lines.append((None, line))

    taken = {doc_id for doc_id, _ in lines if doc_id is not None}
    texts = []
    for lineno, (doc_id, text) in enumerate(lines, start=1):
        if doc_id is None:
            docno = lineno
            while 'd%i' % docno in taken:
                docno += 1
            doc_id = 'd%i' % docno
            if docno != lineno:
                logger.warning("id d%i of document #%i is already in use, numbering it %s", lineno, lineno, doc_id)
            taken.add(doc_id)
        texts.append((doc_id, text))
    logger.info("read %i documents from %s", len(texts), fname)
    return documents_from_texts(texts, tokenizer=tokenizer)

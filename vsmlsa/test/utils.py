#!/usr/bin/env python
# encoding: utf-8

"""Module contains common utilities used in automated code tests for vsmlsa modules.

Attributes:
-----------
module_path : str
    Full path to this module directory.
common_texts : list of list of str
    Toy dataset (the "Deerwester" titles: c1-c5 on human-computer interaction, m1-m4 on graph theory).
common_documents : list of :class:`~vsmlsa.corpora.termdoc.Document`
    `common_texts` with ids c1..c5, m1..m4.
common_matrix : :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`
    Term-document counts of the toy dataset.
shipment_texts : list of str
    Raw texts of the three-document "shipment" example.
shipment_documents : list of :class:`~vsmlsa.corpora.termdoc.Document`
    Tokenized `shipment_texts` with ids d1, d2, d3.
shipment_matrix : :class:`~vsmlsa.corpora.termdoc.TermDocumentMatrix`
    Term-document counts of the shipment example.

Examples:
---------

It's easy to keep objects in temporary folder and reuse'em if needed:

.. sourcecode:: pycon

    >>> from vsmlsa.models import LsiModel
    >>> from vsmlsa.test.utils import get_tmpfile, common_matrix
    >>>
    >>> model = LsiModel(common_matrix, num_topics=2)
    >>> temp_path = get_tmpfile('toy_lsi')
    >>> model.save(temp_path)
    >>>
    >>> new_model = LsiModel.load(temp_path)

"""

import contextlib
import tempfile
import os
import shutil

from vsmlsa.corpora.termdoc import Document, build_term_document_matrix
from vsmlsa.parsing.preprocessing import tokenize

module_path = os.path.dirname(__file__)


def get_tmpfile(suffix):
    """Get full path to file `suffix` in temporary folder.

    This function doesn't creates file (only generate unique name).
    Also, it may return different paths in consecutive calling.

    Parameters
    ----------
    suffix : str
        Suffix of file.

    Returns
    -------
    str
        Path to `suffix` file in temporary folder.

    """
    return os.path.join(tempfile.gettempdir(), suffix)


@contextlib.contextmanager
def temporary_file(name=""):
    """This context manager creates file `name` in temporary directory and returns its full path.

    Temporary directory with included files will deleted at the end of context. Note, it won't create file.

    Parameters
    ----------
    name : str
        Filename.

    Yields
    ------
    str
        Path to file `name` in temporary directory.

    """
    tmp = tempfile.mkdtemp()
    try:
        yield os.path.join(tmp, name)
    finally:
        shutil.rmtree(tmp, ignore_errors=True)


# set up vars used in testing ("Deerwester" from the web tutorial)
common_texts = [
    ['human', 'interface', 'computer'],
    ['survey', 'user', 'computer', 'system', 'response', 'time'],
    ['eps', 'user', 'interface', 'system'],
    ['system', 'human', 'system', 'eps'],
    ['user', 'response', 'time'],
    ['trees'],
    ['graph', 'trees'],
    ['graph', 'minors', 'trees'],
    ['graph', 'minors', 'survey']
]
common_ids = ['c1', 'c2', 'c3', 'c4', 'c5', 'm1', 'm2', 'm3', 'm4']
common_documents = [Document(doc_id, text) for doc_id, text in zip(common_ids, common_texts)]
common_matrix, common_dfs, common_dictionary = build_term_document_matrix(common_documents)

# the classic three-document tf-idf example, queried with "gold silver truck"
shipment_texts = [
    "Shipment of gold damaged in a fire.",
    "Delivery of silver arrived in a silver truck.",
    "Shipment of gold arrived in a truck.",
]
shipment_query = "gold silver truck"
shipment_documents = [Document('d%i' % (i + 1), tokenize(text)) for i, text in enumerate(shipment_texts)]
shipment_matrix, shipment_dfs, shipment_dictionary = build_term_document_matrix(shipment_documents)

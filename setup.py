#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Run with::

    python ./setup.py install
"""

from pathlib import Path

from setuptools import find_packages, setup


# packages included for build-testing everywhere
core_testenv = [
    'pytest',
    'pytest-cov',
    'testfixtures',
]

install_requires = [
    'numpy >= 1.18.5',
    'scipy >= 1.7.0',
    'smart_open >= 1.8.1',
]

setup(
    name='vsmlsa',
    version='0.1.0.dev0',
    description='TF-IDF vector space ranking and Latent Semantic Analysis for small text corpora',
    long_description=Path("README.md").read_text(),
    long_description_content_type='text/markdown',

    packages=find_packages(include=['vsmlsa', 'vsmlsa.*']),

    license='LGPL-2.1-only',
    keywords='Vector Space Model, TFIDF, cosine similarity, Singular Value Decomposition, SVD, '
        'Latent Semantic Indexing, LSA, LSI',
    platforms='any',

    zip_safe=False,

    classifiers=[  # from https://pypi.org/classifiers/
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Scientific/Engineering :: Information Analysis',
        'Topic :: Text Processing :: Indexing',
    ],

    python_requires='>=3.8',
    install_requires=install_requires,
    extras_require={
        'test': core_testenv,
    },
)

"""This package contains functions to preprocess raw text"""

from .preprocessing import (  # noqa:F401
    STOPWORDS,
    preprocess_string,
    remove_stopword_tokens,
    remove_stopwords,
    strip_multiple_whitespaces,
    strip_numeric,
    strip_punctuation,
    tokenize,
)

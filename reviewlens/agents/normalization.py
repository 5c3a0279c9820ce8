"""
Text Normalization Agent.

Converts raw review text into clean, whitespace-delimited tokens
ready for vocabulary building and feature projection.
"""

import logging
import re
import string
from typing import Iterable, List, Optional

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from reviewlens.models.annotated import AnnotatedReview
from reviewlens.models.review import Review

logger = logging.getLogger(__name__)


# Smart quotes, primes, ellipsis and dashes that string.punctuation misses
EXTRA_PUNCTUATION = "‘’‚‛“”„‟′″´…–—"

_DIGITS = re.compile(r"\d")
_WHITESPACE = re.compile(r"\s+")


class TextNormalizer:
    """
    Cleans review text.

    Applied in order:
    1. Lowercase
    2. Delete digits
    3. Delete punctuation (ASCII plus curly quote variants)
    4. Collapse whitespace
    5. Drop stopwords

    Stopwords are matched on tokens after steps 1-4 so that "The" or "it's"
    still hit the list. No stemming.
    """

    def __init__(self, stopwords: Optional[Iterable[str]] = None):
        """
        Initialize normalizer.

        Args:
            stopwords: Words to drop; defaults to scikit-learn's English list
        """
        self.stopwords = frozenset(stopwords) if stopwords is not None else ENGLISH_STOP_WORDS
        self._punctuation_table = str.maketrans("", "", string.punctuation + EXTRA_PUNCTUATION)

        logger.debug(f"Initialized TextNormalizer with {len(self.stopwords)} stopwords")

    def normalize(self, text) -> str:
        """
        Clean a single text.

        Args:
            text: Raw review text (non-strings normalize to "")

        Returns:
            Cleaned text, tokens separated by single spaces
        """
        if not isinstance(text, str):
            return ""

        text = text.lower()
        text = _DIGITS.sub("", text)
        text = text.translate(self._punctuation_table)
        text = _WHITESPACE.sub(" ", text).strip()

        tokens = [token for token in text.split(" ") if token and token not in self.stopwords]
        return " ".join(tokens)

    def tokenize(self, text) -> List[str]:
        """Normalize and split into tokens."""
        return self.normalize(text).split()

    def annotate(self, reviews: List[Review]) -> List[AnnotatedReview]:
        """
        Wrap ingested reviews into snapshots carrying their cleaned text.

        Args:
            reviews: Ingested reviews

        Returns:
            One unlabeled AnnotatedReview per review
        """
        annotated = [
            AnnotatedReview(review=review, clean_text=self.normalize(review.text))
            for review in reviews
        ]

        empty = sum(1 for a in annotated if not a.clean_text)
        if empty:
            logger.debug(f"{empty} reviews have no tokens left after cleaning")

        logger.info(f"Normalized {len(annotated)} reviews")
        return annotated

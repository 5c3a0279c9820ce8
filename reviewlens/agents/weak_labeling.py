"""
Weak Labeling Agent.

Seeds labels with ordered keyword rules. The first rule whose keywords
occur in the review text wins; reviews matching no rule stay unlabeled.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from reviewlens.models.annotated import AnnotatedReview
from reviewlens.models.labels import AspectLabel, LabelSource, SentimentLabel

logger = logging.getLogger(__name__)


# Checked top to bottom: a review praising and complaining is Positive
SENTIMENT_KEYWORDS: List[Tuple[SentimentLabel, List[str]]] = [
    (SentimentLabel.POSITIVE, [
        "good", "great", "excellent", "amazing", "awesome", "delicious", "tasty",
        "loved", "love", "best", "nice", "wonderful", "fantastic", "perfect",
        "yummy", "recommend", "superb", "friendly", "must try"
    ]),
    (SentimentLabel.NEGATIVE, [
        "bad", "worst", "terrible", "awful", "horrible", "poor", "disappoint",
        "rude", "pathetic", "disgusting", "stale", "bland", "tasteless", "waste",
        "never again", "not worth", "cold", "overpriced"
    ]),
]

# Per coarse label, checked top to bottom
ASPECT_KEYWORDS: Dict[SentimentLabel, List[Tuple[AspectLabel, List[str]]]] = {
    SentimentLabel.POSITIVE: [
        (AspectLabel.GOOD_FOOD, [
            "food", "taste", "tasty", "delicious", "dish", "biryani", "chicken",
            "flavour", "flavor", "starter", "dessert", "yummy", "menu"
        ]),
        (AspectLabel.GOOD_SERVICE, [
            "service", "staff", "waiter", "server", "friendly", "quick", "prompt",
            "hospitality", "courteous", "manager"
        ]),
        (AspectLabel.AFFORDABLE, [
            "price", "affordable", "cheap", "reasonable", "value for money",
            "worth", "budget", "pocket"
        ]),
        (AspectLabel.OTHER, [
            "ambience", "ambiance", "place", "atmosphere", "music", "decor",
            "location", "view", "seating", "vibe"
        ]),
    ],
    SentimentLabel.NEGATIVE: [
        (AspectLabel.BAD_FOOD, [
            "food", "taste", "tasteless", "bland", "stale", "dish", "biryani",
            "chicken", "cold", "undercooked", "oily", "salty", "menu"
        ]),
        (AspectLabel.BAD_SERVICE, [
            "service", "staff", "waiter", "server", "rude", "slow", "wait",
            "manager", "ignored", "late"
        ]),
        (AspectLabel.OVERPRICED, [
            "price", "overpriced", "expensive", "costly", "not worth", "bill",
            "charged", "money"
        ]),
        (AspectLabel.OTHER, [
            "ambience", "ambiance", "place", "atmosphere", "music", "noisy",
            "dirty", "parking", "location", "seating"
        ]),
    ],
}


@dataclass(frozen=True)
class KeywordRule:
    """
    One label and the keywords that trigger it.
    Matching is a case-insensitive substring search.
    """
    label: object
    keywords: Tuple[str, ...]
    pattern: "re.Pattern" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        keywords = tuple(k for k in self.keywords if k)
        if not keywords:
            raise ValueError(f"Rule for {self.label} has no keywords")
        object.__setattr__(self, "keywords", keywords)
        alternation = "|".join(re.escape(k) for k in keywords)
        object.__setattr__(self, "pattern", re.compile(alternation, re.IGNORECASE))

    def matches(self, text: str) -> bool:
        return bool(text) and self.pattern.search(text) is not None


def build_rules(table: Sequence[Tuple[object, Sequence[str]]]) -> List[KeywordRule]:
    """Turn an ordered (label, keywords) table into rules."""
    return [KeywordRule(label=label, keywords=tuple(keywords)) for label, keywords in table]


class WeakLabeler:
    """
    Assigns coarse sentiment labels from ordered keyword rules.
    """

    def __init__(self, rules: Sequence[KeywordRule] = None, unlabeled=SentimentLabel.UNLABELED):
        """
        Initialize labeler.

        Args:
            rules: Ordered rules; defaults to SENTIMENT_KEYWORDS
            unlabeled: Label returned when no rule matches
        """
        self.rules = list(rules) if rules is not None else build_rules(SENTIMENT_KEYWORDS)
        self.unlabeled = unlabeled

        logger.info(f"Initialized WeakLabeler with {len(self.rules)} rules")

    def label(self, text: str):
        """Label of the first matching rule, else the unlabeled marker."""
        for rule in self.rules:
            if rule.matches(text):
                return rule.label
        return self.unlabeled

    def apply(self, reviews: List[AnnotatedReview], dimension: str = "sentiment") -> List[AnnotatedReview]:
        """
        Weak-label every review that is still unlabeled in this dimension.

        Args:
            reviews: Current snapshot
            dimension: "sentiment" or "aspect"

        Returns:
            New snapshot; matched reviews carry source WEAK
        """
        labeled = []
        for review in reviews:
            if not review.is_unlabeled(dimension):
                labeled.append(review)
                continue
            label = self.label(review.review.text)
            if label == self.unlabeled:
                labeled.append(review)
            else:
                labeled.append(review.with_label(dimension, label, LabelSource.WEAK))

        _log_coverage(labeled, dimension)
        return labeled


class AspectWeakLabeler:
    """
    Assigns aspect labels, picking the rule table by the review's sentiment.
    """

    def __init__(self, rule_tables: Dict[SentimentLabel, Sequence[KeywordRule]] = None):
        """
        Initialize labeler.

        Args:
            rule_tables: Ordered rules per sentiment; defaults to ASPECT_KEYWORDS
        """
        if rule_tables is None:
            rule_tables = {sentiment: build_rules(table) for sentiment, table in ASPECT_KEYWORDS.items()}

        self.labelers = {
            sentiment: WeakLabeler(rules, unlabeled=AspectLabel.UNLABELED)
            for sentiment, rules in rule_tables.items()
        }

    def label(self, text: str, sentiment: SentimentLabel) -> AspectLabel:
        labeler = self.labelers.get(sentiment)
        if labeler is None:
            return AspectLabel.UNLABELED
        return labeler.label(text)

    def apply(self, reviews: List[AnnotatedReview]) -> List[AnnotatedReview]:
        """
        Weak-label the aspect of every review still unlabeled in that dimension.

        Returns:
            New snapshot; matched reviews carry source WEAK
        """
        labeled = []
        for review in reviews:
            if not review.is_unlabeled("aspect"):
                labeled.append(review)
                continue
            label = self.label(review.review.text, review.sentiment)
            if label == AspectLabel.UNLABELED:
                labeled.append(review)
            else:
                labeled.append(review.with_label("aspect", label, LabelSource.WEAK))

        _log_coverage(labeled, "aspect")
        return labeled


def _log_coverage(reviews: List[AnnotatedReview], dimension: str) -> None:
    counts = Counter(r.label(dimension).value for r in reviews)
    unlabeled = sum(1 for r in reviews if r.is_unlabeled(dimension))
    logger.info(
        f"Weak {dimension} labels: {len(reviews) - unlabeled}/{len(reviews)} labeled "
        f"{dict(counts)}"
    )

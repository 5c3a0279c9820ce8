"""
Label data model.

Closed label enumerations for the two labeling passes, plus provenance.
"""

from enum import Enum
from typing import List, Type


class SentimentLabel(Enum):
    """Coarse polarity of a review."""
    POSITIVE = "Positive Review"
    NEGATIVE = "Negative Review"
    UNLABELED = "Unlabeled"


class AspectLabel(Enum):
    """Fine aspect category of a review."""
    GOOD_FOOD = "Good Food"
    BAD_FOOD = "Bad Food"
    GOOD_SERVICE = "Good Service"
    BAD_SERVICE = "Bad Service"
    AFFORDABLE = "Affordable"
    OVERPRICED = "Overpriced"
    OTHER = "Other"
    UNLABELED = "Unlabeled"


class LabelSource(Enum):
    """Where a label came from."""
    NONE = "none"  # Not labeled yet
    WEAK = "weak"  # Keyword rule
    MACHINE = "machine"  # Classifier prediction


def levels(label_type: Type[Enum]) -> List[Enum]:
    """
    Declared label levels of an enumeration, in declaration order.

    UNLABELED is a state, not a class, so it is never a level.
    """
    return [member for member in label_type if member.name != "UNLABELED"]

"""
Unit tests for review and label data models.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from reviewlens.models.labels import AspectLabel, LabelSource, SentimentLabel, levels
from reviewlens.models.review import Review


def test_rating_validation(make_review):
    """Test ratings outside 1-5 are rejected."""
    assert make_review(rating=1).rating == 1

    with pytest.raises(ValueError, match="Invalid rating"):
        make_review(rating=0)
    with pytest.raises(ValueError):
        make_review(rating=5.5)


@pytest.mark.parametrize("rating, level", [
    (1, "Bad"), (2, "Bad"), (2.5, "Moderate"), (3, "Moderate"),
    (3.5, "Good"), (4, "Good"), (4.5, "Excellent"), (5, "Excellent"),
])
def test_satisfaction_level(make_review, rating, level):
    assert make_review(rating=rating).satisfaction_level == level


def test_time_derived_fields(make_review):
    review = make_review(time=datetime(2019, 5, 25, 15, 54))

    assert review.hour == 15
    assert review.weekday == "Saturday"


def test_review_equality():
    kwargs = dict(review_id="7", restaurant="Paradise", reviewer="Anil", text="Tasty",
                  rating=4.0, time=datetime(2019, 5, 1, 12, 0))

    assert Review(**kwargs) == Review(**kwargs)
    assert Review(**kwargs) != Review(**{**kwargs, "rating": 3.0})


def test_review_immutable(make_review):
    review = make_review()

    with pytest.raises(FrozenInstanceError):
        review.text = "changed"


def test_levels_exclude_unlabeled():
    assert levels(SentimentLabel) == [SentimentLabel.POSITIVE, SentimentLabel.NEGATIVE]
    assert AspectLabel.UNLABELED not in levels(AspectLabel)
    assert len(levels(AspectLabel)) == 7


def test_with_label_returns_copy(make_annotated):
    review = make_annotated("Great food")

    labeled = review.with_label("sentiment", SentimentLabel.POSITIVE, LabelSource.WEAK)

    assert labeled.sentiment == SentimentLabel.POSITIVE
    assert labeled.source("sentiment") == LabelSource.WEAK
    assert review.sentiment == SentimentLabel.UNLABELED
    assert labeled.review is review.review


def test_weak_label_is_final(make_annotated):
    """Test a weak label cannot be replaced."""
    review = make_annotated("Great food").with_label(
        "sentiment", SentimentLabel.POSITIVE, LabelSource.WEAK
    )

    with pytest.raises(ValueError, match="weak labels are final"):
        review.with_label("sentiment", SentimentLabel.NEGATIVE, LabelSource.MACHINE)


def test_cannot_return_to_unlabeled(make_annotated):
    with pytest.raises(ValueError):
        make_annotated("Great food").with_label("aspect", AspectLabel.UNLABELED, LabelSource.MACHINE)


def test_dimensions_independent(make_annotated):
    review = make_annotated("Great food").with_label(
        "sentiment", SentimentLabel.POSITIVE, LabelSource.WEAK
    )

    assert review.is_unlabeled("aspect")
    assert not review.is_unlabeled("sentiment")


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

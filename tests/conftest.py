"""
Shared fixtures for ReviewLens tests.
"""

from datetime import datetime

import pandas as pd
import pytest

from reviewlens.models.annotated import AnnotatedReview
from reviewlens.models.review import Review


@pytest.fixture
def make_review():
    """Factory for Review objects with sensible defaults."""
    counter = {"next": 0}

    def _make(text="Nice place", rating=4.0, restaurant="Beyond Flavours",
              reviewer="Rusha Chakraborty", time=datetime(2019, 5, 25, 15, 54)):
        counter["next"] += 1
        return Review(
            review_id=str(counter["next"]),
            restaurant=restaurant,
            reviewer=reviewer,
            text=text,
            rating=rating,
            time=time
        )

    return _make


@pytest.fixture
def make_annotated(make_review):
    """Factory for unlabeled AnnotatedReview objects."""

    def _make(text="Nice place", clean_text=None, **kwargs):
        review = make_review(text=text, **kwargs)
        return AnnotatedReview(review=review, clean_text=clean_text if clean_text is not None else text.lower())

    return _make


REVIEW_TEMPLATES = [
    ("Great food, the biryani was delicious", 5),
    ("Nice staff, very friendly service", 4),
    ("Good value for money, affordable prices", 4),
    ("Awesome ambience and lovely music", 5),
    ("Terrible food, the chicken was stale", 1),
    ("Rude waiter and slow service", 1),
    ("Overpriced and expensive, total waste", 2),
    ("Dirty place, noisy and awful", 2),
]

# Match no sentiment keyword
UNMATCHED_REVIEWS = ["Visited on Sunday with family", "Ordered biryani for dinner", "Came here after office"]


@pytest.fixture
def review_frame():
    """Raw review table: 5 copies of each template plus the unmatched reviews."""
    rows = [template for _ in range(5) for template in REVIEW_TEMPLATES]
    rows += [(text, 3) for text in UNMATCHED_REVIEWS]

    return pd.DataFrame({
        "Restaurant": [f"Restaurant {i % 3}" for i in range(len(rows))],
        "Reviewer": [f"user_{i}" for i in range(len(rows))],
        "Review": [text for text, _ in rows],
        "Rating": [rating for _, rating in rows],
        "Metadata": ["1 Review"] * len(rows),
        "Time": [f"5/{1 + i % 28}/2019 {i % 24}:30" for i in range(len(rows))],
        "Pictures": [0] * len(rows),
        "7514": [None] * len(rows),
    })


@pytest.fixture
def input_csv(tmp_path, review_frame):
    path = tmp_path / "reviews.csv"
    review_frame.to_csv(path, index=False)
    return str(path)

"""
Unit tests for Ingestion Agent.
"""

from datetime import datetime

import pandas as pd
import pytest

from reviewlens.agents.ingestion import IngestionAgent


def _raw_frame():
    return pd.DataFrame({
        "Restaurant": ["Beyond Flavours", "Paradise", "Paradise", "Shah Ghouse", None, "Barbeque Nation"],
        "Reviewer": ["Rusha", "Anil", "Sneha", "Ravi", "Kiran", "Meera"],
        "Review": ["Great ambience", "Rude staff", "Loved it", "Tasty haleem", "Nice", "Good food"],
        "Rating": ["5", "1", "Like", "4", "3", "6"],
        "Metadata": ["1 Review", "3 Reviews", "2 Reviews", "1 Review", "1 Review", "1 Review"],
        "Time": ["5/25/2019 15:54", "5/24/2019 22:11", "5/20/2019 12:00", "not a date", "5/1/2019 9:00", "5/2/2019 10:30"],
        "Pictures": [0, 1, 0, 0, 0, 2],
        "7514": [None] * 6,
    })


def test_drops_malformed_rows():
    """Test rows with missing fields, bad ratings or bad times are dropped."""
    reviews = IngestionAgent().from_frame(_raw_frame())

    # Kept: row 0 and row 1. Dropped: "Like" rating, bad time, missing restaurant, rating 6
    assert [r.review_id for r in reviews] == ["0", "1"]


def test_parses_fields():
    review = IngestionAgent().from_frame(_raw_frame())[0]

    assert review.restaurant == "Beyond Flavours"
    assert review.reviewer == "Rusha"
    assert review.text == "Great ambience"
    assert review.rating == 5.0
    assert review.time == datetime(2019, 5, 25, 15, 54)


def test_missing_required_column():
    df = _raw_frame().drop(columns=["Rating"])

    with pytest.raises(ValueError, match="Rating"):
        IngestionAgent().from_frame(df)


def test_blank_review_dropped():
    df = _raw_frame()
    df.loc[0, "Review"] = "   "

    reviews = IngestionAgent().from_frame(df)

    assert [r.review_id for r in reviews] == ["1"]


def test_load_csv(tmp_path):
    """Test loading from disk drops the extraneous columns."""
    path = tmp_path / "reviews.csv"
    _raw_frame().to_csv(path, index=False)

    reviews = IngestionAgent().load(str(path))

    assert len(reviews) == 2
    assert reviews[1].text == "Rude staff"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        IngestionAgent().load(str(tmp_path / "missing.csv"))


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

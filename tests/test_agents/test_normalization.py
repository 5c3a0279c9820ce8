"""
Unit tests for Text Normalization Agent.
"""

import pytest

from reviewlens.agents.normalization import TextNormalizer


@pytest.fixture
def normalizer():
    return TextNormalizer()


def test_full_cleaning_order(normalizer):
    """Test lowercase, digits, punctuation, whitespace and stopwords together."""
    text = "The Food was GREAT!!! 10/10   “Loved” it"

    assert normalizer.normalize(text) == "food great loved"


def test_curly_quotes_are_punctuation(normalizer):
    """Test smart quotes are stripped so contractions collapse to one token."""
    assert normalizer.normalize("didn’t like the ‘paneer’") == "didnt like paneer"


def test_stopwords_matched_after_punctuation(normalizer):
    """Test stopwords carrying punctuation or case are still removed."""
    # "It’s" -> "its" which is a stopword; "The," -> "the"
    assert normalizer.normalize("It’s The, best") == "best"


def test_digits_removed(normalizer):
    assert normalizer.normalize("biryani 250 rs") == "biryani rs"


def test_no_stemming(normalizer):
    """Test words are kept as written."""
    assert normalizer.normalize("loved loving lovely") == "loved loving lovely"


def test_non_string_input(normalizer):
    """Test missing text normalizes to empty string."""
    assert normalizer.normalize(None) == ""
    assert normalizer.normalize(float("nan")) == ""
    assert normalizer.normalize("") == ""


def test_only_stopwords(normalizer):
    assert normalizer.normalize("it was the") == ""


@pytest.mark.parametrize("text", [
    "The Food was GREAT!!! 10/10 “Loved” it",
    "Rude staff... never   again :(",
    "value-for-money thali, 5 stars",
    "",
])
def test_idempotent(normalizer, text):
    """Test cleaning already clean text changes nothing."""
    once = normalizer.normalize(text)
    assert normalizer.normalize(once) == once


def test_custom_stopwords():
    """Test a custom stopword list replaces the default."""
    normalizer = TextNormalizer(stopwords={"food"})

    assert normalizer.normalize("the food") == "the"


def test_tokenize(normalizer):
    assert normalizer.tokenize("Great food, quick service!") == ["great", "food", "quick", "service"]


def test_annotate_wraps_reviews(normalizer, make_review):
    """Test annotate keeps the review and stores cleaned text."""
    review = make_review(text="Great FOOD!")

    annotated = normalizer.annotate([review])

    assert len(annotated) == 1
    assert annotated[0].review is review
    assert annotated[0].clean_text == "great food"
    assert annotated[0].is_unlabeled("sentiment")
    assert annotated[0].is_unlabeled("aspect")


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

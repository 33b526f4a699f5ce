"""Test complaint lexicon configuration."""

import pytest

from complainthub.core.detector import ComplaintDetector
from complainthub.core.lexicon import COMPLAINT_CATEGORIES, ComplaintLexicon, load_lexicon


def test_default_lexicon_keeps_category_order():
    lexicon = ComplaintLexicon.default()
    assert list(lexicon.categories) == list(COMPLAINT_CATEGORIES)
    assert "hate" in lexicon.negative_terms
    assert "not" in lexicon.negation_words
    assert lexicon.sentiment_weights["hate"] < 0 < lexicon.sentiment_weights["love"]


def test_default_lexicon_is_a_copy():
    lexicon = ComplaintLexicon.default()
    lexicon.categories["Pricing"].append("highway robbery")
    assert "highway robbery" not in COMPLAINT_CATEGORIES["Pricing"]


def test_vocabulary_lists_shared_phrases_once():
    lexicon = ComplaintLexicon(categories={"A": ["slow", "broken"], "B": ["broken", "refund"]})
    assert lexicon.indicator_vocabulary == ["slow", "broken", "refund"]


def test_phrases_are_lowercased():
    lexicon = ComplaintLexicon(
        categories={"A": ["Broken"]},
        negative_terms=["GARBAGE"],
        sentiment_weights={"Meh": -1},
        negation_words={"NOT"},
    )
    assert lexicon.categories["A"] == ["broken"]
    assert lexicon.negative_terms == ["garbage"]
    assert lexicon.sentiment_weights == {"meh": -1.0}
    assert lexicon.negation_words == {"not"}


def test_from_yaml(tmp_path):
    path = tmp_path / "lexicon.yaml"
    path.write_text(
        "categories:\n"
        "  Shipping: [late delivery, lost package]\n"
        "  Billing: [double charge]\n"
        "negative_terms: [nightmare]\n"
        "sentiment_weights:\n"
        "  nightmare: -3\n"
        "  lovely: 2\n"
        "negation_words: [not, never, \"no\"]\n",
        encoding="utf-8",
    )

    lexicon = ComplaintLexicon.from_yaml(path)

    assert list(lexicon.categories) == ["Shipping", "Billing"]
    assert lexicon.negative_terms == ["nightmare"]
    assert lexicon.sentiment_weights == {"nightmare": -3.0, "lovely": 2.0}
    assert lexicon.negation_words == {"not", "never", "no"}

    result = ComplaintDetector(lexicon).detect("Another late delivery, what a nightmare")
    assert result.is_complaint
    assert result.category == "Shipping"
    assert result.contains_negative_terms


def test_from_yaml_missing_sections_use_defaults(tmp_path):
    path = tmp_path / "lexicon.yaml"
    path.write_text("categories:\n  Shipping: [late delivery]\n", encoding="utf-8")

    lexicon = ComplaintLexicon.from_yaml(path)
    default = ComplaintLexicon.default()

    assert list(lexicon.categories) == ["Shipping"]
    assert lexicon.negative_terms == default.negative_terms
    assert lexicon.sentiment_weights == default.sentiment_weights


def test_from_yaml_errors(tmp_path):
    with pytest.raises(ValueError):
        ComplaintLexicon.from_yaml(tmp_path / "missing.yaml")

    broken = tmp_path / "broken.yaml"
    broken.write_text("categories: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError):
        ComplaintLexicon.from_yaml(broken)

    listing = tmp_path / "list.yaml"
    listing.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        ComplaintLexicon.from_yaml(listing)


@pytest.mark.parametrize("content", [
    "categories: [late delivery, lost package]\n",
    "categories:\n  Shipping:\n",
    "negative_terms: nightmare\n",
    "negation_words: never\n",
    "sentiment_weights: [hate, love]\n",
    "sentiment_weights:\n  meh: very bad\n",
])
def test_from_yaml_rejects_malformed_sections(tmp_path, content):
    path = tmp_path / "lexicon.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match="Lexicon file"):
        ComplaintLexicon.from_yaml(path)


def test_from_yaml_empty_section_disables_it(tmp_path):
    path = tmp_path / "lexicon.yaml"
    path.write_text("negative_terms: []\n", encoding="utf-8")

    lexicon = ComplaintLexicon.from_yaml(path)

    assert lexicon.negative_terms == []
    assert lexicon.categories == ComplaintLexicon.default().categories
    assert not ComplaintDetector(lexicon).detect("total garbage, what a scam").contains_negative_terms


def test_load_lexicon(tmp_path):
    assert load_lexicon(None).categories == ComplaintLexicon.default().categories

    path = tmp_path / "lexicon.yaml"
    path.write_text("negative_terms: [meh]\n", encoding="utf-8")
    assert load_lexicon(str(path)).negative_terms == ["meh"]

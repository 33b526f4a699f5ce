"""Complaint vocabularies used by the detector."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

import yaml

logger = logging.getLogger(__name__)


# Complaint indicator taxonomy. Declaration order decides category ties.
COMPLAINT_CATEGORIES = {
    "Product Issue": ["issue", "problem", "bug", "glitch", "broken", "error", "trouble", "doesn't work",
                      "not working", "doesn't load", "needs to be fixed", "should be fixed", "missing"],
    "Service Quality": ["customer service", "support", "no response", "waiting", "never responds",
                        "unhelpful", "ignored"],
    "Pricing": ["overpriced", "expensive", "not worth", "waste of money", "refund", "charged", "pricing",
                "price hike"],
    "User Experience": ["confusing", "unintuitive", "can't access", "can't use", "useless", "annoying",
                        "frustrating", "clunky", "hard to find", "redesign"],
    "Reliability": ["slow", "laggy", "crash", "freezes", "hangs", "unresponsive", "logged out", "outage",
                    "unstable", "lost all my data"],
    "Dissatisfaction": ["disappointed", "disappointing", "dissatisfied", "unhappy", "upset", "terrible",
                        "horrible", "awful", "bad", "worst", "sucks", "hate", "poor", "low quality",
                        "misleading", "deceptive", "scam", "fraud", "regret"],
}

NEGATIVE_TERMS = [
    "hate", "garbage", "scam", "fraud", "worst", "terrible", "awful", "horrible", "useless", "trash",
    "pathetic", "disgusting", "sucks", "rip-off", "ripoff", "junk", "unacceptable",
]

SENTIMENT_WEIGHTS = {
    # negative
    "hate": -3.0, "terrible": -3.0, "awful": -3.0, "horrible": -3.0, "worst": -3.0, "garbage": -3.0,
    "scam": -3.0, "fraud": -3.0, "pathetic": -3.0, "useless": -2.5, "broken": -2.5, "sucks": -2.5,
    "unacceptable": -2.5, "junk": -2.5, "trash": -2.5, "bad": -2.0, "poor": -2.0, "disappointed": -2.0,
    "disappointing": -2.0, "frustrating": -2.0, "buggy": -2.0, "crash": -2.0, "crashes": -2.0,
    "crashing": -2.0, "crashed": -2.0, "overpriced": -2.0, "unresponsive": -2.0, "regret": -2.0,
    "waste": -2.0, "fail": -2.0, "failed": -2.0, "fails": -2.0, "ridiculous": -2.0, "angry": -2.0,
    "upset": -2.0, "unhappy": -2.0, "misleading": -2.0, "annoying": -1.5, "laggy": -1.5,
    "freezes": -1.5, "freezing": -1.5, "confusing": -1.5, "avoid": -1.5, "slow": -1.0,
    "expensive": -1.0, "problem": -1.0, "problems": -1.0, "issue": -1.0, "issues": -1.0, "lost": -1.0,
    "ugh": -1.0,
    # positive
    "great": 3.0, "love": 3.0, "loved": 3.0, "excellent": 3.0, "amazing": 3.0, "awesome": 3.0,
    "perfect": 3.0, "fantastic": 3.0, "wonderful": 3.0, "perfectly": 2.5, "best": 2.5, "good": 2.0,
    "happy": 2.0, "satisfied": 2.0, "helpful": 2.0, "reliable": 2.0, "recommend": 2.0, "nice": 2.0,
    "improved": 2.0, "enjoy": 2.0, "fast": 1.5, "smooth": 1.5, "easy": 1.5, "fixed": 1.5,
    "thanks": 1.5, "thank": 1.5, "better": 1.5, "saved": 1.5, "quick": 1.5, "works": 1.0,
    "like": 1.0, "fine": 1.0,
}

NEGATION_WORDS = [
    "not", "no", "never", "nor", "neither", "cannot", "don't", "doesn't", "didn't", "isn't", "wasn't",
    "aren't", "weren't", "can't", "won't", "wouldn't", "shouldn't", "couldn't", "haven't", "hasn't",
    "hadn't", "dont", "doesnt", "didnt", "isnt", "wasnt", "cant", "wont",
]


@dataclass
class ComplaintLexicon:
    """Vocabularies that drive complaint detection.

    Categories are kept in declaration order; when two categories match the
    same number of indicator phrases the earlier one wins.
    """
    categories: Dict[str, List[str]] = field(default_factory=dict)
    negative_terms: List[str] = field(default_factory=list)
    sentiment_weights: Dict[str, float] = field(default_factory=dict)
    negation_words: Set[str] = field(default_factory=set)

    def __post_init__(self):
        self.categories = {
            str(name): [str(p).lower() for p in phrases if p]
            for name, phrases in self.categories.items()
        }
        self.negative_terms = [str(t).lower() for t in self.negative_terms if t]
        self.sentiment_weights = {str(w).lower(): float(v) for w, v in self.sentiment_weights.items()}
        self.negation_words = {str(w).lower() for w in self.negation_words}

    @property
    def indicator_vocabulary(self) -> List[str]:
        """All indicator phrases, each listed once, in declaration order."""
        return list(dict.fromkeys(p for phrases in self.categories.values() for p in phrases))

    @classmethod
    def default(cls) -> "ComplaintLexicon":
        return cls(
            categories={name: list(phrases) for name, phrases in COMPLAINT_CATEGORIES.items()},
            negative_terms=list(NEGATIVE_TERMS),
            sentiment_weights=dict(SENTIMENT_WEIGHTS),
            negation_words=set(NEGATION_WORDS),
        )

    @classmethod
    def from_yaml(cls, path) -> "ComplaintLexicon":
        """Load a lexicon from YAML; missing sections fall back to the defaults.

        Expected layout::

            categories:
              Pricing: [overpriced, refund]
            negative_terms: [hate, scam]
            sentiment_weights: {hate: -3, love: 3}
            negation_words: [not, never, "no"]  # quote "no", YAML reads it as false
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Could not read lexicon file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Lexicon file {path} must contain a mapping")

        default = cls.default()
        categories = _section(data, "categories", dict, default.categories, path)
        for name, phrases in categories.items():
            if not isinstance(phrases, list):
                raise ValueError(f"Lexicon file {path}: category {name!r} must be a list of phrases")
        weights = _section(data, "sentiment_weights", dict, default.sentiment_weights, path)
        negative_terms = _section(data, "negative_terms", list, default.negative_terms, path)
        negation_words = _section(data, "negation_words", list, default.negation_words, path)

        try:
            lexicon = cls(
                categories=categories,
                negative_terms=negative_terms,
                sentiment_weights=weights,
                negation_words=set(negation_words),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Lexicon file {path}: invalid sentiment weight: {e}") from e
        logger.info(f"Loaded lexicon from {path}: {len(lexicon.categories)} categories, "
                    f"{len(lexicon.indicator_vocabulary)} indicators")
        return lexicon


def _section(data: dict, key: str, kind: type, default, path):
    """Section ``key`` of a lexicon file; absent sections use ``default``, empty ones stay empty."""
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, kind):
        raise ValueError(f"Lexicon file {path}: {key} must be a {'mapping' if kind is dict else 'list'}")
    return value


def load_lexicon(path: Optional[str] = None) -> ComplaintLexicon:
    """Return the YAML lexicon at ``path`` or the stock one."""
    if path:
        return ComplaintLexicon.from_yaml(path)
    return ComplaintLexicon.default()

"""Lexical complaint detection over posts and comment trees."""

import logging
import re
from typing import Callable, Iterator, List, Optional, Tuple

from .constants import DetectorConstants
from .lexicon import ComplaintLexicon
from .models import Complaint, ComplaintSource, DetectionResult, RedditComment, RedditPost

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]
Notifier = Callable[[str], None]

TOKEN_STRIP_RE = re.compile(r"[^\w']|_")


def _log_notification(message: str) -> None:
    logger.warning(message)


class ComplaintDetector:
    """Keyword, negative-term and lexicon-sentiment complaint classifier."""

    def __init__(self, lexicon: Optional[ComplaintLexicon] = None):
        self.lexicon = lexicon or ComplaintLexicon.default()
        self._vocabulary = self.lexicon.indicator_vocabulary

    def detect_category(self, text_lower: str) -> Optional[str]:
        """Category with the most indicator hits; earlier categories win ties."""
        best_category, best_count = None, 0
        for category, phrases in self.lexicon.categories.items():
            count = sum(1 for phrase in phrases if phrase in text_lower)
            if count > best_count:
                best_category, best_count = category, count
        return best_category

    def count_indicators(self, text_lower: str) -> int:
        return sum(1 for phrase in self._vocabulary if phrase in text_lower)

    def contains_negative_terms(self, text_lower: str) -> bool:
        return any(term in text_lower for term in self.lexicon.negative_terms)

    def sentiment(self, text: str) -> float:
        """
        Lexicon sentiment in (-1, 1).

        A negation word inverts the next weighted word. It expires after
        NEGATION_WINDOW tokens if no weighted word shows up.
        """
        weights = self.lexicon.sentiment_weights
        total = 0.0
        negated = False
        pending = 0

        for raw in text.lower().replace("’", "'").split():
            token = TOKEN_STRIP_RE.sub("", raw)
            if not token:
                continue
            if token in self.lexicon.negation_words:
                negated, pending = True, 0
                continue
            weight = weights.get(token)
            if weight is not None:
                total += -weight if negated else weight
                negated = False
            elif negated:
                pending += 1
                if pending >= DetectorConstants.NEGATION_WINDOW:
                    negated = False

        return total / (abs(total) + DetectorConstants.SENTIMENT_DAMPING)

    def detect(self, text: str) -> DetectionResult:
        """Decide whether ``text`` is a complaint."""
        if not text or len(text) < DetectorConstants.MIN_TEXT_LENGTH:
            return DetectionResult(is_complaint=False, confidence=0.0, sentiment=0.0)

        text_lower = text.lower()
        hits = self.count_indicators(text_lower)
        vocab_size = len(self._vocabulary)
        confidence = hits / (vocab_size * DetectorConstants.VOCABULARY_CONFIDENCE_SHARE) if vocab_size else 0.0
        confidence = min(max(confidence, 0.0), 1.0)

        negative_terms = self.contains_negative_terms(text_lower)
        sentiment = self.sentiment(text)
        is_complaint = (
            hits > 0
            or sentiment < DetectorConstants.NEGATIVE_SENTIMENT_THRESHOLD
            or negative_terms
        )

        return DetectionResult(
            is_complaint=is_complaint,
            confidence=max(confidence, DetectorConstants.MIN_COMPLAINT_CONFIDENCE) if is_complaint else 0.0,
            sentiment=sentiment,
            category=self.detect_category(text_lower),
            contains_negative_terms=negative_terms,
        )


def _walk_comments(comments: List[RedditComment], max_depth: int) -> Iterator[RedditComment]:
    """Depth-first, sibling-ordered walk of a reply forest."""
    stack: List[Tuple[RedditComment, int]] = [(c, 0) for c in reversed(comments or [])]
    while stack:
        comment, depth = stack.pop()
        yield comment
        replies = comment.replies or []
        if not replies:
            continue
        if depth >= max_depth:
            logger.warning(f"Skipping {len(replies)} replies below comment {comment.id}: depth limit {max_depth}")
            continue
        stack.extend((reply, depth + 1) for reply in reversed(replies))


def _post_complaint(post: RedditPost, result: DetectionResult) -> Complaint:
    return Complaint(
        id=f"post-{post.id}",
        text=post.title + ("\n" + post.content if post.content else ""),
        source=ComplaintSource(
            type="post",
            id=post.id,
            author=post.author,
            score=post.score,
            permalink=post.permalink,
            created_utc=post.created_utc,
        ),
        score=post.score,
        confidence=result.confidence,
        category=result.category,
        sentiment=result.sentiment,
        contains_negative_terms=result.contains_negative_terms,
    )


def _comment_complaint(comment: RedditComment, result: DetectionResult) -> Complaint:
    return Complaint(
        id=f"comment-{comment.id}",
        text=comment.body,
        source=ComplaintSource(
            type="comment",
            id=comment.id,
            author=comment.author,
            score=comment.score,
            permalink=comment.permalink,
            created_utc=comment.created_utc,
        ),
        score=comment.score,
        confidence=result.confidence,
        category=result.category,
        sentiment=result.sentiment,
        contains_negative_terms=result.contains_negative_terms,
    )


def extract_complaints(
    posts: List[RedditPost],
    on_progress: Optional[ProgressCallback] = None,
    detector: Optional[ComplaintDetector] = None,
    notify: Optional[Notifier] = None,
    max_reply_depth: int = DetectorConstants.MAX_REPLY_DEPTH,
) -> List[Complaint]:
    """
    Extract complaints from posts and their whole comment trees.

    Any failure aborts the batch: it is logged, passed to ``notify`` and an
    empty list is returned instead of partial results.

    Args:
        posts: Posts with their comment trees
        on_progress: Called as (current, total, stage) once per post
        detector: Detector to use, the stock lexicon when omitted
        notify: Receives a user-facing message when extraction fails
        max_reply_depth: Reply levels visited below a top-level comment

    Returns:
        Complaints in discovery order (post first, then its comments depth-first)
    """
    detector = detector or ComplaintDetector()
    notify = notify or _log_notification

    try:
        complaints: List[Complaint] = []
        total = len(posts)

        for i, post in enumerate(posts):
            if on_progress:
                on_progress(i + 1, total, f"Analyzing post {i + 1}/{total}")

            result = detector.detect(f"{post.title} {post.content}")
            if result.is_complaint:
                complaints.append(_post_complaint(post, result))

            for comment in _walk_comments(post.comments, max_reply_depth):
                result = detector.detect(comment.body)
                if result.is_complaint:
                    complaints.append(_comment_complaint(comment, result))

        logger.info(f"Found {len(complaints)} complaints in {total} posts")
        return complaints
    except Exception as e:
        logger.exception("Error extracting complaints")
        notify(f"Failed to analyze complaints: {e}")
        return []

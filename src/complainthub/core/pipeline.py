"""Detector -> clusterer -> summarizer chain."""

import logging
from typing import Callable, List, Optional

from .clustering import cluster_complaints
from .config import settings
from .detector import ComplaintDetector, extract_complaints
from .models import PipelineResult, RedditPost
from .summarizer import summarize_clusters

logger = logging.getLogger(__name__)


def run_pipeline(
    posts: List[RedditPost],
    detector: Optional[ComplaintDetector] = None,
    on_progress: Optional[Callable[[int, int, str], None]] = None,
    notify: Optional[Callable[[str], None]] = None,
    threshold: Optional[float] = None,
) -> PipelineResult:
    """
    Run all three stages over ``posts``.

    Stage failures never raise: the failing stage yields an empty list and its
    message is appended to ``PipelineResult.errors`` (and forwarded to
    ``notify`` when given). Zero complaints ends the run early with no
    clusters, which is a valid empty result rather than an error.
    """
    result = PipelineResult()

    def _collect(message: str) -> None:
        result.errors.append(message)
        if notify:
            notify(message)
        else:
            logger.warning(message)

    result.complaints = extract_complaints(
        posts,
        on_progress,
        detector=detector,
        notify=_collect,
        max_reply_depth=settings.max_reply_depth,
    )
    if not result.complaints:
        logger.info("No complaints detected")
        return result

    clusters = cluster_complaints(
        result.complaints,
        on_progress,
        notify=_collect,
        threshold=settings.similarity_threshold if threshold is None else threshold,
    )
    result.clusters = summarize_clusters(clusters, on_progress, max_length=settings.summary_max_length)
    logger.info(f"Pipeline finished: {len(result.complaints)} complaints, {len(result.clusters)} clusters")
    return result

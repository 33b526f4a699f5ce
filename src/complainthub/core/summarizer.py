"""Representative summaries for complaint clusters."""

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from .constants import SummaryConstants
from .models import ComplaintCluster

logger = logging.getLogger(__name__)


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length] + SummaryConstants.ELLIPSIS
    return text


def summarize_cluster(cluster: ComplaintCluster,
                      max_length: int = SummaryConstants.MAX_SUMMARY_LENGTH) -> ComplaintCluster:
    """Copy of ``cluster`` summarised by its highest-scored complaint."""
    if not cluster.complaints:
        return replace(cluster, complaints=[])

    # max() keeps the first of equal scores
    top = max(cluster.complaints, key=lambda c: c.score)
    return replace(
        cluster,
        summary=_truncate(top.text, max_length),
        complaints=list(cluster.complaints),
    )


def summarize_clusters(
    clusters: List[ComplaintCluster],
    on_progress: Optional[Callable[[int, int, str], None]] = None,
    max_length: int = SummaryConstants.MAX_SUMMARY_LENGTH,
) -> List[ComplaintCluster]:
    """Summarise every cluster; the input clusters are left untouched."""
    summarized = []
    total = len(clusters)
    for i, cluster in enumerate(clusters):
        if on_progress:
            on_progress(i + 1, total, f"Summarizing clusters {i + 1}/{total}")
        summarized.append(summarize_cluster(cluster, max_length))
    return summarized

"""Greedy lexical clustering of complaints."""

import logging
import re
from typing import Callable, List, Optional, Set

from nltk.stem import PorterStemmer

from .constants import ClusterConstants
from .models import Complaint, ComplaintCluster

logger = logging.getLogger(__name__)

NON_WORD_RE = re.compile(r"[^\w\s]")

_stemmer = PorterStemmer()


def _log_notification(message: str) -> None:
    logger.warning(message)


def tokenize(text: str) -> Set[str]:
    """Stemmed set of the words longer than three characters."""
    words = NON_WORD_RE.sub("", (text or "").lower()).split()
    return {_stemmer.stem(w) for w in words if len(w) >= ClusterConstants.MIN_TOKEN_LENGTH}


def text_similarity(text_a: str, text_b: str) -> float:
    """Jaccard similarity of the two token sets, 0 when either is empty."""
    if not text_a or not text_b:
        return 0.0
    tokens_a, tokens_b = tokenize(text_a), tokenize(text_b)
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)


def _matches(complaint: Complaint, cluster: ComplaintCluster, threshold: float) -> bool:
    if text_similarity(complaint.text, cluster.summary) >= threshold:
        return True
    return any(
        text_similarity(complaint.text, member.text) >= threshold
        for member in cluster.complaints
    )


def cluster_complaints(
    complaints: List[Complaint],
    on_progress: Optional[Callable[[int, int, str], None]] = None,
    notify: Optional[Callable[[str], None]] = None,
    threshold: float = ClusterConstants.SIMILARITY_THRESHOLD,
) -> List[ComplaintCluster]:
    """
    Group complaints into clusters of lexically similar text.

    Complaints are placed in input order. Each one joins the first cluster
    (in creation order) whose summary or any member reaches ``threshold``,
    otherwise it opens a new cluster. The result is ordered by frequency,
    then total score, both descending.

    On failure the error is logged, passed to ``notify`` and an empty list
    is returned.
    """
    notify = notify or _log_notification

    try:
        clusters: List[ComplaintCluster] = []
        total = len(complaints)

        for i, complaint in enumerate(complaints):
            if on_progress:
                on_progress(i + 1, total, f"Clustering complaints {i + 1}/{total}")

            target = next((c for c in clusters if _matches(complaint, c, threshold)), None)
            if target is not None:
                target.add(complaint)
                logger.debug(f"{complaint.id} joined {target.id}")
            else:
                cluster_id = f"{ClusterConstants.CLUSTER_ID_PREFIX}{len(clusters) + 1}"
                clusters.append(ComplaintCluster.start(cluster_id, complaint))

        clusters.sort(key=lambda c: (-c.frequency, -c.total_score))
        logger.info(f"Grouped {total} complaints into {len(clusters)} clusters")
        return clusters
    except Exception as e:
        logger.exception("Error clustering complaints")
        notify(f"Failed to cluster complaints: {e}")
        return []

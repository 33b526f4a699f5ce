"""Data preparation for export."""

import datetime
import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from ..core.constants import FileConstants
from ..core.models import ComplaintCluster, PipelineResult


def filter_negative_clusters(clusters: List[ComplaintCluster]) -> List[ComplaintCluster]:
    """Clusters with at least one strongly negative complaint; nothing is modified."""
    return [c for c in clusters if c.negative_terms_count > 0]


def cluster_to_dict(cluster: ComplaintCluster) -> Dict[str, Any]:
    return {
        "id": cluster.id,
        "summary": cluster.summary,
        "category": cluster.category,
        "frequency": cluster.frequency,
        "total_score": cluster.total_score,
        "avg_sentiment": round(cluster.avg_sentiment, 4),
        "negative_terms_count": cluster.negative_terms_count,
        "complaints": [asdict(c) for c in cluster.complaints],
    }


def prepare_export(
    subreddit: str,
    months: int,
    result: PipelineResult,
    clusters: Optional[List[ComplaintCluster]] = None,
) -> Dict[str, Any]:
    """Prepare a pipeline run for JSON export.

    ``clusters`` overrides ``result.clusters`` so a filtered view can be
    exported without touching the result.
    """
    clusters = result.clusters if clusters is None else clusters
    return {
        "subreddit": subreddit,
        "months": months,
        "summary": {
            "total_complaints": len(result.complaints),
            "total_clusters": len(clusters),
            "errors": list(result.errors),
        },
        "clusters": [cluster_to_dict(c) for c in clusters],
        "metadata": {
            "export_timestamp": None,  # Will be set by export_to_json
            "version": FileConstants.EXPORT_VERSION
        }
    }


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    data.setdefault("metadata", {})["export_timestamp"] = datetime.datetime.now().isoformat()

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

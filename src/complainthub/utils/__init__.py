"""Utility modules for ComplaintHub."""

from .data_prep import export_to_json, filter_negative_clusters, prepare_export

__all__ = [
    "export_to_json",
    "filter_negative_clusters",
    "prepare_export",
]

"""Core modules for ComplaintHub."""

from .models import *
from .config import settings
from .lexicon import ComplaintLexicon, load_lexicon
from .detector import ComplaintDetector, extract_complaints
from .clustering import cluster_complaints, text_similarity
from .summarizer import summarize_clusters
from .pipeline import run_pipeline

__all__ = [
    "settings",
    "RedditPost",
    "RedditComment",
    "Complaint",
    "ComplaintSource",
    "ComplaintCluster",
    "DetectionResult",
    "PipelineResult",
    "ComplaintLexicon",
    "load_lexicon",
    "ComplaintDetector",
    "extract_complaints",
    "cluster_complaints",
    "text_similarity",
    "summarize_clusters",
    "run_pipeline",
]

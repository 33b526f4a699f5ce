"""ComplaintHub - complaint clustering for Reddit communities."""

__version__ = "1.0.0"
__author__ = "ComplaintHub Team"

from .core.models import *
from .core.config import settings
from .core.pipeline import run_pipeline
from .services.reddit_client import RedditService

__all__ = [
    "settings",
    "run_pipeline",
    "RedditService",
]

"""Services for ComplaintHub."""

from .reddit_client import RedditService

__all__ = [
    "RedditService",
]

"""Reddit data collection service."""

import logging
import random
import re
import time
from typing import Callable, List, Optional

import praw
from tenacity import retry, stop_after_attempt, wait_exponential

from ..core.config import settings
from ..core.constants import FetchConstants
from ..core.models import RedditComment, RedditPost

logger = logging.getLogger(__name__)

SUBREDDIT_RE = re.compile(r"^[A-Za-z0-9_]+$")


def normalize_subreddit(name: str) -> str:
    """Strip whitespace and a leading ``r/``; reject anything that is not a subreddit name."""
    clean = re.sub(r"^/?r/", "", (name or "").strip(), flags=re.I).strip("/")
    if not clean:
        raise ValueError("Please enter a subreddit name")
    if not SUBREDDIT_RE.match(clean):
        raise ValueError(f"Invalid subreddit name: {name!r}")
    return clean


def months_to_cutoff(months: int, now: Optional[float] = None) -> float:
    """Unix timestamp ``months`` (30-day) months before ``now``."""
    if months <= 0:
        raise ValueError(f"Time range must be at least one month, got {months}")
    now = time.time() if now is None else now
    return now - months * FetchConstants.DAYS_PER_MONTH * FetchConstants.SECONDS_PER_DAY


def _author_name(item) -> str:
    author = getattr(item, "author", None)
    if author is None:
        return "[deleted]"
    return getattr(author, "name", None) or str(author)


def convert_comment_forest(comments) -> List[RedditComment]:
    """Convert a praw comment forest into RedditComment trees, skipping MoreComments."""
    roots: List[RedditComment] = []
    stack = [(c, roots) for c in reversed(list(comments or []))]
    while stack:
        c, siblings = stack.pop()
        if not hasattr(c, "body"):
            continue
        node = RedditComment(
            id=str(getattr(c, "id", "")),
            author=_author_name(c),
            score=int(getattr(c, "score", 0) or 0),
            created_utc=float(getattr(c, "created_utc", 0) or 0),
            permalink=getattr(c, "permalink", "") or "",
            body=c.body or "",
        )
        siblings.append(node)
        replies = list(getattr(c, "replies", None) or [])
        stack.extend((r, node.replies) for r in reversed(replies))
    return roots


def convert_submission(sub, subreddit: str = "") -> RedditPost:
    """Convert a praw Submission (comments expanded) into a RedditPost."""
    try:
        sub.comments.replace_more(limit=0)
    except Exception as e:
        logger.warning(f"Could not expand comments for {getattr(sub, 'id', '?')}: {e}")
    comments = convert_comment_forest(sub.comments)
    return RedditPost(
        id=str(sub.id),
        title=getattr(sub, "title", "") or "",
        content=getattr(sub, "selftext", "") or "",
        author=_author_name(sub),
        score=int(getattr(sub, "score", 0) or 0),
        created_utc=float(getattr(sub, "created_utc", 0) or 0),
        permalink=getattr(sub, "permalink", "") or "",
        url=getattr(sub, "url", "") or "",
        subreddit=subreddit,
        num_comments=int(getattr(sub, "num_comments", 0) or 0),
        comments=comments,
    )


class RedditService:
    """Reddit data collection service."""

    def __init__(self):
        self.reddit = None
        self._init_reddit()

    def _init_reddit(self):
        """Initialize Reddit client."""
        if (settings.reddit_client_id and
            settings.reddit_client_secret and
            settings.reddit_user_agent):
            try:
                self.reddit = praw.Reddit(
                    client_id=settings.reddit_client_id,
                    client_secret=settings.reddit_client_secret,
                    user_agent=settings.reddit_user_agent
                )
                logger.info("Reddit client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize Reddit client: {e}")
                self.reddit = None
        else:
            logger.warning("Reddit credentials not provided, using mock data")

    def fetch_posts(
        self,
        subreddit: str,
        months: Optional[int] = None,
        limit: Optional[int] = None,
        on_progress: Optional[Callable[[int, int, str], None]] = None,
    ) -> List[RedditPost]:
        """
        Fetch recent posts with their comment trees.

        Args:
            subreddit: Subreddit name, with or without a leading "r/"
            months: Time range in months, posts older than that are skipped
            limit: Maximum number of posts
            on_progress: Called as (current, estimated_total, stage)

        Returns:
            Posts newest first, each with its full comment tree
        """
        name = normalize_subreddit(subreddit)
        months = settings.default_months if months is None else months
        limit = settings.default_post_limit if limit is None else limit
        cutoff = months_to_cutoff(months)

        logger.info(f"Fetching up to {limit} posts from r/{name} for the past {months} months")

        if self.reddit:
            try:
                return self._fetch_real(name, cutoff, limit, on_progress)
            except Exception as e:
                logger.error(f"Reddit fetch failed for r/{name}: {e}")
        return self._fetch_mock(name, months, limit, on_progress)

    @retry(
        stop=stop_after_attempt(settings.max_retries),
        wait=wait_exponential(multiplier=settings.retry_delay, max=settings.retry_backoff * 10)
    )
    def _fetch_real(self, name: str, cutoff: float, limit: int, on_progress=None) -> List[RedditPost]:
        """Read r/<name>/new until ``limit`` posts or the cutoff is reached."""
        start_time = time.time()
        sr = self.reddit.subreddit(name)
        posts = []

        for sub in sr.new(limit=limit * FetchConstants.REDDIT_FETCH_MULTIPLIER):
            created = float(getattr(sub, "created_utc", 0) or 0)
            if created < cutoff:
                # listing is newest first
                break
            posts.append(convert_submission(sub, name))
            if on_progress:
                on_progress(len(posts), limit, f"Fetching posts from r/{name}")
            if len(posts) >= limit:
                break

        elapsed = time.time() - start_time
        logger.info(f"Fetched {len(posts)} posts from r/{name} in {elapsed:.1f}s")
        return posts

    def _fetch_mock(self, name: str, months: int, limit: int, on_progress=None) -> List[RedditPost]:
        """Generate reproducible mock posts for r/<name> inside the time window."""
        rng = random.Random(f"{settings.mock_seed}:{name.lower()}")
        now = time.time()
        window = months * FetchConstants.DAYS_PER_MONTH * FetchConstants.SECONDS_PER_DAY
        count = min(limit, rng.randint(FetchConstants.MOCK_MIN_POSTS, FetchConstants.MOCK_MAX_POSTS))

        posts = []
        for i in range(count):
            post_id = f"mock{i}_{rng.randrange(16 ** 6):06x}"
            created = now - rng.random() * window
            comments = _mock_comments(rng, FetchConstants.MOCK_COMMENT_DEPTH, post_id, name, created, now)
            posts.append(RedditPost(
                id=post_id,
                title=MOCK_TITLES[i % len(MOCK_TITLES)].format(sub=name),
                content=MOCK_CONTENTS[i % len(MOCK_CONTENTS)].format(sub=name),
                author=f"user_{rng.randrange(16 ** 6):06x}",
                score=rng.randint(0, 999),
                created_utc=created,
                permalink=f"/r/{name}/comments/{post_id}/",
                url=f"https://reddit.com/r/{name}/comments/{post_id}/",
                subreddit=name,
                num_comments=_count_comments(comments),
                comments=comments,
            ))
            if on_progress:
                on_progress(i + 1, count, f"Generating mock posts for r/{name}")

        posts.sort(key=lambda p: p.created_utc, reverse=True)
        logger.info(f"Generated {len(posts)} mock posts for r/{name}")
        return posts


def _mock_comments(rng: random.Random, depth: int, post_id: str, sub: str,
                   parent_time: float, now: float) -> List[RedditComment]:
    if depth <= 0:
        return []
    comments = []
    for _ in range(rng.randint(1, FetchConstants.MOCK_MAX_COMMENTS)):
        comment_id = f"c_{rng.randrange(16 ** 6):06x}"
        created = min(now, parent_time + rng.random() * FetchConstants.SECONDS_PER_DAY / 2)
        has_replies = rng.random() < FetchConstants.MOCK_REPLY_PROBABILITY
        comments.append(RedditComment(
            id=comment_id,
            author=f"user_{rng.randrange(16 ** 6):06x}",
            score=rng.randint(0, 99),
            created_utc=created,
            permalink=f"/r/{sub}/comments/{post_id}/comment/{comment_id}/",
            body=rng.choice(MOCK_COMMENTS),
            replies=_mock_comments(rng, depth - 1, post_id, sub, created, now) if has_replies else [],
        ))
    return comments


def _count_comments(comments: List[RedditComment]) -> int:
    return sum(1 + _count_comments(c.replies) for c in comments)


MOCK_TITLES = [
    "Just tried the new {sub} service and it was great!",
    "Is anyone else having issues with {sub}?",
    "{sub} customer service is terrible, I've been waiting for 2 weeks!",
    "How to get the most out of your {sub} experience",
    "I'm done with {sub}, switching to a competitor",
    "{sub} saved my day, amazing experience!",
    "Warning about {sub} - major bugs in the latest update",
    "Can't believe how bad {sub} has become lately",
    "{sub} pricing is outrageous now, any alternatives?",
    "Best features of {sub} that most people don't know about",
    "Hate how {sub} keeps changing the interface",
    "{sub} crashed and I lost all my data!",
    "The new {sub} update is actually pretty good",
    "{sub} needs to fix their broken payment system",
    "Just had the worst experience with {sub}",
    "Long-time {sub} user, but might be time to move on",
    "{sub} support never responds to tickets",
    "Is {sub} down for anyone else?",
    "Really confused by the new {sub} policy",
    "{sub} completely ignored my refund request",
]

MOCK_CONTENTS = [
    "I've used {sub} for years and have always been satisfied. The recent updates made it even better!",
    "Has anyone else noticed {sub} getting worse? The app crashes constantly, customer service is "
    "unresponsive and prices keep going up. Really disappointed.",
    "Why did {sub} change the interface again? It's confusing, unintuitive and everything is harder "
    "to find. Thinking about canceling my subscription.",
    "The latest {sub} update is full of bugs. I keep getting logged out, features are missing and "
    "sometimes it won't even load.",
    "Great experience with {sub} so far. Support answered quickly when I had a question and the "
    "product works as advertised.",
    "Does anybody else hate the {sub} redesign? Basic functionality is broken and everything takes "
    "more clicks now.",
    "{sub} charged me twice and now they refuse to refund the duplicate charge. Unacceptable.",
    "Thanks to the {sub} team for the performance improvements, a huge difference!",
    "{sub} clearly doesn't care about its users anymore. Quality has tanked while prices keep going up.",
    "Since the last update {sub} is unusable on my phone. It freezes, crashes and sometimes won't "
    "open. Support has not replied for days.",
]

MOCK_COMMENTS = [
    "I completely agree with you. Having the exact same issues.",
    "That hasn't been my experience at all. Everything works fine for me.",
    "Have you tried contacting customer support? They sorted my problem out quickly.",
    "This is exactly why I stopped using their service last year. Nothing has improved.",
    "You're overreacting a bit. It's not perfect but it's not terrible either.",
    "WORST. SERVICE. EVER. I hate everything about it and regret signing up.",
    "Thanks for posting this, I thought I was the only one having these problems!",
    "The developers clearly don't use their own product. How could they miss such obvious issues?",
    "I found a workaround for this problem, happy to share details.",
    "Can't believe they expect us to pay for this level of service. Absolutely disappointing.",
    "Used this for years and never had any issues. Maybe it's your setup?",
    "Their support team is useless. I've been trying to get help for weeks.",
    "Switched to a competitor and couldn't be happier. Don't waste your time with this.",
    "The new version fixed most of the issues I was having.",
    "Completely broken on my end too. Going to request a refund.",
    "This used to be so good. What happened to the quality?",
    "Everyone complaining here needs to calm down. It's not that serious.",
    "Garbage service with garbage support. Avoid at all costs.",
    "Has anyone found an alternative that actually works properly?",
    "After the latest update my account was completely broken. Had to start over from scratch.",
]

"""Data models for ComplaintHub."""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class RedditComment:
    """A comment with its nested replies."""
    id: str
    author: str
    score: int
    created_utc: float
    permalink: str
    body: str
    replies: List["RedditComment"] = field(default_factory=list)


@dataclass
class RedditPost:
    """A submission with its comment tree."""
    id: str
    title: str
    content: str
    author: str
    score: int
    created_utc: float
    permalink: str
    url: str = ""
    subreddit: str = ""
    num_comments: int = 0
    comments: List[RedditComment] = field(default_factory=list)


@dataclass(frozen=True)
class ComplaintSource:
    """Reference back to the post or comment a complaint came from."""
    type: str  # "post" or "comment"
    id: str
    author: str
    score: int
    permalink: str
    created_utc: float


@dataclass(frozen=True)
class Complaint:
    """A post or comment classified as a complaint."""
    id: str
    text: str
    source: ComplaintSource
    score: int
    confidence: float
    category: Optional[str] = None
    sentiment: Optional[float] = None
    contains_negative_terms: Optional[bool] = None


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of running the detector over a single text."""
    is_complaint: bool
    confidence: float
    sentiment: float
    category: Optional[str] = None
    contains_negative_terms: bool = False


@dataclass
class ComplaintCluster:
    """Group of similar complaints with running aggregates."""
    id: str
    summary: str
    complaints: List[Complaint] = field(default_factory=list)
    frequency: int = 0
    total_score: int = 0
    avg_sentiment: float = 0.0
    negative_terms_count: int = 0
    category: Optional[str] = None

    @classmethod
    def start(cls, cluster_id: str, complaint: Complaint) -> "ComplaintCluster":
        """Open a singleton cluster whose summary is the complaint text."""
        return cls(
            id=cluster_id,
            summary=complaint.text,
            complaints=[complaint],
            frequency=1,
            total_score=complaint.score,
            avg_sentiment=complaint.sentiment or 0.0,
            negative_terms_count=1 if complaint.contains_negative_terms else 0,
            category=complaint.category or None,
        )

    def add(self, complaint: Complaint) -> None:
        """Append a complaint and update the running aggregates."""
        self.complaints.append(complaint)
        self.frequency += 1
        self.total_score += complaint.score
        self.avg_sentiment += ((complaint.sentiment or 0.0) - self.avg_sentiment) / self.frequency
        if complaint.contains_negative_terms:
            self.negative_terms_count += 1
        if not self.category and complaint.category:
            self.category = complaint.category


@dataclass
class PipelineResult:
    """Everything one pipeline run produced."""
    complaints: List[Complaint] = field(default_factory=list)
    clusters: List[ComplaintCluster] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

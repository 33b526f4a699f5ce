"""Constants and configuration values for ComplaintHub."""

# Detection Constants
class DetectorConstants:
    """Constants for lexical complaint detection."""
    
    MIN_TEXT_LENGTH = 5  # shorter texts are never complaints
    VOCABULARY_CONFIDENCE_SHARE = 0.1  # hits needed for full confidence, as a share of the vocabulary
    MIN_COMPLAINT_CONFIDENCE = 0.3  # floor for anything classified as a complaint
    NEGATIVE_SENTIMENT_THRESHOLD = -0.2  # sentiment below this is a complaint on its own
    NEGATION_WINDOW = 3  # tokens a negation stays active without a weighted word
    SENTIMENT_DAMPING = 5.0  # sentiment = sum / (|sum| + damping)
    MAX_REPLY_DEPTH = 50  # reply levels visited below a top-level comment

# Clustering Constants
class ClusterConstants:
    """Constants for similarity clustering."""
    
    SIMILARITY_THRESHOLD = 0.25  # minimum Jaccard similarity to join a cluster
    MIN_TOKEN_LENGTH = 4  # tokens shorter than this are ignored
    CLUSTER_ID_PREFIX = "cluster-"

# Summary Constants
class SummaryConstants:
    """Constants for cluster summaries."""
    
    MAX_SUMMARY_LENGTH = 100  # chars before truncation
    ELLIPSIS = "..."

# Fetch Constants
class FetchConstants:
    """Constants for the Reddit fetch layer."""
    
    SECONDS_PER_DAY = 86400
    DAYS_PER_MONTH = 30  # months are converted to a cutoff using 30-day months
    REDDIT_FETCH_MULTIPLIER = 4  # listing items scanned per requested post
    MOCK_MIN_POSTS = 5
    MOCK_MAX_POSTS = 15
    MOCK_COMMENT_DEPTH = 3  # levels of generated replies
    MOCK_MAX_COMMENTS = 5  # comments per level
    MOCK_REPLY_PROBABILITY = 0.3  # chance that a generated comment gets replies

# File and Path Constants
class FileConstants:
    """Constants for file operations."""
    
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    EXPORT_VERSION = "1.0.0"

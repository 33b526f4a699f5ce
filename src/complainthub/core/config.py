"""Configuration management for ComplaintHub."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""
    
    # Reddit API
    reddit_client_id: str = Field("", description="Reddit client ID")
    reddit_client_secret: str = Field("", description="Reddit client secret")
    reddit_user_agent: str = Field("ComplaintHub/1.0", description="Reddit user agent")
    
    # Logging
    log_level: str = Field("INFO", description="Logging level")
    
    # Fetch settings
    default_months: int = Field(3, description="Default time range in months")
    default_post_limit: int = Field(25, description="Default number of posts to fetch")
    max_retries: int = Field(3, description="Maximum retry attempts")
    retry_delay: float = Field(1.0, description="Base retry delay in seconds")
    retry_backoff: float = Field(2.0, description="Retry backoff multiplier")
    mock_seed: int = Field(42, description="Seed for generated mock posts")
    
    # Analysis settings
    similarity_threshold: float = Field(0.25, description="Minimum Jaccard similarity to join a cluster")
    max_reply_depth: int = Field(50, description="Deepest reply level visited during detection")
    summary_max_length: int = Field(100, description="Cluster summary length before truncation")
    lexicon_path: str = Field("", description="Optional YAML file with a custom complaint lexicon")
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """Recency cache configuration"""

    # Capacity used by LRUCache.from_settings()
    default_limit: int = Field(default=1000, ge=0)

    # Separator between key:value pairs in LRUCache.describe()
    describe_delimiter: str = " < "

    model_config = SettingsConfigDict(
        env_prefix="RECENCY_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = CacheSettings()

from datetime import tzinfo
from typing import List
from pydantic import BaseModel, Field, HttpUrl, field_validator, ConfigDict

from discuss_digest.models.checkpoint import CheckpointConfig
from discuss_digest.models.notification import EmailSettings
from discuss_digest.utils.timestamps import parse_utc_offset


class FeedSettings(BaseModel):
    """Discussion feed query settings"""

    endpoint: HttpUrl = Field("https://leetcode.com/graphql", validate_default=True)
    page_size: int = Field(100, ge=1, le=100)
    timeout_seconds: float = Field(15.0, gt=0, le=300)
    order_by: str = Field("MOST_RECENT", min_length=1)
    keywords: List[str] = Field(default_factory=list)
    tag_slugs: List[str] = Field(default_factory=list)
    # Keep scanning a page after the first item at/before the cutoff
    scan_full_page_on_boundary: bool = True
    requests_per_minute: int = Field(30, ge=1, le=600)
    user_agent: str = Field("LeetCode-Discuss-Fetcher/1.0", min_length=1)


class DisplaySettings(BaseModel):
    """Timezone used when showing timestamps to humans"""

    timezone_name: str = Field("IST", min_length=1, max_length=10)
    utc_offset: str = Field("+05:30", pattern=r"^[+-]\d{2}:\d{2}$")

    @field_validator("utc_offset")
    @classmethod
    def validate_offset(cls, v: str) -> str:
        parse_utc_offset(v)
        return v

    @property
    def tz(self) -> tzinfo:
        return parse_utc_offset(self.utc_offset, self.timezone_name)


class ReportSettings(BaseModel):
    """Flat-file report settings"""

    enabled: bool = True
    output_dir: str = Field("reports", min_length=1)
    filename_prefix: str = Field(
        "leetcode_articles", min_length=1, max_length=64, pattern=r"^[\w.-]+$"
    )


class DigestConfig(BaseModel):
    """Root configuration model"""

    model_config = ConfigDict(protected_namespaces=())

    feed: FeedSettings = Field(default_factory=FeedSettings)
    checkpoint: CheckpointConfig = Field(default_factory=CheckpointConfig)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    email: EmailSettings = Field(default_factory=EmailSettings)

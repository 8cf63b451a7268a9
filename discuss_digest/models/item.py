from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Optional, List

LEETCODE_SITE_URL = "https://leetcode.com"


class ItemAuthor(BaseModel):
    """Discussion post author (only the handle is needed)"""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field("", alias="userName")


class ItemTag(BaseModel):
    """Tag attached to a discussion post"""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    slug: str = ""
    tag_type: str = Field("", alias="tagType")


class ItemReaction(BaseModel):
    """Reaction counter on a discussion post"""

    model_config = ConfigDict(populate_by_name=True)

    count: int = 0
    reaction_type: str = Field("", alias="reactionType")


class DiscussItem(BaseModel):
    """One post from the discussion feed"""

    model_config = ConfigDict(populate_by_name=True)

    # Identifiers
    uuid: str = Field(..., min_length=1)
    topic_id: Optional[int] = Field(None, alias="topicId")

    # Content
    title: str = ""
    slug: str = ""
    summary: str = ""
    author: ItemAuthor = Field(default_factory=ItemAuthor)
    article_type: str = Field("", alias="articleType")

    # Raw RFC3339 strings; parsing happens where the value is compared
    created_at: str = Field("", alias="createdAt")
    updated_at: str = Field("", alias="updatedAt")

    tags: List[ItemTag] = Field(default_factory=list)
    reactions: List[ItemReaction] = Field(default_factory=list)

    @field_validator("tags", "reactions", mode="before")
    @classmethod
    def _null_list(cls, v):
        return v or []

    @field_validator(
        "title", "slug", "summary", "article_type", "created_at", "updated_at",
        mode="before",
    )
    @classmethod
    def _null_string(cls, v):
        return "" if v is None else v

    @field_validator("author", mode="before")
    @classmethod
    def _null_author(cls, v):
        return v or {}

    @property
    def url(self) -> str:
        """Public link to the post"""
        if self.topic_id is not None:
            return f"{LEETCODE_SITE_URL}/discuss/post/{self.topic_id}/{self.slug}/"
        return f"{LEETCODE_SITE_URL}/discuss/{self.slug}"


class FeedPage(BaseModel):
    """One page returned by a feed provider.

    ``received`` counts the raw entries the API returned, including any
    that failed validation and were dropped from ``items``.
    """

    items: List[DiscussItem] = Field(default_factory=list)
    skip: int = Field(0, ge=0)
    page_size: int = Field(..., ge=1)
    received: int = Field(0, ge=0)
    total_num: Optional[int] = None

    @model_validator(mode="after")
    def _received_covers_items(self) -> "FeedPage":
        if self.received < len(self.items):
            self.received = len(self.items)
        return self

    @property
    def is_empty(self) -> bool:
        return self.received == 0

    @property
    def is_short(self) -> bool:
        """Fewer entries than requested: the feed has no more pages"""
        return self.received < self.page_size

"""Notification configuration models.

Provides Pydantic models for:
- EmailSettings: SendGrid delivery settings
- NotificationResult: Outcome of a delivery attempt

Usage:
    from discuss_digest.models.notification import EmailSettings

    settings = EmailSettings(
        enabled=True,
        api_key="SG.xxx",
        from_email="digest@example.com",
        to_emails=["me@example.com"],
    )
"""

from typing import Optional, List
from pydantic import BaseModel, Field, HttpUrl, field_validator, model_validator


class EmailSettings(BaseModel):
    """Configuration for SendGrid e-mail delivery.

    Attributes:
        enabled: Whether the digest is e-mailed.
        api_key: SendGrid API key (from ${SENDGRID_API_KEY}).
        api_url: SendGrid v3 mail/send endpoint.
        from_email: Sender address.
        from_name: Sender display name.
        to_emails: Recipient addresses.
        subject: Subject template; ``{count}`` and ``{date}`` are filled in.
        timeout_seconds: HTTP request timeout.
    """

    enabled: bool = Field(default=False, description="Enable e-mail delivery")
    api_key: Optional[str] = Field(
        default=None, description="SendGrid API key from ${SENDGRID_API_KEY}"
    )
    api_url: HttpUrl = Field(
        default="https://api.sendgrid.com/v3/mail/send",
        validate_default=True,
        description="SendGrid mail/send endpoint",
    )
    from_email: str = Field(default="", max_length=254)
    from_name: str = Field(default="LeetCode Digest", max_length=100)
    to_emails: List[str] = Field(default_factory=list)
    subject: str = Field(
        default="LeetCode Discuss: {count} new articles ({date})",
        min_length=1,
        max_length=200,
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP timeout for SendGrid requests",
    )

    @field_validator("to_emails")
    @classmethod
    def validate_recipients(cls, v: List[str]) -> List[str]:
        cleaned = [addr.strip() for addr in v if addr and addr.strip()]
        for addr in cleaned:
            if "@" not in addr:
                raise ValueError(f"Invalid recipient address: {addr}")
        return cleaned

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        try:
            v.format(count=0, date="")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"subject may only use {{count}} and {{date}} placeholders: {e}"
            )
        return v

    @model_validator(mode="after")
    def validate_enabled_settings(self) -> "EmailSettings":
        if self.enabled:
            if not self.to_emails:
                raise ValueError("to_emails is required when e-mail is enabled")
            if "@" not in self.from_email:
                raise ValueError("from_email is required when e-mail is enabled")
        return self

    @property
    def resolved_api_key(self) -> Optional[str]:
        """API key, or None when unset or left as an unsubstituted ${VAR}"""
        if not self.api_key or self.api_key.startswith("${"):
            return None
        return self.api_key


class NotificationResult(BaseModel):
    """Outcome of a delivery attempt."""

    success: bool
    provider: str = "sendgrid"
    recipients: int = Field(default=0, ge=0)
    status_code: Optional[int] = None
    error: Optional[str] = None

"""Notification service for e-mailing digests.

Provides async delivery through the SendGrid v3 mail/send API with:
- HTML body rendered by HtmlDigestGenerator
- Subject templating with article count and date
- Fail-safe error handling (returns a result, never raises)

Usage:
    from discuss_digest.services.notification_service import NotificationService
    from discuss_digest.models.notification import EmailSettings

    service = NotificationService(EmailSettings(), tz)
    result = await service.send_digest(items, generated_at)
"""

import asyncio
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

import aiohttp
import structlog

from discuss_digest.models.item import DiscussItem
from discuss_digest.models.notification import EmailSettings, NotificationResult
from discuss_digest.output.html_generator import HtmlDigestGenerator

logger = structlog.get_logger()


class SendGridMessageBuilder:
    """Builds SendGrid mail/send payloads for a digest."""

    def __init__(self, settings: EmailSettings, tz: tzinfo) -> None:
        """Initialize message builder.

        Args:
            settings: E-mail settings.
            tz: Display timezone for dates in the subject and body.
        """
        self.settings = settings
        self.tz = tz
        self._html = HtmlDigestGenerator(tz)

    def build_subject(self, items: List[DiscussItem], generated_at: datetime) -> str:
        local = generated_at.astimezone(self.tz)
        return self.settings.subject.format(
            count=len(items), date=local.strftime("%Y-%m-%d")
        )

    def build_payload(
        self, items: List[DiscussItem], generated_at: datetime
    ) -> Dict[str, Any]:
        """Build the SendGrid request body.

        Args:
            items: Articles to include.
            generated_at: Generation time shown in the footer.

        Returns:
            SendGrid v3 payload.
        """
        sender: Dict[str, str] = {"email": self.settings.from_email}
        if self.settings.from_name:
            sender["name"] = self.settings.from_name

        return {
            "personalizations": [
                {"to": [{"email": addr} for addr in self.settings.to_emails]}
            ],
            "from": sender,
            "subject": self.build_subject(items, generated_at),
            "content": [
                {
                    "type": "text/html",
                    "value": self._html.generate(items, generated_at),
                }
            ],
        }


class NotificationService:
    """Service for delivering digests by e-mail.

    All errors are caught and logged; the caller decides what a failed
    delivery means for the run.

    Attributes:
        settings: E-mail configuration.
    """

    def __init__(self, settings: EmailSettings, tz: tzinfo) -> None:
        self.settings = settings
        self._message_builder = SendGridMessageBuilder(settings, tz)

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    async def send_digest(
        self,
        items: List[DiscussItem],
        generated_at: Optional[datetime] = None,
    ) -> NotificationResult:
        """Send a digest e-mail.

        Args:
            items: Articles to deliver (an empty list is a no-op).
            generated_at: Generation time; defaults to now.

        Returns:
            NotificationResult with success status.
        """
        if not self.settings.enabled:
            logger.debug("email_notifications_disabled")
            return NotificationResult(success=True, error="Notifications disabled")

        if not items:
            logger.debug("email_skipped_no_items")
            return NotificationResult(success=True, error="Nothing to send")

        api_key = self.settings.resolved_api_key
        if not api_key:
            logger.warning("sendgrid_api_key_not_configured")
            return NotificationResult(success=False, error="API key not configured")

        generated_at = generated_at or datetime.now().astimezone()
        return await self._send_sendgrid(items, generated_at, api_key)

    async def _send_sendgrid(
        self,
        items: List[DiscussItem],
        generated_at: datetime,
        api_key: str,
    ) -> NotificationResult:
        """POST the digest to SendGrid."""
        payload = self._message_builder.build_payload(items, generated_at)
        recipients = len(self.settings.to_emails)

        logger.info("sending_email_digest", items=len(items), recipients=recipients)

        try:
            timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)

            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    str(self.settings.api_url),
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                ) as response:
                    response_status = response.status

                    if response_status in (200, 202):
                        logger.info(
                            "email_digest_sent",
                            status_code=response_status,
                            recipients=recipients,
                        )
                        return NotificationResult(
                            success=True,
                            recipients=recipients,
                            status_code=response_status,
                        )

                    response_text = await response.text()
                    logger.warning(
                        "email_digest_failed",
                        status_code=response_status,
                        response=response_text[:200],
                    )
                    return NotificationResult(
                        success=False,
                        status_code=response_status,
                        error=f"HTTP {response_status}: {response_text[:100]}",
                    )

        except aiohttp.ClientError as e:
            logger.error(
                "email_digest_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            return NotificationResult(success=False, error=f"HTTP error: {e}")
        except asyncio.TimeoutError as e:
            logger.error("email_digest_timeout", timeout=self.settings.timeout_seconds)
            return NotificationResult(success=False, error=f"Request timed out: {e}")

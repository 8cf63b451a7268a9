"""One incremental digest run.

Reads the checkpoint, derives the cutoff, fetches everything newer, hands
the items to the report writer and the e-mail notifier, and only then
advances the checkpoint to the newest creation time ingested.

A failure anywhere before the checkpoint write leaves the checkpoint
untouched, so the next run fetches the same window again.

Usage:
    from discuss_digest.orchestration import DigestRun

    digest = DigestRun(config)
    result = await digest.run()
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

import structlog

from discuss_digest.models.config import DigestConfig
from discuss_digest.observability.context import correlation_id_context
from discuss_digest.observability.logging import bind_context, clear_context
from discuss_digest.orchestration.result import CutoffSource, RunResult
from discuss_digest.output.text_report import TextReportWriter
from discuss_digest.services.checkpoint_service import CheckpointStore
from discuss_digest.services.incremental_fetcher import IncrementalFetcher
from discuss_digest.services.notification_service import NotificationService
from discuss_digest.services.providers.base import FeedProvider
from discuss_digest.services.providers.leetcode import LeetCodeDiscussProvider
from discuss_digest.utils.exceptions import CheckpointWriteError, DeliveryError
from discuss_digest.utils.timestamps import format_timestamp, parse_lookback

logger = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DigestRun:
    """Orchestrates fetch, formatting, delivery and checkpoint update.

    Collaborators default to the production implementations built from
    the config; tests inject fakes.
    """

    def __init__(
        self,
        config: DigestConfig,
        provider: Optional[FeedProvider] = None,
        checkpoint_store: Optional[CheckpointStore] = None,
        notifier: Optional[NotificationService] = None,
        report_writer: Optional[TextReportWriter] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        tz = config.display.tz
        self.config = config
        self.provider = provider or LeetCodeDiscussProvider(config.feed)
        self.checkpoint_store = checkpoint_store or CheckpointStore(
            config.checkpoint
        )
        self.notifier = notifier or NotificationService(config.email, tz)
        self.report_writer = report_writer or TextReportWriter(config.report, tz)
        self.clock = clock or _utc_now
        self.fetcher = IncrementalFetcher(
            self.provider,
            page_size=config.feed.page_size,
            scan_full_page_on_boundary=config.feed.scan_full_page_on_boundary,
        )

    def resolve_cutoff(
        self, since: Optional[datetime] = None
    ) -> Tuple[datetime, CutoffSource]:
        """Pick the cutoff for this run.

        Precedence: explicit ``since`` > stored checkpoint > configured
        ``initial_cutoff`` > now minus ``initial_lookback``.

        Raises:
            ValueError: If ``since`` is naive
            CheckpointReadError: If the checkpoint exists but is unusable
        """
        if since is not None:
            if since.tzinfo is None:
                raise ValueError("`since` datetime must be timezone-aware")
            return since, CutoffSource.OVERRIDE

        stored = self.checkpoint_store.read()
        if stored is not None:
            return stored, CutoffSource.CHECKPOINT

        initial = self.config.checkpoint.initial_cutoff
        if initial is not None:
            return initial, CutoffSource.INITIAL_CUTOFF

        lookback = parse_lookback(self.config.checkpoint.initial_lookback)
        return self.clock() - lookback, CutoffSource.LOOKBACK

    async def run(
        self,
        since: Optional[datetime] = None,
        persist_checkpoint: bool = True,
        send_email: bool = True,
        write_report: bool = True,
    ) -> RunResult:
        """Execute one run.

        Args:
            since: Cutoff override; the stored checkpoint is not read.
            persist_checkpoint: Advance the checkpoint after delivery.
            send_email: Deliver by e-mail when e-mail is enabled.
            write_report: Write the text report when reports are enabled.

        Returns:
            RunResult describing the run.

        Raises:
            CheckpointReadError: Stored checkpoint unusable
            FetchError: A page request failed
            ReportError: The report could not be written
            DeliveryError: Enabled e-mail delivery failed
        """
        with correlation_id_context() as run_id:
            bind_context(provider=self.provider.name)
            try:
                return await self._execute(
                    run_id, since, persist_checkpoint, send_email, write_report
                )
            finally:
                clear_context()

    async def _execute(
        self,
        run_id: str,
        since: Optional[datetime],
        persist_checkpoint: bool,
        send_email: bool,
        write_report: bool,
    ) -> RunResult:
        cutoff, source = self.resolve_cutoff(since)
        logger.info(
            "digest_run_started",
            cutoff=format_timestamp(cutoff),
            cutoff_source=source.value,
        )

        window = await self.fetcher.fetch_window(cutoff)
        result = RunResult(
            run_id=run_id,
            cutoff=cutoff,
            cutoff_source=source,
            items=window.items,
            pages_fetched=window.pages_fetched,
            stop_reason=window.stop_reason,
            skipped_items=window.skipped_items,
        )

        if window.is_empty:
            logger.info("digest_nothing_new", pages_fetched=window.pages_fetched)
            return result

        generated_at = self.clock()

        if write_report and self.config.report.enabled:
            result.report_path = self.report_writer.write(
                window.items, generated_at
            )

        if send_email and self.notifier.enabled:
            notification = await self.notifier.send_digest(
                window.items, generated_at
            )
            result.notification = notification
            if not notification.success:
                raise DeliveryError(
                    f"E-mail delivery failed: {notification.error}"
                )

        if persist_checkpoint and window.newest_created_at is not None:
            try:
                self.checkpoint_store.write(window.newest_created_at)
                result.checkpoint_written = window.newest_created_at
            except CheckpointWriteError as e:
                logger.error(
                    "checkpoint_not_advanced",
                    path=str(self.checkpoint_store.path),
                    error=str(e),
                )
                result.checkpoint_error = str(e)

        logger.info("digest_run_completed", **result.to_dict())
        return result

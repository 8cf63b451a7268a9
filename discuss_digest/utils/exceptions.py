"""Custom exceptions for the discuss digest

This module defines the exception hierarchy for a digest run:
- Base exception for all digest errors
- Fetch errors raised by feed providers (transport and decoding)
- Checkpoint errors raised by the checkpoint store
- Output errors raised by report writing and delivery

All exceptions inherit from DigestError to allow catching every
digest-related error in a single except block when needed.
"""

from typing import Optional


class DigestError(Exception):
    """Base exception for all digest errors

    Use this to catch any error raised while producing a digest:
    ```python
    try:
        result = await run.run()
    except DigestError as e:
        logger.error("digest_failed", error=str(e))
    ```
    """

    pass


class FetchError(DigestError):
    """A page request against the feed failed

    Carries the offset of the page that was being requested so operators
    can tell how far paging got before the run aborted.
    """

    def __init__(self, message: str, skip: Optional[int] = None) -> None:
        self.skip = skip
        if skip is not None:
            message = f"{message} (skip={skip})"
        super().__init__(message)


class TransportError(FetchError):
    """Feed request could not be completed

    Raised when:
    - Connection errors
    - Request timeout
    - Non-200 response status
    """

    def __init__(
        self,
        message: str,
        skip: Optional[int] = None,
        status: Optional[int] = None,
    ) -> None:
        self.status = status
        super().__init__(message, skip=skip)


class DecodeError(FetchError):
    """Feed response envelope is malformed

    Raised when:
    - Body is not valid JSON
    - GraphQL returned an errors array
    - Expected data/edges structure is missing
    """

    pass


class ItemTimestampParseError(DigestError):
    """An item's creation timestamp could not be parsed

    Localized: the fetcher skips the affected item and keeps going.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unparseable timestamp: {value!r}")


class CheckpointError(DigestError):
    """Base for checkpoint persistence failures"""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)


class CheckpointReadError(CheckpointError):
    """Stored checkpoint exists but is unreadable or corrupt

    Never recovered by falling back to the first-run window: that could
    either skip items or resend everything already delivered.
    """

    pass


class CheckpointWriteError(CheckpointError):
    """New checkpoint could not be persisted

    The next run will fetch everything this run already processed.
    """

    pass


class ReportError(DigestError):
    """Flat-file report could not be written"""

    pass


class DeliveryError(DigestError):
    """An enabled delivery channel failed to send the digest"""

    pass

"""
Ticket ID Generation
====================

Ticket IDs look like CE-20240115-00042: prefix, local calendar day, and the
1-based position of the submission within that day.

There is no lock or sequence table. Concurrent submissions can compute the
same candidate, so every candidate is checked against storage and the count
is recomputed on each retry until an unused one is found or the attempt
budget runs out.
"""

from datetime import datetime
from typing import Awaitable, Callable, Optional, TypeVar

from src.config import settings
from src.core import (
    DuplicateTicketIdException,
    RepositoryException,
    TicketIdExhaustedException,
)
from src.intake.application.interfaces import ISubmissionRepository
from src.intake.domain import DayWindow
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]
T = TypeVar("T")


def local_now() -> datetime:
    """Current server local time, naive so day bounds are localized one by one."""
    return datetime.now()


class TicketIdGenerator:
    """
    Produces human-readable, unique ticket IDs.

    Args:
        submissions: storage used for the daily count and collision checks
        prefix: leading ticket segment
        sequence_width: zero padding of the daily sequence
        max_attempts: candidates tried before giving up
        clock: returns the current time; naive means server local time
    """

    def __init__(
        self,
        submissions: ISubmissionRepository,
        prefix: Optional[str] = None,
        sequence_width: Optional[int] = None,
        max_attempts: Optional[int] = None,
        clock: Clock = local_now,
    ):
        self._submissions = submissions
        self._prefix = prefix or settings.ticket_prefix
        self._width = sequence_width or settings.ticket_sequence_width
        self._max_attempts = max_attempts or settings.ticket_max_attempts
        self._clock = clock

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def format(self, day_stamp: str, sequence: int) -> str:
        return f"{self._prefix}-{day_stamp}-{sequence:0{self._width}d}"

    async def generate(self) -> str:
        """
        Next candidate ticket ID.

        If the daily count cannot be read, falls back to a timestamp-based
        ID so intake keeps working without the sequential format.
        """
        now = self._clock()
        window = DayWindow.containing(now)
        try:
            count = await self._submissions.count_created_between(window.start, window.end)
        except RepositoryException as e:
            fallback = f"{self._prefix}-{int(now.timestamp() * 1000)}"
            logger.warning(
                "Daily submission count unavailable, using timestamp ticket ID",
                extra={"ticket_id": fallback, "error": e.message}
            )
            return fallback
        return self.format(window.stamp, count + 1)

    async def generate_unique(self) -> str:
        """
        Ticket ID verified unused at the time of the check.

        Raises:
            TicketIdExhaustedException: every attempt produced a taken ID
        """
        return await self.issue()

    async def issue(self, insert: Optional[Callable[[str], Awaitable[T]]] = None):
        """
        Issue a ticket ID and, when given, store it with ``insert``.

        One attempt budget covers both the existence check and the insert:
        a candidate rejected by the unique constraint
        (DuplicateTicketIdException from ``insert``) uses up an attempt just
        like one found taken by the check.

        Returns:
            The candidate when ``insert`` is None, otherwise what ``insert``
            returned.

        Raises:
            TicketIdExhaustedException: no attempt produced a usable ID
        """
        candidate = None
        for attempt in range(1, self._max_attempts + 1):
            candidate = await self.generate()
            if await self._submissions.exists_by_ticket_id(candidate):
                logger.info(
                    "Ticket ID collision, retrying",
                    extra={"ticket_id": candidate, "attempt": attempt}
                )
                continue
            if insert is None:
                return candidate
            try:
                return await insert(candidate)
            except DuplicateTicketIdException:
                logger.warning(
                    "Ticket ID taken at insert time, re-issuing",
                    extra={"ticket_id": candidate, "attempt": attempt}
                )

        logger.error(
            "Failed to generate a unique ticket ID",
            extra={"attempts": self._max_attempts, "last_candidate": candidate}
        )
        raise TicketIdExhaustedException(self._max_attempts, candidate)

"""Tests for ticket ID generation."""

import re
import time
from datetime import datetime, timedelta

import pytest

from src.core import TicketIdExhaustedException
from src.intake.application import TicketIdGenerator
from src.intake.domain import DayWindow, Submission


def _submission(ticket_id: str) -> Submission:
    return Submission(id=None, ticket_id=ticket_id, description="x" * 10, citizen_contact="0788000000")


async def test_first_ticket_of_the_day(submission_repo, fixed_clock):
    generator = TicketIdGenerator(submission_repo, prefix="CE", sequence_width=5, clock=fixed_clock)

    assert await generator.generate() == "CE-20240115-00001"


async def test_sequence_follows_daily_count(submission_repo, fixed_clock):
    for n in range(1, 42):
        await submission_repo.create(_submission(f"CE-20240115-{n:05d}"))
    generator = TicketIdGenerator(submission_repo, prefix="CE", sequence_width=5, clock=fixed_clock)

    assert await generator.generate() == "CE-20240115-00042"


async def test_padding_and_prefix_are_configurable(submission_repo, fixed_clock):
    generator = TicketIdGenerator(submission_repo, prefix="GOV", sequence_width=3, clock=fixed_clock)

    assert await generator.generate() == "GOV-20240115-001"


async def test_retries_past_taken_candidates(submission_repo, fixed_clock):
    # Other requests insert between the count and the check
    submission_repo.preexisting = {"CE-20240115-00001", "CE-20240115-00002"}
    counts = iter([0, 1, 2])

    async def count(start, end):
        return next(counts)

    submission_repo.count_created_between = count
    generator = TicketIdGenerator(submission_repo, prefix="CE", max_attempts=5, clock=fixed_clock)

    assert await generator.generate_unique() == "CE-20240115-00003"


async def test_exhausted_budget_raises(submission_repo, fixed_clock):
    submission_repo.preexisting = {"CE-20240115-00001"}
    generator = TicketIdGenerator(submission_repo, prefix="CE", max_attempts=3, clock=fixed_clock)

    with pytest.raises(TicketIdExhaustedException) as exc_info:
        await generator.generate_unique()

    assert exc_info.value.attempts == 3
    assert exc_info.value.last_candidate == "CE-20240115-00001"


async def test_count_failure_uses_timestamp_id(submission_repo, fixed_clock):
    submission_repo.fail_count = True
    generator = TicketIdGenerator(submission_repo, prefix="CE", clock=fixed_clock)

    ticket_id = await generator.generate()

    assert ticket_id == f"CE-{int(fixed_clock().timestamp() * 1000)}"
    assert re.fullmatch(r"CE-\d{13}", ticket_id)


async def test_unique_id_is_not_taken(submission_repo, fixed_clock):
    await submission_repo.create(_submission("CE-20240115-00001"))
    generator = TicketIdGenerator(submission_repo, prefix="CE", clock=fixed_clock)

    ticket_id = await generator.generate_unique()

    assert ticket_id == "CE-20240115-00002"
    assert not await submission_repo.exists_by_ticket_id(ticket_id)


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
def test_local_day_window_spans_dst_change(monkeypatch):
    # Central European rules; clocks jump forward on 2024-03-31
    monkeypatch.setenv("TZ", "CET-1CEST,M3.5.0,M10.5.0/3")
    time.tzset()
    try:
        window = DayWindow.containing(datetime(2024, 3, 31, 12, 0))
    finally:
        monkeypatch.undo()
        time.tzset()

    assert window.stamp == "20240331"
    assert window.start.utcoffset() == timedelta(hours=1)
    assert window.end.utcoffset() == timedelta(hours=2)
    assert window.end - window.start == timedelta(hours=23, microseconds=-1)

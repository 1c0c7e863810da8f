from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Final

from discord.ext import tasks

from verifier_bot.store import VerificationStore

SWEEP_INTERVAL_SECONDS: Final[int] = 60
ATTEMPT_MAX_AGE: Final[timedelta] = timedelta(minutes=15)

log = logging.getLogger("email-verifier")


def sweep_expired_attempts(store: VerificationStore, now: datetime | None = None) -> int:
    """Drop attempts older than ATTEMPT_MAX_AGE; returns how many were removed."""
    before = len(store)
    store.sweep(now or datetime.now(UTC), ATTEMPT_MAX_AGE)
    removed = before - len(store)
    if removed:
        log.debug("Expired %d verification attempt(s)", removed)
    return removed


def build_sweeper(store: VerificationStore) -> tasks.Loop:
    @tasks.loop(seconds=SWEEP_INTERVAL_SECONDS)
    async def expiry_sweeper() -> None:
        sweep_expired_attempts(store)

    return expiry_sweeper

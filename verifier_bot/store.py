"""In-memory tracking of pending email verification attempts."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

REQUEST_TOKEN_BYTES: Final[int] = 32


def new_request_token() -> str:
    """Return an unpredictable hex token used as the OAuth ``state``."""
    return secrets.token_hex(REQUEST_TOKEN_BYTES)


@dataclass(frozen=True, slots=True)
class VerificationAttempt:
    request_token: str
    requesting_user_id: int
    created_at: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.created_at


class VerificationStore:
    """Maps request tokens to the Discord user who asked to verify.

    Attempts disappear when a callback completes them, when the sweeper finds
    them older than the expiry window, or when the process restarts.
    """

    def __init__(self) -> None:
        self._attempts: dict[str, VerificationAttempt] = {}

    def __len__(self) -> int:
        return len(self._attempts)

    def __contains__(self, token: object) -> bool:
        return token in self._attempts

    def put(self, token: str, attempt: VerificationAttempt) -> None:
        self._attempts[token] = attempt

    def get(self, token: str) -> VerificationAttempt | None:
        return self._attempts.get(token)

    def delete(self, token: str) -> None:
        self._attempts.pop(token, None)

    def sweep(self, now: datetime, max_age: timedelta) -> None:
        expired = [
            token
            for token, attempt in self._attempts.items()
            if attempt.age(now) > max_age
        ]
        for token in expired:
            del self._attempts[token]

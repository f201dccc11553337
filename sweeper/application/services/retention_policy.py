"""Retention policy: the age threshold frozen at run start."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sweeper.shared.utils.datetime import ensure_utc, utc_now


@dataclass(frozen=True)
class RetentionPolicy:
    """Records older than now - max_age are eligible.

    now is captured once, so a long-running sweep uses one eligibility
    boundary for every batch.
    """

    max_age: timedelta
    now: datetime

    def __post_init__(self) -> None:
        if self.max_age < timedelta(0):
            raise ValueError(f"max_age must not be negative, got {self.max_age}")
        object.__setattr__(self, "now", ensure_utc(self.now))

    @classmethod
    def starting_now(cls, max_age: timedelta) -> RetentionPolicy:
        """Build a policy whose boundary is frozen at the current UTC time."""
        return cls(max_age=max_age, now=utc_now())

    @property
    def cutoff(self) -> datetime:
        """Records with a retention key strictly before this are eligible."""
        return self.now - self.max_age

    @property
    def max_age_ms(self) -> int:
        """Age threshold in milliseconds (queue grace period)."""
        return int(self.max_age.total_seconds() * 1000)

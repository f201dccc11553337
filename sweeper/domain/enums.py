"""Domain enumerations for the retention sweeper."""

from enum import Enum


class JobStatus(str, Enum):
    """BullMQ job states reported by the queue sweep (closed set)."""

    COMPLETED = "completed"
    FAILED = "failed"
    DELAYED = "delayed"
    ACTIVE = "active"
    WAITING = "waiting"

    @classmethod
    def values(cls) -> list[str]:
        """Return all status values in reporting order."""
        return [status.value for status in cls]


class SweepState(str, Enum):
    """SweepLoop states. EXHAUSTED and FAILED are terminal."""

    IDLE = "idle"
    FETCHING = "fetching"
    DELETING = "deleting"
    SLEEPING = "sleeping"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class StopReason(str, Enum):
    """Why a sweep reached EXHAUSTED."""

    EMPTY_BATCH = "empty_batch"
    ITERATION_CAP = "iteration_cap"

"""
Remote task state and timestamp mapping.

Pure functions. No I/O, no logging.
"""

from datetime import datetime, timezone
from typing import Optional

from prover.types import TaskStatus

from .schemas import SnarkifyTaskState

_STATE_TO_STATUS = {
    SnarkifyTaskState.QUEUED: TaskStatus.Queued,
    SnarkifyTaskState.PROVING: TaskStatus.Proving,
    SnarkifyTaskState.SUCCESS: TaskStatus.Success,
    SnarkifyTaskState.FAILED: TaskStatus.Failed,
}


def map_task_state(state: SnarkifyTaskState) -> TaskStatus:
    """Translate a remote task state into the normalized TaskStatus."""
    try:
        return _STATE_TO_STATUS[state]
    except KeyError:
        raise ValueError(f"unmapped Snarkify task state: {state!r}") from None


def to_epoch_seconds(value: Optional[datetime]) -> Optional[float]:
    """Seconds since the Unix epoch. Naive datetimes are read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def compute_time(started_at: Optional[float], finished_at: Optional[float]) -> Optional[float]:
    """finished_at - started_at, or None unless both are known."""
    if started_at is None or finished_at is None:
        return None
    return finished_at - started_at

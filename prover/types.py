"""
Proving service contract types.

PURE DATA MODELS - NO TRANSPORT LOGIC
Shared by every ProvingService backend and by the host that drives it.
"""

from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CircuitType(IntEnum):
    """Which proof-generation program a task or VK belongs to."""

    Undefined = 0
    Chunk = 1
    Batch = 2
    Bundle = 3

    def to_u8(self) -> int:
        return int(self.value)

    @classmethod
    def from_u8(cls, value: int) -> "CircuitType":
        try:
            return cls(value)
        except ValueError:
            return cls.Undefined


class TaskStatus(str, Enum):
    """Normalized task lifecycle: Queued → Proving → {Success | Failed}."""

    Queued = "queued"
    Proving = "proving"
    Success = "success"
    Failed = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.Success, TaskStatus.Failed)


# ============================================================================
# REQUESTS
# ============================================================================

class GetVkRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    circuit_type: CircuitType
    circuit_version: str


class ProveRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    circuit_type: CircuitType
    circuit_version: str
    hard_fork_name: str
    input: str = Field(..., description="Opaque task payload, echoed back in responses")


class QueryTaskRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    task_id: str


# ============================================================================
# RESPONSES
# ============================================================================

class GetVkResponse(BaseModel):
    vk: str = ""
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return bool(self.error)


class TaskResponse(BaseModel):
    """
    Task-shaped view of remote proving work.

    `created_at` is 0.0 when the remote did not report a creation time.
    That value is a sentinel, not a real timestamp.

    `compute_time_sec` is set only when both `started_at` and
    `finished_at` are set, and is exactly their difference.

    When `error` is set the remaining fields are defaults or partial
    data and must not be read as a task result.
    """

    task_id: str = ""
    circuit_type: CircuitType = CircuitType.Undefined
    circuit_version: str = ""
    hard_fork_name: str = ""
    status: TaskStatus = TaskStatus.Queued
    created_at: float = 0.0
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    compute_time_sec: Optional[float] = None
    input: Optional[str] = None
    proof: Optional[str] = None
    vk: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return bool(self.error)


class ProveResponse(TaskResponse):
    pass


class QueryTaskResponse(TaskResponse):
    pass
